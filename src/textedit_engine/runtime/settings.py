"""Environment-driven engine settings.

Every knob reads ``TEXTEDIT_ENGINE_<NAME>`` once; callers that need different
behaviour pass an explicit ``EngineSettings`` instead of mutating globals.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Optional

ENV_PREFIX = "TEXTEDIT_ENGINE_"

DEFAULT_ENCODING = "utf-8"
DEFAULT_FILE_MODE = 0o644


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _parse_mode(raw: Optional[str]) -> int:
    if raw is None or not raw.strip():
        return DEFAULT_FILE_MODE
    try:
        mode = int(raw.strip(), 8)
    except ValueError as exc:
        raise ValueError(f"Invalid file mode '{raw}', expected octal digits") from exc
    if mode < 0 or mode > 0o7777:
        raise ValueError(f"File mode '{raw}' is out of range")
    return mode


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Immutable knobs shared by the orchestrator and the change dispatcher."""

    encoding: str = DEFAULT_ENCODING
    file_mode: int = DEFAULT_FILE_MODE
    create_overwrites: bool = False

    @classmethod
    def from_env(cls) -> "EngineSettings":
        return cls(
            encoding=env("ENCODING") or DEFAULT_ENCODING,
            file_mode=_parse_mode(env("FILE_MODE")),
            create_overwrites=env_flag("CREATE_OVERWRITES", False),
        )

    def with_overrides(self, **changes: object) -> "EngineSettings":
        return replace(self, **changes)


@lru_cache(maxsize=1)
def get_settings() -> EngineSettings:
    """Return the process-wide settings loaded from the environment."""

    return EngineSettings.from_env()


def resolve_settings(settings: Optional[EngineSettings]) -> EngineSettings:
    return settings if settings is not None else get_settings()


__all__ = [
    "ENV_PREFIX",
    "EngineSettings",
    "env",
    "env_flag",
    "get_settings",
    "resolve_settings",
]
