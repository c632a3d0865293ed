"""Edit-engine telemetry on top of telelog.

Loggers are configured once from ``TEXTEDIT_ENGINE_*`` variables. ``span``
profiles one file or workspace operation and reports the fields that matter
for edit application: the target path, how many edits were requested, and
what the snapshot looked like (line ending, line count).
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .settings import env, env_flag

tl = cast(Any, telelog)

LOGGER_NAME = env("LOGGER") or "textedit_engine"

_LOGGER_CACHE: MutableMapping[str, Any] = {}
_ACTIVE_CONFIG: Optional[Any] = None


def _build_config() -> Any:
    config = tl.Config()
    config.with_min_level((env("LOG_LEVEL") or "INFO").upper())
    console = not env_flag("DISABLE_CONSOLE", False)
    config.with_console_output(console)
    if console:
        config.with_colored_output(not env_flag("NO_COLOR", False))
    if env_flag("LOG_JSON", False):
        config.with_json_format(True)
    log_file = env("LOG_FILE")
    if log_file:
        config.with_file_output(log_file)
    if env_flag("LOG_BUFFERED", False):
        config.with_buffering(True)
        config.with_buffer_size(int(env("LOG_BUFFER_SIZE") or "2048"))
    config.with_profiling(True)
    return config


def configure(config: Optional[Any] = None) -> None:
    """Adopt ``config`` (a ``telelog.Config``) or rebuild it from the environment."""

    global _ACTIVE_CONFIG
    _ACTIVE_CONFIG = config if config is not None else _build_config()
    _LOGGER_CACHE.clear()


def get_logger(name: Optional[str] = None) -> Any:
    global _ACTIVE_CONFIG
    logger_name = name or LOGGER_NAME
    if logger_name not in _LOGGER_CACHE:
        if _ACTIVE_CONFIG is None:
            _ACTIVE_CONFIG = _build_config()
        _LOGGER_CACHE[logger_name] = tl.Logger.with_config(logger_name, _ACTIVE_CONFIG)
    return _LOGGER_CACHE[logger_name]


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple)):
        return repr(value)
    return str(value)


def _pairs(data: Dict[str, Any]) -> List[Tuple[str, str]]:
    return [(str(key), _text(value)) for key, value in data.items()]


def _emit(logger: Any, level: str, message: str, data: Dict[str, Any]) -> None:
    structured = getattr(logger, f"{level}_with", None)
    if structured is not None:
        structured(message, _pairs(data))
        return
    plain = getattr(logger, level, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {dict(_pairs(data))}")


def record_event(
    name: str, *, level: str = "info", data: Optional[Dict[str, Any]] = None
) -> None:
    _emit(get_logger(), level.lower(), f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Mutable record of one edit operation, emitted when the span closes."""

    logger: Any
    operation: str
    path: Optional[str] = None
    edit_count: Optional[int] = None
    line_ending: Optional[str] = None
    line_count: Optional[int] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    def describe_snapshot(self, *, line_ending: str, line_count: int) -> None:
        self.line_ending = line_ending
        self.line_count = line_count

    def payload(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"operation": self.operation}
        for key in ("path", "edit_count", "line_ending", "line_count"):
            value = getattr(self, key)
            if value is not None:
                data[key] = value
        data.update(self.extra)
        return data

    def done(self) -> None:
        _emit(self.logger, "debug", "span::done", self.payload())

    def fail(self, reason: str) -> None:
        _emit(self.logger, "error", "span::fail", {**self.payload(), "reason": reason})


@contextmanager
def span(
    operation: str,
    *,
    path: Optional[str] = None,
    edit_count: Optional[int] = None,
    extra: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile ``operation``; the path rides along as logger context."""

    log = get_logger()
    handle = SpanHandle(
        logger=log,
        operation=operation,
        path=path,
        edit_count=edit_count,
        extra=dict(extra or {}),
    )
    if path is not None:
        log.add_context("path", path)
    try:
        with log.profile(operation):
            yield handle
    except Exception as exc:
        handle.fail(str(exc))
        raise
    else:
        handle.done()
    finally:
        if path is not None:
            log.remove_context("path")


__all__ = [
    "SpanHandle",
    "configure",
    "get_logger",
    "record_event",
    "span",
]
