from __future__ import annotations

import pytest

from textedit_engine.runtime.settings import EngineSettings, resolve_settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("ENCODING", "FILE_MODE", "CREATE_OVERWRITES"):
        monkeypatch.delenv(f"TEXTEDIT_ENGINE_{name}", raising=False)

    settings = EngineSettings.from_env()

    assert settings == EngineSettings()
    assert settings.file_mode == 0o644
    assert settings.encoding == "utf-8"
    assert settings.create_overwrites is False


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXTEDIT_ENGINE_ENCODING", "latin-1")
    monkeypatch.setenv("TEXTEDIT_ENGINE_FILE_MODE", "600")
    monkeypatch.setenv("TEXTEDIT_ENGINE_CREATE_OVERWRITES", "yes")

    settings = EngineSettings.from_env()

    assert settings.encoding == "latin-1"
    assert settings.file_mode == 0o600
    assert settings.create_overwrites is True


def test_invalid_file_mode_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TEXTEDIT_ENGINE_FILE_MODE", "rw-r--r--")

    with pytest.raises(ValueError):
        EngineSettings.from_env()


def test_explicit_settings_win_over_process_defaults() -> None:
    explicit = EngineSettings().with_overrides(create_overwrites=True)

    assert resolve_settings(explicit) is explicit
    assert resolve_settings(None) == resolve_settings(None)
