"""Runtime services: settings and telemetry."""

from .settings import EngineSettings, get_settings

__all__ = ["EngineSettings", "get_settings"]
