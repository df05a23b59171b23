"""Settings package exports."""

from .loader import AppConfig, HttpSettings, LoggingSettings, load_config

__all__ = [
    "AppConfig",
    "HttpSettings",
    "LoggingSettings",
    "load_config",
]
