"""Helpers for loading configuration."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

PROJECT_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_NAME = "config.toml"
CONFIG_ENV_VAR = "WXKEFU_CONFIG"


@dataclass(slots=True)
class HttpSettings:
    timeout: float | None = 10.0


@dataclass(slots=True)
class LoggingSettings:
    level: str = "INFO"
    structured: bool = True

    @property
    def level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.level]


@dataclass(slots=True)
class AppConfig:
    http: HttpSettings = field(default_factory=HttpSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)


def _config_path(explicit: str | os.PathLike[str] | None = None) -> tuple[Path, bool]:
    """Return the config path and whether the caller asked for it explicitly."""
    if explicit:
        candidate, required = Path(explicit), True
    else:
        env_value = os.environ.get(CONFIG_ENV_VAR)
        if env_value:
            candidate, required = Path(env_value), True
        else:
            candidate, required = PROJECT_ROOT / DEFAULT_CONFIG_NAME, False
    if not candidate.is_absolute():
        candidate = Path.cwd() / candidate
    return candidate, required


def _load_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as fp:
        return tomllib.load(fp)


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"配置项 [{name}] 必须是表，实际为 {type(section).__name__}")
    return section


def _build_http(section: dict[str, Any]) -> HttpSettings:
    raw = section.get("timeout", 10)
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"http.timeout 必须是数字，实际为 {raw!r}")
    timeout = float(raw)
    return HttpSettings(timeout=timeout if timeout > 0 else None)


def _build_logging(section: dict[str, Any]) -> LoggingSettings:
    level = str(section.get("level", "INFO")).upper()
    if level not in logging.getLevelNamesMapping():
        raise ValueError(f"未知的日志级别 '{level}'")
    structured = section.get("structured", True)
    if not isinstance(structured, bool):
        raise ValueError(f"logging.structured 必须是布尔值，实际为 {structured!r}")
    return LoggingSettings(level=level, structured=structured)


def load_config(config_path: str | os.PathLike[str] | None = None) -> AppConfig:
    path, required = _config_path(config_path)
    if not path.exists():
        if required:
            raise FileNotFoundError(f"Config file not found: {path}")
        return AppConfig()

    try:
        data = _load_toml(path)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"配置文件 {path} 不是合法的 TOML: {exc}") from exc
    return AppConfig(
        http=_build_http(_section(data, "http")),
        logging=_build_logging(_section(data, "logging")),
    )
