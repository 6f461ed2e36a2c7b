"""Configuration loading utilities."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .paths import runtime_config_dir
from .utils.codec import ENCODINGS

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")


class LoggingConfig(BaseModel):
    level: str = Field(default="WARNING", description="Logging verbosity level")

    def normalized_level(self) -> str:
        return self.level.upper()

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        if value.lower() not in LOG_LEVELS:
            raise ValueError(f"Unknown log level '{value}'")
        return value


class IOConfig(BaseModel):
    encoding: str = Field(default="hex", description="Text encoding for keys on the command line: hex|base64")

    @field_validator("encoding")
    @classmethod
    def _validate_encoding(cls, value: str) -> str:
        value = value.lower()
        if value not in ENCODINGS:
            raise ValueError(f"Unsupported encoding '{value}'")
        return value


class AppConfig(BaseModel):
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    io: IOConfig = Field(default_factory=IOConfig)


DEFAULT_CONFIG = AppConfig()


def config_search_paths(explicit: Optional[Path] = None) -> Iterable[Path]:
    if explicit:
        yield explicit
    yield Path.cwd() / ".keywrap" / "config.yaml"
    yield runtime_config_dir() / "config.yaml"


def load_config(path: Optional[Path] = None) -> AppConfig:
    if path is not None and not path.is_file():
        raise ValueError(f"Configuration file not found: {path}")
    for candidate in config_search_paths(path):
        if candidate.is_file():
            with candidate.open("r", encoding="utf-8") as handle:
                data = yaml.safe_load(handle) or {}
            try:
                return AppConfig.model_validate(data)
            except ValidationError as exc:
                raise ValueError(f"Invalid configuration in {candidate}: {exc}") from exc
    return DEFAULT_CONFIG.model_copy(deep=True)


def dump_default_config(target: Path) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(DEFAULT_CONFIG.model_dump(mode="json"), handle, sort_keys=False)


__all__ = [
    "AppConfig",
    "DEFAULT_CONFIG",
    "IOConfig",
    "LOG_LEVELS",
    "LoggingConfig",
    "config_search_paths",
    "dump_default_config",
    "load_config",
]
