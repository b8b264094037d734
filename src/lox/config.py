"""Interpreter settings for the command-line host.

Settings come from a YAML mapping, for example::

    prompt: "lox> "
    show_ast: true
    log_level: INFO

The file is named with ``--config`` or the ``LOX_CONFIG`` environment
variable. ``LOX_LOG_LEVEL`` overrides the log level from either source.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV = "LOX_CONFIG"
LOG_LEVEL_ENV = "LOX_LOG_LEVEL"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """Raised for unreadable or invalid configuration."""


@dataclass(frozen=True)
class LoxConfig:
    prompt: str = "> "
    show_tokens: bool = False
    show_ast: bool = False
    json_diagnostics: bool = False
    show_hints: bool = False
    log_level: str = "WARNING"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoxConfig":
        known = {f.name: f for f in fields(cls)}
        unknown = sorted(set(data) - set(known))
        if unknown:
            raise ConfigError(f"unknown config key(s): {', '.join(unknown)}")
        defaults = cls()
        for name, value in data.items():
            expected = type(getattr(defaults, name))
            if not isinstance(value, expected):
                raise ConfigError(
                    f"config key '{name}' must be {expected.__name__}, got {type(value).__name__}"
                )
        config = cls(**data)
        config.validate()
        return config

    @classmethod
    def load(cls, path: Path | str) -> "LoxConfig":
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigError(f"config file not found: {config_path}")
        try:
            with config_path.open("r", encoding="utf-8") as fp:
                data = yaml.safe_load(fp) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError(f"{config_path} must contain a mapping")
        return cls.from_dict(data)

    def validate(self) -> None:
        if self.log_level.upper() not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got '{self.log_level}'"
            )

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())


def load_config(path: Optional[Path | str] = None) -> LoxConfig:
    """Resolve settings from ``path``, then ``LOX_CONFIG``, then defaults."""
    source = path or os.environ.get(CONFIG_ENV)
    config = LoxConfig.load(source) if source else LoxConfig()

    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        config = replace(config, log_level=level)
        config.validate()
    return config
