"""Configuration utilities.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, fields
from enum import Enum, auto
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

import yaml

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="RouterConfig")

LOG_FORMATS = {
    "text": "%(asctime)s %(levelname)s %(name)s: %(message)s",
    "json": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
}


class ConfigSource(Enum):
    """Configuration sources."""

    FILE = auto()
    ENV = auto()
    DICT = auto()
    DEFAULT = auto()


@dataclass
class RouterConfig:
    """Router configuration."""

    # Routing (base_path None: derive from the mount point)
    base_path: Optional[str] = None
    namespace: str = ""

    # Method resolution
    method_override: bool = True
    override_header: str = "X-HTTP-Method-Override"
    override_methods: List[str] = field(default_factory=lambda: ["PUT", "DELETE", "PATCH"])
    head_as_get: bool = True

    # Development server
    host: str = "127.0.0.1"
    port: int = 8080

    # Logging
    log_level: str = "INFO"
    log_format: str = "text"

    source: ConfigSource = field(default=ConfigSource.DEFAULT, compare=False)

    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.name != "source"]

    @classmethod
    def from_dict(cls: Type[T], data: Dict[str, Any], source: ConfigSource = ConfigSource.DICT) -> T:
        """Create config from dictionary."""
        # Filter to only valid fields
        valid_fields = set(cls.field_names())
        filtered = {k: v for k, v in data.items() if k in valid_fields}
        if isinstance(filtered.get("override_methods"), str):
            filtered["override_methods"] = filtered["override_methods"].split("|")
        return cls(source=source, **filtered)

    @classmethod
    def from_json(cls: Type[T], path: str) -> T:
        """Load config from JSON file."""
        with open(path, "r") as f:
            data = json.load(f)
        return cls.from_dict(data or {}, ConfigSource.FILE)

    @classmethod
    def from_yaml(cls: Type[T], path: str) -> T:
        """Load config from YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f)
        return cls.from_dict(data or {}, ConfigSource.FILE)

    @classmethod
    def env_values(cls, prefix: str = "ROUTER_") -> Dict[str, Any]:
        """Config values set in the environment."""
        data = {}
        valid_fields = set(cls.field_names())

        for key, value in os.environ.items():
            if not key.startswith(prefix):
                continue
            config_key = key[len(prefix):].lower()
            if config_key not in valid_fields:
                continue

            # Type conversion
            if value.lower() in ("true", "false"):
                data[config_key] = value.lower() == "true"
            elif value.isdigit():
                data[config_key] = int(value)
            else:
                data[config_key] = value

        return data

    @classmethod
    def from_env(cls: Type[T], prefix: str = "ROUTER_") -> T:
        """Load config from environment variables."""
        return cls.from_dict(cls.env_values(prefix), ConfigSource.ENV)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {name: getattr(self, name) for name in self.field_names()}

    def merge(self, overrides: Dict[str, Any]) -> "RouterConfig":
        """Copy with overrides applied."""
        data = self.to_dict()
        data.update(overrides)
        return type(self).from_dict(data, self.source)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "ROUTER_",
) -> RouterConfig:
    """Load configuration from multiple sources.

    Priority (highest to lowest):
    1. Environment variables
    2. Config file (if provided)
    3. Defaults
    """
    config = RouterConfig()

    # Load from file if provided
    if path:
        path_obj = Path(path)
        if path_obj.exists():
            if path.endswith(".json"):
                config = RouterConfig.from_json(path)
            elif path.endswith((".yaml", ".yml")):
                config = RouterConfig.from_yaml(path)
            else:
                logger.warning(f"Unknown config format: {path}")
        else:
            logger.warning(f"Config file not found: {path}")

    # Override with environment variables
    env_values = RouterConfig.env_values(env_prefix)
    if env_values:
        config = config.merge(env_values)

    return config


def configure_logging(config: RouterConfig) -> None:
    """Apply the configured log level and format to the package logger."""
    package_logger = logging.getLogger("roadrouter_core")
    package_logger.setLevel(config.log_level.upper())

    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(LOG_FORMATS.get(config.log_format, LOG_FORMATS["text"]))
        )
        package_logger.addHandler(handler)


__all__ = [
    "ConfigSource",
    "RouterConfig",
    "configure_logging",
    "load_config",
]
