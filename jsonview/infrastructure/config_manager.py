#!/usr/bin/env python3
"""Layered configuration for jsonview.

Settings live under the ``jsonview`` root and are looked up by dotted key.
Each layer overrides the ones below it:
- Compiled defaults
- A YAML file (``load_file``)
- ``JSONVIEW_*`` environment variables
- Runtime ``set``/``load_dict`` calls

Example:
    >>> config = ConfigManager("jsonview.yaml")
    >>> config.get_cache_capacity()
    1000
"""

import copy
import os
import threading
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from jsonview.core.constants import (
    CONFIG_ROOT,
    DEFAULT_CACHE_CAPACITY,
    DEFAULT_LOG_LEVEL,
    ENV_PREFIX,
    ErrorCode,
)
from jsonview.core.errors import ConfigError


class ConfigSource(Enum):
    """Configuration layers, lowest precedence first."""

    COMPILED_DEFAULTS = 1
    USER_CONFIG = 2
    ENVIRONMENT = 3
    RUNTIME = 4


_MISSING = object()


class ConfigManager:
    """Thread-safe stack of configuration layers.

    A lookup returns the value from the highest layer defining the key;
    layers are not merged.
    """

    DEFAULT_CONFIG = {
        CONFIG_ROOT: {
            "cache": {"capacity": DEFAULT_CACHE_CAPACITY},
            "logging": {"level": DEFAULT_LOG_LEVEL},
            "matches": {},
        }
    }

    def __init__(self, config_file: Optional[str] = None, load_environment: bool = True):
        """Initialize configuration manager.

        Args:
            config_file: Optional YAML file for the user layer
            load_environment: Whether to read JSONVIEW_* environment variables
        """
        self._lock = threading.RLock()
        self._layers: Dict[ConfigSource, Dict[str, Any]] = {
            ConfigSource.COMPILED_DEFAULTS: copy.deepcopy(self.DEFAULT_CONFIG),
        }

        if config_file:
            self.load_file(config_file)
        if load_environment:
            self._load_environment()

    def load_file(self, file_path: str) -> None:
        """Replace the user layer with the contents of a YAML file.

        Raises:
            ConfigError: If the file is missing, unreadable or not a mapping
        """
        path = Path(file_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {file_path}", ErrorCode.NOT_FOUND)

        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"YAML parse error in {file_path}: {e}") from e
        except OSError as e:
            raise ConfigError(
                f"Error loading config {file_path}: {e}", ErrorCode.INTERNAL_ERROR
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Invalid config format in {file_path}")

        with self._lock:
            self._layers[ConfigSource.USER_CONFIG] = data

    def load_dict(self, config_data: Dict[str, Any]) -> None:
        """Replace the runtime layer with a copy of config_data."""
        with self._lock:
            self._layers[ConfigSource.RUNTIME] = copy.deepcopy(config_data)

    def _load_environment(self) -> None:
        """Build the environment layer.

        ``JSONVIEW_CACHE_CAPACITY=5000`` becomes ``jsonview.cache.capacity``.
        """
        settings: Dict[str, Any] = {}

        for name, raw in os.environ.items():
            if not name.startswith(ENV_PREFIX):
                continue
            parts = name[len(ENV_PREFIX):].lower().split("_")
            if not all(parts):
                continue

            section = settings
            for part in parts[:-1]:
                section = section.setdefault(part, {})
                if not isinstance(section, dict):
                    break
            else:
                section[parts[-1]] = self._parse_env_value(raw)

        if settings:
            with self._lock:
                self._layers[ConfigSource.ENVIRONMENT] = {CONFIG_ROOT: settings}

    @staticmethod
    def _parse_env_value(value: str) -> Any:
        """Convert an environment string to int, float, bool or str."""
        for convert in (int, float):
            try:
                return convert(value)
            except ValueError:
                pass

        lowered = value.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False
        return value

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dotted key (e.g. ``"jsonview.cache.capacity"``).

        Returns:
            Value from the highest layer defining key, or default
        """
        with self._lock:
            for source in reversed(ConfigSource):
                layer = self._layers.get(source)
                if layer is None:
                    continue
                value = self._lookup(layer, key)
                if value is not _MISSING:
                    return value
            return default

    @staticmethod
    def _lookup(layer: Dict[str, Any], key: str) -> Any:
        node: Any = layer
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return _MISSING
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> None:
        """Set a value by dotted key in the runtime layer."""
        *sections, leaf = key.split(".")
        with self._lock:
            node = self._layers.setdefault(ConfigSource.RUNTIME, {})
            for part in sections:
                node = node.setdefault(part, {})
            node[leaf] = value

    def get_cache_capacity(self) -> int:
        """Get the visibility cache capacity.

        Raises:
            ConfigError: If the configured capacity is not a positive integer
        """
        capacity = self.get(f"{CONFIG_ROOT}.cache.capacity", DEFAULT_CACHE_CAPACITY)
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigError(f"cache.capacity must be a positive integer, got {capacity!r}")
        return capacity


_global_config: Optional[ConfigManager] = None


def get_config_manager(config_file: Optional[str] = None) -> ConfigManager:
    """Get or create the process-wide configuration manager."""
    global _global_config
    if _global_config is None:
        _global_config = ConfigManager(config_file)
    return _global_config


def set_global_config(config: Optional[ConfigManager]) -> None:
    """Set (or reset with None) the process-wide configuration manager."""
    global _global_config
    _global_config = config
