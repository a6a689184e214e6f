"""jsonview Infrastructure Layer.

This layer provides services used by the traversal engine:
- ConfigManager: Layered configuration (defaults, YAML, environment, runtime)
- Logger: Structured logging, the diagnostic channel
- VisibilityCache: Bounded memo of default-hidden verdicts
"""

from .config_manager import ConfigManager as Config
from .config_manager import ConfigSource, get_config_manager, set_global_config
from .logger import Logger, LogLevel, get_logger, set_global_logger
from .visibility_cache import (
    CacheConfig,
    VisibilityCache,
    get_visibility_cache,
    set_global_visibility_cache,
)

__all__ = [
    # Logger exports
    "Logger",
    "LogLevel",
    "get_logger",
    "set_global_logger",
    # VisibilityCache exports
    "CacheConfig",
    "VisibilityCache",
    "get_visibility_cache",
    "set_global_visibility_cache",
    # ConfigManager exports
    "ConfigSource",
    "Config",
    "get_config_manager",
    "set_global_config",
]
