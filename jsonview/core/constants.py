"""
jsonview Core: Constants and Type Definitions

This module provides package-wide constants, error codes, and type aliases
shared by the traversal engine, the rules layer and the infrastructure layer.
"""
from enum import IntEnum
from typing import Tuple, TypeAlias

# Version information
JSONVIEW_VERSION = "1.0.0"


class ErrorCode(IntEnum):
    """Standardized error codes for jsonview operations."""

    SUCCESS = 0  # Operation completed successfully
    INVALID_INPUT = 1  # Bad pattern, invalid configuration
    NOT_FOUND = 2  # Config file or type name doesn't exist
    ACCESS_ERROR = 3  # Property value could not be read
    SINK_ERROR = 4  # Output sink rejected an emission
    INTERNAL_ERROR = 6  # Bug in jsonview


# Type aliases for clarity
PathSegments: TypeAlias = Tuple[str, ...]

# Path handling
PATH_SEPARATOR = "."
WILDCARD = "*"

# Visibility cache
DEFAULT_CACHE_CAPACITY = 1000

# Metadata markers
JSON_IGNORE_METADATA_KEY = "json_ignore"
IGNORE_PROPERTIES_ATTR = "__json_ignore_properties__"

# Configuration
ENV_PREFIX = "JSONVIEW_"
CONFIG_ROOT = "jsonview"
DEFAULT_LOG_LEVEL = "WARNING"
LOGGER_NAME = "jsonview"
