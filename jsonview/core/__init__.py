"""jsonview Core - constants, errors and object introspection.

Import specific names from submodules:
    from jsonview.core.constants import ErrorCode
    from jsonview.core.errors import JsonViewError
    from jsonview.core.introspection import iter_properties
"""

from .constants import JSONVIEW_VERSION, ErrorCode
from .errors import ConfigError, JsonViewError, PropertyAccessError, SinkError
from .introspection import (
    AnnotationMetadata,
    JsonIgnore,
    MetadataProvider,
    PropertyDescriptor,
    declared_properties,
    ignored,
    iter_properties,
    json_ignore_properties,
)

__all__ = [
    "JSONVIEW_VERSION",
    "ErrorCode",
    # Errors
    "JsonViewError",
    "PropertyAccessError",
    "SinkError",
    "ConfigError",
    # Introspection
    "PropertyDescriptor",
    "declared_properties",
    "iter_properties",
    "MetadataProvider",
    "AnnotationMetadata",
    "JsonIgnore",
    "ignored",
    "json_ignore_properties",
]
