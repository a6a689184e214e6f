"""jsonview - filtered serialization of object graphs.

Render arbitrary Python objects as JSON (or YAML, or plain values) while
per-type include/exclude path patterns override default property
visibility:

    >>> from jsonview import JsonView, JsonViewSerializer, Match
    >>> JsonViewSerializer().to_json(JsonView(user, {User: Match(excludes=["password"])}))
"""

from .core import (
    JSONVIEW_VERSION,
    ConfigError,
    JsonIgnore,
    JsonViewError,
    PropertyAccessError,
    SinkError,
    ignored,
    json_ignore_properties,
)
from .output import JsonSink, OutputSink, TreeSink, YamlSink
from .rules import Match, load_matches, path_matches
from .serializer import JsonView, JsonViewSerializer, JsonWriter, serialize

__version__ = JSONVIEW_VERSION

__all__ = [
    "__version__",
    # Entry points
    "serialize",
    "JsonView",
    "JsonViewSerializer",
    "JsonWriter",
    "Match",
    "load_matches",
    "path_matches",
    # Metadata markers
    "JsonIgnore",
    "ignored",
    "json_ignore_properties",
    # Sinks
    "OutputSink",
    "JsonSink",
    "TreeSink",
    "YamlSink",
    # Errors
    "JsonViewError",
    "PropertyAccessError",
    "SinkError",
    "ConfigError",
]
