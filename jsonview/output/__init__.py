"""jsonview output sinks.

- OutputSink: emission interface consumed by the traversal engine
- JsonSink: streaming JSON text
- TreeSink: plain Python values
- YamlSink: YAML text (PyYAML)
"""

from .base import OutputSink, Scalar
from .json_sink import JsonSink
from .tree import TreeSink, YamlSink

__all__ = [
    "OutputSink",
    "Scalar",
    "JsonSink",
    "TreeSink",
    "YamlSink",
]
