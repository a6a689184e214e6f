#!/usr/bin/env python3
"""Streaming JSON text sink.

Writes compact JSON (``{"a":[1,2]}``) to a text stream as emission calls
arrive. Scalars and field names are encoded with the json module.

Example:
    >>> sink = JsonSink()
    >>> sink.begin_array(); sink.write_scalar("x"); sink.end_array()
    >>> sink.getvalue()
    '["x"]'
"""

import io
import json
from typing import List, Optional, TextIO

from jsonview.core.errors import SinkError
from jsonview.output.base import SCALAR_TYPES, OutputSink, Scalar

_ARRAY = "array"
_OBJECT = "object"


class _Level:
    __slots__ = ("kind", "count", "awaiting_value")

    def __init__(self, kind: str):
        self.kind = kind
        self.count = 0
        self.awaiting_value = False


class JsonSink(OutputSink):
    """Sink writing JSON text to a stream."""

    def __init__(self, stream: Optional[TextIO] = None, ensure_ascii: bool = False):
        """Initialize JSON sink.

        Args:
            stream: Text stream to write to (in-memory buffer when None)
            ensure_ascii: Escape non-ASCII characters
        """
        self._owns_stream = stream is None
        self._stream: TextIO = stream if stream is not None else io.StringIO()
        self._ensure_ascii = ensure_ascii
        self._levels: List[_Level] = []
        self._root_written = False

    def getvalue(self) -> str:
        """Get the text written so far to the sink's own buffer."""
        if not self._owns_stream:
            raise SinkError("getvalue() is only available without an external stream")
        return self._stream.getvalue()

    def _before_value(self) -> None:
        if not self._levels:
            if self._root_written:
                raise SinkError("Document already has a root value")
            self._root_written = True
            return

        level = self._levels[-1]
        if level.kind == _ARRAY:
            if level.count:
                self._stream.write(",")
            level.count += 1
        elif not level.awaiting_value:
            raise SinkError("Object value written without a field name")
        else:
            level.awaiting_value = False

    def _close(self, kind: str, token: str) -> None:
        if not self._levels or self._levels[-1].kind != kind:
            raise SinkError(f"No open {kind} to close")
        if self._levels[-1].awaiting_value:
            raise SinkError("Field name has no value")
        self._levels.pop()
        self._stream.write(token)

    def begin_array(self) -> None:
        self._before_value()
        self._stream.write("[")
        self._levels.append(_Level(_ARRAY))

    def end_array(self) -> None:
        self._close(_ARRAY, "]")

    def begin_object(self) -> None:
        self._before_value()
        self._stream.write("{")
        self._levels.append(_Level(_OBJECT))

    def end_object(self) -> None:
        self._close(_OBJECT, "}")

    def write_field_name(self, name: str) -> None:
        if not self._levels or self._levels[-1].kind != _OBJECT:
            raise SinkError(f"Field name {name!r} written outside an object")
        level = self._levels[-1]
        if level.awaiting_value:
            raise SinkError("Field name has no value")
        if level.count:
            self._stream.write(",")
        level.count += 1
        level.awaiting_value = True
        self._stream.write(json.dumps(name, ensure_ascii=self._ensure_ascii))
        self._stream.write(":")

    def write_scalar(self, value: Scalar) -> None:
        if not isinstance(value, SCALAR_TYPES):
            raise SinkError(f"Not a scalar: {type(value).__name__}")
        try:
            text = json.dumps(value, ensure_ascii=self._ensure_ascii, allow_nan=False)
        except ValueError as e:
            raise SinkError(f"Not representable in JSON: {value!r}") from e
        self._before_value()
        self._stream.write(text)
