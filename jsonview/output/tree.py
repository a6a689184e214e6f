#!/usr/bin/env python3
"""Sinks assembling plain Python values.

- TreeSink: builds dicts, lists and scalars
- YamlSink: TreeSink rendered as YAML text with PyYAML

Example:
    >>> sink = TreeSink()
    >>> sink.begin_object(); sink.write_field_name("a"); sink.write_scalar(1); sink.end_object()
    >>> sink.result
    {'a': 1}
"""

from typing import Any, List, Optional

import yaml

from jsonview.core.errors import SinkError
from jsonview.output.base import SCALAR_TYPES, OutputSink, Scalar


class _Frame:
    __slots__ = ("container", "pending_key")

    def __init__(self, container: Any):
        self.container = container
        self.pending_key: Optional[str] = None


class TreeSink(OutputSink):
    """Sink building the emitted document as Python values.

    Raises SinkError on calls that would produce a malformed document.
    """

    def __init__(self):
        self._stack: List[_Frame] = []
        self._root: Any = None
        self._has_root = False

    @property
    def result(self) -> Any:
        """The root value once the document is complete.

        Raises:
            SinkError: If nothing was written or a container is still open
        """
        if not self.is_complete:
            raise SinkError("Document is incomplete")
        return self._root

    @property
    def is_complete(self) -> bool:
        return self._has_root and not self._stack

    def _add_value(self, value: Any) -> None:
        if not self._stack:
            if self._has_root:
                raise SinkError("Document already has a root value")
            self._root = value
            self._has_root = True
            return

        frame = self._stack[-1]
        if isinstance(frame.container, list):
            frame.container.append(value)
        elif frame.pending_key is None:
            raise SinkError("Object value written without a field name")
        else:
            frame.container[frame.pending_key] = value
            frame.pending_key = None

    def _close(self, kind: type) -> None:
        if not self._stack or not isinstance(self._stack[-1].container, kind):
            raise SinkError(f"No open {kind.__name__} to close")
        if self._stack[-1].pending_key is not None:
            raise SinkError(f"Field {self._stack[-1].pending_key!r} has no value")
        self._stack.pop()

    def begin_array(self) -> None:
        container: List[Any] = []
        self._add_value(container)
        self._stack.append(_Frame(container))

    def end_array(self) -> None:
        self._close(list)

    def begin_object(self) -> None:
        container: dict = {}
        self._add_value(container)
        self._stack.append(_Frame(container))

    def end_object(self) -> None:
        self._close(dict)

    def write_field_name(self, name: str) -> None:
        if not self._stack or not isinstance(self._stack[-1].container, dict):
            raise SinkError(f"Field name {name!r} written outside an object")
        frame = self._stack[-1]
        if frame.pending_key is not None:
            raise SinkError(f"Field {frame.pending_key!r} has no value")
        frame.pending_key = name

    def write_scalar(self, value: Scalar) -> None:
        if not isinstance(value, SCALAR_TYPES):
            raise SinkError(f"Not a scalar: {type(value).__name__}")
        self._add_value(value)


class YamlSink(TreeSink):
    """Sink rendering the emitted document as YAML."""

    def __init__(self, default_flow_style: bool = False):
        super().__init__()
        self._default_flow_style = default_flow_style

    def getvalue(self) -> str:
        return yaml.safe_dump(
            self.result,
            sort_keys=False,
            default_flow_style=self._default_flow_style,
            allow_unicode=True,
        )
