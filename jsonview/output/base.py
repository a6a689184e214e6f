#!/usr/bin/env python3
"""Output sink interface for the traversal engine.

The engine only sequences calls to these emission primitives; buffering,
formatting and encoding belong to the sink:
- begin_array()/end_array()
- begin_object()/end_object()
- write_field_name(name)
- write_scalar(value)

Example:
    >>> class CountingSink(OutputSink):
    ...     def write_scalar(self, value):
    ...         self.count += 1
    ...     ...
"""

from abc import ABC, abstractmethod
from typing import Optional, Union

Scalar = Optional[Union[str, int, float, bool]]

SCALAR_TYPES = (str, int, float, bool, type(None))


class OutputSink(ABC):
    """Abstract consumer of emission primitives.

    Any exception raised by a sink aborts the serialization that triggered
    it; output already emitted is left as is.
    """

    @abstractmethod
    def begin_array(self) -> None:
        """Start an array value."""

    @abstractmethod
    def end_array(self) -> None:
        """Close the innermost array."""

    @abstractmethod
    def begin_object(self) -> None:
        """Start an object value."""

    @abstractmethod
    def end_object(self) -> None:
        """Close the innermost object."""

    @abstractmethod
    def write_field_name(self, name: str) -> None:
        """Name the next value of the innermost object."""

    @abstractmethod
    def write_scalar(self, value: Scalar) -> None:
        """Write a string, number, boolean or null value."""
