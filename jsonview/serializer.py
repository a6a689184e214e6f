#!/usr/bin/env python3
"""Filtered traversal of object graphs into an output sink.

This module walks an arbitrary value depth-first and emits it through an
:class:`~jsonview.output.base.OutputSink`:
- Primitives (str, int, float, bool) become scalars; subclasses such as
  IntEnum are written as their base value
- Sequences and sets become arrays
- Mappings become objects keyed by ``str(key)``
- Anything else is a structured object whose properties are filtered by
  per-type include/exclude matches and default visibility metadata

Path and match context accumulate only through structured-object
properties. Every array element and mapping value starts a fresh frame with
an empty path and no active match, so ``items.x`` never matches inside a
list stored in ``items``.

Example:
    >>> view = JsonView(order, {Order: Match(excludes=["customer.email"])})
    >>> JsonViewSerializer().to_json(view)
    '{"id":7,"customer":{"name":"Ada"}}'
"""

from collections.abc import Mapping, Sequence, Set
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Union

from jsonview.core.errors import PropertyAccessError
from jsonview.core.introspection import iter_properties
from jsonview.infrastructure.config_manager import ConfigManager
from jsonview.infrastructure.logger import Logger, get_logger
from jsonview.infrastructure.visibility_cache import VisibilityCache, get_visibility_cache
from jsonview.output.base import OutputSink
from jsonview.output.json_sink import JsonSink
from jsonview.output.tree import TreeSink, YamlSink
from jsonview.rules.matches import Match, MatchContext, MatchResolver, matches_from_config

ErrorCallback = Callable[[PropertyAccessError], None]
MatchConfigurations = Mapping[type, Union[Match, Mapping[str, Any]]]

_PRIMITIVES = (str, int, float, bool)


def _plain_scalar(value: Any) -> Any:
    """Strip primitive subclasses (IntEnum, StrEnum, ...) down to the base type."""
    if value is None or type(value) in _PRIMITIVES:
        return value
    if isinstance(value, int):
        return int.__int__(value)
    if isinstance(value, float):
        return float.__float__(value)
    return str.__str__(value)


class JsonWriter:
    """Writes one root value through a sink.

    A writer serves a single root call; it is not shared between threads.
    """

    def __init__(
        self,
        sink: OutputSink,
        resolver: MatchResolver,
        logger: Logger,
        on_error: Optional[ErrorCallback] = None,
    ):
        self.sink = sink
        self.resolver = resolver
        self.logger = logger
        self.on_error = on_error
        self.errors: List[PropertyAccessError] = []

    def write(self, field_name: Optional[str], value: Any, context: MatchContext) -> MatchContext:
        """Write value, pushing field_name onto the path while it is written.

        Args:
            field_name: Property name, or None for roots and container elements
            value: Value to write
            context: Context of the current frame

        Returns:
            The frame context after the write, with the path of the caller
        """
        inner = context.push(field_name) if field_name is not None else context

        if not (
            self._write_primitive(value)
            or self._write_collection(value)
            or self._write_mapping(value)
        ):
            inner = self._write_object(value, inner)

        return inner.with_path(context.path) if field_name is not None else inner

    def _write_primitive(self, value: Any) -> bool:
        if value is None or isinstance(value, _PRIMITIVES):
            self.sink.write_scalar(_plain_scalar(value))
            return True
        return False

    def _write_collection(self, value: Any) -> bool:
        if isinstance(value, Mapping) or not isinstance(value, (Sequence, Set)):
            return False

        self.sink.begin_array()
        for item in value:
            self.write(None, item, MatchContext.empty())
        self.sink.end_array()
        return True

    def _write_mapping(self, value: Any) -> bool:
        if not isinstance(value, Mapping):
            return False

        self.sink.begin_object()
        for key, item in value.items():
            self.sink.write_field_name(str(key))
            self.write(None, item, MatchContext.empty())
        self.sink.end_object()
        return True

    def _write_object(self, value: Any, context: MatchContext) -> MatchContext:
        self.sink.begin_object()

        for prop in iter_properties(value):
            try:
                item = prop.read(value)
            except PropertyAccessError as e:
                self._report(e)
                continue

            if item is None:
                continue

            allowed, context = self.resolver.field_allowed(prop, prop.declaring_type, context)
            if allowed:
                self.sink.write_field_name(prop.name)
                context = self.write(prop.name, item, context)

        self.sink.end_object()
        return context

    def _report(self, error: PropertyAccessError) -> None:
        self.errors.append(error)
        self.logger.warning(
            "Skipping unreadable property",
            property=error.name,
            declaring_type=error.declaring_type.__qualname__,
            cause=repr(error.cause),
        )
        if self.on_error is not None:
            self.on_error(error)


def serialize(
    root: Any,
    matches: Optional[MatchConfigurations],
    sink: OutputSink,
    cache: Optional[VisibilityCache] = None,
    on_error: Optional[ErrorCallback] = None,
    logger: Optional[Logger] = None,
) -> List[PropertyAccessError]:
    """Write root through sink, filtering properties by matches.

    Args:
        root: Value to serialize
        matches: Match configuration per declaring type
        sink: Output sink receiving the emission calls
        cache: Visibility cache (process-wide cache when None)
        on_error: Called for each property that could not be read
        logger: Diagnostic logger (global logger when None)

    Returns:
        Property read failures recovered during the traversal

    Raises:
        Exception: Whatever the sink raises; the traversal is aborted
    """
    logger = logger if logger is not None else get_logger()
    resolver = MatchResolver(matches, cache if cache is not None else get_visibility_cache())
    writer = JsonWriter(sink, resolver, logger, on_error)

    root_type = type(root).__qualname__
    with logger.add_context(root_type=root_type):
        logger.debug("Serializing value", matches=len(resolver))
        writer.write(None, root, MatchContext.empty())
    return writer.errors


@dataclass
class JsonView:
    """A value paired with the match configurations to render it with."""

    value: Any
    matches: Dict[type, Union[Match, Mapping[str, Any]]] = field(default_factory=dict)

    def get_match(self, cls: type) -> Optional[Match]:
        match = self.matches.get(cls)
        return Match.coerce(match) if match is not None else None


class JsonViewSerializer:
    """Serializes values and views to JSON, YAML or plain Python values.

    Default matches apply to every call; a view's own matches take precedence
    for the types they name.
    """

    def __init__(
        self,
        default_matches: Optional[MatchConfigurations] = None,
        cache: Optional[VisibilityCache] = None,
        on_error: Optional[ErrorCallback] = None,
        logger: Optional[Logger] = None,
    ):
        """Initialize serializer.

        Args:
            default_matches: Matches merged under each view's matches
            cache: Visibility cache (process-wide cache when None)
            on_error: Called for each property that could not be read
            logger: Diagnostic logger (global logger when None)
        """
        self.default_matches = dict(default_matches or {})
        self.cache = cache
        self.on_error = on_error
        self.logger = logger

    @classmethod
    def from_config(cls, config: Optional[ConfigManager] = None, **kwargs) -> "JsonViewSerializer":
        """Create a serializer whose default matches come from ``jsonview.matches``."""
        return cls(default_matches=matches_from_config(config), **kwargs)

    def _split(self, view: Union[JsonView, Any]):
        if isinstance(view, JsonView):
            matches = {**self.default_matches, **view.matches}
            return view.value, matches
        return view, self.default_matches

    def serialize(self, view: Union[JsonView, Any], sink: OutputSink) -> List[PropertyAccessError]:
        """Write a view (or a bare value) through sink.

        Returns:
            Property read failures recovered during the traversal
        """
        value, matches = self._split(view)
        return serialize(
            value,
            matches,
            sink,
            cache=self.cache,
            on_error=self.on_error,
            logger=self.logger,
        )

    def to_json(self, view: Union[JsonView, Any], ensure_ascii: bool = False) -> str:
        sink = JsonSink(ensure_ascii=ensure_ascii)
        self.serialize(view, sink)
        return sink.getvalue()

    def to_python(self, view: Union[JsonView, Any]) -> Any:
        sink = TreeSink()
        self.serialize(view, sink)
        return sink.result

    def to_yaml(self, view: Union[JsonView, Any]) -> str:
        sink = YamlSink()
        self.serialize(view, sink)
        return sink.getvalue()
