#!/usr/bin/env python3
"""Property discovery and default-visibility metadata.

This module turns an arbitrary Python object into the ordered sequence of
named properties the traversal engine walks:
- Declared properties per class level (own annotations and ``__slots__``)
- Most-derived level first, each property name visited once
- Undeclared instance attributes attributed to the runtime type
- Default-visibility markers (``JsonIgnore``, ``ignored()``,
  ``@json_ignore_properties``) behind a pluggable ``MetadataProvider``

Example:
    >>> @json_ignore_properties("token")
    ... @dataclass
    ... class Session:
    ...     user: str
    ...     token: str
    ...     password: Annotated[str, JsonIgnore()] = ""
    >>> [p.name for p in iter_properties(Session("u", "t"))]
    ['user', 'token', 'password']
"""

import dataclasses
import inspect
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Annotated, Callable, ClassVar, Dict, Iterator, List, Tuple, Type

from jsonview.core.constants import IGNORE_PROPERTIES_ATTR, JSON_IGNORE_METADATA_KEY
from jsonview.core.errors import PropertyAccessError


@dataclass(frozen=True)
class JsonIgnore:
    """Marker hiding a property by default.

    Attach through ``Annotated[T, JsonIgnore()]``. ``JsonIgnore(False)`` is
    accepted and hides nothing.
    """

    value: bool = True


def ignored(**field_kwargs: Any) -> Any:
    """Dataclass field hidden by default.

    Args:
        **field_kwargs: Passed through to ``dataclasses.field``

    Returns:
        Field whose metadata carries the ignore marker
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[JSON_IGNORE_METADATA_KEY] = True
    return dataclasses.field(metadata=metadata, **field_kwargs)


def json_ignore_properties(*names: str) -> Callable[[Type], Type]:
    """Class decorator listing properties the class hides by default.

    Only properties declared by the decorated class itself are affected;
    subclasses do not inherit the list.
    """

    def decorate(cls: Type) -> Type:
        setattr(cls, IGNORE_PROPERTIES_ATTR, frozenset(names))
        return cls

    return decorate


@dataclass(frozen=True)
class PropertyDescriptor:
    """A named property and the class level that declares it.

    Instances are hashable and serve as the property identity for the
    visibility cache.
    """

    name: str
    declaring_type: type

    def read(self, obj: Any) -> Any:
        """Read the property value from obj.

        Attribute access may run arbitrary code (properties, ``__getattr__``,
        lazy loaders); any failure it raises is wrapped.

        Raises:
            PropertyAccessError: If the value cannot be read
        """
        try:
            return getattr(obj, self.name)
        except Exception as e:
            raise PropertyAccessError(self.name, self.declaring_type, e) from e


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


def own_annotations(cls: type) -> Dict[str, Any]:
    """Annotations a class declares itself, without evaluating strings."""
    try:
        return dict(inspect.get_annotations(cls))
    except NameError:
        # Deferred annotations with unresolved forward references (3.14+)
        import annotationlib

        return dict(annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF))


@lru_cache(maxsize=512)
def resolved_annotations(cls: type) -> Dict[str, Any]:
    """Own annotations of cls with postponed (string) annotations evaluated.

    Modules using ``from __future__ import annotations`` store annotations as
    strings. They are evaluated in the class's module; when a name does not
    resolve the raw annotations are returned.
    """
    raw = own_annotations(cls)
    if not any(isinstance(annotation, str) for annotation in raw.values()):
        return raw
    try:
        return dict(inspect.get_annotations(cls, eval_str=True))
    except (NameError, AttributeError, SyntaxError, TypeError):
        return raw


@lru_cache(maxsize=512)
def declared_properties(cls: type) -> Tuple[str, ...]:
    """Property names a single class level declares.

    Args:
        cls: Class to inspect (bases are not consulted)

    Returns:
        Names in declaration order: annotations first, then ``__slots__``
    """
    names: List[str] = []
    for name, annotation in resolved_annotations(cls).items():
        if _is_dunder(name) or _is_class_var(annotation):
            continue
        if isinstance(annotation, dataclasses.InitVar):
            continue
        names.append(name)

    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    for name in slots:
        if not _is_dunder(name) and name not in names:
            names.append(name)

    return tuple(names)


def iter_properties(obj: Any) -> Iterator[PropertyDescriptor]:
    """Yield the properties of obj, most-derived class level first.

    Walks ``type(obj).__mro__`` up to, but excluding, ``object``. A name
    declared at several levels is yielded once, for its most-derived
    declaring level. Instance attributes no level declares are yielded right
    after the runtime type's own declared properties; underscore-prefixed
    instance attributes are only yielded when a level declares them.
    """
    runtime_type = type(obj)
    levels = [cls for cls in runtime_type.__mro__ if cls is not object]
    declared = {cls: declared_properties(cls) for cls in levels}

    all_declared = {name for names in declared.values() for name in names}
    instance_attrs = getattr(obj, "__dict__", None)
    extras: Tuple[str, ...] = ()
    if isinstance(instance_attrs, dict):
        extras = tuple(
            name
            for name in instance_attrs
            if isinstance(name, str) and not name.startswith("_") and name not in all_declared
        )

    seen = set()
    for cls in levels:
        names = declared[cls] + extras if cls is runtime_type else declared[cls]
        for name in names:
            if name in seen:
                continue
            seen.add(name)
            yield PropertyDescriptor(name=name, declaring_type=cls)


class MetadataProvider(ABC):
    """Source of default-visibility verdicts."""

    @abstractmethod
    def is_hidden_always(self, prop: PropertyDescriptor) -> bool:
        """Check if the property itself carries a hide marker."""

    @abstractmethod
    def is_hidden_by_type_list(self, declaring_type: type, name: str) -> bool:
        """Check if the declaring type lists the name as hidden."""

    def is_hidden(self, prop: PropertyDescriptor) -> bool:
        return self.is_hidden_always(prop) or self.is_hidden_by_type_list(
            prop.declaring_type, prop.name
        )


class AnnotationMetadata(MetadataProvider):
    """Metadata provider reading the markers defined in this module."""

    def is_hidden_always(self, prop: PropertyDescriptor) -> bool:
        fields = prop.declaring_type.__dict__.get("__dataclass_fields__", {})
        dc_field = fields.get(prop.name)
        if dc_field is not None and dc_field.metadata.get(JSON_IGNORE_METADATA_KEY):
            return True

        annotation = resolved_annotations(prop.declaring_type).get(prop.name)
        if typing.get_origin(annotation) is Annotated:
            return any(
                isinstance(marker, JsonIgnore) and marker.value
                for marker in annotation.__metadata__
            )
        return False

    def is_hidden_by_type_list(self, declaring_type: type, name: str) -> bool:
        return name in declaring_type.__dict__.get(IGNORE_PROPERTIES_ATTR, ())
