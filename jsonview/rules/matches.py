#!/usr/bin/env python3
"""Per-type include/exclude match configurations and their resolution.

This module decides, property by property, whether a structured object's
property is written:
- ``Match``: ordered include/exclude dotted-path globs for one type
- ``MatchContext``: the path and active match of one traversal frame
- ``MatchResolver``: ancestor-chain lookup and the visibility decision
- Loading matches keyed by importable type names from configuration

Exclude patterns always win. Without any resolvable match, default
visibility metadata is the only filter.

Example:
    >>> resolver = MatchResolver({Address: Match(excludes=["zip"])}, cache)
    >>> allowed, context = resolver.field_allowed(prop, Address, MatchContext.empty())
"""

import importlib
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from jsonview.core.constants import PATH_SEPARATOR, ErrorCode, PathSegments
from jsonview.core.errors import ConfigError
from jsonview.core.introspection import PropertyDescriptor
from jsonview.infrastructure.config_manager import ConfigManager, get_config_manager
from jsonview.infrastructure.visibility_cache import VisibilityCache
from jsonview.rules.patterns import join_path, path_matches


@dataclass(frozen=True)
class Match:
    """Include and exclude patterns configured for one declaring type."""

    includes: Tuple[str, ...] = ()
    excludes: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "includes", _pattern_tuple(self.includes, "includes"))
        object.__setattr__(self, "excludes", _pattern_tuple(self.excludes, "excludes"))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Match":
        """Build a match from ``{"includes": [...], "excludes": [...]}``.

        Raises:
            ConfigError: If unknown keys or non-string patterns are present
        """
        unknown = set(data) - {"includes", "excludes"}
        if unknown:
            raise ConfigError(f"Unknown match keys: {sorted(unknown)}")
        return cls(
            includes=data.get("includes") or (),
            excludes=data.get("excludes") or (),
        )

    @classmethod
    def coerce(cls, value: Union["Match", Mapping[str, Any]]) -> "Match":
        if isinstance(value, Match):
            return value
        if isinstance(value, Mapping):
            return cls.from_dict(value)
        raise ConfigError(f"Expected Match or mapping, got {type(value).__name__}")

    def includes_path(self, path: str) -> bool:
        return path_matches(self.includes, path)

    def excludes_path(self, path: str) -> bool:
        return path_matches(self.excludes, path)


def _pattern_tuple(patterns: Iterable[str], label: str) -> Tuple[str, ...]:
    if isinstance(patterns, str):
        patterns = (patterns,)
    result = tuple(patterns)
    for pattern in result:
        if not isinstance(pattern, str):
            raise ConfigError(f"{label} patterns must be strings, got {pattern!r}")
    return result


@dataclass(frozen=True)
class MatchContext:
    """Path and active match of one traversal frame.

    Contexts are immutable; the traversal engine threads them through the
    recursion and hands back the updated one.
    """

    path: PathSegments = ()
    match: Optional[Match] = None
    path_string: str = field(default="", compare=False)

    @classmethod
    def empty(cls) -> "MatchContext":
        return cls()

    def push(self, name: str) -> "MatchContext":
        path = self.path + (name,)
        return replace(self, path=path, path_string=join_path(path))

    def with_path(self, path: PathSegments) -> "MatchContext":
        return replace(self, path=path, path_string=join_path(path))

    def with_match(self, match: Optional[Match]) -> "MatchContext":
        return replace(self, match=match)

    def prefix(self) -> str:
        return self.path_string + PATH_SEPARATOR if self.path_string else ""


class MatchResolver:
    """Resolves match configurations for one root serialization."""

    def __init__(
        self,
        matches: Optional[Mapping[type, Union[Match, Mapping[str, Any]]]],
        cache: VisibilityCache,
    ):
        """Initialize match resolver.

        Args:
            matches: Match configuration per declaring type
            cache: Visibility cache for default-hidden verdicts
        """
        self._matches: Dict[type, Match] = {
            cls: Match.coerce(match) for cls, match in (matches or {}).items()
        }
        self._cache = cache
        self._resolved: Dict[type, Optional[Match]] = {}

    def __len__(self) -> int:
        return len(self._matches)

    def get_match(self, cls: type) -> Optional[Match]:
        """Get the match configured for exactly cls."""
        return self._matches.get(cls)

    def find(self, declaring_type: type) -> Optional[Match]:
        """Find the first configured match along the type's ancestor chain.

        Args:
            declaring_type: Type to start from

        Returns:
            Match of the most-derived configured ancestor, or None
        """
        if declaring_type in self._resolved:
            return self._resolved[declaring_type]

        found = None
        for cls in declaring_type.__mro__:
            if cls is object:
                break
            found = self._matches.get(cls)
            if found is not None:
                break

        self._resolved[declaring_type] = found
        return found

    def field_allowed(
        self,
        prop: PropertyDescriptor,
        decider_type: type,
        context: MatchContext,
    ) -> Tuple[bool, MatchContext]:
        """Decide whether a property is written.

        A match found for decider_type replaces the context's active match,
        which then applies to every later sibling that resolves none of its
        own.

        Args:
            prop: Property being considered
            decider_type: Type whose ancestor chain is searched
            context: Current frame context

        Returns:
            (allowed, context with the active match updated)
        """
        match = self.find(decider_type)
        if match is None:
            match = context.match

        if match is None:
            return not self._cache.hidden_by_default(prop), context

        candidate = context.prefix() + prop.name
        allowed = (
            match.includes_path(candidate) or not self._cache.hidden_by_default(prop)
        ) and not match.excludes_path(candidate)
        return allowed, context.with_match(match)


def resolve_type(name: str) -> type:
    """Import a type from ``"package.module.Class"`` or ``"package.module:Outer.Inner"``.

    Raises:
        ConfigError: If the name does not resolve to a class
    """
    if ":" in name:
        module_name, _, qualname = name.partition(":")
    else:
        module_name, _, qualname = name.rpartition(".")

    if not module_name or not qualname:
        raise ConfigError(f"Invalid type name: {name!r}")

    try:
        obj: Any = importlib.import_module(module_name)
        for attr in qualname.split("."):
            obj = getattr(obj, attr)
    except (ImportError, AttributeError) as e:
        raise ConfigError(f"Cannot resolve type {name!r}: {e}", ErrorCode.NOT_FOUND) from e

    if not isinstance(obj, type):
        raise ConfigError(f"{name!r} is not a class")
    return obj


def load_matches(data: Optional[Mapping[Any, Any]]) -> Dict[type, Match]:
    """Build match configurations from plain data.

    Args:
        data: Mapping of type (or importable type name) to
            ``{"includes": [...], "excludes": [...]}``

    Returns:
        Match configuration per type

    Raises:
        ConfigError: If a type name or a match entry is invalid
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ConfigError(f"matches must be a mapping, got {type(data).__name__}")

    matches: Dict[type, Match] = {}
    for key, value in data.items():
        cls = key if isinstance(key, type) else resolve_type(str(key))
        matches[cls] = Match.coerce(value)
    return matches


def matches_from_config(config: Optional[ConfigManager] = None) -> Dict[type, Match]:
    """Load the ``jsonview.matches`` section of a configuration."""
    config = config or get_config_manager()
    return load_matches(config.get("jsonview.matches", {}))
