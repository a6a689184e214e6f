#!/usr/bin/env python3
"""Bounded cache of default-visibility verdicts.

This module memoizes "is this property hidden by default?" per property:
- Soft capacity, one arbitrary entry evicted per insert at capacity
- Thread-safe get-or-insert shared by concurrent serializations
- Pluggable metadata provider computing verdicts on a miss
- Cache statistics

Example:
    >>> cache = VisibilityCache(CacheConfig(capacity=100))
    >>> cache.hidden_by_default(PropertyDescriptor("password", User))
    True
"""

import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from jsonview.core.constants import DEFAULT_CACHE_CAPACITY
from jsonview.core.introspection import AnnotationMetadata, MetadataProvider, PropertyDescriptor
from jsonview.infrastructure.config_manager import get_config_manager


@dataclass
class CacheConfig:
    """Configuration for the visibility cache."""

    capacity: int = DEFAULT_CACHE_CAPACITY
    enabled: bool = True

    def validate(self) -> None:
        """Validate cache configuration."""
        if not isinstance(self.capacity, int) or self.capacity <= 0:
            raise ValueError(f"capacity must be a positive integer: {self.capacity}")


class VisibilityCache:
    """Thread-safe bounded memo of hidden-by-default verdicts.

    Eviction picks whichever entry the underlying dict yields first; callers
    must not rely on which entry survives.
    """

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        metadata: Optional[MetadataProvider] = None,
    ):
        """Initialize visibility cache.

        Args:
            config: Cache configuration (defaults to capacity 1000)
            metadata: Provider computing verdicts on a miss
        """
        self.config = config or CacheConfig()
        self.config.validate()
        self.metadata = metadata or AnnotationMetadata()
        self._entries: Dict[PropertyDescriptor, bool] = {}
        self._lock = threading.Lock()

        # Statistics
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def capacity(self) -> int:
        return self.config.capacity

    def hidden_by_default(self, prop: PropertyDescriptor) -> bool:
        """Get the memoized verdict for prop, computing it on a miss.

        Args:
            prop: Property to check

        Returns:
            True if default metadata hides the property
        """
        if not self.config.enabled:
            with self._lock:
                self._misses += 1
            return self.metadata.is_hidden(prop)

        with self._lock:
            verdict = self._entries.get(prop)
            if verdict is not None:
                self._hits += 1
                return verdict
            self._misses += 1

        # Metadata lookup runs outside the lock; a racing thread computes the
        # same verdict.
        verdict = self.metadata.is_hidden(prop)

        with self._lock:
            if prop not in self._entries and len(self._entries) >= self.config.capacity:
                self._evict_one()
            self._entries[prop] = verdict
        return verdict

    def _evict_one(self) -> None:
        """Evict an arbitrary entry. Caller holds the lock."""
        if self._entries:
            del self._entries[next(iter(self._entries))]
            self._evictions += 1

    def clear(self) -> None:
        """Clear all cached verdicts."""
        with self._lock:
            self._entries.clear()

    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Cache statistics
        """
        with self._lock:
            total_requests = self._hits + self._misses
            hit_rate = self._hits / total_requests if total_requests > 0 else 0

            return {
                "entries": len(self._entries),
                "capacity": self.config.capacity,
                "hits": self._hits,
                "misses": self._misses,
                "hit_rate": hit_rate,
                "evictions": self._evictions,
            }

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, prop: PropertyDescriptor) -> bool:
        with self._lock:
            return prop in self._entries


# Global visibility cache instance
_global_cache: Optional[VisibilityCache] = None
_global_lock = threading.Lock()


def get_visibility_cache(config: Optional[CacheConfig] = None) -> VisibilityCache:
    """Get or create the process-wide visibility cache.

    Args:
        config: Cache configuration; when None the capacity is read from the
            global configuration manager

    Returns:
        Global visibility cache
    """
    global _global_cache
    with _global_lock:
        if _global_cache is None:
            if config is None:
                config = CacheConfig(capacity=get_config_manager().get_cache_capacity())
            _global_cache = VisibilityCache(config)
        return _global_cache


def set_global_visibility_cache(cache: Optional[VisibilityCache]) -> None:
    """Set (or reset with None) the process-wide visibility cache.

    Args:
        cache: Visibility cache to use globally
    """
    global _global_cache
    with _global_lock:
        _global_cache = cache
