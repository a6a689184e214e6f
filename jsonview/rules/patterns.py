#!/usr/bin/env python3
"""Dotted-path glob matching for property paths.

This module provides the pattern matching used by match configurations:
- ``.`` is a literal path separator
- ``*`` matches any run of characters, separators included
- Patterns are anchored to the whole candidate path
- Multiple patterns combined with OR logic

Example:
    >>> path_matches(["address.*"], "address.zip")
    True
    >>> path_matches(["address"], "address.zip")
    False
"""

import re
from functools import lru_cache
from typing import Iterable, Pattern

from jsonview.core.constants import PATH_SEPARATOR, WILDCARD


@lru_cache(maxsize=1024)
def compile_pattern(pattern: str) -> Pattern:
    """Translate a dotted-path glob into an anchored regular expression.

    Args:
        pattern: Glob pattern (e.g., "items.*", "*.secret")

    Returns:
        Compiled regex matching the entire candidate path
    """
    translated = ".*".join(re.escape(part) for part in pattern.split(WILDCARD))
    return re.compile(translated, re.DOTALL)


def path_matches(patterns: Iterable[str], candidate_path: str) -> bool:
    """Check if a dotted path matches any of the patterns.

    Args:
        patterns: Glob patterns, tested in order
        candidate_path: Dotted property path (e.g., "address.zip")

    Returns:
        True on the first pattern matching the whole path
    """
    for pattern in patterns:
        if compile_pattern(pattern).fullmatch(candidate_path):
            return True
    return False


def join_path(segments: Iterable[str]) -> str:
    """Join path segments with the path separator."""
    return PATH_SEPARATOR.join(segments)
