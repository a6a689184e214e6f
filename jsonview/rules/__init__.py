"""jsonview Rules System.

This module decides which structured-object properties are written:
- path_matches: Dotted-path glob matching
- Match / MatchResolver: Per-type include/exclude configurations

Exclude patterns always win over include patterns and default visibility.
"""

from .matches import (
    Match,
    MatchContext,
    MatchResolver,
    load_matches,
    matches_from_config,
    resolve_type,
)
from .patterns import compile_pattern, join_path, path_matches

__all__ = [
    # Pattern matching
    "compile_pattern",
    "path_matches",
    "join_path",
    # Match resolution
    "Match",
    "MatchContext",
    "MatchResolver",
    "load_matches",
    "matches_from_config",
    "resolve_type",
]
