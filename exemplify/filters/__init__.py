"""Source discovery for exemplify.

This module provides pathspec-based gitignore filtering and the recursive
walk that decides which source files are scanned.
"""

from exemplify.filters.pathspec_filter import (
    PathspecFilter,
    DEFAULT_IGNORE_PATTERNS,
    discover_source_files,
    normalize_extensions,
)

__all__ = [
    "PathspecFilter",
    "DEFAULT_IGNORE_PATTERNS",
    "discover_source_files",
    "normalize_extensions",
]
