"""Pathspec-based source discovery.

This module uses the pathspec library for gitignore handling, supporting
negation patterns, double-star globs and nested gitignore files, and walks
source directories to collect the files that should be scanned for markers.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

import pathspec

logger = logging.getLogger(__name__)


# Default ignore patterns when no .gitignore exists
DEFAULT_IGNORE_PATTERNS: list[str] = [
    "node_modules/",
    "venv/",
    ".venv/",
    "__pycache__/",
    ".git/",
    "dist/",
    "build/",
    "vendor/",
    "*.min.js",
    ".idea/",
    ".vscode/",
    "*.egg-info/",
    ".tox/",
    ".pytest_cache/",
    ".mypy_cache/",
    "target/",  # Rust/Java
    "bin/",
    "obj/",  # .NET
]


def _spec_from_file(gitignore_path: Path) -> Optional[pathspec.PathSpec]:
    try:
        lines = gitignore_path.read_text(encoding="utf-8").splitlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Skipping unreadable {gitignore_path}: {e}")
        return None
    return pathspec.PathSpec.from_lines("gitwildmatch", lines)


class PathspecFilter:
    """File filter based on pathspec library with nested gitignore support."""

    def __init__(self, root: Path, include_nested: bool = True):
        """
        Initialize the filter.

        Args:
            root: Directory the ignore rules are relative to
            include_nested: Whether to include nested .gitignore files
        """
        self.root = root
        self._root_spec = self._load_root_spec()
        self._nested_specs: dict[Path, pathspec.PathSpec] = {}
        if include_nested:
            self._load_nested_gitignores()

    def _load_root_spec(self) -> pathspec.PathSpec:
        """Load root .gitignore, falling back to the default patterns."""
        gitignore_path = self.root / ".gitignore"
        spec = _spec_from_file(gitignore_path) if gitignore_path.is_file() else None
        if spec is None:
            return pathspec.PathSpec.from_lines("gitwildmatch", DEFAULT_IGNORE_PATTERNS)
        # .git is never part of a working tree listing
        return spec + pathspec.PathSpec.from_lines("gitwildmatch", [".git/"])

    def _load_nested_gitignores(self) -> None:
        """Load nested .gitignore files from subdirectories."""
        for gitignore_path in self.root.rglob(".gitignore"):
            if gitignore_path.parent == self.root:
                continue  # Skip root, already loaded
            spec = _spec_from_file(gitignore_path)
            if spec is not None:
                self._nested_specs[gitignore_path.parent] = spec

    def should_ignore(self, path: Path, is_dir: bool = False) -> bool:
        """
        Check if a file or directory should be ignored.

        Root rules apply everywhere; nested .gitignore rules apply to their
        directory and below, deepest first.
        """
        try:
            relative = path.relative_to(self.root) if path.is_absolute() else path
        except ValueError:
            return False

        relative_str = relative.as_posix()
        if is_dir:
            relative_str += "/"

        if self._root_spec.match_file(relative_str):
            return True

        for gitignore_dir in sorted(self._nested_specs, key=lambda p: len(p.parts), reverse=True):
            try:
                nested_relative = (self.root / relative).relative_to(gitignore_dir)
            except ValueError:
                continue
            nested_str = nested_relative.as_posix() + ("/" if is_dir else "")
            if self._nested_specs[gitignore_dir].match_file(nested_str):
                return True

        return False

    def filter_paths(self, paths: list[Path]) -> list[Path]:
        """Filter paths, returning those that should NOT be ignored."""
        return [p for p in paths if not self.should_ignore(p)]


def normalize_extensions(extensions: Iterable[str]) -> set[str]:
    """Accept both 'ts' and '.ts' forms, case-insensitively."""
    return {ext.lower() if ext.startswith(".") else f".{ext.lower()}" for ext in extensions if ext}


def _walk(directory: Path, path_filter: Optional[PathspecFilter]) -> Iterator[Path]:
    try:
        entries = sorted(directory.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"Cannot list {directory}: {e}")
        return

    for entry in entries:
        if entry.is_symlink():
            continue
        if entry.is_dir():
            if path_filter and path_filter.should_ignore(entry, is_dir=True):
                continue
            yield from _walk(entry, path_filter)
        elif entry.is_file():
            if path_filter and path_filter.should_ignore(entry):
                continue
            yield entry


def discover_source_files(
    source_directories: Iterable[Path],
    extensions: Iterable[str],
    use_gitignore: bool = True,
) -> list[Path]:
    """
    Recursively collect source files to scan.

    Args:
        source_directories: Directories (or single files) to search
        extensions: File extensions to include
        use_gitignore: Whether to honour .gitignore / default ignore rules

    Returns:
        De-duplicated files in a stable, sorted order
    """
    wanted = normalize_extensions(extensions)
    found: dict[Path, None] = {}

    for source in source_directories:
        source = Path(source).resolve()
        if source.is_file():
            if source.suffix.lower() in wanted:
                found.setdefault(source, None)
            continue
        if not source.is_dir():
            raise FileNotFoundError(f"Source directory does not exist: {source}")

        path_filter = PathspecFilter(source) if use_gitignore else None
        for path in _walk(source, path_filter):
            if path.suffix.lower() in wanted:
                found.setdefault(path, None)

    logger.debug(f"Discovered {len(found)} source files")
    return list(found)
