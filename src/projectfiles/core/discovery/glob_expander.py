from __future__ import annotations

"""
Glob Pattern Expander.

Turns manifest inclusion patterns ('*', '?' and recursive '**' segments)
into the concrete, sorted list of existing files they select, relative
to the project directory. Missing directories simply match nothing.
"""

import fnmatch
import logging
import os
import threading
from typing import Iterable, List, Optional, Set

from projectfiles.core.cancellation import check_cancelled

logger = logging.getLogger(__name__)

RECURSIVE_SEGMENT = "**"
DEFAULT_SEARCH_PATTERN = "*.*"
_WILDCARD_CHARS = ("*", "?")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def expand_glob_pattern(
        pattern: str,
        base_dir: str,
        cancellation_event: Optional[threading.Event] = None,
) -> List[str]:
    """
    Expand one inclusion pattern against the project directory.

    Rules:
    - No wildcard: the path itself, if it is an existing file.
    - Wildcards without '**': file names inside exactly the named directory.
    - '**': the prefix before it is the search directory, the suffix is the
      file pattern (default '*.*', which matches every file); the search
      covers that directory and all of its descendants.

    Args:
        pattern: Raw Include/Update value.
        base_dir: Project directory the pattern is relative to.
        cancellation_event: Optional event to abort the directory walk.

    Returns:
        List[str]: Sorted, deduplicated relative paths in host separators.
    """
    normalized = normalize_separators(pattern)

    if not os.path.isdir(base_dir):
        logger.debug(f"Glob base directory missing: {base_dir}")
        return []

    if not has_wildcards(normalized):
        full_path = os.path.join(base_dir, *normalized.split("/"))
        if os.path.isfile(full_path):
            return [relative_path(base_dir, full_path)]
        return []

    parts = normalized.split("/")
    if RECURSIVE_SEGMENT in parts:
        found = _expand_recursive(parts, base_dir, cancellation_event)
    else:
        found = _expand_single_directory(normalized, base_dir, cancellation_event)

    return sorted({relative_path(base_dir, path) for path in found})


def expand_patterns(
        patterns: Iterable[str],
        base_dir: str,
        cancellation_event: Optional[threading.Event] = None,
) -> List[str]:
    """
    Expand every pattern and union the results.

    Args:
        patterns: Inclusion patterns in manifest order.
        base_dir: Project directory.
        cancellation_event: Optional event checked between patterns.

    Returns:
        List[str]: Sorted, deduplicated relative paths.
    """
    selected: Set[str] = set()
    for pattern in patterns:
        check_cancelled(cancellation_event, "glob expansion")
        matches = expand_glob_pattern(pattern, base_dir, cancellation_event)
        logger.debug(f"Pattern '{pattern}' matched {len(matches)} file(s).")
        selected.update(matches)
    return sorted(selected)


def has_wildcards(pattern: str) -> bool:
    return any(ch in pattern for ch in _WILDCARD_CHARS)


def normalize_separators(path: str) -> str:
    """Use forward slashes internally, whatever the input style."""
    return path.replace("\\", "/")


def relative_path(base_dir: str, full_path: str) -> str:
    """
    Compute a path relative to base_dir in host separators.

    Trailing separators on either argument do not change the result.
    """
    base = os.path.abspath(base_dir)
    target = os.path.abspath(full_path)
    rel = os.path.relpath(target, base).replace(os.sep, "/")
    return rel.replace("/", os.sep)


def is_project_relative(path: str) -> bool:
    """True for paths that stay inside the project (no root, no '..')."""
    normalized = normalize_separators(path)
    if not normalized or os.path.isabs(path) or normalized.startswith("/"):
        return False
    if len(normalized) > 1 and normalized[1] == ":":
        return False
    return ".." not in normalized.split("/")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _expand_recursive(
        parts: List[str],
        base_dir: str,
        cancellation_event: Optional[threading.Event],
) -> List[str]:
    """Search the directory before '**' and every descendant."""
    split_at = parts.index(RECURSIVE_SEGMENT)
    before = [p for p in parts[:split_at] if p]
    after = "/".join(parts[split_at + 1:])

    search_dir = os.path.join(base_dir, *before) if before else base_dir
    if not os.path.isdir(search_dir):
        logger.debug(f"Recursive search directory missing: {search_dir}")
        return []

    search_pattern = after or DEFAULT_SEARCH_PATTERN
    pattern_parts = search_pattern.split("/")

    found: List[str] = []
    for root, dirs, files in os.walk(search_dir):
        check_cancelled(cancellation_event, "glob expansion")
        dirs.sort()
        rel_root = os.path.relpath(root, search_dir)
        root_parts = [] if rel_root == "." else rel_root.split(os.sep)

        for file_name in sorted(files):
            if _matches_tail(root_parts + [file_name], pattern_parts):
                found.append(os.path.join(root, file_name))

    return found


def _expand_single_directory(
        pattern: str,
        base_dir: str,
        cancellation_event: Optional[threading.Event],
) -> List[str]:
    """Match file names inside one directory, without descending."""
    dir_part, _, file_part = pattern.rpartition("/")
    dir_parts = [p for p in dir_part.split("/") if p]

    search_dir = os.path.join(base_dir, *dir_parts) if dir_parts else base_dir
    if not os.path.isdir(search_dir):
        logger.debug(f"Search directory missing: {search_dir}")
        return []

    found: List[str] = []
    for file_name in sorted(os.listdir(search_dir)):
        check_cancelled(cancellation_event, "glob expansion")
        full_path = os.path.join(search_dir, file_name)
        if os.path.isfile(full_path) and _matches_segment(file_name, file_part):
            found.append(full_path)
    return found


def _matches_tail(path_parts: List[str], pattern_parts: List[str]) -> bool:
    """Match the trailing path segments against a (multi-segment) pattern."""
    if len(path_parts) < len(pattern_parts):
        return False
    tail = path_parts[len(path_parts) - len(pattern_parts):]
    return all(_matches_segment(name, pat) for name, pat in zip(tail, pattern_parts))


def _matches_segment(name: str, pattern: str) -> bool:
    if pattern in ("*", DEFAULT_SEARCH_PATTERN):
        return True
    # Only '*' and '?' are wildcards; '[' is a literal character in manifests
    return fnmatch.fnmatch(name, pattern.replace("[", "[[]"))
