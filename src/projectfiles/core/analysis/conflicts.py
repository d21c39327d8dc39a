from __future__ import annotations

"""
Reserved Name Conflict Resolver.

The default-property injector owns four top-level accessor names. Any
top-level file or directory whose identifier would collide with one of
them is reported and left out of the generated tree.
"""

import logging
from typing import Iterable, List, Sequence, Tuple

from projectfiles.core.analysis.identifiers import (
    KeywordPredicate,
    NameScope,
    build_identifier,
    is_csharp_keyword,
    split_extension,
)
from projectfiles.domain.constants import RESERVED_NAMES
from projectfiles.domain.diagnostics import (
    RESERVED_DIRECTORY_NAME_CONFLICT,
    RESERVED_FILE_NAME_CONFLICT,
    Diagnostic,
    create_diagnostic,
)
from projectfiles.domain.generation_models import Conflict
from projectfiles.domain.tree_models import split_path_segments

logger = logging.getLogger(__name__)

RESERVED_SCOPE = NameScope(RESERVED_NAMES)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def find_reserved_name_conflicts(
        files: Iterable[str],
        reserved: NameScope = RESERVED_SCOPE,
        is_keyword: KeywordPredicate = is_csharp_keyword,
) -> List[Conflict]:
    """
    Check the first segment of every path against the reserved names.

    The segment's extension is stripped before sanitizing, so both
    'ProjectFile.txt' and a directory 'ProjectFile/' collide.

    Args:
        files: Project-relative paths.
        reserved: Scope of reserved identifiers.
        is_keyword: Keyword predicate forwarded to the sanitizer.

    Returns:
        List[Conflict]: One entry per offending path, in input order.
    """
    conflicts: List[Conflict] = []

    for file_path in files:
        parts = split_path_segments(file_path)
        stem, _ = split_extension(parts[0])
        identifier = build_identifier(stem, is_keyword)

        if not reserved.collides(identifier):
            continue

        conflicts.append(Conflict(
            file_path=file_path,
            identifier=identifier,
            is_directory=len(parts) > 1,
        ))

    return conflicts


def resolve_conflicts(
        files: Sequence[str],
        reserved: NameScope = RESERVED_SCOPE,
        is_keyword: KeywordPredicate = is_csharp_keyword,
) -> Tuple[List[Conflict], List[str]]:
    """
    Split the path list into conflicts and the conflict-free remainder.

    Every path is checked on its own, so all entries below a conflicting
    top-level directory are reported and removed individually.

    Returns:
        Tuple[List[Conflict], List[str]]: (conflicts, filtered paths).
    """
    conflicts = find_reserved_name_conflicts(files, reserved, is_keyword)
    excluded = NameScope(c.file_path for c in conflicts)

    filtered = [f for f in files if not excluded.collides(f)]

    for conflict in conflicts:
        kind = "Directory" if conflict.is_directory else "File"
        logger.warning(
            f"{kind} '{conflict.file_path}' collides with reserved accessor "
            f"'{conflict.identifier}' and was excluded."
        )

    return conflicts, filtered


def conflict_diagnostic(conflict: Conflict) -> Diagnostic:
    """Map a conflict to its PROJFILES001/PROJFILES002 diagnostic."""
    descriptor = RESERVED_DIRECTORY_NAME_CONFLICT if conflict.is_directory else RESERVED_FILE_NAME_CONFLICT
    return create_diagnostic(descriptor, conflict.file_path, conflict.identifier)
