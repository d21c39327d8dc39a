from __future__ import annotations

"""
Solution File Finder.

Walks up from a project file looking for the solution that contains it.
The walk stops at the repository root (a directory holding '.git').
"""

import logging
import os
from typing import List, Optional

from projectfiles.domain.constants import SOLUTION_EXTENSIONS

logger = logging.getLogger(__name__)


def find_solution(project_file: str) -> Optional[str]:
    """
    Locate the nearest solution file above a project file.

    Each directory from the project's own upwards is inspected. A
    directory containing '.git' ends the search without a result. Among
    '.slnx' and '.sln' candidates the longest name wins, so '.slnx' is
    preferred over a '.sln' of the same stem.

    Args:
        project_file: Path of the project file.

    Returns:
        Optional[str]: Absolute solution path, or None if not found.
    """
    if not os.path.isfile(project_file):
        logger.debug(f"Project file not found, skipping solution lookup: {project_file}")
        return None

    directory = os.path.dirname(os.path.abspath(project_file))

    while True:
        if os.path.isdir(os.path.join(directory, ".git")):
            logger.debug(f"Reached repository root without a solution: {directory}")
            return None

        candidates = _solution_candidates(directory)
        if candidates:
            solution = candidates[0]
            logger.debug(f"Solution found: {solution}")
            return solution

        parent = os.path.dirname(directory)
        if parent == directory:
            return None
        directory = parent


def _solution_candidates(directory: str) -> List[str]:
    try:
        names = os.listdir(directory)
    except OSError:
        return []

    paths = [
        os.path.join(directory, name) for name in names
        if name.endswith(SOLUTION_EXTENSIONS) and os.path.isfile(os.path.join(directory, name))
    ]
    return sorted(paths, key=lambda p: (-len(p), p))
