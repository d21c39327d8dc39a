from __future__ import annotations

"""
Default Property Injector.

Emits the fixed top-level accessors for the project and solution files
and their directories. These four names are exactly the reserved names
the conflict resolver protects.
"""

import logging
import os
from typing import Callable, List, Optional

from projectfiles.core.discovery.solution_finder import find_solution
from projectfiles.core.emit.csharp import indent, path_literal
from projectfiles.domain.constants import PROJECT_PREFIX, SOLUTION_PREFIX
from projectfiles.domain.generation_models import ProjectContext

logger = logging.getLogger(__name__)

SolutionFinder = Callable[[str], Optional[str]]

# Members of the ProjectFiles class sit two levels deep
_MEMBER_LEVEL = 2


def default_property_lines(
        context: ProjectContext,
        solution_finder: SolutionFinder = find_solution,
) -> List[str]:
    """
    Render the project/solution accessors for the ProjectFiles class.

    The solution finder only runs when no solution file was supplied but
    a project file was.

    Args:
        context: Host settings for the pass.
        solution_finder: Collaborator locating the solution of a project.

    Returns:
        List[str]: Source lines, without trailing newlines.
    """
    lines: List[str] = []

    if context.project_file:
        lines.extend(_file_accessor_lines(context.project_file, PROJECT_PREFIX))

    solution_file = context.solution_file
    if solution_file is None and context.project_file:
        solution_file = solution_finder(context.project_file)
        if solution_file:
            logger.debug(f"Using discovered solution: {solution_file}")

    if solution_file:
        lines.extend(_file_accessor_lines(solution_file, SOLUTION_PREFIX))

    return lines


def _file_accessor_lines(file_path: str, prefix: str) -> List[str]:
    directory = os.path.dirname(os.path.abspath(file_path))
    pad = indent(_MEMBER_LEVEL)
    return [
        f"{pad}public static ProjectDirectory {prefix}Directory {{ get; }} = new({path_literal(directory + '/')});",
        f"{pad}public static ProjectFile {prefix}File {{ get; }} = new({path_literal(file_path)});",
    ]
