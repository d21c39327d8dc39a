from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path normalization and output directory helpers shared by the CLI and the
generation pipeline.
"""

import os
from typing import Optional

from projectfiles.domain.constants import DEFAULT_OUTPUT_SUBDIR

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a path string into an absolute filesystem path.

    Expands environment variables ($VAR/%VAR%) and '~'. Reverts to the
    fallback when the input is empty.

    Args:
        path: Raw input path string.
        fallback: Path to use when the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


def get_default_output_dir(project_file: str) -> str:
    """
    Resolve the default output directory: obj/ProjectFiles next to the project.

    Args:
        project_file: Absolute path of the project file.

    Returns:
        str: Absolute output directory.
    """
    project_dir = os.path.dirname(os.path.abspath(project_file))
    return os.path.join(project_dir, DEFAULT_OUTPUT_SUBDIR)
