from __future__ import annotations

"""
Support Type Templates.

The ProjectDirectory and ProjectFile support types are emitted verbatim
next to the generated accessors. Their bodies ship as package data and
are read once, at import time, into an immutable GeneratedTemplates
value that callers pass to the generation engine.
"""

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
PROJECT_DIRECTORY_TEMPLATE = "ProjectDirectory.cs"
PROJECT_FILE_TEMPLATE = "ProjectFile.cs"


@dataclass(frozen=True)
class GeneratedTemplates:
    """
    Fixed source bodies emitted with every successful pass.

    Attributes:
        project_directory: Source of the ProjectDirectory support type.
        project_file: Source of the ProjectFile support type.
    """
    project_directory: str
    project_file: str


def load_templates(templates_dir: str = TEMPLATES_DIR) -> GeneratedTemplates:
    """
    Read the support type sources from disk.

    Args:
        templates_dir: Directory holding the template files.

    Returns:
        GeneratedTemplates: The loaded bodies.

    Raises:
        OSError: If a template is missing; the package is then incomplete.
    """
    return GeneratedTemplates(
        project_directory=_read_template(templates_dir, PROJECT_DIRECTORY_TEMPLATE),
        project_file=_read_template(templates_dir, PROJECT_FILE_TEMPLATE),
    )


def _read_template(templates_dir: str, name: str) -> str:
    path = os.path.join(templates_dir, name)
    # newline="" keeps the bytes identical across platforms
    with open(path, "r", encoding="utf-8", newline="") as f:
        content = f.read()
    logger.debug(f"Template loaded: {name} ({len(content)} chars)")
    return content


DEFAULT_TEMPLATES = load_templates()
