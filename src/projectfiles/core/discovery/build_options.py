from __future__ import annotations

"""
Host Build Options Reader.

Reads the analyzer configuration MSBuild generates for each project
(obj/<Configuration>/<TFM>/<Project>.GeneratedMSBuildEditorConfig.editorconfig).
Only the global section matters here: the 'key = value' lines above the
first '[section]' header, which carry the 'build_property.*' values.
"""

import logging
from typing import Dict

from projectfiles.domain.errors import BuildOptionsError

logger = logging.getLogger(__name__)

_COMMENT_PREFIXES = ("#", ";")

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_build_options(path: str) -> Dict[str, str]:
    """
    Load the global options of an analyzer config file.

    Args:
        path: Analyzer config file to read.

    Returns:
        Dict[str, str]: Option keys mapped to their raw values.

    Raises:
        BuildOptionsError: If the file cannot be read.
    """
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            content = f.read()
    except OSError as e:
        raise BuildOptionsError(path, str(e)) from e

    options = parse_build_options(content)
    logger.debug(f"Read {len(options)} build option(s) from {path}")
    return options


def parse_build_options(content: str) -> Dict[str, str]:
    """
    Parse analyzer config text.

    Keys keep their original spelling. Values are stripped; a later
    duplicate key wins. Lines without '=' are ignored.
    """
    options: Dict[str, str] = {}

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if not line or line.startswith(_COMMENT_PREFIXES):
            continue
        if line.startswith("["):
            break

        key, sep, value = line.partition("=")
        if not sep:
            continue
        options[key.strip()] = value.strip()

    return options
