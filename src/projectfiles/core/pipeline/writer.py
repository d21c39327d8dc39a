from __future__ import annotations

"""
Generated Source Persistence.

Writes a complete set of generated sources to the output directory. Every
file is staged in a temporary directory first and only moved into place
once all of them were written. Files being replaced are parked in the
staging area until every move succeeded, so a failed pass restores the
previous sources instead of leaving a mix of old and new. Known generated
files that are no longer produced (for example GeneratedPaths.g.cs after
disabling path segments) are removed.
"""

import logging
import os
import tempfile
from typing import Container, Dict, List

from projectfiles.domain.constants import ALL_SOURCE_NAMES

logger = logging.getLogger(__name__)

_STAGING_PREFIX = ".projectfiles-"
_BACKUP_SUBDIR = ".previous"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def write_sources(output_dir: str, sources: Dict[str, str]) -> List[str]:
    """
    Persist generated sources.

    Args:
        output_dir: Destination directory (created if missing).
        sources: Hint name -> source text.

    Returns:
        List[str]: Absolute paths of the written files, in input order.

    Raises:
        OSError: If the directory cannot be created or a file cannot be
                 written or moved. The previous sources are restored.
    """
    os.makedirs(output_dir, exist_ok=True)

    written: List[str] = []

    # Staging lives inside output_dir so os.replace stays on one filesystem
    with tempfile.TemporaryDirectory(prefix=_STAGING_PREFIX, dir=output_dir) as staging_dir:
        for name, content in sources.items():
            _write_text(os.path.join(staging_dir, name), content)
        logger.debug(f"Staged {len(sources)} source(s) in {staging_dir}")

        backup_dir = os.path.join(staging_dir, _BACKUP_SUBDIR)
        os.mkdir(backup_dir)
        moved: List[str] = []

        try:
            for name in sources:
                target = os.path.join(output_dir, name)
                if os.path.isfile(target):
                    os.replace(target, os.path.join(backup_dir, name))
                moved.append(name)
                os.replace(os.path.join(staging_dir, name), target)
                written.append(os.path.abspath(target))
        except OSError:
            logger.error(f"Moving generated sources into {output_dir} failed; restoring previous files.")
            _restore_previous(output_dir, backup_dir, moved)
            raise

    remove_generated_sources(output_dir, keep=sources)

    logger.info(f"Wrote {len(written)} generated source(s) to {output_dir}")
    return written


def remove_generated_sources(output_dir: str, keep: Container[str] = ()) -> List[str]:
    """
    Delete known generated sources from the output directory.

    Files the generator does not own are never touched. A missing output
    directory is not an error.

    Args:
        output_dir: Directory holding earlier generated sources.
        keep: Hint names to leave in place.

    Returns:
        List[str]: Paths of the removed files.
    """
    removed: List[str] = []
    if not os.path.isdir(output_dir):
        return removed

    for name in ALL_SOURCE_NAMES:
        if name in keep:
            continue
        stale = os.path.join(output_dir, name)
        if os.path.isfile(stale):
            os.remove(stale)
            removed.append(stale)
            logger.debug(f"Removed stale source: {stale}")

    return removed

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _write_text(path: str, content: str) -> None:
    # newline="" keeps '\n' line endings on every platform
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)


def _restore_previous(output_dir: str, backup_dir: str, moved: List[str]) -> None:
    """Undo the moves done so far: drop new files, bring parked ones back."""
    for name in reversed(moved):
        target = os.path.join(output_dir, name)
        backup = os.path.join(backup_dir, name)
        if os.path.isfile(target):
            os.remove(target)
        if os.path.isfile(backup):
            os.replace(backup, target)
