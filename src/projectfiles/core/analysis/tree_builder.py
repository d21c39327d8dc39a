from __future__ import annotations

"""
File Tree Builder.

Constructs the directory hierarchy both emitters render. The tree is
built once from the filtered path list; the path-segment emitter reads
a FileTreeNode projection of it instead of re-parsing the paths.
"""

import logging
import os
import threading
from typing import Optional, Sequence

from projectfiles.core.cancellation import check_cancelled
from projectfiles.domain.tree_models import (
    DirectoryNode,
    FileTree,
    FileTreeNode,
    split_path_segments,
)

logger = logging.getLogger(__name__)

ROOT_NODE_NAME = "Root"

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def build_file_tree(
        files: Sequence[str],
        cancellation_event: Optional[threading.Event] = None,
) -> FileTree:
    """
    Build the DirectoryNode hierarchy from relative paths.

    A single-segment path is a root file. Longer paths walk (creating on
    first reference) one DirectoryNode per directory segment, tracking the
    accumulated path and depth, and the file lands in the last directory.

    Args:
        files: Project-relative paths, usually sorted.
        cancellation_event: Optional event checked per path and per segment.

    Returns:
        FileTree: Top-level directories and root files.
    """
    tree = FileTree()

    for file_path in files:
        check_cancelled(cancellation_event, "tree construction")
        parts = split_path_segments(file_path)

        if len(parts) < 2:
            tree.root_files.append(file_path)
            continue

        top_name = parts[0]
        current = tree.directories.get(top_name)
        if current is None:
            current = DirectoryNode(path=top_name, depth=0)
            tree.directories[top_name] = current

        current_path = top_name
        for depth in range(1, len(parts) - 1):
            check_cancelled(cancellation_event, "tree construction")
            part = parts[depth]
            current_path = current_path + os.sep + part

            child = current.subdirectories.get(part)
            if child is None:
                child = DirectoryNode(path=current_path, depth=depth)
                current.subdirectories[part] = child
            current = child

        current.files.append(file_path)

    logger.debug(
        f"File tree built: {len(tree.directories)} top-level directories, "
        f"{len(tree.root_files)} root files."
    )
    return tree


def to_segment_tree(
        tree: FileTree,
        cancellation_event: Optional[threading.Event] = None,
) -> FileTreeNode:
    """
    Project a FileTree onto the FileTreeNode view.

    Args:
        tree: Tree produced by build_file_tree.
        cancellation_event: Optional event checked per directory.

    Returns:
        FileTreeNode: Synthetic root whose children mirror the project root.
    """
    root = FileTreeNode(name=ROOT_NODE_NAME, is_directory=True)

    for file_path in tree.sorted_root_files():
        _add_file(root, file_path)

    for node in tree.sorted_directories():
        _add_directory(root, node, cancellation_event)

    return root

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _add_directory(
        parent: FileTreeNode,
        node: DirectoryNode,
        cancellation_event: Optional[threading.Event],
) -> None:
    check_cancelled(cancellation_event, "path segment projection")

    name = node.name
    segment = parent.children.get(name)
    if segment is None:
        segment = FileTreeNode(name=name, is_directory=True)
        parent.children[name] = segment
    elif not segment.is_directory:
        # A root file already owns this name; the first entry wins
        return

    for file_path in node.sorted_files():
        _add_file(segment, file_path)

    for _, child in node.sorted_subdirectories():
        _add_directory(segment, child, cancellation_event)


def _add_file(parent: FileTreeNode, file_path: str) -> None:
    name = split_path_segments(file_path)[-1]
    if name not in parent.children:
        parent.children[name] = FileTreeNode(name=name, is_directory=False, full_path=file_path)
