from __future__ import annotations

"""
Directory Tree Structure Data Models.

Provides the node types shared by the tree builder and both emitters:
the DirectoryNode hierarchy rendered as nested scopes, the FileTreeNode
view rendered as flat path segments, and the PathFragment value that
mirrors the generated path-join semantics.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

# Both separators are accepted regardless of host
_SEPARATOR_RX = re.compile(r"[\\/]")


def split_path_segments(path: str) -> List[str]:
    """
    Split a relative path on forward and backward slashes.

    Args:
        path: Project-relative path.

    Returns:
        List[str]: Path segments in order.
    """
    return _SEPARATOR_RX.split(path)

# -----------------------------------------------------------------------------
# NESTED-SCOPE TREE
# -----------------------------------------------------------------------------

@dataclass
class DirectoryNode:
    """
    One directory level of the accessor hierarchy.

    Attributes:
        path: Relative path of the directory (top-level nodes: their own name).
        depth: 0 for top-level directories, +1 per nesting level.
        subdirectories: Children keyed by their original, unsanitized name.
        files: Relative paths of the files directly inside this directory.
    """
    path: str
    depth: int
    subdirectories: Dict[str, "DirectoryNode"] = field(default_factory=dict)
    files: List[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return split_path_segments(self.path)[-1]

    def sorted_subdirectories(self) -> List[Tuple[str, "DirectoryNode"]]:
        """Children ordered by original name (ordinal)."""
        return sorted(self.subdirectories.items(), key=lambda item: item[0])

    def sorted_files(self) -> List[str]:
        return sorted(self.files)


@dataclass
class FileTree:
    """
    Result of the tree builder.

    Attributes:
        directories: Top-level DirectoryNodes keyed by name.
        root_files: Paths of files that sit directly in the project root.
    """
    directories: Dict[str, DirectoryNode] = field(default_factory=dict)
    root_files: List[str] = field(default_factory=list)

    def sorted_directories(self) -> List[DirectoryNode]:
        return sorted(self.directories.values(), key=lambda node: node.path)

    def sorted_root_files(self) -> List[str]:
        return sorted(self.root_files)


# -----------------------------------------------------------------------------
# PATH-SEGMENT TREE
# -----------------------------------------------------------------------------

@dataclass
class FileTreeNode:
    """
    Node of the path-segment view.

    Attributes:
        name: Original segment (files keep their extension).
        is_directory: True for directories and the synthetic root.
        full_path: Relative path, set on leaves only.
        children: Child nodes keyed by segment name.
    """
    name: str
    is_directory: bool
    full_path: Optional[str] = None
    children: Dict[str, "FileTreeNode"] = field(default_factory=dict)

    def sorted_children(self) -> List[Tuple[str, "FileTreeNode"]]:
        return sorted(self.children.items(), key=lambda item: item[0])


@dataclass(frozen=True)
class PathFragment:
    """
    Composable path segment.

    Joining with '/' inserts exactly one separator between two non-empty
    fragments; the empty fragment is the identity on both sides.
    """
    value: str = ""

    @classmethod
    def empty(cls) -> "PathFragment":
        return cls("")

    def __truediv__(self, other: Union["PathFragment", str]) -> "PathFragment":
        right = other.value if isinstance(other, PathFragment) else other
        if not self.value:
            return PathFragment(right)
        if not right:
            return self
        return PathFragment(f"{self.value}/{right}")

    def __str__(self) -> str:
        return self.value
