from __future__ import annotations

"""
Nested-Scope Emitter.

Renders the DirectoryNode tree as the primary accessor shape: a static
ProjectFiles class whose properties expose one generated container type
per directory, each holding its subdirectories and ProjectFile leaves.
Siblings are always emitted in ordinal order so regenerating from the
same inputs yields byte-identical source.
"""

import logging
import threading
from typing import List, Optional, Sequence

from projectfiles.core.analysis.identifiers import (
    KeywordPredicate,
    NameScope,
    build_file_identifier,
    build_identifier,
    is_csharp_keyword,
)
from projectfiles.core.cancellation import check_cancelled
from projectfiles.core.emit.csharp import indent, path_literal
from projectfiles.domain.constants import GENERATED_NAMESPACE, TYPES_NAMESPACE
from projectfiles.domain.tree_models import DirectoryNode, FileTree

logger = logging.getLogger(__name__)

_STAGE = "nested scope emission"

# Members of the ProjectFiles class sit two levels deep
_MEMBER_LEVEL = 2

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_nested_scope(
        tree: FileTree,
        default_lines: Sequence[str] = (),
        has_default_properties: bool = False,
        is_keyword: KeywordPredicate = is_csharp_keyword,
        cancellation_event: Optional[threading.Event] = None,
) -> str:
    """
    Render the ProjectFiles accessor source.

    Layout: default properties, root files, root directory properties,
    then the container types in the Types namespace.

    Args:
        tree: Conflict-free file tree.
        default_lines: Pre-rendered project/solution accessor lines.
        has_default_properties: Whether the host supplied a project or
                                solution file (controls the spacer line).
        is_keyword: Keyword predicate for the identifier sanitizer.
        cancellation_event: Optional event checked per directory and file.

    Returns:
        str: Complete C# source text.
    """
    lines: List[str] = [
        "// <auto-generated/>",
        "#nullable enable",
        "",
        f"namespace {GENERATED_NAMESPACE}",
        "{",
        f"    using {TYPES_NAMESPACE};",
        "",
        "    /// <summary>Provides strongly-typed access to project files marked with CopyToOutputDirectory.</summary>",
        "    static partial class ProjectFiles",
        "    {",
    ]

    lines.extend(default_lines)

    root_files = tree.sorted_root_files()
    top_level = tree.sorted_directories()

    if (root_files or top_level) and has_default_properties:
        lines.append("")

    pad = indent(_MEMBER_LEVEL)
    for file_path in root_files:
        check_cancelled(cancellation_event, _STAGE)
        name = build_file_identifier(file_path, is_keyword)
        lines.append(f"{pad}public static ProjectFile {name} {{ get; }} = new({path_literal(file_path)});")

    if root_files and top_level:
        lines.append("")

    for node in top_level:
        check_cancelled(cancellation_event, _STAGE)
        class_name = build_identifier(node.name, is_keyword)
        lines.append(f"{pad}public static {class_name}Type {class_name} {{ get; }} = new();")

    lines.extend([
        "    }",
        "}",
        "",
        f"namespace {TYPES_NAMESPACE}",
        "{",
    ])

    for node in top_level:
        check_cancelled(cancellation_event, _STAGE)
        class_name = build_identifier(node.name, is_keyword)
        lines.append(f"partial class {class_name}Type() : ProjectDirectory({path_literal(node.path)})")
        lines.append("{")
        _render_members(lines, node, 1, is_keyword, cancellation_event)
        lines.append("}")

    lines.append("}")

    logger.debug(f"Nested scope rendered: {len(lines)} lines.")
    return "\n".join(lines) + "\n"

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _render_members(
        lines: List[str],
        node: DirectoryNode,
        level: int,
        is_keyword: KeywordPredicate,
        cancellation_event: Optional[threading.Event],
) -> None:
    """Emit subdirectory containers first, then the file accessors."""
    pad = indent(level)
    parent_scope = NameScope([build_identifier(node.name, is_keyword)])

    for name, child in node.sorted_subdirectories():
        check_cancelled(cancellation_event, _STAGE)

        property_name = build_identifier(name, is_keyword)
        class_name = property_name
        # A nested type may not share its enclosing type's name
        if parent_scope.collides(property_name):
            class_name = f"{property_name}_Level{child.depth}"

        lines.append(f"{pad}public {class_name}Type {property_name} {{ get; }} = new();")
        lines.append(f"{pad}public partial class {class_name}Type")
        lines.append(f"{pad}{{")
        _render_members(lines, child, level + 1, is_keyword, cancellation_event)
        lines.append(f"{pad}}}")
        lines.append("")

    for file_path in node.sorted_files():
        check_cancelled(cancellation_event, _STAGE)
        name = build_file_identifier(file_path, is_keyword)
        lines.append(f"{pad}public ProjectFile {name} {{ get; }} = new({path_literal(file_path)});")
