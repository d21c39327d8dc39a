from __future__ import annotations

"""
Path-Segment Emitter.

Renders the alternative, flat accessor shape: a PathNode value type that
composes with '/', one PathNode per distinct directory name anywhere in
the tree, and one static class per distinct file stem exposing a PathNode
per extension. Names are deduplicated globally, not per position. A stem
class whose name a directory PathNode already uses gets a "Files" suffix.
"""

import logging
import threading
from typing import Dict, List, Optional, Set

from projectfiles.core.analysis.identifiers import (
    KeywordPredicate,
    NameScope,
    build_identifier,
    is_csharp_keyword,
    split_extension,
)
from projectfiles.core.cancellation import check_cancelled
from projectfiles.core.emit.csharp import doc_text, indent, string_literal
from projectfiles.domain.tree_models import FileTreeNode

logger = logging.getLogger(__name__)

_STAGE = "path segment emission"
_GROUP_SUFFIX = "Files"

PATH_NODE_SOURCE = '''// <auto-generated/>
#nullable enable

/// <summary>
/// Represents a path segment that can be composed using the / operator.
/// </summary>
public readonly struct PathNode
{
    /// <summary>
    /// Gets the path value.
    /// </summary>
    public string Value { get; }

    /// <summary>
    /// Initializes a new instance of the <see cref="PathNode"/> struct.
    /// </summary>
    /// <param name="value">The path value.</param>
    public PathNode(string value) => Value = value ?? "";

    /// <summary>
    /// Returns the string representation of this path node.
    /// </summary>
    public override string ToString() => Value;

    /// <summary>
    /// Implicitly converts a <see cref="PathNode"/> to a string.
    /// </summary>
    public static implicit operator string(PathNode p) => p.Value;

    /// <summary>
    /// Gets an empty path node.
    /// </summary>
    public static PathNode Empty => new PathNode("");

    /// <summary>
    /// Combines two path nodes using the / separator. An empty node on either side is ignored.
    /// </summary>
    public static PathNode operator /(PathNode left, PathNode right) => Join(left.Value, right.Value);

    /// <summary>
    /// Combines a path node with a string using the / separator. An empty value on either side is ignored.
    /// </summary>
    public static PathNode operator /(PathNode left, string right) => Join(left.Value, right);

    static PathNode Join(string? left, string? right)
    {
        if (string.IsNullOrEmpty(left))
        {
            return new PathNode(right ?? "");
        }

        if (string.IsNullOrEmpty(right))
        {
            return new PathNode(left);
        }

        return new PathNode(left + "/" + right);
    }
}

/// <summary>
/// Provides path composition support using the / operator for project files.
/// Use with 'using static GeneratedPaths;' to access directory and file path nodes.
/// </summary>
public static class GeneratedPaths
{
'''

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_path_segments(
        root: FileTreeNode,
        is_keyword: KeywordPredicate = is_csharp_keyword,
        cancellation_event: Optional[threading.Event] = None,
) -> str:
    """
    Render the GeneratedPaths source.

    Args:
        root: Synthetic root of the path-segment view.
        is_keyword: Keyword predicate for the identifier sanitizer.
        cancellation_event: Optional event checked per emitted member.

    Returns:
        str: Complete C# source text.
    """
    directories: Set[str] = set()
    files_by_stem: Dict[str, Set[str]] = {}
    collect_path_nodes(root, directories, files_by_stem, cancellation_event)
    directory_scope = NameScope(build_identifier(name, is_keyword) for name in directories)

    lines: List[str] = []
    pad = indent(1)
    inner = indent(2)

    for dir_name in sorted(directories):
        check_cancelled(cancellation_event, _STAGE)
        lines.extend([
            f"{pad}/// <summary>",
            f"{pad}/// PathNode for the '{doc_text(dir_name)}' directory.",
            f"{pad}/// </summary>",
            f"{pad}public static readonly PathNode {build_identifier(dir_name, is_keyword)} "
            f"= new PathNode({string_literal(dir_name)});",
            "",
        ])

    for stem in sorted(files_by_stem):
        check_cancelled(cancellation_event, _STAGE)
        class_name = build_identifier(stem, is_keyword)
        # Class and field names share the GeneratedPaths member space
        while directory_scope.collides(class_name):
            class_name += _GROUP_SUFFIX
        lines.extend([
            f"{pad}/// <summary>",
            f"{pad}/// File extensions for '{doc_text(stem)}'.",
            f"{pad}/// </summary>",
            f"{pad}public static class {class_name}",
            f"{pad}{{",
        ])

        for extension in sorted(files_by_stem[stem]):
            # Extension-less files would clash with their own group name
            if not extension:
                continue
            full_name = stem + extension
            lines.extend([
                f"{inner}/// <summary>",
                f"{inner}/// PathNode for '{doc_text(full_name)}'.",
                f"{inner}/// </summary>",
                f"{inner}public static PathNode {build_identifier(extension, is_keyword)} "
                f"=> new PathNode({string_literal(full_name)});",
                "",
            ])

        lines.extend([f"{pad}}}", ""])

    body = "".join(line + "\n" for line in lines)
    logger.debug(
        f"Path segments rendered: {len(directories)} directories, {len(files_by_stem)} file groups."
    )
    return PATH_NODE_SOURCE + body + "}\n"


def collect_path_nodes(
        node: FileTreeNode,
        directories: Set[str],
        files_by_stem: Dict[str, Set[str]],
        cancellation_event: Optional[threading.Event] = None,
) -> None:
    """
    Gather every directory name and every (stem, extension) pair.

    Args:
        node: Subtree to walk.
        directories: Accumulator of distinct directory names.
        files_by_stem: Accumulator mapping stems to distinct extensions.
        cancellation_event: Optional event checked per directory level.
    """
    check_cancelled(cancellation_event, _STAGE)

    for name, child in node.sorted_children():
        if child.is_directory:
            directories.add(name)
            collect_path_nodes(child, directories, files_by_stem, cancellation_event)
            continue

        stem, extension = split_extension(name)
        files_by_stem.setdefault(stem, set()).add(extension)
