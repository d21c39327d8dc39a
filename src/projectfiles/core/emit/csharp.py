from __future__ import annotations

"""
C# Rendering Helpers.

Small formatting primitives shared by the emitters: indentation, string
literals for paths and names, and XML-safe doc comment text.
"""

from xml.sax.saxutils import escape

INDENT = "    "


def indent(level: int) -> str:
    return INDENT * level


def string_literal(text: str) -> str:
    """Quote text as a regular C# string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def path_literal(path: str) -> str:
    """Quote a path as a C# string literal, always using '/'."""
    return string_literal(path.replace("\\", "/"))


def doc_text(text: str) -> str:
    """Escape text for use inside an XML doc comment."""
    return escape(text)
