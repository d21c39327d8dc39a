from __future__ import annotations

"""
Identifier Sanitizer.

Converts arbitrary path segments into valid, escaped, PascalCase-first
C# identifiers. The conversion is a pure function of its input so the
generated code never changes between runs for the same file names.
Also hosts NameScope, the single case-insensitive collision check used
for reserved names and for directory/parent clashes.
"""

from typing import Callable, FrozenSet, Iterable, List, Tuple

from projectfiles.domain.tree_models import split_path_segments

KeywordPredicate = Callable[[str], bool]

# Escape marker prepended to identifiers that are reserved keywords
ESCAPE_MARKER = "@"
PLACEHOLDER = "_"

CSHARP_KEYWORDS: FrozenSet[str] = frozenset({
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch", "char",
    "checked", "class", "const", "continue", "decimal", "default", "delegate",
    "do", "double", "else", "enum", "event", "explicit", "extern", "false",
    "finally", "fixed", "float", "for", "foreach", "goto", "if", "implicit",
    "in", "int", "interface", "internal", "is", "lock", "long", "namespace",
    "new", "null", "object", "operator", "out", "override", "params", "private",
    "protected", "public", "readonly", "ref", "return", "sbyte", "sealed",
    "short", "sizeof", "stackalloc", "static", "string", "struct", "switch",
    "this", "throw", "true", "try", "typeof", "uint", "ulong", "unchecked",
    "unsafe", "ushort", "using", "virtual", "void", "volatile", "while",
})

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def is_csharp_keyword(name: str) -> bool:
    """Keyword predicate for the C# reserved keyword set."""
    return name in CSHARP_KEYWORDS


def build_identifier(name: str, is_keyword: KeywordPredicate = is_csharp_keyword) -> str:
    """
    Convert a directory name or file stem into an identifier.

    Letters and digits are kept, underscores are kept verbatim, any other
    character is dropped and upper-cases the next kept character (unless
    nothing was emitted yet or the output already ends with '_').
    A leading digit gets an underscore prefix, keywords get the escape
    marker and the first character is upper-cased. An empty result
    becomes a single underscore.

    Args:
        name: Raw path segment.
        is_keyword: Predicate deciding which results need escaping.

    Returns:
        str: The sanitized identifier.
    """
    chars: List[str] = []
    capitalize_next = False

    for ch in name:
        if _is_identifier_char(ch):
            chars.append(_upper(ch) if capitalize_next else ch)
            capitalize_next = False
        elif ch == "_":
            chars.append("_")
            capitalize_next = False
        elif chars and chars[-1] != "_":
            capitalize_next = True

    result = "".join(chars)

    if result and result[0].isdecimal():
        result = "_" + result

    if is_keyword(result):
        result = ESCAPE_MARKER + result

    if result:
        result = _upper(result[0]) + result[1:]

    return result or PLACEHOLDER


def build_file_identifier(file_path: str, is_keyword: KeywordPredicate = is_csharp_keyword) -> str:
    """
    Build the accessor name of a file: sanitized stem + '_' + extension.

    The extension is lower-cased and reduced to identifier characters, so
    'data.json' and 'data.csv' stay distinct as 'Data_json' / 'Data_csv'.

    Args:
        file_path: Relative path or bare file name.
        is_keyword: Predicate deciding which stems need escaping.

    Returns:
        str: The file accessor identifier.
    """
    stem, extension = split_extension(split_path_segments(file_path)[-1])
    identifier = build_identifier(stem, is_keyword)

    suffix = extension_suffix(extension)
    if suffix:
        identifier += "_" + suffix

    return identifier


def split_extension(file_name: str) -> Tuple[str, str]:
    """
    Split a file name into stem and extension at the last dot.

    A trailing dot yields no extension and a leading-dot name such as
    '.gitignore' has an empty stem.

    Returns:
        Tuple[str, str]: (stem, extension including its dot or '').
    """
    index = file_name.rfind(".")
    if index == -1:
        return file_name, ""
    if index == len(file_name) - 1:
        return file_name[:index], ""
    return file_name[:index], file_name[index:]


def extension_suffix(extension: str) -> str:
    """Lower-cased extension without its dot, identifier characters only."""
    kept = [
        _lower(ch) for ch in extension.lstrip(".")
        if _is_identifier_char(ch) or ch == "_"
    ]
    return "".join(kept)

# -----------------------------------------------------------------------------
# COLLISION DETECTION
# -----------------------------------------------------------------------------

class NameScope:
    """
    Immutable, case-insensitive set of identifiers in one scope.

    A candidate collides with the scope when it equals any member
    ignoring case.
    """

    def __init__(self, names: Iterable[str]):
        self._names: FrozenSet[str] = frozenset(n.casefold() for n in names)

    def collides(self, candidate: str) -> bool:
        return candidate.casefold() in self._names

    def __contains__(self, candidate: object) -> bool:
        return isinstance(candidate, str) and self.collides(candidate)

    def __len__(self) -> int:
        return len(self._names)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _is_identifier_char(ch: str) -> bool:
    """Letters of any script and decimal digits."""
    return ch.isalpha() or ch.isdecimal()


def _upper(ch: str) -> str:
    # Keep one character; 'ß'.upper() would expand to 'SS'
    upper = ch.upper()
    return upper if len(upper) == 1 else ch


def _lower(ch: str) -> str:
    lower = ch.lower()
    return lower if len(lower) == 1 else ch
