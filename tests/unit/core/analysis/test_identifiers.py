from __future__ import annotations

"""
Unit tests for the Identifier Sanitizer.

Covers the character scan (dropping, capitalization, underscores), the
post-processing rules (placeholder, digit prefix, keyword escape) and the
file accessor names built from stem and extension.
"""

import pytest

from projectfiles.core.analysis.identifiers import (
    NameScope,
    build_file_identifier,
    build_identifier,
    extension_suffix,
    is_csharp_keyword,
    split_extension,
)


@pytest.mark.parametrize("raw, expected", [
    ("config", "Config"),
    ("my-file", "MyFile"),
    ("hello world", "HelloWorld"),
    ("foo_bar", "Foo_bar"),
    ("a__-b", "A__b"),
    ("-leading", "Leading"),
    ("v1.2", "V12"),
    ("123abc", "_123abc"),
    ("", "_"),
    ("---", "_"),
    ("données", "Données"),
])
def test_build_identifier_scan_rules(raw: str, expected: str) -> None:
    """Verify that characters are dropped, kept and capitalized per the scan rules."""
    assert build_identifier(raw) == expected


def test_keywords_are_escaped() -> None:
    """A keyword keeps its case and gets the '@' marker."""
    assert build_identifier("class") == "@class"
    assert build_identifier("Class") == "Class"


def test_custom_keyword_predicate() -> None:
    """The keyword set is supplied by the caller."""
    assert build_identifier("Data", lambda name: name == "Data") == "@Data"


def test_capitalization_keeps_single_character() -> None:
    """'ß' has no single-character upper case and is kept as is."""
    assert build_identifier("a-ßx") == "Aßx"


def test_identifier_never_starts_with_digit_or_bare_keyword() -> None:
    """Verify that no sample yields a leading digit or an unescaped keyword."""
    samples = ["1", "9lives", "int", "namespace", "...", "2-for-1", "string.txt"]
    for sample in samples:
        result = build_identifier(sample)
        assert not result[0].isdigit()
        assert not is_csharp_keyword(result)


@pytest.mark.parametrize("path, expected", [
    ("data.json", "Data_json"),
    ("data.csv", "Data_csv"),
    ("Assets/logo.PNG", "Logo_png"),
    ("Assets\\logo.png", "Logo_png"),
    ("README", "README"),
    ("archive.tar.gz", "ArchiveTar_gz"),
    (".gitignore", "__gitignore"),
    ("trailing.", "Trailing"),
    ("class.txt", "@class_txt"),
])
def test_build_file_identifier(path: str, expected: str) -> None:
    """Verify that file accessors combine the stem with a lower-cased extension suffix."""
    assert build_file_identifier(path) == expected


def test_same_stem_different_extensions_are_distinct() -> None:
    """Verify that two extensions of one stem never share an accessor name."""
    assert build_file_identifier("data.json") != build_file_identifier("data.csv")


def test_split_extension_edge_cases() -> None:
    """Verify that the split happens at the last dot, including the dot-file and trailing-dot cases."""
    assert split_extension("a.b.c") == ("a.b", ".c")
    assert split_extension(".gitignore") == ("", ".gitignore")
    assert split_extension("name.") == ("name", "")
    assert split_extension("plain") == ("plain", "")


def test_extension_suffix_drops_invalid_characters() -> None:
    """Verify that the suffix is lower-cased and limited to identifier characters."""
    assert extension_suffix(".Tar-GZ") == "targz"
    assert extension_suffix("") == ""


def test_name_scope_is_case_insensitive() -> None:
    """Verify that NameScope membership ignores case."""
    scope = NameScope(["ProjectFile", "SolutionDirectory"])

    assert scope.collides("projectfile")
    assert "SOLUTIONDIRECTORY" in scope
    assert not scope.collides("ProjectFiles")
    assert len(scope) == 2
