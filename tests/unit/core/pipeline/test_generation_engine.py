from __future__ import annotations

"""
Unit tests for the in-memory generation engine (generate_sources).

The solution finder is stubbed so no test depends on the layout above
tmp_path.
"""

import os
import threading

import pytest

from projectfiles.core.emit.templates import DEFAULT_TEMPLATES, GeneratedTemplates
from projectfiles.core.pipeline.engine import generate_sources
from projectfiles.domain.constants import (
    GLOBAL_USINGS_SOURCE_NAME,
    GLOBAL_USINGS_TEXT,
    NESTED_SOURCE_NAME,
    PATHS_SOURCE_NAME,
    PROJECT_DIRECTORY_SOURCE_NAME,
    PROJECT_FILE_SOURCE_NAME,
)
from projectfiles.domain.errors import GenerationCancelled
from projectfiles.domain.generation_models import ProjectContext


def _no_solution(_: str) -> None:
    return None


def _generate(files, context=None, **kwargs):
    kwargs.setdefault("solution_finder", _no_solution)
    return generate_sources(files, context or ProjectContext(), **kwargs)


def test_sources_are_emitted_in_fixed_order() -> None:
    """Verify the fixed emission order of every source."""
    result = _generate(["a.txt"], ProjectContext(implicit_usings=True))

    assert result.ok
    assert list(result.sources) == [
        NESTED_SOURCE_NAME,
        PROJECT_DIRECTORY_SOURCE_NAME,
        PROJECT_FILE_SOURCE_NAME,
        PATHS_SOURCE_NAME,
        GLOBAL_USINGS_SOURCE_NAME,
    ]
    assert result.sources[GLOBAL_USINGS_SOURCE_NAME] == GLOBAL_USINGS_TEXT
    assert result.sources[PROJECT_FILE_SOURCE_NAME] == DEFAULT_TEMPLATES.project_file


def test_optional_sources_can_be_disabled() -> None:
    """Verify that GeneratedPaths and the global using are optional."""
    result = _generate(["a.txt"], generate_paths=False)

    assert PATHS_SOURCE_NAME not in result.sources
    assert GLOBAL_USINGS_SOURCE_NAME not in result.sources


def test_templates_are_injected() -> None:
    """Verify that custom support type templates are emitted verbatim."""
    templates = GeneratedTemplates(project_directory="// dir\n", project_file="// file\n")
    result = _generate([], templates=templates)

    assert result.sources[PROJECT_DIRECTORY_SOURCE_NAME] == "// dir\n"
    assert result.sources[PROJECT_FILE_SOURCE_NAME] == "// file\n"


def test_generation_is_deterministic() -> None:
    """Verify that input order does not change the output."""
    files = ["Data/b.json", "Data/a.json", "Assets/x.png", "top.txt"]

    first = _generate(files)
    second = _generate(list(reversed(files)))

    assert first.sources == second.sources


def test_empty_input_produces_valid_output() -> None:
    """Verify that no files still produce every mandatory source."""
    result = _generate([])

    assert result.ok
    assert result.files == []
    assert result.diagnostics == []
    assert "static partial class ProjectFiles" in result.sources[NESTED_SOURCE_NAME]
    assert "public static class GeneratedPaths" in result.sources[PATHS_SOURCE_NAME]


@pytest.mark.parametrize("version", ["13", "7.3", "garbage"])
def test_language_gate_blocks_old_versions(version: str) -> None:
    """Verify that versions below the minimum produce only PROJFILES003."""
    result = _generate(["a.txt"], ProjectContext(language_version=version))

    assert not result.ok
    assert result.sources == {}
    assert [d.id for d in result.diagnostics] == ["PROJFILES003"]


@pytest.mark.parametrize("version", [None, "14", "14.0", "15", "latest", "Preview", "default"])
def test_language_gate_accepts_new_versions(version) -> None:
    """Verify that current, symbolic and missing versions pass the gate."""
    assert _generate([], ProjectContext(language_version=version)).ok


def test_reserved_directory_conflict_example() -> None:
    """Verify that a reserved directory name is reported and excluded."""
    result = _generate(["ProjectFile/readme.txt", "Data/a.txt"])

    assert result.ok
    assert result.has_errors
    assert [d.id for d in result.diagnostics] == ["PROJFILES002"]
    assert result.files == ["Data/a.txt"]
    nested = result.sources[NESTED_SOURCE_NAME]
    assert "ProjectFileType" not in nested
    assert "readme.txt" not in nested


def test_paths_outside_project_are_dropped() -> None:
    """Verify that absolute and parent-relative paths are dropped."""
    result = _generate(["../secret.txt", "/abs/x.txt", "ok.txt"])

    assert result.files == ["ok.txt"]
    assert result.summary["input_files"] == 3
    assert result.summary["accepted_files"] == 1


def test_recursive_glob_example_produces_two_containers() -> None:
    """Verify that two nested directories become two containers."""
    files = [os.path.join("Assets", "Images", "logo.png"), os.path.join("Assets", "Data", "users.csv")]
    nested = _generate(files).sources[NESTED_SOURCE_NAME]

    assert "public ImagesType Images { get; } = new();" in nested
    assert "public DataType Data { get; } = new();" in nested
    assert 'public ProjectFile Logo_png { get; } = new("Assets/Images/logo.png");' in nested
    assert 'public ProjectFile Users_csv { get; } = new("Assets/Data/users.csv");' in nested


def test_default_properties_use_context(tmp_path) -> None:
    """Verify that the project path in the context yields default properties."""
    project = str(tmp_path / "App.csproj")
    result = _generate(["a.txt"], ProjectContext(project_file=project))

    nested = result.sources[NESTED_SOURCE_NAME]
    assert "public static ProjectFile ProjectFile { get; }" in nested
    assert "SolutionFile" not in nested


def test_cancellation_propagates() -> None:
    """Verify that a set cancellation event aborts generation."""
    event = threading.Event()
    event.set()

    with pytest.raises(GenerationCancelled):
        _generate(["Data/a.txt"], cancellation_event=event)
