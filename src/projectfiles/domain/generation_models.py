from __future__ import annotations

"""
Generation Domain Data Models.

Defines the project context consumed by a generation pass, the naming
conflict record produced by the conflict resolver and the result object
returned to the interface layer, together with its factory functions.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from projectfiles.domain.constants import (
    BUILD_PROPERTY_IMPLICIT_USINGS,
    BUILD_PROPERTY_LANG_VERSION,
    BUILD_PROPERTY_PROJECT_FILE,
    BUILD_PROPERTY_SOLUTION_FILE,
    OPEN_ENDED_LANGUAGE_VERSIONS,
    UNDEFINED_PROPERTY_VALUE,
)
from projectfiles.domain.diagnostics import Diagnostic

_VERSION_RX = re.compile(r"^\s*(\d+)(?:\.\d+)?\s*$")

# -----------------------------------------------------------------------------
# PROJECT CONTEXT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectContext:
    """
    Host-supplied settings for one generation pass.

    Attributes:
        project_file: Absolute path of the project file, if known.
        solution_file: Absolute path of the solution file, if known.
        implicit_usings: Emit a global using for the generated namespace.
        language_version: Raw language version ('13', 'latest', ...).
                          None means the host default.
    """
    project_file: Optional[str] = None
    solution_file: Optional[str] = None
    implicit_usings: bool = False
    language_version: Optional[str] = None

    @classmethod
    def from_build_options(cls, options: Mapping[str, str]) -> "ProjectContext":
        """
        Build a context from analyzer-config style host options.

        Args:
            options: Mapping of 'build_property.*' keys to raw values.

        Returns:
            ProjectContext: Context with blank or undefined values unset.
        """
        return cls(
            project_file=read_build_property(options, BUILD_PROPERTY_PROJECT_FILE),
            solution_file=read_build_property(options, BUILD_PROPERTY_SOLUTION_FILE),
            implicit_usings=parse_implicit_usings(
                read_build_property(options, BUILD_PROPERTY_IMPLICIT_USINGS)
            ),
            language_version=read_build_property(options, BUILD_PROPERTY_LANG_VERSION),
        )

    @property
    def has_default_properties(self) -> bool:
        """True when the project or solution file was supplied by the host."""
        return bool((self.project_file or "").strip()) or bool((self.solution_file or "").strip())

    def meets_language_version(self, minimum: int) -> bool:
        """
        Check the language version gate.

        Unset and symbolic versions (latest, preview, ...) always pass;
        unparseable values are treated as failing.
        """
        major = language_major_version(self.language_version)
        if major is None:
            return True
        return major >= minimum


def read_build_property(options: Mapping[str, str], key: str) -> Optional[str]:
    """Return a host option, or None when missing, blank or undefined."""
    value = options.get(key)
    if value is None:
        return None
    if not value.strip() or value == UNDEFINED_PROPERTY_VALUE:
        return None
    return value


def parse_implicit_usings(value: Optional[str]) -> bool:
    """ImplicitUsings is on for 'enable' or 'true' (case-insensitive)."""
    if not value:
        return False
    return value.strip().lower() in ("enable", "true")


def language_major_version(value: Optional[str]) -> Optional[int]:
    """
    Resolve a language version string to its major number.

    Returns:
        Optional[int]: None for unset or open-ended versions, -1 when the
                       value cannot be understood.
    """
    if value is None:
        return None
    text = value.strip().lower()
    if not text or text in OPEN_ENDED_LANGUAGE_VERSIONS:
        return None
    match = _VERSION_RX.match(text)
    if not match:
        return -1
    return int(match.group(1))

# -----------------------------------------------------------------------------
# CONFLICTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Conflict:
    """
    A top-level name colliding with a reserved accessor.

    Attributes:
        file_path: The offending relative path.
        identifier: Identifier generated for its first segment.
        is_directory: True when the segment is a directory, not a root file.
    """
    file_path: str
    identifier: str
    is_directory: bool

# -----------------------------------------------------------------------------
# GENERATION RESULT
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class GenerationResult:
    """
    Outcome of one generation pass.

    Attributes:
        ok: False when the pass was aborted (no sources produced).
        error: Reason for the abort.
        sources: Generated hint name -> source text, in emission order.
        diagnostics: Every diagnostic reported during the pass.
        files: Project-relative paths that made it into the tree.
        output_dir: Directory the sources were written to ('' if not written).
        written_files: Absolute paths of the persisted sources.
        summary: Execution statistics.
    """
    ok: bool
    error: str
    sources: Dict[str, str] = field(default_factory=dict)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    files: List[str] = field(default_factory=list)
    output_dir: str = ""
    written_files: List[str] = field(default_factory=list)
    summary: Dict[str, Any] = field(default_factory=dict)

    @property
    def has_errors(self) -> bool:
        return any(d.is_error for d in self.diagnostics)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for the CLI JSON report (source bodies omitted)."""
        return {
            "ok": self.ok,
            "error": self.error,
            "sources": list(self.sources.keys()),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "files": list(self.files),
            "output_dir": self.output_dir,
            "written_files": list(self.written_files),
            "summary": dict(self.summary),
        }

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        diagnostics: Optional[List[Diagnostic]] = None,
        summary_extra: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Create an aborted generation result carrying no sources.

    Args:
        error: Reason for the abort.
        diagnostics: Diagnostics reported before the abort.
        summary_extra: Additional metadata for the summary payload.

    Returns:
        GenerationResult: An immutable error result.
    """
    return GenerationResult(
        ok=False,
        error=error,
        diagnostics=list(diagnostics or []),
        summary=summary_extra or {},
    )


def create_success_result(
        sources: Dict[str, str],
        diagnostics: List[Diagnostic],
        files: List[str],
        summary_extra: Optional[Dict[str, Any]] = None,
) -> GenerationResult:
    """
    Create a completed generation result.

    Args:
        sources: Rendered sources keyed by hint name.
        diagnostics: Conflict diagnostics (generation continued past them).
        files: Paths rendered into the accessor tree.
        summary_extra: Execution statistics.

    Returns:
        GenerationResult: An immutable success result.
    """
    return GenerationResult(
        ok=True,
        error="",
        sources=dict(sources),
        diagnostics=list(diagnostics),
        files=list(files),
        summary=summary_extra or {},
    )
