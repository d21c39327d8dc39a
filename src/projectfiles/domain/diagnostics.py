from __future__ import annotations

"""
Diagnostic Descriptors and Instances.

Diagnostics are informational artifacts attached to a generation pass.
Each one pairs an immutable descriptor (id, title, message template,
severity) with the arguments used to format its message.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"

CATEGORY = "ProjectFiles"

# -----------------------------------------------------------------------------
# DESCRIPTORS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class DiagnosticDescriptor:
    """
    Static description of one kind of diagnostic.

    Attributes:
        id: Stable identifier (e.g. PROJFILES001).
        title: Short human readable summary.
        message_format: str.format template filled with the diagnostic args.
        severity: 'error' or 'warning'.
        category: Grouping label shown by hosts.
    """
    id: str
    title: str
    message_format: str
    severity: str = SEVERITY_ERROR
    category: str = CATEGORY


RESERVED_FILE_NAME_CONFLICT = DiagnosticDescriptor(
    id="PROJFILES001",
    title="File name conflicts with reserved property",
    message_format=(
        "File '{0}' would generate property name '{1}' that conflicts with reserved "
        "MSBuild property. Rename the file or exclude it from CopyToOutputDirectory."
    ),
)

RESERVED_DIRECTORY_NAME_CONFLICT = DiagnosticDescriptor(
    id="PROJFILES002",
    title="Directory name conflicts with reserved property",
    message_format=(
        "Directory '{0}' would generate property name '{1}' that conflicts with reserved "
        "MSBuild property. Rename the directory or exclude its files from CopyToOutputDirectory."
    ),
)

LANGUAGE_VERSION_TOO_LOW = DiagnosticDescriptor(
    id="PROJFILES003",
    title="C# 14 or later is required",
    message_format="This generator requires C# 14 or later to run",
)

# -----------------------------------------------------------------------------
# INSTANCES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class Diagnostic:
    """A reported diagnostic: descriptor plus message arguments."""
    descriptor: DiagnosticDescriptor
    args: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def id(self) -> str:
        return self.descriptor.id

    @property
    def severity(self) -> str:
        return self.descriptor.severity

    @property
    def is_error(self) -> bool:
        return self.descriptor.severity == SEVERITY_ERROR

    @property
    def message(self) -> str:
        return self.descriptor.message_format.format(*self.args)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON reports."""
        return {
            "id": self.id,
            "severity": self.severity,
            "title": self.descriptor.title,
            "message": self.message,
            "args": list(self.args),
        }

    def __str__(self) -> str:
        return f"{self.severity} {self.id}: {self.message}"


def create_diagnostic(descriptor: DiagnosticDescriptor, *args: str) -> Diagnostic:
    """Instantiate a diagnostic for the given descriptor."""
    return Diagnostic(descriptor=descriptor, args=tuple(args))
