from __future__ import annotations

"""
Domain Exceptions.

Failures that abort a generation pass. Naming conflicts and language
gating are reported as diagnostics instead and never raise.
"""


class ProjectFilesError(Exception):
    """Base class for every error raised by the generator."""


class ManifestError(ProjectFilesError):
    """The project manifest is missing, unreadable or not well-formed XML."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read manifest '{path}': {reason}")
        self.path = path
        self.reason = reason


class BuildOptionsError(ProjectFilesError):
    """The host build options file is missing or unreadable."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Cannot read build options '{path}': {reason}")
        self.path = path
        self.reason = reason


class GenerationCancelled(ProjectFilesError):
    """A cancellation signal was observed while walking or emitting the tree."""

    def __init__(self, stage: str = ""):
        message = "Generation cancelled"
        if stage:
            message += f" during {stage}"
        super().__init__(message)
        self.stage = stage
