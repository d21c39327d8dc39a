from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to the fixed names the generator emits or
protects: generated namespaces, source hint names, reserved top-level
accessors, copy policies selected from the manifest and the minimum
language version required by the generated code.
"""

import os
from typing import FrozenSet, Tuple

APP_NAME = "projectfiles"
APP_VERSION = "1.0.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# GENERATED CODE LAYOUT
# -----------------------------------------------------------------------------

GENERATED_NAMESPACE = "ProjectFilesGenerator"
TYPES_NAMESPACE = "ProjectFilesGenerator.Types"

NESTED_SOURCE_NAME = "ProjectFiles.g.cs"
PROJECT_DIRECTORY_SOURCE_NAME = "ProjectFiles.ProjectDirectory.g.cs"
PROJECT_FILE_SOURCE_NAME = "ProjectFiles.ProjectFile.g.cs"
PATHS_SOURCE_NAME = "GeneratedPaths.g.cs"
GLOBAL_USINGS_SOURCE_NAME = "ProjectFiles.GlobalUsings.g.cs"

ALL_SOURCE_NAMES: Tuple[str, ...] = (
    NESTED_SOURCE_NAME,
    PROJECT_DIRECTORY_SOURCE_NAME,
    PROJECT_FILE_SOURCE_NAME,
    PATHS_SOURCE_NAME,
    GLOBAL_USINGS_SOURCE_NAME,
)

GLOBAL_USINGS_TEXT = f"global using {GENERATED_NAMESPACE};\n"

# -----------------------------------------------------------------------------
# RESERVED ACCESSORS
# -----------------------------------------------------------------------------

PROJECT_PREFIX = "Project"
SOLUTION_PREFIX = "Solution"

# Produced by the default-property injector; top-level names must not collide
RESERVED_NAMES: Tuple[str, ...] = (
    "ProjectDirectory",
    "ProjectFile",
    "SolutionDirectory",
    "SolutionFile",
)

# -----------------------------------------------------------------------------
# MANIFEST AND HOST SETTINGS
# -----------------------------------------------------------------------------

COPY_POLICY_ELEMENT = "CopyToOutputDirectory"
PRESERVE_COPY_POLICIES: FrozenSet[str] = frozenset({"PreserveNewest", "Always"})

ITEM_GROUP_ELEMENT = "ItemGroup"
PROPERTY_GROUP_ELEMENT = "PropertyGroup"
LANG_VERSION_PROPERTY = "LangVersion"
IMPLICIT_USINGS_PROPERTY = "ImplicitUsings"

# Analyzer-config style keys supplied by a compiler host
BUILD_PROPERTY_PROJECT_FILE = "build_property.MSBuildProjectFullPath"
BUILD_PROPERTY_SOLUTION_FILE = "build_property.SolutionPath"
BUILD_PROPERTY_IMPLICIT_USINGS = "build_property.ImplicitUsings"
BUILD_PROPERTY_LANG_VERSION = "build_property.LangVersion"
UNDEFINED_PROPERTY_VALUE = "*Undefined*"

MIN_LANGUAGE_VERSION = 14

# Symbolic versions that always resolve to the newest compiler
OPEN_ENDED_LANGUAGE_VERSIONS: FrozenSet[str] = frozenset({
    "default", "latest", "latestmajor", "preview",
})

# -----------------------------------------------------------------------------
# OUTPUT DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_OUTPUT_SUBDIR = os.path.join("obj", "ProjectFiles")
DEFAULT_CONFIG_FILE_NAME = "projectfiles.json"
SOLUTION_EXTENSIONS: Tuple[str, ...] = (".slnx", ".sln")
