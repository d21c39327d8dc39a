from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides understood by the generation pipeline.
"""

import argparse
from typing import Any, Dict

from projectfiles.domain.constants import APP_NAME, APP_VERSION, DEFAULT_CONFIG_FILE_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the projectfiles CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Generate strongly-typed C# accessors for the files a project "
            "copies to its output directory."
        ),
    )

    # --- Inputs ---
    p.add_argument(
        "-p", "--project",
        dest="project_file",
        default=None,
        help="Project file (.csproj) to read CopyToOutputDirectory items from.",
    )
    p.add_argument(
        "--solution",
        dest="solution_file",
        default=None,
        help="Solution file to expose. Discovered above the project when omitted.",
    )
    p.add_argument(
        "-o", "--output",
        dest="output_dir",
        default=None,
        help="Directory for the generated sources (default: obj/ProjectFiles beside the project).",
    )

    p.add_argument(
        "--build-options",
        dest="build_options_file",
        default=None,
        help=(
            "Analyzer config generated by MSBuild (*.GeneratedMSBuildEditorConfig.editorconfig). "
            "Its build_property values stand in for the project settings."
        ),
    )

    # --- Host settings ---
    usings = p.add_mutually_exclusive_group()
    usings.add_argument(
        "--implicit-usings",
        dest="implicit_usings",
        action="store_const",
        const=True,
        default=None,
        help="Emit a global using for the generated namespace.",
    )
    usings.add_argument(
        "--no-implicit-usings",
        dest="implicit_usings",
        action="store_const",
        const=False,
        help="Never emit the global using, whatever the project says.",
    )
    p.add_argument(
        "--lang-version",
        dest="language_version",
        default=None,
        help="C# language version to assume (overrides the project's LangVersion).",
    )
    p.add_argument(
        "--no-paths",
        action="store_true",
        help="Skip the GeneratedPaths source.",
    )

    # --- Configuration ---
    p.add_argument(
        "--config",
        dest="config_file",
        default=None,
        help=f"JSON configuration file (default: {DEFAULT_CONFIG_FILE_NAME} beside the project).",
    )
    p.add_argument(
        "--use-defaults",
        action="store_true",
        help="Ignore any configuration file.",
    )
    p.add_argument(
        "--dump-config",
        action="store_true",
        help="Print the effective configuration and exit.",
    )
    p.add_argument(
        "--save-config",
        action="store_true",
        help=(
            f"Write the effective configuration to --config, or to {DEFAULT_CONFIG_FILE_NAME} "
            "beside the project, and exit."
        ),
    )

    # --- Execution and output ---
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Generate in memory without writing anything.",
    )
    p.add_argument(
        "--print",
        dest="print_output",
        action="store_true",
        help="Print the generated sources to stdout.",
    )
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print the result as JSON.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {APP_VERSION}",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Options that were not given map to None and leave the base
    configuration untouched.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {
        "project_file": args.project_file,
        "solution_file": args.solution_file,
        "output_dir": args.output_dir,
        "build_options_file": args.build_options_file,
        "implicit_usings": args.implicit_usings,
        "language_version": args.language_version,
        "log_file": args.log_file,
    }

    if args.no_paths:
        overrides["generate_paths"] = False
    if args.print_output:
        overrides["print_output"] = True

    return overrides
