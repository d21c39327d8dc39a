from __future__ import annotations

"""
Unit tests for CLI argument parsing and override mapping.
"""

import pytest

from projectfiles.interface.cli.args import args_to_overrides, build_parser


def _overrides(argv):
    return args_to_overrides(build_parser().parse_args(argv))


def test_defaults_map_to_none() -> None:
    """Verify that options not given map to None or are left out."""
    overrides = _overrides([])

    assert overrides["project_file"] is None
    assert overrides["implicit_usings"] is None
    assert overrides["build_options_file"] is None
    assert "generate_paths" not in overrides
    assert "print_output" not in overrides


def test_full_flag_mapping() -> None:
    """Verify the complete mapping of every configuration flag."""
    overrides = _overrides([
        "-p", "App.csproj",
        "-o", "out",
        "--solution", "All.sln",
        "--implicit-usings",
        "--lang-version", "preview",
        "--no-paths",
        "--print",
        "--log-file", "gen.log",
        "--build-options", "obj/App.GeneratedMSBuildEditorConfig.editorconfig",
    ])

    assert overrides == {
        "project_file": "App.csproj",
        "solution_file": "All.sln",
        "output_dir": "out",
        "build_options_file": "obj/App.GeneratedMSBuildEditorConfig.editorconfig",
        "implicit_usings": True,
        "language_version": "preview",
        "log_file": "gen.log",
        "generate_paths": False,
        "print_output": True,
    }


def test_no_implicit_usings() -> None:
    """Verify that --no-implicit-usings maps to False."""
    assert _overrides(["--no-implicit-usings"])["implicit_usings"] is False


def test_implicit_usings_flags_are_exclusive() -> None:
    """Verify that both implicit-usings flags cannot be combined."""
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--implicit-usings", "--no-implicit-usings"])


def test_execution_flags() -> None:
    """Verify that execution flags are parsed as booleans."""
    args = build_parser().parse_args(["--dry-run", "--json", "--debug", "--use-defaults", "--dump-config"])

    assert args.dry_run and args.json_output and args.debug
    assert args.use_defaults and args.dump_config


def test_save_config_flag_is_not_an_override() -> None:
    """Verify that --save-config is parsed as an action and never leaks into the configuration."""
    args = build_parser().parse_args(["--save-config", "--config", "custom.json"])

    assert args.save_config is True
    assert args.config_file == "custom.json"
    assert "save_config" not in args_to_overrides(args)
