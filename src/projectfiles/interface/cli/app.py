from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, resolution of the
configuration hierarchy (defaults, project-local or explicit JSON file,
command-line overrides), generation and result rendering.

Exit codes: 0 success, 1 error diagnostics or pipeline failure, 2 missing
or unreadable input, 130 interrupted.
"""

import json
import os
import sys
from typing import Any, Dict, List, Optional

from projectfiles.core.pipeline.engine import run_generation
from projectfiles.core.pipeline.validator import validate_config
from projectfiles.domain.config import find_config_file, get_default_config, load_config, save_config
from projectfiles.domain.constants import DEFAULT_CONFIG_FILE_NAME
from projectfiles.domain.errors import BuildOptionsError, GenerationCancelled, ManifestError
from projectfiles.domain.generation_models import GenerationResult
from projectfiles.infra.logging import LoggingConfig, configure_logging, get_logger, shutdown_logging
from projectfiles.interface.cli import args as cli_args

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_BAD_INPUT = 2
EXIT_INTERRUPTED = 130

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(args.debug, args.log_file), force=True)

    try:
        return _run(args)
    finally:
        shutdown_logging()


def _run(args: Any) -> int:
    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    # 1. Resolve base configuration (defaults, explicit file or project-local file)
    if args.use_defaults:
        base_conf = get_default_config()
    elif args.config_file:
        if os.path.isfile(args.config_file):
            base_conf = load_config(args.config_file)
        elif args.save_config:
            base_conf = get_default_config()
        else:
            return _bad_input(f"Configuration file does not exist: {args.config_file}")
    else:
        base_conf = _load_project_local_config(args.project_file)

    # 2. Merge overrides and normalize
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if clean_conf["log_file"] and not args.log_file:
        configure_logging(LoggingConfig.for_cli(args.debug, clean_conf["log_file"]), force=True)

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        return _save_effective_config(clean_conf, args.config_file)

    # 3. Pre-flight input verification
    project_file = clean_conf["project_file"]
    options_file = clean_conf["build_options_file"]
    if options_file and not os.path.isfile(options_file):
        return _bad_input(f"Build options file does not exist: {options_file}")
    if not project_file and not options_file:
        return _bad_input("No project file given (use -p/--project or --build-options).")
    if project_file and not os.path.isfile(project_file):
        return _bad_input(f"Project file does not exist: {project_file}")

    # 4. Generation
    logger.info(f"Targeting project: {project_file or options_file}")
    try:
        result = run_generation(clean_conf, dry_run=bool(args.dry_run))
    except (ManifestError, BuildOptionsError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except (KeyboardInterrupt, GenerationCancelled):
        msg = "Generation interrupted."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Generation failed: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 5. Output rendering
    if args.json_output:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result)

    if clean_conf["print_output"]:
        _print_sources(result)

    return EXIT_OK if result.ok and not result.has_errors else EXIT_FAILURE


def _bad_input(msg: str) -> int:
    logger.error(msg)
    print(f"ERROR: {msg}", file=sys.stderr)
    return EXIT_BAD_INPUT

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _save_effective_config(config: Dict[str, Any], config_file: Optional[str]) -> int:
    """
    Write the resolved configuration for later runs.

    The destination is the explicit --config file, otherwise the
    project-local file beside the project.
    """
    target = config_file
    if not target:
        if not config["project_file"]:
            return _bad_input("--save-config needs --config or -p/--project.")
        project_dir = os.path.dirname(os.path.abspath(config["project_file"]))
        target = os.path.join(project_dir, DEFAULT_CONFIG_FILE_NAME)

    if not save_config(config, target):
        print(f"ERROR: Could not write configuration to {target}", file=sys.stderr)
        return EXIT_FAILURE

    print(f"Configuration saved to {target}")
    return EXIT_OK


def _load_project_local_config(project_file: Optional[str]) -> Dict[str, Any]:
    if not project_file:
        return get_default_config()
    project_dir = os.path.dirname(os.path.abspath(project_file))
    config_file = find_config_file(project_dir)
    if config_file is None:
        return get_default_config()
    logger.debug(f"Using project configuration: {config_file}")
    return load_config(config_file)


def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow-merge the override values that were actually given.

    Only known keys are merged.

    Args:
        base: The primary configuration dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged configuration state.
    """
    out = dict(base)
    for k in get_default_config():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: GenerationResult) -> None:
    """Print diagnostics and the list of produced sources."""
    for diagnostic in result.diagnostics:
        print(str(diagnostic), file=sys.stderr)

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    summary = result.summary
    print(f"Files: {summary.get('accepted_files', len(result.files))}")
    if summary.get("conflicts"):
        print(f"Excluded by conflicts: {summary['conflicts']}")

    if summary.get("dry_run"):
        print(f"Dry run: would write to {result.output_dir}")
        for name in result.sources:
            print(f"  - {name}")
        return

    print(f"Output directory: {result.output_dir}")
    for path in result.written_files:
        print(f"  - {path}")


def _print_sources(result: GenerationResult) -> None:
    for name, content in result.sources.items():
        print(f"// ---- {name} ----")
        sys.stdout.write(content)


if __name__ == "__main__":
    sys.exit(main())
