from __future__ import annotations

"""
Core generation pipeline.

Coordinates one generation pass:
1. Validates configuration, reads optional host build options and
   resolves paths.
2. Reads the project manifest and expands its CopyToOutputDirectory items.
3. Applies the language version gate.
4. Removes paths that collide with the reserved accessors.
5. Builds the file tree and renders every source in memory.
6. Writes the sources to the output directory (unless dry-run). A pass
   refused by the language gate clears earlier generated sources.
"""

import dataclasses
import logging
import os
import threading
from typing import Any, Dict, List, Optional, Sequence

from projectfiles.core.analysis.conflicts import conflict_diagnostic, resolve_conflicts
from projectfiles.core.analysis.identifiers import KeywordPredicate, is_csharp_keyword
from projectfiles.core.analysis.tree_builder import build_file_tree, to_segment_tree
from projectfiles.core.discovery.build_options import read_build_options
from projectfiles.core.discovery.glob_expander import is_project_relative
from projectfiles.core.discovery.manifest import ProjectManifest, read_manifest, select_project_files
from projectfiles.core.discovery.solution_finder import find_solution
from projectfiles.core.emit.default_properties import SolutionFinder, default_property_lines
from projectfiles.core.emit.nested_scope import render_nested_scope
from projectfiles.core.emit.path_segments import render_path_segments
from projectfiles.core.emit.templates import DEFAULT_TEMPLATES, GeneratedTemplates
from projectfiles.core.pipeline.validator import validate_config
from projectfiles.core.pipeline.writer import remove_generated_sources, write_sources
from projectfiles.domain.constants import (
    GLOBAL_USINGS_SOURCE_NAME,
    GLOBAL_USINGS_TEXT,
    IMPLICIT_USINGS_PROPERTY,
    LANG_VERSION_PROPERTY,
    MIN_LANGUAGE_VERSION,
    NESTED_SOURCE_NAME,
    PATHS_SOURCE_NAME,
    PROJECT_DIRECTORY_SOURCE_NAME,
    PROJECT_FILE_SOURCE_NAME,
)
from projectfiles.domain.diagnostics import LANGUAGE_VERSION_TOO_LOW, Diagnostic, create_diagnostic
from projectfiles.domain.generation_models import (
    GenerationResult,
    ProjectContext,
    create_error_result,
    create_success_result,
    parse_implicit_usings,
)
from projectfiles.infra.fs import get_default_output_dir, normalize_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def generate_sources(
        files: Sequence[str],
        context: ProjectContext,
        *,
        generate_paths: bool = True,
        templates: GeneratedTemplates = DEFAULT_TEMPLATES,
        solution_finder: SolutionFinder = find_solution,
        is_keyword: KeywordPredicate = is_csharp_keyword,
        cancellation_event: Optional[threading.Event] = None,
) -> GenerationResult:
    """
    Render every generated source for a set of project-relative paths.

    Nothing touches the filesystem here apart from the solution lookup.

    Args:
        files: Project-relative paths selected from the manifest.
        context: Host settings for the pass.
        generate_paths: Also emit the GeneratedPaths source.
        templates: Support type bodies emitted verbatim.
        solution_finder: Collaborator locating the solution of a project.
        is_keyword: Keyword predicate for the identifier sanitizer.
        cancellation_event: Optional event to abort the pass.

    Returns:
        GenerationResult: Sources in emission order plus diagnostics.

    Raises:
        GenerationCancelled: If the event is set during the pass.
    """
    # -------------------------------------------------------------------------
    # 1) Language Gate
    # -------------------------------------------------------------------------
    if not context.meets_language_version(MIN_LANGUAGE_VERSION):
        diagnostic = create_diagnostic(LANGUAGE_VERSION_TOO_LOW)
        logger.error(f"{diagnostic} (LangVersion={context.language_version})")
        return create_error_result(
            diagnostic.message,
            [diagnostic],
            summary_extra={"language_version": context.language_version},
        )

    # -------------------------------------------------------------------------
    # 2) Input Filtering & Conflicts
    # -------------------------------------------------------------------------
    candidates: List[str] = []
    for file_path in files:
        if is_project_relative(file_path):
            candidates.append(file_path)
        else:
            logger.warning(f"Ignoring path outside the project: {file_path}")

    conflicts, accepted = resolve_conflicts(candidates, is_keyword=is_keyword)
    diagnostics: List[Diagnostic] = [conflict_diagnostic(c) for c in conflicts]
    accepted = sorted(accepted)

    # -------------------------------------------------------------------------
    # 3) Tree & Emission
    # -------------------------------------------------------------------------
    tree = build_file_tree(accepted, cancellation_event)
    defaults = default_property_lines(context, solution_finder)

    sources: Dict[str, str] = {
        NESTED_SOURCE_NAME: render_nested_scope(
            tree,
            defaults,
            context.has_default_properties,
            is_keyword,
            cancellation_event,
        ),
        PROJECT_DIRECTORY_SOURCE_NAME: templates.project_directory,
        PROJECT_FILE_SOURCE_NAME: templates.project_file,
    }

    if generate_paths:
        segment_root = to_segment_tree(tree, cancellation_event)
        sources[PATHS_SOURCE_NAME] = render_path_segments(segment_root, is_keyword, cancellation_event)

    if context.implicit_usings:
        sources[GLOBAL_USINGS_SOURCE_NAME] = GLOBAL_USINGS_TEXT

    summary = {
        "input_files": len(files),
        "accepted_files": len(accepted),
        "conflicts": len(conflicts),
        "sources": len(sources),
    }
    logger.info(
        f"Generated {len(sources)} source(s) for {len(accepted)} file(s) "
        f"({len(conflicts)} conflict(s))."
    )
    return create_success_result(sources, diagnostics, accepted, summary)


def run_generation(
        config: Optional[Dict[str, Any]],
        *,
        dry_run: bool = False,
        cancellation_event: Optional[threading.Event] = None,
) -> GenerationResult:
    """
    Execute a full pass for one project manifest.

    Args:
        config: The configuration dictionary (raw or partial).
        dry_run: If True, render everything but write nothing.
        cancellation_event: Optional event to abort the pass.

    Returns:
        GenerationResult: Outcome including the output directory and the
                          written files.

    Raises:
        ManifestError: If the project file cannot be read or parsed.
        BuildOptionsError: If the build options file cannot be read.
        GenerationCancelled: If the event is set during the pass.
    """
    logger.info("Generation started.")

    # -------------------------------------------------------------------------
    # 1) Config & Path Normalization
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    host: Optional[ProjectContext] = None
    if cfg["build_options_file"]:
        options_file = normalize_path(cfg["build_options_file"], os.getcwd())
        host = ProjectContext.from_build_options(read_build_options(options_file))
        logger.info(f"Using host build options: {options_file}")

    raw_project_file = cfg["project_file"] or (host.project_file if host else None)
    if not raw_project_file:
        msg = "No project file given."
        logger.error(msg)
        return create_error_result(msg)

    project_file = normalize_path(raw_project_file, os.getcwd())
    output_dir = normalize_path(cfg["output_dir"], get_default_output_dir(project_file))

    # -------------------------------------------------------------------------
    # 2) Manifest & Selection
    # -------------------------------------------------------------------------
    manifest = read_manifest(project_file)
    files = select_project_files(manifest, cancellation_event)
    logger.info(f"Manifest selected {len(files)} file(s) from {len(manifest.items)} item(s).")

    context = _build_context(cfg, project_file, manifest, host)

    # -------------------------------------------------------------------------
    # 3) Generation
    # -------------------------------------------------------------------------
    result = generate_sources(
        files,
        context,
        generate_paths=cfg["generate_paths"],
        cancellation_event=cancellation_event,
    )

    summary = dict(result.summary)
    summary.update({
        "project_file": project_file,
        "output_dir": output_dir,
        "dry_run": dry_run,
    })

    if not result.ok:
        # Sources from an earlier pass would keep compiling otherwise
        if not dry_run:
            _clear_previous_output(output_dir)
        return dataclasses.replace(result, output_dir=output_dir, summary=summary)

    # -------------------------------------------------------------------------
    # 4) Deployment
    # -------------------------------------------------------------------------
    if dry_run:
        logger.info("Dry run: skipping write of generated sources.")
        return dataclasses.replace(result, output_dir=output_dir, summary=summary)

    try:
        written = write_sources(output_dir, result.sources)
    except OSError as e:
        msg = f"Failed to write generated sources to {output_dir}: {e}"
        logger.critical(msg)
        return create_error_result(msg, result.diagnostics, summary)

    logger.info("Generation completed successfully.")
    return dataclasses.replace(result, output_dir=output_dir, written_files=written, summary=summary)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _build_context(
        cfg: Dict[str, Any],
        project_file: str,
        manifest: ProjectManifest,
        host: Optional[ProjectContext],
) -> ProjectContext:
    """
    Resolve the host settings of the pass.

    Explicit configuration wins. Host build options, when given, stand in
    for the manifest's PropertyGroup values, since MSBuild already
    evaluated them (imports and conditions included).
    """
    solution_file = cfg["solution_file"] or (host.solution_file if host else None)
    if solution_file:
        solution_file = normalize_path(solution_file, os.getcwd())

    if host is not None:
        base_implicit_usings = host.implicit_usings
        base_language_version = host.language_version
    else:
        base_implicit_usings = parse_implicit_usings(manifest.get_property(IMPLICIT_USINGS_PROPERTY))
        base_language_version = manifest.get_property(LANG_VERSION_PROPERTY)

    implicit_usings = cfg["implicit_usings"]
    if implicit_usings is None:
        implicit_usings = base_implicit_usings

    return ProjectContext(
        project_file=project_file,
        solution_file=solution_file or None,
        implicit_usings=implicit_usings,
        language_version=cfg["language_version"] or base_language_version,
    )


def _clear_previous_output(output_dir: str) -> None:
    try:
        removed = remove_generated_sources(output_dir)
    except OSError as e:
        logger.error(f"Failed to remove previous sources from {output_dir}: {e}")
        return
    if removed:
        logger.warning(f"Removed {len(removed)} previously generated source(s) from {output_dir}.")
