from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script via subprocess and validates exit codes,
stdout/stderr content and the generated artifacts on disk.
"""

import json
import os
import subprocess
import sys
from pathlib import Path
from typing import Callable, List

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "projectfiles" / "main.py"


def run_cli(args: List[str], cwd: Path | None = None) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process with 'src' on PYTHONPATH.

    Args:
        args: Command line arguments (excluding interpreter and script).
        cwd: Optional working directory for the subprocess.

    Returns:
        subprocess.CompletedProcess: returncode, stdout and stderr.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")

    return subprocess.run(
        [sys.executable, str(ENTRY_POINT)] + args,
        cwd=cwd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
    )


@pytest.fixture
def sample_project(make_project: Callable[..., Path], copy_item: Callable[..., str]) -> Path:
    """
    Structure:
    /App
      App.csproj
      .git/
      appsettings.json
      /Data
        users.csv
        users.json
    """
    project_file = make_project(
        files=["appsettings.json", "Data/users.csv", "Data/users.json"],
        items=[copy_item("appsettings.json"), copy_item("Data/*.*")],
    )
    (project_file.parent / ".git").mkdir()
    return project_file


def test_generates_sources(sample_project: Path) -> None:
    """Verify that a plain run writes every source and reports the output directory."""
    result = run_cli(["-p", str(sample_project)])

    assert result.returncode == 0, result.stderr
    out = sample_project.parent / "obj" / "ProjectFiles"
    assert (out / "ProjectFiles.g.cs").is_file()
    assert (out / "ProjectFiles.ProjectDirectory.g.cs").is_file()
    assert (out / "ProjectFiles.ProjectFile.g.cs").is_file()
    assert (out / "GeneratedPaths.g.cs").is_file()
    assert "Output directory:" in result.stdout

    nested = (out / "ProjectFiles.g.cs").read_text(encoding="utf-8")
    assert "Users_csv" in nested and "Users_json" in nested


def test_json_dry_run(sample_project: Path, tmp_path: Path) -> None:
    """Verify the JSON report of a dry run into a custom directory."""
    out = tmp_path / "custom"
    result = run_cli(["-p", str(sample_project), "-o", str(out), "--dry-run", "--json", "--implicit-usings"])

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert "ProjectFiles.GlobalUsings.g.cs" in payload["sources"]
    assert payload["written_files"] == []
    assert payload["output_dir"] == str(out)
    assert not out.exists()


def test_print_outputs_sources(sample_project: Path) -> None:
    """Verify that --print writes the sources to stdout."""
    result = run_cli(["-p", str(sample_project), "--dry-run", "--print", "--no-paths"])

    assert result.returncode == 0, result.stderr
    assert "// ---- ProjectFiles.g.cs ----" in result.stdout
    assert "static partial class ProjectFiles" in result.stdout
    assert "GeneratedPaths" not in result.stdout


def test_project_config_file_is_used(sample_project: Path) -> None:
    """Verify that a project-local projectfiles.json is honoured."""
    config = {"generate_paths": False}
    (sample_project.parent / "projectfiles.json").write_text(json.dumps(config), encoding="utf-8")

    result = run_cli(["-p", str(sample_project), "--dry-run", "--json"])

    payload = json.loads(result.stdout)
    assert "GeneratedPaths.g.cs" not in payload["sources"]


def test_dump_config(sample_project: Path) -> None:
    """Verify that --dump-config prints the merged configuration."""
    result = run_cli(["-p", str(sample_project), "--use-defaults", "--lang-version", "preview", "--dump-config"])

    assert result.returncode == 0
    dumped = json.loads(result.stdout)
    assert dumped["project_file"] == str(sample_project)
    assert dumped["language_version"] == "preview"
    assert dumped["implicit_usings"] is None


def test_conflicts_exit_with_failure(make_project: Callable[..., Path], copy_item: Callable[..., str]) -> None:
    """Verify that reserved-name conflicts exit with code 1."""
    project_file = make_project(files=["ProjectFile.txt"], items=[copy_item("*.txt")], name="Clash")
    (project_file.parent / ".git").mkdir()

    result = run_cli(["-p", str(project_file)])

    assert result.returncode == 1
    assert "PROJFILES001" in result.stderr


def test_language_gate_exit_code(sample_project: Path) -> None:
    """Verify that the language gate exits with code 1 and writes nothing."""
    result = run_cli(["-p", str(sample_project), "--lang-version", "12"])

    assert result.returncode == 1
    assert "PROJFILES003" in result.stderr
    assert not (sample_project.parent / "obj").exists()


def test_missing_project_exit_code(tmp_path: Path) -> None:
    """Verify that a missing project exits with code 2."""
    result = run_cli(["-p", str(tmp_path / "nope.csproj")])

    assert result.returncode == 2
    assert "does not exist" in result.stderr


def test_no_project_exit_code(tmp_path: Path) -> None:
    """Verify that running without a project exits with code 2."""
    result = run_cli(["--use-defaults"], cwd=tmp_path)

    assert result.returncode == 2


def test_malformed_manifest_exit_code(tmp_path: Path) -> None:
    """Verify that an unreadable manifest exits with code 2."""
    broken = tmp_path / "Broken.csproj"
    broken.write_text("<Project><ItemGroup>", encoding="utf-8")

    result = run_cli(["-p", str(broken)])

    assert result.returncode == 2
    assert "Cannot read manifest" in result.stderr


def test_language_gate_clears_earlier_sources(sample_project: Path) -> None:
    """Verify that regenerating under an old language version leaves no stale sources behind."""
    assert run_cli(["-p", str(sample_project)]).returncode == 0
    out = sample_project.parent / "obj" / "ProjectFiles"

    result = run_cli(["-p", str(sample_project), "--lang-version", "12"])

    assert result.returncode == 1
    assert os.listdir(out) == []


def test_build_options_supply_the_project(sample_project: Path, tmp_path: Path) -> None:
    """Verify that --build-options alone is enough to locate the project and its settings."""
    options = tmp_path / "App.GeneratedMSBuildEditorConfig.editorconfig"
    options.write_text(
        "is_global = true\n"
        f"build_property.MSBuildProjectFullPath = {sample_project}\n"
        "build_property.ImplicitUsings = enable\n",
        encoding="utf-8",
    )

    result = run_cli(["--build-options", str(options), "--dry-run", "--json"], cwd=tmp_path)

    assert result.returncode == 0, result.stderr
    payload = json.loads(result.stdout)
    assert "ProjectFiles.GlobalUsings.g.cs" in payload["sources"]


def test_missing_build_options_exit_code(sample_project: Path, tmp_path: Path) -> None:
    """Verify that a build options path that does not exist is rejected as bad input."""
    result = run_cli(["-p", str(sample_project), "--build-options", str(tmp_path / "absent.editorconfig")])

    assert result.returncode == 2
    assert "Build options file does not exist" in result.stderr


def test_save_config_beside_project(sample_project: Path) -> None:
    """Verify that --save-config writes the effective settings to the project-local file."""
    result = run_cli(["-p", str(sample_project), "--no-paths", "--lang-version", "preview", "--save-config"])

    assert result.returncode == 0, result.stderr
    target = sample_project.parent / "projectfiles.json"
    saved = json.loads(target.read_text(encoding="utf-8"))
    assert saved["generate_paths"] is False
    assert saved["language_version"] == "preview"
    assert not (sample_project.parent / "obj").exists()

    rerun = run_cli(["-p", str(sample_project), "--dry-run", "--json"])
    assert "GeneratedPaths.g.cs" not in json.loads(rerun.stdout)["sources"]


def test_save_config_creates_explicit_file(sample_project: Path, tmp_path: Path) -> None:
    """Verify that --save-config with a new --config path creates that file."""
    target = tmp_path / "settings" / "custom.json"

    result = run_cli(["--config", str(target), "--print", "--save-config"])

    assert result.returncode == 0, result.stderr
    assert json.loads(target.read_text(encoding="utf-8"))["print_output"] is True


def test_save_config_without_destination_exit_code(tmp_path: Path) -> None:
    """Verify that --save-config needs either a config path or a project."""
    result = run_cli(["--use-defaults", "--save-config"], cwd=tmp_path)

    assert result.returncode == 2
