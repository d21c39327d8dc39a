from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures building throwaway MSBuild projects on disk.
"""

import os
import sys
from pathlib import Path
from typing import Callable, Dict, Iterable

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
def render_csproj(items: Iterable[str] = (), properties: Dict[str, str] | None = None) -> str:
    """Build a minimal SDK-style project file."""
    lines = ['<Project Sdk="Microsoft.NET.Sdk">']
    if properties:
        lines.append("  <PropertyGroup>")
        for key, value in properties.items():
            lines.append(f"    <{key}>{value}</{key}>")
        lines.append("  </PropertyGroup>")
    lines.append("  <ItemGroup>")
    lines.extend(f"    {item}" for item in items)
    lines.append("  </ItemGroup>")
    lines.append("</Project>")
    return "\n".join(lines) + "\n"


def copied(include: str, policy: str = "PreserveNewest", element: str = "None") -> str:
    """An item with a CopyToOutputDirectory child."""
    return (
        f'<{element} Include="{include}">'
        f"<CopyToOutputDirectory>{policy}</CopyToOutputDirectory>"
        f"</{element}>"
    )


@pytest.fixture
def make_project(tmp_path: Path) -> Callable[..., Path]:
    """
    Factory creating a project directory with files and a .csproj.

    Usage: make_project(files=["Data/a.json"], items=[copied("Data/**")])
    Returns the path of the project file.
    """
    def _make(
            files: Iterable[str] = (),
            items: Iterable[str] = (),
            properties: Dict[str, str] | None = None,
            name: str = "App",
    ) -> Path:
        project_dir = tmp_path / name
        project_dir.mkdir(parents=True, exist_ok=True)
        for rel in files:
            target = project_dir / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("content", encoding="utf-8")
        project_file = project_dir / f"{name}.csproj"
        project_file.write_text(render_csproj(items, properties), encoding="utf-8")
        return project_file

    return _make


@pytest.fixture
def copy_item() -> Callable[..., str]:
    """Expose the item builder to tests without importing conftest."""
    return copied
