from __future__ import annotations

"""
Unit tests for the Project Manifest Reader.

Verifies copy-policy selection, Include/Update handling, property reading
and the expansion of selected items against the project directory.
"""

import os
from pathlib import Path
from typing import Callable

import pytest

from projectfiles.core.discovery.manifest import parse_manifest, read_manifest, select_project_files
from projectfiles.domain.errors import ManifestError

MANIFEST = """<Project Sdk="Microsoft.NET.Sdk">
  <PropertyGroup>
    <LangVersion>preview</LangVersion>
    <ImplicitUsings>enable</ImplicitUsings>
  </PropertyGroup>
  <ItemGroup>
    <None Include="keep.txt">
      <CopyToOutputDirectory>PreserveNewest</CopyToOutputDirectory>
    </None>
    <Content Include="Data/**;extra.json">
      <CopyToOutputDirectory> Always </CopyToOutputDirectory>
    </Content>
    <None Update="updated.txt">
      <CopyToOutputDirectory>Always</CopyToOutputDirectory>
    </None>
    <None Include="never.txt">
      <CopyToOutputDirectory>Never</CopyToOutputDirectory>
    </None>
    <None Include="plain.txt" />
    <!-- <None Include="commented.txt"><CopyToOutputDirectory>Always</CopyToOutputDirectory></None> -->
  </ItemGroup>
</Project>
"""


def test_only_preserving_copy_policies_are_selected() -> None:
    """Verify that only Always and PreserveNewest items survive, with Update as fallback."""
    manifest = parse_manifest(MANIFEST)

    assert [item.include for item in manifest.items] == ["keep.txt", "Data/**;extra.json", "updated.txt"]
    assert [item.copy_policy for item in manifest.items] == ["PreserveNewest", "Always", "Always"]
    assert manifest.items[1].item_type == "Content"


def test_include_is_split_on_semicolons() -> None:
    """Verify that one Include value can carry several patterns."""
    manifest = parse_manifest(MANIFEST)

    assert manifest.patterns() == ["keep.txt", "Data/**", "extra.json", "updated.txt"]


def test_properties_are_read() -> None:
    """Verify that PropertyGroup values are exposed and missing ones read as None."""
    manifest = parse_manifest(MANIFEST)

    assert manifest.get_property("LangVersion") == "preview"
    assert manifest.get_property("ImplicitUsings") == "enable"
    assert manifest.get_property("Missing") is None


def test_namespaced_legacy_project_is_supported() -> None:
    """Verify that the MSBuild 2003 namespace does not hide items."""
    content = (
        '<Project xmlns="http://schemas.microsoft.com/developer/msbuild/2003">'
        '<ItemGroup><None Include="a.txt">'
        '<CopyToOutputDirectory>Always</CopyToOutputDirectory>'
        '</None></ItemGroup></Project>'
    )

    assert parse_manifest(content).patterns() == ["a.txt"]


def test_malformed_xml_raises_manifest_error() -> None:
    """Verify that broken XML raises ManifestError."""
    with pytest.raises(ManifestError):
        parse_manifest("<Project><ItemGroup>", "broken.csproj")


def test_missing_file_raises_manifest_error(tmp_path: Path) -> None:
    """Verify that a missing project file raises ManifestError naming the path."""
    with pytest.raises(ManifestError) as excinfo:
        read_manifest(str(tmp_path / "absent.csproj"))

    assert "absent.csproj" in str(excinfo.value)


def test_select_project_files_expands_against_project_dir(
        make_project: Callable[..., Path],
        copy_item: Callable[..., str],
) -> None:
    """Verify that selected items are expanded relative to the project directory."""
    project_file = make_project(
        files=["Data/a.json", "Data/Sub/b.json", "other.txt"],
        items=[copy_item("Data/**"), copy_item("other.txt", "Never")],
    )

    manifest = read_manifest(str(project_file))

    assert manifest.project_dir == str(project_file.parent)
    assert select_project_files(manifest) == [
        os.path.join("Data", "Sub", "b.json"),
        os.path.join("Data", "a.json"),
    ]
