from __future__ import annotations

"""
Project Manifest Reader.

Parses an MSBuild project file and extracts the items marked for copying
to the output directory, plus the few project properties the generator
honours (LangVersion, ImplicitUsings). Element matching uses local names
so both SDK-style and namespaced legacy projects are understood.
"""

import logging
import os
import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from lxml import etree

from projectfiles.core.discovery.glob_expander import expand_patterns
from projectfiles.domain.constants import (
    COPY_POLICY_ELEMENT,
    ITEM_GROUP_ELEMENT,
    PRESERVE_COPY_POLICIES,
    PROPERTY_GROUP_ELEMENT,
)
from projectfiles.domain.errors import ManifestError

logger = logging.getLogger(__name__)

# MSBuild item lists separate multiple specs with ';'
_ITEM_SEPARATOR = ";"

# -----------------------------------------------------------------------------
# MANIFEST MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ManifestItem:
    """
    One selected item of an ItemGroup.

    Attributes:
        item_type: Element name (None, Content, EmbeddedResource, ...).
        include: Raw Include/Update value (may contain wildcards).
        copy_policy: Value of the CopyToOutputDirectory child.
    """
    item_type: str
    include: str
    copy_policy: str

    @property
    def patterns(self) -> List[str]:
        return [p.strip() for p in self.include.split(_ITEM_SEPARATOR) if p.strip()]


@dataclass(frozen=True)
class ProjectManifest:
    """
    Parsed view of a project file.

    Attributes:
        path: Absolute path of the project file ('' for in-memory content).
        items: Items whose copy policy selects them, in document order.
        properties: PropertyGroup values (last definition wins).
    """
    path: str
    items: Tuple[ManifestItem, ...] = field(default_factory=tuple)
    properties: Dict[str, str] = field(default_factory=dict)

    @property
    def project_dir(self) -> str:
        return os.path.dirname(self.path) if self.path else os.getcwd()

    def patterns(self) -> List[str]:
        """All inclusion patterns, in manifest order."""
        out: List[str] = []
        for item in self.items:
            out.extend(item.patterns)
        return out

    def get_property(self, name: str) -> Optional[str]:
        value = self.properties.get(name)
        return value if value else None

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def read_manifest(project_file: str) -> ProjectManifest:
    """
    Load and parse a project file from disk.

    Args:
        project_file: Path of the .csproj (or any MSBuild project).

    Returns:
        ProjectManifest: Selected items and properties.

    Raises:
        ManifestError: If the file cannot be read or parsed.
    """
    path = os.path.abspath(project_file)
    try:
        with open(path, "rb") as f:
            content = f.read()
    except OSError as e:
        raise ManifestError(path, str(e)) from e

    return parse_manifest(content, path)


def parse_manifest(content: Union[str, bytes], project_file: str = "") -> ProjectManifest:
    """
    Parse project XML content.

    Only items with a CopyToOutputDirectory child whose value is exactly
    'PreserveNewest' or 'Always' are selected; everything else is ignored.

    Args:
        content: Raw XML text or bytes.
        project_file: Path the content came from, used for the project dir.

    Returns:
        ProjectManifest: Selected items and properties.

    Raises:
        ManifestError: If the content is not well-formed XML.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content
    parser = etree.XMLParser(resolve_entities=False, no_network=True, remove_comments=True)

    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        raise ManifestError(project_file or "<memory>", str(e)) from e

    items: List[ManifestItem] = []
    properties: Dict[str, str] = {}

    for element in root.iter():
        name = _local_name(element)
        if name == ITEM_GROUP_ELEMENT:
            items.extend(_selected_items(element))
        elif name == PROPERTY_GROUP_ELEMENT:
            for prop in _child_elements(element):
                properties[_local_name(prop)] = (prop.text or "").strip()

    logger.debug(f"Manifest parsed: {len(items)} selected item(s), {len(properties)} properties.")
    return ProjectManifest(
        path=os.path.abspath(project_file) if project_file else "",
        items=tuple(items),
        properties=properties,
    )


def select_project_files(
        manifest: ProjectManifest,
        cancellation_event: Optional[threading.Event] = None,
) -> List[str]:
    """
    Expand every selected item against the project directory.

    Args:
        manifest: Parsed project manifest.
        cancellation_event: Optional event to abort the expansion.

    Returns:
        List[str]: Sorted, deduplicated project-relative paths.
    """
    return expand_patterns(manifest.patterns(), manifest.project_dir, cancellation_event)

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _selected_items(item_group: etree._Element) -> List[ManifestItem]:
    selected: List[ManifestItem] = []

    for item in _child_elements(item_group):
        policy_element = next(
            (c for c in _child_elements(item) if _local_name(c) == COPY_POLICY_ELEMENT),
            None,
        )
        if policy_element is None:
            continue

        policy = (policy_element.text or "").strip()
        if policy not in PRESERVE_COPY_POLICIES:
            continue

        include = item.get("Include")
        if include is None:
            include = item.get("Update")
        if not include:
            continue

        selected.append(ManifestItem(item_type=_local_name(item), include=include, copy_policy=policy))

    return selected


def _child_elements(element: etree._Element) -> List[etree._Element]:
    # Processing instructions and entities have non-string tags
    return [c for c in element if isinstance(c.tag, str)]


def _local_name(element: etree._Element) -> str:
    if not isinstance(element.tag, str):
        return ""
    return etree.QName(element).localname
