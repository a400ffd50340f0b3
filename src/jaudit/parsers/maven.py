"""Direct dependency extraction from Maven ``pom.xml`` files."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from pathlib import Path

from jaudit.constants.manifests import MAVEN_PROPERTY_PATTERN
from jaudit.exceptions import ManifestUnavailableError
from jaudit.model import PackageCoordinate

logger = logging.getLogger(__name__)


def parse_pom_file(path: Path) -> list[PackageCoordinate]:
    """Parse a POM file from disk."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestUnavailableError(f"Cannot read {path}: {exc}") from exc
    return parse_pom(text, source=str(path))


def parse_pom(text: str, *, source: str = "pom.xml") -> list[PackageCoordinate]:
    """Return the project's direct dependencies in declaration order.

    Only ``<project><dependencies><dependency>`` entries are considered;
    ``dependencyManagement`` and plugin dependencies are ignored. ``${...}``
    placeholders are resolved from ``<properties>`` and the project version.
    Entries whose version stays unresolved or empty are skipped.
    """
    try:
        project = ET.fromstring(text)
    except ET.ParseError as exc:
        raise ManifestUnavailableError(f"Failed to parse {source}: {exc}") from exc

    properties = _project_properties(project)
    coordinates: list[PackageCoordinate] = []
    for dependency in project.findall("{*}dependencies/{*}dependency"):
        group = _resolve(_child_text(dependency, "groupId"), properties)
        artifact = _resolve(_child_text(dependency, "artifactId"), properties)
        version = _resolve(_child_text(dependency, "version"), properties)
        if not group or not artifact:
            continue
        if not version or MAVEN_PROPERTY_PATTERN.search(version):
            logger.debug("Skipping %s:%s without a resolvable version in %s", group, artifact, source)
            continue
        coordinates.append(PackageCoordinate(group=group, artifact=artifact, version=version))
    return coordinates


def _project_properties(project: ET.Element) -> dict[str, str]:
    properties: dict[str, str] = {}
    block = project.find("{*}properties")
    if block is not None:
        for element in block:
            name = element.tag.rsplit("}", 1)[-1]
            properties[name] = (element.text or "").strip()

    version = _child_text(project, "version")
    if not version:
        parent = project.find("{*}parent")
        if parent is not None:
            version = _child_text(parent, "version")
    if version:
        properties.setdefault("project.version", version)
    group = _child_text(project, "groupId")
    if group:
        properties.setdefault("project.groupId", group)
    return properties


def _child_text(element: ET.Element, name: str) -> str:
    child = element.find(f"{{*}}{name}")
    if child is None or child.text is None:
        return ""
    return child.text.strip()


def _resolve(value: str, properties: dict[str, str]) -> str:
    return MAVEN_PROPERTY_PATTERN.sub(lambda match: properties.get(match.group(1), match.group(0)), value)
