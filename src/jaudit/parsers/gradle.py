"""Dependency extraction from Gradle build scripts (Groovy or Kotlin DSL)."""

from __future__ import annotations

from pathlib import Path

from jaudit.constants.manifests import GRADLE_COMMENT_PREFIX, GRADLE_DEPENDENCY_PATTERN
from jaudit.exceptions import ManifestUnavailableError
from jaudit.model import PackageCoordinate


def parse_gradle_file(path: Path) -> list[PackageCoordinate]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestUnavailableError(f"Cannot read {path}: {exc}") from exc
    return parse_gradle(text)


def parse_gradle(text: str) -> list[PackageCoordinate]:
    """Return coordinates declared in ``group:artifact:version`` string notation.

    Map notation (``group: '...', name: '...'``) is not recognised.
    """
    coordinates: list[PackageCoordinate] = []
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if line.startswith(GRADLE_COMMENT_PREFIX):
            continue
        match = GRADLE_DEPENDENCY_PATTERN.search(line)
        if match is None:
            continue
        coordinates.append(PackageCoordinate(group=match.group(2), artifact=match.group(3), version=match.group(4)))
    return coordinates
