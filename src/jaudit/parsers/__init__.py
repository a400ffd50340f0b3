"""Build manifest parsers producing package coordinates."""

from __future__ import annotations

import logging
from pathlib import Path

from jaudit.constants.manifests import GRADLE_FILENAMES, POM_FILENAME
from jaudit.exceptions import ManifestUnavailableError
from jaudit.model import PackageCoordinate

from .gradle import parse_gradle, parse_gradle_file
from .maven import parse_pom, parse_pom_file

logger = logging.getLogger(__name__)

__all__ = [
    "load_project_dependencies",
    "parse_gradle",
    "parse_gradle_file",
    "parse_pom",
    "parse_pom_file",
]


def load_project_dependencies(root: Path) -> list[PackageCoordinate]:
    """Read direct dependencies from the first supported manifest under *root*.

    ``pom.xml`` wins over Gradle scripts.
    """
    pom_path = root / POM_FILENAME
    if pom_path.is_file():
        logger.debug("Reading dependencies from %s", pom_path)
        return parse_pom_file(pom_path)

    for filename in GRADLE_FILENAMES:
        gradle_path = root / filename
        if gradle_path.is_file():
            logger.debug("Reading dependencies from %s", gradle_path)
            return parse_gradle_file(gradle_path)

    supported = ", ".join((POM_FILENAME, *GRADLE_FILENAMES))
    raise ManifestUnavailableError(f"No supported build file found in {root} ({supported})")
