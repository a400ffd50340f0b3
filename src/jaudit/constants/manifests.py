"""Build manifest filenames and parsing patterns."""

from __future__ import annotations

import re

POM_FILENAME: str = "pom.xml"
GRADLE_FILENAMES: tuple[str, ...] = ("build.gradle", "build.gradle.kts")

# implementation 'group:artifact:version' or implementation("group:artifact:version")
GRADLE_DEPENDENCY_PATTERN: re.Pattern[str] = re.compile(
    r"(?i)(implementation|api|compile|runtime|testImplementation)\s*\(?['\"]"
    r"([^:\s\"']+):([^:\s\"']+):([^:\s\"']+)['\"]\)?"
)
GRADLE_COMMENT_PREFIX: str = "//"

MAVEN_PROPERTY_PATTERN: re.Pattern[str] = re.compile(r"\$\{([^}]+)\}")
