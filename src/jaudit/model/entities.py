"""Frozen value types shared across the audit pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from jaudit.constants.osv import PURL_MAVEN_PREFIX
from jaudit.types import JsonObject, Severity

_RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"^[A-Z][A-Z0-9_]+$")
_VALID_SEVERITIES: frozenset[str] = frozenset({"critical", "high", "medium", "low"})


@dataclass(frozen=True)
class PackageCoordinate:
    """Resolved Maven coordinate of a direct dependency."""

    group: str
    artifact: str
    version: str

    @property
    def cache_key(self) -> str:
        """Canonical package URL used as the cache key."""
        return f"{PURL_MAVEN_PREFIX}/{self.group}/{self.artifact}@{self.version}"

    @property
    def osv_name(self) -> str:
        """Ecosystem-qualified package name as understood by OSV."""
        return f"{self.group}:{self.artifact}"

    @property
    def display(self) -> str:
        return f"{self.group}:{self.artifact}@{self.version}"

    def to_dict(self) -> JsonObject:
        return {"group": self.group, "artifact": self.artifact, "version": self.version}


@dataclass(frozen=True)
class SeverityScore:
    """One severity vector or score attached to an advisory."""

    kind: str
    score: str

    def to_dict(self) -> JsonObject:
        return {"type": self.kind, "score": self.score}


@dataclass(frozen=True)
class VulnerabilityRecord:
    """Advisory payload forwarded from the vulnerability database."""

    id: str
    summary: str = ""
    details: str = ""
    severities: tuple[SeverityScore, ...] = ()
    references: tuple[str, ...] = ()
    fixed_versions: tuple[str, ...] = ()

    def to_dict(self) -> JsonObject:
        """Serialize to the persisted cache/report representation."""
        return {
            "id": self.id,
            "summary": self.summary,
            "details": self.details,
            "severity": [severity.to_dict() for severity in self.severities],
            "references": [{"url": url} for url in self.references],
            "fixed_versions": list(self.fixed_versions),
        }


@dataclass(frozen=True)
class CacheEntry:
    """Timestamped lookup result for one cache key; empty records mean known safe."""

    stored_at: datetime
    records: tuple[VulnerabilityRecord, ...] = ()


@dataclass(frozen=True)
class ScanResult:
    """A dependency together with the advisories that affect it."""

    coordinate: PackageCoordinate
    records: tuple[VulnerabilityRecord, ...]

    def __post_init__(self) -> None:
        if not self.records:
            raise ValueError(f"ScanResult for {self.coordinate.display} must carry at least one record")

    def to_dict(self) -> JsonObject:
        return {
            "package": self.coordinate.to_dict(),
            "vulnerabilities": [record.to_dict() for record in self.records],
        }


@dataclass(frozen=True)
class SastRule:
    """Line-level pattern rule for the source scan."""

    id: str
    title: str
    pattern: re.Pattern[str]
    description: str
    severity: Severity

    def __post_init__(self) -> None:
        if not _RULE_ID_PATTERN.match(self.id):
            raise ValueError(f"SastRule id must be UPPER_SNAKE_CASE (got {self.id!r})")
        if self.severity not in _VALID_SEVERITIES:
            raise ValueError(f"SastRule {self.id} has unknown severity {self.severity!r}")


@dataclass(frozen=True)
class SastFinding:
    """One rule match on one source line."""

    rule_id: str
    title: str
    description: str
    severity: Severity
    file_path: Path
    line_number: int
    matched_text: str

    def to_dict(self) -> JsonObject:
        return {
            "rule_id": self.rule_id,
            "title": self.title,
            "description": self.description,
            "severity": self.severity,
            "file": self.file_path.as_posix(),
            "line": self.line_number,
            "match": self.matched_text,
        }


@dataclass(frozen=True)
class DependencyAudit:
    """Outcome of one dependency lookup run."""

    results: tuple[ScanResult, ...] = ()
    cache_hits: int = 0
    cache_misses: int = 0
    queried: int = 0
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class SastScan:
    """Outcome of one source pattern scan."""

    findings: tuple[SastFinding, ...] = ()
    files_scanned: int = 0
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class AuditReport:
    """Combined outcome of the dependency and source phases of an audit."""

    root: Path
    dependencies_scanned: int = 0
    vulnerable: tuple[ScanResult, ...] = ()
    sast_findings: tuple[SastFinding, ...] = ()
    files_scanned: int = 0
    manifest_error: str | None = None
    lookup_error: str | None = None
    sast_error: str | None = None
    warnings: tuple[str, ...] = ()
    cache_hits: int = 0
    cache_misses: int = 0
    duration_seconds: float = 0.0

    @property
    def errors(self) -> dict[str, str]:
        """Phase name to error message for every phase that failed."""
        return {
            phase: message
            for phase, message in (
                ("manifest", self.manifest_error),
                ("lookup", self.lookup_error),
                ("sast", self.sast_error),
            )
            if message is not None
        }

    @property
    def failed(self) -> bool:
        """Whether any phase reported an error."""
        return bool(self.errors)

    @property
    def has_findings(self) -> bool:
        return bool(self.vulnerable or self.sast_findings)

    @property
    def clean(self) -> bool:
        """True only when every phase completed and nothing was found."""
        return not self.failed and not self.has_findings

    def to_dict(self) -> JsonObject:
        return {
            "root": self.root.as_posix(),
            "dependencies_scanned": self.dependencies_scanned,
            "files_scanned": self.files_scanned,
            "vulnerable": [result.to_dict() for result in self.vulnerable],
            "sast_findings": [finding.to_dict() for finding in self.sast_findings],
            "errors": dict(self.errors),
            "warnings": list(self.warnings),
            "cache": {"hits": self.cache_hits, "misses": self.cache_misses},
            "duration_seconds": round(self.duration_seconds, 3),
            "clean": self.clean,
        }
