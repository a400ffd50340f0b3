"""Core data models for jaudit."""

from .entities import (
    AuditReport,
    CacheEntry,
    DependencyAudit,
    PackageCoordinate,
    SastFinding,
    SastRule,
    SastScan,
    ScanResult,
    SeverityScore,
    VulnerabilityRecord,
)

__all__ = [
    "AuditReport",
    "CacheEntry",
    "DependencyAudit",
    "PackageCoordinate",
    "SastFinding",
    "SastRule",
    "SastScan",
    "ScanResult",
    "SeverityScore",
    "VulnerabilityRecord",
]
