"""Conversion between advisory JSON payloads and ``VulnerabilityRecord`` values."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from jaudit.model import SeverityScore, VulnerabilityRecord
from jaudit.types import JsonObject

logger = logging.getLogger(__name__)


def record_from_dict(raw: object) -> VulnerabilityRecord | None:
    """Build a record from an OSV advisory or a persisted cache record.

    Both shapes share ``id``/``summary``/``details``/``severity``/``references``.
    Cache records carry ``fixed_versions`` directly, OSV advisories carry them in
    ``affected[].ranges[].events[].fixed``. Returns ``None`` when there is no id.
    """
    if not isinstance(raw, dict):
        return None
    vuln_id = raw.get("id")
    if not isinstance(vuln_id, str) or not vuln_id:
        return None

    affected = _dict_items(raw.get("affected"))
    severities = _severities(raw.get("severity"))
    if not severities:
        severities = _severities([severity for entry in affected for severity in _list(entry.get("severity"))])

    fixed_raw = raw.get("fixed_versions")
    if isinstance(fixed_raw, list):
        fixed_versions = _unique_strings(fixed_raw)
    else:
        fixed_versions = _unique_strings(
            event.get("fixed")
            for entry in affected
            for version_range in _dict_items(entry.get("ranges"))
            for event in _dict_items(version_range.get("events"))
        )

    return VulnerabilityRecord(
        id=vuln_id,
        summary=_string(raw.get("summary")),
        details=_string(raw.get("details")),
        severities=severities,
        references=_unique_strings(reference.get("url") for reference in _dict_items(raw.get("references"))),
        fixed_versions=fixed_versions,
    )


def records_from_list(raw_records: object) -> tuple[VulnerabilityRecord, ...]:
    """Convert a JSON list of advisories, dropping entries without an id."""
    records: list[VulnerabilityRecord] = []
    for raw in _list(raw_records):
        record = record_from_dict(raw)
        if record is None:
            logger.debug("Dropping advisory without an id: %r", raw)
            continue
        records.append(record)
    return tuple(records)


def records_to_list(records: Iterable[VulnerabilityRecord]) -> list[JsonObject]:
    """Serialize records for persistence."""
    return [record.to_dict() for record in records]


def _severities(raw: object) -> tuple[SeverityScore, ...]:
    seen: set[SeverityScore] = set()
    severities: list[SeverityScore] = []
    for item in _dict_items(raw):
        kind = _string(item.get("type"))
        score = _string(item.get("score"))
        if not score:
            continue
        severity = SeverityScore(kind=kind, score=score)
        if severity in seen:
            continue
        seen.add(severity)
        severities.append(severity)
    return tuple(severities)


def _unique_strings(values: Iterable[object]) -> tuple[str, ...]:
    seen: set[str] = set()
    unique: list[str] = []
    for value in values:
        if not isinstance(value, str) or not value or value in seen:
            continue
        seen.add(value)
        unique.append(value)
    return tuple(unique)


def _list(value: object) -> list[object]:
    return value if isinstance(value, list) else []


def _dict_items(value: object) -> list[dict[str, object]]:
    return [item for item in _list(value) if isinstance(item, dict)]


def _string(value: object) -> str:
    return value if isinstance(value, str) else ""
