"""JSON report output."""

from __future__ import annotations

from pathlib import Path

from jaudit import __version__
from jaudit.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX, SCHEMA_VERSION
from jaudit.io import write_json_atomic
from jaudit.model import AuditReport
from jaudit.types import JsonObject


def build_report_payload(report: AuditReport) -> JsonObject:
    """Return the machine-readable form of *report*."""
    payload: JsonObject = {"schema_version": SCHEMA_VERSION, "tool_version": __version__}
    payload.update(report.to_dict())
    return payload


def write_json_report(path: Path, report: AuditReport) -> None:
    """Write the report payload to *path* atomically."""
    write_json_atomic(
        path=path,
        payload=build_report_payload(report),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )
