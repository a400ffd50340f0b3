"""Tests for JSON Schema validation of the machine-readable report."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import pytest

from jaudit import __version__
from jaudit.constants.reporting import SCHEMA_VERSION
from jaudit.model import AuditReport, PackageCoordinate, SastFinding, ScanResult
from jaudit.reporting import build_report_payload, write_json_report

SCHEMAS_DIR: Path = Path(__file__).resolve().parents[2] / "schemas"
REPORT_SCHEMA_PATH: Path = SCHEMAS_DIR / "report.schema.json"


def _load_schema(path: Path) -> dict[str, Any]:
    """Load a JSON Schema file from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def _full_report(root: Path, record) -> AuditReport:
    return AuditReport(
        root=root,
        dependencies_scanned=2,
        vulnerable=(
            ScanResult(
                coordinate=PackageCoordinate("org.apache.logging.log4j", "log4j-core", "2.14.1"),
                records=(record,),
            ),
        ),
        sast_findings=(
            SastFinding(
                rule_id="CLOUD_CREDENTIAL",
                title="Cloud Credential Leaked",
                description="Potential cloud provider credential token found.",
                severity="critical",
                file_path=root / "Main.java",
                line_number=3,
                matched_text='String k = "AWS_ACCESS_KEY_ID";',
            ),
        ),
        files_scanned=4,
        lookup_error="Vulnerability lookup failed: status 502",
        warnings=("Cannot read Broken.java: No such file or directory",),
        cache_hits=1,
        cache_misses=1,
        duration_seconds=0.123456,
    )


@pytest.fixture(scope="module")
def report_schema() -> dict[str, Any]:
    schema = _load_schema(REPORT_SCHEMA_PATH)
    jsonschema.Draft202012Validator.check_schema(schema)
    return schema


def test_clean_report_matches_schema(tmp_path: Path, report_schema: dict[str, Any]) -> None:
    payload = build_report_payload(AuditReport(root=tmp_path))

    jsonschema.validate(payload, report_schema)
    assert payload["schema_version"] == SCHEMA_VERSION
    assert payload["tool_version"] == __version__
    assert payload["clean"] is True


def test_full_report_matches_schema(tmp_path: Path, report_schema: dict[str, Any], record_factory) -> None:
    payload = build_report_payload(_full_report(tmp_path, record_factory("GHSA-jfh8-c2jp-5v3q")))

    jsonschema.validate(payload, report_schema)
    assert payload["errors"] == {"lookup": "Vulnerability lookup failed: status 502"}
    assert payload["duration_seconds"] == 0.123
    assert payload["sast_findings"][0]["file"] == (tmp_path / "Main.java").as_posix()


def test_written_report_matches_schema(tmp_path: Path, report_schema: dict[str, Any], record_factory) -> None:
    output = tmp_path / "reports" / "jaudit.json"

    write_json_report(output, _full_report(tmp_path, record_factory()))

    jsonschema.validate(json.loads(output.read_text(encoding="utf-8")), report_schema)


def test_schema_rejects_unknown_error_phase(tmp_path: Path, report_schema: dict[str, Any]) -> None:
    payload = build_report_payload(AuditReport(root=tmp_path))
    payload["errors"] = {"network": "boom"}

    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(payload, report_schema)
