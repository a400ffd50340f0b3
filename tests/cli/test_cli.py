"""Tests for CLI argument parsing, output and exit codes."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from jaudit.cli import main as cli_main
from jaudit.cli.main import build_parser, exit_code_for, main
from jaudit.model import AuditReport, PackageCoordinate, SastFinding, ScanResult


def _finding(root: Path) -> SastFinding:
    return SastFinding(
        rule_id="WEAK_HASH",
        title="Weak Cryptography (MD5/SHA-1)",
        description="Weak hashing algorithm detected. Use SHA-256 or stronger.",
        severity="medium",
        file_path=root / "Hash.java",
        line_number=2,
        matched_text='MessageDigest.getInstance("MD5");',
    )


@pytest.fixture()
def captured_calls() -> list[dict[str, Any]]:
    return []


def _patch_run_audit(monkeypatch: pytest.MonkeyPatch, report: AuditReport, calls: list[dict[str, Any]]) -> None:
    def _fake_run_audit(**kwargs: Any) -> AuditReport:
        calls.append(kwargs)
        return report

    monkeypatch.setattr(cli_main, "run_audit", _fake_run_audit)


def test_parser_defaults() -> None:
    args = build_parser().parse_args(["audit"])

    assert args.root == Path(".")
    assert args.config is None
    assert args.output is None
    assert args.no_cache is False
    assert args.min_severity is None


def test_parser_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_clean_report_exits_zero(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls, capsys: pytest.CaptureFixture[str]
) -> None:
    _patch_run_audit(monkeypatch, AuditReport(root=tmp_path), captured_calls)

    assert main(["audit", "--root", str(tmp_path), "--no-color"]) == 0
    assert "PASS" in capsys.readouterr().out
    assert captured_calls[0]["use_cache"] is True


def test_findings_exit_one(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls) -> None:
    report = AuditReport(root=tmp_path, sast_findings=(_finding(tmp_path),), files_scanned=1)
    _patch_run_audit(monkeypatch, report, captured_calls)

    assert main(["audit", "--root", str(tmp_path), "--no-stdout"]) == 1


def test_failed_phase_outranks_findings(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls) -> None:
    report = AuditReport(root=tmp_path, sast_findings=(_finding(tmp_path),), lookup_error="service down")
    _patch_run_audit(monkeypatch, report, captured_calls)

    assert main(["audit", "--root", str(tmp_path), "--no-stdout"]) == 3


def test_no_cache_and_cache_path_flags(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls) -> None:
    _patch_run_audit(monkeypatch, AuditReport(root=tmp_path), captured_calls)

    main(["audit", "-r", str(tmp_path), "-n", "--cache-path", str(tmp_path / "c.json"), "--no-stdout"])

    call = captured_calls[0]
    assert call["use_cache"] is False
    assert call["config"].cache_path == (tmp_path / "c.json").resolve()


def test_output_writes_json_report(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls, record_factory
) -> None:
    report = AuditReport(
        root=tmp_path,
        dependencies_scanned=1,
        vulnerable=(
            ScanResult(
                coordinate=PackageCoordinate("org.apache.logging.log4j", "log4j-core", "2.14.1"),
                records=(record_factory("GHSA-jfh8-c2jp-5v3q"),),
            ),
        ),
    )
    _patch_run_audit(monkeypatch, report, captured_calls)
    output = tmp_path / "out" / "report.json"

    assert main(["audit", "-r", str(tmp_path), "-o", str(output), "--no-stdout"]) == 1

    payload = json.loads(output.read_text(encoding="utf-8"))
    assert payload["clean"] is False
    assert payload["dependencies_scanned"] == 1
    assert payload["vulnerable"][0]["vulnerabilities"][0]["id"] == "GHSA-jfh8-c2jp-5v3q"


def test_invalid_config_exits_two(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, captured_calls, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "jaudit.yaml").write_text("timeout_seconds: -5\n", encoding="utf-8")
    _patch_run_audit(monkeypatch, AuditReport(root=tmp_path), captured_calls)

    assert main(["audit", "-r", str(tmp_path)]) == 2
    assert captured_calls == []
    assert "Configuration error" in capsys.readouterr().err


def test_missing_root_exits_two(tmp_path: Path) -> None:
    assert main(["audit", "-r", str(tmp_path / "missing"), "--no-stdout"]) == 2


def test_validate_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["validate-config", "-r", str(tmp_path)]) == 0
    assert "valid" in capsys.readouterr().out

    (tmp_path / "jaudit.yaml").write_text("unknown: 1\n", encoding="utf-8")
    assert main(["validate-config", "-r", str(tmp_path)]) == 2


def test_exit_code_for_report(tmp_path: Path) -> None:
    assert exit_code_for(AuditReport(root=tmp_path)) == 0
    assert exit_code_for(AuditReport(root=tmp_path, sast_findings=(_finding(tmp_path),))) == 1
    assert exit_code_for(AuditReport(root=tmp_path, manifest_error="no pom.xml")) == 3
