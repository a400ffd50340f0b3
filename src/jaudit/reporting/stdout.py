"""Human-readable stdout output for audit reports."""

from __future__ import annotations

from collections import Counter

from jaudit.constants.branding import ASCII_LOGO_LINES, AUDIT_SUMMARY_TITLE
from jaudit.constants.reporting import (
    ANSI_BOLD,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    SEVERITY_COLORS,
    SEVERITY_DISPLAY_ORDER,
)
from jaudit.constants.sast import SEVERITY_RANK
from jaudit.model import AuditReport, SastFinding, ScanResult, VulnerabilityRecord
from jaudit.types import Severity


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _headline(record: VulnerabilityRecord) -> str:
    if record.summary:
        return record.summary
    lines = record.details.strip().splitlines()
    return lines[0] if lines else ""


def format_severity(record: VulnerabilityRecord) -> str:
    """Render ``TYPE: score`` pairs of an advisory, e.g. ``CVSS_V3: CVSS:3.1/AV:N/...``."""
    return ", ".join(f"{severity.kind or 'Severity'}: {severity.score}" for severity in record.severities)


class StdoutReporter:
    """Formats audit reports as text for the terminal."""

    def __init__(
        self,
        report: AuditReport,
        *,
        color: bool = True,
        verbose: bool = False,
        min_severity: Severity | None = None,
    ) -> None:
        self._report = report
        self._color = color
        self._verbose = verbose
        self._min_severity = min_severity

    def render(self) -> str:
        """Render the full report as a single string."""
        sections = [
            self._render_header(),
            self._render_dependencies(),
            self._render_sast(),
            self._render_verdict(),
        ]
        return "\n".join(section for section in sections if section)

    def shown_sast_findings(self) -> list[SastFinding]:
        if self._min_severity is None:
            return list(self._report.sast_findings)
        threshold = SEVERITY_RANK[self._min_severity]
        return [finding for finding in self._report.sast_findings if SEVERITY_RANK[finding.severity] >= threshold]

    def _render_header(self) -> str:
        r = self._report
        sep = "  " + "─" * 38
        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            f"  {AUDIT_SUMMARY_TITLE}",
            sep,
            "",
            f"  Root        {r.root}",
            f"  Packages    {r.dependencies_scanned} scanned / {len(r.vulnerable)} vulnerable",
            f"  Sources     {r.files_scanned} files / {len(r.sast_findings)} findings",
            f"  Severities  {self._format_severity_breakdown(r.sast_findings)}",
            f"  Duration    {r.duration_seconds:.3f}s",
        ]
        if self._verbose:
            lines.append(f"  Cache       {r.cache_hits} hits / {r.cache_misses} misses")
            lines.extend(f"  Warning     {warning}" for warning in r.warnings)
        lines.append("")
        return "\n".join(lines)

    def _render_dependencies(self) -> str:
        results = self._report.vulnerable
        if not results:
            return ""
        lines = [self._bold(f"  Vulnerable packages ({len(results)})")]
        for result in results:
            lines.extend(self._render_package(result))
        lines.append("")
        return "\n".join(lines)

    def _render_package(self, result: ScanResult) -> list[str]:
        lines = ["", f"  {result.coordinate.display}"]
        for record in result.records:
            lines.append(f"    [{self._red(record.id)}] {_headline(record)}".rstrip())
            severity = format_severity(record)
            if severity:
                lines.append(f"      Severity: {severity}")
            if record.fixed_versions:
                lines.append(f"      Fixed in: {', '.join(record.fixed_versions)}")
            if record.references and self._verbose:
                lines.append("      References:")
                lines.extend(f"        - {url}" for url in record.references)
        return lines

    def _render_sast(self) -> str:
        findings = self.shown_sast_findings()
        if not findings:
            return ""
        lines = [self._bold(f"  Source findings ({len(findings)})"), ""]
        for finding in findings:
            location = f"{self._relative(finding)}:{finding.line_number}"
            lines.append(f"    [{self._severity(finding.severity)}] {finding.title} ({finding.rule_id})")
            lines.append(f"      File: {location}")
            lines.append(f"      Code: {finding.matched_text}")
            lines.append(f"      -> {finding.description}")
            lines.append("")
        return "\n".join(lines)

    def _render_verdict(self) -> str:
        r = self._report
        lines = [f"  {phase} phase failed: {message}" for phase, message in r.errors.items()]
        if r.clean:
            verdict = "PASS (no known vulnerabilities or suspicious patterns)"
            lines.append(f"  Verdict     {_colorize(verdict, ANSI_GREEN) if self._color else verdict}")
        elif r.failed:
            verdict = "INCOMPLETE (a phase failed; results above are partial)"
            lines.append(f"  Verdict     {_colorize(verdict, ANSI_YELLOW) if self._color else verdict}")
        else:
            verdict = "FAIL (findings reported)"
            lines.append(f"  Verdict     {self._red(verdict)}")
        return "\n".join(lines)

    def _format_severity_breakdown(self, findings: tuple[SastFinding, ...]) -> str:
        """Render ``critical/high/medium/low`` finding counts in fixed order."""
        counts = Counter(finding.severity for finding in findings)
        parts = [f"{counts.get(severity, 0)} {self._severity(severity)}" for severity in SEVERITY_DISPLAY_ORDER]
        return " · ".join(parts)

    def _relative(self, finding: SastFinding) -> str:
        try:
            return finding.file_path.relative_to(self._report.root).as_posix()
        except ValueError:
            return finding.file_path.as_posix()

    def _severity(self, severity: Severity) -> str:
        label = severity.upper()
        color = SEVERITY_COLORS.get(severity, "")
        return _colorize(label, color) if self._color and color else label

    def _red(self, text: str) -> str:
        return _colorize(text, ANSI_RED) if self._color else text

    def _bold(self, text: str) -> str:
        return _colorize(text, ANSI_BOLD) if self._color else text
