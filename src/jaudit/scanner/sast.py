"""Line-pattern source scanning over a directory tree."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from jaudit.constants.sast import (
    COMMENT_LINE_PREFIXES,
    DEFAULT_SAST_RULES,
    DEFAULT_SOURCE_SUFFIXES,
    HIDDEN_ENTRY_PREFIX,
)
from jaudit.exceptions import FileUnreadableError, WalkFailureError
from jaudit.model import SastFinding, SastRule, SastScan

logger = logging.getLogger(__name__)


def is_comment_line(line: str) -> bool:
    """Heuristic single-line comment check; not aware of strings or block boundaries."""
    return line.strip().startswith(COMMENT_LINE_PREFIXES)


class PatternRuleEngine:
    """Evaluate a fixed rule table against every non-comment line of source files."""

    def __init__(
        self,
        rules: Sequence[SastRule] = DEFAULT_SAST_RULES,
        *,
        source_suffixes: Sequence[str] = DEFAULT_SOURCE_SUFFIXES,
    ) -> None:
        self._rules: tuple[SastRule, ...] = tuple(rules)
        self._source_suffixes: tuple[str, ...] = tuple(source_suffixes)

    @property
    def rules(self) -> tuple[SastRule, ...]:
        return self._rules

    def scan(self, root: Path) -> list[SastFinding]:
        """Return findings for every source file under *root*."""
        return list(self.scan_with_stats(root).findings)

    def scan_with_stats(self, root: Path) -> SastScan:
        """Scan *root* and report findings, scanned file count and skipped files.

        Unreadable files are skipped with a warning. Failures of the walk itself
        raise ``WalkFailureError``.
        """
        findings: list[SastFinding] = []
        warnings: list[str] = []
        files_scanned = 0
        for path in self.iter_source_files(root):
            try:
                file_findings = self.scan_file(path)
            except FileUnreadableError as exc:
                warnings.append(str(exc))
                logger.warning("%s", exc)
                continue
            files_scanned += 1
            findings.extend(file_findings)
        return SastScan(findings=tuple(findings), files_scanned=files_scanned, warnings=tuple(warnings))

    def iter_source_files(self, root: Path) -> Iterator[Path]:
        """Yield source files in sorted walk order, pruning hidden subdirectories."""

        def _raise_walk_error(exc: OSError) -> None:
            raise WalkFailureError(root, str(exc)) from exc

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            dirnames[:] = sorted(name for name in dirnames if not name.startswith(HIDDEN_ENTRY_PREFIX))
            for filename in sorted(filenames):
                if filename.endswith(self._source_suffixes):
                    yield Path(dirpath) / filename

    def scan_file(self, path: Path) -> list[SastFinding]:
        """Return all rule matches in one file; a file yields nothing unless fully read.

        Lines end at ``\\n`` only; a lone ``\\r`` stays inside its line.
        """
        findings: list[SastFinding] = []
        try:
            with path.open(encoding="utf-8", errors="replace", newline="\n") as handle:
                for line_number, raw_line in enumerate(handle, start=1):
                    line = raw_line.rstrip("\r\n")
                    if is_comment_line(line):
                        continue
                    findings.extend(self._match_line(path, line_number, line))
        except OSError as exc:
            raise FileUnreadableError(path, str(exc)) from exc
        return findings

    def _match_line(self, path: Path, line_number: int, line: str) -> Iterator[SastFinding]:
        for rule in self._rules:
            if rule.pattern.search(line):
                yield SastFinding(
                    rule_id=rule.id,
                    title=rule.title,
                    description=rule.description,
                    severity=rule.severity,
                    file_path=path,
                    line_number=line_number,
                    matched_text=line.strip(),
                )
