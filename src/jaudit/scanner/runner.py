"""End-to-end audit of a project directory.

Runs the dependency lookup and the source pattern scan independently and
combines their outcomes. A failure in one phase is recorded on the report and
does not stop the other.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from jaudit.config import JauditConfig
from jaudit.exceptions import (
    ConfigError,
    CorruptStoreError,
    LookupPhaseError,
    ManifestUnavailableError,
    WalkFailureError,
)
from jaudit.model import AuditReport, DependencyAudit, PackageCoordinate, SastScan, ScanResult
from jaudit.parsers import load_project_dependencies
from jaudit.scanner.cache import ResultCache
from jaudit.scanner.orchestrator import AuditOrchestrator
from jaudit.scanner.osv_client import BatchLookupClient
from jaudit.scanner.sast import PatternRuleEngine

logger = logging.getLogger(__name__)


class _EphemeralCache(ResultCache):
    """In-memory cache used when caching is disabled; never touches disk."""

    def load(self) -> None:
        return None

    def save(self) -> None:
        return None


def run_audit(
    *,
    root: Path,
    config: JauditConfig | None = None,
    coordinates: list[PackageCoordinate] | None = None,
    cache: ResultCache | None = None,
    client: BatchLookupClient | None = None,
    engine: PatternRuleEngine | None = None,
    use_cache: bool = True,
) -> AuditReport:
    """Audit dependencies and sources under *root*.

    ``coordinates`` bypasses manifest discovery when given. ``cache``,
    ``client`` and ``engine`` default to instances built from *config*; a
    cache built here is loaded before the lookup, a supplied one is used as is.
    """
    started_at = time.perf_counter()
    root = root.resolve()
    if not root.is_dir():
        raise ConfigError(f"Audit root does not exist or is not a directory: {root}")
    config = config or JauditConfig()

    warnings: list[str] = []
    manifest_error: str | None = None
    if coordinates is None:
        try:
            coordinates = load_project_dependencies(root)
        except ManifestUnavailableError as exc:
            manifest_error = str(exc)
            logger.warning("%s", exc)
            coordinates = []

    dependency_audit = DependencyAudit()
    cached_on_failure: tuple[ScanResult, ...] = ()
    lookup_error: str | None = None
    if coordinates:
        if cache is None:
            cache = _build_cache(config, use_cache=use_cache)
            _load_cache(cache, warnings)
        if client is None:
            client = BatchLookupClient(url=config.osv_url, timeout=config.timeout_seconds)
        logger.info("Auditing %d dependencies against %s", len(coordinates), client.url)
        try:
            dependency_audit = AuditOrchestrator(cache, client).run(coordinates)
        except LookupPhaseError as exc:
            lookup_error = str(exc)
            cached_on_failure = exc.cached_results
            dependency_audit = DependencyAudit(cache_hits=exc.cache_hits, cache_misses=exc.cache_misses)
        warnings.extend(dependency_audit.warnings)
    elif manifest_error is None:
        logger.info("No dependencies declared; skipping vulnerability lookup")

    if engine is None:
        engine = PatternRuleEngine(source_suffixes=config.source_suffixes)
    sast_scan = SastScan()
    sast_error: str | None = None
    logger.info("Scanning sources under %s", root)
    try:
        sast_scan = engine.scan_with_stats(root)
    except WalkFailureError as exc:
        sast_error = str(exc)
        logger.warning("%s", exc)
    warnings.extend(sast_scan.warnings)

    return AuditReport(
        root=root,
        dependencies_scanned=len(coordinates),
        vulnerable=dependency_audit.results or cached_on_failure,
        sast_findings=sast_scan.findings,
        files_scanned=sast_scan.files_scanned,
        manifest_error=manifest_error,
        lookup_error=lookup_error,
        sast_error=sast_error,
        warnings=tuple(warnings),
        cache_hits=dependency_audit.cache_hits,
        cache_misses=dependency_audit.cache_misses,
        duration_seconds=time.perf_counter() - started_at,
    )


def _build_cache(config: JauditConfig, *, use_cache: bool) -> ResultCache:
    if not use_cache:
        return _EphemeralCache(config.cache_path, ttl=config.cache_ttl)
    return ResultCache(config.cache_path, ttl=config.cache_ttl)


def _load_cache(cache: ResultCache, warnings: list[str]) -> None:
    try:
        cache.load()
    except CorruptStoreError as exc:
        warning = f"{exc}; starting with an empty cache"
        warnings.append(warning)
        logger.warning(warning)
