"""Dependency audit orchestration: cache partitioning, batch lookup, merge, persist."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from jaudit.exceptions import CacheSaveError, LookupPhaseError, ProtocolMismatchError, RemoteLookupError
from jaudit.model import DependencyAudit, PackageCoordinate, ScanResult
from jaudit.scanner.cache import ResultCache
from jaudit.scanner.osv_client import BatchLookupClient
from jaudit.scanner.pipeline.partition import partition_coordinates

logger = logging.getLogger(__name__)


class AuditOrchestrator:
    """Resolve vulnerabilities for a dependency list using a cache in front of one batch query.

    Fully cached input (including the empty list) never touches the network.
    Fresh answers are cached unconditionally, so packages found clean are not
    queried again until their entry expires. A failed lookup caches nothing and
    raises ``LookupPhaseError`` carrying whatever the cache already answered.
    """

    def __init__(self, cache: ResultCache, client: BatchLookupClient) -> None:
        self._cache = cache
        self._client = client

    def run(self, coordinates: Sequence[PackageCoordinate]) -> DependencyAudit:
        partition = partition_coordinates(coordinates, self._cache)
        cached_results = partition.cached_results
        pending = partition.pending
        cache_hits = len(partition.cached)
        logger.info("Dependency cache: %d hits, %d misses", cache_hits, len(pending))

        if not pending:
            return DependencyAudit(results=cached_results, cache_hits=cache_hits)

        mutated = False
        warnings: list[str] = []
        try:
            try:
                responses = self._client.lookup(pending)
                if len(responses) != len(pending):
                    raise ProtocolMismatchError(expected=len(pending), actual=len(responses))
            except RemoteLookupError as exc:
                logger.warning("Vulnerability lookup failed: %s", exc)
                raise LookupPhaseError(
                    exc,
                    cached_results,
                    cache_hits=cache_hits,
                    cache_misses=len(pending),
                ) from exc

            fresh_results: list[ScanResult] = []
            for coordinate, records in zip(pending, responses, strict=True):
                self._cache.set(coordinate.cache_key, records)
                mutated = True
                if records:
                    fresh_results.append(ScanResult(coordinate=coordinate, records=records))
        finally:
            if mutated:
                warning = self._persist()
                if warning is not None:
                    warnings.append(warning)

        return DependencyAudit(
            results=(*cached_results, *fresh_results),
            cache_hits=cache_hits,
            cache_misses=len(pending),
            queried=len(pending),
            warnings=tuple(warnings),
        )

    def _persist(self) -> str | None:
        try:
            self._cache.save()
        except CacheSaveError as exc:
            logger.warning("%s", exc)
            return str(exc)
        return None


def audit_dependencies(
    coordinates: Sequence[PackageCoordinate],
    *,
    cache: ResultCache,
    client: BatchLookupClient,
) -> DependencyAudit:
    """Run one dependency audit with the given cache and lookup client."""
    return AuditOrchestrator(cache, client).run(coordinates)
