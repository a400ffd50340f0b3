"""Split requested coordinates into cache hits and pending lookups."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from jaudit.model import PackageCoordinate, ScanResult, VulnerabilityRecord
from jaudit.scanner.cache import ResultCache


@dataclass(frozen=True)
class Partition:
    """Cache hits (with their possibly empty records) and misses in input order."""

    cached: tuple[tuple[PackageCoordinate, tuple[VulnerabilityRecord, ...]], ...]
    pending: tuple[PackageCoordinate, ...]

    @property
    def cached_results(self) -> tuple[ScanResult, ...]:
        """Hits that carry at least one advisory."""
        return tuple(
            ScanResult(coordinate=coordinate, records=records) for coordinate, records in self.cached if records
        )


def unique_coordinates(coordinates: Iterable[PackageCoordinate]) -> list[PackageCoordinate]:
    """Drop repeated coordinates, keeping the first occurrence."""
    seen: set[str] = set()
    unique: list[PackageCoordinate] = []
    for coordinate in coordinates:
        key = coordinate.cache_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(coordinate)
    return unique


def partition_coordinates(coordinates: Iterable[PackageCoordinate], cache: ResultCache) -> Partition:
    """Look each distinct coordinate up in *cache*."""
    cached: list[tuple[PackageCoordinate, tuple[VulnerabilityRecord, ...]]] = []
    pending: list[PackageCoordinate] = []
    for coordinate in unique_coordinates(coordinates):
        records, found = cache.get(coordinate.cache_key)
        if found:
            cached.append((coordinate, records))
        else:
            pending.append(coordinate)
    return Partition(cached=tuple(cached), pending=tuple(pending))
