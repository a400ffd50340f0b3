"""Shared pytest fixtures for jaudit tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from jaudit.exceptions import RemoteLookupError
from jaudit.model import PackageCoordinate, SeverityScore, VulnerabilityRecord
from jaudit.scanner.cache import ResultCache


class FakeClock:
    """Manually advanced clock returning aware UTC datetimes."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 15, 12, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class FakeLookupClient:
    """Stand-in for ``BatchLookupClient`` that records every batch it receives."""

    url = "https://osv.test/v1/querybatch"

    def __init__(
        self,
        responses: dict[str, tuple[VulnerabilityRecord, ...]] | None = None,
        *,
        error: RemoteLookupError | None = None,
        raw_response: list[tuple[VulnerabilityRecord, ...]] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.error = error
        self.raw_response = raw_response
        self.calls: list[list[PackageCoordinate]] = []

    def lookup(self, coordinates: Sequence[PackageCoordinate]) -> list[tuple[VulnerabilityRecord, ...]]:
        self.calls.append(list(coordinates))
        if self.error is not None:
            raise self.error
        if self.raw_response is not None:
            return list(self.raw_response)
        return [self.responses.get(coordinate.cache_key, ()) for coordinate in coordinates]


def make_record(vuln_id: str = "GHSA-xxxx-0001", **overrides: object) -> VulnerabilityRecord:
    """Create a VulnerabilityRecord with sensible defaults."""
    values: dict[str, object] = {
        "id": vuln_id,
        "summary": f"Summary for {vuln_id}",
        "details": "",
        "severities": (SeverityScore(kind="CVSS_V3", score="CVSS:3.1/AV:N/AC:L/PR:N/UI:N/S:U/C:H/I:H/A:H"),),
        "references": (f"https://osv.dev/vulnerability/{vuln_id}",),
        "fixed_versions": ("2.0.0",),
    }
    values.update(overrides)
    return VulnerabilityRecord(**values)  # type: ignore[arg-type]


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "home" / ".jaudit" / "vuln_cache.json"


@pytest.fixture()
def cache(cache_path: Path, clock: FakeClock) -> ResultCache:
    return ResultCache(cache_path, clock=clock)


@pytest.fixture()
def log4j() -> PackageCoordinate:
    return PackageCoordinate(group="org.apache.logging.log4j", artifact="log4j-core", version="2.14.1")


@pytest.fixture()
def guava() -> PackageCoordinate:
    return PackageCoordinate(group="com.google.guava", artifact="guava", version="31.1-jre")


@pytest.fixture()
def record_factory() -> Callable[..., VulnerabilityRecord]:
    return make_record


@pytest.fixture()
def client_factory() -> type[FakeLookupClient]:
    return FakeLookupClient
