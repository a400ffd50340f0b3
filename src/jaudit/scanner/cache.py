"""Persistent, TTL-bounded cache of vulnerability lookup results."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime, timedelta
from pathlib import Path
from typing import TypeAlias

from jaudit.constants.cache import (
    CACHE_DIRNAME,
    CACHE_FILENAME,
    CACHE_RESULT_KEY,
    CACHE_TEMP_PREFIX,
    CACHE_TEMP_SUFFIX,
    CACHE_TIMESTAMP_KEY,
    CACHE_TTL,
)
from jaudit.exceptions import CacheSaveError, CorruptStoreError
from jaudit.io import read_json_object, write_json_atomic
from jaudit.model import CacheEntry, VulnerabilityRecord
from jaudit.scanner.pipeline.conversion import records_from_list, records_to_list
from jaudit.types import CacheEntryPayload, CachePayload
from jaudit.utils import ReadWriteLock

logger = logging.getLogger(__name__)

Clock: TypeAlias = Callable[[], datetime]


def default_cache_path() -> Path:
    """Return the per-user cache location under the home directory."""
    return Path.home() / CACHE_DIRNAME / CACHE_FILENAME


def utc_now() -> datetime:
    return datetime.now(UTC)


class ResultCache:
    """Key to vulnerability-records store with lazy time-based expiry.

    Expired entries read as misses but stay in the map until a later ``set``
    replaces them. An entry with no records is a valid "known safe" answer.
    ``get`` calls share the lock; ``set`` holds it exclusively. ``load`` and
    ``save`` belong at the start and end of a run.
    """

    def __init__(
        self,
        path: Path | None = None,
        *,
        ttl: timedelta = CACHE_TTL,
        clock: Clock = utc_now,
    ) -> None:
        self._path = path if path is not None else default_cache_path()
        self._ttl = ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}
        self._lock = ReadWriteLock()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def __len__(self) -> int:
        with self._lock.read_locked():
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock.read_locked():
            return key in self._entries

    def load(self) -> None:
        """Replace in-memory state with the persisted store.

        A missing file yields an empty cache. Unreadable or malformed content
        leaves the cache empty and raises ``CorruptStoreError``.
        """
        with self._lock.write_locked():
            self._entries = {}
            try:
                payload = read_json_object(self._path)
            except (OSError, ValueError) as exc:
                raise CorruptStoreError(self._path, str(exc)) from exc
            if payload is None:
                logger.debug("No cache store at %s; starting empty", self._path)
                return
            self._entries = _entries_from_payload(payload)
        logger.debug("Loaded %d cache entries from %s", len(self._entries), self._path)

    def save(self) -> None:
        """Persist every entry, overwriting the previous store."""
        with self._lock.read_locked():
            payload = _payload_from_entries(self._entries)
        try:
            write_json_atomic(
                path=self._path,
                payload=payload,
                temp_prefix=CACHE_TEMP_PREFIX,
                temp_suffix=CACHE_TEMP_SUFFIX,
            )
        except (OSError, TypeError, ValueError) as exc:
            raise CacheSaveError(self._path, str(exc)) from exc
        logger.debug("Saved %d cache entries to %s", len(payload), self._path)

    def get(self, key: str) -> tuple[tuple[VulnerabilityRecord, ...], bool]:
        """Return ``(records, found)``; expired entries count as not found."""
        with self._lock.read_locked():
            entry = self._entries.get(key)
        if entry is None:
            return (), False
        if self._clock() - entry.stored_at >= self._ttl:
            return (), False
        return entry.records, True

    def set(self, key: str, records: Iterable[VulnerabilityRecord]) -> None:
        """Store *records* for *key* stamped with the current time."""
        entry = CacheEntry(stored_at=self._clock(), records=tuple(records))
        with self._lock.write_locked():
            self._entries[key] = entry


def _entries_from_payload(payload: dict[str, object]) -> dict[str, CacheEntry]:
    entries: dict[str, CacheEntry] = {}
    for key, value in payload.items():
        entry = _entry_from_payload(value)
        if entry is None:
            logger.debug("Skipping unusable cache entry %r", key)
            continue
        entries[key] = entry
    return entries


def _entry_from_payload(value: object) -> CacheEntry | None:
    if not isinstance(value, dict):
        return None
    stored_at = _parse_timestamp(value.get(CACHE_TIMESTAMP_KEY))
    if stored_at is None:
        return None
    raw_records = value.get(CACHE_RESULT_KEY)
    if raw_records is not None and not isinstance(raw_records, list):
        return None
    return CacheEntry(stored_at=stored_at, records=records_from_list(raw_records))


def _parse_timestamp(raw: object) -> datetime | None:
    if not isinstance(raw, str):
        return None
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _payload_from_entries(entries: dict[str, CacheEntry]) -> CachePayload:
    payload: CachePayload = {}
    for key, entry in entries.items():
        item: CacheEntryPayload = {
            "timestamp": entry.stored_at.isoformat(),
            "result": records_to_list(entry.records),
        }
        payload[key] = item
    return payload
