"""Config data model for jaudit runs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from pathlib import Path

from jaudit.constants.cache import CACHE_TTL
from jaudit.constants.osv import DEFAULT_LOOKUP_TIMEOUT_SECONDS, OSV_QUERY_BATCH_URL
from jaudit.constants.sast import DEFAULT_SOURCE_SUFFIXES


@dataclass(frozen=True)
class JauditConfig:
    """Resolved audit config."""

    osv_url: str = OSV_QUERY_BATCH_URL
    timeout_seconds: float = DEFAULT_LOOKUP_TIMEOUT_SECONDS
    cache_ttl: timedelta = CACHE_TTL
    cache_path: Path | None = None
    source_suffixes: tuple[str, ...] = DEFAULT_SOURCE_SUFFIXES
