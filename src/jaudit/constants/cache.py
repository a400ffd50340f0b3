"""Constants used by the vulnerability result cache."""

from __future__ import annotations

from datetime import timedelta

CACHE_DIRNAME: str = ".jaudit"
CACHE_FILENAME: str = "vuln_cache.json"
CACHE_TEMP_PREFIX: str = ".cache-"
CACHE_TEMP_SUFFIX: str = ".tmp"
CACHE_TTL: timedelta = timedelta(hours=24)

# Keys of a single persisted entry.
CACHE_TIMESTAMP_KEY: str = "timestamp"
CACHE_RESULT_KEY: str = "result"
