"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "jaudit.yaml"

CONFIG_ALLOWED_KEYS: frozenset[str] = frozenset(
    {
        "osv_url",
        "timeout_seconds",
        "cache_ttl_hours",
        "cache_path",
        "source_suffixes",
    }
)
