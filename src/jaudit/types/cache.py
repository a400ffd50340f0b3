"""Typed cache payload structures."""

from __future__ import annotations

from typing import TypeAlias, TypedDict

from jaudit.types.common import JsonObject


class CacheEntryPayload(TypedDict):
    """Persisted form of a single cache entry."""

    timestamp: str
    result: list[JsonObject]


CachePayload: TypeAlias = dict[str, CacheEntryPayload]
