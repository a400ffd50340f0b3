"""Shared type aliases for jaudit."""

from .cache import CacheEntryPayload, CachePayload
from .common import JsonObject, JsonScalar, JsonValue, Severity

__all__ = [
    "CacheEntryPayload",
    "CachePayload",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "Severity",
]
