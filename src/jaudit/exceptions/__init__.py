"""Shared exception hierarchy for jaudit."""

from __future__ import annotations

from .base import JauditError
from .cache import CacheSaveError, CorruptStoreError
from .config import ConfigError
from .lookup import (
    DecodeError,
    LookupPhaseError,
    ProtocolMismatchError,
    RemoteLookupError,
    ServerError,
    TransportError,
)
from .manifest import ManifestUnavailableError
from .sast import FileUnreadableError, WalkFailureError

__all__ = [
    "CacheSaveError",
    "ConfigError",
    "CorruptStoreError",
    "DecodeError",
    "FileUnreadableError",
    "JauditError",
    "LookupPhaseError",
    "ManifestUnavailableError",
    "ProtocolMismatchError",
    "RemoteLookupError",
    "ServerError",
    "TransportError",
    "WalkFailureError",
]
