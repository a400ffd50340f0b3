"""Result cache exceptions."""

from __future__ import annotations

from pathlib import Path

from jaudit.exceptions.base import JauditError


class CorruptStoreError(JauditError):
    """Raised when the persisted cache exists but cannot be decoded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Corrupt cache store at {path}: {reason}")
        self.path = path
        self.reason = reason


class CacheSaveError(JauditError):
    """Raised when the cache cannot be written back to disk."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Failed to save cache to {path}: {reason}")
        self.path = path
        self.reason = reason
