"""Source pattern scan exceptions."""

from __future__ import annotations

from pathlib import Path

from jaudit.exceptions.base import JauditError


class FileUnreadableError(JauditError):
    """Raised when a single source file cannot be opened or read."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class WalkFailureError(JauditError):
    """Raised when the directory walk itself fails."""

    def __init__(self, root: Path, reason: str) -> None:
        super().__init__(f"Source tree walk failed under {root}: {reason}")
        self.root = root
        self.reason = reason
