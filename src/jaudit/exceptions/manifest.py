"""Build manifest exceptions."""

from __future__ import annotations

from jaudit.exceptions.base import JauditError


class ManifestUnavailableError(JauditError):
    """Raised when no supported build manifest can be found or parsed."""
