"""Configuration-related exceptions."""

from __future__ import annotations

from jaudit.exceptions.base import JauditError


class ConfigError(JauditError, ValueError):
    """Raised when audit configuration is invalid."""
