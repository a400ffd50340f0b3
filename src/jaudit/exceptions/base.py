"""Root of the jaudit exception hierarchy."""

from __future__ import annotations


class JauditError(Exception):
    """Base class for all errors raised by jaudit."""
