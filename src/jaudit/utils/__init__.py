"""Small shared utilities."""

from .locking import ReadWriteLock

__all__ = ["ReadWriteLock"]
