"""Dependency lookup and source scanning package."""

from __future__ import annotations

from typing import Any

__all__ = ["run_audit"]


def __getattr__(name: str) -> Any:
    """Lazily expose scanner APIs to avoid import cycles at package import time."""
    if name == "run_audit":
        from .runner import run_audit

        return run_audit
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
