"""Configuration loading and validation for jaudit."""

from __future__ import annotations

from jaudit.config.loader import load_config
from jaudit.config.model import JauditConfig

__all__ = ["JauditConfig", "load_config"]
