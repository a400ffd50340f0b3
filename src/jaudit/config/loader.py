"""Config loading and normalization for jaudit runs."""

from __future__ import annotations

import difflib
from datetime import timedelta
from pathlib import Path
from typing import Any

import yaml

from jaudit.config.model import JauditConfig
from jaudit.constants.config import CONFIG_ALLOWED_KEYS, CONFIG_FILENAME
from jaudit.constants.sast import DEFAULT_SOURCE_SUFFIXES
from jaudit.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> JauditConfig:
    """Load and validate config from ``jaudit.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return JauditConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Cannot read config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in CONFIG_ALLOWED_KEYS)
    if unknown:
        hints = [_suggest_key(key) for key in unknown]
        details = ", ".join(f"{key}{hint}" for key, hint in zip(unknown, hints, strict=True))
        raise ConfigError(f"Unknown config key(s) in {path}: {details}")

    osv_url = raw.get("osv_url", JauditConfig.osv_url)
    if not isinstance(osv_url, str) or not osv_url.startswith(("http://", "https://")):
        raise ConfigError("osv_url must be an http(s) URL")

    timeout_seconds = _positive_number(raw.get("timeout_seconds", JauditConfig.timeout_seconds), "timeout_seconds")
    ttl_hours = _positive_number(
        raw.get("cache_ttl_hours", JauditConfig.cache_ttl.total_seconds() / 3600),
        "cache_ttl_hours",
    )

    cache_path_raw = raw.get("cache_path")
    cache_path: Path | None = None
    if cache_path_raw is not None:
        if not isinstance(cache_path_raw, str) or not cache_path_raw.strip():
            raise ConfigError("cache_path must be a non-empty string")
        cache_path = Path(cache_path_raw.strip()).expanduser()
        if not cache_path.is_absolute():
            cache_path = root / cache_path

    suffixes = _ensure_string_list(raw.get("source_suffixes", list(DEFAULT_SOURCE_SUFFIXES)), "source_suffixes")
    source_suffixes = tuple(_normalize_suffix(suffix) for suffix in suffixes if suffix.strip())
    if not source_suffixes:
        raise ConfigError("source_suffixes must list at least one suffix")

    return JauditConfig(
        osv_url=osv_url,
        timeout_seconds=timeout_seconds,
        cache_ttl=timedelta(hours=ttl_hours),
        cache_path=cache_path,
        source_suffixes=source_suffixes,
    )


def _positive_number(value: Any, key_name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        raise ConfigError(f"{key_name} must be a positive number")
    return float(value)


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)


def _normalize_suffix(suffix: str) -> str:
    suffix = suffix.strip()
    return suffix if suffix.startswith(".") else f".{suffix}"


def _suggest_key(key: str) -> str:
    matches = difflib.get_close_matches(key, sorted(CONFIG_ALLOWED_KEYS), n=1)
    return f" (did you mean '{matches[0]}'?)" if matches else ""
