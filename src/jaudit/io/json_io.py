"""JSON helpers for the cache store and report files."""

from __future__ import annotations

import json
import os
import tempfile
from contextlib import suppress
from pathlib import Path


def load_json_file(path: Path) -> object:
    """Load and parse JSON from disk."""
    return json.loads(path.read_text(encoding="utf-8"))


def read_json_object(path: Path) -> dict[str, object] | None:
    """Return the top-level JSON object stored at *path*.

    Returns ``None`` when the file does not exist. Raises ``OSError`` for read
    failures and ``ValueError`` when the content is not a JSON object.
    """
    try:
        payload = load_json_file(path)
    except FileNotFoundError:
        return None
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return payload


def write_json_atomic(
    *,
    path: Path,
    payload: object,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Write JSON next to *path* in a temp file, flush it, then rename over *path*.

    Readers never observe a partially written file; the temp file is removed if
    serialization fails.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=temp_prefix, suffix=temp_suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True)
            handle.write("\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except BaseException:
        with suppress(FileNotFoundError):
            Path(temp_name).unlink()
        raise
