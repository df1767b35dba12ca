"""Helpers for JSON input/output with atomic writes."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from ..errors import SettingsLoadError


def read_json(path: Path) -> dict[str, Any]:
    """Read JSON from *path* and return a dictionary."""

    try:
        with path.open("r", encoding="utf-8") as handle:
            data = json.load(handle)
    except FileNotFoundError as exc:
        raise SettingsLoadError(f"JSON file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SettingsLoadError(f"Invalid JSON data in {path}") from exc
    if not isinstance(data, dict):
        raise SettingsLoadError(f"Expected a JSON object in {path}")
    return data


def atomic_write_text(path: Path, data: str) -> None:
    """Atomically write *data* into *path*."""

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    path.parent.mkdir(parents=True, exist_ok=True)
    with tmp_path.open("w", encoding="utf-8") as handle:
        handle.write(data)
        handle.flush()
        os.fsync(handle.fileno())
    tmp_path.replace(path)


def write_json(path: Path, data: dict[str, Any]) -> None:
    """Write *data* into *path* atomically."""

    payload = json.dumps(data, ensure_ascii=False, indent=2, sort_keys=True)
    atomic_write_text(path, payload)
