"""Schema helpers for the settings file."""

from __future__ import annotations

import os
from copy import deepcopy
from typing import Any

from jsonschema import Draft202012Validator

from ..config import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_LATEST_AMOUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PAGINATION_THRESHOLD,
)

SETTINGS_SCHEMA: dict[str, Any] = {
    "$id": "photoindex/settings.schema.json",
    "type": "object",
    "required": ["schema", "cache_ttl_ms", "pagination_threshold"],
    "properties": {
        "schema": {"const": "photoindex/settings@1"},
        "photo_root_path": {"type": ["string", "null"]},
        "cache_ttl_ms": {"type": "integer", "minimum": 0},
        "pagination_threshold": {"type": "integer", "minimum": 1},
        "latest_amount": {"type": "integer", "minimum": 1},
        "log_level": {
            "type": "string",
            "enum": ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        },
    },
    "additionalProperties": True,
}

DEFAULT_SETTINGS: dict[str, Any] = {
    "schema": "photoindex/settings@1",
    "photo_root_path": None,
    "cache_ttl_ms": DEFAULT_CACHE_TTL_MS,
    "pagination_threshold": DEFAULT_PAGINATION_THRESHOLD,
    "latest_amount": DEFAULT_LATEST_AMOUNT,
    "log_level": DEFAULT_LOG_LEVEL,
}

_validator = Draft202012Validator(SETTINGS_SCHEMA)


def merge_with_defaults(data: dict[str, Any] | None) -> dict[str, Any]:
    """Merge *data* with :data:`DEFAULT_SETTINGS` and validate the result."""

    merged = deepcopy(DEFAULT_SETTINGS)
    if data:
        for key, value in data.items():
            if key == "photo_root_path" and value not in {None, ""}:
                try:
                    merged[key] = os.fspath(value)
                except TypeError:
                    continue
                continue
            if key == "log_level" and isinstance(value, str):
                merged[key] = value.upper()
                continue
            merged[key] = value
    _validator.validate(merged)
    return merged


def validate_settings(data: dict[str, Any]) -> None:
    """Validate *data* against the settings schema."""

    _validator.validate(data)


__all__ = ["DEFAULT_SETTINGS", "SETTINGS_SCHEMA", "merge_with_defaults", "validate_settings"]
