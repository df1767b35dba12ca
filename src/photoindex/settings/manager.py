"""Settings file management with validation and change notifications."""

from __future__ import annotations

import os
import sys
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

from jsonschema import ValidationError

from ..config import (
    DEFAULT_CACHE_TTL_MS,
    DEFAULT_LATEST_AMOUNT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PAGINATION_THRESHOLD,
    ENV_CACHE_TTL_MS,
    ENV_PAGINATION_THRESHOLD,
    ENV_PHOTO_ROOT,
    SETTINGS_DIR_NAME,
    SETTINGS_FILE_NAME,
)
from ..errors import NotConfiguredError, SettingsLoadError, SettingsValidationError
from ..events.bus import EventBus
from ..events.index_events import SettingsChangedEvent
from ..utils.jsonio import read_json, write_json
from .schema import DEFAULT_SETTINGS, merge_with_defaults


def default_settings_path() -> Path:
    """Return the default settings.json location for the current platform."""

    if os.name == "nt":
        base = os.environ.get("APPDATA")
        if base:
            return Path(base) / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME
        return Path.home() / "AppData" / "Roaming" / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME
    if sys.platform == "darwin":
        return (
            Path.home() / "Library" / "Application Support" / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME
        )
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME
    return Path.home() / ".config" / SETTINGS_DIR_NAME / SETTINGS_FILE_NAME


class SettingsManager:
    """Load, validate and persist the settings file."""

    def __init__(self, path: Path | None = None, event_bus: EventBus | None = None) -> None:
        self._path = path
        self._events = event_bus
        self._data: dict[str, Any] = deepcopy(DEFAULT_SETTINGS)

    @property
    def path(self) -> Path:
        return self._path or default_settings_path()

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------
    def load(self, *, create: bool = False) -> None:
        """Load the settings JSON from disk.

        A missing file leaves the defaults in place; with ``create=True`` the
        defaults are written out so the user has a file to edit.
        """

        path = self.path
        self._path = path
        payload = read_json(path) if path.exists() else None
        try:
            self._data = merge_with_defaults(payload)
        except ValidationError as exc:
            raise SettingsValidationError(f"{path}: {exc.message}") from exc
        if create and payload is None:
            self._write()

    def get(self, key: str, default: Any | None = None) -> Any:
        """Return the value for *key*, supporting dotted access for nested keys."""

        target: Any = self._data
        parts = key.split(".")
        for index, part in enumerate(parts):
            if not isinstance(target, dict) or part not in target:
                return default
            value = target[part]
            if index == len(parts) - 1:
                return value
            target = value
        return default

    def set(self, key: str, value: Any) -> None:
        """Update *key* with *value* and persist the change."""

        if isinstance(value, Path):
            value = str(value)

        candidate = deepcopy(self._data)
        parts = key.split(".")
        target: dict[str, Any] = candidate
        for part in parts[:-1]:
            branch = target.get(part)
            if not isinstance(branch, dict):
                branch = {}
                target[part] = branch
            target = branch
        target[parts[-1]] = value
        try:
            self._data = merge_with_defaults(candidate)
        except ValidationError as exc:
            raise SettingsValidationError(f"{key}: {exc.message}") from exc
        self._write()
        if self._events is not None:
            self._events.publish(SettingsChangedEvent(key=key, value=value, source="settings"))

    def as_dict(self) -> dict[str, Any]:
        return deepcopy(self._data)

    # ------------------------------------------------------------------
    # Internal utilities
    # ------------------------------------------------------------------
    def _write(self) -> None:
        path = self.path
        self._path = path
        path.parent.mkdir(parents=True, exist_ok=True)
        write_json(path, self._data)


@dataclass(slots=True, frozen=True)
class Settings:
    """Resolved configuration handed to :class:`~photoindex.library.manager.PhotoManager`."""

    photo_root_path: Path
    cache_ttl_ms: int = DEFAULT_CACHE_TTL_MS
    pagination_threshold: int = DEFAULT_PAGINATION_THRESHOLD
    latest_amount: int = DEFAULT_LATEST_AMOUNT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_manager(
        cls,
        manager: SettingsManager,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Settings":
        """Build settings from *manager*, letting environment variables win."""

        environ = os.environ if environ is None else environ
        root = environ.get(ENV_PHOTO_ROOT) or manager.get("photo_root_path")
        if not root:
            raise NotConfiguredError(
                f"No photo root configured; set photo_root_path in {manager.path} "
                f"or the {ENV_PHOTO_ROOT} environment variable."
            )
        return cls(
            photo_root_path=Path(root).expanduser(),
            cache_ttl_ms=_env_int(environ, ENV_CACHE_TTL_MS, manager.get("cache_ttl_ms"), minimum=0),
            pagination_threshold=_env_int(
                environ, ENV_PAGINATION_THRESHOLD, manager.get("pagination_threshold"), minimum=1
            ),
            latest_amount=manager.get("latest_amount", DEFAULT_LATEST_AMOUNT),
            log_level=manager.get("log_level", DEFAULT_LOG_LEVEL),
        )

    @classmethod
    def load(cls, path: Path | None = None, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        manager = SettingsManager(path)
        manager.load()
        return cls.from_manager(manager, environ)


def _env_int(environ: Mapping[str, str], name: str, fallback: int, *, minimum: int) -> int:
    raw = environ.get(name)
    if raw is None or raw == "":
        return fallback
    try:
        value = int(raw)
    except ValueError as exc:
        raise SettingsLoadError(f"{name} must be an integer, got {raw!r}") from exc
    if value < minimum:
        raise SettingsValidationError(f"{name} must be >= {minimum}, got {value}")
    return value


__all__ = ["Settings", "SettingsManager", "default_settings_path"]
