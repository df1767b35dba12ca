"""Custom exception hierarchy for photoindex."""

from __future__ import annotations

from pathlib import Path


class PhotoIndexError(Exception):
    """Base class for all custom errors raised by photoindex."""


# --- 3-layer hierarchy ---

class DomainError(PhotoIndexError):
    """Base class for domain-level errors."""


class InfrastructureError(PhotoIndexError):
    """Base class for infrastructure-level errors."""


class ApplicationError(PhotoIndexError):
    """Base class for application-level errors."""


# --- Domain errors ---

class MalformedDateKeyError(DomainError):
    """Raised when a date folder name cannot be parsed as ``YYYYMMDD``."""

    def __init__(self, key: object) -> None:
        super().__init__(f"Malformed date folder name: {key!r}")
        self.key = key


class DateNotFoundError(DomainError):
    """Raised when the requested date folder is not part of the index."""


class PictureNotFoundError(DomainError):
    """Raised when the requested picture is not part of the index."""


class PageOutOfRangeError(DomainError):
    """Raised when a 1-indexed page number falls outside the paginated view."""


# --- Infrastructure errors ---

class FilesystemError(InfrastructureError):
    """Raised when a directory or file cannot be read during a rebuild."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = path


# --- Application errors ---

class NotConfiguredError(ApplicationError):
    """Raised when the photo root has not been configured."""


# --- DI-specific errors ---

class CircularDependencyError(PhotoIndexError):
    """Raised when a circular dependency is detected during resolution."""


class ResolutionError(PhotoIndexError):
    """Raised when a dependency cannot be resolved."""


# --- Settings ---

class SettingsError(PhotoIndexError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""
