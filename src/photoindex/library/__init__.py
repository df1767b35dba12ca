"""Read-only access to the indexed photo root."""

from .manager import PhotoManager

__all__ = ["PhotoManager"]
