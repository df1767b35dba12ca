"""In-memory index of dated photo folders."""

from .library.manager import PhotoManager
from .settings.manager import Settings, SettingsManager

__all__ = ["PhotoManager", "Settings", "SettingsManager"]

__version__ = "0.3.0"
