"""In-process caches used while building the photo index."""

from .directory_cache import DirectoryEntryCache
from .single_flight import SingleFlight

__all__ = ["DirectoryEntryCache", "SingleFlight"]
