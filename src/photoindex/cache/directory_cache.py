"""Per-date memoisation of date folder listings.

Date folders are treated as historical: once a folder has been listed its
entries are kept for the lifetime of the cache and never re-read.  Files added
to an already-scanned date therefore stay invisible until the process (or the
owning :class:`~photoindex.library.manager.PhotoManager`) is recreated.  New
date folders are unaffected because the list of dates itself is re-read on
every rebuild.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Optional, Tuple

from ..events.bus import EventBus
from ..events.index_events import DateFolderScannedEvent
from ..io.scanner import DirectoryLister, LocalDirectoryLister, list_date_entries
from ..utils.logging import get_logger
from .single_flight import SingleFlight

LOGGER = get_logger(__name__)


class DirectoryEntryCache:
    """Lazily list and remember the files of each date folder under *root*.

    Concurrent requests for a date that is not cached yet share one directory
    read.  Failed reads are not cached, so the next request retries.
    """

    def __init__(
        self,
        root: Path,
        lister: Optional[DirectoryLister] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._root = Path(root)
        self._lister: DirectoryLister = lister or LocalDirectoryLister()
        self._events = event_bus
        self._entries: Dict[str, Tuple[str, ...]] = {}
        self._lock = threading.Lock()
        self._flight: SingleFlight[str, Tuple[str, ...]] = SingleFlight("directory-cache")
        self._read_count = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def root(self) -> Path:
        return self._root

    @property
    def read_count(self) -> int:
        """Number of folder listings that actually hit the filesystem."""

        with self._lock:
            return self._read_count

    def entries(self, date_key: str) -> Tuple[str, ...]:
        """Return the files of *date_key*, newest first."""

        cached = self._get(date_key)
        if cached is not None:
            return cached
        return self._flight.do(date_key, lambda: self._load(date_key))

    def cached_keys(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(self._entries)

    def __contains__(self, date_key: object) -> bool:
        with self._lock:
            return date_key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _get(self, date_key: str) -> Optional[Tuple[str, ...]]:
        with self._lock:
            return self._entries.get(date_key)

    def _load(self, date_key: str) -> Tuple[str, ...]:
        # A flight for this key may have finished between the cache miss and
        # this call becoming the leader.
        cached = self._get(date_key)
        if cached is not None:
            return cached

        entries = list_date_entries(self._root / date_key, self._lister)
        with self._lock:
            self._entries[date_key] = entries
            self._read_count += 1
        LOGGER.debug("Listed %d entries for %s", len(entries), date_key)
        if self._events is not None:
            self._events.publish(
                DateFolderScannedEvent(
                    date_key=date_key, entry_count=len(entries), source="directory-cache"
                )
            )
        return entries


__all__ = ["DirectoryEntryCache"]
