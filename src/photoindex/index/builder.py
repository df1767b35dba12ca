"""Assemble a :class:`Snapshot` from the filesystem."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from ..cache.directory_cache import DirectoryEntryCache
from ..config import DEFAULT_PAGINATION_THRESHOLD
from ..io.scanner import DirectoryLister, LocalDirectoryLister, list_date_folders
from ..utils.logging import get_logger
from .date_graph import build_date_graph
from .snapshot import Snapshot

LOGGER = get_logger(__name__)


class SnapshotBuilder:
    """Run one full rebuild: list dates, link them, index and paginate.

    The only filesystem access happens while listing the root and while the
    entry cache fills in dates it has not seen yet; everything after that is
    pure in-memory work on a snapshot nobody else can see.
    """

    def __init__(
        self,
        root: Path,
        entry_cache: Optional[DirectoryEntryCache] = None,
        lister: Optional[DirectoryLister] = None,
        pagination_threshold: object = DEFAULT_PAGINATION_THRESHOLD,
    ) -> None:
        self._root = Path(root)
        self._lister: DirectoryLister = lister or LocalDirectoryLister()
        self._entry_cache = entry_cache or DirectoryEntryCache(self._root, self._lister)
        self._pagination_threshold = pagination_threshold

    @property
    def root(self) -> Path:
        return self._root

    @property
    def entry_cache(self) -> DirectoryEntryCache:
        return self._entry_cache

    @property
    def pagination_threshold(self) -> object:
        return self._pagination_threshold

    def build(self) -> Snapshot:
        started = time.perf_counter()
        date_keys = list_date_folders(self._root, self._lister)
        dates = build_date_graph(date_keys, self._entry_cache.entries)
        snapshot = Snapshot.from_dates(dates, self._pagination_threshold)
        LOGGER.debug(
            "Built snapshot of %s: %d dates, %d pictures, %d pages in %.3fs",
            self._root,
            len(snapshot.date_keys),
            len(snapshot.pictures),
            len(snapshot.pages),
            time.perf_counter() - started,
        )
        return snapshot


__all__ = ["SnapshotBuilder"]
