"""Accessor surface over the refreshed photo index."""

from __future__ import annotations

import time
from pathlib import Path
from typing import Callable, Optional, Tuple

from ..cache.directory_cache import DirectoryEntryCache
from ..config import DEFAULT_CACHE_TTL_MS, DEFAULT_LATEST_AMOUNT, DEFAULT_PAGINATION_THRESHOLD
from ..errors import PageOutOfRangeError, PictureNotFoundError
from ..errors.handler import ErrorHandler
from ..events.bus import EventBus
from ..index.builder import SnapshotBuilder
from ..index.coordinator import RefreshCoordinator
from ..index.snapshot import Snapshot
from ..io.scanner import DirectoryLister, LocalDirectoryLister
from ..models.types import DateGroup, DateNeighbors, Page, PageView, Picture, PictureView
from ..settings.manager import Settings
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


class PhotoManager:
    """Answer questions about ``<photo_root>/<YYYYMMDD>/<file>``.

    Every accessor first makes sure the index is no older than the configured
    time-to-live, rebuilding it if necessary, and then answers from a single
    snapshot.  Lookups that miss return ``None`` (or an empty tuple) rather
    than raising; rebuild failures propagate to the caller that triggered the
    rebuild.
    """

    def __init__(
        self,
        photo_root: Path,
        *,
        cache_ttl_ms: float = DEFAULT_CACHE_TTL_MS,
        pagination_threshold: object = DEFAULT_PAGINATION_THRESHOLD,
        latest_amount: int = DEFAULT_LATEST_AMOUNT,
        lister: Optional[DirectoryLister] = None,
        entry_cache: Optional[DirectoryEntryCache] = None,
        clock: Callable[[], float] = time.monotonic,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        self._root = Path(photo_root)
        lister = lister or LocalDirectoryLister()
        self._entry_cache = entry_cache or DirectoryEntryCache(self._root, lister, event_bus)
        self._builder = SnapshotBuilder(
            self._root,
            self._entry_cache,
            lister,
            pagination_threshold=pagination_threshold,
        )
        self._coordinator = RefreshCoordinator(
            self._builder, ttl_ms=cache_ttl_ms, clock=clock, event_bus=event_bus
        )
        self._latest_amount = latest_amount
        self._errors = error_handler

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "PhotoManager":
        return cls(
            settings.photo_root_path,
            cache_ttl_ms=settings.cache_ttl_ms,
            pagination_threshold=settings.pagination_threshold,
            latest_amount=settings.latest_amount,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Basic properties
    # ------------------------------------------------------------------
    @property
    def root(self) -> Path:
        return self._root

    @property
    def entry_cache(self) -> DirectoryEntryCache:
        return self._entry_cache

    @property
    def coordinator(self) -> RefreshCoordinator:
        return self._coordinator

    def snapshot(self) -> Snapshot:
        """Return a snapshot no older than the TTL, rebuilding if needed."""

        try:
            return self._coordinator.snapshot()
        except Exception as exc:
            if self._errors is not None:
                self._errors.handle(exc, context={"photo_root": str(self._root)})
            raise

    def refresh(self) -> Snapshot:
        """Rebuild now, regardless of the snapshot's age."""

        self._coordinator.invalidate()
        return self.snapshot()

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    def get_dates(self) -> Tuple[str, ...]:
        return self.snapshot().date_keys

    def get_date_references(self, date_key: str) -> Optional[DateNeighbors]:
        return self.snapshot().date_neighbors(date_key)

    # ------------------------------------------------------------------
    # Grouped and paginated views
    # ------------------------------------------------------------------
    def get_dates_with_pictures(self) -> Tuple[DateGroup, ...]:
        return self.snapshot().groups

    def get_paginated_dates_with_pictures(self) -> Tuple[Page, ...]:
        return self.snapshot().pages

    def get_page(self, page_number: int) -> Optional[PageView]:
        return self.snapshot().page(page_number)

    def require_page(self, page_number: int) -> PageView:
        snapshot = self.snapshot()
        view = snapshot.page(page_number)
        if view is None:
            raise PageOutOfRangeError(
                f"Page {page_number} is out of range (1-{snapshot.total_pages})"
            )
        return view

    # ------------------------------------------------------------------
    # Pictures
    # ------------------------------------------------------------------
    def get_pictures(self) -> Tuple[Picture, ...]:
        return self.snapshot().pictures

    def get_pictures_for_date(self, date_key: str) -> Tuple[Picture, ...]:
        return self.snapshot().pictures_for_date(date_key)

    def get_picture(self, date_key: str, filename: str) -> Optional[Picture]:
        return self.snapshot().picture(date_key, filename)

    def require_picture(self, date_key: str, filename: str) -> Picture:
        picture = self.get_picture(date_key, filename)
        if picture is None:
            raise PictureNotFoundError(f"No picture {filename!r} in {date_key!r}")
        return picture

    def get_picture_view(self, date_key: str, filename: str) -> Optional[PictureView]:
        return self.snapshot().picture_view(date_key, filename)

    def get_latest(self, amount: Optional[int] = None) -> Tuple[Picture, ...]:
        if amount is None:
            amount = self._latest_amount
        return self.snapshot().latest(amount)


__all__ = ["PhotoManager"]
