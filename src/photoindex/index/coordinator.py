"""Time-to-live refresh of the published :class:`Snapshot`."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..config import DEFAULT_CACHE_TTL_MS
from ..events.bus import EventBus
from ..events.index_events import SnapshotRebuildFailedEvent, SnapshotRebuiltEvent
from ..cache.single_flight import SingleFlight
from ..utils.logging import get_logger
from .snapshot import Snapshot

LOGGER = get_logger(__name__)

_REBUILD_KEY = "snapshot"


class SnapshotSource(Protocol):
    def build(self) -> Snapshot: ...


@dataclass(slots=True, frozen=True)
class _State:
    snapshot: Snapshot
    built_at: float
    checked_at: float
    """Clock reading of the last rebuild attempt, successful or not."""
    invalidated: bool = False


class RefreshCoordinator:
    """Own the current snapshot and rebuild it when it goes stale.

    * Readers call :meth:`snapshot`; a fresh snapshot is returned without
      locking, a stale or missing one is rebuilt synchronously first.
    * Concurrent stale readers share a single rebuild.
    * A rebuild publishes by replacing one attribute, so readers see either
      the old snapshot or the new one and nothing in between.
    * A failed rebuild publishes nothing.  The callers attached to it get the
      exception; everybody else keeps the previous snapshot until the TTL has
      elapsed again, at which point the next reader retries.
    """

    def __init__(
        self,
        source: SnapshotSource,
        ttl_ms: float = DEFAULT_CACHE_TTL_MS,
        clock: Callable[[], float] = time.monotonic,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._source = source
        self._ttl = max(0.0, float(ttl_ms)) / 1000.0
        self._clock = clock
        self._events = event_bus
        self._state: Optional[_State] = None
        self._lock = threading.Lock()
        self._flight: SingleFlight[str, Snapshot] = SingleFlight("snapshot")
        self._rebuild_count = 0
        self._failure_count = 0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    @property
    def ttl_ms(self) -> float:
        return self._ttl * 1000.0

    @property
    def current(self) -> Optional[Snapshot]:
        """The published snapshot, without any freshness check."""

        state = self._state
        return state.snapshot if state is not None else None

    @property
    def rebuild_count(self) -> int:
        return self._rebuild_count

    @property
    def failure_count(self) -> int:
        return self._failure_count

    def is_fresh(self) -> bool:
        return self._is_fresh(self._state)

    def snapshot(self) -> Snapshot:
        state = self._state
        if state is not None and self._is_fresh(state):
            return state.snapshot
        return self._flight.do(_REBUILD_KEY, self._rebuild)

    def invalidate(self) -> None:
        """Force the next :meth:`snapshot` call to rebuild."""

        with self._lock:
            state = self._state
            if state is not None:
                self._state = _State(state.snapshot, state.built_at, state.checked_at, True)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _is_fresh(self, state: Optional[_State]) -> bool:
        if state is None or state.invalidated:
            return False
        return self._clock() - state.checked_at < self._ttl

    def _rebuild(self) -> Snapshot:
        # The previous flight may have published while this caller was
        # deciding to start a new one.
        state = self._state
        if state is not None and self._is_fresh(state):
            return state.snapshot

        started = self._clock()
        try:
            snapshot = self._source.build()
        except Exception as exc:
            finished = self._clock()
            with self._lock:
                self._failure_count += 1
                previous = self._state
                if previous is not None:
                    self._state = _State(previous.snapshot, previous.built_at, finished)
            LOGGER.warning("Snapshot rebuild failed after %.3fs: %s", finished - started, exc)
            self._publish(SnapshotRebuildFailedEvent(
                error=exc, duration_seconds=finished - started, source="refresh-coordinator"
            ))
            raise

        finished = self._clock()
        with self._lock:
            self._state = _State(snapshot, finished, finished)
            self._rebuild_count += 1
        LOGGER.info(
            "Published snapshot: %d dates, %d pictures, %d pages (%.3fs)",
            len(snapshot.date_keys),
            len(snapshot.pictures),
            len(snapshot.pages),
            finished - started,
        )
        self._publish(SnapshotRebuiltEvent(
            date_count=len(snapshot.date_keys),
            picture_count=len(snapshot.pictures),
            page_count=len(snapshot.pages),
            duration_seconds=finished - started,
            source="refresh-coordinator",
        ))
        return snapshot

    def _publish(self, event) -> None:
        if self._events is not None:
            self._events.publish(event)


__all__ = ["RefreshCoordinator", "SnapshotSource"]
