"""Collapse concurrent calls for the same key into a single execution.

The first caller for a key (the *leader*) runs the work; callers arriving
while it is still running attach to the leader's :class:`Future` and receive
the same result, or the same exception.  Nothing is remembered once the work
finishes: the next call for the key starts a fresh flight.
"""

from __future__ import annotations

import threading
from concurrent.futures import Future
from typing import Callable, Dict, Generic, Hashable, TypeVar

from ..utils.logging import get_logger

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

LOGGER = get_logger(__name__)


class SingleFlight(Generic[K, V]):
    """Thread-safe in-flight de-duplication keyed by *K*."""

    def __init__(self, name: str = "flight") -> None:
        self._name = name
        self._lock = threading.Lock()
        self._inflight: Dict[K, Future] = {}

    def do(self, key: K, work: Callable[[], V]) -> V:
        """Run *work* for *key*, or wait for the run already in progress."""

        with self._lock:
            future = self._inflight.get(key)
            leader = future is None
            if leader:
                future = Future()
                self._inflight[key] = future

        if not leader:
            LOGGER.debug("%s: joining in-flight call for %r", self._name, key)
            return future.result()

        try:
            result = work()
        except BaseException as exc:
            future.set_exception(exc)
            raise
        else:
            future.set_result(result)
            return result
        finally:
            # Removed only after the outcome is set so late joiners never
            # observe an unresolved future that nobody will complete.
            with self._lock:
                self._inflight.pop(key, None)

    def in_flight(self, key: K) -> bool:
        with self._lock:
            return key in self._inflight

    def __len__(self) -> int:
        with self._lock:
            return len(self._inflight)


__all__ = ["SingleFlight"]
