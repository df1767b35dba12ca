import threading

import pytest

from photoindex.events import EventBus, SnapshotRebuildFailedEvent, SnapshotRebuiltEvent
from photoindex.index.coordinator import RefreshCoordinator
from photoindex.index.snapshot import Snapshot


class StubSource:
    """Hand out numbered empty snapshots, optionally failing or stalling."""

    def __init__(self) -> None:
        self.builds = 0
        self.fail_with = None
        self.gate = None
        self.started = threading.Event()
        self._lock = threading.Lock()

    def build(self) -> Snapshot:
        with self._lock:
            self.builds += 1
        self.started.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.fail_with is not None:
            raise self.fail_with
        return Snapshot.from_dates({}, 50)


def test_first_read_builds_and_fresh_reads_reuse(clock) -> None:
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=5000, clock=clock)

    assert coordinator.current is None
    first = coordinator.snapshot()
    clock.advance(4.999)
    assert coordinator.snapshot() is first
    assert source.builds == 1
    assert coordinator.is_fresh()


def test_stale_read_rebuilds(clock) -> None:
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=5000, clock=clock)

    first = coordinator.snapshot()
    clock.advance(5.0)
    assert not coordinator.is_fresh()
    second = coordinator.snapshot()

    assert second is not first
    assert source.builds == 2
    assert coordinator.rebuild_count == 2


def test_zero_ttl_rebuilds_every_read(clock) -> None:
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=0, clock=clock)

    coordinator.snapshot()
    coordinator.snapshot()
    assert source.builds == 2


def test_invalidate_forces_rebuild(clock) -> None:
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=60_000, clock=clock)

    coordinator.snapshot()
    coordinator.invalidate()
    coordinator.snapshot()
    assert source.builds == 2


def test_concurrent_stale_readers_share_one_rebuild(clock) -> None:
    source = StubSource()
    source.gate = threading.Event()
    coordinator = RefreshCoordinator(source, ttl_ms=5000, clock=clock)
    results = []

    def reader() -> None:
        results.append(coordinator.snapshot())

    threads = [threading.Thread(target=reader) for _ in range(6)]
    threads[0].start()
    assert source.started.wait(timeout=5)
    for thread in threads[1:]:
        thread.start()
    for thread in threads[1:]:
        thread.join(timeout=0.05)
    source.gate.set()
    for thread in threads:
        thread.join(timeout=5)

    assert len(results) == 6
    assert all(result is results[0] for result in results)
    assert source.builds == 1


def test_failed_rebuild_keeps_previous_snapshot(clock) -> None:
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=5000, clock=clock)
    good = coordinator.snapshot()

    clock.advance(5.0)
    source.fail_with = OSError("disk gone")
    with pytest.raises(OSError):
        coordinator.snapshot()

    assert coordinator.current is good
    assert coordinator.failure_count == 1
    # Within the TTL of the failed attempt readers keep the old snapshot.
    assert coordinator.snapshot() is good
    assert source.builds == 2

    clock.advance(5.0)
    source.fail_with = None
    assert coordinator.snapshot() is not good
    assert source.builds == 3


def test_failure_without_snapshot_retries_every_read(clock) -> None:
    source = StubSource()
    source.fail_with = OSError("no root")
    coordinator = RefreshCoordinator(source, ttl_ms=5000, clock=clock)

    for _ in range(3):
        with pytest.raises(OSError):
            coordinator.snapshot()
    assert source.builds == 3
    assert coordinator.current is None


def test_rebuild_events_are_published(clock) -> None:
    bus = EventBus()
    rebuilt, failed = [], []
    bus.subscribe(SnapshotRebuiltEvent, rebuilt.append)
    bus.subscribe(SnapshotRebuildFailedEvent, failed.append)
    source = StubSource()
    coordinator = RefreshCoordinator(source, ttl_ms=0, clock=clock, event_bus=bus)

    coordinator.snapshot()
    source.fail_with = RuntimeError("boom")
    with pytest.raises(RuntimeError):
        coordinator.snapshot()

    assert len(rebuilt) == 1
    assert (rebuilt[0].date_count, rebuilt[0].picture_count, rebuilt[0].page_count) == (0, 0, 0)
    assert len(failed) == 1
    assert str(failed[0].error) == "boom"
