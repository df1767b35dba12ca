import time
from dataclasses import dataclass

from photoindex.events.bus import Event, EventBus
from photoindex.events.domain_events import DomainEvent
from photoindex.events.index_events import SnapshotRebuiltEvent


@dataclass(kw_only=True)
class SimpleEvent(Event):
    payload: str = ""


def test_sync_subscribe_publish():
    bus = EventBus()
    received = []

    bus.subscribe(SimpleEvent, lambda event: received.append(event.payload))
    bus.publish(SimpleEvent(payload="hello"))

    assert received == ["hello"]


def test_async_subscribe_publish():
    bus = EventBus()
    received = []

    def handler(event: SimpleEvent):
        time.sleep(0.05)
        received.append(event.payload)

    bus.subscribe(SimpleEvent, handler, async_=True)
    bus.publish(SimpleEvent(payload="world"))
    bus.shutdown()

    assert received == ["world"]


def test_publish_async_returns_futures():
    bus = EventBus()
    received = []
    bus.subscribe(SimpleEvent, lambda event: received.append(1))
    bus.subscribe(SimpleEvent, lambda event: received.append(2), async_=True)

    futures = bus.publish_async(SimpleEvent())
    for future in futures:
        future.result(timeout=5)
    bus.shutdown()

    assert sorted(received) == [1, 2]


def test_unsubscribe():
    bus = EventBus()
    received = []
    subscription = bus.subscribe(SimpleEvent, received.append)

    bus.unsubscribe(subscription)
    bus.publish(SimpleEvent())

    assert received == []
    assert not subscription.active


def test_base_class_subscribers_receive_subclass_events():
    bus = EventBus()
    domain, everything = [], []
    bus.subscribe(DomainEvent, domain.append)
    bus.subscribe(Event, everything.append)

    bus.publish(SnapshotRebuiltEvent(date_count=2, source="test"))
    bus.publish(SimpleEvent())

    assert [type(event) for event in domain] == [SnapshotRebuiltEvent]
    assert len(everything) == 2


def test_failing_handler_does_not_stop_others(caplog):
    bus = EventBus()
    received = []

    def broken(event):
        raise RuntimeError("handler bug")

    bus.subscribe(SimpleEvent, broken)
    bus.subscribe(SimpleEvent, received.append)
    bus.publish(SimpleEvent())

    assert len(received) == 1
    assert "handler bug" in caplog.text


def test_events_have_unique_ids():
    assert SimpleEvent().event_id != SimpleEvent().event_id
