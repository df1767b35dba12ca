from .bus import Event, EventBus, Subscription
from .domain_events import DomainEvent
from .index_events import (
    DateFolderScannedEvent,
    SettingsChangedEvent,
    SnapshotRebuildFailedEvent,
    SnapshotRebuiltEvent,
)

__all__ = [
    "DateFolderScannedEvent",
    "DomainEvent",
    "Event",
    "EventBus",
    "SettingsChangedEvent",
    "SnapshotRebuildFailedEvent",
    "SnapshotRebuiltEvent",
    "Subscription",
]
