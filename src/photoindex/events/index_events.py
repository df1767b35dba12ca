from dataclasses import dataclass

from .domain_events import DomainEvent


@dataclass(kw_only=True)
class SnapshotRebuiltEvent(DomainEvent):
    date_count: int = 0
    picture_count: int = 0
    page_count: int = 0
    duration_seconds: float = 0.0


@dataclass(kw_only=True)
class SnapshotRebuildFailedEvent(DomainEvent):
    error: Exception
    duration_seconds: float = 0.0


@dataclass(kw_only=True)
class DateFolderScannedEvent(DomainEvent):
    date_key: str = ""
    entry_count: int = 0


@dataclass(kw_only=True)
class SettingsChangedEvent(DomainEvent):
    key: str = ""
    value: object = None
