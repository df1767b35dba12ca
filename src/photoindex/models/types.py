"""Data models used by photoindex."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterator, Optional, Tuple

from ..media_classifier import classify_filename
from ..utils.dates import format_display_date


@dataclass(slots=True, frozen=True)
class DateFolder:
    """One ``YYYYMMDD`` sub-directory of the photo root.

    ``previous`` and ``next`` hold the *keys* of the chronologically adjacent
    folders (older and newer respectively) rather than the folders themselves,
    so a snapshot never contains reference cycles.
    """

    name: str
    date: date
    entries: Tuple[str, ...]
    previous: Optional[str] = None
    next: Optional[str] = None

    @property
    def display_date(self) -> str:
        return format_display_date(self.date)

    def is_oldest(self) -> bool:
        return self.previous is None

    def is_newest(self) -> bool:
        return self.next is None


@dataclass(slots=True, frozen=True)
class Picture:
    """A single file inside a date folder.

    ``position`` is the picture's index in the snapshot's flat, newest-first
    sequence; neighbours are resolved through it.
    """

    filename: str
    date_key: str
    position: int
    folder: DateFolder

    @property
    def rel(self) -> str:
        """Path of the file relative to the photo root, POSIX style."""

        return f"{self.date_key}/{self.filename}"

    @property
    def display_date(self) -> str:
        return self.folder.display_date

    @property
    def is_image(self) -> bool:
        return classify_filename(self.filename)[0]

    @property
    def is_video(self) -> bool:
        return classify_filename(self.filename)[1]


@dataclass(slots=True, frozen=True)
class DateNeighbors:
    previous: Optional[str]
    next: Optional[str]


@dataclass(slots=True, frozen=True)
class DateGroup:
    """All pictures of one date, in flat-sequence order."""

    date_key: str
    pictures: Tuple[Picture, ...]

    def __len__(self) -> int:
        return len(self.pictures)

    def __iter__(self) -> Iterator[Picture]:
        return iter(self.pictures)

    @property
    def folder(self) -> DateFolder:
        return self.pictures[0].folder


@dataclass(slots=True, frozen=True)
class Page:
    """Consecutive whole date groups packed together for display."""

    index: int
    groups: Tuple[DateGroup, ...]

    @property
    def number(self) -> int:
        """1-indexed page number used by external consumers."""

        return self.index + 1

    @property
    def picture_count(self) -> int:
        return sum(len(group) for group in self.groups)

    @property
    def date_keys(self) -> Tuple[str, ...]:
        return tuple(group.date_key for group in self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def __iter__(self) -> Iterator[DateGroup]:
        return iter(self.groups)


@dataclass(slots=True, frozen=True)
class PageView:
    groups: Tuple[DateGroup, ...]
    current_page: int
    total_pages: int

    @property
    def has_previous(self) -> bool:
        return self.current_page > 1

    @property
    def has_next(self) -> bool:
        return self.current_page < self.total_pages


@dataclass(slots=True, frozen=True)
class PictureView:
    """A picture together with its neighbours in the flat sequence."""

    picture: Picture
    previous: Optional[Picture]
    next: Optional[Picture]
