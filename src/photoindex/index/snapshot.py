"""Immutable, fully-built view of the photo root at one point in time."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from ..models.types import DateFolder, DateGroup, DateNeighbors, Page, PageView, Picture, PictureView
from .grouping import group_pictures_by_date, paginate_groups
from .picture_index import build_picture_index


@dataclass(slots=True, frozen=True)
class Snapshot:
    """Everything the read accessors answer from.

    A snapshot is assembled completely before it is published and is never
    modified afterwards; holding on to one keeps a consistent view even after
    the coordinator has swapped in a newer snapshot.
    """

    date_keys: Tuple[str, ...]
    dates: Mapping[str, DateFolder]
    pictures: Tuple[Picture, ...]
    lookup: Mapping[str, Mapping[str, Picture]]
    spans: Mapping[str, Tuple[int, int]]
    groups: Tuple[DateGroup, ...]
    pages: Tuple[Page, ...]
    built_at: datetime = field(default_factory=datetime.now)

    @classmethod
    def from_dates(
        cls,
        dates: Mapping[str, DateFolder],
        pagination_threshold: object,
        built_at: Optional[datetime] = None,
    ) -> "Snapshot":
        """Derive every view from the linked *dates* (newest first)."""

        index = build_picture_index(dates.values())
        groups = group_pictures_by_date(index.pictures)
        return cls(
            date_keys=tuple(dates),
            dates=MappingProxyType(dict(dates)),
            pictures=index.pictures,
            lookup=index.lookup,
            spans=index.spans,
            groups=groups,
            pages=paginate_groups(groups, pagination_threshold),
            built_at=built_at or datetime.now(),
        )

    # ------------------------------------------------------------------
    # Dates
    # ------------------------------------------------------------------
    def has_date(self, date_key: str) -> bool:
        return date_key in self.dates

    def date_neighbors(self, date_key: str) -> Optional[DateNeighbors]:
        folder = self.dates.get(date_key)
        if folder is None:
            return None
        return DateNeighbors(previous=folder.previous, next=folder.next)

    # ------------------------------------------------------------------
    # Pictures
    # ------------------------------------------------------------------
    def pictures_for_date(self, date_key: str) -> Tuple[Picture, ...]:
        span = self.spans.get(date_key)
        if span is None:
            return ()
        start, stop = span
        return self.pictures[start:stop]

    def picture(self, date_key: str, filename: str) -> Optional[Picture]:
        by_name = self.lookup.get(date_key)
        if by_name is None:
            return None
        return by_name.get(filename)

    def previous_picture(self, picture: Picture) -> Optional[Picture]:
        """Return the picture just before *picture* (the newer neighbour)."""

        position = self._position_of(picture)
        if position is None or position == 0:
            return None
        return self.pictures[position - 1]

    def next_picture(self, picture: Picture) -> Optional[Picture]:
        """Return the picture just after *picture* (the older neighbour)."""

        position = self._position_of(picture)
        if position is None or position + 1 >= len(self.pictures):
            return None
        return self.pictures[position + 1]

    def picture_view(self, date_key: str, filename: str) -> Optional[PictureView]:
        picture = self.picture(date_key, filename)
        if picture is None:
            return None
        return PictureView(
            picture=picture,
            previous=self.previous_picture(picture),
            next=self.next_picture(picture),
        )

    def latest(self, amount: int) -> Tuple[Picture, ...]:
        return self.pictures[: max(0, amount)]

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    @property
    def total_pages(self) -> int:
        return len(self.pages)

    def page(self, number: int) -> Optional[PageView]:
        """Return the 1-indexed page *number*, or ``None`` when out of range."""

        if number < 1 or number > len(self.pages):
            return None
        return PageView(
            groups=self.pages[number - 1].groups,
            current_page=number,
            total_pages=len(self.pages),
        )

    def _position_of(self, picture: Picture) -> Optional[int]:
        # Pictures from an older snapshot are re-resolved by key; their
        # positions are only meaningful inside the snapshot that built them.
        current = self.picture(picture.date_key, picture.filename)
        if current is None:
            return None
        return current.position


__all__ = ["Snapshot"]
