"""Flat, newest-first picture sequence and its lookup tables."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from ..models.types import DateFolder, Picture


@dataclass(slots=True, frozen=True)
class PictureIndex:
    pictures: Tuple[Picture, ...]
    lookup: Mapping[str, Mapping[str, Picture]]
    """date key -> filename -> picture; dates without files map to ``{}``."""
    spans: Mapping[str, Tuple[int, int]]
    """date key -> ``(start, stop)`` slice of :attr:`pictures`."""


def build_picture_index(dates: Iterable[DateFolder]) -> PictureIndex:
    """Flatten *dates* (newest first) into a :class:`PictureIndex`.

    The folders' entries are trusted as-is: anything listed becomes a picture,
    so callers must hand in listings that contain files only.
    """

    pictures: List[Picture] = []
    lookup: Dict[str, Mapping[str, Picture]] = {}
    spans: Dict[str, Tuple[int, int]] = {}

    for folder in dates:
        start = len(pictures)
        by_name: Dict[str, Picture] = {}
        for filename in folder.entries:
            picture = Picture(
                filename=filename,
                date_key=folder.name,
                position=len(pictures),
                folder=folder,
            )
            pictures.append(picture)
            by_name[filename] = picture
        lookup[folder.name] = MappingProxyType(by_name)
        spans[folder.name] = (start, len(pictures))

    return PictureIndex(
        pictures=tuple(pictures),
        lookup=MappingProxyType(lookup),
        spans=MappingProxyType(spans),
    )


__all__ = ["PictureIndex", "build_picture_index"]
