"""Media type classification based on file names."""

from __future__ import annotations

from pathlib import PurePath
from typing import Tuple

IMAGE_EXTENSIONS: frozenset[str] = frozenset({
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".heic",
    ".heif",
})

VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    ".mov",
    ".mp4",
    ".m4v",
    ".webm",
    ".avi",
    ".mkv",
})


def classify_filename(filename: str) -> Tuple[bool, bool]:
    """Return booleans indicating whether *filename* names an image or a video.

    Matching is case-insensitive, so camera-style names such as
    ``IMG_0001.JPG`` classify the same as their lower-case equivalents.
    Unknown suffixes return ``(False, False)``; they are still indexed.
    """

    suffix = PurePath(filename).suffix.lower()
    if suffix in IMAGE_EXTENSIONS:
        return True, False
    if suffix in VIDEO_EXTENSIONS:
        return False, True
    return False, False


__all__ = ["classify_filename", "IMAGE_EXTENSIONS", "VIDEO_EXTENSIONS"]
