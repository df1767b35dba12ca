"""Default configuration values for photoindex."""

from __future__ import annotations

from typing import Final

# Date folders are named after the day their contents were taken, using the
# fixed-width ``YYYYMMDD`` convention.  Because the width is fixed, sorting the
# raw names lexicographically is the same as sorting them chronologically.
DATE_KEY_PATTERN: Final[str] = r"^\d{8}$"
DATE_KEY_LENGTH: Final[int] = 8
DISPLAY_DATE_FORMAT: Final[str] = "%Y-%m-%d"

DEFAULT_CACHE_TTL_MS: Final[int] = 5 * 1000
DEFAULT_PAGINATION_THRESHOLD: Final[int] = 50
DEFAULT_LATEST_AMOUNT: Final[int] = 3
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# ---------------------------------------------------------------------------
# Environment overrides
# ---------------------------------------------------------------------------

ENV_PHOTO_ROOT: Final[str] = "PHOTOINDEX_ROOT"
ENV_CACHE_TTL_MS: Final[str] = "PHOTOINDEX_CACHE_TTL_MS"
ENV_PAGINATION_THRESHOLD: Final[str] = "PHOTOINDEX_PAGINATION_THRESHOLD"

SETTINGS_DIR_NAME: Final[str] = "photoindex"
SETTINGS_FILE_NAME: Final[str] = "settings.json"

# Entries whose names start with one of these prefixes are never indexed.  This
# keeps Finder/Explorer droppings (``.DS_Store``, ``._IMG_0001.JPG``) and hidden
# work directories out of both the date list and the per-date listings.
IGNORED_NAME_PREFIXES: Final[tuple[str, ...]] = (".",)
