"""Parsing helpers for ``YYYYMMDD`` date folder names."""

from __future__ import annotations

import re
from datetime import date

from dateutil.parser import isoparse

from ..config import DATE_KEY_PATTERN, DISPLAY_DATE_FORMAT
from ..errors import MalformedDateKeyError

_DATE_KEY_RE = re.compile(DATE_KEY_PATTERN)


def is_date_key(value: object) -> bool:
    """Return ``True`` when *value* is a well-formed, existing calendar date key."""

    try:
        parse_date_key(value)
    except MalformedDateKeyError:
        return False
    return True


def parse_date_key(value: object) -> date:
    """Return the calendar date encoded by a ``YYYYMMDD`` folder name.

    ``isoparse`` accepts the ISO 8601 basic format, but it also accepts shorter
    forms such as ``YYYYMM``.  The regular expression pins the width to exactly
    eight digits first so ``202301`` is rejected instead of becoming the first
    of the month.
    """

    if not isinstance(value, str) or not _DATE_KEY_RE.match(value):
        raise MalformedDateKeyError(value)
    try:
        return isoparse(value).date()
    except ValueError as exc:
        raise MalformedDateKeyError(value) from exc


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


__all__ = ["format_display_date", "is_date_key", "parse_date_key"]
