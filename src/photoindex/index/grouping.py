"""Group the flat picture sequence by date and pack the groups into pages."""

from __future__ import annotations

import math
from itertools import groupby
from numbers import Real
from operator import attrgetter
from typing import Iterable, List, Optional, Tuple

from ..models.types import DateGroup, Page, Picture
from ..utils.logging import get_logger

LOGGER = get_logger(__name__)


def group_pictures_by_date(pictures: Iterable[Picture]) -> Tuple[DateGroup, ...]:
    """Split *pictures* into consecutive runs sharing a date key.

    Only dates that own at least one picture produce a group.
    """

    return tuple(
        DateGroup(date_key=key, pictures=tuple(run))
        for key, run in groupby(pictures, key=attrgetter("date_key"))
    )


def _usable_threshold(threshold: object) -> Optional[float]:
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        return None
    value = float(threshold)
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def paginate_groups(groups: Iterable[DateGroup], threshold: object) -> Tuple[Page, ...]:
    """Pack whole *groups* into pages of roughly *threshold* pictures.

    A page keeps taking groups until its picture count reaches *threshold*;
    the group that crosses the threshold stays on the page, so pages may run
    over but a group is never split.  Only the last page may fall short.

    A threshold that is not a positive finite number puts every group on a
    page of its own.
    """

    limit = _usable_threshold(threshold)
    if limit is None:
        LOGGER.warning("Unusable pagination threshold %r; one date per page", threshold)

    pages: List[Page] = []
    current: List[DateGroup] = []
    total = 0
    for group in groups:
        current.append(group)
        total += len(group)
        if limit is None or total >= limit:
            pages.append(Page(index=len(pages), groups=tuple(current)))
            current = []
            total = 0
    if current:
        pages.append(Page(index=len(pages), groups=tuple(current)))
    return tuple(pages)


__all__ = ["group_pictures_by_date", "paginate_groups"]
