"""Chronological chain of date folders."""

from __future__ import annotations

from typing import Callable, Dict, Iterable, Sequence

from ..models.types import DateFolder
from ..utils.dates import parse_date_key


def build_date_graph(
    date_keys: Sequence[str],
    entries_for: Callable[[str], Iterable[str]],
) -> Dict[str, DateFolder]:
    """Return one :class:`DateFolder` per key, keyed and ordered like *date_keys*.

    *date_keys* must already be sorted newest first.  Every key is parsed
    before any entries are requested, so a single malformed folder name aborts
    the build with :class:`~photoindex.errors.MalformedDateKeyError` without
    touching the filesystem for the others.
    """

    parsed = [(key, parse_date_key(key)) for key in date_keys]

    graph: Dict[str, DateFolder] = {}
    last = len(parsed) - 1
    for position, (key, day) in enumerate(parsed):
        graph[key] = DateFolder(
            name=key,
            date=day,
            entries=tuple(sorted(entries_for(key), reverse=True)),
            previous=parsed[position + 1][0] if position < last else None,
            next=parsed[position - 1][0] if position > 0 else None,
        )
    return graph


__all__ = ["build_date_graph"]
