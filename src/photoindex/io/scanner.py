"""Filesystem primitives used to discover date folders and their files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Protocol, Tuple

from ..config import IGNORED_NAME_PREFIXES
from ..errors import FilesystemError


class DirectoryLister(Protocol):
    """Minimal directory-listing collaborator.

    Implementations raise :class:`FilesystemError` when *path* cannot be
    listed.  Tests substitute counting or failing listers here.
    """

    def list_dir(self, path: Path) -> Iterable[str]: ...

    def is_dir(self, path: Path) -> bool: ...

    def is_file(self, path: Path) -> bool: ...


class LocalDirectoryLister:
    """:class:`DirectoryLister` backed by the local filesystem."""

    def list_dir(self, path: Path) -> Iterable[str]:
        try:
            return os.listdir(path)
        except OSError as exc:
            raise FilesystemError(f"Unable to list directory {path}: {exc}", path) from exc

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def is_file(self, path: Path) -> bool:
        return path.is_file()


def _is_ignored(name: str) -> bool:
    return name.startswith(IGNORED_NAME_PREFIXES)


def list_date_folders(root: Path, lister: DirectoryLister) -> Tuple[str, ...]:
    """Return the names of the sub-directories of *root*, newest first.

    Names are not validated here; the date graph builder rejects anything that
    does not parse as a date so a rebuild fails as a whole.
    """

    names = [
        name
        for name in lister.list_dir(root)
        if not _is_ignored(name) and lister.is_dir(root / name)
    ]
    names.sort(reverse=True)
    return tuple(names)


def list_date_entries(folder: Path, lister: DirectoryLister) -> Tuple[str, ...]:
    """Return the regular files directly inside *folder*, newest first.

    File names inside a date folder follow the camera's sequential naming, so
    a reverse lexicographic sort puts the most recent shot first.
    """

    names = [
        name
        for name in lister.list_dir(folder)
        if not _is_ignored(name) and lister.is_file(folder / name)
    ]
    names.sort(reverse=True)
    return tuple(names)


__all__ = [
    "DirectoryLister",
    "LocalDirectoryLister",
    "list_date_entries",
    "list_date_folders",
]
