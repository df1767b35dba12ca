from pathlib import Path

import pytest

from conftest import make_tree
from photoindex.errors import FilesystemError, InfrastructureError
from photoindex.io.scanner import LocalDirectoryLister, list_date_entries, list_date_folders


def test_list_date_folders_returns_directories_newest_first(tmp_path: Path) -> None:
    root = make_tree(tmp_path / "photos", {"20230101": [], "20230315": [], "20221231": []})
    (root / "notes.txt").write_text("not a date", encoding="utf-8")

    assert list_date_folders(root, LocalDirectoryLister()) == ("20230315", "20230101", "20221231")


def test_list_date_folders_skips_hidden_entries(tmp_path: Path) -> None:
    root = make_tree(tmp_path / "photos", {"20230101": []})
    (root / ".thumbnails").mkdir()

    assert list_date_folders(root, LocalDirectoryLister()) == ("20230101",)


def test_list_date_entries_returns_files_only(tmp_path: Path) -> None:
    root = make_tree(tmp_path / "photos", {"20230101": ["IMG_0001.jpg", "IMG_0002.jpg"]})
    folder = root / "20230101"
    (folder / "edits").mkdir()
    (folder / ".DS_Store").write_bytes(b"")

    assert list_date_entries(folder, LocalDirectoryLister()) == ("IMG_0002.jpg", "IMG_0001.jpg")


def test_missing_root_raises_filesystem_error(tmp_path: Path) -> None:
    missing = tmp_path / "nowhere"
    with pytest.raises(FilesystemError) as info:
        list_date_folders(missing, LocalDirectoryLister())
    assert info.value.path == missing
    assert isinstance(info.value, InfrastructureError)
