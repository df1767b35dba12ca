import logging
import sys
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from photoindex.errors import FilesystemError  # noqa: E402
from photoindex.io.scanner import LocalDirectoryLister  # noqa: E402


def make_tree(root: Path, layout: Dict[str, Iterable[str]]) -> Path:
    """Create ``root/<date>/<file>`` for every entry in *layout*."""

    root.mkdir(parents=True, exist_ok=True)
    for date_key, files in layout.items():
        folder = root / date_key
        folder.mkdir(exist_ok=True)
        for name in files:
            (folder / name).write_bytes(b"\xff\xd8")
    return root


class CountingLister(LocalDirectoryLister):
    """Local lister that records calls and can be told to fail or stall."""

    def __init__(self) -> None:
        self.calls: List[Path] = []
        self.failing: set[Path] = set()
        self.gate: Optional[threading.Event] = None
        self._lock = threading.Lock()

    def list_dir(self, path: Path):
        with self._lock:
            self.calls.append(Path(path))
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if Path(path) in self.failing:
            raise FilesystemError(f"Simulated failure for {path}", path)
        return super().list_dir(path)

    def count(self, path: Path) -> int:
        with self._lock:
            return sum(1 for call in self.calls if call == Path(path))


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("photoindex")
    for handler in list(logger.handlers):
        if getattr(handler, "_photoindex", False):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def lister() -> CountingLister:
    return CountingLister()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sample_root(tmp_path: Path) -> Path:
    return make_tree(
        tmp_path / "photos",
        {
            "20230101": ["a.jpg", "b.jpg"],
            "20230102": ["c.jpg"],
        },
    )
