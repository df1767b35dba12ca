"""Pure index construction plus the refresh coordinator that publishes it."""

from .builder import SnapshotBuilder
from .coordinator import RefreshCoordinator
from .date_graph import build_date_graph
from .grouping import group_pictures_by_date, paginate_groups
from .picture_index import PictureIndex, build_picture_index
from .snapshot import Snapshot

__all__ = [
    "PictureIndex",
    "RefreshCoordinator",
    "Snapshot",
    "SnapshotBuilder",
    "build_date_graph",
    "build_picture_index",
    "group_pictures_by_date",
    "paginate_groups",
]
