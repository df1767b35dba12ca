from .types import DateFolder, DateGroup, DateNeighbors, Page, PageView, Picture, PictureView

__all__ = [
    "DateFolder",
    "DateGroup",
    "DateNeighbors",
    "Page",
    "PageView",
    "Picture",
    "PictureView",
]
