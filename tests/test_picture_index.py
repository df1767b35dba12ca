import pytest

from photoindex.index.date_graph import build_date_graph
from photoindex.index.picture_index import build_picture_index


def _graph(layout):
    return build_date_graph(list(layout), lambda key: layout[key])


def test_flattens_pictures_newest_first() -> None:
    graph = _graph({"20230102": ["c.jpg"], "20230101": ["a.jpg", "b.jpg"]})
    index = build_picture_index(graph.values())

    assert [picture.rel for picture in index.pictures] == [
        "20230102/c.jpg",
        "20230101/b.jpg",
        "20230101/a.jpg",
    ]
    assert [picture.position for picture in index.pictures] == [0, 1, 2]
    assert index.spans == {"20230102": (0, 1), "20230101": (1, 3)}


def test_lookup_resolves_by_date_and_filename() -> None:
    graph = _graph({"20230102": ["c.jpg"], "20230101": ["a.jpg", "b.jpg"]})
    index = build_picture_index(graph.values())

    picture = index.lookup["20230101"]["a.jpg"]
    assert picture is index.pictures[2]
    assert picture.folder is graph["20230101"]
    assert "c.jpg" not in index.lookup["20230101"]


def test_empty_date_has_empty_lookup_and_span() -> None:
    graph = _graph({"20230103": ["x.jpg"], "20230102": [], "20230101": ["a.jpg"]})
    index = build_picture_index(graph.values())

    assert dict(index.lookup["20230102"]) == {}
    assert index.spans["20230102"] == (1, 1)
    assert len(index.pictures) == 2


def test_lookup_is_read_only() -> None:
    index = build_picture_index(_graph({"20230101": ["a.jpg"]}).values())

    with pytest.raises(TypeError):
        index.lookup["20230101"]["b.jpg"] = None  # type: ignore[index]
