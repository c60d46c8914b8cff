import numpy as np

from pcm.tables import PointTable, ReferenceTable
from pcm.types import Point3D, Reference, ReferenceId, Vector3f


def _pt(ref: str, x: float, y: float, z: float) -> Point3D:
    return Point3D(ReferenceId(ref), Vector3f(x, y, z))


def test_reference_table_first_write_wins() -> None:
    table = ReferenceTable()
    assert table.insert("a", Reference("t1", "v1"))
    assert not table.insert(ReferenceId("a"), Reference("t2", "v2"))
    assert table.get("a") == Reference("t1", "v1")
    assert len(table) == 1


def test_reference_table_contains_and_entries_in_key_order() -> None:
    table = ReferenceTable()
    for key in ["c", "a", "b"]:
        table.insert(key, Reference("t", key))
    assert table.contains("a")
    assert "b" in table
    assert ReferenceId("z") not in table
    assert 3 not in table
    assert [rid.value for rid, _ in table.entries()] == ["a", "b", "c"]
    assert [rid.value for rid in table] == ["a", "b", "c"]


def test_reference_table_entries_is_snapshot() -> None:
    table = ReferenceTable()
    table.insert("a", Reference("t", "v"))
    snap = table.entries()
    table.insert("b", Reference("t", "v"))
    assert len(snap) == 1


def test_reference_table_clear_and_missing_get() -> None:
    table = ReferenceTable()
    table.insert("a", Reference("t", "v"))
    table.clear()
    assert len(table) == 0
    assert table.get("a") is None


def test_reference_table_to_string() -> None:
    table = ReferenceTable()
    table.insert("b", Reference("object", "tree_12"))
    table.insert("a", Reference("material", "grass"))
    assert table.to_string() == "\nref a material grass\nref b object tree_12\n\n"
    assert ReferenceTable().to_string() == "\n\n"


def test_point_table_keeps_duplicates_and_order() -> None:
    table = PointTable()
    table.insert(_pt("a", 0, 0, 0))
    table.insert(_pt("a", 0, 0, 0))
    table.insert(_pt("b", 1, 1, 1))
    assert len(table) == 3
    assert [p.reference.value for p in table] == ["a", "a", "b"]


def test_point_table_find_index_first_match() -> None:
    table = PointTable()
    table.insert(_pt("first", 0, 0, 0))
    table.insert(_pt("second", 0, 0, 0))
    assert table.find_index(Vector3f(0, 0, 0)) == 0
    assert table.find_index((0, 0, 0)) == 0
    assert table.find_index((0, 0, 1)) is None
    assert table.get_by_position((0, 0, 0)).reference.value == "first"


def test_point_table_index_bounds() -> None:
    table = PointTable()
    table.insert(_pt("a", 1, 2, 3))
    assert table.get_by_index(0) == _pt("a", 1, 2, 3)
    assert table.get_by_index(1) is None
    assert table.get_by_index(-1) is None
    assert table.get_by_position((9, 9, 9)) is None


def test_point_table_positions_array() -> None:
    table = PointTable()
    assert table.positions().shape == (0, 3)
    table.insert(_pt("a", 1, 2, 3))
    table.insert(_pt("b", 4, 5, 6))
    arr = table.positions()
    assert arr.dtype == np.float32
    assert np.array_equal(arr, np.array([[1, 2, 3], [4, 5, 6]], dtype=np.float32))


def test_point_table_clear_and_to_string() -> None:
    table = PointTable()
    table.insert(_pt("a", 1, 2, 3))
    assert table.to_string() == "\npoint a 1 2 3\n\n"
    assert table.to_string("fixed") == "\npoint a 1.000000 2.000000 3.000000\n\n"
    table.clear()
    assert len(table) == 0
    assert table.to_string() == "\n\n"
