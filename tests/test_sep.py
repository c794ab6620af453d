import pytest

from txtproc.sep import SepData, SepHashTable


def test_insert_then_lookup():
    table = SepHashTable()
    table.insert(121.5, 23.5, 0.25)
    assert table.lookup(121.5, 23.5) == 0.25
    assert table.count == 1


def test_missing_point_is_none():
    table = SepHashTable()
    table.insert(121.5, 23.5, 0.25)
    assert table.lookup(121.6, 23.5) is None


def test_later_entry_wins():
    table = SepHashTable()
    table.insert(1.0, 2.0, 3.0)
    table.insert(1.0, 2.0, 4.0)
    assert table.lookup(1.0, 2.0) == 4.0
    assert len(table) == 2


def test_colliding_buckets_still_distinguish_points():
    table = SepHashTable(size=1)
    table.insert(1.0, 2.0, 3.0)
    table.insert(5.0, 6.0, 7.0)
    assert table.lookup(1.0, 2.0) == 3.0
    assert table.lookup(5.0, 6.0) == 7.0
    assert table.lookup(9.0, 9.0) is None


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        SepHashTable(size=0)


def test_add_feeds_every_index():
    data = SepData()
    data.add(121.0, 23.0, 1.5)
    assert data.count == 1
    assert data.points == [(121.0, 23.0, 1.5)]
    assert data.hash_table.lookup(121.0, 23.0) == 1.5
    assert data.spatial_grid.lookup(121.0, 23.0) == 1.5


def test_load_skips_comments_and_bad_lines(tmp_path):
    sep = tmp_path / "table.sep"
    sep.write_text(
        "; header comment\n"
        "121.5\t23.5\t0.25\n"
        "\n"
        "121.6 23.6 0.5 ; trailing\n"
        "bad line\n"
        "121.7 23.7\n"
        "121.8,23.8,0.9\n",
        encoding="utf-8",
    )
    data = SepData.load(sep)
    assert data.count == 2
    assert data.points == [(121.5, 23.5, 0.25), (121.6, 23.6, 0.5)]
    assert data.hash_table.lookup(121.5, 23.5) == 0.25
    assert data.hash_table.lookup(121.6, 23.6) == 0.5
    assert data.hash_table.lookup(121.7, 23.7) is None


def test_loaded_grid_interpolates_between_points(tmp_path):
    sep = tmp_path / "table.sep"
    sep.write_text("121.5 23.5 0.25\n121.6 23.6 0.5\n", encoding="utf-8")
    data = SepData.load(sep)
    assert data.spatial_grid.lookup(121.5, 23.5) == pytest.approx(0.25)
    middle = data.spatial_grid.lookup(121.55, 23.55)
    assert 0.25 <= middle <= 0.5


def test_trailing_text_after_numbers_is_ignored(tmp_path):
    sep = tmp_path / "table.sep"
    sep.write_text("1.5 2.5 3.5extra\n", encoding="utf-8")
    data = SepData.load(sep)
    assert data.points == [(1.5, 2.5, 3.5)]


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(OSError):
        SepData.load(tmp_path / "absent.sep")