import pytest

from txtproc.grid import SpatialGrid, haversine_distance


def test_distance_to_same_point_is_zero():
    assert haversine_distance(23.5, 121.0, 23.5, 121.0) == 0.0


def test_distance_is_symmetric():
    d1 = haversine_distance(10.0, 20.0, 11.5, 22.0)
    d2 = haversine_distance(11.5, 22.0, 10.0, 20.0)
    assert d1 == pytest.approx(d2)
    assert d1 > 0


def test_one_degree_of_latitude():
    assert haversine_distance(0.0, 0.0, 1.0, 0.0) == pytest.approx(111195, rel=1e-4)


def test_empty_grid_lookup_is_none():
    grid = SpatialGrid()
    assert grid.lookup(121.0, 23.0) is None
    assert len(grid) == 0


def test_single_point_is_returned():
    grid = SpatialGrid()
    grid.add_point(121.0, 23.0, 0.75)
    assert grid.lookup(125.0, 20.0) == 0.75
    assert len(grid) == 1


def test_equidistant_points_give_mean():
    grid = SpatialGrid()
    grid.add_point(0.0, 0.0, 1.0)
    grid.add_point(2.0, 0.0, 3.0)
    assert grid.lookup(1.0, 0.0) == pytest.approx(2.0)


def test_lookup_at_point_returns_its_adjustment():
    grid = SpatialGrid()
    grid.add_point(0.0, 0.0, 1.0)
    grid.add_point(2.0, 0.0, 3.0)
    assert grid.lookup(0.0, 0.0) == pytest.approx(1.0)


def test_nearer_point_weighs_more():
    grid = SpatialGrid()
    grid.add_point(0.0, 0.0, 1.0)
    grid.add_point(2.0, 0.0, 3.0)
    value = grid.lookup(0.5, 0.0)
    assert 1.0 < value < 2.0


def test_range_tracks_added_points():
    grid = SpatialGrid(4, 4)
    grid.add_point(0.0, 0.0, 10.0)
    grid.add_point(10.0, 10.0, 20.0)
    grid.add_point(-2.0, 5.0, 30.0)
    assert grid.min_lon == -2.0
    assert grid.max_lon == 10.0
    assert grid.min_lat == 0.0
    assert grid.max_lat == 10.0
    assert grid.lat_resolution == pytest.approx(10.0 / 4)
    assert grid.lon_resolution == pytest.approx(12.0 / 4)
    assert len(grid) == 3


def test_lookup_searches_distant_cells():
    grid = SpatialGrid(4, 4)
    grid.add_point(0.0, 0.0, 10.0)
    grid.add_point(10.0, 10.0, 20.0)
    grid.add_point(0.0, 10.0, 30.0)
    grid.add_point(10.0, 0.0, 40.0)
    assert grid.lookup(10.0, 10.0) == pytest.approx(20.0)
    assert grid.lookup(10.0, 0.0) == pytest.approx(40.0)


def test_lookup_outside_range_stays_within_adjustments():
    grid = SpatialGrid(4, 4)
    grid.add_point(0.0, 0.0, 10.0)
    grid.add_point(10.0, 10.0, 20.0)
    value = grid.lookup(50.0, 50.0)
    assert 10.0 <= value <= 20.0


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        SpatialGrid(0, 5)