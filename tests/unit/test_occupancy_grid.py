"""Tests for the coordinate type and the occupancy grid."""
import pytest

from modules.arena.coords import Coord
from modules.arena.grid import OccupancyGrid


def test_coords_compare_and_hash_by_value():
    assert Coord(2, 3) == Coord(2, 3)
    assert Coord(2, 3) != Coord(3, 2)
    assert len({Coord(1, 1), Coord(1, 1), Coord(0, 1)}) == 2
    assert tuple(Coord(4, 5)) == (4, 5)
    assert Coord.from_value((4, 5)) == Coord(4, 5)


def test_occupy_and_vacate_track_obstacle_count():
    grid = OccupancyGrid(width=3, height=2)
    assert grid.obstacle_count == 0
    assert grid.open_count == 6

    assert grid.occupy(Coord(2, 1)) is True
    assert grid.occupy(Coord(2, 1)) is False
    assert grid.is_occupied(Coord(2, 1))
    assert grid.cells[1][2] is True
    assert grid.obstacle_count == 1

    assert grid.vacate(Coord(2, 1)) is True
    assert grid.vacate(Coord(2, 1)) is False
    assert grid.obstacle_count == 0


def test_out_of_bounds_access_raises():
    grid = OccupancyGrid(width=2, height=2)
    with pytest.raises(IndexError):
        grid.occupy(Coord(2, 0))
    with pytest.raises(IndexError):
        grid.is_occupied(Coord(0, -1))


def test_enumeration_is_column_major():
    grid = OccupancyGrid(width=2, height=3)
    assert list(grid.coords()) == [
        Coord(0, 0),
        Coord(0, 1),
        Coord(0, 2),
        Coord(1, 0),
        Coord(1, 1),
        Coord(1, 2),
    ]


def test_boundary_coords_cover_outer_ring():
    grid = OccupancyGrid(width=4, height=3)
    ring = grid.boundary_coords()
    assert len(ring) == 10
    assert Coord(1, 1) not in ring
    assert Coord(2, 1) not in ring
    assert all(grid.is_boundary(coord) for coord in ring)


def test_grid_initialises_from_existing_rows_without_aliasing():
    rows = [[True, False], [False, False]]
    grid = OccupancyGrid(width=2, height=2, cells=rows)
    rows[0][0] = False

    assert grid.is_occupied(Coord(0, 0))
    assert grid.obstacle_count == 1
    assert grid.open_coords() == [Coord(0, 1), Coord(1, 0), Coord(1, 1)]
    assert grid.obstacle_coords() == [Coord(0, 0)]


def test_mismatched_rows_are_rejected():
    with pytest.raises(ValueError):
        OccupancyGrid(width=3, height=1, cells=[[False, False]])
    with pytest.raises(ValueError):
        OccupancyGrid(width=0, height=1)


def test_copy_is_independent_and_equal():
    grid = OccupancyGrid(width=3, height=3)
    grid.occupy(Coord(0, 0))
    clone = grid.copy()
    assert clone == grid

    clone.occupy(Coord(1, 0))
    assert clone != grid
    assert grid.obstacle_count == 1


def test_render_draws_rows_top_down():
    grid = OccupancyGrid(width=3, height=2)
    grid.occupy(Coord(0, 0))
    grid.occupy(Coord(2, 1))
    assert grid.render() == "#..\n..#"
