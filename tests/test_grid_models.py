"""Tests for grid primitives: coordinates, directions, edges, and bounds."""
import pytest

from piperoute.domain.models import Grid, GridCoordinate, GridDirection, GridEdge
from piperoute.shared.exceptions import GridError


class TestGridCoordinate:
    """Coordinate ordering and distance."""
    
    def test_ordering_is_row_major(self):
        assert GridCoordinate(1, 9) < GridCoordinate(2, 0)
        assert GridCoordinate(2, 1) < GridCoordinate(2, 3)
        assert sorted([GridCoordinate(3, 0), GridCoordinate(0, 5), GridCoordinate(0, 1)]) == [
            GridCoordinate(0, 1), GridCoordinate(0, 5), GridCoordinate(3, 0)
        ]
    
    def test_manhattan_distance(self):
        assert GridCoordinate(5, 5).manhattan_distance(GridCoordinate(2, 9)) == 7
        assert GridCoordinate(0, 0).manhattan_distance(GridCoordinate(0, 0)) == 0
    
    def test_moved_respects_bounds(self):
        grid = Grid(3, 3)
        corner = GridCoordinate(0, 0)
        assert corner.moved(GridDirection.UP, grid) is None
        assert corner.moved(GridDirection.LEFT, grid) is None
        assert corner.moved(GridDirection.DOWN, grid) == GridCoordinate(1, 0)
        assert corner.moved(GridDirection.RIGHT, grid) == GridCoordinate(0, 1)
    
    def test_id(self):
        assert GridCoordinate(4, 12).id == "r4_c12"
    
    def test_hashable_and_equal(self):
        assert len({GridCoordinate(1, 2), GridCoordinate(1, 2)}) == 1


class TestGridDirection:
    """Direction offsets and opposites."""
    
    @pytest.mark.parametrize("direction,offset", [
        (GridDirection.UP, (-1, 0)),
        (GridDirection.DOWN, (1, 0)),
        (GridDirection.LEFT, (0, -1)),
        (GridDirection.RIGHT, (0, 1)),
    ])
    def test_offsets(self, direction, offset):
        assert (direction.row_offset, direction.column_offset) == offset
    
    def test_opposite_is_involution(self):
        for direction in GridDirection:
            assert direction.opposite is not direction
            assert direction.opposite.opposite is direction


class TestGridEdge:
    """Canonical edge identity."""
    
    def test_canonical_order(self):
        edge = GridEdge(GridCoordinate(2, 3), GridCoordinate(2, 2))
        assert edge.a == GridCoordinate(2, 2)
        assert edge.b == GridCoordinate(2, 3)
    
    def test_reversed_endpoints_are_equal(self):
        p, q = GridCoordinate(1, 1), GridCoordinate(2, 1)
        assert GridEdge(p, q) == GridEdge(q, p)
        assert len({GridEdge(p, q), GridEdge(q, p)}) == 1
    
    def test_other_and_contains(self):
        p, q = GridCoordinate(1, 1), GridCoordinate(1, 2)
        edge = GridEdge(p, q)
        assert edge.contains(p) and edge.contains(q)
        assert edge.other(p) == q
        assert edge.other(q) == p
        assert edge.other(GridCoordinate(9, 9)) is None
    
    def test_adjacency(self):
        assert GridEdge(GridCoordinate(0, 0), GridCoordinate(0, 1)).is_adjacent
        assert not GridEdge(GridCoordinate(0, 0), GridCoordinate(1, 1)).is_adjacent
    
    def test_direction_from_a(self):
        horizontal = GridEdge(GridCoordinate(3, 4), GridCoordinate(3, 5))
        vertical = GridEdge(GridCoordinate(4, 4), GridCoordinate(3, 4))
        assert horizontal.direction_from_a() is GridDirection.RIGHT
        assert vertical.direction_from_a() is GridDirection.DOWN


class TestGrid:
    """Bounds, indexing, and construction errors."""
    
    def test_index_round_trip(self):
        grid = Grid(4, 7)
        assert grid.cell_count == 28
        for index in range(grid.cell_count):
            assert grid.index_of(grid.coordinate_for(index)) == index
        assert grid.index_of(GridCoordinate(2, 3)) == 17
    
    def test_contains(self):
        grid = Grid(2, 3)
        assert grid.contains(GridCoordinate(1, 2))
        assert not grid.contains(GridCoordinate(2, 0))
        assert not grid.contains(GridCoordinate(0, -1))
    
    def test_neighbors_order_and_bounds(self):
        grid = Grid(3, 3)
        assert list(grid.neighbors(GridCoordinate(1, 1))) == [
            GridCoordinate(0, 1), GridCoordinate(2, 1),
            GridCoordinate(1, 0), GridCoordinate(1, 2),
        ]
        assert list(grid.neighbors(GridCoordinate(0, 0))) == [
            GridCoordinate(1, 0), GridCoordinate(0, 1),
        ]
    
    @pytest.mark.parametrize("rows,columns", [(0, 5), (5, 0), (-1, 3), (2.5, 2)])
    def test_invalid_dimensions(self, rows, columns):
        with pytest.raises(GridError):
            Grid(rows, columns)
    
    def test_grid_error_is_value_error(self):
        with pytest.raises(ValueError):
            Grid(0, 0)
    
    def test_single_cell_grid(self):
        grid = Grid(1, 1)
        assert grid.cell_count == 1
        assert list(grid.neighbors(GridCoordinate(0, 0))) == []
