"""Domain models for the rectilinear pipe grid."""
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from ...shared.exceptions import GridError


class GridDirection(Enum):
    """Cardinal directions a pipe segment can occupy in a cell."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    
    @property
    def row_offset(self) -> int:
        if self is GridDirection.UP:
            return -1
        if self is GridDirection.DOWN:
            return 1
        return 0
    
    @property
    def column_offset(self) -> int:
        if self is GridDirection.LEFT:
            return -1
        if self is GridDirection.RIGHT:
            return 1
        return 0
    
    @property
    def opposite(self) -> 'GridDirection':
        return _OPPOSITES[self]


_OPPOSITES = {
    GridDirection.UP: GridDirection.DOWN,
    GridDirection.DOWN: GridDirection.UP,
    GridDirection.LEFT: GridDirection.RIGHT,
    GridDirection.RIGHT: GridDirection.LEFT,
}


@dataclass(frozen=True, order=True)
class GridCoordinate:
    """Value object for a (row, column) cell, ordered row-major."""
    row: int
    column: int
    
    @property
    def id(self) -> str:
        return f"r{self.row}_c{self.column}"
    
    def manhattan_distance(self, other: 'GridCoordinate') -> int:
        """Calculate rectilinear distance to another coordinate."""
        return abs(self.row - other.row) + abs(self.column - other.column)
    
    def moved(self, direction: GridDirection, grid: 'Grid') -> Optional['GridCoordinate']:
        """Step one cell in ``direction``, or None if that leaves the grid."""
        candidate = GridCoordinate(self.row + direction.row_offset,
                                   self.column + direction.column_offset)
        return candidate if grid.contains(candidate) else None


@dataclass(frozen=True, order=True)
class GridEdge:
    """Undirected edge between two cells, stored with the smaller endpoint first.
    
    The canonical form is the edge identity, so ``GridEdge(p, q) == GridEdge(q, p)``.
    """
    a: GridCoordinate
    b: GridCoordinate
    
    def __post_init__(self):
        if self.b < self.a:
            first, second = self.b, self.a
            object.__setattr__(self, "a", first)
            object.__setattr__(self, "b", second)
    
    @property
    def is_adjacent(self) -> bool:
        return self.a.manhattan_distance(self.b) == 1
    
    def contains(self, coordinate: GridCoordinate) -> bool:
        return coordinate == self.a or coordinate == self.b
    
    def other(self, coordinate: GridCoordinate) -> Optional[GridCoordinate]:
        """Return the opposite endpoint, or None if ``coordinate`` is not on the edge."""
        if coordinate == self.a:
            return self.b
        if coordinate == self.b:
            return self.a
        return None
    
    def direction_from_a(self) -> GridDirection:
        """Direction the edge leaves its first endpoint in."""
        if self.a.row == self.b.row:
            return GridDirection.RIGHT if self.a.column < self.b.column else GridDirection.LEFT
        return GridDirection.DOWN if self.a.row < self.b.row else GridDirection.UP


@dataclass(frozen=True)
class Grid:
    """Rectangular grid with a dense row-major cell index."""
    rows: int
    columns: int
    
    def __post_init__(self):
        for name, value in (("rows", self.rows), ("columns", self.columns)):
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise GridError(
                    f"Grid dimensions must be positive integers, got {name}={value!r}",
                    grid_bounds=(self.rows, self.columns),
                    error_code="GRID_DIMENSIONS"
                )
    
    @property
    def cell_count(self) -> int:
        return self.rows * self.columns
    
    def contains(self, coordinate: GridCoordinate) -> bool:
        return 0 <= coordinate.row < self.rows and 0 <= coordinate.column < self.columns
    
    def index_of(self, coordinate: GridCoordinate) -> int:
        return coordinate.row * self.columns + coordinate.column
    
    def coordinate_for(self, index: int) -> GridCoordinate:
        return GridCoordinate(index // self.columns, index % self.columns)
    
    def neighbors(self, coordinate: GridCoordinate) -> Iterator[GridCoordinate]:
        """Yield in-bounds neighbors in UP, DOWN, LEFT, RIGHT order."""
        for direction in GridDirection:
            neighbor = coordinate.moved(direction, self)
            if neighbor is not None:
                yield neighbor
