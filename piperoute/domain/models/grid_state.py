"""View-facing snapshot of a grid and its applied solution."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Set

from .grid import Grid, GridCoordinate, GridDirection, GridEdge
from .solution import PipeSolution


class GridNodeType(Enum):
    """What occupies a cell."""
    EMPTY = "empty"
    SOURCE = "source"
    CONSUMER = "consumer"
    PIPE = "pipe"


@dataclass(frozen=True)
class GridCell:
    """Per-cell lookup result used by renderers."""
    coordinate: GridCoordinate
    node_type: GridNodeType
    connections: FrozenSet[GridDirection]
    is_junction: bool
    
    @property
    def accessibility_state(self) -> str:
        if self.node_type is GridNodeType.PIPE:
            return "junction" if self.is_junction else "pipe"
        return self.node_type.value


@dataclass
class GridState:
    """Mutable snapshot of source, consumers, and the last applied solution."""
    grid: Grid
    source: GridCoordinate
    consumers: Set[GridCoordinate] = field(default_factory=set)
    pipe_edges: FrozenSet[GridEdge] = frozenset()
    pipe_cells: FrozenSet[GridCoordinate] = frozenset()
    junctions: FrozenSet[GridCoordinate] = frozenset()
    connection_map: Dict[GridCoordinate, FrozenSet[GridDirection]] = field(default_factory=dict)
    
    def clear_network(self) -> None:
        self.pipe_edges = frozenset()
        self.pipe_cells = frozenset()
        self.junctions = frozenset()
        self.connection_map = {}
    
    def apply(self, solution: PipeSolution) -> None:
        self.pipe_edges = solution.pipe_edges
        self.pipe_cells = solution.pipe_cells
        self.junctions = solution.junctions
        self.connection_map = dict(solution.connection_map)
    
    def node_type(self, coordinate: GridCoordinate) -> GridNodeType:
        if coordinate == self.source:
            return GridNodeType.SOURCE
        if coordinate in self.consumers:
            return GridNodeType.CONSUMER
        if coordinate in self.connection_map:
            return GridNodeType.PIPE
        return GridNodeType.EMPTY
    
    def cell(self, coordinate: GridCoordinate) -> GridCell:
        return GridCell(
            coordinate=coordinate,
            node_type=self.node_type(coordinate),
            connections=self.connection_map.get(coordinate, frozenset()),
            is_junction=coordinate in self.junctions,
        )
