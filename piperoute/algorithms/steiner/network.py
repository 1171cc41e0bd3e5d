"""Network state threaded through every attachment step of one optimization."""
import logging
from typing import Iterator, List, Sequence, Set

import numpy as np

from ...domain.models.grid import Grid, GridCoordinate, GridEdge

logger = logging.getLogger(__name__)


class NetworkState:
    """Edges, member cells, and per-cell degrees of the network built so far.
    
    Node membership and degrees live in arrays indexed by the grid's dense
    cell index. The state only grows; nothing is ever removed.
    """
    
    def __init__(self, grid: Grid):
        self.grid = grid
        self.edges: Set[GridEdge] = set()
        self.node_mask = np.zeros(grid.cell_count, dtype=bool)
        self.degrees = np.zeros(grid.cell_count, dtype=np.int32)
    
    @classmethod
    def seeded(cls, grid: Grid, source: GridCoordinate) -> 'NetworkState':
        """Network holding only the source cell."""
        state = cls(grid)
        state.add_node(source)
        return state
    
    def add_node(self, coordinate: GridCoordinate) -> None:
        self.node_mask[self.grid.index_of(coordinate)] = True
    
    def contains_node(self, coordinate: GridCoordinate) -> bool:
        return bool(self.node_mask[self.grid.index_of(coordinate)])
    
    def contains_edge(self, edge: GridEdge) -> bool:
        return edge in self.edges
    
    def degree(self, coordinate: GridCoordinate) -> int:
        return int(self.degrees[self.grid.index_of(coordinate)])
    
    def nodes(self) -> Iterator[GridCoordinate]:
        """Member cells in dense index order."""
        for index in np.flatnonzero(self.node_mask):
            yield self.grid.coordinate_for(int(index))
    
    @property
    def node_count(self) -> int:
        return int(np.count_nonzero(self.node_mask))
    
    def add_path(self, path: Sequence[GridCoordinate]) -> int:
        """Merge a routed path into the network.
        
        Every cell becomes a member. Consecutive cells become edges; an edge
        already present is skipped and does not touch the degrees.
        
        Returns:
            Number of newly inserted edges
        """
        for coordinate in path:
            self.add_node(coordinate)
        
        inserted = 0
        for first, second in zip(path, path[1:]):
            edge = GridEdge(first, second)
            if edge in self.edges:
                continue
            self.edges.add(edge)
            self.degrees[self.grid.index_of(edge.a)] += 1
            self.degrees[self.grid.index_of(edge.b)] += 1
            inserted += 1
        
        return inserted
    
    def junction_cells(self) -> List[GridCoordinate]:
        """Cells with more than two incident edges."""
        return [self.grid.coordinate_for(int(index))
                for index in np.flatnonzero(self.degrees > 2)]
