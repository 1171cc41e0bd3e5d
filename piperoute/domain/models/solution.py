"""Domain models for optimized pipe networks."""
from collections import deque
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import AbstractSet, Dict, FrozenSet, Iterable, Mapping, Set

from .grid import GridCoordinate, GridDirection, GridEdge


@dataclass(frozen=True)
class PipeMetrics:
    """Summary figures of a solution."""
    total_length: int = 0
    junction_count: int = 0


@dataclass(frozen=True)
class PipeSolution:
    """Immutable result of one optimization call."""
    pipe_edges: FrozenSet[GridEdge] = frozenset()
    pipe_cells: FrozenSet[GridCoordinate] = frozenset()
    junctions: FrozenSet[GridCoordinate] = frozenset()
    connection_map: Mapping[GridCoordinate, FrozenSet[GridDirection]] = field(
        default_factory=dict, hash=False)
    metrics: PipeMetrics = field(default_factory=PipeMetrics)
    
    def __post_init__(self):
        # Read-only view over a private copy
        object.__setattr__(self, "connection_map", MappingProxyType(dict(self.connection_map)))
    
    @classmethod
    def empty(cls) -> 'PipeSolution':
        """Solution with no edges, cells, or junctions."""
        return cls()
    
    @property
    def is_empty(self) -> bool:
        return not self.pipe_edges
    
    @staticmethod
    def build_connection_map(edges: Iterable[GridEdge]) -> Dict[GridCoordinate, FrozenSet[GridDirection]]:
        """Map every edge endpoint to the directions its segments leave in."""
        directions: Dict[GridCoordinate, Set[GridDirection]] = {}
        for edge in edges:
            direction = edge.direction_from_a()
            directions.setdefault(edge.a, set()).add(direction)
            directions.setdefault(edge.b, set()).add(direction.opposite)
        return {coordinate: frozenset(dirs) for coordinate, dirs in directions.items()}
    
    @classmethod
    def build(cls, edges: Iterable[GridEdge], source: GridCoordinate,
              consumers: AbstractSet[GridCoordinate]) -> 'PipeSolution':
        """Derive cells, junctions, and metrics from a final edge set.
        
        Args:
            edges: Canonical network edges
            source: Source cell
            consumers: Normalized consumer cells (source excluded)
        """
        pipe_edges = frozenset(edges)
        connection_map = cls.build_connection_map(pipe_edges)
        junctions = frozenset(
            coordinate for coordinate, dirs in connection_map.items() if len(dirs) > 2
        )
        pipe_cells = frozenset(
            coordinate for coordinate in connection_map
            if coordinate != source and coordinate not in consumers
        )
        return cls(
            pipe_edges=pipe_edges,
            pipe_cells=pipe_cells,
            junctions=junctions,
            connection_map=connection_map,
            metrics=PipeMetrics(total_length=len(pipe_edges), junction_count=len(junctions)),
        )
    
    def connections_at(self, coordinate: GridCoordinate) -> FrozenSet[GridDirection]:
        return self.connection_map.get(coordinate, frozenset())
    
    def is_junction(self, coordinate: GridCoordinate) -> bool:
        return coordinate in self.junctions
    
    def is_fully_connected(self, source: GridCoordinate,
                           consumers: Iterable[GridCoordinate]) -> bool:
        """Check that every consumer is reachable from the source over pipe edges.
        
        Verification helper for callers and tests; construction never relies on it.
        """
        targets = set(consumers)
        if not targets:
            return True
        
        adjacency: Dict[GridCoordinate, Set[GridCoordinate]] = {}
        for edge in self.pipe_edges:
            adjacency.setdefault(edge.a, set()).add(edge.b)
            adjacency.setdefault(edge.b, set()).add(edge.a)
        
        visited = {source}
        queue = deque([source])
        while queue:
            current = queue.popleft()
            for neighbor in adjacency.get(current, ()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)
        
        return targets <= visited
