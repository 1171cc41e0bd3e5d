"""Junction-aware shortest-path router that attaches a terminal to the network."""
import logging
from typing import Iterable, List, Optional

import numpy as np

from ...domain.models.grid import Grid, GridCoordinate, GridEdge
from ...domain.services.tie_breaker import TieBreaker
from .network import NetworkState

logger = logging.getLogger(__name__)

COST_EPSILON = 1e-9

_NO_PREDECESSOR = -1
_UNREACHED_STEPS = np.iinfo(np.int64).max


class AttachmentRouter:
    """Label-setting search over every grid cell.
    
    Reusing a network edge is free and adds no hops. A new edge costs
    ``1 + junction_penalty * J`` where ``J`` counts its endpoints that
    currently have degree exactly 2. Labels are ordered by cost (within
    ``COST_EPSILON``), then hop count, then coordinate tie-breaker key.
    """
    
    def __init__(self, grid: Grid, tie_breaker: TieBreaker, junction_penalty: float):
        self.grid = grid
        self.tie_breaker = tie_breaker
        self.junction_penalty = float(junction_penalty)
        self._keys = [tie_breaker.key(grid.coordinate_for(index))
                      for index in range(grid.cell_count)]
    
    def step_cost(self, current: GridCoordinate, neighbor: GridCoordinate,
                  network: NetworkState):
        """Incremental (cost, hops) of moving from ``current`` to ``neighbor``."""
        if network.contains_edge(GridEdge(current, neighbor)):
            return 0.0, 0
        
        junction_delta = (int(network.degree(current) == 2)
                          + int(network.degree(neighbor) == 2))
        return 1.0 + junction_delta * self.junction_penalty, 1
    
    def shortest_attachment_path(self, start: GridCoordinate,
                                 network: NetworkState) -> List[GridCoordinate]:
        """Cheapest path from ``start`` to the nearest network cell.
        
        Args:
            start: Terminal to attach
            network: Current network; read only during the search
            
        Returns:
            Cells from ``start`` to a network cell inclusive, or ``[start]``
            when ``start`` is already part of the network.
        """
        if network.contains_node(start):
            return [start]
        
        grid = self.grid
        total = grid.cell_count
        
        distances = np.full(total, np.inf, dtype=np.float64)
        steps = np.full(total, _UNREACHED_STEPS, dtype=np.int64)
        predecessors = np.full(total, _NO_PREDECESSOR, dtype=np.int64)
        visited = np.zeros(total, dtype=bool)
        
        start_index = grid.index_of(start)
        distances[start_index] = 0.0
        steps[start_index] = 0
        
        target_index = _NO_PREDECESSOR
        rounds = 0
        
        for _ in range(total):
            current_index = self._select_candidate(distances, steps, visited)
            if current_index is None:
                break
            
            rounds += 1
            visited[current_index] = True
            current = grid.coordinate_for(current_index)
            
            if network.node_mask[current_index] and current_index != start_index:
                target_index = current_index
                break
            
            current_cost = float(distances[current_index])
            current_steps = int(steps[current_index])
            
            for neighbor in grid.neighbors(current):
                neighbor_index = grid.index_of(neighbor)
                if visited[neighbor_index]:
                    continue
                
                added_cost, added_steps = self.step_cost(current, neighbor, network)
                candidate_cost = current_cost + added_cost
                candidate_steps = current_steps + added_steps
                
                if self._should_replace(candidate_cost, candidate_steps, current_index,
                                        float(distances[neighbor_index]),
                                        int(steps[neighbor_index]),
                                        int(predecessors[neighbor_index])):
                    distances[neighbor_index] = candidate_cost
                    steps[neighbor_index] = candidate_steps
                    predecessors[neighbor_index] = current_index
        
        if target_index == _NO_PREDECESSOR:
            logger.warning(f"No network cell reached from {start}, using fallback path")
            return self.fallback_path(start, self.best_fallback_target(start, network.nodes()))
        
        reversed_path = []
        cursor = target_index
        while cursor != _NO_PREDECESSOR:
            reversed_path.append(grid.coordinate_for(cursor))
            if cursor == start_index:
                break
            cursor = int(predecessors[cursor])
        
        if reversed_path[-1] != start:
            logger.warning(f"Broken predecessor chain from {start}, using fallback path")
            return self.fallback_path(start, self.best_fallback_target(start, network.nodes()))
        
        reversed_path.reverse()
        logger.debug(f"Attached {start} after {rounds} rounds: cost "
                     f"{distances[target_index]:.3f}, {len(reversed_path) - 1} steps")
        return reversed_path
    
    def _select_candidate(self, distances: np.ndarray, steps: np.ndarray,
                          visited: np.ndarray) -> Optional[int]:
        """Best unvisited finite-cost cell, scanning in index order."""
        frontier = np.flatnonzero(~visited & np.isfinite(distances))
        if frontier.size == 0:
            return None
        
        keys = self._keys
        best_index = int(frontier[0])
        best_cost = float(distances[best_index])
        best_steps = int(steps[best_index])
        
        for index in frontier[1:]:
            index = int(index)
            cost = float(distances[index])
            if cost + COST_EPSILON < best_cost:
                better = True
            elif abs(cost - best_cost) <= COST_EPSILON:
                hops = int(steps[index])
                if hops != best_steps:
                    better = hops < best_steps
                else:
                    better = keys[index] < keys[best_index]
            else:
                better = False
            
            if better:
                best_index = index
                best_cost = cost
                best_steps = int(steps[index])
        
        return best_index
    
    def _should_replace(self, candidate_cost: float, candidate_steps: int,
                        via_index: int, existing_cost: float, existing_steps: int,
                        existing_predecessor: int) -> bool:
        if candidate_cost + COST_EPSILON < existing_cost:
            return True
        if abs(candidate_cost - existing_cost) > COST_EPSILON:
            return False
        if candidate_steps != existing_steps:
            return candidate_steps < existing_steps
        if existing_predecessor == _NO_PREDECESSOR:
            return True
        # Compares the relaxing cell against the existing predecessor, not the neighbor
        return self._keys[via_index] < self._keys[existing_predecessor]
    
    def best_fallback_target(self, start: GridCoordinate,
                             targets: Iterable[GridCoordinate]) -> GridCoordinate:
        """Nearest target by Manhattan distance, ties by tie-breaker key."""
        return min(
            targets,
            key=lambda target: (start.manhattan_distance(target), self.tie_breaker.key(target)),
            default=start
        )
    
    def fallback_path(self, start: GridCoordinate,
                      target: GridCoordinate) -> List[GridCoordinate]:
        """L-shaped route whose leading axis is picked by the endpoints' key parity."""
        horizontal_first = (self.tie_breaker.pair_key(start, target) & 1) == 0
        path = [start]
        row, column = start.row, start.column
        
        def walk_columns():
            nonlocal column
            while column != target.column:
                column += 1 if column < target.column else -1
                path.append(GridCoordinate(row, column))
        
        def walk_rows():
            nonlocal row
            while row != target.row:
                row += 1 if row < target.row else -1
                path.append(GridCoordinate(row, column))
        
        if horizontal_first:
            walk_columns()
            walk_rows()
        else:
            walk_rows()
            walk_columns()
        
        return path
