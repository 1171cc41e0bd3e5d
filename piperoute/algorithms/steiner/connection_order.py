"""Order in which terminals are attached to the growing network."""
from collections import deque
from typing import Dict, List, Sequence, Tuple

from ...domain.models.grid import GridCoordinate
from ...domain.services.tie_breaker import TieBreaker
from .terminal_mst import MSTEdge


def build_connection_order(terminals: Sequence[GridCoordinate],
                           mst_edges: Sequence[MSTEdge],
                           tie_breaker: TieBreaker) -> List[int]:
    """Breadth-first walk of the MST from the source.
    
    Neighbors are enqueued by edge weight, then by their coordinate key, so
    every terminal comes after its MST parent. The source itself is omitted.
    """
    adjacency: Dict[int, List[Tuple[int, int]]] = {}
    for edge in mst_edges:
        adjacency.setdefault(edge.u, []).append((edge.v, edge.weight))
        adjacency.setdefault(edge.v, []).append((edge.u, edge.weight))
    
    order: List[int] = []
    visited = {0}
    queue = deque([0])
    
    while queue:
        node = queue.popleft()
        neighbors = sorted(
            adjacency.get(node, []),
            key=lambda entry: (entry[1], tie_breaker.key(terminals[entry[0]]))
        )
        for neighbor, _ in neighbors:
            if neighbor in visited:
                continue
            visited.add(neighbor)
            queue.append(neighbor)
            order.append(neighbor)
    
    return order
