"""Minimum spanning tree over the source and consumer terminals."""
import logging
from dataclasses import dataclass
from typing import List, Sequence

from ...domain.models.grid import GridCoordinate
from ...domain.services.tie_breaker import TieBreaker

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MSTEdge:
    """Tree edge between terminal indices ``u`` (in-tree side) and ``v``."""
    u: int
    v: int
    weight: int


def build_terminal_mst(terminals: Sequence[GridCoordinate],
                       tie_breaker: TieBreaker) -> List[MSTEdge]:
    """Build the terminal MST with dense Prim's algorithm rooted at index 0.
    
    Edge weight is Manhattan distance. Equal weights are ordered by the XOR
    of both endpoint keys, then by in-tree index, then by out-of-tree index.
    
    Args:
        terminals: Source at index 0 followed by sorted consumers
        tie_breaker: Seeded key source
        
    Returns:
        Tree edges in the order they were added
    """
    if len(terminals) <= 1:
        return []
    
    in_tree = [False] * len(terminals)
    in_tree[0] = True
    tree_indices = [0]
    mst_edges: List[MSTEdge] = []
    
    while len(tree_indices) < len(terminals):
        best = None
        best_rank = None
        
        for u in sorted(tree_indices):
            for v in range(len(terminals)):
                if in_tree[v]:
                    continue
                weight = terminals[u].manhattan_distance(terminals[v])
                rank = (weight, tie_breaker.pair_key(terminals[u], terminals[v]), u, v)
                if best_rank is None or rank < best_rank:
                    best_rank = rank
                    best = MSTEdge(u=u, v=v, weight=weight)
        
        if best is None:
            break
        
        in_tree[best.v] = True
        tree_indices.append(best.v)
        mst_edges.append(best)
    
    logger.debug(f"Terminal MST: {len(mst_edges)} edges, "
                 f"total weight {sum(edge.weight for edge in mst_edges)}")
    return mst_edges
