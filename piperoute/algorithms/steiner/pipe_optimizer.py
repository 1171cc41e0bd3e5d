"""Rectilinear Steiner-style pipe network optimizer."""
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable

from ...domain.models.grid import Grid, GridCoordinate
from ...domain.models.solution import PipeSolution
from ...domain.services.tie_breaker import MASK64, TieBreaker
from ...shared.configuration.settings import DEFAULT_JUNCTION_PENALTY, DEFAULT_OPTIMIZER_SEED
from ...shared.utils.logging_utils import get_context_logger
from ...shared.utils.validation_utils import (
    validate_coordinate_in_grid, validate_integer, validate_non_negative_number
)
from .attachment_router import AttachmentRouter
from .connection_order import build_connection_order
from .network import NetworkState
from .terminal_mst import build_terminal_mst

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OptimizerConfiguration:
    """Immutable optimizer inputs besides the layout itself."""
    junction_penalty: float = DEFAULT_JUNCTION_PENALTY
    seed: int = DEFAULT_OPTIMIZER_SEED
    
    def __post_init__(self):
        validate_non_negative_number(self.junction_penalty, "junction_penalty")
        validate_integer(self.seed, "seed")
        object.__setattr__(self, "seed", self.seed & MASK64)


class PipeOptimizer:
    """Connects one source to a set of consumers with a junction-averse pipe tree.
    
    Each call is independent: all working state is created per call and the
    configuration is read only, so one instance may be shared across threads.
    """
    
    def __init__(self, configuration: OptimizerConfiguration = None):
        self.configuration = configuration or OptimizerConfiguration()
    
    def optimize(self, grid: Grid, source: GridCoordinate,
                 consumers: Iterable[GridCoordinate]) -> PipeSolution:
        """Compute the pipe network for one layout.
        
        Args:
            grid: Grid bounds
            source: Source cell
            consumers: Consumer cells; duplicates and the source are ignored
            
        Returns:
            The solution, or the empty solution when no consumer remains
            
        Raises:
            ValidationError: If the source or any consumer is outside the grid
        """
        normalized = self._normalize_consumers(grid, source, consumers)
        if not normalized:
            logger.debug("No consumers to connect, returning empty solution")
            return PipeSolution.empty()
        
        tie_breaker = TieBreaker(self.configuration.seed)
        terminals = [source] + sorted(normalized)
        
        mst_edges = build_terminal_mst(terminals, tie_breaker)
        connection_order = build_connection_order(terminals, mst_edges, tie_breaker)
        
        router = AttachmentRouter(grid, tie_breaker, self.configuration.junction_penalty)
        network = NetworkState.seeded(grid, source)
        attach_log = get_context_logger(__name__, seed=f"{self.configuration.seed:#x}",
                                        penalty=self.configuration.junction_penalty)
        
        for terminal_index in connection_order:
            terminal = terminals[terminal_index]
            if network.contains_node(terminal):
                attach_log.debug(f"Terminal {terminal} already on the network")
                continue
            
            path = router.shortest_attachment_path(terminal, network)
            added = network.add_path(path)
            attach_log.debug(f"Attached terminal {terminal}: {len(path)} cells, {added} new edges")
        
        solution = PipeSolution.build(network.edges, source, normalized)
        logger.info(
            f"Optimized {len(normalized)} consumers on {grid.rows}x{grid.columns} grid: "
            f"length {solution.metrics.total_length}, "
            f"junctions {solution.metrics.junction_count}"
        )
        return solution
    
    @staticmethod
    def _normalize_consumers(grid: Grid, source: GridCoordinate,
                             consumers: Iterable[GridCoordinate]) -> FrozenSet[GridCoordinate]:
        validate_coordinate_in_grid(source.row, source.column, grid.rows, grid.columns,
                                    field_name="source")
        normalized = frozenset(consumers)
        for consumer in normalized:
            validate_coordinate_in_grid(consumer.row, consumer.column, grid.rows, grid.columns,
                                        field_name="consumer")
        return normalized - {source}
