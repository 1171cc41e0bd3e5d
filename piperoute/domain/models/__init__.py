"""Domain models."""
from .grid import Grid, GridCoordinate, GridDirection, GridEdge
from .solution import PipeMetrics, PipeSolution
from .grid_state import GridCell, GridNodeType, GridState

__all__ = [
    'Grid', 'GridCoordinate', 'GridDirection', 'GridEdge',
    'PipeMetrics', 'PipeSolution',
    'GridCell', 'GridNodeType', 'GridState'
]
