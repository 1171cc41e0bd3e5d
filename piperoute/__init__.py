"""
piperoute - junction-aware rectilinear pipe network optimizer
"""

__version__ = "1.0.0"
__license__ = "MIT"
__description__ = "Grid pipe network optimizer approximating a rectilinear Steiner tree"

from .domain.models import (
    Grid, GridCoordinate, GridDirection, GridEdge,
    PipeMetrics, PipeSolution, GridCell, GridNodeType, GridState
)
from .algorithms.steiner import OptimizerConfiguration, PipeOptimizer
from .application.services import OptimizationService

__all__ = [
    'Grid', 'GridCoordinate', 'GridDirection', 'GridEdge',
    'PipeMetrics', 'PipeSolution', 'GridCell', 'GridNodeType', 'GridState',
    'OptimizerConfiguration', 'PipeOptimizer', 'OptimizationService'
]
