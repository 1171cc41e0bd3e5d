"""Application services."""
from .optimization_service import OptimizationService

__all__ = ['OptimizationService']
