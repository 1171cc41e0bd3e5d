"""Shared exceptions for PipeRoute."""
from .base_exceptions import (
    PipeRouteException, ConfigurationError, ValidationError, RoutingError
)
from .domain_exceptions import (
    GridError, OptimizationInProgressError, OptimizationTimeoutError
)

__all__ = [
    'PipeRouteException', 'ConfigurationError', 'ValidationError', 'RoutingError',
    'GridError', 'OptimizationInProgressError', 'OptimizationTimeoutError'
]
