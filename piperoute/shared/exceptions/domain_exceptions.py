"""Domain-specific exceptions."""
from .base_exceptions import PipeRouteException, RoutingError


class GridError(PipeRouteException, ValueError):
    """Exception raised for invalid grid construction."""
    
    def __init__(self, message: str, grid_bounds: tuple = None, **kwargs):
        """Initialize grid error.
        
        Args:
            message: Error message
            grid_bounds: Grid dimensions (rows, columns) that caused error
        """
        super().__init__(message, **kwargs)
        self.grid_bounds = grid_bounds


class OptimizationInProgressError(RoutingError):
    """Raised when an optimization is requested while another is running."""
    pass


class OptimizationTimeoutError(RoutingError):
    """Raised when the caller stops waiting for an optimization result."""
    
    def __init__(self, message: str, timeout: float = None, **kwargs):
        """Initialize timeout error.
        
        Args:
            message: Error message
            timeout: Timeout in seconds that elapsed
        """
        super().__init__(message, **kwargs)
        self.timeout = timeout
