"""Shared utilities."""
from .logging_utils import setup_logging, get_context_logger
from .validation_utils import (
    validate_integer, validate_positive_integer, validate_non_negative_number,
    validate_coordinate_in_grid
)
from .performance_utils import timing_context, TimingResult

__all__ = [
    'setup_logging', 'get_context_logger',
    'validate_integer', 'validate_positive_integer', 'validate_non_negative_number', 'validate_coordinate_in_grid',
    'timing_context', 'TimingResult'
]
