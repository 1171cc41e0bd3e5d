"""Validation utilities for PipeRoute."""
import math
from typing import Any

from ..exceptions import ValidationError


def validate_integer(value: Any, field_name: str) -> None:
    """Reject anything but a plain int (bool excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(
            f"{field_name} must be an integer, got {value!r}",
            field=field_name, value=value
        )


def validate_positive_integer(value: Any, field_name: str) -> None:
    """Validate that a value is a positive integer.
    
    Raises:
        ValidationError: If value is not a positive integer
    """
    validate_integer(value, field_name)
    if value <= 0:
        raise ValidationError(
            f"{field_name} must be positive, got {value}",
            field=field_name, value=value
        )


def validate_non_negative_number(value: Any, field_name: str) -> None:
    """Validate that a value is a finite non-negative number.
    
    Args:
        value: Value to validate
        field_name: Name of field for error reporting
        
    Raises:
        ValidationError: If value is not non-negative
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(
            f"{field_name} must be numeric, got {type(value)}",
            field=field_name, value=value
        )
    
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(
            f"{field_name} must be finite, got {value}",
            field=field_name, value=value
        )
    
    if value < 0:
        raise ValidationError(
            f"{field_name} must be non-negative, got {value}",
            field=field_name, value=value
        )


def validate_coordinate_in_grid(row: Any, column: Any, rows: int, columns: int,
                                field_name: str = "coordinate") -> None:
    """Validate that a (row, column) pair lies inside a rows x columns grid.
    
    Args:
        row: Row index
        column: Column index
        rows: Grid row count
        columns: Grid column count
        field_name: Name of field for error reporting
        
    Raises:
        ValidationError: If the coordinate is not integral or out of bounds
    """
    for axis_value in (row, column):
        if isinstance(axis_value, bool) or not isinstance(axis_value, int):
            raise ValidationError(
                f"{field_name} must have integer row/column, got ({row!r}, {column!r})",
                field=field_name, value=(row, column)
            )
    
    if not (0 <= row < rows and 0 <= column < columns):
        raise ValidationError(
            f"{field_name} ({row}, {column}) out of bounds for {rows}x{columns} grid",
            field=field_name, value=(row, column)
        )
