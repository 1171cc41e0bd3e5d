"""
JSON format for optimization requests and pipe solutions.

Format version: 1.0
Coordinates are [row, column] pairs on the optimizer grid.
"""

import json
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Tuple

from ...domain.models.grid import Grid, GridCoordinate, GridDirection, GridEdge
from ...domain.models.solution import PipeMetrics, PipeSolution
from ...shared.exceptions import ValidationError
from ...shared.utils.validation_utils import validate_positive_integer

FORMAT_VERSION = "1.0"


def _coordinate_to_list(coordinate: GridCoordinate) -> List[int]:
    return [coordinate.row, coordinate.column]


def _coordinate_from_value(value: Any, field: str) -> GridCoordinate:
    if (not isinstance(value, (list, tuple)) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise ValidationError(f"{field} must be a [row, column] pair of integers, got {value!r}",
                              field=field, value=value)
    return GridCoordinate(value[0], value[1])


def _coordinate_from_id(cell_id: str) -> GridCoordinate:
    """Parse the ``r{row}_c{column}`` cell id."""
    try:
        row_part, column_part = cell_id.split("_", 1)
        if not (row_part.startswith("r") and column_part.startswith("c")):
            raise ValueError(cell_id)
        return GridCoordinate(int(row_part[1:]), int(column_part[1:]))
    except ValueError as e:
        raise ValidationError(f"Invalid cell id: {cell_id!r}", field="connection_map",
                              value=cell_id) from e


def solution_to_dict(solution: PipeSolution) -> Dict[str, Any]:
    """
    Convert a solution to a JSON-ready dictionary.

    Edges, cells, and directions are sorted so equal solutions always
    serialize to identical documents.
    """
    return {
        "format_version": FORMAT_VERSION,
        "pipe_edges": [
            [_coordinate_to_list(edge.a), _coordinate_to_list(edge.b)]
            for edge in sorted(solution.pipe_edges)
        ],
        "pipe_cells": [_coordinate_to_list(c) for c in sorted(solution.pipe_cells)],
        "junctions": [_coordinate_to_list(c) for c in sorted(solution.junctions)],
        "connection_map": {
            coordinate.id: sorted(direction.value for direction in directions)
            for coordinate, directions in sorted(solution.connection_map.items())
        },
        "metrics": {
            "total_length": solution.metrics.total_length,
            "junction_count": solution.metrics.junction_count,
        },
    }


def solution_from_dict(data: Dict[str, Any]) -> PipeSolution:
    """
    Rebuild a solution from :func:`solution_to_dict` output.

    Raises:
        ValidationError: If the document is malformed
    """
    if not isinstance(data, dict):
        raise ValidationError("Solution document must be an object", value=data)

    try:
        edges = frozenset(
            GridEdge(_coordinate_from_value(a, "pipe_edges"), _coordinate_from_value(b, "pipe_edges"))
            for a, b in data.get("pipe_edges", [])
        )
        connection_map: Dict[GridCoordinate, FrozenSet[GridDirection]] = {
            _coordinate_from_id(cell_id): frozenset(GridDirection(name) for name in names)
            for cell_id, names in data.get("connection_map", {}).items()
        }
        metrics_data = data.get("metrics", {})
        metrics = PipeMetrics(
            total_length=int(metrics_data.get("total_length", len(edges))),
            junction_count=int(metrics_data.get("junction_count", 0)),
        )
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Malformed solution document: {e}") from e

    return PipeSolution(
        pipe_edges=edges,
        pipe_cells=frozenset(_coordinate_from_value(c, "pipe_cells") for c in data.get("pipe_cells", [])),
        junctions=frozenset(_coordinate_from_value(c, "junctions") for c in data.get("junctions", [])),
        connection_map=connection_map,
        metrics=metrics,
    )


def request_from_dict(data: Dict[str, Any]) -> Tuple[Grid, GridCoordinate, FrozenSet[GridCoordinate]]:
    """
    Parse an optimization request document.

    Expected keys: ``rows``, ``columns``, ``source`` ([row, column]) and
    ``consumers`` (list of [row, column]).

    Raises:
        ValidationError: If a key is missing or has the wrong shape
    """
    if not isinstance(data, dict):
        raise ValidationError("Request document must be an object", value=data)

    for key in ("rows", "columns", "source"):
        if key not in data:
            raise ValidationError(f"Request is missing '{key}'", field=key)

    validate_positive_integer(data["rows"], "rows")
    validate_positive_integer(data["columns"], "columns")
    grid = Grid(data["rows"], data["columns"])

    consumers_value = data.get("consumers", [])
    if not isinstance(consumers_value, list):
        raise ValidationError("consumers must be a list", field="consumers", value=consumers_value)

    source = _coordinate_from_value(data["source"], "source")
    consumers = frozenset(_coordinate_from_value(c, "consumers") for c in consumers_value)
    return grid, source, consumers


def request_to_dict(grid: Grid, source: GridCoordinate, consumers) -> Dict[str, Any]:
    """Inverse of :func:`request_from_dict`."""
    return {
        "rows": grid.rows,
        "columns": grid.columns,
        "source": _coordinate_to_list(source),
        "consumers": [_coordinate_to_list(c) for c in sorted(consumers)],
    }


def export_solution(solution: PipeSolution, filepath: str) -> None:
    """Write a solution document to ``filepath``."""
    output_path = Path(filepath)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(solution_to_dict(solution), f, indent=2)


def load_request(filepath: str) -> Tuple[Grid, GridCoordinate, FrozenSet[GridCoordinate]]:
    """
    Read and parse a request document.

    Raises:
        ValidationError: If the file is not valid JSON or not a valid request
    """
    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Request file {filepath} is not valid JSON: {e}",
                              field="request", value=filepath) from e
    return request_from_dict(data)
