"""Plain-text rendering of a grid and its pipe network."""
from typing import Iterable

from ..domain.models.grid import Grid, GridCoordinate, GridDirection
from ..domain.models.grid_state import GridCell, GridNodeType, GridState
from ..domain.models.solution import PipeSolution

_UP, _DOWN, _LEFT, _RIGHT = GridDirection.UP, GridDirection.DOWN, GridDirection.LEFT, GridDirection.RIGHT

PIPE_GLYPHS = {
    frozenset({_LEFT, _RIGHT}): "-",
    frozenset({_UP, _DOWN}): "|",
    frozenset({_DOWN, _RIGHT}): "+",
    frozenset({_DOWN, _LEFT}): "+",
    frozenset({_UP, _RIGHT}): "+",
    frozenset({_UP, _LEFT}): "+",
}

JUNCTION_GLYPH = "#"
EMPTY_GLYPH = "."


def cell_glyph(cell: GridCell) -> str:
    if cell.node_type is GridNodeType.SOURCE:
        return "S"
    if cell.node_type is GridNodeType.CONSUMER:
        return "C"
    if cell.node_type is GridNodeType.EMPTY:
        return EMPTY_GLYPH
    if cell.is_junction:
        return JUNCTION_GLYPH
    return PIPE_GLYPHS.get(cell.connections, "?")


def render_text(grid: Grid, source: GridCoordinate,
                consumers: Iterable[GridCoordinate], solution: PipeSolution) -> str:
    """Render one character per cell, one line per row."""
    state = GridState(grid=grid, source=source, consumers=set(consumers))
    state.apply(solution)
    lines = []
    for row in range(grid.rows):
        lines.append("".join(
            cell_glyph(state.cell(GridCoordinate(row, column)))
            for column in range(grid.columns)
        ))
    return "\n".join(lines)
