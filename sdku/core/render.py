"""Text rendering of a solver's current grid."""

from __future__ import annotations
from typing import TYPE_CHECKING

from .errors import StateError

if TYPE_CHECKING:
    from ..solvers.base_solver import BaseSolver

NOT_LOADED = "No puzzle data has been loaded into solver.\n"


def format_grid(solver: BaseSolver) -> str:
    """
    Render a solver's grid one row per line.

    Every cell is drawn as ``|`` followed by its value, right-aligned to the
    widest possible digit plus one space. Undetermined cells are blank and a
    contradictory puzzle shows -1 in every cell.
    """
    try:
        width = solver.width
    except StateError:
        return NOT_LOADED

    pad = len(str(width)) + 1
    lines = []
    for row in range(width):
        cells = []
        for col in range(width):
            value = solver.value(row, col)
            content = "" if value == 0 else str(value)
            cells.append("|" + content.rjust(pad))
        lines.append("".join(cells) + "|")
    return "\n".join(lines)
