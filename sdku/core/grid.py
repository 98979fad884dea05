"""Square grid geometry: rows, columns, sectors and peers."""

from __future__ import annotations
from functools import lru_cache
from typing import List, Tuple
import math

from .errors import ConfigurationError, RangeError

Cell = Tuple[int, int]


def sector_size(width: int) -> int:
    """
    Validate a puzzle width and return the side length of its sectors.

    Args:
        width: Number of cells spanning the puzzle left to right.

    Returns:
        The integer square root of ``width``.

    Raises:
        ConfigurationError: If width is below 1 or not a perfect square.
    """
    if isinstance(width, bool) or not isinstance(width, int):
        raise ConfigurationError(f"Width must be an integer, got {width!r}")
    if width < 1:
        raise ConfigurationError(f"Width must be at least 1, got {width}")
    box_size = math.isqrt(width)
    if box_size * box_size != width:
        raise ConfigurationError(f"Width must be a perfect square, got {width}")
    return box_size


class Grid:
    """
    Geometry of a ``width`` x ``width`` puzzle with square sectors.

    Holds no cell values. Units and peer lists are computed once and shared
    by every grid of the same width.
    """

    def __init__(self, width: int):
        self.box_size = sector_size(width)
        self.width = width
        self._units, self._peers = _layout(width)

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.width and 0 <= col < self.width

    def check_cell(self, row: int, col: int) -> None:
        """Raise RangeError unless (row, col) lies on the grid."""
        if not self.in_bounds(row, col):
            raise RangeError(
                f"Cell ({row}, {col}) is outside a {self.width}x{self.width} grid"
            )

    def check_value(self, value: int) -> None:
        """Raise RangeError unless value is a legal digit (1 to width)."""
        if value < 1 or value > self.width:
            raise RangeError(f"Value must be 1-{self.width}, got {value}")

    def units(self) -> List[List[Cell]]:
        """Every row, then every column, then every sector."""
        return self._units

    def peers(self, row: int, col: int) -> List[Cell]:
        """Cells sharing a row, column or sector with (row, col), excluding it."""
        return self._peers[row * self.width + col]

    def __repr__(self) -> str:
        return f"Grid(width={self.width})"


@lru_cache(maxsize=None)
def _layout(width: int) -> Tuple[List[List[Cell]], List[List[Cell]]]:
    box_size = math.isqrt(width)
    rows = [[(r, c) for c in range(width)] for r in range(width)]
    cols = [[(r, c) for r in range(width)] for c in range(width)]
    sectors = []
    for box_row in range(0, width, box_size):
        for box_col in range(0, width, box_size):
            sectors.append([
                (box_row + i, box_col + j)
                for i in range(box_size)
                for j in range(box_size)
            ])

    peers = []
    for r in range(width):
        for c in range(width):
            seen = set()
            ordered = []
            sector = sectors[(r // box_size) * box_size + c // box_size]
            for cell in rows[r] + cols[c] + sector:
                if cell != (r, c) and cell not in seen:
                    seen.add(cell)
                    ordered.append(cell)
            peers.append(ordered)
    return rows + cols + sectors, peers
