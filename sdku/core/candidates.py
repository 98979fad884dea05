"""Per-cell candidate sets backing the propagation solver."""

from __future__ import annotations
from typing import Set
import numpy as np

from .grid import Grid


class CandidateGrid:
    """
    Candidate ("scratch mark") model of a puzzle.

    ``marks[row, col, value - 1]`` is True while ``value`` has not been ruled
    out for the cell. A cell is determined when exactly one mark remains and
    contradictory when none do. Marks are only ever removed.

    Removing the second-to-last mark of a cell determines it, and its value is
    then removed from every peer. That cascade runs on an explicit work-list
    until no further cell becomes determined.
    """

    def __init__(self, width: int):
        self.grid = Grid(width)
        self.width = width
        self.marks = np.ones((width, width, width), dtype=bool)
        self._weights = np.left_shift(np.int64(1), np.arange(width, dtype=np.int64))

    def is_possible(self, row: int, col: int, value: int) -> bool:
        self.grid.check_cell(row, col)
        self.grid.check_value(value)
        return bool(self.marks[row, col, value - 1])

    def candidates(self, row: int, col: int) -> Set[int]:
        """Values still possible for a cell."""
        self.grid.check_cell(row, col)
        return {int(v) + 1 for v in np.flatnonzero(self.marks[row, col])}

    def value_of(self, row: int, col: int) -> int:
        """
        Value of a cell as far as the marks tell.

        Returns:
            The value if determined, 0 if several values remain,
            -1 if no value remains.
        """
        remaining = np.flatnonzero(self.marks[row, col])
        if len(remaining) == 1:
            return int(remaining[0]) + 1
        if len(remaining) == 0:
            return -1
        return 0

    def remaining_count(self) -> int:
        """Total number of marks left on the grid."""
        return int(np.count_nonzero(self.marks))

    def is_contradictory(self) -> bool:
        return not bool(self.marks.any(axis=2).all())

    def is_solved(self) -> bool:
        return bool((self.marks.sum(axis=2) == 1).all())

    def masks(self, rows: np.ndarray, cols: np.ndarray) -> np.ndarray:
        """Candidate sets of the given cells as bitmasks (bit v-1 = v)."""
        return self.marks[rows, cols].astype(np.int64) @ self._weights

    def copy_marks(self) -> np.ndarray:
        return self.marks.copy()

    def assign(self, row: int, col: int, value: int) -> None:
        """Rule out every value of a cell except ``value``."""
        self.grid.check_cell(row, col)
        self.grid.check_value(value)
        for other in range(1, self.width + 1):
            if other != value and self.marks[row, col, other - 1]:
                self.remove(row, col, other)

    def remove(self, row: int, col: int, value: int) -> bool:
        """
        Rule out ``value`` for a cell and propagate any determination.

        Args:
            row, col: Cell position.
            value: Value to remove (1 to width).

        Returns:
            True if the mark was present, i.e. the grid changed.
        """
        self.grid.check_cell(row, col)
        self.grid.check_value(value)
        if not self.marks[row, col, value - 1]:
            return False

        pending = [(row, col, value)]
        while pending:
            r, c, v = pending.pop()
            cell = self.marks[r, c]
            if not cell[v - 1]:
                continue
            before = int(np.count_nonzero(cell))
            cell[v - 1] = False
            if before == 2:
                determined = int(np.flatnonzero(cell)[0]) + 1
                pending.extend(
                    (pr, pc, determined)
                    for pr, pc in self.grid.peers(r, c)
                    if self.marks[pr, pc, determined - 1]
                )
        return True

    def __repr__(self) -> str:
        return (
            f"CandidateGrid(width={self.width}, "
            f"remaining={self.remaining_count()})"
        )
