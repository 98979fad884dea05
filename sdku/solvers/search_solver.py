"""Backtracking solver: exhaustive depth-first assignment in row-major order."""

from __future__ import annotations
from typing import Optional, Sequence
import logging

from .base_solver import BaseSolver, CONTRADICTION
from ..core.board import SudokuBoard
from ..core.errors import StateError
from ..core.grid import sector_size

log = logging.getLogger(__name__)


class SearchSolver(BaseSolver):
    """
    Depth-first search solver using backtracking.

    Cells are visited in row-major order and candidate digits in ascending
    order; no ordering heuristics are applied. Cells that already hold a
    value (clues, or values copied in with ``load_values``) are fixed and
    never revisited during the descent, so a completed grid is checked once
    more before success is reported.

    Guaranteed to find a solution if one exists, and exhausting every branch
    proves that none does. The search can take very long on sparse 16x16
    puzzles or on puzzles without a solution.
    """

    name = "Search"

    def __init__(self):
        super().__init__()
        self._board: Optional[SudokuBoard] = None
        self._contradictory = False

    def initialize(self, width: int) -> None:
        sector_size(width)
        self._board = SudokuBoard(width)
        self._contradictory = False

    def assign(self, row: int, col: int, value: int) -> None:
        self._require_loaded()
        self._board.set(row, col, value)

    def load_values(self, values: Sequence[Sequence[int]]) -> None:
        """
        Start a fresh puzzle from a full grid of values, 0 meaning unknown.

        Raises:
            ConfigurationError: If the grid's width is not a perfect square.
            RangeError: If the grid is not square or holds values outside
                [0, width].
        """
        board = SudokuBoard.from_values(values)
        self._board = board
        self._contradictory = False

    def resume_from(self, other: BaseSolver) -> bool:
        """
        Copy another solver's current grid and finish solving it.

        Args:
            other: A solver with a loaded, non-contradictory puzzle.

        Returns:
            True iff the puzzle was solved.

        Raises:
            StateError: If ``other`` has no puzzle loaded or has already
                found a contradiction.
        """
        if not other.is_loaded():
            raise StateError(f"Cannot resume from {other.name}: no puzzle loaded")
        if other.is_contradictory():
            raise StateError(f"Cannot resume from {other.name}: puzzle is contradictory")
        self.load_values(other.snapshot())
        return self.solve()

    def is_loaded(self) -> bool:
        return self._board is not None

    @property
    def width(self) -> int:
        self._require_loaded()
        return self._board.width

    def value(self, row: int, col: int) -> int:
        self._require_loaded()
        self._board.geometry.check_cell(row, col)
        if self._contradictory:
            return CONTRADICTION
        return self._board.get(row, col)

    def is_contradictory(self) -> bool:
        return self._board is not None and self._contradictory

    @property
    def board(self) -> SudokuBoard:
        self._require_loaded()
        return self._board

    def solve(self) -> bool:
        """Fill every open cell by backtracking, then validate the grid."""
        self._require_loaded()
        self.stats.iterations = 0
        self.stats.backtracks = 0
        self.stats.nodes_explored = 0

        if self._contradictory:
            return False

        if not self._backtrack():
            log.debug("Search exhausted all branches: no solution")
            self._contradictory = True
            return False

        # fixed cells were never checked during the descent
        if not self._board.is_valid():
            log.debug("Completed grid breaks a clue: no solution")
            self._contradictory = True
            return False

        log.debug(
            "Search solved puzzle: %d digits tried, %d backtracks",
            self.stats.nodes_explored, self.stats.backtracks
        )
        return True

    def _backtrack(self) -> bool:
        """
        Depth-first search over the open cells with an explicit cursor.

        ``depth`` indexes the open cell being worked on; each open cell
        resumes from the digit after the one it holds. Returns True when the
        cursor runs past the last open cell, False when it falls off the
        front.
        """
        board = self._board
        width = board.width
        open_cells = board.empty_cells()

        depth = 0
        while 0 <= depth < len(open_cells):
            self.stats.iterations += 1
            row, col = open_cells[depth]
            value = board.get(row, col) + 1
            while value <= width:
                self.stats.nodes_explored += 1
                if not board.conflicts(row, col, value):
                    break
                value += 1

            if value <= width:
                board.grid[row, col] = value
                depth += 1
            else:
                board.clear(row, col)
                self.stats.backtracks += 1
                depth -= 1

        return depth == len(open_cells)
