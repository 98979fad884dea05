"""Value board backing the search solver."""

from __future__ import annotations
import numpy as np
from typing import List, Optional, Sequence

from .errors import RangeError
from .grid import Grid


class SudokuBoard:
    """
    Puzzle board holding one value per cell.

    Cells hold 0 (undetermined) or a digit from 1 to ``width``. Supports any
    width that is a perfect square: 4x4, 9x9, 16x16, 25x25, ...
    """

    def __init__(self, width: int, grid: Optional[np.ndarray] = None):
        """
        Initialize a board.

        Args:
            width: Board width. Must be a positive perfect square.
            grid: Optional initial values. If None, creates an empty board.
        """
        self.geometry = Grid(width)
        self.width = width
        self.box_size = self.geometry.box_size

        if grid is not None:
            grid = np.asarray(grid)
            if grid.shape != (width, width):
                raise RangeError(f"Grid shape must be ({width}, {width}), got {grid.shape}")
            if grid.size and (grid.min() < 0 or grid.max() > width):
                raise RangeError(f"Cell values must be 0-{width}")
            self.grid = grid.astype(np.int32)
        else:
            self.grid = np.zeros((width, width), dtype=np.int32)

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board."""
        return SudokuBoard(self.width, self.grid)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means undetermined."""
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Set value at position (row, col)."""
        self.geometry.check_cell(row, col)
        self.geometry.check_value(value)
        self.grid[row, col] = value

    def clear(self, row: int, col: int) -> None:
        self.grid[row, col] = 0

    def is_empty(self, row: int, col: int) -> bool:
        return self.grid[row, col] == 0

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get the values of the sector containing (row, col)."""
        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        return self.grid[box_row:box_row + self.box_size,
                         box_col:box_col + self.box_size]

    def conflicts(self, row: int, col: int, value: int) -> bool:
        """
        Check whether ``value`` already appears elsewhere in the row, column
        or sector of (row, col). The cell's own content is ignored.
        """
        hits = (
            np.count_nonzero(self.grid[row, :] == value)
            + np.count_nonzero(self.grid[:, col] == value)
            + np.count_nonzero(self.get_box(row, col) == value)
        )
        if self.grid[row, col] == value:
            hits -= 3
        return hits > 0

    def is_legal(self, row: int, col: int) -> bool:
        """True iff the cell holds a digit that conflicts with no other cell."""
        value = int(self.grid[row, col])
        if value < 1 or value > self.width:
            return False
        return not self.conflicts(row, col, value)

    def empty_cells(self) -> List[tuple]:
        """Positions of all undetermined cells, row-major."""
        rows, cols = np.nonzero(self.grid == 0)
        return [(int(r), int(c)) for r, c in zip(rows, cols)]

    def count_empty(self) -> int:
        return int(np.count_nonzero(self.grid == 0))

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check that no filled cell conflicts with another.
        Empty cells are allowed.
        """
        for row in range(self.width):
            for col in range(self.width):
                if self.grid[row, col] != 0 and not self.is_legal(row, col):
                    return False
        return True

    def is_solved(self) -> bool:
        """Check that every cell is filled and legal."""
        return self.is_complete() and self.is_valid()

    def to_list(self) -> List[List[int]]:
        return self.grid.tolist()

    @classmethod
    def from_values(cls, values: Sequence[Sequence[int]]) -> SudokuBoard:
        """Create a board from a square 2D sequence of values (0 = empty)."""
        arr = np.array(values, dtype=np.int64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise RangeError(f"Values must form a square grid, got shape {arr.shape}")
        return cls(arr.shape[0], arr)

    def __repr__(self) -> str:
        return f"SudokuBoard(width={self.width}, empty={self.count_empty()})"
