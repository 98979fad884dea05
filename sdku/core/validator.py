"""Validation utilities for solved and partially solved grids."""

from __future__ import annotations
from typing import TYPE_CHECKING, Sequence
import numpy as np

from .grid import Grid

if TYPE_CHECKING:
    from .board import SudokuBoard
    from .puzzle import Puzzle


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is legal.

    Args:
        board: The board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to board.width).

    Returns:
        True if the value is in range and appears nowhere else in the
        row, column or sector.
    """
    if value < 1 or value > board.width:
        return False
    return not board.conflicts(row, col, value)


def is_solved_grid(values: Sequence[Sequence[int]]) -> bool:
    """
    Check that a grid is a completed, legal solution: every row, column and
    sector is a permutation of 1..width.

    Args:
        values: Square 2D grid of cell values.
    """
    arr = np.asarray(values)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        return False
    width = arr.shape[0]
    try:
        grid = Grid(width)
    except ValueError:
        return False

    expected = list(range(1, width + 1))
    for unit in grid.units():
        if sorted(int(arr[r, c]) for r, c in unit) != expected:
            return False
    return True


def validate_solution(puzzle: Puzzle, values: Sequence[Sequence[int]]) -> bool:
    """
    Validate that a grid solves a puzzle.

    Args:
        puzzle: The original puzzle.
        values: The proposed solution.

    Returns:
        True if the grid is a completed legal solution that keeps every clue.
    """
    arr = np.asarray(values)
    if arr.shape != (puzzle.width, puzzle.width):
        return False
    for row, col, value in puzzle.clues:
        if arr[row, col] != value:
            return False
    return is_solved_grid(arr)
