"""Exception types raised by the solvers and the puzzle loader."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(SudokuError, ValueError):
    """Raised when a puzzle width is not a positive perfect square."""


class RangeError(SudokuError, IndexError):
    """Raised when a row, column or cell value is outside the puzzle's range."""


class StateError(SudokuError, RuntimeError):
    """Raised when a solver is queried before any puzzle has been loaded."""


class BadSudokuDataFileError(SudokuError):
    """Raised when a .sdku file cannot be interpreted as a puzzle."""

    message = "Invalid formatting of sudoku data"

    def __init__(self, filename: str = "", reason: str = ""):
        self.filename = filename
        self.reason = reason
        text = self.message
        if filename:
            text += f' in "{filename}"'
        if reason:
            text += f": {reason}"
        super().__init__(text)
