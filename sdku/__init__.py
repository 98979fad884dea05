"""Deductive, backtracking and composite solvers for N x N Sudoku puzzles."""

from .core import (
    Puzzle,
    load_sdku,
    parse_sdku,
    SudokuError,
    ConfigurationError,
    RangeError,
    StateError,
    BadSudokuDataFileError,
)
from .solvers import PropagationSolver, SearchSolver, CompositeSolver

__version__ = "1.0.0"

__all__ = [
    "Puzzle",
    "load_sdku",
    "parse_sdku",
    "SudokuError",
    "ConfigurationError",
    "RangeError",
    "StateError",
    "BadSudokuDataFileError",
    "PropagationSolver",
    "SearchSolver",
    "CompositeSolver",
]
