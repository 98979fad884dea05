"""Core module: grid geometry, cell models, puzzle files and validation."""

from .errors import (
    SudokuError,
    ConfigurationError,
    RangeError,
    StateError,
    BadSudokuDataFileError,
)
from .grid import Grid, sector_size
from .candidates import CandidateGrid
from .board import SudokuBoard
from .puzzle import Puzzle, parse_sdku, load_sdku, dump_sdku, iter_puzzle_files
from .render import format_grid
from .validator import is_valid_placement, is_solved_grid, validate_solution

__all__ = [
    "SudokuError",
    "ConfigurationError",
    "RangeError",
    "StateError",
    "BadSudokuDataFileError",
    "Grid",
    "sector_size",
    "CandidateGrid",
    "SudokuBoard",
    "Puzzle",
    "parse_sdku",
    "load_sdku",
    "dump_sdku",
    "iter_puzzle_files",
    "format_grid",
    "is_valid_placement",
    "is_solved_grid",
    "validate_solution",
]
