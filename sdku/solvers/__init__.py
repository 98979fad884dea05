"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, SolverStats, CONTRADICTION
from .propagation_solver import PropagationSolver
from .search_solver import SearchSolver
from .composite_solver import CompositeSolver

__all__ = [
    "BaseSolver",
    "SolverStats",
    "CONTRADICTION",
    "PropagationSolver",
    "SearchSolver",
    "CompositeSolver",
]
