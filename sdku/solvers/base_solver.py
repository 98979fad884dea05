"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Tuple
import time

import numpy as np

from ..core.errors import StateError
from ..core.puzzle import Puzzle
from ..core.render import format_grid

Clue = Tuple[int, int, int]

# value() result for every cell of a puzzle found to have no solution
CONTRADICTION = -1


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    contradictory: bool = False
    time_seconds: float = 0.0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "contradictory": self.contradictory,
            "time_seconds": self.time_seconds,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Abstract base class for the puzzle solvers.

    A solver owns one puzzle at a time. Clues go in through ``initialize``
    and ``assign`` (or ``load``), ``solve`` runs the engine, and results come
    out through ``width``, ``value`` and ``is_contradictory``. The base class
    keeps no grid state of its own.
    """

    name: str = "BaseSolver"

    def __init__(self):
        self.stats = SolverStats(algorithm=self.name)

    @abstractmethod
    def initialize(self, width: int) -> None:
        """
        Discard any loaded puzzle and prepare an empty one.

        Raises:
            ConfigurationError: If width is not a positive perfect square.
        """

    @abstractmethod
    def assign(self, row: int, col: int, value: int) -> None:
        """
        Set a cell to a value.

        Raises:
            StateError: If no puzzle has been initialized.
            RangeError: If row or col is outside [0, width) or value is
                outside [1, width].
        """

    @abstractmethod
    def solve(self) -> bool:
        """
        Attempt to solve the loaded puzzle.

        Returns:
            True iff every cell is determined and no contradiction was found.
        """

    @abstractmethod
    def is_loaded(self) -> bool:
        """True once a puzzle has been initialized."""

    @property
    @abstractmethod
    def width(self) -> int:
        """
        Number of cells spanning the puzzle.

        Raises:
            StateError: If no puzzle has been loaded.
        """

    @abstractmethod
    def value(self, row: int, col: int) -> int:
        """
        Current value of a cell.

        Returns:
            The determined digit, 0 if undetermined, or -1 for every cell
            once the puzzle is known to be contradictory.

        Raises:
            StateError: If no puzzle has been loaded.
            RangeError: If row or col is outside [0, width).
        """

    @abstractmethod
    def is_contradictory(self) -> bool:
        """True iff a puzzle is loaded and it was found to have no solution."""

    def load(self, width: int, clues: Iterable[Clue]) -> None:
        """
        Initialize a fresh puzzle and apply every clue.

        Args:
            width: Puzzle width, a positive perfect square.
            clues: (row, col, value) triples with value in [1, width].
        """
        self.initialize(width)
        for row, col, value in clues:
            self.assign(row, col, value)

    def load_puzzle(self, puzzle: Puzzle) -> None:
        self.load(puzzle.width, puzzle.clues)

    def load_and_solve(self, width: int, clues: Iterable[Clue]) -> bool:
        """
        Load a puzzle and solve it, recording timing in ``self.stats``.

        Returns:
            True iff the puzzle was solved.
        """
        self.stats = SolverStats(algorithm=self.name)
        start_time = time.perf_counter()

        self.load(width, clues)
        solved = self.solve()

        self.stats.time_seconds = time.perf_counter() - start_time
        self.stats.solved = solved
        self.stats.contradictory = self.is_contradictory()
        return solved

    def solve_puzzle(self, puzzle: Puzzle) -> bool:
        return self.load_and_solve(puzzle.width, puzzle.clues)

    def snapshot(self) -> np.ndarray:
        """
        Copy of the current grid as reported by ``value``.

        Raises:
            StateError: If no puzzle has been loaded.
        """
        width = self.width
        values = np.zeros((width, width), dtype=np.int32)
        for row in range(width):
            for col in range(width):
                values[row, col] = self.value(row, col)
        return values

    def _require_loaded(self) -> None:
        if not self.is_loaded():
            raise StateError(f"{self.name}: no puzzle data has been loaded")

    def __str__(self) -> str:
        return format_grid(self)
