"""Composite solver: deduction first, backtracking only when deduction stalls."""

from __future__ import annotations
from typing import Callable, Optional
import logging

from .base_solver import BaseSolver
from .propagation_solver import PropagationSolver
from .search_solver import SearchSolver

log = logging.getLogger(__name__)

PHASE_IDLE = "idle"
PHASE_DEDUCTIVE = "deductive"
PHASE_SEARCH = "search"


class CompositeSolver(BaseSolver):
    """
    Softens a puzzle up with the propagation solver and, if that does not
    finish it, hands the partial grid to the search solver.

    - Solved by deduction: done, no search is started.
    - Contradiction found by deduction: reported straight away. Deduction
      never removes a value a valid solution could need, so the puzzle has
      no solution.
    - Otherwise the determined cells are copied into a fresh search solver,
      which becomes the active engine for every later query.

    Puzzles with several solutions are solved too: search picks one.
    """

    name = "Composite"

    def __init__(
        self,
        search_factory: Callable[[], SearchSolver] = SearchSolver,
        max_set_size: Optional[int] = None
    ):
        """
        Initialize the composite solver.

        Args:
            search_factory: Builds the search solver for the second phase.
            max_set_size: Passed on to the propagation solver.
        """
        super().__init__()
        self.search_factory = search_factory
        self.max_set_size = max_set_size
        self.phase = PHASE_IDLE
        self._active: BaseSolver = PropagationSolver(max_set_size)

    @property
    def active(self) -> BaseSolver:
        """The engine currently answering queries."""
        return self._active

    def initialize(self, width: int) -> None:
        deductive = PropagationSolver(self.max_set_size)
        deductive.initialize(width)
        self._active = deductive
        self.phase = PHASE_DEDUCTIVE

    def assign(self, row: int, col: int, value: int) -> None:
        self._active.assign(row, col, value)

    def is_loaded(self) -> bool:
        return self._active.is_loaded()

    @property
    def width(self) -> int:
        return self._active.width

    def value(self, row: int, col: int) -> int:
        return self._active.value(row, col)

    def is_contradictory(self) -> bool:
        return self._active.is_contradictory()

    def solve(self) -> bool:
        self._require_loaded()
        if self.phase == PHASE_SEARCH:
            return self._active.solve()

        deductive = self._active
        solved = deductive.solve()
        self.stats.iterations = deductive.stats.iterations
        self.stats.extra["deductive_iterations"] = deductive.stats.iterations
        self.stats.extra["phase"] = self.phase

        if solved:
            log.debug("Solved by deduction alone")
            return True
        if deductive.is_contradictory():
            log.debug("Deduction found a contradiction, skipping search")
            return False

        log.debug(
            "Deduction stalled with %d candidates left, starting search",
            deductive.remaining_count()
        )
        search = self.search_factory()
        solved = search.resume_from(deductive)
        self._active = search
        self.phase = PHASE_SEARCH

        self.stats.backtracks = search.stats.backtracks
        self.stats.nodes_explored = search.stats.nodes_explored
        self.stats.extra["phase"] = self.phase
        return solved
