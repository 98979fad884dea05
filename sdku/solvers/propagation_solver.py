"""Deductive solver: hidden singles and naked sets over candidate sets."""

from __future__ import annotations
from itertools import combinations, islice
from typing import Iterator, List, Optional, Set, Tuple
import logging

import numpy as np

from .base_solver import BaseSolver, CONTRADICTION
from ..core.candidates import CandidateGrid
from ..core.grid import sector_size

log = logging.getLogger(__name__)

# Subsets checked per vectorized batch when looking for naked sets
SUBSET_CHUNK = 4096


class PropagationSolver(BaseSolver):
    """
    Solver that only ever writes values it can prove.

    Every cell keeps the set of values not yet ruled out. Fixing a cell
    removes its value from all of its peers, which may fix further cells.
    On top of that cascade the solver looks for:

    - Hidden singles: a value that fits in only one cell of a row, column or
      sector.
    - Naked sets: k cells of a unit whose candidates together span exactly k
      values, so those values can go nowhere else in the unit.

    The solver never removes a value some valid solution could need, so a
    puzzle with several solutions is left partly solved rather than solved
    wrongly. Naked-set search enumerates subsets of 1..width and is
    exponential in the width: subsets are generated in chunks and never
    kept, but at 25x25 a naked-set pass may enumerate 2**25 of them.
    """

    name = "Propagation"

    def __init__(self, max_set_size: Optional[int] = None):
        """
        Initialize the solver.

        Args:
            max_set_size: Largest naked set to look for. None checks every
                useful size (up to width - 1).
        """
        super().__init__()
        self.max_set_size = max_set_size
        self._model: Optional[CandidateGrid] = None
        self._units: List[Tuple[np.ndarray, np.ndarray]] = []

    def initialize(self, width: int) -> None:
        sector_size(width)
        self._model = CandidateGrid(width)
        self._units = [
            (np.array([r for r, _ in unit]), np.array([c for _, c in unit]))
            for unit in self._model.grid.units()
        ]

    def assign(self, row: int, col: int, value: int) -> None:
        self._require_loaded()
        self._model.assign(row, col, value)

    def is_loaded(self) -> bool:
        return self._model is not None

    @property
    def width(self) -> int:
        self._require_loaded()
        return self._model.width

    @property
    def model(self) -> CandidateGrid:
        """The candidate model of the loaded puzzle."""
        self._require_loaded()
        return self._model

    def value(self, row: int, col: int) -> int:
        self._require_loaded()
        self._model.grid.check_cell(row, col)
        if self._model.is_contradictory():
            return CONTRADICTION
        return self._model.value_of(row, col)

    def is_contradictory(self) -> bool:
        if self._model is None:
            return False
        return self._model.is_contradictory()

    def is_possible(self, row: int, col: int, value: int) -> bool:
        """True while ``value`` has not been ruled out for the cell."""
        self._require_loaded()
        return self._model.is_possible(row, col, value)

    def candidates(self, row: int, col: int) -> Set[int]:
        self._require_loaded()
        return self._model.candidates(row, col)

    def candidate_matrix(self) -> np.ndarray:
        """Copy of the (width, width, width) boolean candidate array."""
        self._require_loaded()
        return self._model.copy_marks()

    def remaining_count(self) -> int:
        """Number of candidates left across the grid."""
        self._require_loaded()
        return self._model.remaining_count()

    def is_solved(self) -> bool:
        self._require_loaded()
        return self._model.is_solved() and not self._model.is_contradictory()

    def solve(self) -> bool:
        """
        Apply hidden singles, then naked sets when singles stall, until a
        pass makes no progress, the grid is determined, or a contradiction
        appears.
        """
        self._require_loaded()
        model = self._model
        max_size = self.max_set_size if self.max_set_size is not None else model.width - 1

        history = [model.remaining_count()]
        self.stats.iterations = 0
        self.stats.extra["remaining_history"] = history
        naked_passes = 0

        previous = history[0] + 1
        while (
            model.remaining_count() < previous
            and not model.is_solved()
            and not model.is_contradictory()
        ):
            previous = model.remaining_count()
            self.stats.iterations += 1
            self._hidden_singles()

            # the expensive pass only runs when singles alone stall
            if (
                model.remaining_count() == previous
                and not model.is_solved()
                and not model.is_contradictory()
            ):
                naked_passes += 1
                self._naked_sets(max_size)
            history.append(model.remaining_count())
            log.debug("Pass %d: %d candidates left", self.stats.iterations, history[-1])

        self.stats.extra["naked_set_passes"] = naked_passes
        solved = self.is_solved()
        log.debug(
            "Propagation finished: solved=%s contradictory=%s remaining=%d",
            solved, model.is_contradictory(), model.remaining_count()
        )
        return solved

    def _hidden_singles(self) -> None:
        """Assign every value that fits in only one cell of some unit."""
        width = self._model.width
        lines = self._units[:2 * width]
        sectors = self._units[2 * width:]

        for value in range(1, width + 1):
            for index in range(width):
                # column first, then row, as units are listed
                self._place_hidden_single(lines[width + index], value)
                self._place_hidden_single(lines[index], value)
        for value in range(1, width + 1):
            for unit in sectors:
                self._place_hidden_single(unit, value)

    def _place_hidden_single(self, unit: Tuple[np.ndarray, np.ndarray], value: int) -> None:
        rows, cols = unit
        holders = np.flatnonzero(self._model.marks[rows, cols, value - 1])
        if len(holders) == 1:
            cell = holders[0]
            self._model.assign(int(rows[cell]), int(cols[cell]), value)

    def _naked_sets(self, max_size: int) -> None:
        """
        Eliminate naked sets, smallest first.

        Sizes 2..max_size are tried in ascending order; the pass returns as
        soon as one size removes a candidate so the cheaper singles pass gets
        to run before larger sets are enumerated.
        """
        model = self._model
        width = model.width
        for size in range(2, min(max_size, width - 1) + 1):
            before = model.remaining_count()
            for subsets in _subset_chunks(width, size):
                for unit in self._units:
                    self._eliminate_naked_sets(unit, subsets, size)
                    if model.is_contradictory():
                        return
            if model.remaining_count() < before:
                log.debug("Naked sets of size %d removed %d candidates",
                          size, before - model.remaining_count())
                return

    def _eliminate_naked_sets(
        self,
        unit: Tuple[np.ndarray, np.ndarray],
        subsets: np.ndarray,
        size: int
    ) -> None:
        """Find naked sets of one size in one unit and prune the other cells."""
        model = self._model
        rows, cols = unit
        unit_masks = model.masks(rows, cols)
        # nothing to learn once every cell is determined
        if np.all((unit_masks & (unit_masks - 1)) == 0):
            return

        inside = (unit_masks[np.newaxis, :] & ~subsets[:, np.newaxis]) == 0
        overlap = unit_masks[np.newaxis, :] & subsets[:, np.newaxis]
        # cells outside the set that still hold one of its values
        targets = ~inside & (overlap != 0)
        productive = (inside.sum(axis=1) == size) & targets.any(axis=1)

        for hit in np.flatnonzero(productive):
            for cell in np.flatnonzero(targets[hit]):
                row, col = int(rows[cell]), int(cols[cell])
                for value in _mask_values(int(overlap[hit, cell])):
                    # earlier sets or their cascades may have cleared it
                    if model.marks[row, col, value - 1]:
                        model.remove(row, col, value)


def _subset_chunks(width: int, size: int) -> Iterator[np.ndarray]:
    """Bitmasks of every subset of 1..width with ``size`` members, in chunks."""
    combos = combinations(range(width), size)
    while True:
        chunk = [
            sum(1 << bit for bit in combo)
            for combo in islice(combos, SUBSET_CHUNK)
        ]
        if not chunk:
            return
        yield np.array(chunk, dtype=np.int64)


def _mask_values(mask: int) -> List[int]:
    return [bit + 1 for bit in range(mask.bit_length()) if mask >> bit & 1]
