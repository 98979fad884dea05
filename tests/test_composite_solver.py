"""Unit tests for the composite solver."""

from pathlib import Path

from sdku.core.puzzle import Puzzle, load_sdku
from sdku.core.validator import is_solved_grid, validate_solution
from sdku.solvers import CompositeSolver, PropagationSolver, SearchSolver
from sdku.solvers.composite_solver import PHASE_DEDUCTIVE, PHASE_IDLE, PHASE_SEARCH


KIDS_CLUES = [
    (0, 1, 3), (0, 2, 4),
    (1, 0, 4), (1, 3, 2),
    (2, 0, 1), (2, 3, 3),
    (3, 1, 2), (3, 2, 1),
]

# First two rows of the Wikipedia solution; many completions exist
SPARSE_9X9 = "534678912672195348" + "0" * 63

PUZZLE_DIR = Path(__file__).resolve().parent.parent / "puzzles"


class CountingFactory:
    """Search solver factory that records how often it was called."""

    def __init__(self):
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return SearchSolver()


class TestCompositeSolver:
    """Tests for the composite solver."""

    def test_deduction_only(self):
        """Test that a puzzle solved by deduction never starts a search."""
        factory = CountingFactory()
        solver = CompositeSolver(search_factory=factory)

        assert solver.load_and_solve(4, KIDS_CLUES)
        assert factory.calls == 0
        assert solver.phase == PHASE_DEDUCTIVE
        assert isinstance(solver.active, PropagationSolver)
        assert solver.stats.extra["phase"] == PHASE_DEDUCTIVE

    def test_contradiction_skips_search(self):
        """Test that a contradiction found by deduction is final."""
        factory = CountingFactory()
        solver = CompositeSolver(search_factory=factory)

        assert not solver.load_and_solve(4, [(0, 0, 1), (0, 1, 1)])
        assert solver.is_contradictory()
        assert factory.calls == 0
        assert solver.value(3, 3) == -1

    def test_impossible_cell_skips_search(self):
        """Test a cell without candidates is caught before any search."""
        factory = CountingFactory()
        solver = CompositeSolver(search_factory=factory)

        assert not solver.load_and_solve(4, [(0, 0, 1), (0, 1, 2), (0, 2, 3), (2, 3, 4)])
        assert solver.is_contradictory()
        assert factory.calls == 0

    def test_hands_over_to_search(self):
        """Test that a stalled deduction is finished by one search solver."""
        factory = CountingFactory()
        solver = CompositeSolver(search_factory=factory)

        assert solver.load_and_solve(4, [(0, 0, 1)])
        assert factory.calls == 1
        assert solver.phase == PHASE_SEARCH
        assert isinstance(solver.active, SearchSolver)
        assert solver.value(0, 0) == 1
        assert is_solved_grid(solver.snapshot())
        assert solver.stats.extra["phase"] == PHASE_SEARCH
        assert "deductive_iterations" in solver.stats.extra

    def test_solve_again_in_search_phase(self):
        """Test that solving again reuses the search solver."""
        factory = CountingFactory()
        solver = CompositeSolver(search_factory=factory)
        solver.load_and_solve(4, [(0, 0, 1)])

        assert solver.solve()
        assert factory.calls == 1

    def test_empty_grid(self):
        """Test that an empty 9x9 grid is filled."""
        solver = CompositeSolver()

        assert solver.load_and_solve(9, [])
        assert is_solved_grid(solver.snapshot())

    def test_sparse_grid(self):
        """Test a 9x9 puzzle with many solutions."""
        puzzle = Puzzle.from_string(SPARSE_9X9)
        solver = CompositeSolver()

        assert solver.solve_puzzle(puzzle)
        assert validate_solution(puzzle, solver.snapshot())

    def test_reinitialize_returns_to_deduction(self):
        """Test that a new puzzle starts in the deductive phase again."""
        solver = CompositeSolver()
        assert solver.phase == PHASE_IDLE
        solver.load_and_solve(4, [(0, 0, 1)])
        assert solver.phase == PHASE_SEARCH

        solver.initialize(4)
        assert solver.phase == PHASE_DEDUCTIVE
        assert isinstance(solver.active, PropagationSolver)
        assert solver.value(0, 0) == 0

    def test_max_set_size_passed_on(self):
        """Test that the naked-set limit reaches the propagation solver."""
        solver = CompositeSolver(max_set_size=1)
        solver.initialize(4)

        assert solver.active.max_set_size == 1

    def test_solve_16x16(self):
        """Test the bundled 16x16 puzzle."""
        puzzle = load_sdku(PUZZLE_DIR / "16x16" / "16_patterned.sdku")
        solver = CompositeSolver()

        assert solver.solve_puzzle(puzzle)
        assert solver.width == 16
        assert validate_solution(puzzle, solver.snapshot())
