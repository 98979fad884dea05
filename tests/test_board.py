"""Unit tests for grid geometry, the board model and validation."""

import numpy as np
import pytest

from sdku.core.board import SudokuBoard
from sdku.core.errors import ConfigurationError, RangeError
from sdku.core.grid import Grid, sector_size
from sdku.core.puzzle import Puzzle
from sdku.core.validator import is_valid_placement, is_solved_grid, validate_solution


SOLVED_4X4 = [
    [2, 3, 4, 1],
    [4, 1, 3, 2],
    [1, 4, 2, 3],
    [3, 2, 1, 4],
]


class TestGrid:
    """Tests for grid geometry."""

    @pytest.mark.parametrize("width", [1, 4, 9, 16, 25])
    def test_perfect_square_widths_accepted(self, width):
        """Test that perfect-square widths are accepted."""
        assert sector_size(width) ** 2 == width

    @pytest.mark.parametrize("width", [0, 2, 3, 5, 6, 7, 8, 10, -4])
    def test_other_widths_rejected(self, width):
        """Test that zero, negative and non-square widths are rejected."""
        with pytest.raises(ConfigurationError):
            Grid(width)

    def test_units_cover_rows_columns_sectors(self):
        """Test that a 9x9 grid has 27 units of 9 cells each."""
        grid = Grid(9)
        assert len(grid.units()) == 27
        assert all(len(unit) == 9 for unit in grid.units())
        # sectors follow the 9 rows and 9 columns, row-major
        assert grid.units()[18 + 1 * 3 + 2] == [
            (r, c) for r in range(3, 6) for c in range(6, 9)
        ]

    def test_peers(self):
        """Test that every 9x9 cell has 20 distinct peers, excluding itself."""
        grid = Grid(9)
        peers = grid.peers(4, 4)
        assert len(peers) == 20
        assert len(set(peers)) == 20
        assert (4, 4) not in peers
        assert (3, 3) in peers and (4, 0) in peers and (0, 4) in peers

    def test_check_cell_and_value(self):
        """Test range checks on cells and values."""
        grid = Grid(4)
        grid.check_cell(3, 3)
        grid.check_value(4)
        with pytest.raises(RangeError):
            grid.check_cell(4, 0)
        with pytest.raises(RangeError):
            grid.check_cell(0, -1)
        with pytest.raises(RangeError):
            grid.check_value(0)
        with pytest.raises(RangeError):
            grid.check_value(5)


class TestSudokuBoard:
    """Tests for SudokuBoard class."""

    def test_create_empty_board(self):
        """Test creating an empty 9x9 board."""
        board = SudokuBoard(9)
        assert board.width == 9
        assert board.box_size == 3
        assert board.count_empty() == 81

    def test_set_and_get(self):
        """Test setting and getting values."""
        board = SudokuBoard(9)
        board.set(0, 0, 5)
        assert board.get(0, 0) == 5
        assert not board.is_empty(0, 0)

        board.clear(0, 0)
        assert board.is_empty(0, 0)

    def test_set_out_of_range(self):
        """Test that bad cells and values are rejected."""
        board = SudokuBoard(4)
        with pytest.raises(RangeError):
            board.set(0, 0, 5)
        with pytest.raises(RangeError):
            board.set(4, 0, 1)

    def test_conflicts(self):
        """Test conflict detection in row, column and sector."""
        board = SudokuBoard(9)
        board.set(0, 0, 5)
        assert board.conflicts(0, 8, 5)
        assert board.conflicts(8, 0, 5)
        assert board.conflicts(2, 2, 5)
        assert not board.conflicts(4, 4, 5)
        # the cell's own value does not count
        assert not board.conflicts(0, 0, 5)

    def test_is_valid(self):
        """Test board validation."""
        board = SudokuBoard(9)
        assert board.is_valid()

        board.set(0, 0, 5)
        board.set(0, 1, 5)
        assert not board.is_valid()

    def test_from_values(self):
        """Test creating a board from a 2D list."""
        board = SudokuBoard.from_values(SOLVED_4X4)
        assert board.width == 4
        assert board.is_solved()
        assert board.to_list() == SOLVED_4X4

    def test_from_values_rejects_bad_grids(self):
        """Test that non-square grids and bad values are rejected."""
        with pytest.raises(RangeError):
            SudokuBoard.from_values([[1, 2], [3, 4], [1, 2]])
        with pytest.raises(RangeError):
            SudokuBoard.from_values([[0, 0, 0, 0]] * 3 + [[0, 0, 0, 5]])
        with pytest.raises(ConfigurationError):
            SudokuBoard.from_values([[0, 0, 0]] * 3)

    def test_copy(self):
        """Test board copy."""
        board = SudokuBoard(9)
        board.set(4, 4, 7)
        copy = board.copy()

        assert copy.get(4, 4) == 7
        copy.set(4, 4, 8)
        assert board.get(4, 4) == 7


class TestValidator:
    """Tests for validation utilities."""

    def test_is_valid_placement(self):
        """Test placement validation."""
        board = SudokuBoard(9)
        board.set(0, 0, 5)

        assert not is_valid_placement(board, 0, 5, 5)
        assert not is_valid_placement(board, 5, 0, 5)
        assert not is_valid_placement(board, 1, 1, 5)
        assert is_valid_placement(board, 0, 5, 7)
        assert not is_valid_placement(board, 0, 5, 10)

    def test_is_solved_grid(self):
        """Test detection of completed legal grids."""
        assert is_solved_grid(SOLVED_4X4)

        broken = [row[:] for row in SOLVED_4X4]
        broken[0][0], broken[0][1] = broken[0][1], broken[0][0]
        assert not is_solved_grid(broken)
        assert not is_solved_grid(np.zeros((4, 4), dtype=int))
        assert not is_solved_grid([[1, 2, 3]] * 3)

    def test_validate_solution_checks_clues(self):
        """Test that a solution must keep every clue."""
        puzzle = Puzzle(4, ((0, 0, 2),))
        assert validate_solution(puzzle, SOLVED_4X4)

        other_clue = Puzzle(4, ((0, 0, 3),))
        assert not validate_solution(other_clue, SOLVED_4X4)
