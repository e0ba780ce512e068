"""Tests for Bitboard implementation."""

import sys
sys.path.insert(0, '.')

import pytest

from connect4.game.board import Board, InvalidMove, RED, YELLOW, EMPTY, ROWS, COLS


def make_board(*rows):
    """Build a board from 6 strings, top row first ('.', 'R', 'Y')."""
    symbols = {'.': EMPTY, 'R': RED, 'Y': YELLOW}
    return Board.from_matrix([[symbols[ch] for ch in row] for row in rows])


DRAWN_ROWS = (
    "RRYYRRY",
    "YYRRYYR",
    "RRYYRRY",
    "YYRRYYR",
    "RRYYRRY",
    "YYRRYYR",
)


class TestBoard:
    """Test cases for Board class."""

    def test_initial_state(self):
        """Board should start empty."""
        board = Board()
        assert board.red == 0
        assert board.yellow == 0
        assert board.count_pieces() == 0
        assert board.last_move is None
        assert not board.is_full()

    def test_drop_lands_on_bottom(self):
        """Pieces fall to the lowest empty row."""
        board = Board()

        assert board.drop(3, RED) == ROWS - 1
        assert board.get(5, 3) == RED

        assert board.drop(3, YELLOW) == ROWS - 2
        assert board.get(4, 3) == YELLOW
        assert board.last_move == (4, 3)

    def test_cells_below_drop_are_filled(self):
        """After any drop, every cell under the piece is occupied."""
        board = Board()
        for i, col in enumerate([2, 2, 5, 2, 5, 0]):
            row = board.drop(col, RED if i % 2 == 0 else YELLOW)
            for below in range(row + 1, ROWS):
                assert not board.is_empty(below, col)
            assert all(board.is_empty(r, col) for r in range(row))

    def test_drop_full_column_raises(self):
        """A full column refuses the drop and leaves the board unchanged."""
        board = Board()
        for i in range(ROWS):
            board.drop(0, RED if i % 2 == 0 else YELLOW)

        red, yellow, history = board.red, board.yellow, list(board.move_history)
        with pytest.raises(InvalidMove) as excinfo:
            board.drop(0, RED)

        assert excinfo.value.column == 0
        assert board.red == red
        assert board.yellow == yellow
        assert board.move_history == history

    @pytest.mark.parametrize("col", [-1, COLS, 100])
    def test_drop_out_of_range_raises(self, col):
        board = Board()
        with pytest.raises(InvalidMove):
            board.drop(col, RED)
        assert board.count_pieces() == 0

    def test_is_valid_move(self):
        """A column is playable iff in range and its top cell is empty."""
        board = make_board(
            "R.....Y",
            "Y.....R",
            "R.....Y",
            "Y.....R",
            "R.....Y",
            "Y..R..R",
        )
        for col in range(COLS):
            assert board.is_valid_move(col) == board.is_empty(0, col)
        assert not board.is_valid_move(0)
        assert not board.is_valid_move(6)
        assert board.is_valid_move(3)
        assert not board.is_valid_move(-1)
        assert not board.is_valid_move(7)

    def test_undo_move(self):
        """Undo is the exact inverse of drop."""
        board = Board()
        board.drop(4, RED)
        before = (board.red, board.yellow)

        board.drop(4, YELLOW)
        assert board.undo_move() == (4, 4, YELLOW)
        assert (board.red, board.yellow) == before
        assert board.last_move == (5, 4)

        board.undo_move()
        assert board.undo_move() is None
        assert board.count_pieces() == 0

    def test_is_full(self):
        """Full when the top row has no empty cell."""
        board = make_board(*DRAWN_ROWS)
        assert board.is_full()
        assert board.count_pieces() == ROWS * COLS
        assert board.count_pieces(RED) == 21
        assert board.count_pieces(YELLOW) == 21

    def test_winning_line_horizontal(self):
        board = Board()
        for col in range(4):
            board.drop(col, RED)
        assert board.winning_line_through(5, 3)
        assert board.winning_line_through(5, 0)

    def test_winning_line_vertical(self):
        board = Board()
        for _ in range(4):
            row = board.drop(6, YELLOW)
        assert board.winning_line_through(row, 6)

    def test_winning_line_diagonal_up(self):
        """Diagonal ↗ from the bottom-left."""
        board = make_board(
            ".......",
            ".......",
            "...R...",
            "..RY...",
            ".RYY...",
            "RYYR...",
        )
        assert board.winning_line_through(2, 3)
        assert board.winning_line_through(5, 0)

    def test_winning_line_diagonal_down(self):
        """Diagonal ↘ from the top-left."""
        board = make_board(
            ".......",
            ".......",
            "...Y...",
            "...RY..",
            "...RRY.",
            "...RRYY",
        )
        assert board.winning_line_through(2, 3)
        assert board.winning_line_through(5, 6)

    def test_winning_line_completed_in_middle(self):
        """The run may extend both ways from the last piece."""
        board = Board()
        board.drop(0, RED)
        board.drop(1, RED)
        board.drop(3, RED)
        assert not board.winning_line_through(5, 3)

        row = board.drop(2, RED)
        assert board.winning_line_through(row, 2)

    def test_no_winning_line_for_three(self):
        board = Board()
        for col in range(3):
            board.drop(col, RED)
        assert not board.winning_line_through(5, 2)
        assert not board.winning_line_through(0, 0)  # Empty cell

    def test_has_four_in_row(self):
        board = make_board(
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            "YYYY...",
        )
        assert board.has_four_in_row(YELLOW)
        assert not board.has_four_in_row(RED)

    def test_has_four_in_row_does_not_wrap(self):
        """Pieces at the end of one row and start of the next are not a line."""
        board = make_board(
            "....RRR",
            "R......",
            ".......",
            ".......",
            ".......",
            ".......",
        )
        assert not board.has_four_in_row(RED)

    def test_has_four_in_row_at_right_edge(self):
        board = make_board(
            ".......",
            ".......",
            "......R",
            ".....RY",
            "....RYY",
            "...RYYY",
        )
        assert board.has_four_in_row(RED)
        assert not board.has_four_in_row(YELLOW)

    def test_drawn_board_has_no_four(self):
        board = make_board(*DRAWN_ROWS)
        assert not board.has_four_in_row(RED)
        assert not board.has_four_in_row(YELLOW)

    def test_copy(self):
        """Test board copy."""
        board = Board()
        board.drop(3, RED)

        copy = board.copy()
        assert copy.get(5, 3) == RED
        assert copy.red == board.red

        # Modify original shouldn't affect copy
        board.drop(3, YELLOW)
        assert copy.get(4, 3) == EMPTY
        assert len(copy.move_history) == 1

    def test_from_matrix(self):
        board = make_board(
            ".......",
            ".......",
            ".......",
            ".......",
            "...Y...",
            "..RR...",
        )
        assert board.get(4, 3) == YELLOW
        assert board.get(5, 2) == RED
        assert board.count_pieces(RED) == 2
        assert board.last_move is None

    def test_pos_to_bit(self):
        """Test position to bit conversion."""
        assert Board.pos_to_bit(0, 0) == 0
        assert Board.pos_to_bit(0, 1) == 1
        assert Board.pos_to_bit(1, 0) == 7
        assert Board.pos_to_bit(5, 6) == 41

    def test_bit_to_pos(self):
        """Test bit to position conversion."""
        assert Board.bit_to_pos(0) == (0, 0)
        assert Board.bit_to_pos(7) == (1, 0)
        assert Board.bit_to_pos(41) == (5, 6)

    def test_str(self):
        board = Board()
        board.drop(0, RED)
        lines = str(board).split('\n')
        assert lines[5] == 'R . . . . . .'
        assert lines[6] == '1 2 3 4 5 6 7'


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
