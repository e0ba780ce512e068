"""Tests for game rules."""

import sys
sys.path.insert(0, '.')

import pytest

from connect4.game.board import Board, RED, YELLOW, EMPTY, ROWS
from connect4.game.rules import Rules


def make_board(*rows):
    """Build a board from 6 strings, top row first ('.', 'R', 'Y')."""
    symbols = {'.': EMPTY, 'R': RED, 'Y': YELLOW}
    return Board.from_matrix([[symbols[ch] for ch in row] for row in rows])


class TestMoveLegality:
    """Test column legality."""

    def test_all_columns_open_on_empty_board(self):
        assert Rules.get_valid_moves(Board()) == [0, 1, 2, 3, 4, 5, 6]

    def test_full_column_excluded(self):
        board = Board()
        for i in range(ROWS):
            board.drop(2, RED if i % 2 == 0 else YELLOW)
        assert Rules.get_valid_moves(board) == [0, 1, 3, 4, 5, 6]

    def test_invalid_reason(self):
        board = Board()
        for i in range(ROWS):
            board.drop(6, RED if i % 2 == 0 else YELLOW)

        assert Rules.get_invalid_reason(board, 0) == ""
        assert Rules.get_invalid_reason(board, 6) == "Column is full"
        assert Rules.get_invalid_reason(board, 7) == "Column out of range"
        assert Rules.get_invalid_reason(board, -1) == "Column out of range"

    def test_opposite(self):
        assert Rules.opposite(RED) == YELLOW
        assert Rules.opposite(YELLOW) == RED


class TestWinDetection:
    """Test win adjudication."""

    def test_check_winner_horizontal(self):
        board = Board()
        for col in range(1, 5):
            row = board.drop(col, YELLOW)
        assert Rules.check_winner(board, row, 4) == YELLOW

    def test_check_winner_no_win(self):
        board = Board()
        board.drop(3, RED)
        row = board.drop(3, RED)
        assert Rules.check_winner(board, row, 3) == EMPTY

    def test_winning_positions_vertical(self):
        board = Board()
        for _ in range(4):
            row = board.drop(0, RED)

        positions = Rules.get_winning_positions(board, row, 0)
        assert positions == [(2, 0), (3, 0), (4, 0), (5, 0)]

    def test_winning_positions_from_middle(self):
        board = Board()
        for col in (0, 1, 3):
            board.drop(col, RED)
        row = board.drop(2, RED)

        positions = Rules.get_winning_positions(board, row, 2)
        assert positions == [(5, 0), (5, 1), (5, 2), (5, 3)]

    def test_winning_positions_longer_run(self):
        """A run of five is returned whole."""
        board = Board()
        for col in (0, 1, 3, 4):
            board.drop(col, YELLOW)
        row = board.drop(2, YELLOW)

        positions = Rules.get_winning_positions(board, row, 2)
        assert len(positions) == 5

    def test_winning_positions_none(self):
        board = Board()
        row = board.drop(3, RED)
        assert Rules.get_winning_positions(board, row, 3) == []
        assert Rules.get_winning_positions(board, 0, 0) == []


class TestGameOver:
    """Test game over detection."""

    def test_ongoing(self):
        board = Board()
        board.drop(3, RED)
        assert Rules.is_game_over(board) == (False, EMPTY)

    def test_win(self):
        board = make_board(
            ".......",
            ".......",
            "...R...",
            "..RY...",
            ".RYY...",
            "RYYR...",
        )
        assert Rules.is_game_over(board) == (True, RED)

    def test_draw(self):
        board = make_board(
            "RRYYRRY",
            "YYRRYYR",
            "RRYYRRY",
            "YYRRYYR",
            "RRYYRRY",
            "YYRRYYR",
        )
        assert Rules.is_game_over(board) == (True, EMPTY)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
