"""Tests for heuristic evaluation."""

import sys
sys.path.insert(0, '.')

import pytest

from connect4.game.board import Board, RED, YELLOW, EMPTY
from connect4.ai.heuristic import Heuristic
from connect4.ai.patterns import (
    ALL_WINDOWS, BOTTOM_ROW_WINDOWS, score_window, row_multiplier, WindowScore
)


def make_board(*rows):
    """Build a board from 6 strings, top row first ('.', 'R', 'Y')."""
    symbols = {'.': EMPTY, 'R': RED, 'Y': YELLOW}
    return Board.from_matrix([[symbols[ch] for ch in row] for row in rows])


class TestWindows:
    """Test window tables."""

    def test_window_count(self):
        assert len(ALL_WINDOWS) == 69
        assert len(BOTTOM_ROW_WINDOWS) == 4

    def test_window_masks(self):
        """Every window covers four distinct cells, and no window repeats."""
        counts = {}
        for window in ALL_WINDOWS:
            assert bin(window.mask).count('1') == 4
            counts[window.direction] = counts.get(window.direction, 0) + 1

        assert len({w.mask for w in ALL_WINDOWS}) == 69
        assert counts == {'horizontal': 24, 'vertical': 21,
                          'diagonal_down': 12, 'diagonal_up': 12}

    def test_bottom_row_window_masks(self):
        bottom = Board()
        for col in range(4):
            bottom.drop(col, RED)
        assert BOTTOM_ROW_WINDOWS[0].mask == bottom.red
        assert all(w.ref_row == 5 for w in BOTTOM_ROW_WINDOWS)

    def test_mixed_window_is_dead(self):
        assert score_window(2, 1) == 0
        assert score_window(0, 0) == 0

    def test_opponent_windows_weigh_more(self):
        assert score_window(0, 3) == WindowScore.OPP_THREE
        assert abs(score_window(0, 3)) > score_window(3, 0)
        assert abs(score_window(0, 2)) > score_window(2, 0)

    def test_row_multiplier(self):
        assert row_multiplier(5) == 3
        assert row_multiplier(4) == 2
        assert row_multiplier(3) == 1
        assert row_multiplier(0) == 1


class TestHeuristic:
    """Test cases for Heuristic.evaluate."""

    def setup_method(self):
        self.heuristic = Heuristic()

    def test_empty_board(self):
        assert self.heuristic.evaluate(Board(), RED) == 0
        assert self.heuristic.evaluate(Board(), YELLOW) == 0

    def test_win_is_exact(self):
        board = make_board(
            ".......",
            ".......",
            ".......",
            "....R..",
            "....R..",
            "YYYYR..",
        )
        assert self.heuristic.evaluate(board, YELLOW) == Heuristic.WIN_SCORE
        assert self.heuristic.evaluate(board, RED) == Heuristic.LOSE_SCORE

    def test_single_centre_piece(self):
        """Centre bonus plus one-piece windows weighted by row."""
        board = Board()
        board.drop(3, YELLOW)

        # 6 (centre) + 4*3 (bottom row) + 1 (vertical) + 1 (↘) + 3 (↗)
        assert self.heuristic.evaluate(board, YELLOW) == 23
        assert self.heuristic.evaluate(board, RED) == -23

    def test_bottom_row_defence(self):
        """Two opponent pieces on an open bottom window cost extra."""
        board = Board()
        board.drop(0, RED)
        board.drop(1, RED)

        assert self.heuristic.evaluate(board, RED) == 41
        assert self.heuristic.evaluate(board, YELLOW) == -97

    def test_bottom_row_defence_skips_blocked_windows(self):
        board = Board()
        board.drop(0, RED)
        board.drop(1, RED)
        without_block = self.heuristic.evaluate(board, YELLOW)

        board.drop(2, YELLOW)
        assert self.heuristic.evaluate(board, YELLOW) > without_block

    def test_idempotent(self):
        """Evaluation does not depend on or change hidden state."""
        board = make_board(
            ".......",
            ".......",
            ".......",
            "...Y...",
            "..RR...",
            ".YRYY..",
        )
        red, yellow = board.red, board.yellow
        first = self.heuristic.evaluate(board, YELLOW)
        assert self.heuristic.evaluate(board, YELLOW) == first
        assert Heuristic().evaluate(board, YELLOW) == first
        assert (board.red, board.yellow) == (red, yellow)

    def test_open_three_scores_positive(self):
        board = Board()
        for col in range(3):
            board.drop(col, RED)
        board.drop(6, YELLOW)
        assert self.heuristic.evaluate(board, RED) > 0
        assert self.heuristic.evaluate(board, YELLOW) < 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
