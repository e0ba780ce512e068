"""
Threat and tactical pattern detection for Connect 4.
All simulations drop a piece, inspect, and undo on the same board.
"""

from typing import Optional

from ..game.board import Board, COLS
from ..game.rules import Rules
from .patterns import (
    ALL_WINDOWS, STAIRSTEP_SHAPES, STAIRSTEP_ROWS, STAIRSTEP_COLS, count_bits
)


class ThreatDetector:
    """Counts open threes and finds tactical shortcuts."""

    @staticmethod
    def count_threats(board: Board, color: int) -> int:
        """
        Count windows with exactly three color pieces and one empty cell.
        The empty cell does not need to be playable yet.
        """
        own = board.get_pieces(color)
        occupied = board.get_occupied()
        threats = 0

        for window in ALL_WINDOWS:
            if (count_bits(own & window.mask) == 3 and
                    count_bits(occupied & window.mask) == 3):
                threats += 1

        return threats

    @staticmethod
    def detect_stairstep_patterns(board: Board, color: int) -> int:
        """Score stair-step shapes: bonus for color's, penalty for the opponent's."""
        opp_color = Rules.opposite(color)
        score = 0

        for row in STAIRSTEP_ROWS:
            for col in STAIRSTEP_COLS:
                for shape in STAIRSTEP_SHAPES:
                    if shape.matches(board, row, col, color):
                        score += shape.score
                    if shape.matches(board, row, col, opp_color):
                        score += shape.penalty

        return score

    @staticmethod
    def _wins_with(board: Board, col: int, color: int) -> bool:
        """Whether dropping color into col wins immediately."""
        row = board.drop(col, color)
        try:
            return board.winning_line_through(row, col)
        finally:
            board.undo_move()

    @staticmethod
    def find_winning_moves(board: Board, color: int) -> list:
        """All columns where color wins immediately, ascending."""
        return [
            col for col in range(COLS)
            if board.is_valid_move(col) and ThreatDetector._wins_with(board, col, color)
        ]

    @staticmethod
    def find_winning_move(board: Board, color: int) -> Optional[int]:
        """First column (ascending) where color wins immediately, or None."""
        for col in range(COLS):
            if board.is_valid_move(col) and ThreatDetector._wins_with(board, col, color):
                return col
        return None

    @staticmethod
    def find_forced_win_in_two(board: Board, color: int) -> Optional[int]:
        """
        Find a move after which color has two or more winning follow-ups.

        The opponent's reply is not modelled: any double threat is taken
        as unstoppable, even if both threats need the same cell.
        """
        for col in range(COLS):
            if not board.is_valid_move(col):
                continue

            board.drop(col, color)
            try:
                winning_moves = 0
                for next_col in range(COLS):
                    if (board.is_valid_move(next_col) and
                            ThreatDetector._wins_with(board, next_col, color)):
                        winning_moves += 1
            finally:
                board.undo_move()

            if winning_moves >= 2:
                return col

        return None

    @staticmethod
    def find_trap_setup(board: Board, color: int) -> Optional[int]:
        """
        Find the move that leaves color the most open threes after the
        opponent's best-case reply.

        Only replies after which the opponent has no open three count.
        Returns the column with the strictly highest count (first on
        ties), or None when no move yields any threat.
        """
        opp_color = Rules.opposite(color)
        best_col = None
        max_threats = 0

        for col in range(COLS):
            if not board.is_valid_move(col):
                continue

            board.drop(col, color)
            our_max_future_threats = 0

            for opp_col in range(COLS):
                if not board.is_valid_move(opp_col):
                    continue

                board.drop(opp_col, opp_color)
                our_threats = ThreatDetector.count_threats(board, color)
                opponent_threats = ThreatDetector.count_threats(board, opp_color)
                board.undo_move()

                if opponent_threats == 0 and our_threats > our_max_future_threats:
                    our_max_future_threats = our_threats

            board.undo_move()

            if our_max_future_threats > max_threats:
                max_threats = our_max_future_threats
                best_col = col

        return best_col

