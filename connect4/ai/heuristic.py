"""
Heuristic evaluation function for Connect 4.
Evaluates board positions using window-based scoring.
"""

from ..game.board import Board, ROWS
from ..game.rules import Rules
from .patterns import (
    WindowScore, PositionWeight, ThreatWeight, ALL_WINDOWS, BOTTOM_ROW_WINDOWS,
    CENTER_COL, NEAR_CENTER_COLS, score_window, row_multiplier, count_bits
)
from .threats import ThreatDetector


class Heuristic:
    """
    Evaluates board positions for the AI.
    Pure function of the board: no caching, no side effects.
    """

    # Winning/losing scores
    WIN_SCORE = 1_000_000
    LOSE_SCORE = -1_000_000

    def evaluate(self, board: Board, color: int) -> int:
        """
        Evaluate the board position from color's perspective.

        Args:
            board: Current board state
            color: The color to evaluate for (RED or YELLOW)

        Returns:
            Integer score (positive = good for color, negative = bad)
        """
        opp_color = Rules.opposite(color)

        # Check for wins/losses
        if board.has_four_in_row(color):
            return self.WIN_SCORE
        if board.has_four_in_row(opp_color):
            return self.LOSE_SCORE

        own = board.get_pieces(color)
        opp = board.get_pieces(opp_color)

        score = self._evaluate_positions(board, color, opp_color)
        score += self._evaluate_windows(own, opp)
        score += self._evaluate_bottom_row(own, opp)

        # Open threes, opponent's weigh more
        score += ThreatDetector.count_threats(board, color) * ThreatWeight.OWN
        score += ThreatDetector.count_threats(board, opp_color) * ThreatWeight.OPPONENT

        score += ThreatDetector.detect_stairstep_patterns(board, color)

        return int(score)

    def _evaluate_positions(self, board: Board, color: int, opp_color: int) -> int:
        """Centre column control, then the two columns beside it."""
        score = 0

        for row in range(ROWS):
            piece = board.get(row, CENTER_COL)
            if piece == color:
                score += PositionWeight.CENTER
            elif piece == opp_color:
                score -= PositionWeight.CENTER

        for row in range(ROWS):
            for col in NEAR_CENTER_COLS:
                piece = board.get(row, col)
                if piece == color:
                    score += PositionWeight.NEAR_CENTER
                elif piece == opp_color:
                    score -= PositionWeight.NEAR_CENTER

        return score

    def _evaluate_windows(self, own: int, opp: int) -> int:
        """Sum of every window's score, weighted by its row."""
        score = 0
        for window in ALL_WINDOWS:
            window_score = score_window(count_bits(own & window.mask),
                                        count_bits(opp & window.mask))
            score += window_score * row_multiplier(window.ref_row)
        return score

    def _evaluate_bottom_row(self, own: int, opp: int) -> int:
        """Extra penalty for opponent setups on the bottom row."""
        score = 0
        for window in BOTTOM_ROW_WINDOWS:
            if own & window.mask:
                continue
            opp_count = count_bits(opp & window.mask)
            if opp_count == 2:
                score += WindowScore.BOTTOM_OPP_TWO
            elif opp_count == 3:
                score += WindowScore.BOTTOM_OPP_THREE
        return score
