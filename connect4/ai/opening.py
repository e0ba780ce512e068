"""
Opening book for the first few moves of a Connect 4 game.
"""

from typing import Optional

from ..game.board import Board, ROWS
from ..game.rules import Rules

BOTTOM = ROWS - 1


class OpeningBook:
    """Fixed first and second responses for the side moving second."""

    MAX_PIECES = 4

    def get_move(self, board: Board, color: int) -> Optional[int]:
        """
        Suggest a column while at most MAX_PIECES pieces are on the board.
        The suggestion may be illegal; callers must check it.
        """
        piece_count = board.count_pieces()
        if piece_count > self.MAX_PIECES:
            return None

        opp_color = Rules.opposite(color)

        # First reply: the opponent has made the opening move
        if piece_count == 1:
            if board.get(BOTTOM, 3) == opp_color:
                return 2  # Sit beside a centre opening
            return 3

        # Second reply: opponent 2 pieces, us 1
        if piece_count == 3:
            if board.get(BOTTOM, 3) == color:
                if board.get(BOTTOM, 0) == opp_color or board.get(BOTTOM, 1) == opp_color:
                    return 2
                if board.get(BOTTOM, 5) == opp_color or board.get(BOTTOM, 6) == opp_color:
                    return 4
                return 4

            # Not holding the centre: build towards a double threat
            if board.get(BOTTOM, 2) == color:
                if board.is_valid_move(4):
                    return 4
            elif board.get(BOTTOM, 4) == color:
                if board.is_valid_move(2):
                    return 2

        return None
