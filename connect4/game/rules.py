"""
Connect 4 game rules implementation.
Move legality, win and draw adjudication.
"""

from .board import Board, EMPTY, RED, YELLOW, COLS, CONNECT, DIRECTION_STEPS


class Rules:
    """Game rules for Connect 4."""

    @staticmethod
    def opposite(color: int) -> int:
        """Get the opposite color."""
        return YELLOW if color == RED else RED

    @staticmethod
    def get_valid_moves(board: Board) -> list:
        """Get all playable columns in ascending order."""
        return [col for col in range(COLS) if board.is_valid_move(col)]

    @staticmethod
    def get_invalid_reason(board: Board, col: int) -> str:
        """
        Get reason why a drop is invalid.
        Returns empty string if valid.
        """
        if not 0 <= col < COLS:
            return "Column out of range"
        if not board.is_valid_move(col):
            return "Column is full"
        return ""

    @staticmethod
    def check_winner(board: Board, row: int, col: int) -> int:
        """
        Check if the piece at (row, col) completes four in a row.
        Returns the winner color or EMPTY.
        """
        if board.winning_line_through(row, col):
            return board.get(row, col)
        return EMPTY

    @staticmethod
    def get_winning_positions(board: Board, row: int, col: int) -> list:
        """
        Get the run of four or more through (row, col).
        Returns empty list if there is none.
        """
        color = board.get(row, col)
        if color == EMPTY:
            return []

        for dr, dc in DIRECTION_STEPS:
            positions = [(row, col)]

            r, c = row + dr, col + dc
            while Board.is_valid_pos(r, c) and board.get(r, c) == color:
                positions.append((r, c))
                r, c = r + dr, c + dc

            r, c = row - dr, col - dc
            while Board.is_valid_pos(r, c) and board.get(r, c) == color:
                positions.insert(0, (r, c))
                r, c = r - dr, c - dc

            if len(positions) >= CONNECT:
                return positions

        return []

    @staticmethod
    def is_game_over(board: Board) -> tuple:
        """
        Check if game is over.
        Returns (is_over, winner) where winner is EMPTY for a draw.
        """
        for color in (RED, YELLOW):
            if board.has_four_in_row(color):
                return (True, color)

        if board.is_full():
            return (True, EMPTY)

        return (False, EMPTY)
