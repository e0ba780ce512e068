"""
Bitboard implementation for Connect 4.
6x7 board represented as two 42-bit integers, one per colour.
Row 0 is the top of the board, row 5 the bottom.
"""

from typing import Optional

EMPTY = 0
RED = 1      # First mover
YELLOW = 2

ROWS = 6
COLS = 7
TOTAL_CELLS = ROWS * COLS  # 42
CONNECT = 4

# Bit shift to the next cell of a line, per direction
DIRECTIONS = {
    'horizontal': 1,
    'vertical': COLS,             # 7
    'diagonal_down': COLS + 1,    # 8 (↘)
    'diagonal_left': COLS - 1,    # 6 (↙)
}

# (dr, dc) steps matching DIRECTIONS, used for outward scans
DIRECTION_STEPS = [
    (0, 1),    # horizontal →
    (1, 0),    # vertical ↓
    (1, 1),    # diagonal ↘
    (1, -1),   # diagonal ↙
]


def _create_start_mask(cols: range) -> int:
    """Mask of every cell whose column is in cols."""
    mask = 0
    for row in range(ROWS):
        for col in cols:
            mask |= (1 << (row * COLS + col))
    return mask


# Cells where a run of four may start, per direction.
# Runs starting elsewhere would wrap across a row edge.
START_MASKS = {
    'horizontal': _create_start_mask(range(0, COLS - CONNECT + 1)),
    'vertical': _create_start_mask(range(COLS)),
    'diagonal_down': _create_start_mask(range(0, COLS - CONNECT + 1)),
    'diagonal_left': _create_start_mask(range(CONNECT - 1, COLS)),
}

TOP_ROW_MASK = (1 << COLS) - 1


class InvalidMove(ValueError):
    """Raised when a piece cannot be dropped into a column."""

    def __init__(self, column, reason: str):
        super().__init__(f"Invalid move in column {column}: {reason}")
        self.column = column
        self.reason = reason


class Board:
    """
    Bitboard representation of a Connect 4 board.
    Uses two 42-bit integers to track red and yellow pieces.
    """

    def __init__(self):
        self.red = 0     # 42-bit integer for red pieces
        self.yellow = 0  # 42-bit integer for yellow pieces
        self.move_history = []  # Stack of (row, col, color)

    def copy(self):
        """Create a deep copy of the board."""
        new_board = Board()
        new_board.red = self.red
        new_board.yellow = self.yellow
        new_board.move_history = self.move_history.copy()
        return new_board

    @classmethod
    def from_matrix(cls, matrix: list) -> 'Board':
        """
        Build a board from a 6x7 matrix (row 0 = top) of 0/1/2 values.
        No move history is recorded, so last_move is None.
        """
        board = cls()
        for row in range(ROWS):
            for col in range(COLS):
                value = matrix[row][col]
                if value == RED:
                    board.red |= 1 << cls.pos_to_bit(row, col)
                elif value == YELLOW:
                    board.yellow |= 1 << cls.pos_to_bit(row, col)
        return board

    @staticmethod
    def pos_to_bit(row: int, col: int) -> int:
        """Convert (row, col) to bit position."""
        return row * COLS + col

    @staticmethod
    def bit_to_pos(bit: int) -> tuple:
        """Convert bit position to (row, col)."""
        return (bit // COLS, bit % COLS)

    @staticmethod
    def is_valid_pos(row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < ROWS and 0 <= col < COLS

    def get(self, row: int, col: int) -> int:
        """Get piece at position. Returns EMPTY, RED, or YELLOW."""
        if not self.is_valid_pos(row, col):
            return EMPTY

        bit = 1 << self.pos_to_bit(row, col)
        if self.red & bit:
            return RED
        if self.yellow & bit:
            return YELLOW
        return EMPTY

    def is_empty(self, row: int, col: int) -> bool:
        """Check if position is empty."""
        return self.get(row, col) == EMPTY

    def get_occupied(self) -> int:
        """Get bitboard of all occupied positions."""
        return self.red | self.yellow

    def get_pieces(self, color: int) -> int:
        """Get bitboard for specific color."""
        return self.red if color == RED else self.yellow

    def count_pieces(self, color: Optional[int] = None) -> int:
        """Count pieces of a color, or all pieces when color is None."""
        pieces = self.get_occupied() if color is None else self.get_pieces(color)
        return bin(pieces).count('1')

    def is_valid_move(self, col: int) -> bool:
        """A column is playable iff it is in range and its top cell is empty."""
        if not 0 <= col < COLS:
            return False
        return self.is_empty(0, col)

    def lowest_empty_row(self, col: int) -> Optional[int]:
        """Row a piece dropped into col would land on, or None if full."""
        if not 0 <= col < COLS:
            return None
        for row in range(ROWS - 1, -1, -1):
            if self.is_empty(row, col):
                return row
        return None

    def drop(self, col: int, color: int) -> int:
        """
        Drop a piece into a column (gravity rule).
        Returns the landing row. Raises InvalidMove if the column is
        out of range or full; the board is unchanged in that case.
        """
        if not 0 <= col < COLS:
            raise InvalidMove(col, "column out of range")
        row = self.lowest_empty_row(col)
        if row is None:
            raise InvalidMove(col, "column is full")

        bit = 1 << self.pos_to_bit(row, col)
        if color == RED:
            self.red |= bit
        else:
            self.yellow |= bit
        self.move_history.append((row, col, color))
        return row

    def undo_move(self) -> Optional[tuple]:
        """
        Undo the last drop.
        Returns (row, col, color) or None if no history.
        """
        if not self.move_history:
            return None

        row, col, color = self.move_history.pop()
        mask = ~(1 << self.pos_to_bit(row, col))
        if color == RED:
            self.red &= mask
        else:
            self.yellow &= mask
        return (row, col, color)

    @property
    def last_move(self) -> Optional[tuple]:
        """(row, col) of the most recent drop."""
        if not self.move_history:
            return None
        row, col, _ = self.move_history[-1]
        return (row, col)

    def is_full(self) -> bool:
        """The board is full when the top row has no empty cell."""
        return (self.get_occupied() & TOP_ROW_MASK) == TOP_ROW_MASK

    def count_in_direction(self, row: int, col: int, dr: int, dc: int) -> int:
        """
        Count consecutive pieces of the colour at (row, col) going in
        one direction. Does not include the starting cell.
        """
        color = self.get(row, col)
        count = 0
        r, c = row + dr, col + dc
        while self.is_valid_pos(r, c) and self.get(r, c) == color:
            count += 1
            r, c = r + dr, c + dc
        return count

    def winning_line_through(self, row: int, col: int) -> bool:
        """
        Check whether the piece at (row, col) is part of four or more in a
        row, scanning outward both ways along each axis.
        """
        if self.get(row, col) == EMPTY:
            return False

        for dr, dc in DIRECTION_STEPS:
            count = (1 + self.count_in_direction(row, col, dr, dc)
                     + self.count_in_direction(row, col, -dr, -dc))
            if count >= CONNECT:
                return True
        return False

    def check_line(self, color: int, direction: str) -> bool:
        """
        Check if color has four consecutive pieces in a direction.
        Uses bit shifting; the start mask drops runs that wrap a row edge.
        """
        pieces = self.get_pieces(color)
        shift = DIRECTIONS[direction]

        result = pieces
        for step in range(1, CONNECT):
            result &= pieces >> (shift * step)

        return (result & START_MASKS[direction]) != 0

    def has_four_in_row(self, color: int) -> bool:
        """Check if color has 4 or more in a row anywhere on the board."""
        for direction in DIRECTIONS:
            if self.check_line(color, direction):
                return True
        return False

    def __str__(self) -> str:
        """String representation of the board."""
        symbols = {EMPTY: '.', RED: 'R', YELLOW: 'Y'}
        lines = []

        for row in range(ROWS):
            lines.append(' '.join(symbols[self.get(row, col)] for col in range(COLS)))

        # Column numbers at the bottom
        lines.append(' '.join(str(col + 1) for col in range(COLS)))

        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f'Board(red={bin(self.red)}, yellow={bin(self.yellow)})'
