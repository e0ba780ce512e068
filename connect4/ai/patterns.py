"""
Pattern definitions for Connect 4 heuristic evaluation.
Precomputes every four-cell window and defines scoring tables.
"""

from enum import IntEnum
from dataclasses import dataclass

from ..game.board import Board, ROWS, COLS, CONNECT


class WindowScore(IntEnum):
    """Score values for windows holding pieces of one colour only."""
    FOUR = 1_000              # Backstop, real wins are caught earlier
    THREE = 100               # One move from winning
    TWO = 10
    ONE = 1

    OPP_FOUR = -1_000
    OPP_THREE = -120          # Opponent windows weigh more
    OPP_TWO = -12
    OPP_ONE = -1

    # Bottom-row defence
    BOTTOM_OPP_TWO = -50
    BOTTOM_OPP_THREE = -500


class PositionWeight(IntEnum):
    """Per-piece bonus for column control."""
    CENTER = 6
    NEAR_CENTER = 4


class ThreatWeight(IntEnum):
    """Per open-three weights."""
    OWN = 25
    OPPONENT = -30


CENTER_COL = COLS // 2
NEAR_CENTER_COLS = (CENTER_COL - 1, CENTER_COL + 1)
BOTTOM_ROW = ROWS - 1

# Search and fallback move order, centre first
CENTER_ORDER = (3, 2, 4, 1, 5, 0, 6)

_OWN_SCORES = {
    4: WindowScore.FOUR,
    3: WindowScore.THREE,
    2: WindowScore.TWO,
    1: WindowScore.ONE,
}
_OPP_SCORES = {
    4: WindowScore.OPP_FOUR,
    3: WindowScore.OPP_THREE,
    2: WindowScore.OPP_TWO,
    1: WindowScore.OPP_ONE,
}


@dataclass(frozen=True)
class Window:
    """Four cells in a line."""
    mask: int         # Bitboard of the four cells
    ref_row: int      # Row of the first cell, used for row weighting
    direction: str


def _make_window(start_row: int, start_col: int, dr: int, dc: int,
                 direction: str) -> Window:
    mask = 0
    for i in range(CONNECT):
        mask |= 1 << Board.pos_to_bit(start_row + i * dr, start_col + i * dc)
    return Window(mask=mask, ref_row=start_row, direction=direction)


def _build_windows() -> tuple:
    windows = []

    # Horizontal
    for row in range(ROWS):
        for col in range(COLS - CONNECT + 1):
            windows.append(_make_window(row, col, 0, 1, 'horizontal'))

    # Vertical (starts at the top cell)
    for col in range(COLS):
        for row in range(ROWS - CONNECT + 1):
            windows.append(_make_window(row, col, 1, 0, 'vertical'))

    # Diagonal ↘ (starts at the top-left cell)
    for row in range(ROWS - CONNECT + 1):
        for col in range(COLS - CONNECT + 1):
            windows.append(_make_window(row, col, 1, 1, 'diagonal_down'))

    # Diagonal ↗ (starts at the bottom-left cell)
    for row in range(CONNECT - 1, ROWS):
        for col in range(COLS - CONNECT + 1):
            windows.append(_make_window(row, col, -1, 1, 'diagonal_up'))

    return tuple(windows)


ALL_WINDOWS = _build_windows()  # 69 windows
BOTTOM_ROW_WINDOWS = tuple(
    w for w in ALL_WINDOWS
    if w.direction == 'horizontal' and w.ref_row == BOTTOM_ROW
)


def score_window(own_count: int, opp_count: int) -> int:
    """Score a window from its piece counts. Mixed windows are dead."""
    if own_count and opp_count:
        return 0
    if own_count:
        return _OWN_SCORES[own_count]
    if opp_count:
        return _OPP_SCORES[opp_count]
    return 0


def row_multiplier(ref_row: int) -> int:
    """Low rows are reachable sooner, so they weigh more."""
    if ref_row == BOTTOM_ROW:
        return 3
    if ref_row == BOTTOM_ROW - 1:
        return 2
    return 1


def count_bits(value: int) -> int:
    return bin(value).count('1')


class Shape:
    """
    Diagonal shape anchored at (row, col), given as offsets (dr, dc).
    own: cells that must hold the colour, empty: cells that must be empty.
    """

    def __init__(self, name: str, own: tuple, empty: tuple,
                 score: int, penalty: int):
        self.name = name
        self.own = own
        self.empty = empty
        self.score = score        # Awarded for our shapes
        self.penalty = penalty    # Applied for opponent shapes

    def matches(self, board: Board, row: int, col: int, color: int) -> bool:
        for dr, dc in self.own:
            if board.get(row + dr, col + dc) != color:
                return False
        for dr, dc in self.empty:
            r, c = row + dr, col + dc
            if not Board.is_valid_pos(r, c) or not board.is_empty(r, c):
                return False
        return True

    def __repr__(self):
        return f"Shape({self.name}: {self.score}/{self.penalty})"


# Stair-step shapes that tend to precede forced wins
STAIRSTEP_SHAPES = [
    # X with a hole above it and X diagonally up-right
    Shape("STEP", own=((0, 0), (-1, 1)), empty=((-1, 0),),
          score=25, penalty=-30),
    # Two-piece diagonal with an open continuation
    Shape("RAMP", own=((0, 0), (-1, 1)), empty=((-2, 2), (-1, 2)),
          score=40, penalty=-50),
]

# Anchor cells scanned for stair-step shapes
STAIRSTEP_ROWS = range(3, ROWS)
STAIRSTEP_COLS = range(0, COLS - CONNECT + 1)
