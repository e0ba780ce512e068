from .board import Board, InvalidMove, EMPTY, RED, YELLOW, ROWS, COLS
from .rules import Rules
from .state import GameState

__all__ = ['Board', 'InvalidMove', 'Rules', 'GameState',
           'EMPTY', 'RED', 'YELLOW', 'ROWS', 'COLS']
