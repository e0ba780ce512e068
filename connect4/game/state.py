"""
Game state management for Connect 4.
Tracks current turn, game status, and provides game flow control.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional
import time

from .board import Board, InvalidMove, RED, YELLOW, EMPTY
from .rules import Rules


class GameMode(Enum):
    """Game modes."""
    PVP = "pvp"           # Player vs Player (hotseat)
    PVE = "pve"           # Player vs AI
    EVE = "eve"           # AI vs AI (for testing)


class PlayerType(Enum):
    """Player types."""
    HUMAN = "human"
    AI = "ai"


COLOR_NAMES = {RED: "Red", YELLOW: "Yellow"}


@dataclass
class Player:
    """Player information."""
    color: int
    player_type: PlayerType
    name: str = ""

    def __post_init__(self):
        if not self.name:
            type_name = "Human" if self.player_type == PlayerType.HUMAN else "AI"
            self.name = f"{COLOR_NAMES[self.color]} ({type_name})"


@dataclass
class MoveRecord:
    """Record of a single move."""
    row: int
    col: int
    color: int
    thinking_time: float = 0.0


class GameState:
    """
    Manages the complete state of a Connect 4 game.
    Red always moves first.
    """

    def __init__(self, mode: GameMode = GameMode.PVE, ai_color: int = YELLOW):
        self.mode = mode
        self.ai_color = ai_color
        self.board = Board()
        self.current_turn = RED
        self.move_history: list[MoveRecord] = []
        self.winner = EMPTY
        self.is_game_over = False
        self.last_move: Optional[tuple] = None

        # AI timing
        self.ai_thinking = False
        self.ai_start_time = 0.0
        self.last_ai_time = 0.0

        self._setup_players(mode)

    def _setup_players(self, mode: GameMode):
        """Setup players based on game mode."""
        human_color = Rules.opposite(self.ai_color)
        if mode == GameMode.PVP:
            self.players = {
                RED: Player(RED, PlayerType.HUMAN),
                YELLOW: Player(YELLOW, PlayerType.HUMAN),
            }
        elif mode == GameMode.PVE:
            self.players = {
                human_color: Player(human_color, PlayerType.HUMAN),
                self.ai_color: Player(self.ai_color, PlayerType.AI),
            }
        else:  # EVE
            self.players = {
                RED: Player(RED, PlayerType.AI),
                YELLOW: Player(YELLOW, PlayerType.AI),
            }

    def reset(self, mode: Optional[GameMode] = None):
        """Reset the game to initial state."""
        if mode is not None:
            self.mode = mode

        self.board = Board()
        self.current_turn = RED
        self.move_history = []
        self.winner = EMPTY
        self.is_game_over = False
        self.last_move = None
        self.ai_thinking = False
        self.ai_start_time = 0.0
        self.last_ai_time = 0.0
        self._setup_players(self.mode)

    @property
    def is_draw(self) -> bool:
        return self.is_game_over and self.winner == EMPTY

    def get_current_player(self) -> Player:
        """Get the current player."""
        return self.players[self.current_turn]

    def is_ai_turn(self) -> bool:
        """Check if it's AI's turn."""
        return (not self.is_game_over and
                self.get_current_player().player_type == PlayerType.AI)

    def is_human_turn(self) -> bool:
        """Check if it's human's turn."""
        return (not self.is_game_over and
                self.get_current_player().player_type == PlayerType.HUMAN)

    def make_move(self, col: int, thinking_time: float = 0.0) -> int:
        """
        Drop the current player's piece into col.
        Returns the landing row. Raises InvalidMove if the game is over
        or the column cannot take a piece.
        """
        if self.is_game_over:
            raise InvalidMove(col, "game is over")

        color = self.current_turn
        row = self.board.drop(col, color)

        self.move_history.append(MoveRecord(
            row=row,
            col=col,
            color=color,
            thinking_time=thinking_time
        ))
        self.last_move = (row, col)

        # Only lines through the new piece can have changed
        self.winner = Rules.check_winner(self.board, row, col)
        if self.winner != EMPTY or self.board.is_full():
            self.is_game_over = True

        # Switch turn
        if not self.is_game_over:
            self.current_turn = Rules.opposite(color)

        return row

    def undo_move(self) -> bool:
        """Undo the last move."""
        if not self.move_history:
            return False

        self.board.undo_move()
        record = self.move_history.pop()

        self.is_game_over = False
        self.winner = EMPTY
        self.current_turn = record.color

        if self.move_history:
            last = self.move_history[-1]
            self.last_move = (last.row, last.col)
        else:
            self.last_move = None

        return True

    def get_valid_moves(self) -> list:
        """Get all playable columns."""
        if self.is_game_over:
            return []
        return Rules.get_valid_moves(self.board)

    def start_ai_timer(self):
        """Start timing AI computation."""
        self.ai_thinking = True
        self.ai_start_time = time.time()

    def stop_ai_timer(self):
        """Stop timing AI computation."""
        self.ai_thinking = False
        self.last_ai_time = time.time() - self.ai_start_time

    def get_move_count(self) -> int:
        """Get total number of moves made."""
        return len(self.move_history)

    def get_status_message(self) -> str:
        """Describe whose turn it is or how the game ended."""
        if self.is_game_over:
            if self.winner == EMPTY:
                return "Draw! The board is full"
            return f"{self.players[self.winner].name} wins!"
        return f"{self.get_current_player().name} to move"

    def get_game_info(self) -> dict:
        """Get current game information."""
        return {
            'mode': self.mode.value,
            'turn': COLOR_NAMES[self.current_turn],
            'move_count': self.get_move_count(),
            'is_game_over': self.is_game_over,
            'winner': COLOR_NAMES.get(self.winner),
            'last_move': self.last_move,
            'last_ai_time': self.last_ai_time,
            'status': self.get_status_message(),
        }

    def __str__(self) -> str:
        info = self.get_game_info()
        lines = [
            f"Mode: {info['mode']}",
            f"Turn: {info['turn']} (Move #{info['move_count'] + 1})",
            str(self.board),
        ]
        if info['is_game_over']:
            lines.append(f"Game Over! Winner: {info['winner'] or 'Draw'}")
        return '\n'.join(lines)
