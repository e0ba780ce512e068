"""
AI Engine for Connect 4.
Implements Minimax with Alpha-Beta Pruning and Iterative Deepening.

Before searching, the engine tries cheap shortcuts in order:
- Opening book (first few plies)
- Immediate win, then immediate block
- Forced win in two (double threat), then trap setup
"""

import logging
import time
from typing import Optional
from dataclasses import dataclass, field

from ..game.board import Board
from ..game.rules import Rules
from .heuristic import Heuristic
from .opening import OpeningBook
from .patterns import CENTER_ORDER, CENTER_COL
from .threats import ThreatDetector
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)


@dataclass
class AIDebugInfo:
    """Debug information from AI search."""
    source: str = ""
    thinking_time: float = 0.0
    search_depth: int = 0
    nodes_evaluated: int = 0
    nodes_per_second: float = 0.0
    best_move: Optional[int] = None
    best_score: int = 0
    top_moves: list = field(default_factory=list)
    cutoffs: int = 0


class AIEngine:
    """
    Connect 4 AI using Minimax with Alpha-Beta Pruning.

    Features:
    - Transposition Table keyed by Zobrist fingerprint
    - Centre-first move ordering
    - Iterative deepening with early exit on a found win
    - Drop/undo on a single board instead of copying per node
    """

    # Score bounds
    INF = 10_000_000
    WIN_SCORE = Heuristic.WIN_SCORE
    WIN_THRESHOLD = 900_000

    # Search depth by pieces on the board: (below this many pieces, depth)
    DEPTH_SCHEDULE = ((10, 7), (20, 6))
    ENDGAME_DEPTH = 5

    def __init__(self, max_depth: Optional[int] = None):
        self.heuristic = Heuristic()
        self.opening_book = OpeningBook()
        self.tt = TranspositionTable()

        # Optional cap on the scheduled depth
        self.max_depth = max_depth

        # Search state
        self.node_count = 0
        self.cutoffs = 0
        self.start_time = 0.0

        self.debug_info = AIDebugInfo()

    def depth_for(self, piece_count: int) -> int:
        """Search deeper early, shallower once the board fills up."""
        depth = self.ENDGAME_DEPTH
        for limit, scheduled in self.DEPTH_SCHEDULE:
            if piece_count < limit:
                depth = scheduled
                break
        if self.max_depth is not None:
            depth = min(depth, self.max_depth)
        return depth

    def get_move(self, board: Board, color: int) -> Optional[int]:
        """
        Get the best column for color to play.

        The board is searched in place and restored before returning.
        Returns None only when no column is playable.
        """
        self.start_time = time.time()
        self.node_count = 0
        self.cutoffs = 0
        self.tt.clear()
        self.debug_info = AIDebugInfo()

        valid_moves = Rules.get_valid_moves(board)
        if not valid_moves:
            return None

        opp_color = Rules.opposite(color)

        # ==================== SHORTCUTS ====================
        shortcut = self._check_shortcuts(board, color, opp_color)
        if shortcut is not None:
            source, col = shortcut
            return self._finish(source, col, self.WIN_SCORE if source == 'win' else 0)

        # ==================== ITERATIVE DEEPENING ====================
        best_col = None
        best_score = 0
        max_depth = self.depth_for(board.count_pieces())

        for depth in range(1, max_depth + 1):
            col, score, root_scores = self._search_root(board, depth, color, opp_color)
            if col is None:
                continue

            best_col = col
            best_score = score
            self.debug_info.search_depth = depth
            self.debug_info.top_moves = root_scores

            # A found win is never worth searching past
            if score > self.WIN_THRESHOLD:
                break

        if best_col is not None and board.is_valid_move(best_col):
            return self._finish('search', best_col, best_score)

        # ==================== FALLBACK ====================
        logger.warning("Search returned no column, falling back to centre order")
        if board.is_valid_move(CENTER_COL):
            return self._finish('fallback', CENTER_COL, 0)
        for col in CENTER_ORDER:
            if board.is_valid_move(col):
                return self._finish('fallback', col, 0)

        return None

    def _check_shortcuts(self, board: Board, color: int,
                         opp_color: int) -> Optional[tuple]:
        """
        Moves that skip the search entirely.
        Returns (source, column) or None.
        """
        opening = self.opening_book.get_move(board, color)
        if opening is not None and board.is_valid_move(opening):
            return ('opening', opening)

        winning = ThreatDetector.find_winning_move(board, color)
        if winning is not None:
            return ('win', winning)

        blocking = ThreatDetector.find_winning_move(board, opp_color)
        if blocking is not None:
            return ('block', blocking)

        fork = ThreatDetector.find_forced_win_in_two(board, color)
        if fork is not None:
            return ('fork', fork)

        trap = ThreatDetector.find_trap_setup(board, color)
        if trap is not None:
            return ('trap', trap)

        return None

    def _finish(self, source: str, col: int, score: int) -> int:
        """Record debug info for the chosen column."""
        elapsed = time.time() - self.start_time
        info = self.debug_info
        info.source = source
        info.best_move = col
        info.best_score = score
        info.thinking_time = elapsed
        info.nodes_evaluated = self.node_count
        info.nodes_per_second = self.node_count / elapsed if elapsed > 0 else 0
        info.cutoffs = self.cutoffs

        logger.debug("AI plays column %d (%s, score=%d, depth=%d, nodes=%d, %.3fs)",
                     col, source, score, info.search_depth, self.node_count, elapsed)
        return col

    def _search_root(self, board: Board, depth: int, color: int,
                     opp_color: int) -> tuple:
        """
        Search from the root position (maximizing for color).

        Returns:
            (best_column, best_score, [(column, score), ...])
        """
        self.node_count += 1
        zobrist = self.tt.compute_hash(board)
        alpha = -self.INF
        beta = self.INF
        best_col = None
        best_score = -self.INF
        all_scores = []

        for col in CENTER_ORDER:
            if not board.is_valid_move(col):
                continue

            row = board.drop(col, color)
            if board.winning_line_through(row, col):
                board.undo_move()
                self.tt.store(zobrist, self.WIN_SCORE, depth)
                all_scores.append((col, self.WIN_SCORE))
                return (col, self.WIN_SCORE, all_scores)

            _, score = self._minimax(board, depth - 1, False, alpha, beta,
                                     color, opp_color)
            board.undo_move()

            all_scores.append((col, score))

            if score > best_score:
                best_score = score
                best_col = col

            alpha = max(alpha, best_score)

        if depth > 1 and best_col is not None:
            self.tt.store(zobrist, best_score, depth)

        return (best_col, best_score, all_scores)

    def _minimax(self, board: Board, depth: int, maximizing: bool,
                 alpha: int, beta: int, color: int, opp_color: int) -> tuple:
        """
        Minimax search with alpha-beta pruning.

        Args:
            board: Current board state (mutated and restored)
            depth: Remaining depth
            maximizing: True when color is to move
            alpha: Alpha bound
            beta: Beta bound
            color: The AI's color, scores are from its side
            opp_color: The opponent's color

        Returns:
            (best_column or None, score)
        """
        self.node_count += 1

        # ==================== TERMINAL NODE CHECKS ====================
        last = board.last_move
        if (depth == 0 or board.is_full() or
                (last is not None and board.winning_line_through(*last))):
            return (None, self.heuristic.evaluate(board, color))

        # ==================== TRANSPOSITION TABLE PROBE ====================
        zobrist = self.tt.compute_hash(board)
        cached = self.tt.probe(zobrist, depth)
        if cached is not None:
            return (None, cached)

        mover = color if maximizing else opp_color
        win_score = self.WIN_SCORE if maximizing else -self.WIN_SCORE
        best_col = None
        best_score = -self.INF if maximizing else self.INF

        for col in CENTER_ORDER:
            if not board.is_valid_move(col):
                continue

            row = board.drop(col, mover)

            # Immediate win ends the node without recursing
            if board.winning_line_through(row, col):
                board.undo_move()
                self.tt.store(zobrist, win_score, depth)
                return (col, win_score)

            _, score = self._minimax(board, depth - 1, not maximizing,
                                     alpha, beta, color, opp_color)
            board.undo_move()

            if maximizing:
                if score > best_score:
                    best_score = score
                    best_col = col
                alpha = max(alpha, best_score)
            else:
                if score < best_score:
                    best_score = score
                    best_col = col
                beta = min(beta, best_score)

            if beta <= alpha:
                self.cutoffs += 1
                break

        # ==================== TRANSPOSITION TABLE STORE ====================
        if depth > 1 and best_col is not None:
            self.tt.store(zobrist, best_score, depth)

        return (best_col, best_score)

    def get_debug_info(self) -> dict:
        """Get debug information as dictionary."""
        tt_stats = self.tt.get_stats()
        return {
            'source': self.debug_info.source,
            'thinking_time': self.debug_info.thinking_time,
            'search_depth': self.debug_info.search_depth,
            'nodes_evaluated': self.debug_info.nodes_evaluated,
            'nodes_per_second': self.debug_info.nodes_per_second,
            'best_move': self.debug_info.best_move,
            'best_score': self.debug_info.best_score,
            'top_moves': self.debug_info.top_moves,
            'cutoffs': self.debug_info.cutoffs,
            'tt_hits': tt_stats['hits'],
            'tt_stores': tt_stats['stores'],
            'tt_hit_rate': tt_stats['hit_rate'],
            'tt_filled': tt_stats['filled'],
        }

    def suggest_move(self, board: Board, color: int) -> Optional[int]:
        """Get a suggested column (for human assistance)."""
        return self.get_move(board, color)
