#!/usr/bin/env python3
"""
Connect 4 - AI vs Human Board Game
Main entry point for the game.
"""

import logging
import os
import sys

from connect4.game.board import InvalidMove
from connect4.game.state import GameState, GameMode
from connect4.game.rules import Rules
from connect4.ai.engine import AIEngine
from connect4.ui.renderer import Renderer
from connect4.ui.input import InputHandler, InputAction

logger = logging.getLogger(__name__)


class Connect4Game:
    """Main game controller."""

    def __init__(self):
        self.renderer = Renderer()
        self.input_handler = InputHandler(self.renderer)
        self.ai_engine = AIEngine()

        # Game state
        self.state = GameState(GameMode.PVE)

        # UI state
        self.show_debug = False
        self.suggested_col = None
        self.running = True

        # Mode cycle
        self.modes = [GameMode.PVE, GameMode.PVP, GameMode.EVE]
        self.current_mode_idx = 0

    def run(self):
        """Main game loop."""
        while self.running:
            self._handle_input()

            if self.state.is_ai_turn():
                self._run_ai_turn()

            debug_info = self.ai_engine.get_debug_info() if self.show_debug else None
            self.renderer.render(
                self.state,
                suggested_col=self.suggested_col,
                debug_info=debug_info,
                show_debug=self.show_debug
            )

            self.renderer.tick(60)

        self.renderer.quit()

    def _handle_input(self):
        """Process all input events."""
        events = self.input_handler.process_events()

        for event in events:
            if event.action == InputAction.QUIT:
                if self.renderer.show_help_overlay:
                    self.renderer.toggle_help_overlay()
                else:
                    self.running = False

            elif event.action == InputAction.DROP_PIECE:
                if event.column is not None and self.state.is_human_turn():
                    self._make_move(event.column)

            elif event.action == InputAction.NEW_GAME:
                self._new_game()

            elif event.action == InputAction.UNDO:
                self._undo()

            elif event.action == InputAction.SUGGEST:
                self._suggest_move()

            elif event.action == InputAction.TOGGLE_MODE:
                self._toggle_mode()

            elif event.action == InputAction.TOGGLE_DEBUG:
                self.show_debug = not self.show_debug

            elif event.action == InputAction.TOGGLE_HELP:
                self.renderer.toggle_help_overlay()

    def _make_move(self, col: int, thinking_time: float = 0.0):
        """Drop a piece and update the win highlight."""
        reason = Rules.get_invalid_reason(self.state.board, col)
        if reason:
            self.renderer.show_error(reason)
            return

        try:
            row = self.state.make_move(col, thinking_time)
        except InvalidMove as e:
            self.renderer.show_error(e.reason.capitalize())
            return

        self.suggested_col = None

        if self.state.is_game_over and self.state.winner:
            self.renderer.set_win_line(
                Rules.get_winning_positions(self.state.board, row, col)
            )
            logger.info("Game over: %s", self.state.get_status_message())

    def _run_ai_turn(self):
        """Execute AI move."""
        self.state.start_ai_timer()
        col = self.ai_engine.get_move(self.state.board, self.state.current_turn)
        self.state.stop_ai_timer()

        if col is not None:
            self._make_move(col, self.state.last_ai_time)

    def _new_game(self):
        """Start a new game."""
        self.state.reset()
        self.suggested_col = None
        self.renderer.reset_animations()

    def _undo(self):
        """Undo the last move(s)."""
        # In PVE, take back the AI reply together with the human move
        if self.state.mode == GameMode.PVE and self.state.get_move_count() >= 2:
            last_color = self.state.move_history[-1].color
            self.state.undo_move()
            if last_color == self.state.ai_color:
                self.state.undo_move()
        else:
            self.state.undo_move()
        self.suggested_col = None
        self.renderer.reset_animations()

    def _suggest_move(self):
        """Get AI suggestion for current player."""
        if not self.state.is_human_turn():
            return

        self.suggested_col = self.ai_engine.suggest_move(
            self.state.board,
            self.state.current_turn
        )

    def _toggle_mode(self):
        """Toggle between game modes."""
        self.current_mode_idx = (self.current_mode_idx + 1) % len(self.modes)
        self.state.reset(self.modes[self.current_mode_idx])
        self.suggested_col = None
        self.renderer.reset_animations()


def main():
    """Entry point."""
    logging.basicConfig(
        level=os.environ.get("CONNECT4_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        game = Connect4Game()
        game.run()
    except KeyboardInterrupt:
        print("\nGame interrupted.")
        sys.exit(0)
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
