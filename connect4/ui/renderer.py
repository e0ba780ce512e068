"""
Pygame renderer for Connect 4.
Handles all visual rendering of the game.
"""

import pygame
import time
from typing import Optional

from ..game.board import ROWS, COLS, RED, YELLOW
from ..game.state import GameState, GameMode

# Window settings
WINDOW_WIDTH = 920
WINDOW_HEIGHT = 640

# Board settings
BOARD_MARGIN = 40
CELL_SIZE = 80
BOARD_WIDTH = COLS * CELL_SIZE
BOARD_HEIGHT = ROWS * CELL_SIZE
BOARD_TOP = BOARD_MARGIN + CELL_SIZE  # One row of space for the hover piece
PIECE_RADIUS = CELL_SIZE // 2 - 6

# Panel settings
PANEL_X = BOARD_MARGIN + BOARD_WIDTH + 20
PANEL_WIDTH = WINDOW_WIDTH - PANEL_X - 20

# Colors
COLOR_BG = (40, 44, 52)
COLOR_BOARD = (30, 80, 180)
COLOR_HOLE = (25, 28, 35)
COLOR_RED = (220, 50, 50)
COLOR_YELLOW = (240, 210, 40)
COLOR_LAST_MOVE = (255, 255, 255)
COLOR_TEXT = (220, 220, 220)
COLOR_PANEL_BG = (50, 54, 62)
COLOR_HIGHLIGHT = (255, 200, 100)
COLOR_WIN_HIGHLIGHT = (50, 255, 50)

PIECE_COLORS = {RED: COLOR_RED, YELLOW: COLOR_YELLOW}

MODE_LABELS = {
    GameMode.PVP: "PvP",
    GameMode.PVE: "PvE",
    GameMode.EVE: "EvE",
}

HELP_LINES = [
    "Click a column or press 1-7 to drop",
    "N  New game",
    "U / Z  Undo",
    "S  Suggest a move",
    "M  Cycle mode (PvE / PvP / EvE)",
    "D  Toggle AI debug panel",
    "H / ?  Toggle this help",
    "Esc  Quit",
]


class Renderer:
    """Handles rendering of the Connect 4 game."""

    def __init__(self):
        pygame.init()
        pygame.display.set_caption("Connect 4")

        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        self.clock = pygame.time.Clock()

        # Fonts
        self.font_large = pygame.font.Font(None, 48)
        self.font_medium = pygame.font.Font(None, 32)
        self.font_small = pygame.font.Font(None, 24)

        # Hover state
        self.hover_col: Optional[int] = None

        # Buttons, positioned when the panel is drawn
        self.button_width = 120
        self.button_height = 38
        self.buttons = {}

        # Win highlight
        self.win_positions = []
        self.win_animation_start = 0

        self.show_help_overlay = False

        # Error message state
        self.error_message = ""
        self.error_message_time = 0

    def board_to_screen(self, row: int, col: int) -> tuple:
        """Convert board coordinates to the centre of the cell on screen."""
        x = BOARD_MARGIN + col * CELL_SIZE + CELL_SIZE // 2
        y = BOARD_TOP + row * CELL_SIZE + CELL_SIZE // 2
        return (x, y)

    def screen_to_column(self, x: int, y: int) -> Optional[int]:
        """Convert screen coordinates to a board column."""
        if not BOARD_MARGIN <= y < BOARD_TOP + BOARD_HEIGHT:
            return None
        col = (x - BOARD_MARGIN) // CELL_SIZE
        if 0 <= col < COLS and x >= BOARD_MARGIN:
            return col
        return None

    def set_win_line(self, positions: list):
        """Set the winning positions for highlighting."""
        self.win_positions = positions
        self.win_animation_start = time.time()

    def show_error(self, message: str):
        """Show an error message temporarily."""
        self.error_message = message
        self.error_message_time = time.time()

    def reset_animations(self):
        """Reset all animation states."""
        self.win_positions = []
        self.win_animation_start = 0

    def render(self, state: GameState, suggested_col: Optional[int] = None,
               debug_info: Optional[dict] = None, show_debug: bool = False):
        """Render the complete game state."""
        self.screen.fill(COLOR_BG)

        self._render_board(state, suggested_col)
        self._render_panel(state)

        if show_debug and debug_info:
            self._render_debug_panel(debug_info)

        if self.show_help_overlay:
            self._render_help_overlay()

        # Error message (temporary, fades after 2 seconds)
        if self.error_message and time.time() - self.error_message_time < 2.0:
            elapsed = time.time() - self.error_message_time
            alpha = int(255 * (1 - elapsed / 2.0))

            error_box = pygame.Surface((360, 40), pygame.SRCALPHA)
            error_box.fill((180, 50, 50, min(200, alpha)))
            box_x = BOARD_MARGIN + (BOARD_WIDTH - 360) // 2
            box_y = BOARD_MARGIN + 10
            self.screen.blit(error_box, (box_x, box_y))

            error_text = self.font_medium.render(self.error_message, True, (255, 255, 255))
            text_x = box_x + (360 - error_text.get_width()) // 2
            self.screen.blit(error_text, (text_x, box_y + 8))

        pygame.display.flip()

    def _render_board(self, state: GameState, suggested_col: Optional[int] = None):
        """Render the game board."""
        board_rect = pygame.Rect(BOARD_MARGIN, BOARD_TOP, BOARD_WIDTH, BOARD_HEIGHT)
        pygame.draw.rect(self.screen, COLOR_BOARD, board_rect, border_radius=12)

        # Holes and pieces
        for row in range(ROWS):
            for col in range(COLS):
                x, y = self.board_to_screen(row, col)
                piece = state.board.get(row, col)
                color = PIECE_COLORS.get(piece, COLOR_HOLE)
                pygame.draw.circle(self.screen, color, (x, y), PIECE_RADIUS)

        # Column labels
        for col in range(COLS):
            x, _ = self.board_to_screen(ROWS - 1, col)
            label = self.font_small.render(str(col + 1), True, COLOR_TEXT)
            self.screen.blit(label, (x - label.get_width() // 2,
                                     BOARD_TOP + BOARD_HEIGHT + 6))

        # Last move marker
        if state.last_move:
            x, y = self.board_to_screen(*state.last_move)
            pygame.draw.circle(self.screen, COLOR_LAST_MOVE, (x, y), 6)

        # Winning line highlight
        if self.win_positions and state.is_game_over:
            elapsed = time.time() - self.win_animation_start
            pulse = 0.5 + 0.5 * abs((elapsed * 3) % 2 - 1)
            for row, col in self.win_positions:
                x, y = self.board_to_screen(row, col)
                radius = int(PIECE_RADIUS + 4 * pulse)
                pygame.draw.circle(self.screen, COLOR_WIN_HIGHLIGHT, (x, y), radius, 4)

        # Suggested column
        if suggested_col is not None:
            row = state.board.lowest_empty_row(suggested_col)
            if row is not None:
                x, y = self.board_to_screen(row, suggested_col)
                pygame.draw.circle(self.screen, COLOR_HIGHLIGHT, (x, y), PIECE_RADIUS, 3)

        # Hover piece above the column
        if (self.hover_col is not None and state.is_human_turn() and
                state.board.is_valid_move(self.hover_col)):
            x, _ = self.board_to_screen(0, self.hover_col)
            y = BOARD_MARGIN + CELL_SIZE // 2
            color = PIECE_COLORS[state.current_turn]
            s = pygame.Surface((PIECE_RADIUS * 2, PIECE_RADIUS * 2), pygame.SRCALPHA)
            pygame.draw.circle(s, (*color, 160), (PIECE_RADIUS, PIECE_RADIUS), PIECE_RADIUS)
            self.screen.blit(s, (x - PIECE_RADIUS, y - PIECE_RADIUS))

    def _render_panel(self, state: GameState):
        """Render the side panel with game info."""
        panel_rect = pygame.Rect(PANEL_X, BOARD_MARGIN, PANEL_WIDTH,
                                 WINDOW_HEIGHT - 2 * BOARD_MARGIN)
        pygame.draw.rect(self.screen, COLOR_PANEL_BG, panel_rect, border_radius=10)

        y_offset = BOARD_MARGIN + 20

        title = self.font_large.render("CONNECT 4", True, COLOR_TEXT)
        self.screen.blit(title, (PANEL_X + 20, y_offset))
        y_offset += 50

        mode = self.font_small.render(MODE_LABELS.get(state.mode, "?"), True, (150, 150, 150))
        self.screen.blit(mode, (PANEL_X + 20, y_offset))
        y_offset += 40

        # Turn indicator
        if not state.is_game_over:
            pygame.draw.circle(self.screen, PIECE_COLORS[state.current_turn],
                               (PANEL_X + 32, y_offset + 10), 12)
        status_color = COLOR_HIGHLIGHT if state.is_game_over else COLOR_TEXT
        status = self.font_small.render(state.get_status_message(), True, status_color)
        self.screen.blit(status, (PANEL_X + 52, y_offset + 2))
        y_offset += 40

        if state.last_ai_time > 0:
            ai_time = self.font_small.render(f"AI time: {state.last_ai_time:.2f}s",
                                             True, (150, 150, 150))
            self.screen.blit(ai_time, (PANEL_X + 20, y_offset))
        y_offset += 40

        self._render_buttons(y_offset)

        hint = self.font_small.render("Press ? for help", True, (100, 105, 115))
        hint_x = PANEL_X + (PANEL_WIDTH - hint.get_width()) // 2
        self.screen.blit(hint, (hint_x, WINDOW_HEIGHT - BOARD_MARGIN - 30))

    def _render_buttons(self, start_y: int):
        """Render the panel buttons."""
        mouse_pos = pygame.mouse.get_pos()
        button_x = PANEL_X + 18

        self.buttons = {
            'new_game': pygame.Rect(button_x, start_y, self.button_width, self.button_height),
            'undo': pygame.Rect(button_x + 128, start_y, self.button_width, self.button_height),
            'suggest': pygame.Rect(button_x, start_y + 46, self.button_width, self.button_height),
            'mode': pygame.Rect(button_x + 128, start_y + 46, self.button_width, self.button_height),
        }

        button_labels = {
            'new_game': 'New Game',
            'undo': 'Undo',
            'suggest': 'Suggest',
            'mode': 'Mode',
        }

        for name, rect in self.buttons.items():
            if rect.collidepoint(mouse_pos):
                color = (75, 85, 100)
                border_color = COLOR_HIGHLIGHT
            else:
                color = (55, 62, 75)
                border_color = (80, 85, 95)

            pygame.draw.rect(self.screen, color, rect, border_radius=8)
            pygame.draw.rect(self.screen, border_color, rect, 1, border_radius=8)

            label = self.font_small.render(button_labels[name], True, COLOR_TEXT)
            self.screen.blit(label, (rect.centerx - label.get_width() // 2,
                                     rect.centery - label.get_height() // 2))

    def _render_debug_panel(self, debug_info: dict):
        """Render the AI search statistics."""
        panel_width = 300
        panel_height = 250
        panel_x = BOARD_MARGIN + 10
        panel_y = BOARD_TOP + 10

        s = pygame.Surface((panel_width, panel_height), pygame.SRCALPHA)
        s.fill((30, 30, 40, 230))
        self.screen.blit(s, (panel_x, panel_y))
        pygame.draw.rect(self.screen, COLOR_TEXT,
                         (panel_x, panel_y, panel_width, panel_height), 1)

        y = panel_y + 12
        title = self.font_medium.render("AI Performance", True, COLOR_HIGHLIGHT)
        self.screen.blit(title, (panel_x + 15, y))
        y += 30

        best = debug_info.get('best_move')
        lines = [
            f"Decision: {debug_info.get('source', '')}",
            f"Column: {best + 1 if best is not None else '-'}",
            f"Score: {debug_info.get('best_score', 0)}",
            f"Time: {debug_info.get('thinking_time', 0):.3f}s",
            f"Depth: {debug_info.get('search_depth', 0)}",
            f"Nodes: {debug_info.get('nodes_evaluated', 0):,}",
            f"Cutoffs: {debug_info.get('cutoffs', 0):,}",
            f"TT hits: {debug_info.get('tt_hit_rate', '0%')}",
            f"TT stores: {debug_info.get('tt_stores', 0):,}",
        ]
        for line in lines:
            text = self.font_small.render(line, True, COLOR_TEXT)
            self.screen.blit(text, (panel_x + 25, y))
            y += 22

    def _render_help_overlay(self):
        """Render the keyboard help."""
        overlay = pygame.Surface((WINDOW_WIDTH, WINDOW_HEIGHT), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 180))
        self.screen.blit(overlay, (0, 0))

        y = 120
        title = self.font_large.render("Help", True, COLOR_HIGHLIGHT)
        self.screen.blit(title, ((WINDOW_WIDTH - title.get_width()) // 2, y))
        y += 60

        for line in HELP_LINES:
            text = self.font_small.render(line, True, COLOR_TEXT)
            self.screen.blit(text, ((WINDOW_WIDTH - text.get_width()) // 2, y))
            y += 30

    def toggle_help_overlay(self):
        """Toggle help overlay."""
        self.show_help_overlay = not self.show_help_overlay

    def get_button_at(self, pos: tuple) -> Optional[str]:
        """Get the button name at a screen position."""
        for name, rect in self.buttons.items():
            if rect.collidepoint(pos):
                return name
        return None

    def update_hover(self, pos: tuple):
        """Update hover column for the drop preview."""
        self.hover_col = self.screen_to_column(pos[0], pos[1])

    def tick(self, fps: int = 60):
        """Control frame rate."""
        self.clock.tick(fps)

    def quit(self):
        """Clean up pygame."""
        pygame.quit()
