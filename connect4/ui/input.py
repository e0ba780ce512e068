"""
Mouse and keyboard input for Connect 4.
Turns pygame events into game actions; the renderer resolves screen hits.
"""

import pygame
from enum import Enum, auto
from typing import Optional
from dataclasses import dataclass


class InputAction(Enum):
    NONE = auto()
    QUIT = auto()
    DROP_PIECE = auto()
    NEW_GAME = auto()
    UNDO = auto()
    SUGGEST = auto()
    TOGGLE_MODE = auto()
    TOGGLE_DEBUG = auto()
    TOGGLE_HELP = auto()


@dataclass
class InputEvent:
    action: InputAction
    column: Optional[int] = None
    mouse_pos: Optional[tuple] = None


# Keys 1-7 map to columns 0-6
COLUMN_KEYS = {key: col for col, key in enumerate(
    (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4,
     pygame.K_5, pygame.K_6, pygame.K_7))}

KEY_ACTIONS = {
    pygame.K_ESCAPE: InputAction.QUIT,
    pygame.K_n: InputAction.NEW_GAME,
    pygame.K_u: InputAction.UNDO,
    pygame.K_z: InputAction.UNDO,
    pygame.K_s: InputAction.SUGGEST,
    pygame.K_m: InputAction.TOGGLE_MODE,
    pygame.K_d: InputAction.TOGGLE_DEBUG,
    pygame.K_h: InputAction.TOGGLE_HELP,
    pygame.K_QUESTION: InputAction.TOGGLE_HELP,
    pygame.K_SLASH: InputAction.TOGGLE_HELP,  # unshifted '?'
}

BUTTON_ACTIONS = {
    'new_game': InputAction.NEW_GAME,
    'undo': InputAction.UNDO,
    'suggest': InputAction.SUGGEST,
    'mode': InputAction.TOGGLE_MODE,
}


class InputHandler:
    """Maps pygame events to InputEvents, dropping the ones with no action."""

    def __init__(self, renderer):
        self.renderer = renderer

    def process_events(self) -> list[InputEvent]:
        events = (self.translate(event) for event in pygame.event.get())
        return [e for e in events if e is not None and e.action != InputAction.NONE]

    def translate(self, event) -> Optional[InputEvent]:
        if event.type == pygame.QUIT:
            return InputEvent(InputAction.QUIT)
        if event.type == pygame.MOUSEMOTION:
            self.renderer.update_hover(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self.click(event.pos)
        elif event.type == pygame.KEYDOWN:
            return self.key(event.key)
        return None

    def click(self, pos: tuple) -> InputEvent:
        """Panel buttons take priority over the board underneath."""
        button = self.renderer.get_button_at(pos)
        if button:
            return InputEvent(BUTTON_ACTIONS.get(button, InputAction.NONE), mouse_pos=pos)

        column = self.renderer.screen_to_column(*pos)
        if column is None:
            return InputEvent(InputAction.NONE, mouse_pos=pos)
        return InputEvent(InputAction.DROP_PIECE, column=column, mouse_pos=pos)

    def key(self, key: int) -> InputEvent:
        if key in COLUMN_KEYS:
            return InputEvent(InputAction.DROP_PIECE, column=COLUMN_KEYS[key])
        return InputEvent(KEY_ACTIONS.get(key, InputAction.NONE))
