# src/termsnake/__init__.py
"""Terminal Snake: game engine, presentation and terminal loop."""
import logging

from termsnake.game import GameState, Position, handle_input, new_game_state, reset, spawn_food, update
from termsnake.render import project_grid, render, render_ascii, status_lines

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "GameState", "Position", "new_game_state", "reset", "spawn_food", "handle_input", "update",
    "project_grid", "render", "render_ascii", "status_lines",
]
