# render.py
"""
Read-only projection of a GameState for display.

Nothing here mutates the state, so any of these can be called at any rate,
independent of ticks. ``render`` only needs two primitives from its display:
``move_to(row, col)`` and ``write(text, color)``; errors they raise propagate.
"""
from typing import List, Protocol
import numpy as np  # type: ignore

from .config import BORDER_H, BORDER_V, CELL, CORNERS, Color
from .game import GameState

# ----- Cell codes -----
EMPTY, BODY, HEAD, FOOD = 0, 1, 2, 3

CELL_COLORS = {
    HEAD: Color.GREEN,
    BODY: Color.DARK_GREEN,
    FOOD: Color.RED,
}

ASCII = {EMPTY: ".", BODY: "o", HEAD: "H", FOOD: "*"}

HINT = "Use arrow keys to move, 'q' to quit"
GAME_OVER = "GAME OVER! Press 'r' to restart or 'q' to quit"
YOU_WIN = "YOU WIN! Press 'r' to restart or 'q' to quit"


class Display(Protocol):
    def move_to(self, row: int, col: int) -> None: ...
    def write(self, text: str, color: Color) -> None: ...


def project_grid(state: GameState) -> np.ndarray:
    """(height, width) array of cell codes; the head wins over food and body."""
    grid = np.full((state.height, state.width), EMPTY, dtype=np.int8)
    if state.food is not None:
        grid[state.food.y, state.food.x] = FOOD
    for x, y in state.snake:
        grid[y, x] = BODY
    hx, hy = state.head
    grid[hy, hx] = HEAD
    return grid


def status_lines(state: GameState) -> List[str]:
    """Score line and the context-sensitive hint below it."""
    if state.won:
        status = YOU_WIN
    elif state.game_over:
        status = GAME_OVER
    else:
        status = HINT
    return [f"Score: {state.score}", status]


def render(display: Display, state: GameState) -> None:
    """Draw the bordered board, then score and status below it."""
    grid = project_grid(state)
    inner = state.width * 2
    tl, tr, bl, br = CORNERS

    display.move_to(0, 0)
    display.write(tl + BORDER_H * inner + tr, Color.CYAN)

    for y in range(state.height):
        display.move_to(y + 1, 0)
        display.write(BORDER_V, Color.CYAN)
        for x in range(state.width):
            code = int(grid[y, x])
            if code == EMPTY:
                display.write("  ", Color.WHITE)
            else:
                display.write(CELL + " ", CELL_COLORS[code])
        display.write(BORDER_V, Color.CYAN)

    display.move_to(state.height + 1, 0)
    display.write(bl + BORDER_H * inner + br, Color.CYAN)

    # Pad so a shorter line fully overwrites a longer one from the last frame
    pad = inner + 2
    score, status = status_lines(state)
    display.move_to(state.height + 2, 0)
    display.write(score.ljust(pad), Color.WHITE)
    display.move_to(state.height + 4, 0)
    display.write(status.ljust(pad), Color.RED if state.game_over else Color.WHITE)


def render_ascii(state: GameState) -> str:
    """Plain text board, one line per row; handy for tests and debug logs."""
    grid = project_grid(state)
    return "".join("".join(ASCII[int(c)] for c in row) + "\n" for row in grid)
