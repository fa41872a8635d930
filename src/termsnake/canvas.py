# canvas.py
"""Graphical window for the same game, driven by the same loop as the terminal."""
import sys
from typing import Optional, Tuple

import pygame  # type: ignore

from .config import BG, CELL_SIZE, GRID_W, GRID_H, Color, Key
from .exceptions import DisplayError, InputError
from .game import GameState
from .main import run
from .render import CELL_COLORS, EMPTY, project_grid, status_lines

KEYMAP = {
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_q: Key.QUIT,
    pygame.K_r: Key.RESTART,
}

# ---------- Drawing ----------
def draw_cell(screen: pygame.Surface, gx: int, gy: int, color: Tuple[int, int, int]) -> None:
    rect = pygame.Rect(gx * CELL_SIZE, gy * CELL_SIZE, CELL_SIZE, CELL_SIZE)
    pygame.draw.rect(screen, color, rect)

def draw_board(screen: pygame.Surface, state: GameState) -> None:
    screen.fill(BG)
    grid = project_grid(state)
    for gy, gx in zip(*(grid != EMPTY).nonzero()):
        draw_cell(screen, int(gx), int(gy), CELL_COLORS[int(grid[gy, gx])].value)

def draw_status(screen: pygame.Surface, font: pygame.font.Font, state: GameState) -> None:
    score, status = status_lines(state)
    screen.blit(font.render(score, True, Color.WHITE.value), (8, 6))
    if not state.game_over:
        return

    # Dim with translucent overlay
    w, h = screen.get_size()
    overlay = pygame.Surface((w, h), pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, (0, 0))

    title, _, hint = status.partition("! ")
    for text, dy in ((title, -16), (hint, 16), (score, 44)):
        surf = font.render(text, True, Color.WHITE.value)
        screen.blit(surf, surf.get_rect(center=(w // 2, h // 2 + dy)))


class PygameCanvas:
    """pygame window with the poll/read input contract of the curses terminal."""

    def __init__(self, width: int = GRID_W, height: int = GRID_H):
        try:
            pygame.init()
            self.screen = pygame.display.set_mode((width * CELL_SIZE, height * CELL_SIZE))
            pygame.display.set_caption("Snake")
            self.font = pygame.font.SysFont(None, 24)
        except pygame.error as e:
            raise DisplayError(f"Could not open window: {e}") from e
        self._pending: Optional[Key] = None
        self._has_event = False

    def present(self, state: GameState) -> None:
        try:
            draw_board(self.screen, state)
            draw_status(self.screen, self.font, state)
            pygame.display.flip()
        except pygame.error as e:
            raise DisplayError(f"Could not draw frame: {e}") from e

    def poll(self, timeout_ms: Optional[int]) -> bool:
        if self._has_event:
            return True
        try:
            event = pygame.event.wait() if timeout_ms is None else pygame.event.wait(timeout_ms)
        except pygame.error as e:
            raise InputError(f"poll failed: {e}") from e
        if event.type == pygame.QUIT:
            self._pending = Key.QUIT
        elif event.type == pygame.KEYDOWN:
            self._pending = KEYMAP.get(event.key)
        else:
            return False
        self._has_event = True
        return True

    def read(self) -> Optional[Key]:
        while not self._has_event:
            self.poll(None)
        self._has_event = False
        key, self._pending = self._pending, None
        return key

    def close(self) -> None:
        pygame.quit()


def main() -> int:
    canvas = PygameCanvas()
    try:
        return run(canvas, canvas.present)
    finally:
        canvas.close()


if __name__ == "__main__":
    sys.exit(main())
