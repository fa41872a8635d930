# main.py
import logging
import random
import sys
import time
from typing import Callable, Optional, Protocol

from .config import CFG, GRID_W, GRID_H, Key
from .game import GameState, handle_input, new_game_state, reset, update
from .terminal import CursesTerminal

logger = logging.getLogger(__name__)


class Terminal(Protocol):
    def poll(self, timeout_ms: int) -> bool: ...
    def read(self) -> Optional[Key]: ...


def run(
    terminal: Terminal,
    draw: Callable[[GameState], None],
    width: int = GRID_W,
    height: int = GRID_H,
    clock: Callable[[], float] = time.monotonic,
    rng: Optional[random.Random] = None,
) -> int:
    """Fixed-rate game loop. Returns the exit code once 'q' is pressed."""
    state = new_game_state(width, height, rng=rng)
    last_update = clock()
    logger.info("game started on a %dx%d board", width, height)

    while True:
        # 1) input
        if terminal.poll(CFG.poll_ms):
            key = terminal.read()
            if key is Key.QUIT:
                logger.info("quit with score %d", state.score)
                return 0
            if key is Key.RESTART:
                if state.game_over:
                    state = reset(state)
                    last_update = clock()
                    logger.info("restarted")
            elif not state.game_over:
                handle_input(state, key)

        # 2) update
        now = clock()
        if (now - last_update) * 1000 >= state.speed_ms:
            update(state)
            last_update = now

        # 3) render, every iteration
        draw(state)


def main() -> int:
    with CursesTerminal(GRID_W, GRID_H) as term:
        return run(term, term.present)


if __name__ == "__main__":
    sys.exit(main())
