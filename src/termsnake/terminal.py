# termsnake/terminal.py

"""
curses-backed terminal collaborator.

Provides raw-mode setup and teardown, cursor control, coloured writes and
timeout-bounded key polling. Every curses failure is re-raised as a
DisplayError or InputError and never retried.
"""

import curses
import logging
from typing import Optional

from .config import Color, Key
from .exceptions import DisplayError, InputError
from .game import GameState
from .render import render

logger = logging.getLogger(__name__)

KEYMAP = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    ord('q'): Key.QUIT,
    ord('r'): Key.RESTART,
}

# Color -> (curses colour, extra attribute)
PALETTE = {
    Color.CYAN: (curses.COLOR_CYAN, 0),
    Color.GREEN: (curses.COLOR_GREEN, curses.A_BOLD),
    Color.DARK_GREEN: (curses.COLOR_GREEN, curses.A_DIM),
    Color.RED: (curses.COLOR_RED, curses.A_BOLD),
    Color.WHITE: (curses.COLOR_WHITE, 0),
}


def translate_key(code: int) -> Optional[Key]:
    """Map a curses key code to a logical Key; unknown keys become None."""
    return KEYMAP.get(code)


class CursesTerminal:
    """Context manager owning the curses screen for one game session."""

    def __init__(self, width: int, height: int):
        # Board plus border, a blank row, score and status rows, and a spare
        # last row so writes never touch the bottom-right corner.
        self.min_cols = width * 2 + 3
        self.min_rows = height + 6
        self.stdscr = None
        self._attrs = {}
        self._pending: Optional[int] = None

    def __enter__(self) -> "CursesTerminal":
        try:
            self.stdscr = curses.initscr()
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
            self._init_colors()
            self.hide_cursor()
            self.clear()
        except curses.error as e:
            self._restore()
            raise DisplayError(f"Could not set up terminal: {e}") from e

        rows, cols = self.stdscr.getmaxyx()
        if rows < self.min_rows or cols < self.min_cols:
            self._restore()
            raise DisplayError(
                f"Terminal is {cols}x{rows}, needs at least {self.min_cols}x{self.min_rows}"
            )
        logger.debug("curses screen %dx%d ready", cols, rows)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._restore()

    def _init_colors(self) -> None:
        if not curses.has_colors():
            self._attrs = {color: attr for color, (_, attr) in PALETTE.items()}
            return
        curses.start_color()
        curses.use_default_colors()
        for i, (color, (fg, attr)) in enumerate(PALETTE.items(), start=1):
            curses.init_pair(i, fg, -1)
            self._attrs[color] = curses.color_pair(i) | attr

    def _restore(self) -> None:
        if self.stdscr is None:
            return
        stdscr, self.stdscr = self.stdscr, None
        try:
            curses.curs_set(1)
        except curses.error:
            pass  # not every terminal supports cursor visibility
        stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()

    # ----- Display primitives -----
    def hide_cursor(self) -> None:
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # not every terminal supports cursor visibility

    def clear(self) -> None:
        try:
            self.stdscr.clear()
        except curses.error as e:
            raise DisplayError(f"clear failed: {e}") from e

    def move_to(self, row: int, col: int) -> None:
        try:
            self.stdscr.move(row, col)
        except curses.error as e:
            raise DisplayError("move failed", row=row, col=col) from e

    def write(self, text: str, color: Color) -> None:
        try:
            self.stdscr.addstr(text, self._attrs.get(color, 0))
        except curses.error as e:
            row, col = self.stdscr.getyx()
            raise DisplayError(f"write of {text!r} failed", row=row, col=col) from e

    def refresh(self) -> None:
        try:
            self.stdscr.refresh()
        except curses.error as e:
            raise DisplayError(f"refresh failed: {e}") from e

    def present(self, state: GameState) -> None:
        """Draw one frame of state and push it to the screen."""
        render(self, state)
        self.refresh()

    # ----- Input primitives -----
    def poll(self, timeout_ms: int) -> bool:
        """Wait at most timeout_ms for a key; True if one is ready for read()."""
        if self._pending is not None:
            return True
        try:
            self.stdscr.timeout(timeout_ms)
            code = self.stdscr.getch()
        except curses.error as e:
            raise InputError(f"poll failed: {e}") from e
        if code == -1:
            return False
        self._pending = code
        return True

    def read(self) -> Optional[Key]:
        """Return the next key event, blocking if poll() has not buffered one."""
        code, self._pending = self._pending, None
        if code is None:
            try:
                self.stdscr.timeout(-1)
                code = self.stdscr.getch()
            except curses.error as e:
                raise InputError(f"read failed: {e}") from e
        return translate_key(code)
