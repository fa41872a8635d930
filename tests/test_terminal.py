import curses

import pytest

from conftest import make_state
from termsnake.config import Color, Key
from termsnake.exceptions import DisplayError, InputError
from termsnake.terminal import CursesTerminal, translate_key


class FakeScreen:
    """Stands in for a curses window; records output and replays key codes."""

    def __init__(self, keys=(), fail_on=None, size=(40, 100)):
        self.keys = list(keys)
        self.size = size
        self.keypad_on = None
        self.cleared = 0
        self.fail_on = fail_on
        self.out = []
        self.timeouts = []
        self.pos = (0, 0)
        self.refreshed = 0

    def _maybe_fail(self, name):
        if self.fail_on == name:
            raise curses.error(f"{name}() returned ERR")

    def move(self, row, col):
        self._maybe_fail("move")
        self.pos = (row, col)

    def addstr(self, text, attr=0):
        self._maybe_fail("addstr")
        self.out.append((self.pos, text, attr))

    def getyx(self):
        return self.pos

    def getmaxyx(self):
        return self.size

    def keypad(self, flag):
        self.keypad_on = flag

    def clear(self):
        self._maybe_fail("clear")
        self.cleared += 1

    def refresh(self):
        self._maybe_fail("refresh")
        self.refreshed += 1

    def timeout(self, ms):
        self.timeouts.append(ms)

    def getch(self):
        self._maybe_fail("getch")
        return self.keys.pop(0) if self.keys else -1


def attach(screen, width=5, height=5):
    term = CursesTerminal(width, height)
    term.stdscr = screen
    term._attrs = {color: i for i, color in enumerate(Color)}
    return term


def test_translate_key():
    assert translate_key(curses.KEY_UP) is Key.UP
    assert translate_key(curses.KEY_LEFT) is Key.LEFT
    assert translate_key(ord('q')) is Key.QUIT
    assert translate_key(ord('r')) is Key.RESTART
    assert translate_key(ord('x')) is None
    assert translate_key(27) is None


def test_minimum_size_covers_board_and_status():
    term = CursesTerminal(30, 20)
    assert term.min_cols == 63
    assert term.min_rows == 26


def test_poll_times_out_without_input():
    screen = FakeScreen()
    term = attach(screen)
    assert term.poll(10) is False
    assert screen.timeouts == [10]


def test_poll_then_read_returns_buffered_key():
    screen = FakeScreen(keys=[curses.KEY_DOWN])
    term = attach(screen)
    assert term.poll(10)
    assert term.poll(10)  # still buffered, nothing consumed
    assert term.read() is Key.DOWN
    assert term.poll(10) is False


def test_read_blocks_when_nothing_buffered():
    screen = FakeScreen(keys=[ord('q')])
    term = attach(screen)
    assert term.read() is Key.QUIT
    assert screen.timeouts == [-1]


def test_input_failure_is_fatal():
    term = attach(FakeScreen(fail_on="getch"))
    with pytest.raises(InputError):
        term.poll(10)


def test_write_uses_color_attribute():
    screen = FakeScreen()
    term = attach(screen)
    term.move_to(3, 0)
    term.write("Score: 0", Color.RED)
    assert screen.out == [((3, 0), "Score: 0", list(Color).index(Color.RED))]


def test_write_failure_is_fatal():
    term = attach(FakeScreen(fail_on="addstr"))
    term.move_to(2, 0)
    with pytest.raises(DisplayError, match="row 2, col 0"):
        term.write("x", Color.WHITE)


def test_move_failure_is_fatal():
    term = attach(FakeScreen(fail_on="move"))
    with pytest.raises(DisplayError):
        term.move_to(99, 0)


def test_present_draws_a_full_frame():
    screen = FakeScreen()
    term = attach(screen)
    term.present(make_state([(2, 2), (1, 2), (0, 2)]))
    rows = {pos[0] for pos, _, _ in screen.out}
    assert rows == {0, 1, 2, 3, 4, 5, 6, 7, 9}
    assert screen.refreshed == 1


def test_refresh_failure_is_fatal():
    term = attach(FakeScreen(fail_on="refresh"))
    with pytest.raises(DisplayError):
        term.present(make_state([(2, 2), (1, 2), (0, 2)]))


@pytest.fixture
def fake_curses(monkeypatch):
    """Replace the module-level curses calls made during setup and teardown."""
    calls = []
    screen = FakeScreen()

    def record(name, result=None):
        def call(*args):
            calls.append((name,) + args)
            return result
        return call

    monkeypatch.setattr(curses, "initscr", lambda: screen)
    for name in ("noecho", "cbreak", "nocbreak", "echo", "endwin", "curs_set",
                 "start_color", "use_default_colors", "init_pair"):
        monkeypatch.setattr(curses, name, record(name))
    monkeypatch.setattr(curses, "has_colors", lambda: True)
    monkeypatch.setattr(curses, "color_pair", lambda i: i << 8)
    return calls, screen


def names(calls):
    return [c[0] for c in calls]


def test_enter_sets_up_raw_mode_and_exit_restores_it(fake_curses):
    calls, screen = fake_curses
    with CursesTerminal(5, 5) as term:
        assert term.stdscr is screen
        assert screen.keypad_on is True
        assert screen.cleared == 1
        assert ("curs_set", 0) in calls
        assert term._attrs[Color.CYAN] == 1 << 8
        assert term._attrs[Color.GREEN] == (2 << 8) | curses.A_BOLD
        assert "endwin" not in names(calls)

    assert term.stdscr is None
    assert screen.keypad_on is False
    assert names(calls)[-4:] == ["curs_set", "nocbreak", "echo", "endwin"]
    assert calls[-4] == ("curs_set", 1)


def test_exit_restores_terminal_when_the_game_raises(fake_curses):
    calls, _ = fake_curses
    with pytest.raises(DisplayError):
        with CursesTerminal(5, 5):
            raise DisplayError("boom")
    assert names(calls)[-1] == "endwin"


def test_monochrome_terminal_uses_plain_attributes(fake_curses, monkeypatch):
    calls, _ = fake_curses
    monkeypatch.setattr(curses, "has_colors", lambda: False)
    with CursesTerminal(5, 5) as term:
        assert term._attrs[Color.RED] == curses.A_BOLD
        assert term._attrs[Color.CYAN] == 0
    assert "start_color" not in names(calls)


def test_too_small_terminal_is_refused_after_restoring(fake_curses):
    calls, screen = fake_curses
    screen.size = (10, 10)
    with pytest.raises(DisplayError, match="needs at least 63x26"):
        with CursesTerminal(30, 20):
            pytest.fail("entered a terminal that cannot fit the board")
    assert names(calls)[-3:] == ["nocbreak", "echo", "endwin"]
    assert screen.keypad_on is False


def test_setup_failure_becomes_display_error(fake_curses, monkeypatch):
    calls, _ = fake_curses

    def broken_cbreak():
        raise curses.error("cbreak() returned ERR")

    monkeypatch.setattr(curses, "cbreak", broken_cbreak)
    with pytest.raises(DisplayError, match="Could not set up terminal"):
        with CursesTerminal(5, 5):
            pytest.fail("entered a terminal whose setup failed")
    assert names(calls)[-1] == "endwin"


def test_error_messages():
    assert str(DisplayError()) == "Terminal display failed"
    assert str(DisplayError("move failed", row=1, col=4)) == "move failed (at row 1, col 4)"
    assert str(DisplayError("move failed", row=1)) == "move failed"
    assert str(InputError()) == "Terminal input failed"
