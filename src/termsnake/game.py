# game.py
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, NamedTuple, Optional, Union
import logging
import random

from .config import CFG, Config, Direction, Key

logger = logging.getLogger(__name__)

ARROWS = {
    Key.UP: Direction.UP,
    Key.DOWN: Direction.DOWN,
    Key.LEFT: Direction.LEFT,
    Key.RIGHT: Direction.RIGHT,
}

# ---------- Helpers ----------
class Position(NamedTuple):
    x: int
    y: int

    def moved(self, direction: Direction) -> "Position":
        dx, dy = direction.value
        return Position(self.x + dx, self.y + dy)

# ---------- State ----------
@dataclass
class GameState:
    width: int
    height: int
    snake: Deque[Position]           # head at index 0
    direction: Direction             # committed on the last tick
    next_direction: Direction        # pending, applied on the next tick
    food: Optional[Position]         # None only once the board is full
    score: int = 0
    game_over: bool = False
    won: bool = False
    speed_ms: int = CFG.start_ms     # current tick interval
    rng: random.Random = field(default_factory=random.Random, compare=False, repr=False)
    cfg: Config = field(default_factory=lambda: CFG, repr=False)

    @property
    def head(self) -> Position:
        return self.snake[0]

    def in_bounds(self, pos: Position) -> bool:
        return 0 <= pos.x < self.width and 0 <= pos.y < self.height

def new_game_state(
    width: int,
    height: int,
    rng: Optional[random.Random] = None,
    cfg: Config = CFG,
) -> GameState:
    """Centered 3-segment snake facing right, with food already placed."""
    if width < 4 or height < 1:
        raise ValueError(f"board {width}x{height} cannot hold the starting snake")
    if rng is None:
        rng = random.Random(cfg.seed)

    cx, cy = width // 2, height // 2
    snake = deque(Position(cx - i, cy) for i in range(3))
    state = GameState(
        width=width,
        height=height,
        snake=snake,
        direction=Direction.RIGHT,
        next_direction=Direction.RIGHT,
        food=None,
        speed_ms=cfg.start_ms,
        rng=rng,
        cfg=cfg,
    )
    spawn_food(state)
    return state

def reset(state: GameState) -> GameState:
    """Fresh game on the same board; the only way out of game over."""
    return new_game_state(state.width, state.height, rng=state.rng, cfg=state.cfg)

def spawn_food(state: GameState) -> bool:
    """
    Place food on a random free cell.

    Rejection sampling first; once that has failed cfg.food_attempts times the
    free cells are listed and one is picked directly. With no free cell left
    the snake fills the board and the game ends as a win. Returns False then.
    """
    occupied = set(state.snake)
    for _ in range(state.cfg.food_attempts):
        pos = Position(state.rng.randrange(state.width), state.rng.randrange(state.height))
        if pos not in occupied:
            state.food = pos
            return True

    free = [
        Position(x, y)
        for y in range(state.height)
        for x in range(state.width)
        if Position(x, y) not in occupied
    ]
    if not free:
        state.food = None
        state.won = True
        state.game_over = True
        logger.debug("board full at length %d, score %d", len(state.snake), state.score)
        return False
    state.food = state.rng.choice(free)
    return True

# ---------- Input / Update ----------
def handle_input(state: GameState, key: Union[Key, Direction, None]) -> None:
    """Queue a direction change; 180° turns against the committed direction are dropped."""
    cand = key if isinstance(key, Direction) else ARROWS.get(key)
    if cand is None:
        return
    if cand is state.direction.opposite:
        return
    state.next_direction = cand

def update(state: GameState) -> bool:
    """
    Advance the game by one tick.
    Returns True if still running, False once the game is over.
    """
    if state.game_over:
        return False

    # Commit direction once per tick
    state.direction = state.next_direction
    new_head = state.head.moved(state.direction)

    # The tail still counts as occupied here even though it would move away
    if not state.in_bounds(new_head) or new_head in state.snake:
        state.game_over = True
        logger.debug("game over at %s, score %d", tuple(new_head), state.score)
        return False

    state.snake.appendleft(new_head)
    if new_head == state.food:
        state.score += state.cfg.food_reward
        state.speed_ms = max(state.cfg.min_ms, state.speed_ms - state.cfg.speedup_ms)
        logger.debug("food eaten: score %d, tick %dms", state.score, state.speed_ms)
        return spawn_food(state)

    state.snake.pop()
    return True
