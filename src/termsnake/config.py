from dataclasses import dataclass
from enum import Enum
from typing import Optional

# ----- Grid -----
GRID_W, GRID_H = 30, 20
CELL_SIZE = 20   # canvas pixels per cell

# ----- Glyphs -----
CELL = "●"
BORDER_H, BORDER_V = "─", "│"
CORNERS = ("┌", "┐", "└", "┘")

# ----- Colors (RGB, used directly by the canvas) -----
class Color(Enum):
    CYAN       = (0, 200, 200)
    GREEN      = (0, 255, 0)
    DARK_GREEN = (0, 140, 0)
    RED        = (220, 0, 0)
    WHITE      = (220, 220, 230)

BG = (20, 20, 24)

# ----- Directions (dx, dy) -----
class Direction(Enum):
    UP    = (0, -1)
    DOWN  = (0, 1)
    LEFT  = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))

# ----- Logical keys the loop understands -----
class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    QUIT = "q"
    RESTART = "r"

# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    seed: Optional[int] = None
    start_ms: int = 150
    min_ms: int = 80
    speedup_ms: int = 2
    food_reward: int = 10
    poll_ms: int = 10
    food_attempts: int = 64   # random tries before scanning for free cells

CFG = Config()
