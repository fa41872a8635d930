import random
from collections import deque

import pytest

from termsnake.config import Direction
from termsnake.game import GameState, Position


def make_state(cells, direction=Direction.RIGHT, next_direction=None, food=(4, 4),
               width=5, height=5, seed=0):
    """Build a GameState around an explicit snake, head first."""
    return GameState(
        width=width,
        height=height,
        snake=deque(Position(*c) for c in cells),
        direction=direction,
        next_direction=next_direction or direction,
        food=Position(*food) if food is not None else None,
        rng=random.Random(seed),
    )


@pytest.fixture
def rng():
    return random.Random(1234)
