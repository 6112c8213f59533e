# items.py
from dataclasses import dataclass
from enum import Enum
import logging
import random

import numpy as np  # type: ignore

from .config import Difficulty
from .geometry import Position
from .snake import Snake

logger = logging.getLogger(__name__)


class ItemType(Enum):
    NORMAL = "normal"
    RARE = "rare"
    POISON = "poison"


@dataclass(frozen=True)
class Item:
    position: Position
    type: ItemType
    spawned_ms: float = 0.0


class BoardFullError(Exception):
    """Raised when every interior cell is covered by the snake."""


# ---------- Helpers ----------
def choose_item_type(difficulty: Difficulty, rng: random.Random) -> ItemType:
    """Extreme: Normal 70%, Rare 20%, Poison 10%. Normal difficulty only spawns Normal."""
    if difficulty is not Difficulty.EXTREME:
        return ItemType.NORMAL
    roll = rng.randrange(100)
    if roll < 70:
        return ItemType.NORMAL
    if roll < 90:
        return ItemType.RARE
    return ItemType.POISON


def free_cells(snake: Snake, width: int, height: int) -> np.ndarray:
    """Interior cells not covered by the snake, as an (N, 2) array of (x, y)."""
    occupied = np.zeros((height + 2, width + 2), dtype=bool)
    occupied[0, :] = occupied[-1, :] = True
    occupied[:, 0] = occupied[:, -1] = True
    for x, y in snake:
        if 0 <= x < width + 2 and 0 <= y < height + 2:
            occupied[y, x] = True
    ys, xs = np.nonzero(~occupied)
    return np.column_stack((xs, ys))


def spawn_position(
    snake: Snake,
    rng: random.Random,
    width: int,
    height: int,
    max_attempts: int,
) -> Position:
    """
    Rejection-sample a random interior cell that the snake does not cover.

    After `max_attempts` misses the remaining free cells are enumerated and
    one is picked uniformly, so a crowded board still terminates. Raises
    BoardFullError if there is no free cell at all.
    """
    for _ in range(max_attempts):
        candidate = Position(rng.randint(1, width), rng.randint(1, height))
        if not snake.contains(candidate):
            return candidate

    cells = free_cells(snake, width, height)
    logger.debug("rejection sampling exhausted, %d free cells left", len(cells))
    if len(cells) == 0:
        raise BoardFullError(f"no free cell on a {width}x{height} board")
    x, y = cells[rng.randrange(len(cells))]
    return Position(int(x), int(y))


def spawn_item(
    snake: Snake,
    difficulty: Difficulty,
    rng: random.Random,
    now_ms: float,
    width: int,
    height: int,
    max_attempts: int,
) -> Item:
    position = spawn_position(snake, rng, width, height, max_attempts)
    return Item(position=position, type=choose_item_type(difficulty, rng), spawned_ms=now_ms)
