# geometry.py
from enum import Enum
from typing import NamedTuple, Tuple


class Direction(Enum):
    """Grid headings; the value is the unit (dx, dy) offset, y grows downward."""
    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def offset(self) -> Tuple[int, int]:
        return self.value

    @property
    def opposite(self) -> "Direction":
        dx, dy = self.value
        return Direction((-dx, -dy))


class Position(NamedTuple):
    x: int
    y: int

    def translate(self, direction: Direction, steps: int = 1) -> "Position":
        dx, dy = direction.offset
        return Position(self.x + dx * steps, self.y + dy * steps)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b


def is_out_of_bounds(position: Tuple[int, int], width: int, height: int) -> bool:
    """The playable interior is [1, width] x [1, height]; row/column 0 and N+1 are walls."""
    x, y = position
    return x <= 0 or x >= width + 1 or y <= 0 or y >= height + 1
