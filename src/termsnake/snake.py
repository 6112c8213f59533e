# snake.py
from collections import deque
from typing import Deque, Iterable, Iterator, Optional

from .geometry import Direction, Position, is_opposite


def can_queue(candidate: Direction, current: Direction, queued: Direction) -> bool:
    """
    Anti-reversal rule for buffered input.

    A candidate is rejected if it repeats the current or queued heading, or if it
    reverses either of them (which would drive the head straight into the neck).
    """
    if candidate is current or candidate is queued:
        return False
    if is_opposite(candidate, current) or is_opposite(candidate, queued):
        return False
    return True


class Snake:
    """
    The snake body on the grid.

    Attributes:
        segments: deque of Position, head at index 0, tail at the end
        current_direction: heading used by the last move
        next_direction: buffered heading, committed on the next move
    """

    def __init__(
        self,
        segments: Iterable[Position] = (),
        direction: Direction = Direction.RIGHT,
    ):
        self.segments: Deque[Position] = deque(Position(*p) for p in segments)
        self.current_direction = direction
        self.next_direction = direction

    def __len__(self) -> int:
        return len(self.segments)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.segments)

    def __contains__(self, position) -> bool:
        return self.contains(position)

    def __repr__(self):
        return f"<Snake len={len(self)} head={self.head if self.segments else None} dir={self.current_direction.name}>"

    @property
    def head(self) -> Position:
        return self.segments[0]

    @property
    def tail(self) -> Position:
        return self.segments[-1]

    def reset(self, start: Position, direction: Direction, length: int) -> None:
        """Lay out `length` segments from `start` backward against `direction`."""
        start = Position(*start)
        back = direction.opposite
        self.segments = deque(start.translate(back, i) for i in range(length))
        self.current_direction = direction
        self.next_direction = direction

    def queue_direction(self, direction: Direction) -> None:
        if can_queue(direction, self.current_direction, self.next_direction):
            self.next_direction = direction

    def move(self, grow: bool) -> Position:
        self.current_direction = self.next_direction
        new_head = self.head.translate(self.current_direction)
        self.segments.appendleft(new_head)
        if not grow:
            self.segments.pop()
        return new_head

    def has_self_collision(self) -> bool:
        # A length-4 snake can't fold onto itself, so shorter bodies never collide.
        if len(self.segments) < 5:
            return False
        head = self.segments[0]
        return any(seg == head for seg in list(self.segments)[1:])

    def contains(self, position) -> bool:
        return Position(*position) in self.segments

    def peek_next_head(self) -> Position:
        return self.head.translate(self.next_direction)

    def find_segment_index(self, position) -> Optional[int]:
        position = Position(*position)
        for i, seg in enumerate(self.segments):
            if seg == position:
                return i
        return None
