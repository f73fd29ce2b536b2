"""Snake representation and movement logic."""

from __future__ import annotations

import enum
from collections import deque
from dataclasses import dataclass

from grid_snake.position import Direction, GridSize, Position


class CollisionType(enum.Enum):
    """Outcome of a post-move collision check."""

    NONE = "none"
    SELF = "self"
    WALL = "wall"
    FOOD = "food"


@dataclass(frozen=True)
class SnakeView:
    """Immutable copy of a snake's cells and heading at one instant."""

    head: Position
    body: tuple[Position, ...]
    direction: Direction

    @property
    def length(self) -> int:
        return len(self.body) + 1

    def to_dict(self) -> dict:
        return {
            "head": self.head.to_list(),
            "body": [seg.to_list() for seg in self.body],
            "direction": self.direction.name,
            "length": self.length,
        }


class Snake:
    """A snake made of a head plus a deque of body segments.

    ``body[0]`` is the neck (the cell the head just left); ``body[-1]`` is the
    tail. The committed ``direction`` drives the next move; input only ever
    sets ``next_direction``, which :meth:`move` commits.
    """

    def __init__(self, start_position: Position) -> None:
        self.head = start_position
        self.body: deque[Position] = deque()
        self.direction = Direction.RIGHT
        self.next_direction = Direction.RIGHT
        self.growing = False

    @property
    def length(self) -> int:
        return len(self.body) + 1

    def move(self) -> None:
        """Advance one cell in the (newly committed) direction."""
        self.direction = self.next_direction
        self.body.appendleft(self.head)
        self.head = self.head.add(Position.from_direction(self.direction))
        if self.growing:
            self.growing = False
        else:
            self.body.pop()

    def change_direction(self, new_direction: Direction) -> bool:
        """Queue a direction change, rejecting 180° reversals.

        The reversal check is made against the committed direction, not the
        pending one. Returns ``True`` if the change was queued.
        """
        if new_direction.opposite == self.direction:
            return False
        self.next_direction = new_direction
        return True

    def grow(self) -> None:
        """Keep the tail on the next move."""
        self.growing = True

    def check_collision(self, grid: GridSize) -> CollisionType:
        if not self.head.is_valid(grid):
            return CollisionType.WALL
        if self.head in self.body:
            return CollisionType.SELF
        return CollisionType.NONE

    def next_position(self) -> Position:
        """Compute where the head would land using the committed direction."""
        return self.head.add(Position.from_direction(self.direction))

    def is_at(self, position: Position) -> bool:
        """Check whether the head is at *position*."""
        return self.head == position

    def contains(self, position: Position) -> bool:
        """Check whether the head or any body segment occupies *position*."""
        return self.head == position or position in self.body

    def all_positions(self) -> list[Position]:
        return [self.head, *self.body]

    def reset(self, start_position: Position) -> None:
        self.head = start_position
        self.body.clear()
        self.direction = Direction.RIGHT
        self.next_direction = Direction.RIGHT
        self.growing = False

    def view(self) -> SnakeView:
        return SnakeView(self.head, tuple(self.body), self.direction)

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return self.view().to_dict()

    def __repr__(self) -> str:
        body = ", ".join(str(seg) for seg in self.body)
        return f"Snake(head={self.head}, body=[{body}], direction={self.direction.name})"
