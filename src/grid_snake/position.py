"""Grid coordinates, directions, and arena bounds."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

import numpy as np

MIN_GRID_SIZE = 10
MAX_GRID_SIZE = 50


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``y`` grows downward, so UP moves toward row 0.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Look up a direction by case-insensitive name."""
        try:
            return cls[name.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown direction: {name!r}.") from None


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """Immutable integer (x, y) coordinate."""

    x: int
    y: int

    def add(self, other: Position) -> Position:
        return Position(self.x + other.x, self.y + other.y)

    def subtract(self, other: Position) -> Position:
        return Position(self.x - other.x, self.y - other.y)

    def equals(self, other: Position) -> bool:
        return self == other

    def distance(self, other: Position) -> float:
        """Euclidean distance to *other*."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def is_valid(self, grid: GridSize) -> bool:
        """Check whether this position lies inside *grid*."""
        return grid.contains(self)

    @classmethod
    def random(cls, grid: GridSize, rng: np.random.Generator) -> Position:
        """Return a uniformly random in-bounds position."""
        return cls(
            int(rng.integers(grid.width)),
            int(rng.integers(grid.height)),
        )

    @classmethod
    def from_direction(cls, direction: Direction) -> Position:
        """Return the unit offset for *direction*."""
        dx, dy = direction.value
        return cls(dx, dy)

    def to_list(self) -> list[int]:
        return [self.x, self.y]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


@dataclass(frozen=True)
class GridSize:
    """Arena dimensions. Coordinates range over [0, width) x [0, height)."""

    width: int
    height: int

    def contains(self, position: Position) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def center_position(self) -> Position:
        return Position(self.width // 2, self.height // 2)

    def random_position(self, rng: np.random.Generator) -> Position:
        return Position.random(self, rng)

    def is_valid(self) -> bool:
        """Check both axes lie within the supported size range."""
        return (
            MIN_GRID_SIZE <= self.width <= MAX_GRID_SIZE
            and MIN_GRID_SIZE <= self.height <= MAX_GRID_SIZE
        )

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"
