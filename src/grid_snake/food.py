"""Food placement logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from grid_snake.position import GridSize, Position

if TYPE_CHECKING:
    from grid_snake.snake import Snake

logger = logging.getLogger(__name__)

MAX_SPAWN_ATTEMPTS = 1000


class FoodType(enum.Enum):
    """Kinds of collectible. Only NORMAL is spawned today."""

    NORMAL = "normal"
    SPECIAL = "special"


@dataclass(frozen=True)
class FoodView:
    """Immutable copy of a food item."""

    position: Position
    value: int
    type: FoodType

    def to_dict(self) -> dict:
        return {
            "position": self.position.to_list(),
            "value": self.value,
            "type": self.type.value,
        }


class Food:
    """A single collectible cell worth ``value`` points.

    Placement uses a NumPy RNG so seeded games are reproducible.
    """

    def __init__(
        self,
        position: Position,
        value: int = 10,
        food_type: FoodType = FoodType.NORMAL,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.position = position
        self.value = value
        self.type = food_type
        self.rng = rng if rng is not None else np.random.default_rng()

    def generate_new_position(self, snake: Snake, grid: GridSize) -> Position:
        """Move to a random cell the snake does not occupy.

        Gives up after ``MAX_SPAWN_ATTEMPTS`` samples and falls back to the
        grid centre, which is not re-checked against the snake.
        """
        for _ in range(MAX_SPAWN_ATTEMPTS):
            candidate = grid.random_position(self.rng)
            if not snake.contains(candidate):
                self.position = candidate
                return candidate

        self.position = grid.center_position()
        logger.warning(
            "No free cell found after %d attempts; placing food at centre %s.",
            MAX_SPAWN_ATTEMPTS, self.position,
        )
        return self.position

    def is_eaten_by(self, snake: Snake) -> bool:
        return snake.is_at(self.position)

    def is_at(self, position: Position) -> bool:
        return self.position == position

    def view(self) -> FoodView:
        return FoodView(self.position, self.value, self.type)

    def to_dict(self) -> dict:
        """Serialize food state to a dictionary."""
        return self.view().to_dict()

    def __repr__(self) -> str:
        return f"Food(position={self.position}, value={self.value}, type={self.type.name})"
