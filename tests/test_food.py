"""Tests for the Food module."""

from unittest.mock import patch

import numpy as np

from grid_snake.food import MAX_SPAWN_ATTEMPTS, Food, FoodType
from grid_snake.position import GridSize, Position
from grid_snake.snake import Snake


def _long_snake(length: int) -> Snake:
    snake = Snake(Position(0, 0))
    for _ in range(length - 1):
        snake.grow()
        snake.move()
    return snake


class TestFoodInit:
    def test_defaults(self):
        food = Food(Position(1, 2))
        assert food.position == Position(1, 2)
        assert food.value == 10
        assert food.type == FoodType.NORMAL


class TestFoodPlacement:
    def test_never_inside_snake(self):
        grid = GridSize(10, 10)
        snake = _long_snake(9)  # occupies row 0, x 0..8
        food = Food(Position(0, 0), rng=np.random.default_rng(3))
        for _ in range(100):
            pos = food.generate_new_position(snake, grid)
            assert grid.contains(pos)
            assert not snake.contains(pos)

    def test_deterministic_with_seed(self):
        grid = GridSize(20, 20)
        snake = Snake(Position(10, 10))
        a = Food(Position(0, 0), rng=np.random.default_rng(42))
        b = Food(Position(0, 0), rng=np.random.default_rng(42))
        assert a.generate_new_position(snake, grid) == b.generate_new_position(snake, grid)

    def test_finds_single_free_cell(self):
        grid = GridSize(10, 10)
        snake = Snake(Position(0, 0))
        # Fill every cell but (9, 9).
        cells = [Position(x, y) for y in range(10) for x in range(10)]
        cells.remove(Position(9, 9))
        snake.head = cells[0]
        snake.body.extend(cells[1:])
        food = Food(Position(0, 0), rng=np.random.default_rng(0))
        pos = food.generate_new_position(snake, grid)
        # 1000 draws over 100 cells practically always hit the free one.
        assert pos == Position(9, 9)

    def test_fallback_to_center_on_exhaustion(self):
        grid = GridSize(20, 20)
        snake = Snake(Position(3, 3))
        food = Food(Position(0, 0))
        with patch.object(Position, "random", return_value=Position(3, 3)) as rnd:
            pos = food.generate_new_position(snake, grid)
        assert rnd.call_count == MAX_SPAWN_ATTEMPTS
        assert pos == Position(10, 10)
        assert food.position == Position(10, 10)

    def test_fallback_not_revalidated(self):
        grid = GridSize(10, 10)
        snake = Snake(Position(5, 5))  # sits on the centre
        food = Food(Position(0, 0))
        with patch.object(Position, "random", return_value=Position(5, 5)):
            pos = food.generate_new_position(snake, grid)
        assert pos == grid.center_position()
        assert snake.contains(pos)


class TestFoodEaten:
    def test_eaten_when_head_matches(self):
        snake = Snake(Position(4, 4))
        assert Food(Position(4, 4)).is_eaten_by(snake)

    def test_not_eaten_by_body(self):
        snake = Snake(Position(4, 4))
        snake.grow()
        snake.move()
        food = Food(Position(4, 4))
        assert food.is_at(Position(4, 4))
        assert not food.is_eaten_by(snake)


class TestFoodSerialization:
    def test_to_dict(self):
        food = Food(Position(3, 7), value=25)
        assert food.to_dict() == {"position": [3, 7], "value": 25, "type": "normal"}

    def test_view_is_detached(self):
        food = Food(Position(3, 7), value=25)
        view = food.view()
        food.position = Position(1, 1)
        assert view.position == Position(3, 7)
        assert view.to_dict() == {"position": [3, 7], "value": 25, "type": "normal"}
