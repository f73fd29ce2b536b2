"""Tick-based game engine composing snake, food, scoring, and levels."""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.errors import ErrorCode, GameError
from grid_snake.events import (
    Collision,
    EngineError,
    Event,
    EventBus,
    FoodEaten,
    GameOver,
    GamePaused,
    GameReset,
    GameResumed,
    GameStarted,
    LevelUp,
    ScoreUpdated,
    SnakeMoved,
)
from grid_snake.food import Food, FoodView
from grid_snake.position import Direction, GridSize
from grid_snake.scheduler import FrameScheduler, Scheduler, TickHandle
from grid_snake.snake import CollisionType, Snake, SnakeView
from grid_snake.storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class GameState(enum.Enum):
    """Engine lifecycle states."""

    READY = "ready"
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    ERROR = "error"


@dataclass(frozen=True)
class GameSnapshot:
    """Frozen copy of everything needed to draw one frame.

    Later ticks never change a snapshot already handed out.
    """

    snake: SnakeView | None
    food: FoodView | None
    score: int
    high_score: int
    level: int
    speed: int
    state: GameState
    grid: GridSize

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "score": self.score,
            "high_score": self.high_score,
            "level": self.level,
            "speed": self.speed,
            "grid": self.grid.to_dict(),
            "snake": self.snake.to_dict() if self.snake is not None else None,
            "food": self.food.to_dict() if self.food is not None else None,
        }


class GameEngine:
    """Single-player engine driving one snake through timed ticks.

    The engine owns the snake and food (recreated on every :meth:`start`) and
    a repeating simulation tick on the injected scheduler, whose interval is
    the current ``speed``. Nothing advances unless the state is RUNNING.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        scheduler: Scheduler | None = None,
        seed: int | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.grid = self.config.grid_size
        self.store = store if store is not None else MemoryHighScoreStore()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.rng = np.random.default_rng(seed)
        self.events = EventBus()

        self.state = GameState.READY
        self.score = 0
        self.level = 1
        self.speed = self.config.initial_speed
        self.food_eaten_count = 0
        self.high_score = self._load_high_score()

        self.snake: Snake | None = None
        self.food: Food | None = None
        self._tick: TickHandle | None = None

    def on(self, event_type: type[Event], listener: Callable) -> None:
        """Shorthand for ``engine.events.subscribe``."""
        self.events.subscribe(event_type, listener)

    # --- lifecycle ---

    def start(self) -> bool:
        """Begin a fresh run from READY or GAME_OVER."""
        if self.state not in (GameState.READY, GameState.GAME_OVER):
            return False

        self._initialize_entities()
        self.state = GameState.RUNNING
        self._schedule_tick()
        logger.info("Game started on %s grid at speed %d.", self.grid, self.speed)
        self.events.emit(GameStarted(score=self.score))
        return True

    def pause(self) -> bool:
        if self.state != GameState.RUNNING:
            return False
        self.state = GameState.PAUSED
        self._cancel_tick()
        self.events.emit(GamePaused())
        return True

    def resume(self) -> bool:
        if self.state != GameState.PAUSED:
            return False
        self.state = GameState.RUNNING
        self._schedule_tick()
        self.events.emit(GameResumed())
        return True

    def toggle_pause(self) -> bool:
        """Pause when running, resume when paused."""
        if self.state == GameState.RUNNING:
            return self.pause()
        if self.state == GameState.PAUSED:
            return self.resume()
        return False

    def reset(self) -> None:
        """Return to READY and zero the run counters.

        The snake and food are left as they are until the next start.
        """
        self.state = GameState.READY
        self.score = 0
        self.level = 1
        self.speed = self.config.initial_speed
        self.food_eaten_count = 0
        self._cancel_tick()
        self.events.emit(GameReset())

    def stop(self) -> None:
        """Force READY without touching score or level."""
        self.state = GameState.READY
        self._cancel_tick()

    def restart(self) -> bool:
        self.reset()
        return self.start()

    def change_direction(self, direction: Direction) -> bool:
        """Forward a direction change to the snake while RUNNING."""
        if self.snake is None or self.state != GameState.RUNNING:
            return False
        return self.snake.change_direction(direction)

    # --- simulation ---

    def update(self) -> None:
        """Advance the game by one tick. Ignored unless RUNNING."""
        if self.state != GameState.RUNNING or self.snake is None or self.food is None:
            return

        self.snake.move()
        self.events.emit(SnakeMoved(position=self.snake.head))

        collision = self.snake.check_collision(self.grid)
        if collision in (CollisionType.WALL, CollisionType.SELF):
            self.events.emit(Collision(collision=collision))
            self._game_over(collision)
            return

        if self.food.is_eaten_by(self.snake):
            self._eat_food()

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            snake=self.snake.view() if self.snake is not None else None,
            food=self.food.view() if self.food is not None else None,
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            speed=self.speed,
            state=self.state,
            grid=self.grid,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return self.snapshot().to_dict()

    @property
    def running(self) -> bool:
        return self.state == GameState.RUNNING

    # --- internals ---

    def _initialize_entities(self) -> None:
        self.snake = Snake(self.grid.center_position())
        self.food = Food(
            self.grid.center_position(), value=self.config.food_value, rng=self.rng,
        )
        self.food.generate_new_position(self.snake, self.grid)

    def _eat_food(self) -> None:
        if self.snake is None or self.food is None:
            return
        eaten_at = self.food.position

        self.snake.grow()
        self.score += self.food.value
        self.events.emit(ScoreUpdated(score=self.score, delta=self.food.value))
        self.food_eaten_count += 1
        self._update_level()
        self.food.generate_new_position(self.snake, self.grid)

        self.events.emit(
            FoodEaten(
                position=eaten_at,
                value=self.food.value,
                new_score=self.score,
                next_position=self.food.position,
            ),
        )

    def _update_level(self) -> None:
        new_level = self.food_eaten_count // self.config.foods_per_level + 1
        if new_level <= self.level:
            return
        self.level = new_level
        self.speed = self.config.speed_for_level(new_level)
        logger.info("Level up: %d (speed %d ms).", self.level, self.speed)
        self.events.emit(LevelUp(level=self.level, speed=self.speed))

    def _game_over(self, collision: CollisionType) -> None:
        self.state = GameState.GAME_OVER
        self._cancel_tick()

        if self.score > self.high_score:
            self.high_score = self.score
            self._save_high_score()

        logger.info(
            "Game over (%s collision) with score %d, high score %d.",
            collision.name, self.score, self.high_score,
        )
        self.events.emit(GameOver(score=self.score, high_score=self.high_score))

    def _tick_callback(self) -> None:
        try:
            self.update()
        except Exception as exc:
            logger.exception("Tick update failed; engine entering ERROR state.")
            self.state = GameState.ERROR
            self._cancel_tick()
            error = GameError(
                f"Tick update failed: {exc}", ErrorCode.INVALID_STATE, {"cause": exc},
            )
            self.events.emit(EngineError(error=error))

    def _schedule_tick(self) -> None:
        self._cancel_tick()
        self._tick = self.scheduler.schedule_repeating(
            lambda: self.speed, self._tick_callback,
        )

    def _cancel_tick(self) -> None:
        if self._tick is not None:
            self._tick.cancel()
            self._tick = None

    def _load_high_score(self) -> int:
        try:
            return max(int(self.store.load()), 0)
        except Exception as exc:
            logger.warning("High score unavailable, starting from 0: %s", exc)
            return 0

    def _save_high_score(self) -> None:
        try:
            self.store.save(self.high_score)
        except Exception as exc:
            logger.warning("Could not persist high score %d: %s", self.high_score, exc)
