"""Headless autoplay runs for balancing and throughput checks."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine
from grid_snake.position import Direction, Position
from grid_snake.render import render_text
from grid_snake.scheduler import FrameScheduler
from grid_snake.snake import Snake

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    """Aggregate outcome of a batch of autoplayed games."""

    games: int
    total_ticks: int
    wall_time_seconds: float
    scores: list[int] = field(default_factory=list)
    levels: list[int] = field(default_factory=list)
    high_score: int = 0
    last_board: str = ""

    @property
    def mean_score(self) -> float:
        return float(np.mean(self.scores)) if self.scores else 0.0

    @property
    def ticks_per_second(self) -> float:
        return self.total_ticks / max(self.wall_time_seconds, 1e-9)

    def summary(self) -> str:
        best_level = max(self.levels, default=1)
        return (
            f"Simulation: {self.games} games, {self.total_ticks} ticks in "
            f"{self.wall_time_seconds:.2f}s | mean score {self.mean_score:.1f}, "
            f"best level {best_level}, high score {self.high_score} | "
            f"{self.ticks_per_second:.1f} ticks/s"
        )


def greedy_direction(
    snake: Snake, food: Position, engine: GameEngine, rng: np.random.Generator,
) -> Direction:
    """Pick a safe direction that moves closest to *food*.

    Falls back to the current heading when every move is fatal.
    """
    occupied = set(snake.body)
    if snake.body and not snake.growing:
        occupied.discard(snake.body[-1])  # tail moves away

    best: list[Direction] = []
    best_dist = None
    for direction in Direction:
        if direction.opposite == snake.direction:
            continue
        nxt = snake.head.add(Position.from_direction(direction))
        if not engine.grid.contains(nxt) or nxt in occupied:
            continue
        dist = abs(nxt.x - food.x) + abs(nxt.y - food.y)
        if best_dist is None or dist < best_dist:
            best, best_dist = [direction], dist
        elif dist == best_dist:
            best.append(direction)

    if not best:
        return snake.direction
    return best[int(rng.integers(len(best)))]


def simulate_games(
    *,
    num_games: int = 10,
    config: GameConfig | None = None,
    seed: int | None = 42,
    max_ticks: int = 5_000,
) -> SimulationResult:
    """Autoplay *num_games* games through the real tick scheduler.

    Each game runs until it ends or *max_ticks* ticks have elapsed.
    """
    if num_games < 1:
        raise ValueError("num_games must be at least 1.")
    scheduler = FrameScheduler()
    engine = GameEngine(config, scheduler=scheduler, seed=seed)
    rng = np.random.default_rng(seed)

    result = SimulationResult(games=num_games, total_ticks=0, wall_time_seconds=0.0)
    start = time.perf_counter()

    for _ in range(num_games):
        engine.reset()
        engine.start()
        ticks = 0
        while engine.running and ticks < max_ticks:
            if engine.snake is not None and engine.food is not None:
                engine.change_direction(
                    greedy_direction(engine.snake, engine.food.position, engine, rng),
                )
            ticks += scheduler.advance(engine.speed)
        result.last_board = render_text(engine.snapshot())
        engine.stop()
        result.total_ticks += ticks
        result.scores.append(engine.score)
        result.levels.append(engine.level)

    result.wall_time_seconds = time.perf_counter() - start
    result.high_score = engine.high_score
    logger.info(result.summary())
    return result
