"""A playable session wiring the engine to input and rendering."""

from __future__ import annotations

import logging
from typing import Protocol

from grid_snake.config import GameConfig
from grid_snake.engine import GameEngine, GameSnapshot, GameState
from grid_snake.events import (
    ControlInput,
    DirectionInput,
    EngineError,
    GameOver,
    GamePaused,
    GameReset,
    GameResumed,
    GameStarted,
)
from grid_snake.input import PAUSE, RESTART, InputHandler
from grid_snake.scheduler import FRAME_INTERVAL_MS, FrameScheduler, Scheduler, TickHandle
from grid_snake.storage import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    def render(self, snapshot: GameSnapshot) -> None: ...


class GameSession:
    """Owns one engine plus the render tick and keyboard input.

    The render tick runs at a fixed ~60 Hz on the same scheduler as the
    engine's simulation tick and only while the engine is RUNNING. When the
    engine leaves RUNNING a final frame is drawn so the display shows the
    paused, reset, or game-over state.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        renderer: Renderer | None = None,
        store: HighScoreStore | None = None,
        scheduler: Scheduler | None = None,
        seed: int | None = None,
        render_interval_ms: float = FRAME_INTERVAL_MS,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.renderer = renderer
        self.store = store if store is not None else MemoryHighScoreStore()
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.seed = seed
        self.render_interval_ms = render_interval_ms

        self.input = InputHandler(self.config.key_bindings)
        self.input.events.subscribe(DirectionInput, self._on_direction)
        self.input.events.subscribe(ControlInput, self._on_control)
        self.input.start_listening()

        self.engine = self._build_engine()
        self._render_tick: TickHandle | None = None

    # --- commands ---

    def start(self) -> bool:
        return self.engine.start()

    def toggle_pause(self) -> bool:
        return self.engine.toggle_pause()

    def restart(self) -> bool:
        return self.engine.restart()

    def stop(self) -> None:
        self.engine.stop()
        self._stop_render_loop()

    def handle_key(self, key: str) -> None:
        self.input.handle_key(key)

    def update_config(self, config: GameConfig) -> None:
        """Replace the engine with one built from *config*.

        The current run is discarded; the high score survives through the
        shared store.
        """
        self.stop()
        self.engine.events.clear()
        self.config = config
        self.input.set_key_bindings(config.key_bindings)
        self.engine = self._build_engine()
        logger.info("Session reconfigured for a %s grid.", self.engine.grid)

    def destroy(self) -> None:
        self.stop()
        self.input.stop_listening()
        self.input.events.clear()
        self.engine.events.clear()

    # --- views ---

    def snapshot(self) -> GameSnapshot:
        return self.engine.snapshot()

    def get_stats(self) -> dict:
        snake = self.engine.snake
        return {
            "state": self.engine.state.value,
            "score": self.engine.score,
            "high_score": self.engine.high_score,
            "level": self.engine.level,
            "speed": self.engine.speed,
            "snake_length": snake.length if snake is not None else 0,
            "food_eaten": self.engine.food_eaten_count,
        }

    def render(self) -> None:
        if self.renderer is not None:
            self.renderer.render(self.engine.snapshot())

    # --- wiring ---

    def _build_engine(self) -> GameEngine:
        engine = GameEngine(
            self.config, store=self.store, scheduler=self.scheduler, seed=self.seed,
        )
        engine.on(GameStarted, self._start_render_loop)
        engine.on(GameResumed, self._start_render_loop)
        for event_type in (GamePaused, GameOver, GameReset, EngineError):
            engine.on(event_type, self._stop_render_loop)
        return engine

    def _on_direction(self, event: DirectionInput) -> None:
        self.engine.change_direction(event.direction)

    def _on_control(self, event: ControlInput) -> None:
        if event.action == PAUSE:
            self.toggle_pause()
        elif event.action == RESTART:
            self.restart()
        else:
            logger.warning("Unknown control action %r.", event.action)

    def _start_render_loop(self, _event: object = None) -> None:
        if self._render_tick is not None:
            return
        self._render_tick = self.scheduler.schedule_repeating(
            lambda: self.render_interval_ms, self._render_frame,
        )
        self.render()

    def _stop_render_loop(self, _event: object = None) -> None:
        if self._render_tick is None:
            return
        self._render_tick.cancel()
        self._render_tick = None
        self.render()

    def _render_frame(self) -> None:
        if self.engine.state != GameState.RUNNING:
            self._stop_render_loop()
            return
        self.render()
