"""Typed game events and a synchronous event bus.

Every event is a frozen dataclass tagged with an :class:`EventKind`.
Listeners subscribe to an event class and are called in subscription order;
an exception in one listener is logged and does not stop the others.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass
from typing import Any, ClassVar, TypeVar

from grid_snake.position import Direction, Position

logger = logging.getLogger(__name__)


class EventKind(enum.Enum):
    GAME_START = "game_start"
    GAME_PAUSE = "game_pause"
    GAME_RESUME = "game_resume"
    GAME_OVER = "game_over"
    GAME_RESET = "game_reset"
    SCORE_UPDATE = "score_update"
    LEVEL_UP = "level_up"
    SNAKE_MOVE = "snake_move"
    FOOD_EATEN = "food_eaten"
    COLLISION = "collision"
    ERROR = "error"
    DIRECTION_INPUT = "direction_input"
    CONTROL_INPUT = "control_input"


@dataclass(frozen=True)
class Event:
    kind: ClassVar[EventKind]

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {}
        for key, value in asdict(self).items():
            if isinstance(value, dict) and set(value) == {"x", "y"}:
                value = [value["x"], value["y"]]
            elif isinstance(value, enum.Enum):
                value = value.name
            payload[key] = value
        return {"event": self.kind.value, **payload}


@dataclass(frozen=True)
class GameStarted(Event):
    kind: ClassVar[EventKind] = EventKind.GAME_START
    score: int = 0


@dataclass(frozen=True)
class GamePaused(Event):
    kind: ClassVar[EventKind] = EventKind.GAME_PAUSE


@dataclass(frozen=True)
class GameResumed(Event):
    kind: ClassVar[EventKind] = EventKind.GAME_RESUME


@dataclass(frozen=True)
class GameOver(Event):
    kind: ClassVar[EventKind] = EventKind.GAME_OVER
    score: int
    high_score: int


@dataclass(frozen=True)
class GameReset(Event):
    kind: ClassVar[EventKind] = EventKind.GAME_RESET


@dataclass(frozen=True)
class ScoreUpdated(Event):
    kind: ClassVar[EventKind] = EventKind.SCORE_UPDATE
    score: int
    delta: int


@dataclass(frozen=True)
class LevelUp(Event):
    kind: ClassVar[EventKind] = EventKind.LEVEL_UP
    level: int
    speed: int


@dataclass(frozen=True)
class SnakeMoved(Event):
    kind: ClassVar[EventKind] = EventKind.SNAKE_MOVE
    position: Position


@dataclass(frozen=True)
class FoodEaten(Event):
    """``position`` is the eaten cell; ``next_position`` the respawned food."""

    kind: ClassVar[EventKind] = EventKind.FOOD_EATEN
    position: Position
    value: int
    new_score: int
    next_position: Position


@dataclass(frozen=True)
class Collision(Event):
    # Holds a CollisionType; typed loosely to keep this module a leaf.
    kind: ClassVar[EventKind] = EventKind.COLLISION
    collision: enum.Enum


@dataclass(frozen=True)
class EngineError(Event):
    kind: ClassVar[EventKind] = EventKind.ERROR
    error: Exception

    def to_dict(self) -> dict:
        return {"event": self.kind.value, "error": str(self.error)}


@dataclass(frozen=True)
class DirectionInput(Event):
    kind: ClassVar[EventKind] = EventKind.DIRECTION_INPUT
    direction: Direction


@dataclass(frozen=True)
class ControlInput(Event):
    kind: ClassVar[EventKind] = EventKind.CONTROL_INPUT
    action: str


E = TypeVar("E", bound=Event)
Listener = Callable[[Any], None]


class EventBus:
    """Synchronous observer registry keyed by event class."""

    def __init__(self) -> None:
        self._listeners: dict[type[Event], list[Listener]] = {}

    def subscribe(self, event_type: type[E], listener: Callable[[E], None]) -> None:
        self._listeners.setdefault(event_type, []).append(listener)

    def unsubscribe(self, event_type: type[E], listener: Callable[[E], None]) -> bool:
        """Remove *listener*. Returns True if it was registered."""
        listeners = self._listeners.get(event_type, [])
        if listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[event_type]
        return True

    def emit(self, event: Event) -> int:
        """Deliver *event* to its listeners. Returns how many failed."""
        failures = 0
        # Snapshot so listeners may (un)subscribe during delivery.
        for listener in list(self._listeners.get(type(event), [])):
            try:
                listener(event)
            except Exception:
                failures += 1
                logger.exception(
                    "Listener %r failed handling %s.", listener, event.kind.value,
                )
        return failures

    def clear(self, event_type: type[Event] | None = None) -> None:
        if event_type is None:
            self._listeners.clear()
        else:
            self._listeners.pop(event_type, None)

    def listener_count(self, event_type: type[Event]) -> int:
        return len(self._listeners.get(event_type, []))

    def event_types(self) -> list[type[Event]]:
        return list(self._listeners)
