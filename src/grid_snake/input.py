"""Keyboard input translation."""

from __future__ import annotations

import logging
from collections.abc import Callable

from grid_snake.config import KeyBindings
from grid_snake.events import ControlInput, DirectionInput, EventBus
from grid_snake.position import Direction
from grid_snake.scheduler import monotonic_ms

logger = logging.getLogger(__name__)

KEY_THROTTLE_MS = 100.0

PAUSE = "pause"
RESTART = "restart"


class InputHandler:
    """Maps key names to direction and control events.

    Keys arriving less than ``throttle_ms`` after the last accepted key are
    dropped. Nothing is emitted unless the handler is listening.
    """

    def __init__(
        self,
        bindings: KeyBindings | None = None,
        throttle_ms: float = KEY_THROTTLE_MS,
        clock: Callable[[], float] = monotonic_ms,
    ) -> None:
        if throttle_ms < 0:
            raise ValueError("throttle_ms must be >= 0.")
        self.events = EventBus()
        self.throttle_ms = throttle_ms
        self.listening = False
        self._clock = clock
        self._last_key_time: float | None = None
        self._directions: dict[str, Direction] = {}
        self._controls: dict[str, str] = {}
        self.set_key_bindings(bindings if bindings is not None else KeyBindings())

    def set_key_bindings(self, bindings: KeyBindings) -> None:
        self.bindings = bindings
        self._directions = {}
        for direction, keys in (
            (Direction.UP, bindings.up),
            (Direction.DOWN, bindings.down),
            (Direction.LEFT, bindings.left),
            (Direction.RIGHT, bindings.right),
        ):
            for key in keys:
                self._directions[key] = direction
        self._controls = {key: PAUSE for key in bindings.pause}
        self._controls.update({key: RESTART for key in bindings.restart})

    def start_listening(self) -> None:
        self.listening = True

    def stop_listening(self) -> None:
        self.listening = False

    def is_direction_key(self, key: str) -> bool:
        return key in self._directions

    def is_control_key(self, key: str) -> bool:
        return key in self._controls

    def handle_key(self, key: str) -> DirectionInput | ControlInput | None:
        """Translate and emit a key press. Returns the emitted event, if any."""
        if not self.listening:
            return None
        if not (self.is_direction_key(key) or self.is_control_key(key)):
            return None

        now = self._clock()
        if (
            self._last_key_time is not None
            and now - self._last_key_time < self.throttle_ms
        ):
            logger.debug("Throttled key %r.", key)
            return None
        self._last_key_time = now

        event: DirectionInput | ControlInput
        if key in self._directions:
            event = DirectionInput(direction=self._directions[key])
        else:
            event = ControlInput(action=self._controls[key])
        self.events.emit(event)
        return event
