"""Error types raised by the game core."""

from __future__ import annotations

import enum
from typing import Any


class ErrorCode(enum.Enum):
    INVALID_POSITION = "invalid_position"
    INVALID_DIRECTION = "invalid_direction"
    INVALID_STATE = "invalid_state"
    RENDER_ERROR = "render_error"
    INPUT_ERROR = "input_error"
    CONFIG_ERROR = "config_error"
    STORAGE_ERROR = "storage_error"


class GameError(Exception):
    """Base error carrying a machine-readable code and optional context."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context = context or {}

    def to_dict(self) -> dict:
        return {
            "error": type(self).__name__,
            "message": self.message,
            "code": self.code.value,
            "context": {k: repr(v) for k, v in self.context.items()},
        }

    def __str__(self) -> str:
        return f"{self.message} ({self.code.value})"


class ConfigError(GameError, ValueError):
    """Invalid configuration value. Never clamped silently."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message, ErrorCode.CONFIG_ERROR, context)
