"""Pydantic models for API request/response schemas."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

Command = Literal[
    "start", "pause", "resume", "toggle-pause", "restart", "stop", "reset",
]


class DirectionRequest(BaseModel):
    """Request body for POST /game/direction."""

    direction: Literal["up", "down", "left", "right"]


class KeyRequest(BaseModel):
    """Request body for POST /game/keys."""

    key: str = Field(min_length=1, max_length=32)


class CommandResponse(BaseModel):
    """Outcome of a lifecycle or steering command."""

    command: str
    accepted: bool
    state: str


class GameStats(BaseModel):
    """Compact run statistics."""

    state: str
    score: int
    high_score: int
    level: int
    speed: int
    snake_length: int
    food_eaten: int
