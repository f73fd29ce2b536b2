"""Grid Snake: single-player snake game core."""

from grid_snake.config import GameConfig, KeyBindings, RenderSettings
from grid_snake.engine import GameEngine, GameSnapshot, GameState
from grid_snake.errors import ConfigError, ErrorCode, GameError
from grid_snake.events import EventBus, EventKind
from grid_snake.food import Food, FoodType
from grid_snake.position import Direction, GridSize, Position
from grid_snake.scheduler import AsyncioScheduler, FrameScheduler, TickHandle
from grid_snake.session import GameSession
from grid_snake.snake import CollisionType, Snake
from grid_snake.storage import FileHighScoreStore, MemoryHighScoreStore

__all__ = [
    "AsyncioScheduler",
    "CollisionType",
    "ConfigError",
    "Direction",
    "ErrorCode",
    "EventBus",
    "EventKind",
    "FileHighScoreStore",
    "Food",
    "FoodType",
    "FrameScheduler",
    "GameConfig",
    "GameEngine",
    "GameError",
    "GameSession",
    "GameSnapshot",
    "GameState",
    "GridSize",
    "KeyBindings",
    "MemoryHighScoreStore",
    "Position",
    "RenderSettings",
    "Snake",
    "TickHandle",
]
