"""Game configuration."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

from grid_snake.errors import ConfigError
from grid_snake.position import MAX_GRID_SIZE, MIN_GRID_SIZE, GridSize

logger = logging.getLogger(__name__)

_POSITIVE_FIELDS = (
    "initial_speed", "speed_increment", "min_speed", "food_value", "foods_per_level",
)


@dataclass(frozen=True)
class KeyBindings:
    """Key names (as reported by the browser's ``KeyboardEvent.key``)."""

    up: tuple[str, ...] = ("ArrowUp", "w", "W")
    down: tuple[str, ...] = ("ArrowDown", "s", "S")
    left: tuple[str, ...] = ("ArrowLeft", "a", "A")
    right: tuple[str, ...] = ("ArrowRight", "d", "D")
    pause: tuple[str, ...] = (" ", "Space")
    restart: tuple[str, ...] = ("r", "R")

    def __post_init__(self) -> None:
        seen: dict[str, str] = {}
        for action, keys in asdict(self).items():
            if not keys:
                raise ConfigError(f"No keys bound to '{action}'.", action=action)
            for key in keys:
                if key in seen and seen[key] != action:
                    raise ConfigError(
                        f"Key {key!r} bound to both '{seen[key]}' and '{action}'.",
                        key=key,
                    )
                seen[key] = action


@dataclass(frozen=True)
class RenderSettings:
    """Presentation hints forwarded to the drawing client."""

    snake_color: str = "#00ff00"
    food_color: str = "#ff0000"
    grid_color: str = "#333333"
    background_color: str = "#000000"
    cell_size: int = 20
    show_grid: bool = True

    def __post_init__(self) -> None:
        if self.cell_size <= 0:
            raise ConfigError("cell_size must be positive.", cell_size=self.cell_size)


@dataclass(frozen=True)
class GameConfig:
    """Load-time game settings.

    Speeds are milliseconds per tick, so a smaller value is faster. Changing
    any field means building a new engine.
    """

    grid_width: int = 20
    grid_height: int = 20
    initial_speed: int = 200
    speed_increment: int = 20
    min_speed: int = 50
    food_value: int = 10
    foods_per_level: int = 5

    key_bindings: KeyBindings = field(default_factory=KeyBindings)
    render: RenderSettings = field(default_factory=RenderSettings)

    def __post_init__(self) -> None:
        for name in ("grid_width", "grid_height", *_POSITIVE_FIELDS):
            value = getattr(self, name)
            # bool is an int subclass.
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigError(
                    f"{name} must be an integer, got {value!r}.", **{name: value},
                )
        if not self.grid_size.is_valid():
            raise ConfigError(
                f"Grid must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE} "
                f"cells per side, got {self.grid_size}.",
                grid_width=self.grid_width,
                grid_height=self.grid_height,
            )
        for name in _POSITIVE_FIELDS:
            value = getattr(self, name)
            if value <= 0:
                raise ConfigError(f"{name} must be positive, got {value}.", **{name: value})

    @property
    def grid_size(self) -> GridSize:
        return GridSize(self.grid_width, self.grid_height)

    def speed_for_level(self, level: int) -> int:
        """Tick interval for *level*, floored at ``min_speed``."""
        return max(self.min_speed, self.initial_speed - (level - 1) * self.speed_increment)

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        bindings = raw.pop("key_bindings", {}) or {}
        render = raw.pop("render", {}) or {}
        unknown = set(raw) - set(cls.__dataclass_fields__)
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}.")
        try:
            return cls(
                key_bindings=KeyBindings(
                    **{k: _as_keys(v) for k, v in bindings.items()},
                ),
                render=RenderSettings(**render),
                **raw,
            )
        except TypeError as exc:
            raise ConfigError(f"Malformed config: {exc}") from exc

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        try:
            raw = json.loads(Path(path).read_text())
        except json.JSONDecodeError as exc:
            raise ConfigError(f"Config file {path} is not valid JSON: {exc}") from exc
        if not isinstance(raw, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object.")
        return cls.from_dict(raw)


def _as_keys(value: str | list[str] | tuple[str, ...]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)
