"""Snapshot rendering into a NumPy cell grid and plain text."""

from __future__ import annotations

import enum

import numpy as np

from grid_snake.engine import GameSnapshot, GameState


class CellType(enum.IntEnum):
    """Integer codes stored in the rendered frame array."""

    EMPTY = 0
    SNAKE = 1
    HEAD = 2
    FOOD = 3


_GLYPHS: dict[CellType, str] = {
    CellType.EMPTY: ".",
    CellType.SNAKE: "o",
    CellType.HEAD: "@",
    CellType.FOOD: "*",
}


def render_cells(snapshot: GameSnapshot) -> np.ndarray:
    """Return a ``(height, width)`` int8 array of :class:`CellType` codes.

    Cells outside the grid (a head that just hit the wall) are skipped.
    """
    grid = snapshot.grid
    cells = np.zeros((grid.height, grid.width), dtype=np.int8)

    if snapshot.food is not None and grid.contains(snapshot.food.position):
        pos = snapshot.food.position
        cells[pos.y, pos.x] = CellType.FOOD
    if snapshot.snake is not None:
        for seg in snapshot.snake.body:
            if grid.contains(seg):
                cells[seg.y, seg.x] = CellType.SNAKE
        head = snapshot.snake.head
        if grid.contains(head):
            cells[head.y, head.x] = CellType.HEAD
    return cells


def render_text(snapshot: GameSnapshot) -> str:
    """Render a snapshot as a status line followed by one row per grid line."""
    cells = render_cells(snapshot)
    status = (
        f"score {snapshot.score}  high {snapshot.high_score}  "
        f"level {snapshot.level}  [{snapshot.state.value}]"
    )
    rows = ["".join(_GLYPHS[CellType(v)] for v in row) for row in cells.tolist()]
    if snapshot.state == GameState.GAME_OVER:
        rows.append(f"GAME OVER - score {snapshot.score}, high score {snapshot.high_score}")
    return "\n".join([status, *rows])


class FrameRecorder:
    """Renderer that keeps the most recent frames in memory."""

    def __init__(self, max_frames: int = 1) -> None:
        if max_frames < 1:
            raise ValueError("max_frames must be at least 1.")
        self.max_frames = max_frames
        self.frames: list[np.ndarray] = []
        self.rendered = 0
        self.last_snapshot: GameSnapshot | None = None

    def render(self, snapshot: GameSnapshot) -> None:
        self.frames.append(render_cells(snapshot))
        del self.frames[:-self.max_frames]
        self.last_snapshot = snapshot
        self.rendered += 1
