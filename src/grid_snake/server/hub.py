"""The served game session and its websocket audience."""

from __future__ import annotations

import asyncio
import json
import logging

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.engine import GameSnapshot
from grid_snake.position import Direction
from grid_snake.scheduler import AsyncioScheduler
from grid_snake.session import GameSession
from grid_snake.storage import HighScoreStore

logger = logging.getLogger(__name__)


class GameHub:
    """Hosts one local game session and streams frames to browsers.

    The session's render tick calls :meth:`render`, which fans the snapshot
    out to every connected socket without blocking the tick.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        store: HighScoreStore | None = None,
        seed: int | None = None,
    ) -> None:
        self.scheduler = AsyncioScheduler()
        self.session = GameSession(
            config, renderer=self, store=store, scheduler=self.scheduler, seed=seed,
        )
        self.sockets: list[WebSocket] = []
        self._sends: set[asyncio.Task] = set()

    @property
    def engine(self):
        return self.session.engine

    def run_command(self, command: str) -> bool:
        """Apply a lifecycle command by name. Returns whether it took effect."""
        if command == "start":
            return self.session.start()
        if command == "pause":
            return self.engine.pause()
        if command == "resume":
            return self.engine.resume()
        if command == "toggle-pause":
            return self.session.toggle_pause()
        if command == "restart":
            return self.session.restart()
        if command == "stop":
            self.session.stop()
            return True
        if command == "reset":
            self.engine.reset()
            return True
        raise ValueError(f"Unknown command: {command!r}.")

    def change_direction(self, direction: Direction) -> bool:
        return self.engine.change_direction(direction)

    def state_payload(self) -> str:
        return json.dumps(self.engine.get_state(), separators=(",", ":"))

    def render(self, snapshot: GameSnapshot) -> None:
        if not self.sockets:
            return
        payload = json.dumps(snapshot.to_dict(), separators=(",", ":"))
        task = asyncio.get_running_loop().create_task(self._broadcast(payload))
        self._sends.add(task)
        task.add_done_callback(self._sends.discard)

    async def _broadcast(self, payload: str) -> None:
        """Send a frame to all connected sockets, dropping dead ones."""
        dead: list[WebSocket] = []
        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(self.sockets):
            if ws.client_state != WebSocketState.CONNECTED:
                dead.append(ws)
                continue
            try:
                await ws.send_text(payload)
            except Exception:
                logger.debug("Dropping socket after failed send.", exc_info=True)
                dead.append(ws)
        for ws in dead:
            if ws in self.sockets:
                self.sockets.remove(ws)

    async def cleanup(self) -> None:
        """Stop the session and cancel outstanding ticks and sends."""
        self.session.destroy()
        await self.scheduler.shutdown()
        sends = list(self._sends)
        for task in sends:
            task.cancel()
        if sends:
            await asyncio.gather(*sends, return_exceptions=True)
        logger.info("GameHub cleanup complete.")
