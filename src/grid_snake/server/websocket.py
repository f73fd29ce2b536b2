"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.position import Direction
from grid_snake.server.hub import GameHub

logger = logging.getLogger(__name__)

ws_router = APIRouter()


def _get_hub(ws: WebSocket) -> GameHub:
    return ws.app.state.game_hub


def _apply_message(hub: GameHub, msg: dict) -> None:
    """Apply one client message; malformed or unknown ones are ignored."""
    key = msg.get("key")
    if isinstance(key, str):
        hub.session.handle_key(key)
        return

    direction = msg.get("direction")
    if isinstance(direction, str):
        try:
            hub.change_direction(Direction.parse(direction))
        except ValueError:
            logger.debug("Ignoring unknown direction %r.", direction)
        return

    command = msg.get("command")
    if isinstance(command, str):
        try:
            hub.run_command(command)
        except ValueError:
            logger.debug("Ignoring unknown command %r.", command)


@ws_router.websocket("/game/play")
async def play(websocket: WebSocket) -> None:
    """Send keys, directions or commands; receive a snapshot every frame."""
    hub = _get_hub(websocket)
    await websocket.accept()
    hub.sockets.append(websocket)
    logger.info("Player connected (%d socket(s)).", len(hub.sockets))

    try:
        # Initial snapshot so the client can draw immediately.
        await websocket.send_text(hub.state_payload())
        while True:
            raw = await websocket.receive_text()
            try:
                msg = json.loads(raw)
            except json.JSONDecodeError:
                continue
            if not isinstance(msg, dict):
                continue
            _apply_message(hub, msg)
    except WebSocketDisconnect:
        logger.info("Player disconnected.")
    finally:
        if websocket in hub.sockets:
            hub.sockets.remove(websocket)
