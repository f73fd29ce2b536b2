"""REST API route handlers for driving the local game."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.position import Direction
from grid_snake.server.hub import GameHub
from grid_snake.server.models import (
    Command,
    CommandResponse,
    DirectionRequest,
    GameStats,
    KeyRequest,
)

router = APIRouter(prefix="/game", tags=["game"])


def _get_hub(request: Request) -> GameHub:
    return request.app.state.game_hub


@router.get("")
async def get_game(request: Request) -> dict:
    """Return run statistics plus the full render snapshot."""
    hub = _get_hub(request)
    return {
        "stats": hub.session.get_stats(),
        "snapshot": hub.engine.get_state(),
    }


@router.get("/stats")
async def get_stats(request: Request) -> GameStats:
    return GameStats(**_get_hub(request).session.get_stats())


@router.get("/config")
async def get_config(request: Request) -> dict:
    """Return the active configuration, including render settings."""
    return _get_hub(request).session.config.to_dict()


@router.post("/direction")
async def change_direction(
    body: DirectionRequest, request: Request,
) -> CommandResponse:
    hub = _get_hub(request)
    accepted = hub.change_direction(Direction.parse(body.direction))
    return CommandResponse(
        command=f"direction:{body.direction}",
        accepted=accepted,
        state=hub.engine.state.value,
    )


@router.post("/keys")
async def press_key(body: KeyRequest, request: Request) -> CommandResponse:
    """Feed a raw key name through the configured key bindings."""
    hub = _get_hub(request)
    event = hub.session.input.handle_key(body.key)
    return CommandResponse(
        command=f"key:{body.key}",
        accepted=event is not None,
        state=hub.engine.state.value,
    )


@router.post("/{command}")
async def run_command(command: Command, request: Request) -> CommandResponse:
    """Apply a lifecycle command (start, pause, resume, restart, ...)."""
    hub = _get_hub(request)
    try:
        accepted = hub.run_command(command)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return CommandResponse(
        command=command, accepted=accepted, state=hub.engine.state.value,
    )
