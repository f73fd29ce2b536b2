"""FastAPI application factory."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from grid_snake.config import GameConfig
from grid_snake.server.hub import GameHub
from grid_snake.server.routes import router
from grid_snake.server.websocket import ws_router
from grid_snake.storage import HighScoreStore


def create_app(
    config: GameConfig | None = None,
    store: HighScoreStore | None = None,
) -> FastAPI:
    """Build and return the FastAPI application."""

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        app.state.game_hub = GameHub(config, store=store)
        yield
        await app.state.game_hub.cleanup()

    app = FastAPI(
        title="Grid Snake API", version="0.1.0", lifespan=_lifespan,
    )
    app.include_router(router)
    app.include_router(ws_router)
    return app
