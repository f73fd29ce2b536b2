"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from grid_snake.server.app import create_app
from grid_snake.server.hub import GameHub
from grid_snake.storage import MemoryHighScoreStore

BASE = "http://test"


@pytest.fixture()
async def hub():
    h = GameHub(store=MemoryHighScoreStore(), seed=0)
    yield h
    await h.cleanup()


@pytest.fixture()
def app(hub):
    application = create_app()
    application.state.game_hub = hub
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c


class TestGetGame:
    @pytest.mark.asyncio
    async def test_initial_state(self, client):
        resp = await client.get("/game")
        assert resp.status_code == 200
        data = resp.json()
        assert data["stats"]["state"] == "ready"
        assert data["snapshot"]["snake"] is None
        assert data["snapshot"]["grid"] == {"width": 20, "height": 20}

    @pytest.mark.asyncio
    async def test_stats(self, client):
        resp = await client.get("/game/stats")
        assert resp.status_code == 200
        assert resp.json()["level"] == 1

    @pytest.mark.asyncio
    async def test_config(self, client):
        resp = await client.get("/game/config")
        assert resp.status_code == 200
        data = resp.json()
        assert data["initial_speed"] == 200
        assert data["render"]["cell_size"] == 20


class TestCommands:
    @pytest.mark.asyncio
    async def test_start(self, client):
        resp = await client.post("/game/start")
        assert resp.status_code == 200
        assert resp.json() == {"command": "start", "accepted": True, "state": "running"}

    @pytest.mark.asyncio
    async def test_start_twice_not_accepted(self, client):
        await client.post("/game/start")
        resp = await client.post("/game/start")
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_pause_resume_cycle(self, client):
        await client.post("/game/start")
        resp = await client.post("/game/pause")
        assert resp.json()["state"] == "paused"
        resp = await client.post("/game/toggle-pause")
        assert resp.json()["state"] == "running"

    @pytest.mark.asyncio
    async def test_reset_and_stop(self, client, hub):
        await client.post("/game/start")
        resp = await client.post("/game/stop")
        assert resp.json()["state"] == "ready"
        resp = await client.post("/game/reset")
        assert resp.json()["accepted"] is True
        assert hub.scheduler._tasks == {}

    @pytest.mark.asyncio
    async def test_unknown_command(self, client):
        resp = await client.post("/game/explode")
        assert resp.status_code == 422


class TestSteering:
    @pytest.mark.asyncio
    async def test_direction_requires_running(self, client):
        resp = await client.post("/game/direction", json={"direction": "up"})
        assert resp.status_code == 200
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_direction_accepted(self, client, hub):
        await client.post("/game/start")
        resp = await client.post("/game/direction", json={"direction": "up"})
        assert resp.json()["accepted"] is True
        assert hub.engine.snake.next_direction.name == "UP"

    @pytest.mark.asyncio
    async def test_reverse_rejected(self, client):
        await client.post("/game/start")
        resp = await client.post("/game/direction", json={"direction": "left"})
        assert resp.json()["accepted"] is False

    @pytest.mark.asyncio
    async def test_invalid_direction(self, client):
        resp = await client.post("/game/direction", json={"direction": "sideways"})
        assert resp.status_code == 422

    @pytest.mark.asyncio
    async def test_key_press(self, client, hub):
        await client.post("/game/start")
        resp = await client.post("/game/keys", json={"key": " "})
        assert resp.json()["accepted"] is True
        assert hub.engine.state.value == "paused"

    @pytest.mark.asyncio
    async def test_unbound_key(self, client):
        resp = await client.post("/game/keys", json={"key": "q"})
        assert resp.json()["accepted"] is False
