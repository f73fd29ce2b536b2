"""WebSocket integration tests for real-time play."""

from __future__ import annotations

import json
from types import SimpleNamespace

import pytest
from fastapi import WebSocketDisconnect
from starlette.testclient import TestClient
from starlette.websockets import WebSocketState

from grid_snake.config import GameConfig
from grid_snake.server.app import create_app
from grid_snake.server.hub import GameHub
from grid_snake.server.websocket import play
from grid_snake.storage import MemoryHighScoreStore


@pytest.fixture()
def tc():
    """TestClient used as a context manager so the lifespan runs and
    REST calls share the websocket's event loop."""
    application = create_app(GameConfig(), store=MemoryHighScoreStore())
    with TestClient(application) as client:
        yield client


class TestPlayWebSocket:
    def test_connect_and_receive_initial_state(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            state = json.loads(ws.receive_text())
            assert state["state"] == "ready"
            assert "grid" in state
            assert state["snake"] is None

    def test_start_command_streams_frames(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"command": "start"}))
            frame = json.loads(ws.receive_text())
            assert frame["state"] == "running"
            assert frame["snake"]["length"] == 1
            ws.send_text(json.dumps({"command": "stop"}))

    def test_direction_and_key_messages(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text(json.dumps({"command": "start"}))
            ws.send_text(json.dumps({"direction": "up"}))
            ws.send_text(json.dumps({"key": " "}))
            # Frames keep arriving until the pause lands.
            for _ in range(200):
                frame = json.loads(ws.receive_text())
                if frame["state"] == "paused":
                    break
            assert frame["state"] == "paused"
            assert tc.app.state.game_hub.engine.snake.next_direction.name == "UP"

    def test_invalid_messages_ignored(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            ws.send_text("not-json")
            ws.send_text("[]")
            ws.send_text("123")
            ws.send_text(json.dumps({"direction": "invalid_dir"}))
            ws.send_text(json.dumps({"command": "explode"}))
            ws.send_text(json.dumps({"no_known_key": True}))
        resp = tc.get("/game")
        assert resp.status_code == 200
        assert resp.json()["stats"]["state"] == "ready"

    def test_disconnect_removes_socket(self, tc):
        with tc.websocket_connect("/game/play") as ws:
            ws.receive_text()
            assert len(tc.app.state.game_hub.sockets) == 1
        resp = tc.get("/game")
        assert resp.status_code == 200
        assert tc.app.state.game_hub.sockets == []


class FakeSocket:
    """Just enough of a websocket for the hub and the play handler."""

    def __init__(self, hub=None, state=WebSocketState.CONNECTED, fail=False):
        self.app = SimpleNamespace(state=SimpleNamespace(game_hub=hub))
        self.client_state = state
        self.fail = fail
        self.sent: list[str] = []

    async def accept(self):
        pass

    async def send_text(self, text):
        if self.fail:
            raise WebSocketDisconnect(code=1006)
        self.sent.append(text)


@pytest.fixture()
async def hub():
    h = GameHub(store=MemoryHighScoreStore(), seed=0)
    yield h
    await h.cleanup()


class TestSocketPruning:
    @pytest.mark.asyncio
    async def test_broadcast_drops_closed_and_failing_sockets(self, hub):
        live = FakeSocket()
        closed = FakeSocket(state=WebSocketState.DISCONNECTED)
        broken = FakeSocket(fail=True)
        hub.sockets.extend([live, closed, broken])
        await hub._broadcast("frame")
        assert hub.sockets == [live]
        assert live.sent == ["frame"]
        assert closed.sent == []

    @pytest.mark.asyncio
    async def test_failed_initial_send_removes_socket(self, hub):
        ws = FakeSocket(hub, fail=True)
        await play(ws)
        assert hub.sockets == []
