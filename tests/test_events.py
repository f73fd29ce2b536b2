"""Tests for the event bus and event payloads."""

import logging

from grid_snake.events import (
    EventBus,
    EventKind,
    FoodEaten,
    GameOver,
    GamePaused,
    LevelUp,
    SnakeMoved,
)
from grid_snake.position import Position


class TestEventBus:
    def test_delivers_in_subscription_order(self):
        bus = EventBus()
        calls = []
        bus.subscribe(GamePaused, lambda e: calls.append("a"))
        bus.subscribe(GamePaused, lambda e: calls.append("b"))
        bus.emit(GamePaused())
        assert calls == ["a", "b"]

    def test_only_matching_type_receives(self):
        bus = EventBus()
        received = []
        bus.subscribe(LevelUp, received.append)
        bus.emit(GamePaused())
        bus.emit(LevelUp(level=2, speed=180))
        assert received == [LevelUp(level=2, speed=180)]

    def test_failing_listener_isolated(self, caplog):
        bus = EventBus()
        received = []

        def boom(event):
            raise RuntimeError("listener broke")

        bus.subscribe(GameOver, boom)
        bus.subscribe(GameOver, received.append)
        with caplog.at_level(logging.ERROR, logger="grid_snake.events"):
            failures = bus.emit(GameOver(score=10, high_score=20))
        assert failures == 1
        assert received == [GameOver(score=10, high_score=20)]
        assert "failed handling game_over" in caplog.text

    def test_unsubscribe(self):
        bus = EventBus()
        received = []
        bus.subscribe(GamePaused, received.append)
        assert bus.unsubscribe(GamePaused, received.append)
        assert not bus.unsubscribe(GamePaused, received.append)
        bus.emit(GamePaused())
        assert received == []
        assert bus.listener_count(GamePaused) == 0

    def test_clear_and_introspection(self):
        bus = EventBus()
        bus.subscribe(GamePaused, print)
        bus.subscribe(LevelUp, print)
        assert set(bus.event_types()) == {GamePaused, LevelUp}
        bus.clear(GamePaused)
        assert bus.event_types() == [LevelUp]
        bus.clear()
        assert bus.event_types() == []

    def test_listener_may_unsubscribe_during_emit(self):
        bus = EventBus()
        calls = []

        def once(event):
            calls.append("once")
            bus.unsubscribe(GamePaused, once)

        bus.subscribe(GamePaused, once)
        bus.subscribe(GamePaused, lambda e: calls.append("always"))
        bus.emit(GamePaused())
        bus.emit(GamePaused())
        assert calls == ["once", "always", "always"]


class TestEventPayloads:
    def test_kind_tags(self):
        assert GameOver(score=1, high_score=1).kind == EventKind.GAME_OVER
        assert SnakeMoved(position=Position(1, 2)).kind == EventKind.SNAKE_MOVE

    def test_to_dict_flattens_positions(self):
        event = FoodEaten(
            position=Position(3, 4), value=10, new_score=30,
            next_position=Position(7, 1),
        )
        assert event.to_dict() == {
            "event": "food_eaten",
            "position": [3, 4],
            "value": 10,
            "new_score": 30,
            "next_position": [7, 1],
        }
