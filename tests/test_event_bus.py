"""Tests for the in-process event bus."""

from __future__ import annotations

from adapters.event_bus import EventBus
from core.interfaces.notifier import ERROR_EVENT, LOGIN_INVALID_EVENT, Notifier


def test_bus_satisfies_protocol() -> None:
    assert isinstance(EventBus(), Notifier)


def test_publish_without_listeners_is_noop() -> None:
    EventBus().publish(LOGIN_INVALID_EVENT)


def test_every_listener_receives_detail() -> None:
    bus = EventBus()
    first: list[object] = []
    second: list[object] = []
    bus.subscribe(ERROR_EVENT, first.append)
    bus.subscribe(ERROR_EVENT, second.append)

    bus.publish(ERROR_EVENT, {"message": "m", "code": -1})

    assert first == second == [{"message": "m", "code": -1}]


def test_unsubscribe() -> None:
    bus = EventBus()
    seen: list[object] = []
    unsubscribe = bus.subscribe(LOGIN_INVALID_EVENT, seen.append)

    unsubscribe()
    unsubscribe()
    bus.publish(LOGIN_INVALID_EVENT)

    assert seen == []
    assert bus.listener_count(LOGIN_INVALID_EVENT) == 0


def test_failing_handler_does_not_block_others() -> None:
    bus = EventBus()
    seen: list[object] = []

    def broken(_detail: object) -> None:
        raise RuntimeError("boom")

    bus.subscribe(ERROR_EVENT, broken)
    bus.subscribe(ERROR_EVENT, seen.append)

    bus.publish(ERROR_EVENT, "x")

    assert seen == ["x"]
