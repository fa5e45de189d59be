"""Shared fixtures: in-memory store, recording event bus, mocked transport."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

import httpx
import pytest

from adapters.credential_store import MemoryCredentialStore
from adapters.event_bus import EventBus
from adapters.http_client import RequestClient
from core.config import AppSettings
from core.interfaces.notifier import ERROR_EVENT, LOGIN_INVALID_EVENT

BASE_URL = "https://api.test"

Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class RecordedEvents:
    login_invalid: list[Any] = field(default_factory=list)
    errors: list[Any] = field(default_factory=list)


@dataclass
class CapturingTransport:
    """Replays one canned envelope and keeps every request it saw."""

    envelope: Any = field(default_factory=lambda: {"code": 0, "msg": "ok"})
    status_code: int = 200
    requests: list[httpx.Request] = field(default_factory=list)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.envelope)

    @property
    def last(self) -> httpx.Request:
        assert self.requests, "no request was sent"
        return self.requests[-1]


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(_env_file=None, base_url=BASE_URL)


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def bus() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded(bus: EventBus) -> RecordedEvents:
    recorded = RecordedEvents()
    bus.subscribe(LOGIN_INVALID_EVENT, recorded.login_invalid.append)
    bus.subscribe(ERROR_EVENT, recorded.errors.append)
    return recorded


@pytest.fixture
def wire() -> CapturingTransport:
    return CapturingTransport()


@pytest.fixture
def make_client(
    settings: AppSettings,
    store: MemoryCredentialStore,
    bus: EventBus,
) -> Callable[[Handler], RequestClient]:
    def factory(handler: Handler) -> RequestClient:
        return RequestClient(
            settings,
            store=store,
            notifier=bus,
            transport=httpx.MockTransport(handler),
        )

    return factory


@pytest.fixture
async def client(make_client, wire: CapturingTransport):
    request_client = make_client(wire)
    yield request_client
    await request_client.aclose()
