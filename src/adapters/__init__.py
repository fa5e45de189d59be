"""Adaptadores de I/O: cliente HTTP, stores de credenciales y canal de eventos."""

from adapters.credential_store import JsonFileCredentialStore, MemoryCredentialStore
from adapters.event_bus import EventBus, events
from adapters.http_client import RequestClient, build_async_client, build_request_client

__all__ = [
    "EventBus",
    "JsonFileCredentialStore",
    "MemoryCredentialStore",
    "RequestClient",
    "build_async_client",
    "build_request_client",
    "events",
]
