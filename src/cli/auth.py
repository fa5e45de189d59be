"""Comandos de sesión y peticiones ad-hoc."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, TypeVar

import httpx
import typer
from rich.console import Console

from adapters.event_bus import events
from adapters.http_client import RequestClient, build_request_client
from cli.ui_components import build_credentials_table, build_envelope_panel, build_error_panel
from core.config import AppSettings
from core.errors import RequestError
from core.interfaces.notifier import LOGIN_INVALID_EVENT

T = TypeVar("T")

_console = Console()


def _parse_params(values: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for raw in values:
        if "=" not in raw:
            raise typer.BadParameter(f"Expected key=value, got {raw!r}", param_hint="--param")
        key, value = raw.split("=", 1)
        params[key.strip()] = value.strip()
    return params


def _with_client(action: Callable[[RequestClient], T], settings: AppSettings | None = None) -> T:
    async def runner() -> T:
        async with build_request_client(settings) as client:
            return action(client)

    return asyncio.run(runner())


def login(
    token_name: str = typer.Argument(..., help="Header name expected by the API."),
    token_value: str = typer.Argument(..., help="Header value."),
) -> None:
    """Store a header token (takes precedence over the legacy API key)."""

    settings = AppSettings()
    _with_client(lambda client: client.set_token(token_name, token_value), settings)
    _console.print(f"[green]Token stored[/green] in {settings.resolved_credentials_path()}")


def api_key(key: str = typer.Argument(..., help="Legacy FishPi API key.")) -> None:
    """Store a legacy API key."""

    settings = AppSettings()
    _with_client(lambda client: client.set_api_key(key), settings)
    _console.print(f"[green]API key stored[/green] in {settings.resolved_credentials_path()}")


def _forget(client: RequestClient) -> None:
    client.clear_api_key()
    client.clear_token()


def logout() -> None:
    """Forget both the token and the legacy API key."""

    _with_client(_forget)
    _console.print("[yellow]Credentials cleared[/yellow]")


def whoami() -> None:
    """Show which credential would be used (values masked)."""

    token_name, token_value, key = _with_client(
        lambda client: (client.get_token_name(), client.get_token_value(), client.get_api_key())
    )
    _console.print(build_credentials_table(token_name=token_name, token_value=token_value, api_key=key))


async def _get(path: str, params: dict[str, str]) -> dict[str, Any]:
    async with build_request_client() as client:
        return await client.get(path, params=params)


def get(
    path: str = typer.Argument(..., help="API path, relative to the base URL."),
    param: list[str] = typer.Option([], "--param", "-p", help="Query parameter as key=value."),
) -> None:
    """Issue an authenticated GET and print the envelope."""

    params = _parse_params(param)
    unsubscribe = events.subscribe(
        LOGIN_INVALID_EVENT,
        lambda _detail: _console.print("[yellow]Session expired: stored credentials were cleared.[/yellow]"),
    )
    try:
        envelope = asyncio.run(_get(path, params))
    except RequestError as exc:
        _console.print(build_error_panel(exc.message, exc.code))
        raise typer.Exit(code=1) from exc
    except httpx.HTTPError as exc:
        _console.print(build_error_panel(str(exc) or type(exc).__name__, None))
        raise typer.Exit(code=2) from exc
    finally:
        unsubscribe()

    _console.print(build_envelope_panel(envelope))


__all__ = ["api_key", "get", "login", "logout", "whoami"]
