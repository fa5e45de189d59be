"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from adapters.credential_store import build_file_store
from adapters.http_client import build_async_client
from cli.ui_components import mask_secret
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.interfaces.store import API_KEY_KEY, TOKEN_NAME_KEY, TOKEN_VALUE_KEY

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get("/")
        return True, f"HTTP {response.status_code}"
    except Exception as exc:
        return False, str(exc) or type(exc).__name__


def _check_store(settings: AppSettings) -> tuple[bool, str]:
    store = build_file_store(settings)
    try:
        has_token = bool(store.get(TOKEN_NAME_KEY) and store.get(TOKEN_VALUE_KEY))
        api_key = store.get(API_KEY_KEY)
    except (OSError, ValueError) as exc:
        return False, f"{store.path}: {exc}"
    if has_token:
        return True, f"token ({store.path})"
    if api_key:
        return True, f"api key {mask_secret(api_key)} ({store.path})"
    return True, f"empty ({store.path})"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="fishpi-client Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", settings.base_url)
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK", str(get_user_env_file()))

    ok_store, detail_store = _check_store(settings)
    table.add_row("Credentials", "OK" if ok_store else "FAIL", detail_store)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_store:
        _console.print("\n[yellow]Note:[/yellow] run `fishpi logout` to reset a corrupted credentials file.")


@app.command("set-base-url")
def set_base_url(url: str = typer.Argument(..., help="New API base URL.")) -> None:
    """Persist the API base URL in the per-user .env file."""

    path = write_user_env_vars({"FISHPI_BASE_URL": url})
    _console.print(f"[green]Saved[/green] FISHPI_BASE_URL in {path}")
