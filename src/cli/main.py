"""CLI principal (Typer).

Comandos:
- login / api-key / logout / whoami: gestión de credenciales.
- get: petición autenticada ad-hoc.
- doctor: diagnósticos del entorno.
"""

from __future__ import annotations

import typer
from rich.console import Console

from cli import auth, doctor
from cli.ui_components import print_banner
from core.config import AppSettings
from core.observability import set_level

app = typer.Typer(no_args_is_help=True, help="FishPi API client.")
app.command()(auth.login)
app.command("api-key")(auth.api_key)
app.command()(auth.logout)
app.command()(auth.whoami)
app.command()(auth.get)
app.add_typer(doctor.app, name="doctor")

_console = Console()


@app.callback()
def main(
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Skip the banner."),
) -> None:
    settings = AppSettings()
    set_level(
        settings.log_level.upper(),
        "adapters.http_client",
        "adapters.event_bus",
        "core.services.envelope",
    )
    if not quiet:
        print_banner(_console)


def run() -> None:
    app()
