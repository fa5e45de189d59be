"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text


def print_banner(console: Console) -> None:
    title = Text("fishpi-client", style="bold cyan")
    subtitle = Text("Token • API key • Envelope", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def mask_secret(value: str | None, *, visible: int = 4) -> str:
    """Oculta todo salvo los últimos `visible` caracteres."""

    if not value:
        return "-"
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]


def build_credentials_table(
    *,
    token_name: str | None,
    token_value: str | None,
    api_key: str | None,
) -> Table:
    table = Table(title="Stored credentials")
    table.add_column("Scheme", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Value", style="magenta")
    table.add_column("Active", style="green")

    token_active = bool(token_name and token_value)
    table.add_row("token", token_name or "-", mask_secret(token_value), "yes" if token_active else "no")
    table.add_row(
        "api key (legacy)",
        "apiKey",
        mask_secret(api_key),
        "yes" if api_key and not token_active else "no",
    )
    return table


def build_envelope_panel(envelope: dict[str, Any]) -> Panel:
    """Panel con el envelope completo en JSON."""

    code = envelope.get("code")
    title = Text(f"code={code}", style="bold green")
    body = Syntax(json.dumps(envelope, ensure_ascii=False, indent=2), "json", word_wrap=True)
    return Panel(body, title=title, border_style="green")


def build_error_panel(message: str, code: int | None) -> Panel:
    title = Text("Request failed", style="bold red")
    body = Text(message)
    if code is not None:
        body.append(f"\n\ncode: {code}", style="dim")
    return Panel(body, title=title, border_style="red")
