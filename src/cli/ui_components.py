"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adapters.json_exporter import dump_response
from core.endpoints import EndpointDescriptor
from core.errors import TransportError, ValidationError
from core.interfaces.hooks import RequestEvent


def build_endpoints_table(endpoints: Iterable[EndpointDescriptor]) -> Table:
    table = Table(title="Araria endpoints")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Method", style="bright_green")
    table.add_column("Path", style="magenta")
    table.add_column("Body", style="white")
    table.add_column("Summary", style="dim")
    for ep in endpoints:
        if ep.multipart:
            body = "multipart (file)"
        elif ep.schema is not None:
            body = ep.schema.__name__
        else:
            body = "-"
        table.add_row(ep.name, ep.method, ep.path, body, ep.summary)
    return table


def print_event(console: Console, event: RequestEvent) -> None:
    """Una línea por evento del dispatcher (modo --verbose)."""

    line = Text()
    line.append(f"{event.method} ", style="bold")
    line.append(event.url, style="magenta")
    if event.status_code is not None:
        style = "green" if 200 <= event.status_code < 300 else "red"
        line.append(f" {event.status_code}", style=style)
    if event.elapsed_ms is not None:
        line.append(f" {event.elapsed_ms}ms", style="dim")
    if event.error:
        line.append(f" {event.error}", style="red")
    console.print(line)


def print_validation_error(console: Console, exc: ValidationError) -> None:
    table = Table(title=f"Invalid {exc.schema_name}")
    table.add_column("Field", style="cyan")
    table.add_column("Problem", style="red")
    for issue in exc.issues:
        table.add_row(issue.field, issue.message)
    console.print(table)


def print_transport_error(console: Console, exc: TransportError) -> None:
    body = Text()
    body.append(str(exc) + "\n")
    if exc.status_code is not None:
        body.append(f"\nStatus: {exc.status_code}", style="bold")
    if exc.body is not None:
        body.append("\n" + dump_response(exc.body), style="dim")
    console.print(Panel(body, title=Text("Request failed", style="bold red"), border_style="red"))
