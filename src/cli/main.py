"""CLI `araria`: invoca endpoints del API desde la terminal."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Awaitable, Callable, List, Optional

import typer
from rich.console import Console

from adapters.araria_client import ArariaClient
from adapters.json_exporter import dump_response, export_response_json
from cli import context
from cli.doctor import app as doctor_app
from cli.ui_components import (
    build_endpoints_table,
    print_event,
    print_transport_error,
    print_validation_error,
)
from core.config import ArariaSettings
from core.endpoints import ENDPOINTS, get_endpoint
from core.errors import TransportError, ValidationError
from core.interfaces.hooks import RequestHooks

app = typer.Typer(no_args_is_help=True, help="Typed client for the Araria image / fashion-AI API.")
app.add_typer(doctor_app, name="doctor")

_console = Console()


def _parse_params(raw: list[str]) -> dict[str, str]:
    params: dict[str, str] = {}
    for item in raw:
        if "=" not in item:
            raise typer.BadParameter(f"expected key=value, got {item!r}", param_hint="--param")
        key, value = item.split("=", 1)
        params[key.strip()] = value
    return params


def _load_payload(data: str | None, data_file: Path | None) -> Any:
    if data is not None and data_file is not None:
        raise typer.BadParameter("use either --data or --data-file, not both")
    raw = data if data is not None else (data_file.read_text(encoding="utf-8") if data_file else None)
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise typer.BadParameter(f"payload is not valid JSON: {exc}") from exc


def _execute(ctx: typer.Context, fn: Callable[[ArariaClient], Awaitable[Any]]) -> Any:
    verbose = bool(ctx.obj and ctx.obj.get("verbose"))
    hooks = RequestHooks.broadcast(lambda event: print_event(_console, event)) if verbose else None

    async def _runner() -> Any:
        async with context.build_client(ArariaSettings(), hooks) as client:
            return await fn(client)

    try:
        return asyncio.run(_runner())
    except ValidationError as exc:
        print_validation_error(_console, exc)
        raise typer.Exit(code=2) from exc
    except TransportError as exc:
        print_transport_error(_console, exc)
        raise typer.Exit(code=1) from exc
    except ValueError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2) from exc


def _emit(result: Any, output: Path | None) -> None:
    if output is not None:
        path = export_response_json(payload=result, output_path=output)
        _console.print(f"[green]Saved response to:[/green] {path}")
        return
    _console.print_json(dump_response(result))


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Print each request and enable debug logging."),
) -> None:
    ctx.obj = {"verbose": verbose}
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command()
def endpoints() -> None:
    """List every endpoint the client knows about."""

    _console.print(build_endpoints_table(ENDPOINTS))


@app.command()
def call(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Endpoint name (see `araria endpoints`)."),
    data: Optional[str] = typer.Option(None, "--data", "-d", help="JSON request body."),
    data_file: Optional[Path] = typer.Option(
        None, "--data-file", exists=True, dir_okay=False, readable=True, help="File with the JSON request body."
    ),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="Path parameter as key=value."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the response to a JSON file."),
) -> None:
    """Call an endpoint by name and print the response body."""

    try:
        endpoint = get_endpoint(name)
    except KeyError as exc:
        raise typer.BadParameter(f"unknown endpoint {name!r}", param_hint="NAME") from exc
    if endpoint.multipart:
        raise typer.BadParameter(f"{name} takes a file, use `araria upload`", param_hint="NAME")

    payload = _load_payload(data, data_file)
    params = _parse_params(param or [])
    result = _execute(ctx, lambda client: client.call(endpoint.name, payload, **params))
    _emit(result, output)


@app.command()
def upload(
    ctx: typer.Context,
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="File to upload."),
    content_type: Optional[str] = typer.Option(None, "--content-type", help="Override the detected MIME type."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the response to a JSON file."),
) -> None:
    """Upload a file (multipart, field `file`)."""

    result = _execute(ctx, lambda client: client.upload_file(path, content_type=content_type))
    _emit(result, output)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
