"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from cli import context
from core.config import ArariaSettings, get_user_env_file, normalize_base_url, write_user_env_vars
from core.domain.profiles import DeploymentProfile
from core.errors import ArariaError

app = typer.Typer(no_args_is_help=True, help="Configuration checks and setup.")

_console = Console()


def _mask(secret: str) -> str:
    if len(secret) <= 6:
        return "*" * len(secret)
    return f"{secret[:3]}…{secret[-2:]}"


async def _check_models(settings: ArariaSettings) -> tuple[bool, str]:
    """Calls `GET models`, the cheapest authenticated endpoint."""

    try:
        async with context.build_client(settings) as client:
            result = await client.get_models()
    except ArariaError as exc:
        return False, str(exc)
    count = len(result) if isinstance(result, list) else None
    return True, f"{count} models" if count is not None else "OK"


@app.command()
def run() -> None:
    """Show the effective configuration and check that the API answers."""

    settings = ArariaSettings()

    table = Table(title="Araria Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("Base URL", "OK", normalize_base_url(settings.base_url))
    table.add_row("Profile", "OK", settings.profile.label())
    table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "MISSING", str(get_user_env_file()))

    if not settings.api_key:
        table.add_row("API key", "FAIL", "ARARIA_API_KEY is not set (run `araria doctor setup`)")
        _console.print(table)
        raise typer.Exit(code=1)

    table.add_row("API key", "OK", _mask(settings.api_key))
    ok, detail = asyncio.run(_check_models(settings))
    table.add_row("GET models", "OK" if ok else "FAIL", detail)
    _console.print(table)

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    profile = typer.prompt(
        "Deployment profile (araria/bearer)",
        default=DeploymentProfile.default().value,
        show_default=True,
    ).strip().lower()
    try:
        DeploymentProfile(profile)
    except ValueError as exc:
        raise typer.BadParameter(f"unknown profile {profile!r}") from exc

    base_url = typer.prompt("Base URL (empty for production)", default="", show_default=False).strip()
    api_key = typer.prompt("API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("api key is required")

    values = {
        "ARARIA_API_KEY": api_key,
        "ARARIA_PROFILE": profile,
    }
    if base_url:
        values["ARARIA_BASE_URL"] = normalize_base_url(base_url)

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
