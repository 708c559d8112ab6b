"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console

from adapters.http_client import build_download_client
from cli.ui_components import build_doctor_table
from core.config import AppSettings, load_settings, write_user_env_vars
from core.errors import ConfigurationError
from core.resources_loader import load_program, resolve_program_path

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    # Sin Authorization: solo comprobamos que el host responde.
    try:
        async with build_download_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or type(exc).__name__


def _check_program(settings: AppSettings) -> tuple[bool, str]:
    try:
        code = load_program(settings)
    except ConfigurationError as exc:
        return False, str(exc)
    return True, f"{resolve_program_path(settings)} ({len(code)} bytes)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    try:
        settings = load_settings()
    except ConfigurationError as exc:
        _console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=exc.exit_code) from exc

    table = build_doctor_table()

    has_key = bool((settings.api_key or "").strip())
    if has_key:
        table.add_row("API key", "OK", "SIGNALOID_API_KEY is set")
    else:
        table.add_row("API key", "MISSING", "Run `uxconvert doctor setup` or export SIGNALOID_API_KEY")
    table.add_row("API base_url", "OK", settings.api_base_url)

    ok_http, detail_http = asyncio.run(_check_http(settings.api_base_url, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    ok_program, detail_program = _check_program(settings)
    table.add_row("Program source", "OK" if ok_program else "FAIL", detail_program)

    _console.print(table)

    if not (has_key and ok_http and ok_program):
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores config in the user config .env)."""

    base_url = typer.prompt(
        "API base URL",
        default=AppSettings.model_fields["api_base_url"].default,
        show_default=True,
    ).strip()
    api_key = typer.prompt("Signaloid API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not api_key:
        raise typer.BadParameter("base_url and api_key are required")

    env_path = write_user_env_vars(
        {
            "SIGNALOID_API_BASE_URL": base_url,
            "SIGNALOID_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved config to:[/green] {env_path}")
