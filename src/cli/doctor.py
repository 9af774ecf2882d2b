"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_client
from core.config import AppSettings, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        with build_client(settings) as client:
            response = client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="steam-webapi Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.api_key:
        table.add_row("API key", "OK", "Web API methods enabled")
    else:
        table.add_row("API key", "MISSING", "owned-games/players need STEAM_WEBAPI_API_KEY")
    table.add_row("Web API base_url", "OK", settings.api_base_url)
    table.add_row("Store base_url", "OK", settings.store_base_url)

    # Connectivity (best-effort)
    ok_api, detail_api = _check_http(settings.api_base_url, settings)
    table.add_row("Web API connectivity", "OK" if ok_api else "FAIL", detail_api)
    ok_store, detail_store = _check_http(settings.store_base_url, settings)
    table.add_row("Store connectivity", "OK" if ok_store else "FAIL", detail_store)

    _console.print(table)

    if not settings.api_key:
        _console.print("\n[yellow]Note:[/yellow] run `steam-webapi doctor setup-key` to store an API key.")


@app.command(name="setup-key")
def setup_key(
    env_file: Optional[Path] = typer.Option(None, "--env-file", help="Write to this .env instead of the user config."),
) -> None:
    """Interactive API key setup (stores config in the user config .env)."""

    api_key = typer.prompt("Steam Web API key", hide_input=True, confirmation_prompt=False).strip()
    if not api_key:
        raise typer.BadParameter("an API key is required")

    env_path = write_user_env_vars({"STEAM_WEBAPI_API_KEY": api_key}, env_file)
    _console.print(f"[green]Saved API key to:[/green] {env_path}")
