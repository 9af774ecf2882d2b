"""CLI entrypoint (Typer + Rich)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List, NoReturn, Optional, TypeVar

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.json_exporter import export_records_json
from adapters.steam import SteamWebAPI
from cli import doctor
from cli.ui_components import build_app_panel, build_games_table, build_players_table, print_banner
from core.config import AppSettings
from core.mapping import MappingError

app = typer.Typer(no_args_is_help=True, help="Typed client for the Steam Web API and Store API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)

T = TypeVar("T")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP requests and parsing details."),
    api_key: Optional[str] = typer.Option(None, "--api-key", help="Overrides STEAM_WEBAPI_API_KEY."),
    banner: bool = typer.Option(False, "--banner", help="Print the banner before running."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=_err_console, show_path=False)],
        force=True,
    )
    settings = AppSettings()
    if api_key:
        settings = settings.model_copy(update={"api_key": api_key})
    ctx.obj = settings
    if banner:
        print_banner(_console)


def _fail(message: str) -> NoReturn:
    _err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(code=1)


def _call(settings: AppSettings, action: Callable[[SteamWebAPI], T]) -> T:
    """Ejecuta una llamada y traduce errores de datos/HTTP a un exit code."""

    try:
        with SteamWebAPI(settings) as api:
            return action(api)
    except MappingError as exc:
        _fail(f"unexpected response shape: {exc}")
    except httpx.HTTPError as exc:
        _fail(f"HTTP request failed: {exc}")
    except ValueError as exc:
        _fail(str(exc))


@app.command()
def apps(
    ctx: typer.Context,
    search: Optional[str] = typer.Option(None, "--search", "-s", help="Case-insensitive name filter."),
    limit: int = typer.Option(20, "--limit", min=1, help="Rows to display."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the (filtered) list as JSON."),
) -> None:
    """List apps from ISteamApps/GetAppList."""

    result = _call(ctx.obj, lambda api: api.apps.get_app_list())
    if search:
        needle = search.lower()
        result = tuple(item for item in result if item.name and needle in item.name.lower())

    _console.print(build_games_table(result[:limit], title=f"Apps ({len(result)} total)"))
    if output is not None:
        export_records_json(records=result, output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


@app.command(name="owned-games")
def owned_games(
    ctx: typer.Context,
    steamid: int = typer.Argument(..., help="SteamID64 of the player."),
    appinfo: bool = typer.Option(True, "--appinfo/--no-appinfo", help="Include names and icons."),
    free_games: bool = typer.Option(False, "--free-games", help="Include played free games."),
    appid: Optional[List[int]] = typer.Option(None, "--appid", help="Restrict to these app ids (repeatable)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the games as JSON."),
) -> None:
    """List games owned by a player (IPlayerService/GetOwnedGames)."""

    games = _call(
        ctx.obj,
        lambda api: api.player_service.get_owned_games(
            steamid,
            include_appinfo=appinfo,
            include_played_free_games=free_games,
            appids_filter=appid or None,
        ),
    )
    _console.print(build_games_table(games, title=f"Owned games ({len(games)})"))
    if output is not None:
        export_records_json(records=games, output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


@app.command()
def players(
    ctx: typer.Context,
    steamids: List[int] = typer.Argument(..., help="SteamID64 values (up to 100)."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the summaries as JSON."),
) -> None:
    """Show player summaries (ISteamUser/GetPlayerSummaries)."""

    result = _call(ctx.obj, lambda api: api.user.get_player_summaries(steamids))
    _console.print(build_players_table(result))
    if output is not None:
        export_records_json(records=result, output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


@app.command(name="app-details")
def app_details(
    ctx: typer.Context,
    appid: int = typer.Argument(..., help="Store app id."),
    raw: bool = typer.Option(False, "--raw", help="Print the raw JSON body instead of a summary."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the details as JSON."),
) -> None:
    """Show store details for an app (store.steampowered.com/api/appdetails)."""

    if raw:
        _console.print_json(_call(ctx.obj, lambda api: api.store.app_details_raw(appid)))
        return

    details = _call(ctx.obj, lambda api: api.store.app_details(appid))
    if details is None:
        _console.print(f"[yellow]No store data for app {appid}.[/yellow]")
        return

    _console.print(build_app_panel(details))
    if output is not None:
        export_records_json(records=details, output_path=output)
        _console.print(f"[green]Saved:[/green] {output}")


def run() -> None:
    app()
