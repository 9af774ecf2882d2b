"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import App, Player
from core.domain.store import AppData


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("steam-webapi", style="bold cyan")
    subtitle = Text("Steam Web API • Store API • typed records", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _hours(minutes: int | None) -> str:
    if minutes is None:
        return "-"
    return f"{minutes / 60:.1f} h"


def build_games_table(games: Iterable[App], *, title: str = "Games") -> Table:
    table = Table(title=title)
    table.add_column("App ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Playtime", style="green", justify="right")
    table.add_column("Last 2 weeks", style="dim", justify="right")
    for game in games:
        table.add_row(
            str(game.appid),
            game.name or "",
            _hours(game.playtime_forever),
            _hours(game.playtime_2weeks),
        )
    return table


def build_players_table(players: Iterable[Player]) -> Table:
    table = Table(title="Players")
    table.add_column("SteamID", style="cyan", no_wrap=True)
    table.add_column("Persona", style="white")
    table.add_column("State", style="green")
    table.add_column("Visibility", style="magenta")
    table.add_column("Country", style="dim")
    for player in players:
        table.add_row(
            player.steamid,
            player.personaname,
            player.personastate.name.lower(),
            player.communityvisibilitystate.name.lower(),
            player.loccountrycode or "",
        )
    return table


def build_app_panel(details: AppData) -> Panel:
    """Panel con lo esencial de `AppData`."""

    title = Text(f"{details.name} ({details.steam_appid})", style="bold yellow")
    body = Text()
    body.append(details.short_description.strip() + "\n\n")
    body.append(f"Type: {details.type}\n")
    body.append(f"Required age: {details.required_age}\n")
    if details.is_free:
        body.append("Price: free\n", style="green")
    elif details.price_overview is not None:
        body.append(f"Price: {details.price_overview.final_formatted}\n")
    if details.developers:
        body.append(f"Developers: {', '.join(details.developers)}\n")
    if details.publishers:
        body.append(f"Publishers: {', '.join(details.publishers)}\n")
    if details.genres:
        body.append(f"Genres: {', '.join(genre.description for genre in details.genres)}\n")
    platforms = [
        name
        for name, supported in (
            ("windows", details.platforms.windows),
            ("mac", details.platforms.mac),
            ("linux", details.platforms.linux),
        )
        if supported
    ]
    body.append(f"Platforms: {', '.join(platforms) or '-'}\n")
    body.append(f"Release: {details.release_date.date}", style="dim")

    return Panel(body, title=title, border_style="yellow")
