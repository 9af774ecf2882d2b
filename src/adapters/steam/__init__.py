"""Adaptadores de endpoints de Steam.

Por qué un paquete:
- Un módulo por interfaz de la API (ISteamApps, IPlayerService, ISteamUser,
  Store), todos sobre `SteamInterface`.
- `SteamWebAPI` agrupa los cuatro compartiendo un único cliente HTTP.
"""

from __future__ import annotations

from types import TracebackType

from adapters.http_client import HttpxFetcher
from adapters.steam.base import SteamInterface
from adapters.steam.player_service import PlayerService, build_owned_games_input
from adapters.steam.steam_apps import SteamApps
from adapters.steam.steam_user import MAX_STEAMIDS_PER_CALL, SteamUser, join_steamids
from adapters.steam.store import StoreAPI
from core.config import AppSettings
from core.interfaces.fetcher import TextFetcher


class SteamWebAPI:
    """Fachada con un cliente HTTP compartido por todas las interfaces."""

    def __init__(self, settings: AppSettings | None = None, fetcher: TextFetcher | None = None) -> None:
        self.settings = settings or AppSettings()
        self._owned_fetcher = HttpxFetcher(self.settings) if fetcher is None else None
        shared = fetcher or self._owned_fetcher

        self.apps = SteamApps(self.settings, shared)
        self.player_service = PlayerService(self.settings, shared)
        self.user = SteamUser(self.settings, shared)
        self.store = StoreAPI(self.settings, shared)

    def close(self) -> None:
        if self._owned_fetcher is not None:
            self._owned_fetcher.close()

    def __enter__(self) -> "SteamWebAPI":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


__all__ = [
    "MAX_STEAMIDS_PER_CALL",
    "PlayerService",
    "SteamApps",
    "SteamInterface",
    "SteamUser",
    "SteamWebAPI",
    "StoreAPI",
    "build_owned_games_input",
    "join_steamids",
]
