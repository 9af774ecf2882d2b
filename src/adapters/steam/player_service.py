"""IPlayerService: juegos de un usuario."""

from __future__ import annotations

import json
import logging
from typing import Iterable

from adapters.steam.base import SteamInterface
from core.domain.models import OwnedGame
from core.mapping import JsonObject, convert_list, unwrap_list

logger = logging.getLogger(__name__)


def build_owned_games_input(
    steamid: int,
    *,
    include_appinfo: bool = False,
    include_played_free_games: bool = False,
    appids_filter: Iterable[int] | None = None,
) -> str:
    """Serializa el parámetro `input_json` (JSON compacto).

    Los flags solo se envían cuando están activos, como espera la API.
    """

    parameters: JsonObject = {"steamid": steamid}
    if include_appinfo:
        parameters["include_appinfo"] = 1
    if include_played_free_games:
        parameters["include_played_free_games"] = 1
    if appids_filter is not None:
        parameters["appids_filter"] = [int(appid) for appid in appids_filter]
    return json.dumps(parameters, separators=(",", ":"))


class PlayerService(SteamInterface):
    def get_owned_games(
        self,
        steamid: int,
        *,
        include_appinfo: bool = False,
        include_played_free_games: bool = False,
        appids_filter: Iterable[int] | None = None,
    ) -> tuple[OwnedGame, ...]:
        """`IPlayerService/GetOwnedGames/v1`.

        Un perfil privado devuelve `{"response": {}}`: el resultado es una
        tupla vacía, no un error.
        """

        params = {
            "key": self._require_key(),
            "format": "json",
            "input_json": build_owned_games_input(
                steamid,
                include_appinfo=include_appinfo,
                include_played_free_games=include_played_free_games,
                appids_filter=appids_filter,
            ),
        }
        payload = self._get_json(self._web_api_url("IPlayerService", "GetOwnedGames", 1), params)
        games = convert_list(OwnedGame, unwrap_list(payload, "response", "games", required=False))

        expected = payload["response"].get("game_count")
        if isinstance(expected, int) and expected != len(games):
            logger.warning("GetOwnedGames: game_count=%d but %d games were returned", expected, len(games))
        return games
