"""ISteamUser: resúmenes de perfiles."""

from __future__ import annotations

from typing import Iterable

from adapters.steam.base import SteamInterface
from core.domain.models import Player
from core.mapping import convert_list, unwrap_list

MAX_STEAMIDS_PER_CALL = 100


def join_steamids(steamids: Iterable[int]) -> str:
    """Ordena, elimina duplicados y une con comas: `[5, 3, 5, 1]` -> `"1,3,5"`."""

    return ",".join(str(steamid) for steamid in sorted(set(steamids)))


class SteamUser(SteamInterface):
    def get_player_summaries(self, steamids: Iterable[int]) -> tuple[Player, ...]:
        """`ISteamUser/GetPlayerSummaries/v2` para hasta 100 steamids.

        Raises:
            ValueError: si se piden más de 100 ids (antes de hacer la request).
        """

        ids = list(steamids)
        if len(ids) > MAX_STEAMIDS_PER_CALL:
            raise ValueError(f"GetPlayerSummaries takes up to {MAX_STEAMIDS_PER_CALL} steamids, got {len(ids)}")

        params = {"key": self._require_key(), "steamids": join_steamids(ids)}
        payload = self._get_json(self._web_api_url("ISteamUser", "GetPlayerSummaries", 2), params)
        return convert_list(Player, unwrap_list(payload, "response", "players"))
