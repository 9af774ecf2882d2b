"""Modelos del dominio: Web API (ISteamApps, IPlayerService, ISteamUser).

Por qué `JsonRecord`:
- Cada campo declara su clave JSON con `json_field`; el motor de mapeo hace
  el resto (conversión, opcionales, errores con path).
- Los modelos son inmutables: se construyen una vez por respuesta.

Nota:
- Estos modelos describen *qué* devuelve la API, no *cómo* se pide.
"""

from __future__ import annotations

from enum import IntEnum

from core.mapping import JsonRecord, json_field


class PersonaState(IntEnum):
    """Estado de presencia del usuario (`personastate`)."""

    OFFLINE = 0
    ONLINE = 1
    BUSY = 2
    AWAY = 3
    SNOOZE = 4
    LOOKING_TO_TRADE = 5
    LOOKING_TO_PLAY = 6


class CommunityVisibilityState(IntEnum):
    """Visibilidad del perfil (`communityvisibilitystate`)."""

    PRIVATE = 1
    FRIENDS_ONLY = 2
    PUBLIC = 3


class App(JsonRecord):
    """Una aplicación/juego.

    Por qué un solo modelo:
    - `GetAppList` solo rellena `appid` y `name`; `GetOwnedGames` añade iconos
      y tiempos de juego según los flags pedidos. Todo lo que no es `appid` es
      opcional.
    """

    appid: int = json_field("appid")

    name: str | None = json_field("name", default=None)
    img_icon_url: str | None = json_field("img_icon_url", default=None)
    img_logo_url: str | None = json_field("img_logo_url", default=None)

    playtime_2weeks: int | None = json_field(
        "playtime_2weeks",
        default=None,
        description="Minutos jugados en las últimas dos semanas.",
    )
    playtime_forever: int | None = json_field(
        "playtime_forever",
        default=None,
        description="Minutos jugados en total.",
    )
    playtime_windows_forever: int | None = json_field("playtime_windows_forever", default=None)
    playtime_mac_forever: int | None = json_field("playtime_mac_forever", default=None)
    playtime_linux_forever: int | None = json_field("playtime_linux_forever", default=None)

    rtime_last_played: int | None = json_field(
        "rtime_last_played",
        default=None,
        description="Última vez jugado (unix time).",
    )
    has_community_visible_stats: bool | None = json_field("has_community_visible_stats", default=None)


OwnedGame = App


class Player(JsonRecord):
    """Resumen público (y privado, si es visible) de un usuario de Steam."""

    # Datos públicos
    steamid: str = json_field("steamid", description="SteamID64 como string.")
    personaname: str = json_field("personaname")
    profileurl: str = json_field("profileurl")

    avatar: str = json_field("avatar")
    avatarmedium: str = json_field("avatarmedium")
    avatarfull: str = json_field("avatarfull")

    personastate: PersonaState = json_field("personastate")
    communityvisibilitystate: CommunityVisibilityState = json_field("communityvisibilitystate")

    profilestate: int | None = json_field("profilestate", default=None)
    lastlogoff: int | None = json_field("lastlogoff", default=None)
    commentpermission: int | None = json_field("commentpermission", default=None)

    # Datos privados (solo si el perfil es público)
    realname: str | None = json_field("realname", default=None)
    timecreated: int | None = json_field("timecreated", default=None)
    gameserverip: str | None = json_field("gameserverip", default=None)
    gameextrainfo: str | None = json_field("gameextrainfo", default=None)
    loccountrycode: str | None = json_field("loccountrycode", default=None)
    locstatecode: str | None = json_field("locstatecode", default=None)
    loccityid: int | None = json_field("loccityid", default=None)
    personastateflags: int | None = json_field("personastateflags", default=None)

    primaryclanid: str | None = json_field("primaryclanid", default=None)
    gameid: str | None = json_field("gameid", default=None)
    gameserversteamid: str | None = json_field("gameserversteamid", default=None)
    lobbysteamid: str | None = json_field("lobbysteamid", default=None)

    @property
    def is_public(self) -> bool:
        return self.communityvisibilitystate is CommunityVisibilityState.PUBLIC
