"""Modelos del dominio: Store API (`/api/appdetails`).

Particularidades de la Store API:
- Varios campos numéricos llegan a veces como string (`required_age`,
  `display_type`, `genres[].id`, `fullgame.appid`): se declaran `LenientInt`.
- `pc_requirements`/`mac_requirements`/`linux_requirements` son objetos, pero
  si están vacíos la API devuelve `[]`. Se resuelven en `post_convert`.
- La respuesta viene envuelta en `{"<appid>": {"success": ..., "data": ...}}`.
"""

from __future__ import annotations

from typing import Any

from core.mapping import (
    JsonObject,
    JsonRecord,
    LenientInt,
    MappingError,
    json_field,
    parse_json,
    unwrap_keyed_envelope,
)


class Fullgame(JsonRecord):
    """Juego base de un DLC/demo."""

    appid: LenientInt = json_field("appid")
    name: str = json_field("name")


class Requirements(JsonRecord):
    minimum: str = json_field("minimum")
    recommended: str | None = json_field("recommended", default=None)


class PriceOverview(JsonRecord):
    """Precio en la moneda de la región consultada (en céntimos)."""

    currency: str = json_field("currency")
    initial: int = json_field("initial")
    final: int = json_field("final")
    discount_percent: int = json_field("discount_percent")
    initial_formatted: str = json_field("initial_formatted")
    final_formatted: str = json_field("final_formatted")


class PackageSub(JsonRecord):
    packageid: int = json_field("packageid")
    percent_savings: int = json_field("percent_savings")
    percent_savings_text: str = json_field("percent_savings_text")
    option_text: str = json_field("option_text")
    option_description: str = json_field("option_description")
    can_get_free_license: str = json_field("can_get_free_license")
    is_free_license: bool = json_field("is_free_license")
    price_in_cents_with_discount: int = json_field("price_in_cents_with_discount")


class PackageGroup(JsonRecord):
    name: str = json_field("name")
    title: str = json_field("title")
    description: str = json_field("description")
    selection_text: str = json_field("selection_text")
    save_text: str = json_field("save_text")
    display_type: LenientInt = json_field("display_type")
    is_recurring_subscription: str = json_field("is_recurring_subscription")
    subs: tuple[PackageSub, ...] = json_field("subs")


class Platforms(JsonRecord):
    windows: bool = json_field("windows")
    mac: bool = json_field("mac")
    linux: bool = json_field("linux")


class Category(JsonRecord):
    id: int = json_field("id")
    description: str = json_field("description")


class Genre(JsonRecord):
    # La API devuelve el id de género como string ("1") en la mayoría de apps.
    id: LenientInt = json_field("id")
    description: str = json_field("description")


class Screenshot(JsonRecord):
    id: int = json_field("id")
    path_thumbnail: str = json_field("path_thumbnail")
    path_full: str = json_field("path_full")


class MovieFormat(JsonRecord):
    p480: str = json_field("480")
    max: str = json_field("max")


class Movie(JsonRecord):
    id: int = json_field("id")
    name: str = json_field("name")
    thumbnail: str = json_field("thumbnail")
    webm: MovieFormat = json_field("webm")
    mp4: MovieFormat = json_field("mp4")
    highlight: bool = json_field("highlight")


class Recommendations(JsonRecord):
    total: int = json_field("total")


class HighlightedAchievement(JsonRecord):
    name: str = json_field("name")
    path: str = json_field("path")


class Achievements(JsonRecord):
    total: int = json_field("total")
    highlighted: tuple[HighlightedAchievement, ...] | None = json_field("highlighted", default=None)


class ReleaseDate(JsonRecord):
    coming_soon: bool = json_field("coming_soon")
    date: str = json_field("date")


class SupportInfo(JsonRecord):
    url: str = json_field("url")
    email: str = json_field("email")


class Metacritic(JsonRecord):
    score: int = json_field("score")
    url: str | None = json_field("url", default=None)


class ContentDescriptors(JsonRecord):
    ids: tuple[int, ...] = json_field("ids")
    notes: str | None = json_field("notes", default=None)


_REQUIREMENT_KEYS: tuple[tuple[str, str], ...] = (
    ("pc_requirements", "pc_requirements"),
    ("mac_requirements", "mac_requirements"),
    ("linux_requirements", "linux_requirements"),
)


class AppData(JsonRecord):
    """Detalles de una aplicación tal como los devuelve `appdetails`."""

    steam_appid: int = json_field("steam_appid")
    is_free: bool = json_field("is_free")

    type: str = json_field("type", description="game, dlc, demo, music, ...")
    name: str = json_field("name")
    required_age: LenientInt = json_field(
        "required_age",
        description="Edad mínima; la API la envía como número o como string.",
    )

    detailed_description: str = json_field("detailed_description")
    short_description: str = json_field("short_description")
    about_the_game: str = json_field("about_the_game")

    fullgame: Fullgame | None = json_field("fullgame", default=None)

    controller_support: str | None = json_field("controller_support", default=None)
    supported_languages: str | None = json_field("supported_languages", default=None)

    website: str | None = json_field("website", default=None)
    reviews: str | None = json_field("reviews", default=None)

    developers: tuple[str, ...] | None = json_field("developers", default=None)
    publishers: tuple[str, ...] = json_field("publishers")

    price_overview: PriceOverview | None = json_field("price_overview", default=None)

    dlc: tuple[int, ...] | None = json_field("dlc", default=None)
    packages: tuple[int, ...] | None = json_field("packages", default=None)
    package_groups: tuple[PackageGroup, ...] = json_field("package_groups")

    platforms: Platforms = json_field("platforms")

    categories: tuple[Category, ...] | None = json_field("categories", default=None)
    genres: tuple[Genre, ...] | None = json_field("genres", default=None)

    movies: tuple[Movie, ...] | None = json_field("movies", default=None)
    screenshots: tuple[Screenshot, ...] | None = json_field("screenshots", default=None)

    recommendations: Recommendations | None = json_field("recommendations", default=None)
    achievements: Achievements | None = json_field("achievements", default=None)

    release_date: ReleaseDate = json_field("release_date")
    support_info: SupportInfo = json_field("support_info")

    legal_notice: str | None = json_field("legal_notice", default=None)
    drm_notice: str | None = json_field("drm_notice", default=None)
    metacritic: Metacritic | None = json_field("metacritic", default=None)

    header_image: str = json_field("header_image")
    background: str = json_field("background")

    content_descriptors: ContentDescriptors = json_field("content_descriptors")

    # No mapeados: objeto o `[]` según la app (ver `post_convert`).
    pc_requirements: Requirements | None = None
    mac_requirements: Requirements | None = None
    linux_requirements: Requirements | None = None

    @classmethod
    def post_convert(cls, payload: JsonObject, values: dict[str, Any]) -> None:
        for name, key in _REQUIREMENT_KEYS:
            raw = payload.get(key)
            if not isinstance(raw, dict):
                continue
            try:
                values[name] = Requirements.from_json(raw)
            except MappingError as exc:
                exc.prefixed(key)
                raise

    def to_json(self) -> JsonObject:
        out = super().to_json()
        for name, key in _REQUIREMENT_KEYS:
            requirements = getattr(self, name)
            out[key] = requirements.to_json() if requirements is not None else []
        return out

    @classmethod
    def from_json_string(cls, text: str | bytes) -> "AppData | None":
        """Construye `AppData` desde el cuerpo crudo de `appdetails`.

        Returns:
            `None` si la respuesta trae `success=false` (o viene vacía).
        """

        entry = unwrap_keyed_envelope(parse_json(text))
        if entry is None:
            return None
        key, data = entry
        try:
            return cls.from_json(data)
        except MappingError as exc:
            exc.prefixed("data").prefixed(key)
            raise
