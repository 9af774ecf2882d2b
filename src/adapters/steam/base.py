"""Base común de los adaptadores de endpoints de Steam."""

from __future__ import annotations

from types import TracebackType
from typing import Mapping, TypeVar

from adapters.http_client import HttpxFetcher
from core.config import AppSettings
from core.interfaces.fetcher import TextFetcher
from core.mapping import JsonValue, parse_json

S = TypeVar("S", bound="SteamInterface")


class SteamInterface:
    """Settings + colaborador HTTP + construcción de URLs de la Web API.

    Si no recibe un `fetcher`, crea un `HttpxFetcher` propio y lo cierra en
    `close()` / al salir del `with`. Uno inyectado queda a cargo del llamador.
    """

    def __init__(self, settings: AppSettings | None = None, fetcher: TextFetcher | None = None) -> None:
        self._settings = settings or AppSettings()
        self._owned_fetcher = HttpxFetcher(self._settings) if fetcher is None else None
        self._fetcher: TextFetcher = fetcher or self._owned_fetcher

    def _web_api_url(self, interface: str, method: str, version: int) -> str:
        base = self._settings.api_base_url.rstrip("/")
        return f"{base}/{interface}/{method}/v{version}/"

    def _require_key(self) -> str:
        if not self._settings.api_key:
            raise ValueError("a Steam Web API key is required (set STEAM_WEBAPI_API_KEY)")
        return self._settings.api_key

    def _get_json(self, url: str, params: Mapping[str, str] | None = None) -> JsonValue:
        return parse_json(self._fetcher.get_text(url, params))

    def close(self) -> None:
        if self._owned_fetcher is not None:
            self._owned_fetcher.close()

    def __enter__(self: S) -> S:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
