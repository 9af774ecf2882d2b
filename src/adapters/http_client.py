"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y headers para todos los endpoints.
- Facilita testeo: se puede inyectar un `httpx.Client` con `MockTransport`.

Nota:
- Sin reintentos ni caché: un GET, un cuerpo. Los errores HTTP se propagan
  como `httpx.HTTPStatusError` / `httpx.HTTPError`.
"""

from __future__ import annotations

import logging
from types import TracebackType
from typing import Mapping

import httpx

from core.config import AppSettings

logger = logging.getLogger(__name__)


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que todos los endpoints se comporten igual.
    - `transport` permite tests sin red (`httpx.MockTransport`).
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.Client(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )


class HttpxFetcher:
    """Implementación de `TextFetcher` sobre `httpx.Client`.

    Si no recibe un cliente, crea uno con `build_client` y lo cierra en
    `close()` / al salir del `with`.
    """

    def __init__(self, settings: AppSettings | None = None, client: httpx.Client | None = None) -> None:
        self._settings = settings or AppSettings()
        self._owns_client = client is None
        self._client = client or build_client(self._settings)

    def get_text(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """GET y cuerpo como texto.

        Raises:
            httpx.HTTPError en fallos de conexión, timeouts o status no-2xx.
        """

        logger.debug("GET %s params=%s", url, sorted((params or {}).keys()))
        response = self._client.get(url, params=dict(params or {}))
        logger.debug("GET %s -> HTTP %s (%d bytes)", url, response.status_code, len(response.content))
        response.raise_for_status()
        return response.text

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpxFetcher":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
