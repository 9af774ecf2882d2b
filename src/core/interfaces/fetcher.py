"""Contrato del colaborador HTTP.

Por qué Protocol:
- Los adaptadores de endpoints solo necesitan "GET y devuélveme el cuerpo".
- Permite sustituir httpx por un stub en tests sin herencia.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable


@runtime_checkable
class TextFetcher(Protocol):
    """Contrato mínimo para pedir una URL y obtener el cuerpo como texto.

    Reglas de diseño:
    - Síncrono: una llamada, una respuesta.
    - Errores de red/estado HTTP se propagan tal cual (sin reintentos).
    """

    def get_text(self, url: str, params: Mapping[str, str] | None = None) -> str:
        """Hace GET a `url` con `params` como query string y devuelve el cuerpo."""

        ...
