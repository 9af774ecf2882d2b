"""Errores del motor de mapeo JSON -> registros.

Por qué una jerarquía propia:
- El llamador distingue "el payload no tiene la forma esperada"
  (`MappingError`) de "el registro está mal declarado" (`UnsupportedShapeError`).
- Cada error guarda el `path` (claves/índices) hasta el valor que falló, lo
  que facilita depurar respuestas grandes como `appdetails`.
"""

from __future__ import annotations


class MappingError(ValueError):
    """Base de los errores de forma de datos (se propagan al llamador)."""

    def __init__(self, message: str, *, path: tuple[str | int, ...] = ()) -> None:
        super().__init__(message)
        self.message = message
        self.path = path

    def prefixed(self, segment: str | int) -> "MappingError":
        """Antepone un segmento al path y devuelve el mismo error."""

        self.path = (segment, *self.path)
        return self

    def location(self) -> str:
        if not self.path:
            return "$"
        parts = ["$"]
        for segment in self.path:
            parts.append(f"[{segment}]" if isinstance(segment, int) else f".{segment}")
        return "".join(parts)

    def __str__(self) -> str:
        return f"{self.message} (at {self.location()})"


class KeyMissingError(MappingError):
    """Una clave requerida no está en el objeto JSON."""


class TypeMismatchError(MappingError):
    """El tipo JSON no coincide con el tipo destino (tras aplicar leniencia)."""


class MalformedPayloadError(MappingError):
    """El cuerpo de la respuesta no es JSON válido."""


class UnsupportedShapeError(TypeError):
    """Un registro declara un campo que el motor no sabe convertir.

    Se lanza al definir (o resolver por primera vez) la clase, nunca a mitad
    de una deserialización.
    """
