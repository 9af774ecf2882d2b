"""Desenvoltorio de respuestas (envelopes) de la API.

Dos formas:
- Lista: `{"<namespace>": {"<arrayKey>": [...]}}` (Web API).
- Objeto con clave desconocida: `{"<appid>": {"success": bool, "data": {...}}}`
  (Store API). `success=false` no es un error: se devuelve `None`.

Decisión para listas: si un elemento falla, falla toda la llamada (no hay
resultados parciales).
"""

from __future__ import annotations

from typing import TypeVar

from core.mapping.converters import JsonObject, JsonValue, json_kind, to_bool
from core.mapping.errors import KeyMissingError, MappingError, TypeMismatchError
from core.mapping.records import JsonRecord

R = TypeVar("R", bound=JsonRecord)


def _require_object(value: JsonValue, path: tuple[str | int, ...]) -> JsonObject:
    if not isinstance(value, dict):
        raise TypeMismatchError(f"expected object, got {json_kind(value)}", path=path)
    return value


def unwrap_list(
    payload: JsonValue,
    namespace: str,
    array_key: str,
    *,
    required: bool = True,
) -> list[JsonValue]:
    """Devuelve el array interno de un envelope de lista.

    Con `required=False` un array ausente equivale a una lista vacía.
    """

    root = _require_object(payload, ())
    if namespace not in root:
        raise KeyMissingError(f"envelope key {namespace!r} is missing", path=(namespace,))
    inner = _require_object(root[namespace], (namespace,))
    if array_key not in inner:
        if required:
            raise KeyMissingError(f"envelope key {array_key!r} is missing", path=(namespace, array_key))
        return []
    items = inner[array_key]
    if not isinstance(items, list):
        raise TypeMismatchError(f"expected array, got {json_kind(items)}", path=(namespace, array_key))
    return items


def convert_list(record_type: type[R], items: list[JsonValue]) -> tuple[R, ...]:
    """Convierte cada elemento; el primer fallo se propaga con su índice."""

    records: list[R] = []
    for index, item in enumerate(items):
        try:
            records.append(record_type.from_json(item))
        except MappingError as exc:
            exc.prefixed(index)
            raise
    return tuple(records)


def first_entry(mapping: JsonValue) -> tuple[str, JsonValue] | None:
    """Primer par `(clave, valor)` de un objeto; `None` si está vacío."""

    obj = _require_object(mapping, ())
    for key, value in obj.items():
        return key, value
    return None


def unwrap_keyed_envelope(payload: JsonValue) -> tuple[str, JsonValue] | None:
    """Lee `{"<clave>": {"success": ..., "data": ...}}`.

    Returns:
        `(clave, data)` si `success` es true; `None` si es false o si el
        objeto raíz está vacío.
    """

    entry = first_entry(payload)
    if entry is None:
        return None
    key, body = entry
    envelope = _require_object(body, (key,))
    if "success" not in envelope:
        raise KeyMissingError("envelope key 'success' is missing", path=(key, "success"))
    try:
        succeeded = to_bool(envelope["success"])
    except MappingError as exc:
        exc.prefixed("success").prefixed(key)
        raise
    if not succeeded:
        return None
    if "data" not in envelope:
        raise KeyMissingError("envelope key 'data' is missing", path=(key, "data"))
    return key, envelope["data"]
