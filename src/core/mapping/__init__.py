"""Mapeo JSON -> registros tipados.

Por qué un paquete en el Core:
- Es la única pieza con lógica real: conversión de valores, política de
  campos opcionales/requeridos y envelopes de respuesta.
- No conoce HTTP; recibe JSON ya decodificado (o texto) y devuelve registros.
"""

from core.mapping.converters import (
    LENIENT,
    JsonObject,
    JsonValue,
    LenientFloat,
    LenientInt,
    LenientStr,
    Using,
    converter_for,
)
from core.mapping.envelopes import convert_list, first_entry, unwrap_keyed_envelope, unwrap_list
from core.mapping.errors import (
    KeyMissingError,
    MalformedPayloadError,
    MappingError,
    TypeMismatchError,
    UnsupportedShapeError,
)
from core.mapping.records import FieldDescriptor, JsonRecord, json_field, parse_json

__all__ = [
    "LENIENT",
    "FieldDescriptor",
    "JsonObject",
    "JsonRecord",
    "JsonValue",
    "KeyMissingError",
    "LenientFloat",
    "LenientInt",
    "LenientStr",
    "MalformedPayloadError",
    "MappingError",
    "TypeMismatchError",
    "UnsupportedShapeError",
    "Using",
    "convert_list",
    "converter_for",
    "first_entry",
    "json_field",
    "parse_json",
    "unwrap_keyed_envelope",
    "unwrap_list",
]
