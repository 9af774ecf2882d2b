"""Motor de conversión de campos (JSON -> tipo destino).

Por qué un motor separado de los registros:
- Resuelve cada tipo destino a una función `Converter` una sola vez, al
  definir la clase del registro; la deserialización solo aplica funciones.
- Un tipo sin regla de conversión falla al importar el módulo que lo declara
  (`UnsupportedShapeError`), no en mitad de una llamada a la API.

Tipos soportados:
- `bool`, `int`, `float`, `str`
- subclases de `IntEnum`
- registros anidados (cualquier clase con `from_json`)
- `list[T]` y `tuple[T, ...]`
- `T | None` (wrapper opcional)
- `Annotated[T, LENIENT]`: números que la API a veces envía como string
- `Annotated[T, Using(fn)]`: conversor explícito para casos puntuales
"""

from __future__ import annotations

import types
from dataclasses import dataclass
from enum import IntEnum
from functools import lru_cache
from typing import Annotated, Any, Callable, Union, get_args, get_origin

from core.mapping.errors import MappingError, TypeMismatchError, UnsupportedShapeError

JsonValue = Union[None, bool, int, float, str, list["JsonValue"], dict[str, "JsonValue"]]
JsonObject = dict[str, JsonValue]
Converter = Callable[[JsonValue], Any]


class _Lenient:
    """Marcador de leniencia numérica para `Annotated`."""

    def __repr__(self) -> str:
        return "LENIENT"


LENIENT = _Lenient()

LenientInt = Annotated[int, LENIENT]
LenientFloat = Annotated[float, LENIENT]
LenientStr = Annotated[str, LENIENT]


@dataclass(frozen=True)
class Using:
    """Marcador `Annotated` que fija el conversor de un campo."""

    converter: Converter


def json_kind(value: object) -> str:
    """Nombre del tipo JSON de un valor ya decodificado."""

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "bool"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def _mismatch(expected: str, value: object) -> TypeMismatchError:
    return TypeMismatchError(f"expected {expected}, got {json_kind(value)}")


def to_bool(value: JsonValue) -> bool:
    if isinstance(value, bool):
        return value
    raise _mismatch("bool", value)


def to_int(value: JsonValue) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise _mismatch("integer", value)


def to_float(value: JsonValue) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    raise _mismatch("number", value)


def to_str(value: JsonValue) -> str:
    if isinstance(value, str):
        return value
    raise _mismatch("string", value)


def lenient_int(value: JsonValue) -> int:
    """Entero codificado como número JSON o como string ("0", " 42")."""

    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise TypeMismatchError(f"expected integer string, got {value!r}") from None
    return to_int(value)


def lenient_float(value: JsonValue) -> float:
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            raise TypeMismatchError(f"expected numeric string, got {value!r}") from None
    return to_float(value)


def lenient_str(value: JsonValue) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return to_str(value)


def enum_of(enum_type: type[IntEnum], read_int: Converter = to_int) -> Converter:
    def convert(value: JsonValue) -> IntEnum:
        raw = read_int(value)
        try:
            return enum_type(raw)
        except ValueError:
            raise TypeMismatchError(f"{raw} is not a valid {enum_type.__name__}") from None

    return convert


def record_of(record_type: type) -> Converter:
    def convert(value: JsonValue) -> Any:
        return record_type.from_json(value)

    return convert


def array_of(item: Converter, container: type = list) -> Converter:
    """Convierte cada elemento en orden; el primer fallo aborta todo el array."""

    def convert(value: JsonValue) -> Any:
        if not isinstance(value, list):
            raise _mismatch("array", value)
        items = []
        for index, element in enumerate(value):
            try:
                items.append(item(element))
            except MappingError as exc:
                exc.prefixed(index)
                raise
        return container(items)

    return convert


def optional(inner: Converter) -> Converter:
    """JSON null -> None sin invocar nunca a `inner`."""

    def convert(value: JsonValue) -> Any:
        if value is None:
            return None
        return inner(value)

    return convert


_SCALARS: dict[type, tuple[Converter, Converter]] = {
    bool: (to_bool, to_bool),
    int: (to_int, lenient_int),
    float: (to_float, lenient_float),
    str: (to_str, lenient_str),
}


def split_optional(annotation: Any) -> tuple[Any, bool]:
    """Devuelve `(T, True)` para `T | None`, o `(annotation, False)`."""

    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1 and len(members) != len(get_args(annotation)):
            return members[0], True
    return annotation, False


@lru_cache(maxsize=None)
def converter_for(annotation: Any) -> Converter:
    """Resuelve un tipo destino a su conversor.

    Raises:
        UnsupportedShapeError: si el tipo no tiene regla de conversión.
    """

    inner, is_optional = split_optional(annotation)
    if is_optional:
        return optional(converter_for(inner))

    origin = get_origin(annotation)

    if origin is Annotated:
        base, *extras = get_args(annotation)
        for extra in extras:
            if isinstance(extra, Using):
                return extra.converter
        if any(extra is LENIENT for extra in extras):
            return _lenient_converter(base)
        return converter_for(base)

    if origin is Union or origin is types.UnionType:
        raise UnsupportedShapeError(f"unions other than `T | None` are not supported: {annotation!r}")

    if origin is list:
        (item,) = get_args(annotation) or (None,)
        if item is None:
            raise UnsupportedShapeError("bare `list` needs an item type")
        return array_of(converter_for(item), list)

    if origin is tuple:
        args = get_args(annotation)
        if len(args) != 2 or args[1] is not Ellipsis:
            raise UnsupportedShapeError(f"only `tuple[T, ...]` is supported: {annotation!r}")
        return array_of(converter_for(args[0]), tuple)

    if origin is None and isinstance(annotation, type):
        if issubclass(annotation, IntEnum):
            return enum_of(annotation)
        if annotation in _SCALARS:
            return _SCALARS[annotation][0]
        if callable(getattr(annotation, "from_json", None)):
            return record_of(annotation)

    raise UnsupportedShapeError(f"no conversion rule for {annotation!r}")


def _lenient_converter(base: Any) -> Converter:
    if isinstance(base, type):
        if issubclass(base, IntEnum):
            return enum_of(base, lenient_int)
        if base in _SCALARS and base is not bool:
            return _SCALARS[base][1]
    raise UnsupportedShapeError(f"numeric leniency does not apply to {base!r}")
