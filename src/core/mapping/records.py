"""Deserializador de registros (tabla de descriptores + política opcional/requerido).

Por qué sobre Pydantic v2:
- Los registros son modelos inmutables (`frozen=True`) con alias = clave
  externa, igual que el resto de modelos del dominio.
- La tabla de descriptores se construye una vez por clase a partir de
  `model_fields`; la deserialización no valida dos veces, solo aplica los
  conversores del motor y construye con `model_construct`.

Reglas:
- Campo con alias -> mapeado. Sin alias -> no mapeado: nunca se lee del JSON
  y se queda con su default.
- `T | None` -> opcional: clave ausente o null -> `None`, sin error.
- Cualquier otro tipo -> requerido: clave ausente -> `KeyMissingError`.
- `post_convert` permite completar campos no mapeados tras la pasada
  declarativa (payloads que no encajan en un mapeo estático).
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, TypeVar

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict
from pydantic_core import PydanticUndefined

from core.mapping.converters import (
    LENIENT,
    Converter,
    JsonObject,
    JsonValue,
    Using,
    converter_for,
    json_kind,
    split_optional,
)
from core.mapping.errors import (
    KeyMissingError,
    MalformedPayloadError,
    MappingError,
    TypeMismatchError,
    UnsupportedShapeError,
)


R = TypeVar("R", bound="JsonRecord")


@dataclass(frozen=True)
class FieldDescriptor:
    """Un campo mapeado: nombre Python, clave JSON, conversor y opcionalidad."""

    name: str
    key: str
    converter: Converter
    optional: bool


def json_field(key: str, *, default: Any = PydanticUndefined, description: str | None = None) -> Any:
    """Declara un campo mapeado a la clave externa `key`."""

    return Field(default, alias=key, description=description)


def parse_json(text: str | bytes) -> JsonValue:
    try:
        return json.loads(text)
    except ValueError as exc:
        raise MalformedPayloadError(f"response body is not valid JSON: {exc}") from exc


def build_descriptors(record_type: type[BaseModel]) -> tuple[FieldDescriptor, ...]:
    """Construye la tabla de descriptores de un registro.

    Raises:
        UnsupportedShapeError: tipo sin conversor, clave duplicada o campo no
        mapeado sin default.
    """

    descriptors: list[FieldDescriptor] = []
    seen: dict[str, str] = {}
    for name, info in record_type.model_fields.items():
        key = info.alias
        if key is None:
            if info.is_required():
                raise UnsupportedShapeError(
                    f"{record_type.__name__}.{name} is not mapped to a JSON key and has no default"
                )
            continue
        if key in seen:
            raise UnsupportedShapeError(
                f"{record_type.__name__}: key {key!r} is mapped by both {seen[key]!r} and {name!r}"
            )
        seen[key] = name

        inner, is_optional = split_optional(info.annotation)
        # Pydantic separa el `Annotated` de primer nivel en `metadata`; el
        # marcador aplica al tipo interno, no al wrapper opcional.
        for marker in info.metadata:
            if marker is LENIENT or isinstance(marker, Using):
                inner = Annotated[inner, marker]

        try:
            converter = converter_for(inner)
        except UnsupportedShapeError as exc:
            raise UnsupportedShapeError(f"{record_type.__name__}.{name}: {exc}") from exc
        descriptors.append(FieldDescriptor(name=name, key=key, converter=converter, optional=is_optional))

    # `model_construct` busca primero por alias: un nombre no puede ser la clave de otro campo.
    for name in record_type.model_fields:
        owner = seen.get(name)
        if owner is not None and owner != name:
            raise UnsupportedShapeError(
                f"{record_type.__name__}: field {name!r} clashes with the JSON key of {owner!r}"
            )
    return tuple(descriptors)


def deserialize_fields(descriptors: tuple[FieldDescriptor, ...], payload: JsonObject) -> dict[str, Any]:
    """Aplica los descriptores a un objeto JSON, en orden de declaración."""

    values: dict[str, Any] = {}
    for descriptor in descriptors:
        if descriptor.optional:
            raw = payload.get(descriptor.key)
            if raw is None:
                values[descriptor.name] = None
                continue
        else:
            if descriptor.key not in payload:
                raise KeyMissingError(f"required key {descriptor.key!r} is missing", path=(descriptor.key,))
            raw = payload[descriptor.key]
        try:
            values[descriptor.name] = descriptor.converter(raw)
        except MappingError as exc:
            exc.prefixed(descriptor.key)
            raise
    return values


class JsonRecord(BaseModel):
    """Base de todos los registros construidos desde JSON.

    Uso:
        class Category(JsonRecord):
            id: int = json_field("id")
            description: str = json_field("description")

        Category.from_json({"id": 1, "description": "Single-player"})
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    __field_descriptors__: ClassVar[tuple[FieldDescriptor, ...] | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        cls.__field_descriptors__ = build_descriptors(cls) if cls.__pydantic_complete__ else None

    @classmethod
    def field_descriptors(cls) -> tuple[FieldDescriptor, ...]:
        descriptors = cls.__dict__.get("__field_descriptors__")
        if descriptors is None:
            # Referencias adelantadas: se resuelven en el primer uso.
            cls.model_rebuild()
            descriptors = build_descriptors(cls)
            cls.__field_descriptors__ = descriptors
        return descriptors

    @classmethod
    def from_json(cls: type[R], payload: JsonValue) -> R:
        """Construye el registro completo o falla; nunca devuelve uno parcial."""

        if not isinstance(payload, dict):
            raise TypeMismatchError(f"expected object for {cls.__name__}, got {json_kind(payload)}")
        values = deserialize_fields(cls.field_descriptors(), payload)
        cls.post_convert(payload, values)
        return cls.model_construct(_fields_set=set(values), **values)

    @classmethod
    def from_json_text(cls: type[R], text: str | bytes) -> R:
        return cls.from_json(parse_json(text))

    @classmethod
    def post_convert(cls, payload: JsonObject, values: dict[str, Any]) -> None:
        """Hook para campos que no se describen con un mapeo estático."""

    def to_json(self) -> JsonObject:
        """Representación JSON por clave externa (omite opcionales en `None`)."""

        out: JsonObject = {}
        for descriptor in self.field_descriptors():
            value = getattr(self, descriptor.name)
            if value is None and descriptor.optional:
                continue
            out[descriptor.key] = _dump(value)
        return out


def _dump(value: Any) -> JsonValue:
    if isinstance(value, JsonRecord):
        return value.to_json()
    if isinstance(value, (list, tuple)):
        return [_dump(item) for item in value]
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        # IntEnum -> int plano.
        return int(value)
    return value
