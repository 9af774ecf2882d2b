from typing import Annotated, Any, Optional

import pytest
from pydantic import ValidationError

from core.mapping import (
    LENIENT,
    JsonRecord,
    KeyMissingError,
    LenientInt,
    MalformedPayloadError,
    TypeMismatchError,
    UnsupportedShapeError,
    Using,
    json_field,
)


class Tag(JsonRecord):
    id: int = json_field("id")
    label: str = json_field("label")


class Item(JsonRecord):
    item_id: int = json_field("itemid")
    title: str | None = json_field("title", default=None)
    count: LenientInt = json_field("count")
    price: float | None = json_field("price", default=None)
    tags: tuple[Tag, ...] = json_field("tags")
    main_tag: Tag | None = json_field("main_tag", default=None)

    # Not mapped: never read from JSON.
    note: str = "untouched"


def explode(value):
    raise AssertionError("inner converter must not run for absent/null values")


class Guarded(JsonRecord):
    value: Annotated[int, Using(explode)] | None = json_field("value", default=None)


class Derived(JsonRecord):
    code: str = json_field("code")
    code_length: int = 0

    @classmethod
    def post_convert(cls, payload: dict[str, Any], values: dict[str, Any]) -> None:
        values["code_length"] = len(values["code"])


def item_payload(**overrides):
    payload = {
        "itemid": 7,
        "title": "Widget",
        "count": 3,
        "price": 9.5,
        "tags": [{"id": 1, "label": "a"}, {"id": 2, "label": "b"}],
        "main_tag": {"id": 1, "label": "a"},
    }
    payload.update(overrides)
    return payload


def test_required_and_optional_fields_are_populated():
    item = Item.from_json(item_payload())

    assert item.item_id == 7
    assert item.title == "Widget"
    assert item.count == 3
    assert item.price == 9.5
    assert [tag.label for tag in item.tags] == ["a", "b"]
    assert item.main_tag == Tag(id=1, label="a")


def test_optional_fields_absent_or_null_become_none():
    payload = item_payload(title=None)
    del payload["price"]
    del payload["main_tag"]

    item = Item.from_json(payload)

    assert item.title is None
    assert item.price is None
    assert item.main_tag is None


def test_optional_field_never_invokes_inner_converter_when_absent_or_null():
    assert Guarded.from_json({}).value is None
    assert Guarded.from_json({"value": None}).value is None


def test_optional_field_present_uses_inner_converter():
    with pytest.raises(AssertionError):
        Guarded.from_json({"value": 1})


def test_missing_required_key_fails_fast():
    payload = item_payload()
    del payload["count"]

    with pytest.raises(KeyMissingError) as excinfo:
        Item.from_json(payload)

    assert excinfo.value.path == ("count",)


def test_required_field_with_null_is_a_type_mismatch():
    with pytest.raises(TypeMismatchError):
        Item.from_json(item_payload(itemid=None))


def test_lenient_field_accepts_number_and_string_encodings():
    assert Item.from_json(item_payload(count=0)).count == Item.from_json(item_payload(count="0")).count == 0


def test_nested_error_path_points_at_failing_value():
    payload = item_payload(tags=[{"id": 1, "label": "a"}, {"id": "x", "label": "b"}])

    with pytest.raises(TypeMismatchError) as excinfo:
        Item.from_json(payload)

    assert excinfo.value.path == ("tags", 1, "id")
    assert "$.tags[1].id" in str(excinfo.value)


def test_empty_array_is_an_empty_sequence_not_absent():
    assert Item.from_json(item_payload(tags=[])).tags == ()


def test_unmapped_fields_keep_defaults_even_if_key_present():
    item = Item.from_json(item_payload(note="from json"))
    assert item.note == "untouched"


def test_unknown_json_keys_are_ignored():
    item = Item.from_json(item_payload(extra={"nested": True}))
    assert not hasattr(item, "extra")


def test_record_root_must_be_an_object():
    with pytest.raises(TypeMismatchError):
        Item.from_json([item_payload()])


def test_post_convert_fills_unmapped_fields():
    assert Derived.from_json({"code": "abcd"}).code_length == 4


def test_records_are_immutable():
    item = Item.from_json(item_payload())
    with pytest.raises(ValidationError):
        item.title = "changed"


def test_construction_is_deterministic():
    assert Item.from_json(item_payload()) == Item.from_json(item_payload())


def test_to_json_round_trip():
    payload = item_payload(count="3")
    del payload["price"]
    item = Item.from_json(payload)

    dumped = item.to_json()

    assert dumped["count"] == 3
    assert "price" not in dumped
    assert "note" not in dumped
    assert Item.from_json(dumped) == item


def test_from_json_text_reports_malformed_bodies():
    assert Tag.from_json_text('{"id": 1, "label": "x"}') == Tag(id=1, label="x")
    with pytest.raises(MalformedPayloadError):
        Tag.from_json_text("<html>busy</html>")


def test_lenient_marker_wrapping_an_optional_applies_to_the_inner_type():
    class Wrapped(JsonRecord):
        value: Annotated[Optional[int], LENIENT] = json_field("value", default=None)

    assert Wrapped.field_descriptors()[0].optional is True
    assert Wrapped.from_json({"value": "12"}).value == 12
    assert Wrapped.from_json({"value": None}).value is None
    assert Wrapped.from_json({}).value is None


def test_text_constructor_returns_the_concrete_record_type():
    tag = Tag.from_json_text('{"id": 3, "label": "c"}')

    assert type(tag) is Tag
    assert tag.label == "c"


def test_descriptors_follow_declaration_order():
    assert [d.key for d in Item.field_descriptors()] == ["itemid", "title", "count", "price", "tags", "main_tag"]
    assert [d.optional for d in Item.field_descriptors()] == [False, True, False, True, False, True]


def test_unsupported_field_type_fails_at_class_definition():
    with pytest.raises(UnsupportedShapeError):

        class Bad(JsonRecord):
            payload: dict[str, int] = json_field("payload")


def test_duplicate_external_key_fails_at_class_definition():
    with pytest.raises(UnsupportedShapeError):

        class Twice(JsonRecord):
            first: int = json_field("value")
            second: int = json_field("value")


def test_unmapped_field_without_default_fails_at_class_definition():
    with pytest.raises(UnsupportedShapeError):

        class NoDefault(JsonRecord):
            mapped: int = json_field("mapped")
            orphan: int


def test_field_name_shadowing_another_fields_key_fails_at_class_definition():
    with pytest.raises(UnsupportedShapeError):

        class Crossed(JsonRecord):
            first: int = json_field("second")
            second: int = json_field("third")
