from __future__ import annotations

import math

import pytest

from formcraft.typing.enums import FieldKind
from formcraft.typing.models import (
    BlobValue,
    ChoicesValue,
    FormField,
    NumberValue,
    TextValue,
    ToggleValue,
    field_value,
    parse_number,
    stringify_value,
)


def _field(kind: FieldKind) -> FormField:
    return FormField(id="f", kind=kind, label="F")


@pytest.mark.parametrize(
    ("kind", "raw", "expected"),
    [
        (FieldKind.TEXT, "hi", TextValue(text="hi")),
        (FieldKind.SELECT, "ADHD", TextValue(text="ADHD")),
        (FieldKind.NUMBER, "42", NumberValue(raw="42")),
        (FieldKind.NUMBER, 4.5, NumberValue(raw=4.5)),
        (FieldKind.CHECKBOX, ["a", "b"], ChoicesValue(items=["a", "b"])),
        (FieldKind.CHECKBOX, "a", ChoicesValue(items=["a"])),
        (FieldKind.TOGGLE, False, ToggleValue(checked=False)),
        (FieldKind.FILE, "upload://1", BlobValue(reference="upload://1")),
        (FieldKind.SIGNATURE, "sig-1", BlobValue(reference="sig-1")),
    ],
)
def test_field_value_variant_follows_kind(kind: FieldKind, raw: object, expected: object) -> None:
    assert field_value(_field(kind), {"f": raw}) == expected


@pytest.mark.parametrize("form_data", [{}, {"f": None}])
def test_field_value_is_none_when_untouched_or_null(form_data: dict[str, object]) -> None:
    assert field_value(_field(FieldKind.TEXT), form_data) is None


def test_emptiness_per_variant() -> None:
    assert TextValue(text="").is_empty()
    assert NumberValue(raw="").is_empty()
    assert not NumberValue(raw=0).is_empty()
    assert ChoicesValue(items=[]).is_empty()
    assert not ToggleValue(checked=False).is_empty()
    assert BlobValue(reference="").is_empty()


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", 12.0),
        (" 3.5 ", 3.5),
        ("", 0.0),
        (None, 0.0),
        (True, 1.0),
        ("1e3", 1000.0),
        (["7"], 7.0),
        ("-Infinity", -math.inf),
    ],
)
def test_parse_number(raw: object, expected: float) -> None:
    assert parse_number(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "1_000", "12px", ["1", "2"], {"a": 1}])
def test_parse_number_is_nan_for_non_numeric(raw: object) -> None:
    assert math.isnan(parse_number(raw))


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, "null"),
        (False, "false"),
        (3.0, "3"),
        (2.5, "2.5"),
        (7, "7"),
        (["a", "b"], "a,b"),
        ([], ""),
    ],
)
def test_stringify_value(raw: object, expected: str) -> None:
    assert stringify_value(raw) == expected


def test_number_value_as_number() -> None:
    assert NumberValue(raw="8").as_number() == 8.0
    assert math.isnan(NumberValue(raw="eight").as_number())
