from __future__ import annotations

from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from formcraft.typing.enums import FieldKind, ValidationErrorKind
from formcraft.typing.models import (
    ConditionalRule,
    FormField,
    FormSchema,
    SubmissionRecord,
    ValidationReport,
)


def test_form_schema_rejects_duplicate_field_ids() -> None:
    with pytest.raises(ValidationError, match="Duplicate field ids: a"):
        FormSchema(
            title="Dup",
            fields=[
                FormField(id="a", kind=FieldKind.TEXT, label="A"),
                FormField(id="a", kind=FieldKind.NUMBER, label="A again"),
            ],
        )


def test_form_field_accepts_wire_aliases() -> None:
    field = FormField.model_validate(
        {
            "id": "age",
            "type": "number",
            "label": "Age",
            "conditionalLogic": {"fieldId": "adult", "operator": "equals", "value": 18},
        },
    )

    assert field.kind == FieldKind.NUMBER
    assert field.conditional_rule == ConditionalRule(depends_on="adult", operator="equals", comparand="18")


def test_form_field_rejects_unknown_type() -> None:
    with pytest.raises(ValidationError):
        FormField.model_validate({"id": "x", "type": "slider", "label": "X"})


def test_form_field_is_immutable() -> None:
    field = FormField(id="x", kind=FieldKind.TEXT, label="X")

    with pytest.raises(ValidationError):
        field.label = "Y"  # type: ignore[misc]


def test_schema_lookup_helpers() -> None:
    schema = FormSchema(
        title="T",
        fields=[FormField(id="a", kind=FieldKind.TEXT, label="A"), FormField(id="b", kind=FieldKind.DATE, label="B")],
    )

    assert schema.field_ids() == ["a", "b"]
    assert schema.get_field("b") is schema.fields[1]
    assert schema.get_field("zzz") is None


def test_validation_report_focus_and_validity() -> None:
    report = ValidationReport(
        errors={"b": ValidationErrorKind.REQUIRED, "a": ValidationErrorKind.INVALID_PHONE},
    )

    assert report.valid is False
    assert report.focus_field_id == "b"
    assert ValidationReport().valid is True


def test_submission_record_serializes_with_wire_keys() -> None:
    record = SubmissionRecord(
        form_title="Intake",
        submitted_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC),
        responses={"name": "Ada"},
    )

    assert record.model_dump(mode="json", by_alias=True) == {
        "formTitle": "Intake",
        "submittedAt": "2026-01-02T03:04:05.000Z",
        "responses": {"name": "Ada"},
    }


def test_choices_only_for_option_kinds() -> None:
    radio = FormField(id="r", kind=FieldKind.RADIO, label="R", options=["Yes", "No"])
    text = FormField(id="t", kind=FieldKind.TEXT, label="T", options=["ignored"])

    assert radio.choices == ["Yes", "No"]
    assert text.choices == []


@pytest.mark.parametrize(("raw", "expected"), [(5.0, "5"), (2.5, "2.5"), (True, "true"), ("Yes", "Yes")])
def test_rule_comparand_uses_browser_string_form(raw: object, expected: str) -> None:
    rule = ConditionalRule.model_validate({"fieldId": "age", "operator": "equals", "value": raw})

    assert rule.comparand == expected


def test_schema_fields_cannot_be_mutated_in_place() -> None:
    schema = FormSchema(title="T", fields=[FormField(id="a", kind=FieldKind.TEXT, label="A")])

    assert isinstance(schema.fields, tuple)
    with pytest.raises(AttributeError):
        schema.fields.append(FormField(id="a", kind=FieldKind.TEXT, label="Dup"))  # type: ignore[attr-defined]
