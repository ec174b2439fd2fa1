"""Field and form validation."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from formcraft.evaluation.visibility import is_visible
from formcraft.typing.enums import FieldKind, ValidationErrorKind
from formcraft.typing.models import (
    BlobValue,
    ChoicesValue,
    NumberValue,
    TextValue,
    ToggleValue,
    ValidationReport,
    field_value,
)

if TYPE_CHECKING:
    from collections.abc import Mapping

    from formcraft.typing.models import FieldValue, FormField, FormSchema

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PHONE_PATTERN = re.compile(r"^\+?[0-9\s\-()]{8,20}$")

_ERROR_MESSAGES = {
    ValidationErrorKind.REQUIRED: "This field is required",
    ValidationErrorKind.INVALID_EMAIL: "Please enter a valid email address",
    ValidationErrorKind.INVALID_PHONE: "Please enter a valid phone number",
}


def validate_field(
    form_field: FormField,
    form_data: Mapping[str, object],
    is_field_visible: bool,  # noqa: FBT001
) -> ValidationErrorKind | None:
    """Validate one field against the current form data.

    Hidden fields are never in error. Required-ness is checked first; type
    checks only run on a present, non-empty value.

    Args:
        form_field (FormField): Field definition.
        form_data (Mapping[str, object]): Snapshot of the current form data.
        is_field_visible (bool): Visibility resolved for this snapshot.

    Returns:
        ValidationErrorKind | None: The single error for this field, if any.
    """
    if not is_field_visible:
        return None

    value = field_value(form_field, form_data)
    if value is None or value.is_empty():
        return ValidationErrorKind.REQUIRED if form_field.required else None

    return _check_value(form_field.kind, value)


def _check_value(kind: FieldKind, value: FieldValue) -> ValidationErrorKind | None:
    match value:
        case TextValue(text=text) if kind == FieldKind.EMAIL:
            return None if EMAIL_PATTERN.fullmatch(text) else ValidationErrorKind.INVALID_EMAIL
        case TextValue(text=text) if kind == FieldKind.PHONE:
            return None if PHONE_PATTERN.fullmatch(text) else ValidationErrorKind.INVALID_PHONE
        case TextValue() | NumberValue() | ChoicesValue() | ToggleValue() | BlobValue():
            return None


def validate_all(schema: FormSchema, form_data: Mapping[str, object]) -> ValidationReport:
    """Run the full-form validation pass that gates submission.

    Args:
        schema (FormSchema): Form schema.
        form_data (Mapping[str, object]): Snapshot of the current form data.

    Returns:
        ValidationReport: Errors in schema order and per-field visibility.
    """
    errors: dict[str, ValidationErrorKind] = {}
    visibility: dict[str, bool] = {}
    for form_field in schema.fields:
        visible = is_visible(form_field, form_data)
        visibility[form_field.id] = visible
        error = validate_field(form_field, form_data, visible)
        if error is not None:
            errors[form_field.id] = error
    return ValidationReport(errors=errors, visibility=visibility)


def error_message(kind: ValidationErrorKind, form_field: FormField | None = None) -> str:
    """Return the user-facing text for a validation error.

    Args:
        kind (ValidationErrorKind): Error kind.
        form_field (FormField | None): Failing field, used to word multi-choice errors.

    Returns:
        str: Message displayed under the field.
    """
    if kind == ValidationErrorKind.REQUIRED and form_field is not None and form_field.kind == FieldKind.CHECKBOX:
        return "Please select at least one option"
    return _ERROR_MESSAGES[kind]
