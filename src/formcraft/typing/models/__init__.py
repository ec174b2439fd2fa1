"""Core domain model exports."""

from formcraft.typing.models.schema import ConditionalRule, FormField, FormSchema, FormTemplate
from formcraft.typing.models.submission import ReviewRow, SubmissionRecord, ValidationReport
from formcraft.typing.models.values import (
    BlobValue,
    ChoicesValue,
    FieldValue,
    NumberValue,
    TextValue,
    ToggleValue,
    field_value,
    parse_number,
    stringify_value,
)

__all__ = [
    "BlobValue",
    "ChoicesValue",
    "ConditionalRule",
    "FieldValue",
    "FormField",
    "FormSchema",
    "FormTemplate",
    "NumberValue",
    "ReviewRow",
    "SubmissionRecord",
    "TextValue",
    "ToggleValue",
    "ValidationReport",
    "field_value",
    "parse_number",
    "stringify_value",
]
