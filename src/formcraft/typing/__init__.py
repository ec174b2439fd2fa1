"""Typing-centric domain modules."""

from formcraft.typing.enums import ConditionOperator, FieldKind, SessionState, ValidationErrorKind
from formcraft.typing.models import (
    ConditionalRule,
    FieldValue,
    FormField,
    FormSchema,
    FormTemplate,
    ReviewRow,
    SubmissionRecord,
    ValidationReport,
)
from formcraft.typing.protocol import SchemaSource

__all__ = [
    "ConditionOperator",
    "ConditionalRule",
    "FieldKind",
    "FieldValue",
    "FormField",
    "FormSchema",
    "FormTemplate",
    "ReviewRow",
    "SchemaSource",
    "SessionState",
    "SubmissionRecord",
    "ValidationErrorKind",
    "ValidationReport",
]
