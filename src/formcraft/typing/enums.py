"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


class FieldKind(_EnumMixin):
    """Supported form field kinds, by their JSON `type` name."""

    TEXT = "text"
    TEXTAREA = "textarea"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"
    DATE = "date"
    SELECT = "select"
    RADIO = "radio"
    CHECKBOX = "checkbox"
    TOGGLE = "toggle"
    SIGNATURE = "signature"
    FILE = "file"

    @property
    def has_options(self) -> bool:
        """Return whether the kind renders a list of choices."""
        return self in {FieldKind.SELECT, FieldKind.RADIO, FieldKind.CHECKBOX}


class ConditionOperator(_EnumMixin):
    """Operators understood by conditional visibility rules."""

    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    CONTAINS = "contains"
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class ValidationErrorKind(_EnumMixin):
    """Per-field validation failures."""

    REQUIRED = "required"
    INVALID_EMAIL = "invalid_email"
    INVALID_PHONE = "invalid_phone"


class SessionState(_EnumMixin):
    """Lifecycle of one form filling session."""

    EDITING = "editing"
    INVALID = "invalid"
    SUBMITTED = "submitted"
