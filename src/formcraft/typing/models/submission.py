"""Validation report and submission record models."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from formcraft.typing.enums import ValidationErrorKind


class ValidationReport(BaseModel):
    """Outcome of one full-form validation pass."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    errors: dict[str, ValidationErrorKind] = Field(default_factory=dict)
    visibility: dict[str, bool] = Field(default_factory=dict)

    @property
    def valid(self) -> bool:
        """Return whether the form can be submitted."""
        return not self.errors

    @property
    def focus_field_id(self) -> str | None:
        """Return the first failing field in schema order."""
        return next(iter(self.errors), None)

    def error_list(self) -> list[tuple[str, ValidationErrorKind]]:
        """Return errors as ordered `(field_id, kind)` pairs."""
        return list(self.errors.items())


class SubmissionRecord(BaseModel):
    """Exportable record of an accepted submission."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    form_title: str = Field(alias="formTitle")
    submitted_at: datetime = Field(alias="submittedAt")
    responses: dict[str, Any]

    @field_serializer("submitted_at")
    def _serialize_submitted_at(self, value: datetime) -> str:
        return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ReviewRow(BaseModel):
    """One answered field as shown on the review screen."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    field_id: str
    label: str
    display_value: str
    answered: bool
