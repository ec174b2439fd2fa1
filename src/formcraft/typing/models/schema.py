"""Schema-centric domain models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from formcraft.typing.enums import FieldKind
from formcraft.typing.models.values import stringify_value


class ConditionalRule(BaseModel):
    """Visibility predicate over another field's current value.

    `operator` stays a raw string: unknown operators are legal and evaluate
    to visible.
    """

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    depends_on: str = Field(alias="fieldId")
    operator: str
    comparand: str = Field(alias="value")

    @field_validator("comparand", mode="before")
    @classmethod
    def _stringify_scalar_comparand(cls, value: object) -> object:
        if isinstance(value, bool | int | float):
            return stringify_value(value)
        return value


class FormField(BaseModel):
    """Single form field definition."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str
    kind: FieldKind = Field(alias="type")
    label: str
    placeholder: str | None = None
    required: bool = False
    options: list[str] | None = None
    rows: int | None = None
    conditional_rule: ConditionalRule | None = Field(default=None, alias="conditionalLogic")

    @property
    def choices(self) -> list[str]:
        """Return display options, empty for kinds without choices."""
        if not self.kind.has_options:
            return []
        return list(self.options or [])


class FormSchema(BaseModel):
    """Ordered, immutable form definition."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    title: str
    fields: tuple[FormField, ...]

    @model_validator(mode="after")
    def _check_unique_field_ids(self) -> FormSchema:
        seen: set[str] = set()
        duplicates: list[str] = []
        for form_field in self.fields:
            if form_field.id in seen and form_field.id not in duplicates:
                duplicates.append(form_field.id)
            seen.add(form_field.id)
        if duplicates:
            raise ValueError(f"Duplicate field ids: {', '.join(duplicates)}")
        return self

    def field_ids(self) -> list[str]:
        """Return field ids in display order."""
        return [form_field.id for form_field in self.fields]

    def get_field(self, field_id: str) -> FormField | None:
        """Return the field with `field_id`, if any."""
        for form_field in self.fields:
            if form_field.id == field_id:
                return form_field
        return None


class FormTemplate(BaseModel):
    """Catalog entry that materializes into a schema."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str
    title: str
    category: str
    description: str
    fields: tuple[FormField, ...]

    def to_schema(self) -> FormSchema:
        """Build the form schema for this template.

        Returns:
            FormSchema: Schema with the template title and fields.
        """
        return FormSchema(title=self.title, fields=self.fields)
