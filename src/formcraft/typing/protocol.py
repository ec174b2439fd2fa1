"""Collaborator interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from formcraft.typing.models import FormField, FormSchema


class SchemaSource(Protocol):
    """Producer of form schemas from a free-text request."""

    def generate(self, description: str) -> FormSchema:
        """Materialize a schema for a description.

        Args:
            description: Free-text description of the wanted form.

        Returns:
            FormSchema: Generated schema.
        """

    def suggest_fields(self, form_title: str, existing_fields: list[FormField]) -> list[FormField]:
        """Propose extra fields for an existing form.

        Args:
            form_title: Title of the form being edited.
            existing_fields: Fields already present.

        Returns:
            list[FormField]: Suggested fields with ids unused by `existing_fields`.
        """
