"""Interactive form session: change tracking around the evaluation engine."""

from __future__ import annotations

import copy
from typing import TYPE_CHECKING

from formcraft import logger
from formcraft.evaluation import resolve_visibility, validate_all
from formcraft.exceptions import SessionStateError, UnknownFieldError
from formcraft.settings import get_settings
from formcraft.typing.enums import SessionState, ValidationErrorKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from formcraft.typing.models import FormField, FormSchema, ValidationReport


class FormSession:
    """State of one user filling in one form.

    The schema is fixed for the lifetime of the session. Form data is only
    written through `set_value`/`clear_value`/`clear`, and every evaluation
    works on a copy of the data taken at call time.

    State machine: EDITING -> submit -> INVALID (back to EDITING on the next
    edit) or SUBMITTED. SUBMITTED leaves through `edit` (keep answers) or
    `reset` (new response). Whether `reset` empties the data defaults to the
    `CLEAR_DATA_ON_RESET` setting.
    """

    def __init__(
        self,
        schema: FormSchema,
        initial_data: Mapping[str, object] | None = None,
        *,
        clear_data_on_reset: bool | None = None,
    ) -> None:
        if clear_data_on_reset is None:
            clear_data_on_reset = get_settings().clear_data_on_reset
        self._schema = schema
        self._data: dict[str, object] = copy.deepcopy(dict(initial_data or {}))
        self._errors: dict[str, ValidationErrorKind] = {}
        self._state = SessionState.EDITING
        self._submitted_data: dict[str, object] | None = None
        self._clear_data_on_reset = clear_data_on_reset

    @property
    def schema(self) -> FormSchema:
        """Return the session schema."""
        return self._schema

    @property
    def state(self) -> SessionState:
        """Return the current session state."""
        return self._state

    @property
    def data(self) -> dict[str, object]:
        """Return a snapshot of the current form data."""
        return copy.deepcopy(self._data)

    @property
    def errors(self) -> dict[str, ValidationErrorKind]:
        """Return errors of the last submit attempt not yet cleared by an edit."""
        return dict(self._errors)

    @property
    def submitted_data(self) -> dict[str, object] | None:
        """Return the data accepted by the last successful submit."""
        return copy.deepcopy(self._submitted_data) if self._submitted_data is not None else None

    def set_value(self, field_id: str, value: object) -> None:
        """Record user input for a field.

        Args:
            field_id (str): Field id.
            value (object): Raw value as entered.
        """
        self._require_editable("edit a field")
        self._require_field(field_id)
        self._data[field_id] = copy.deepcopy(value)
        self._after_edit(field_id)

    def clear_value(self, field_id: str) -> None:
        """Forget the value of a field, making it untouched again.

        Args:
            field_id (str): Field id.
        """
        self._require_editable("clear a field")
        self._require_field(field_id)
        self._data.pop(field_id, None)
        self._after_edit(field_id)

    def visibility(self) -> dict[str, bool]:
        """Return visibility of every field for the current data."""
        return resolve_visibility(self._schema, self.data)

    def visible_fields(self) -> list[FormField]:
        """Return the fields to render, in display order."""
        visibility = self.visibility()
        return [form_field for form_field in self._schema.fields if visibility[form_field.id]]

    def submit(self) -> ValidationReport:
        """Run the full validation pass and accept the data when valid.

        Raises:
            SessionStateError: If the session was already submitted.

        Returns:
            ValidationReport: Outcome of the pass.
        """
        self._require_editable("submit")
        snapshot = self.data
        report = validate_all(self._schema, snapshot)
        self._errors = dict(report.errors)
        if report.valid:
            self._state = SessionState.SUBMITTED
            self._submitted_data = snapshot
            logger.info("Submission accepted", extra={"title": self._schema.title})
        else:
            self._state = SessionState.INVALID
            logger.info(
                "Submission rejected",
                extra={"title": self._schema.title, "errors": len(report.errors), "focus": report.focus_field_id},
            )
        return report

    def edit(self) -> None:
        """Return a submitted session to editing, keeping the answers."""
        if self._state != SessionState.SUBMITTED:
            raise SessionStateError(state=self._state.value, action="edit responses")
        self._state = SessionState.EDITING

    def reset(self) -> None:
        """Start a new response: back to editing with no errors."""
        self._errors = {}
        self._state = SessionState.EDITING
        if self._clear_data_on_reset:
            self._data = {}
        logger.info("Session reset", extra={"title": self._schema.title, "cleared": self._clear_data_on_reset})

    def clear(self) -> None:
        """Discard all answers and errors from any state."""
        self._data = {}
        self._errors = {}
        self._submitted_data = None
        self._state = SessionState.EDITING

    def _after_edit(self, field_id: str) -> None:
        self._errors.pop(field_id, None)
        if self._state == SessionState.INVALID:
            self._state = SessionState.EDITING

    def _require_editable(self, action: str) -> None:
        if self._state == SessionState.SUBMITTED:
            raise SessionStateError(state=self._state.value, action=action)

    def _require_field(self, field_id: str) -> None:
        if self._schema.get_field(field_id) is None:
            raise UnknownFieldError(field_id)
