"""Submission record, review rendering and printable output."""

from __future__ import annotations

import html
import json
import re
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from formcraft import logger
from formcraft.typing.enums import FieldKind
from formcraft.typing.models import ReviewRow, SubmissionRecord, stringify_value

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

    from formcraft.typing.models import FormField, FormSchema

NO_RESPONSE = "No response"
_WHITESPACE_RUN = re.compile(r"\s+")

_PRINT_TEMPLATE = """<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8">
    <title>{title} - Submission</title>
    <style>
      body {{ font-family: Arial, sans-serif; padding: 20px; }}
      h1 {{ color: #333; }}
      .field {{ margin-bottom: 15px; }}
      .label {{ font-weight: bold; margin-bottom: 5px; }}
      .value {{ padding: 5px 0; }}
      .empty {{ font-style: italic; color: #777; }}
    </style>
  </head>
  <body>
    <h1>{title}</h1>
{rows}
  </body>
</html>
"""

_PRINT_ROW = """    <div class="field" id="{field_id}">
      <div class="label">{label}</div>
      <div class="{value_class}">{value}</div>
    </div>"""


def build_submission_record(
    schema: FormSchema,
    form_data: Mapping[str, object],
    *,
    submitted_at: datetime | None = None,
) -> SubmissionRecord:
    """Build the downloadable record of a submission.

    Args:
        schema (FormSchema): Submitted form schema.
        form_data (Mapping[str, object]): Accepted form data.
        submitted_at (datetime | None): Submission time; defaults to now (UTC).

    Returns:
        SubmissionRecord: Record with title, timestamp and responses.
    """
    return SubmissionRecord(
        form_title=schema.title,
        submitted_at=submitted_at or datetime.now(UTC),
        responses=dict(form_data),
    )


def render_submission_json(record: SubmissionRecord) -> str:
    """Serialize a submission record.

    Args:
        record (SubmissionRecord): Submission record.

    Returns:
        str: JSON document indented by two spaces.
    """
    return json.dumps(record.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False)


def submission_filename(form_title: str) -> str:
    """Return the download file name for a form's submission.

    Args:
        form_title (str): Form title.

    Returns:
        str: `<lower-cased-title-with-dashes>-submission.json`.
    """
    return f"{_WHITESPACE_RUN.sub('-', form_title.lower())}-submission.json"


def write_submission(record: SubmissionRecord, directory: Path) -> Path:
    """Write a submission record under `directory`.

    Args:
        record (SubmissionRecord): Submission record.
        directory (Path): Target directory, created when missing.

    Returns:
        Path: Written file path.
    """
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / submission_filename(record.form_title)
    path.write_text(render_submission_json(record), encoding="utf-8")
    logger.info("Submission exported", extra={"output_path": str(path)})
    return path


def format_display_value(form_field: FormField, value: object) -> str:
    """Format a stored answer for reading.

    Args:
        form_field (FormField): Field definition.
        value (object): Stored raw value.

    Returns:
        str: Display text, `No response` when nothing readable is stored.
    """
    display: str
    match form_field.kind:
        case FieldKind.CHECKBOX if isinstance(value, list | tuple):
            display = ", ".join(stringify_value(item) for item in value)
        case FieldKind.TOGGLE:
            display = "Yes" if value else "No"
        case FieldKind.DATE if value:
            display = _format_date(stringify_value(value))
        case FieldKind.FILE if value:
            display = "File uploaded"
        case FieldKind.SIGNATURE if value:
            display = "Signature captured"
        case _:
            display = "" if value is None else stringify_value(value)
    return display or NO_RESPONSE


def build_review_rows(schema: FormSchema, form_data: Mapping[str, object]) -> list[ReviewRow]:
    """Build review rows for every answered field, in schema order.

    Args:
        schema (FormSchema): Form schema.
        form_data (Mapping[str, object]): Form data.

    Returns:
        list[ReviewRow]: One row per field present in `form_data`.
    """
    rows: list[ReviewRow] = []
    for form_field in schema.fields:
        if form_field.id not in form_data:
            continue
        display = format_display_value(form_field, form_data[form_field.id])
        rows.append(
            ReviewRow(
                field_id=form_field.id,
                label=form_field.label,
                display_value=display,
                answered=display != NO_RESPONSE,
            ),
        )
    return rows


def render_print_html(schema: FormSchema, form_data: Mapping[str, object]) -> str:
    """Render a printable HTML page of a submission.

    Args:
        schema (FormSchema): Form schema.
        form_data (Mapping[str, object]): Form data.

    Returns:
        str: Standalone HTML document.
    """
    rows = [
        _PRINT_ROW.format(
            field_id=html.escape(row.field_id),
            label=html.escape(row.label),
            value_class="value" if row.answered else "value empty",
            value=html.escape(row.display_value),
        )
        for row in build_review_rows(schema, form_data)
    ]
    return _PRINT_TEMPLATE.format(title=html.escape(schema.title), rows="\n".join(rows))


def _format_date(value: str) -> str:
    """Render an ISO date as `MM/DD/YYYY`, leaving other text untouched.

    Args:
        value (str): Stored date text.

    Returns:
        str: Display date.
    """
    try:
        parsed = date.fromisoformat(value[:10])
    except ValueError:
        return value
    return parsed.strftime("%m/%d/%Y")
