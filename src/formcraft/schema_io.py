"""Form schema JSON import/export and file helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, cast

from pydantic import ValidationError

from formcraft import logger
from formcraft.evaluation.dependencies import find_conditional_cycles, find_dangling_references
from formcraft.exceptions import SchemaImportError
from formcraft.settings import get_settings
from formcraft.typing.models import FormSchema

_REQUIRED_FIELD_KEYS = ("id", "type", "label")


def import_schema(text: str | bytes, *, reject_cycles: bool | None = None) -> FormSchema:
    """Parse a JSON form definition.

    Args:
        text (str | bytes): JSON document.
        reject_cycles (bool | None): Reject cyclic conditional rules; defaults to settings.

    Raises:
        SchemaImportError: If the document is not valid JSON.

    Returns:
        FormSchema: Imported schema.
    """
    try:
        payload = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaImportError(message="Invalid JSON format: Could not parse the file") from exc
    return import_schema_payload(payload, reject_cycles=reject_cycles)


def import_schema_payload(payload: object, *, reject_cycles: bool | None = None) -> FormSchema:
    """Build a schema from an already-decoded JSON payload.

    Nothing is applied unless the whole payload is valid.

    Args:
        payload (object): Decoded JSON value.
        reject_cycles (bool | None): Reject cyclic conditional rules; defaults to settings.

    Raises:
        SchemaImportError: If the payload is not a well-formed form definition.

    Returns:
        FormSchema: Imported schema.
    """
    if not isinstance(payload, dict):
        raise SchemaImportError(message="Invalid JSON format: File does not contain a valid JSON object")

    payload_obj = cast("dict[str, object]", payload)
    title = payload_obj.get("title")
    raw_fields = payload_obj.get("fields")
    if not isinstance(title, str) or not isinstance(raw_fields, list):
        raise SchemaImportError(
            message="Invalid JSON format: File must contain a title string and fields array",
        )

    fields = cast("list[object]", raw_fields)
    if not all(_has_required_keys(raw_field) for raw_field in fields):
        raise SchemaImportError(
            message="Invalid JSON format: Some fields are missing required properties (id, type, or label)",
        )

    normalized = [_normalize_field(cast("dict[str, object]", raw_field)) for raw_field in fields]
    try:
        schema = FormSchema.model_validate({"title": title, "fields": normalized})
    except ValidationError as exc:
        raise SchemaImportError(message=f"Invalid form definition: {_describe_validation_error(exc)}") from exc

    _check_conditional_references(schema, reject_cycles=reject_cycles)
    _warn_fields_without_choices(schema)
    logger.info("Schema imported", extra={"title": schema.title, "fields": len(schema.fields)})
    return schema


def export_schema_payload(schema: FormSchema) -> dict[str, Any]:
    """Serialize a schema to the JSON import format.

    Optional keys are omitted when unset; `conditionalLogic` is always written.

    Args:
        schema (FormSchema): Schema to export.

    Returns:
        dict[str, Any]: JSON-compatible payload.
    """
    fields: list[dict[str, Any]] = []
    for form_field in schema.fields:
        dumped = form_field.model_dump(mode="json", by_alias=True, exclude_none=True)
        dumped["conditionalLogic"] = (
            form_field.conditional_rule.model_dump(mode="json", by_alias=True)
            if form_field.conditional_rule is not None
            else None
        )
        fields.append(dumped)
    return {"title": schema.title, "fields": fields}


def export_schema(schema: FormSchema) -> str:
    """Serialize a schema to JSON text.

    Args:
        schema (FormSchema): Schema to export.

    Returns:
        str: Indented JSON document.
    """
    return json.dumps(export_schema_payload(schema), indent=2, ensure_ascii=False)


def load_schema_file(path: Path) -> FormSchema:
    """Load a schema from a JSON file.

    Args:
        path (Path): Schema file path.

    Returns:
        FormSchema: Imported schema.
    """
    _validate_json_file_path(path, must_exist=True)
    return import_schema(path.read_bytes())


def save_schema_file(schema: FormSchema, path: Path) -> Path:
    """Write a schema to a JSON file.

    Args:
        schema (FormSchema): Schema to persist.
        path (Path): Target file path.

    Returns:
        Path: Written file path.
    """
    _validate_json_file_path(path, must_exist=False)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(export_schema(schema), encoding="utf-8")
    logger.info("Schema exported", extra={"schema_path": str(path)})
    return path


def load_form_data_file(path: Path) -> dict[str, object]:
    """Load saved form data (field id to value) from a JSON file.

    Args:
        path (Path): Form data file path.

    Raises:
        SchemaImportError: If the file does not hold a JSON object.

    Returns:
        dict[str, object]: Form data.
    """
    _validate_json_file_path(path, must_exist=True)
    try:
        payload = json.loads(path.read_bytes())
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise SchemaImportError(message=f"Form data is not valid JSON: {path}") from exc
    if not isinstance(payload, dict):
        raise SchemaImportError(message=f"Form data must be a JSON object: {path}")
    return cast("dict[str, object]", payload)


def _has_required_keys(raw_field: object) -> bool:
    if not isinstance(raw_field, dict):
        return False
    raw = cast("dict[str, object]", raw_field)
    return all(isinstance(raw.get(key), str) for key in _REQUIRED_FIELD_KEYS)


def _normalize_field(raw_field: dict[str, object]) -> dict[str, object]:
    normalized = dict(raw_field)
    normalized["conditionalLogic"] = raw_field.get("conditionalLogic") or None
    return normalized


def _describe_validation_error(exc: ValidationError) -> str:
    """Flatten pydantic errors into one readable line.

    Args:
        exc (ValidationError): Validation failure.

    Returns:
        str: Semicolon-separated `location: message` pairs.
    """
    parts: list[str] = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = str(error.get("msg", "invalid value"))
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def _check_conditional_references(schema: FormSchema, *, reject_cycles: bool | None) -> None:
    """Log dangling references and cyclic rules, rejecting cycles when asked.

    Args:
        schema (FormSchema): Imported schema.
        reject_cycles (bool | None): Explicit policy, or None to use settings.

    Raises:
        SchemaImportError: If cycles exist and the policy rejects them.
    """
    dangling = find_dangling_references(schema)
    if dangling:
        logger.warning(
            "Conditional rules reference unknown fields; these fields will never be shown",
            extra={"field_ids": dangling},
        )

    cycles = find_conditional_cycles(schema)
    if not cycles:
        return
    logger.warning("Conditional rules form a cycle", extra={"cycles": cycles})
    if reject_cycles is None:
        reject_cycles = get_settings().reject_conditional_cycles
    if reject_cycles:
        rendered = "; ".join(" -> ".join([*cycle, cycle[0]]) for cycle in cycles)
        raise SchemaImportError(message=f"Conditional rules form a cycle: {rendered}")


def _warn_fields_without_choices(schema: FormSchema) -> None:
    empty = [
        form_field.id for form_field in schema.fields if form_field.kind.has_options and not form_field.choices
    ]
    if empty:
        logger.warning("Choice fields have no options", extra={"field_ids": empty})


def _validate_json_file_path(path: Path, *, must_exist: bool) -> None:
    """Validate a JSON file path before reading or writing.

    Args:
        path (Path): File path.
        must_exist (bool): Whether the file must already exist.

    Raises:
        SchemaImportError: If path is not a `pathlib.Path`, not a `.json` file, or missing.
    """
    if not isinstance(path, Path):
        raise SchemaImportError(message=f"Path must be a pathlib.Path instance, got: {type(path)!r}")
    if path.suffix != ".json":
        raise SchemaImportError(message=f"Path must end with '.json': {path}")
    if must_exist and not path.is_file():
        raise SchemaImportError(message=f"Path is not a file: {path}")
