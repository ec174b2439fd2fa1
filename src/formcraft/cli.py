"""CLI entry point for Formcraft."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from formcraft import __version__, logger
from formcraft.catalog import TemplateCatalog
from formcraft.evaluation import error_message, validate_all
from formcraft.exceptions import PackageError
from formcraft.export import build_review_rows, build_submission_record, render_print_html, write_submission
from formcraft.logging import configure_logging
from formcraft.schema_io import load_form_data_file, load_schema_file, save_schema_file
from formcraft.settings import Settings, get_settings

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID = 2


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="formcraft")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    templates_parser = subparsers.add_parser("templates", help="List built-in form templates")
    templates_parser.add_argument("--search", default="", dest="search")

    generate_parser = subparsers.add_parser("generate", help="Write a form schema from a template or description")
    source = generate_parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--description", default=None, dest="description")
    source.add_argument("--template", default=None, dest="template_id")
    generate_parser.add_argument("--output", required=True, type=Path, dest="output_path")

    validate_parser = subparsers.add_parser("validate", help="Validate form data against a schema")
    validate_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    validate_parser.add_argument("--data", required=True, type=Path, dest="data_path")

    export_parser = subparsers.add_parser("export", help="Validate form data and write the submission record")
    export_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    export_parser.add_argument("--data", required=True, type=Path, dest="data_path")
    export_parser.add_argument("--output-dir", type=Path, default=None, dest="output_dir")

    review_parser = subparsers.add_parser("review", help="Show answered fields of a submission")
    review_parser.add_argument("--schema", required=True, type=Path, dest="schema_path")
    review_parser.add_argument("--data", required=True, type=Path, dest="data_path")
    review_parser.add_argument("--html", type=Path, default=None, dest="html_path")

    return parser


def _run_templates(args: argparse.Namespace) -> int:
    catalog = TemplateCatalog()
    for template in catalog.search(args.search):
        sys.stdout.write(f"{template.id}\t{template.title}\t{template.category}\n")
    return EXIT_OK


def _run_generate(args: argparse.Namespace) -> int:
    catalog = TemplateCatalog()
    if args.template_id:
        schema = catalog.get(args.template_id).to_schema()
    else:
        schema = catalog.generate(args.description)
    save_schema_file(schema, args.output_path)
    return EXIT_OK


def _run_validate(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema_path)
    form_data = load_form_data_file(args.data_path)
    report = validate_all(schema, form_data)
    payload = {
        "valid": report.valid,
        "focus": report.focus_field_id,
        "errors": [
            {"field_id": field_id, "kind": kind.value, "message": error_message(kind, schema.get_field(field_id))}
            for field_id, kind in report.error_list()
        ],
        "visibility": report.visibility,
    }
    sys.stdout.write(json.dumps(payload, indent=2) + "\n")
    return EXIT_OK if report.valid else EXIT_INVALID


def _run_export(args: argparse.Namespace, settings: Settings) -> int:
    schema = load_schema_file(args.schema_path)
    form_data = load_form_data_file(args.data_path)
    report = validate_all(schema, form_data)
    if not report.valid:
        logger.warning(
            "Submission rejected",
            extra={"errors": {field_id: kind.value for field_id, kind in report.error_list()}},
        )
        return EXIT_INVALID
    output_dir = args.output_dir or Path(settings.exports_dir)
    write_submission(build_submission_record(schema, form_data), output_dir)
    return EXIT_OK


def _run_review(args: argparse.Namespace) -> int:
    schema = load_schema_file(args.schema_path)
    form_data = load_form_data_file(args.data_path)
    if args.html_path is not None:
        args.html_path.parent.mkdir(parents=True, exist_ok=True)
        args.html_path.write_text(render_print_html(schema, form_data), encoding="utf-8")
        return EXIT_OK
    for row in build_review_rows(schema, form_data):
        sys.stdout.write(f"{row.label}: {row.display_value}\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments; defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 success, 1 error, 2 invalid submission).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    try:
        match args.command:
            case "templates":
                return _run_templates(args)
            case "generate":
                return _run_generate(args)
            case "validate":
                return _run_validate(args)
            case "export":
                return _run_export(args, settings)
            case _:
                return _run_review(args)
    except PackageError:
        logger.exception("Command failed", extra={"command": args.command})
        return EXIT_ERROR
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
