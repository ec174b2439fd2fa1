from __future__ import annotations

import json
from pathlib import Path

import pytest

from formcraft import cli
from formcraft.settings import Settings


@pytest.fixture(autouse=True)
def _quiet_settings(mocker, tmp_path: Path) -> Settings:
    settings = Settings(log_json=False, log_level="WARNING", exports_dir=str(tmp_path / "exports"))
    mocker.patch("formcraft.cli.get_settings", return_value=settings)
    mocker.patch("formcraft.cli.configure_logging")
    return settings


def _write_json(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def _generate_aba(tmp_path: Path) -> Path:
    schema_path = tmp_path / "aba.json"
    assert cli.main(["generate", "--template", "aba-assessment", "--output", str(schema_path)]) == cli.EXIT_OK
    return schema_path


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_generate_requires_a_source() -> None:
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["generate", "--output", "form.json"])


def test_main_without_command_prints_help(capsys) -> None:
    assert cli.main([]) == cli.EXIT_OK
    assert "usage" in capsys.readouterr().out.lower()


def test_templates_lists_matches(capsys) -> None:
    assert cli.main(["templates", "--search", "hipaa"]) == cli.EXIT_OK

    lines = capsys.readouterr().out.splitlines()
    assert lines == ["hipaa-consent\tHIPAA Consent Form\tLegal & Compliance"]


def test_generate_from_description_writes_schema(tmp_path: Path) -> None:
    output = tmp_path / "nested" / "form.json"

    assert cli.main(["generate", "--description", "autism screening", "--output", str(output)]) == cli.EXIT_OK

    assert json.loads(output.read_text(encoding="utf-8"))["title"] == "Autism Screening Questionnaire"


def test_generate_with_unknown_template_fails(tmp_path: Path) -> None:
    result = cli.main(["generate", "--template", "missing", "--output", str(tmp_path / "form.json")])

    assert result == cli.EXIT_ERROR


def test_validate_reports_first_error_and_exit_code(tmp_path: Path, capsys) -> None:
    schema_path = _generate_aba(tmp_path)
    data_path = _write_json(tmp_path / "data.json", {"diagnosis": "Other (please specify)", "email": "bad"})

    result = cli.main(["validate", "--schema", str(schema_path), "--data", str(data_path)])

    payload = json.loads(capsys.readouterr().out)
    assert result == cli.EXIT_INVALID
    assert payload["valid"] is False
    assert payload["focus"] == "client-name"
    assert payload["visibility"]["diagnosis-other"] is True
    errors = {error["field_id"]: error["message"] for error in payload["errors"]}
    assert errors["email"] == "Please enter a valid email address"
    assert "diagnosis-other" in errors


def test_export_writes_record_for_valid_data(tmp_path: Path, _quiet_settings: Settings) -> None:
    schema_path = _write_json(
        tmp_path / "schema.json",
        {"title": "Contact Form", "fields": [{"id": "email", "type": "email", "label": "Email", "required": True}]},
    )
    data_path = _write_json(tmp_path / "data.json", {"email": "a@b.co"})

    result = cli.main(["export", "--schema", str(schema_path), "--data", str(data_path)])

    written = Path(_quiet_settings.exports_dir) / "contact-form-submission.json"
    assert result == cli.EXIT_OK
    assert json.loads(written.read_text(encoding="utf-8"))["responses"] == {"email": "a@b.co"}


def test_export_rejects_invalid_data(tmp_path: Path) -> None:
    schema_path = _generate_aba(tmp_path)
    data_path = _write_json(tmp_path / "data.json", {})
    output_dir = tmp_path / "out"

    result = cli.main(
        ["export", "--schema", str(schema_path), "--data", str(data_path), "--output-dir", str(output_dir)],
    )

    assert result == cli.EXIT_INVALID
    assert not output_dir.exists()


def test_review_prints_answered_rows(tmp_path: Path, capsys) -> None:
    schema_path = _generate_aba(tmp_path)
    data_path = _write_json(tmp_path / "data.json", {"client-name": "Sam", "consent": True, "behaviors": []})

    assert cli.main(["review", "--schema", str(schema_path), "--data", str(data_path)]) == cli.EXIT_OK

    assert capsys.readouterr().out.splitlines() == [
        "Client Name: Sam",
        "Behaviors of Concern: No response",
        "I consent to the assessment and potential treatment: Yes",
    ]


def test_review_writes_html(tmp_path: Path) -> None:
    schema_path = _generate_aba(tmp_path)
    data_path = _write_json(tmp_path / "data.json", {"client-name": "Sam"})
    html_path = tmp_path / "print" / "review.html"

    result = cli.main(
        ["review", "--schema", str(schema_path), "--data", str(data_path), "--html", str(html_path)],
    )

    assert result == cli.EXIT_OK
    assert "Sam" in html_path.read_text(encoding="utf-8")


def test_missing_schema_file_is_an_error(tmp_path: Path) -> None:
    data_path = _write_json(tmp_path / "data.json", {})

    result = cli.main(["validate", "--schema", str(tmp_path / "none.json"), "--data", str(data_path)])

    assert result == cli.EXIT_ERROR


def test_undecodable_data_file_is_an_error(tmp_path: Path) -> None:
    schema_path = _generate_aba(tmp_path)
    data_path = tmp_path / "data.json"
    data_path.write_bytes(b'{"client-name": "\xff"}')

    result = cli.main(["validate", "--schema", str(schema_path), "--data", str(data_path)])

    assert result == cli.EXIT_ERROR
