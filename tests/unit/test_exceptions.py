from formcraft.exceptions import (
    GenerationError,
    PackageError,
    SchemaImportError,
    SessionStateError,
    SettingsError,
    TemplateNotFoundError,
    UnknownFieldError,
)


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(SchemaImportError, PackageError)
    assert issubclass(TemplateNotFoundError, PackageError)
    assert issubclass(GenerationError, PackageError)
    assert issubclass(SessionStateError, PackageError)
    assert issubclass(UnknownFieldError, PackageError)


def test_unknown_field_error_is_a_key_error() -> None:
    error = UnknownFieldError("ghost")

    assert isinstance(error, KeyError)
    assert error.field_id == "ghost"
    assert str(error) == "Unknown field id 'ghost'"


def test_messages_are_user_facing() -> None:
    assert str(SchemaImportError(message="Invalid JSON format")) == "Invalid JSON format"
    assert str(SessionStateError(state="submitted", action="edit a value")) == (
        "Cannot edit a value while session is 'submitted'"
    )
    assert str(SettingsError()) == "Failed to load settings"
