"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass
class SchemaImportError(PackageError):
    """Raised when a form schema payload cannot be imported.

    The message is user-facing: it is shown as-is next to the import control.
    """

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class TemplateNotFoundError(PackageError):
    """Raised when a catalog template id is unknown."""

    template_id: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Unknown form template '{self.template_id}'"


@dataclass(frozen=True)
class GenerationError(PackageError):
    """Raised when a form cannot be generated from a description."""

    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return self.message


@dataclass(frozen=True)
class SessionStateError(PackageError):
    """Raised when a session action is not allowed in the current state."""

    state: str
    action: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Cannot {self.action} while session is '{self.state}'"


class UnknownFieldError(PackageError, KeyError):
    """Raised when a field id does not exist in the session schema."""

    def __init__(self, field_id: str) -> None:
        super().__init__(field_id)
        self.field_id = field_id

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Unknown field id '{self.field_id}'"
