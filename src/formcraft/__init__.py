"""Formcraft package."""

from formcraft.exceptions import (
    GenerationError,
    PackageError,
    SchemaImportError,
    SessionStateError,
    SettingsError,
    TemplateNotFoundError,
    UnknownFieldError,
)
from formcraft.logging import configure_logging, get_logger
from formcraft.settings import Settings, get_settings

__version__ = "0.1.0"

# Initialize package logger at import time via `get_logger`.
logger = get_logger("formcraft")

__all__ = [
    "GenerationError",
    "PackageError",
    "SchemaImportError",
    "SessionStateError",
    "Settings",
    "SettingsError",
    "TemplateNotFoundError",
    "UnknownFieldError",
    "__version__",
    "configure_logging",
    "get_logger",
    "get_settings",
    "logger",
]
