"""Field value variants keyed by field kind."""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from formcraft.typing.enums import FieldKind

if TYPE_CHECKING:
    from formcraft.typing.models.schema import FormField

_DECIMAL_LITERAL = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INFINITY_LITERAL = re.compile(r"^[+-]?Infinity$")


class TextValue(BaseModel):
    """Free text, date, email, phone or single selection."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: Literal["text"] = "text"
    text: str

    def is_empty(self) -> bool:
        """Return whether the value counts as unanswered."""
        return self.text == ""


class NumberValue(BaseModel):
    """Number stored as entered; compared numerically on demand."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: Literal["number"] = "number"
    raw: str | int | float

    def is_empty(self) -> bool:
        """Return whether the value counts as unanswered."""
        return self.raw == ""

    def as_number(self) -> float:
        """Return the numeric reading of the raw value (NaN when unparseable)."""
        return parse_number(self.raw)


class ChoicesValue(BaseModel):
    """Multi-choice selections in the order they were checked."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: Literal["choices"] = "choices"
    items: list[str]

    def is_empty(self) -> bool:
        """Return whether the value counts as unanswered."""
        return not self.items


class ToggleValue(BaseModel):
    """Boolean switch. An unchecked toggle is still an answer."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: Literal["toggle"] = "toggle"
    checked: bool

    def is_empty(self) -> bool:
        """Return whether the value counts as unanswered."""
        return False


class BlobValue(BaseModel):
    """Opaque reference to an uploaded file or captured signature."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    tag: Literal["blob"] = "blob"
    reference: str

    def is_empty(self) -> bool:
        """Return whether the value counts as unanswered."""
        return self.reference == ""


FieldValue = Annotated[
    TextValue | NumberValue | ChoicesValue | ToggleValue | BlobValue,
    Field(discriminator="tag"),
]

_TEXT_KINDS = frozenset(
    {
        FieldKind.TEXT,
        FieldKind.TEXTAREA,
        FieldKind.EMAIL,
        FieldKind.PHONE,
        FieldKind.DATE,
        FieldKind.SELECT,
        FieldKind.RADIO,
    },
)


def stringify_value(raw: object) -> str:
    """Render a raw form value as text the way a browser `String()` does.

    Args:
        raw (object): Raw form value.

    Returns:
        str: Text rendering used for string comparisons.
    """
    if raw is None:
        return "null"
    if isinstance(raw, bool):
        return "true" if raw else "false"
    if isinstance(raw, float):
        if math.isnan(raw):
            return "NaN"
        if math.isinf(raw):
            return "Infinity" if raw > 0 else "-Infinity"
        if raw.is_integer():
            return str(int(raw))
        return repr(raw)
    if isinstance(raw, str):
        return raw
    if isinstance(raw, Sequence):
        return ",".join("" if item is None else stringify_value(item) for item in raw)
    return str(raw)


def parse_number(raw: object) -> float:
    """Read a raw form value as a number the way a browser `Number()` does.

    Blank strings and `None` read as zero, booleans as one/zero, a single-item
    sequence reads as its item. Anything else that is not a decimal literal
    reads as NaN.

    Args:
        raw (object): Raw form value.

    Returns:
        float: Parsed number or NaN.
    """
    if raw is None:
        return 0.0
    if isinstance(raw, bool):
        return 1.0 if raw else 0.0
    if isinstance(raw, int | float):
        return float(raw)
    if isinstance(raw, str):
        stripped = raw.strip()
        if not stripped:
            return 0.0
        if _DECIMAL_LITERAL.match(stripped):
            return float(stripped)
        if _INFINITY_LITERAL.match(stripped):
            return -math.inf if stripped.startswith("-") else math.inf
        return math.nan
    if isinstance(raw, Sequence):
        if not raw:
            return 0.0
        if len(raw) == 1:
            return parse_number(raw[0])
    return math.nan


def field_value(form_field: FormField, form_data: Mapping[str, object]) -> FieldValue | None:
    """Return the typed value of `form_field` in `form_data`.

    Args:
        form_field (FormField): Field definition.
        form_data (Mapping[str, object]): Current raw form data.

    Returns:
        FieldValue | None: Typed value, or None when the field is untouched or null.
    """
    raw = form_data.get(form_field.id)
    if raw is None:
        return None

    kind = form_field.kind
    if kind in _TEXT_KINDS:
        return TextValue(text=stringify_value(raw))
    if kind == FieldKind.NUMBER:
        if isinstance(raw, str | int | float) and not isinstance(raw, bool):
            return NumberValue(raw=raw)
        return NumberValue(raw=stringify_value(raw))
    if kind == FieldKind.CHECKBOX:
        if isinstance(raw, Sequence) and not isinstance(raw, str):
            return ChoicesValue(items=[stringify_value(item) for item in raw])
        return ChoicesValue(items=[stringify_value(raw)] if raw != "" else [])
    if kind == FieldKind.TOGGLE:
        return ToggleValue(checked=bool(raw))
    return BlobValue(reference=stringify_value(raw))
