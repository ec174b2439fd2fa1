"""Conditional visibility resolution."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from formcraft.typing.enums import ConditionOperator
from formcraft.typing.models.values import parse_number, stringify_value

if TYPE_CHECKING:
    from collections.abc import Mapping

    from formcraft.typing.models import ConditionalRule, FormField, FormSchema


def is_visible(form_field: FormField, form_data: Mapping[str, object]) -> bool:
    """Return whether a field is shown for the current form data.

    A field without rule is always shown. A field whose controlling field has
    never been answered is hidden, which also hides fields pointing at a
    nonexistent id. An unknown operator shows the field.

    Args:
        form_field (FormField): Field to resolve.
        form_data (Mapping[str, object]): Snapshot of the current form data.

    Returns:
        bool: True when the field is visible.
    """
    rule = form_field.conditional_rule
    if rule is None:
        return True
    if rule.depends_on not in form_data:
        return False
    return evaluate_rule(rule, form_data[rule.depends_on])


def evaluate_rule(rule: ConditionalRule, dependent_value: object) -> bool:
    """Apply a rule operator to the controlling field's value.

    Args:
        rule (ConditionalRule): Conditional rule.
        dependent_value (object): Current value of `rule.depends_on`.

    Returns:
        bool: Predicate outcome; NaN comparisons are false.
    """
    try:
        operator = ConditionOperator(rule.operator)
    except ValueError:
        return True

    match operator:
        case ConditionOperator.EQUALS:
            return stringify_value(dependent_value) == rule.comparand
        case ConditionOperator.NOT_EQUALS:
            return stringify_value(dependent_value) != rule.comparand
        case ConditionOperator.CONTAINS:
            return rule.comparand in stringify_value(dependent_value)
        case ConditionOperator.GREATER_THAN:
            left, right = parse_number(dependent_value), parse_number(rule.comparand)
            return not (math.isnan(left) or math.isnan(right)) and left > right
        case ConditionOperator.LESS_THAN:
            left, right = parse_number(dependent_value), parse_number(rule.comparand)
            return not (math.isnan(left) or math.isnan(right)) and left < right


def resolve_visibility(schema: FormSchema, form_data: Mapping[str, object]) -> dict[str, bool]:
    """Resolve every field of a schema independently against one snapshot.

    Args:
        schema (FormSchema): Form schema.
        form_data (Mapping[str, object]): Snapshot of the current form data.

    Returns:
        dict[str, bool]: Visibility per field id, in schema order.
    """
    return {form_field.id: is_visible(form_field, form_data) for form_field in schema.fields}
