"""Conditional visibility and validation engine."""

from formcraft.evaluation.dependencies import find_conditional_cycles, find_dangling_references
from formcraft.evaluation.validation import error_message, validate_all, validate_field
from formcraft.evaluation.visibility import evaluate_rule, is_visible, resolve_visibility

__all__ = [
    "error_message",
    "evaluate_rule",
    "find_conditional_cycles",
    "find_dangling_references",
    "is_visible",
    "resolve_visibility",
    "validate_all",
    "validate_field",
]
