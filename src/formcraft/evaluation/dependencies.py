"""Inspection of conditional-rule references between fields."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from formcraft.typing.models import FormSchema


def find_dangling_references(schema: FormSchema) -> list[str]:
    """Return ids of fields whose rule points at a field missing from the schema.

    Such fields are never visible.

    Args:
        schema (FormSchema): Form schema.

    Returns:
        list[str]: Offending field ids in schema order.
    """
    known = set(schema.field_ids())
    return [
        form_field.id
        for form_field in schema.fields
        if form_field.conditional_rule is not None and form_field.conditional_rule.depends_on not in known
    ]


def find_conditional_cycles(schema: FormSchema) -> list[list[str]]:
    """Return cycles formed by conditional rules.

    Every field has at most one controlling field, so each cycle is found by
    following the chain from its earliest member. A cycle is listed once,
    starting at that member and in dependency order.

    Args:
        schema (FormSchema): Form schema.

    Returns:
        list[list[str]]: Cycles as lists of field ids.
    """
    order = {field_id: index for index, field_id in enumerate(schema.field_ids())}
    controller = {
        form_field.id: form_field.conditional_rule.depends_on
        for form_field in schema.fields
        if form_field.conditional_rule is not None and form_field.conditional_rule.depends_on in order
    }

    cycles: list[list[str]] = []
    seen: set[str] = set()
    for start in schema.field_ids():
        if start in seen:
            continue
        path: list[str] = []
        position: dict[str, int] = {}
        current: str | None = start
        while current is not None and current not in seen and current not in position:
            position[current] = len(path)
            path.append(current)
            current = controller.get(current)
        if current is not None and current in position:
            cycle = path[position[current] :]
            pivot = min(range(len(cycle)), key=lambda index: order[cycle[index]])
            cycles.append(cycle[pivot:] + cycle[:pivot])
        seen.update(path)
    return cycles
