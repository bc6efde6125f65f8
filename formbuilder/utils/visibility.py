"""Conditional visibility rules.

A field with a visibility condition is shown only while the field it
depends on holds the expected value. The "value" of a field is its label,
which is what the builder's preview compares against.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable, Optional, Sequence

if TYPE_CHECKING:
    from formbuilder.models.field import Field

logger = logging.getLogger(__name__)

__all__ = [
    "current_value",
    "find_cycle",
    "should_show",
    "visible_fields",
]


def current_value(field_id: str, all_fields: Iterable["Field"]) -> str:
    """Return the current value of a field, or "" if no such field exists."""
    for candidate in all_fields:
        if candidate.id == field_id:
            return candidate.label or ""
    return ""


def should_show(field: "Field", all_fields: Sequence["Field"]) -> bool:
    """Check whether a field should be rendered.

    Args:
        field: Field to check
        all_fields: Every field of the form, used to look up the dependency

    Returns:
        True if the field has no condition or its dependency holds the
        expected value. A condition pointing at a field that no longer
        exists compares against "".
    """
    condition = field.condition
    if not condition.is_set:
        return True

    dependent_id = condition.dependent_field
    if not any(candidate.id == dependent_id for candidate in all_fields):
        logger.debug(
            "Field %s depends on missing field %s; treating its value as empty",
            field.id,
            dependent_id,
        )

    return current_value(dependent_id, all_fields) == condition.dependent_value


def visible_fields(all_fields: Sequence["Field"]) -> list["Field"]:
    """Return the fields that should be rendered, in form order."""
    return [field for field in all_fields if should_show(field, all_fields)]


def find_cycle(
    all_fields: Iterable["Field"],
    field_id: str,
    dependent_id: Optional[str],
) -> Optional[list[str]]:
    """Detect whether making ``field_id`` depend on ``dependent_id`` closes a cycle.

    Follows the chain of conditions starting at ``dependent_id`` using the
    current conditions of ``all_fields`` (with ``field_id`` already pointing
    at ``dependent_id``).

    Returns:
        The ids forming the cycle, starting and ending with ``field_id``,
        or None if the chain terminates.
    """
    if dependent_id is None:
        return None

    depends_on = {
        field.id: field.condition.dependent_field for field in all_fields
    }
    depends_on[field_id] = dependent_id

    path = [field_id]
    seen = {field_id}
    current: Optional[str] = dependent_id
    while current is not None:
        path.append(current)
        if current == field_id:
            return path
        if current in seen:
            # A pre-existing loop that does not pass through field_id
            return path
        seen.add(current)
        current = depends_on.get(current)

    return None
