"""Author-side edits of a single field.

Each helper returns a new Field and leaves its argument untouched; the
result is handed to ``FieldSchemaStore.update``, which is the only way a
field in the store changes.

Example:
    >>> field = store.get(field_id)
    >>> store.update(field_id, select_validation_type(field, "phone"))
"""

from __future__ import annotations

import copy
import dataclasses
from typing import Any, Optional

from formbuilder.constants import ValidationType
from formbuilder.lib.errors import InvalidInput
from formbuilder.models.condition import VisibilityCondition
from formbuilder.models.field import Field
from formbuilder.models.option import Option

__all__ = [
    "add_option",
    "clear_condition",
    "remove_option",
    "select_file_type",
    "select_validation_type",
    "set_condition",
    "set_file_size",
    "set_label",
    "set_length_bounds",
    "set_option_label",
    "set_option_sub_label",
    "set_required",
]


def _copy(field: Field, **changes: Any) -> Field:
    return dataclasses.replace(copy.deepcopy(field), **changes)


def _with_validation(field: Field, **changes: Any) -> Field:
    return _copy(field, validation=dataclasses.replace(field.validation, **changes))


def set_label(field: Field, label: str) -> Field:
    return _copy(field, label=label)


# =============================================================================
# Options
# =============================================================================


def _require_choice(field: Field) -> None:
    if not field.is_choice:
        raise InvalidInput(
            f"{field.type.value} fields have no options",
            parameter="type",
            value=field.type.value,
        )


def _check_index(field: Field, index: int) -> None:
    if not 0 <= index < len(field.options):
        raise InvalidInput(
            f"Option index out of range (field has {len(field.options)} options)",
            parameter="index",
            value=index,
        )


def add_option(field: Field, label: str = "", sub_label: str = "") -> Field:
    """Append a new option at the end."""
    _require_choice(field)
    new_field = copy.deepcopy(field)
    new_field.options.append(Option(label=label, sub_label=sub_label))
    return new_field


def remove_option(field: Field, index: int) -> Field:
    """Drop the option at ``index``; the remaining ones keep their order."""
    _require_choice(field)
    _check_index(field, index)
    new_field = copy.deepcopy(field)
    del new_field.options[index]
    return new_field


def set_option_label(field: Field, index: int, label: str) -> Field:
    _require_choice(field)
    _check_index(field, index)
    new_field = copy.deepcopy(field)
    new_field.options[index].label = label
    return new_field


def set_option_sub_label(field: Field, index: int, sub_label: str) -> Field:
    _require_choice(field)
    _check_index(field, index)
    new_field = copy.deepcopy(field)
    new_field.options[index].sub_label = sub_label
    return new_field


# =============================================================================
# Validation
# =============================================================================


def set_required(field: Field, required: bool = True) -> Field:
    return _with_validation(field, required=required)


def set_length_bounds(
    field: Field,
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
) -> Field:
    """Set the min/max length bounds.

    The digit-count pattern of a field without a value format follows the
    new bounds.
    """
    if min_length is not None and max_length is not None and min_length > max_length:
        raise InvalidInput(
            "Minimum length cannot exceed maximum length",
            parameter="min_length",
            value=min_length,
        )
    return _with_validation(field, min_length=min_length, max_length=max_length)


def select_validation_type(field: Field, validation_type: ValidationType | str) -> Field:
    """Select the value format; input type and pattern are derived from it."""
    return _with_validation(field, type=validation_type)


def select_file_type(field: Field, file_type: Optional[str]) -> Field:
    """Select the allowed file category; the accept filter is derived from it."""
    return _with_validation(field, file_type=file_type)


def set_file_size(field: Field, file_size: Optional[float]) -> Field:
    """Set the upload limit in MB (None restores the 5 MB default)."""
    return _with_validation(field, file_size=file_size)


# =============================================================================
# Visibility
# =============================================================================


def set_condition(field: Field, dependent_field: str, dependent_value: str) -> Field:
    """Show ``field`` only while ``dependent_field`` holds ``dependent_value``.

    Whether the referenced field exists, and whether the dependency closes a
    cycle, is checked by the store when the edit is applied.
    """
    return _copy(
        field,
        condition=VisibilityCondition(
            dependent_field=dependent_field, dependent_value=dependent_value
        ),
    )


def clear_condition(field: Field) -> Field:
    return _copy(field, condition=VisibilityCondition())
