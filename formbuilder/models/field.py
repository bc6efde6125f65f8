"""Form field: the atomic element of an assembled form."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any

from formbuilder.constants import FieldType, is_choice_type
from formbuilder.lib.errors import InvalidInput
from formbuilder.models.condition import VisibilityCondition
from formbuilder.models.option import Option
from formbuilder.models.validation_spec import ValidationSpec


def new_field_id() -> str:
    """Generate a field id that stays unique across rapid successive calls."""
    return uuid.uuid4().hex


def parse_field_type(value: Any) -> FieldType:
    """Convert a string to a FieldType, raising InvalidInput if unknown."""
    try:
        return FieldType(value)
    except ValueError:
        valid = ", ".join(t.value for t in FieldType)
        raise InvalidInput(
            f"Invalid field type '{value}'. Must be one of: {valid}",
            parameter="type",
            value=value,
        ) from None


@dataclass
class Field:
    """One element of a form.

    Attributes:
        type: Kind of field (text, textarea, dropdown, checkbox, radio, file)
        id: Unique id within the store
        label: Display text. Visibility conditions on other fields compare
            against this value.
        options: Ordered choices, only populated for choice types
        validation: Rules checked on submission
        condition: Rule deciding whether the field is rendered
    """

    type: FieldType
    id: str = field(default_factory=new_field_id)
    label: str = ""
    options: list[Option] = field(default_factory=list)
    validation: ValidationSpec = field(default_factory=ValidationSpec)
    condition: VisibilityCondition = field(default_factory=VisibilityCondition)

    def __post_init__(self) -> None:
        self.type = parse_field_type(self.type)
        self.id = str(self.id)
        if self.label is None:
            self.label = ""

    @property
    def is_choice(self) -> bool:
        """Whether this field carries options."""
        return is_choice_type(self.type)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "id": self.id,
            "type": self.type.value,
            "label": self.label,
            "options": [option.to_dict() for option in self.options],
            "validation": self.validation.to_dict(),
            "condition": self.condition.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Field":
        """Create from dictionary."""
        label = data.get("label")
        return cls(
            id=data["id"],
            type=data["type"],
            label="" if label is None else str(label),
            options=[Option.from_dict(item) for item in data.get("options") or []],
            validation=ValidationSpec.from_dict(data.get("validation") or {}),
            condition=VisibilityCondition.from_dict(data.get("condition") or {}),
        )

    def __str__(self) -> str:
        label = self.label or "(no label)"
        return f"{self.type.value}:{self.id} {label!r}"
