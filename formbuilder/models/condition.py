"""Visibility condition linking a field to another field's value."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class VisibilityCondition:
    """Show a field only while another field holds a given value.

    Attributes:
        dependent_field: Id of the field this one depends on (None = always shown)
        dependent_value: Value the dependent field must equal
    """

    dependent_field: Optional[str] = None
    dependent_value: str = ""

    def __post_init__(self) -> None:
        # Ids written by older builders were numeric timestamps
        if self.dependent_field is not None:
            ref = str(self.dependent_field)
            object.__setattr__(self, "dependent_field", ref or None)
        if self.dependent_value is None:
            object.__setattr__(self, "dependent_value", "")

    @property
    def is_set(self) -> bool:
        """Whether this condition references another field."""
        return self.dependent_field is not None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "dependentField": self.dependent_field,
            "dependentValue": self.dependent_value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "VisibilityCondition":
        """Create from dictionary."""
        value = data.get("dependentValue")
        return cls(
            dependent_field=data.get("dependentField"),
            dependent_value="" if value is None else str(value),
        )
