"""Selectable choice attached to a multi-choice field."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass
class Option:
    """One choice of a dropdown, checkbox or radio field.

    Attributes:
        label: Choice text
        sub_label: Secondary annotation shown next to the label
    """

    label: str = ""
    sub_label: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"label": self.label, "subLabel": self.sub_label}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Option":
        """Create from dictionary."""
        return cls(
            label=_as_text(data.get("label")),
            sub_label=_as_text(data.get("subLabel")),
        )

    def __str__(self) -> str:
        if self.sub_label:
            return f"{self.label} - {self.sub_label}"
        return self.label


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)
