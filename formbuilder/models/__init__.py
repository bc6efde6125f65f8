"""UI-agnostic schema model for the form builder.

This package holds the field schema types and the store that owns them.
Nothing here renders anything or prompts the user, so the whole model can
be tested without a front end.
"""

from formbuilder.models.option import Option
from formbuilder.models.validation_spec import ValidationSpec
from formbuilder.models.condition import VisibilityCondition
from formbuilder.models.field import Field, new_field_id
from formbuilder.models.store import FieldSchemaStore

__all__ = [
    "Field",
    "FieldSchemaStore",
    "Option",
    "ValidationSpec",
    "VisibilityCondition",
    "new_field_id",
]
