"""Form builder core.

Assemble a form out of typed fields, attach validation rules and
conditional visibility to them, check submitted values and persist the
schema as JSON.

Usage:
    python -m formbuilder add text
    python -m formbuilder list
    python -m formbuilder validate answers.json
"""

from formbuilder.constants import FieldType, ValidationType
from formbuilder.models import (
    Field,
    FieldSchemaStore,
    Option,
    ValidationSpec,
    VisibilityCondition,
)
from formbuilder.session import BuilderSession
from formbuilder.utils.codec import deserialize, serialize
from formbuilder.utils.validation import evaluate, validate_submission
from formbuilder.utils.visibility import should_show

__version__ = "1.0.0"

__all__ = [
    "BuilderSession",
    "Field",
    "FieldSchemaStore",
    "FieldType",
    "Option",
    "ValidationSpec",
    "ValidationType",
    "VisibilityCondition",
    "deserialize",
    "evaluate",
    "serialize",
    "should_show",
    "validate_submission",
]
