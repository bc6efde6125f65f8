"""Validation engine for submitted form values.

Evaluates a field's ValidationSpec against the value a user submitted and
returns the violation messages. Violations are data: nothing in this module
raises because a value is invalid.

Value conventions:
    - text, textarea, dropdown, radio: the submitted string
    - checkbox: the list of selected option labels
    - file: the size of the uploaded file in bytes, or None if no file
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, Sequence

from formbuilder.constants import (
    BYTES_PER_MB,
    DEFAULT_FILE_SIZE_MB,
    EMAIL_PATTERN,
    MSG_DIGITS_AT_LEAST,
    MSG_DIGITS_BETWEEN,
    MSG_FILE_TOO_LARGE,
    MSG_INVALID_EMAIL,
    MSG_INVALID_PHONE,
    MSG_MIN_LENGTH,
    MSG_REQUIRED,
    FieldType,
    ValidationType,
)
from formbuilder.models.field import Field
from formbuilder.models.validation_spec import ValidationSpec
from formbuilder.utils.visibility import should_show

logger = logging.getLogger(__name__)

__all__ = [
    "SubmissionResult",
    "bytes_to_mb",
    "evaluate",
    "file_size_limit",
    "is_empty",
    "validate_submission",
]

_EMAIL_RE = re.compile(EMAIL_PATTERN)


def bytes_to_mb(size_in_bytes: float) -> float:
    """Convert a byte count to megabytes (1 MB = 1024 * 1024 bytes)."""
    return size_in_bytes / BYTES_PER_MB


def file_size_limit(spec: ValidationSpec) -> float:
    """Return the upload limit in MB, falling back to the 5 MB default."""
    return spec.file_size if spec.file_size is not None else DEFAULT_FILE_SIZE_MB


def is_empty(value: Any) -> bool:
    """Check if a submitted value counts as empty."""
    if value is None:
        return True
    if isinstance(value, (str, list, tuple, set, frozenset)):
        return len(value) == 0
    return False


def _check_phone(spec: ValidationSpec, value: str) -> Optional[str]:
    if re.fullmatch(spec.pattern, value) is None:
        return MSG_INVALID_PHONE
    return None


def _check_email(spec: ValidationSpec, value: str) -> Optional[str]:
    if _EMAIL_RE.fullmatch(value) is None:
        return MSG_INVALID_EMAIL
    return None


def _check_digit_count(spec: ValidationSpec, value: str) -> Optional[str]:
    if not spec.pattern or re.fullmatch(spec.pattern, value) is not None:
        return None
    if spec.max_length is None:
        return MSG_DIGITS_AT_LEAST.format(min_length=spec.min_length)
    return MSG_DIGITS_BETWEEN.format(min_length=spec.min_length or 0, max_length=spec.max_length)


def _no_format_check(spec: ValidationSpec, value: str) -> Optional[str]:
    return None


# One entry per ValidationType member. NUMBER is a pass-through.
_FORMAT_CHECKS: dict[ValidationType, Callable[[ValidationSpec, str], Optional[str]]] = {
    ValidationType.NONE: _check_digit_count,
    ValidationType.NUMBER: _no_format_check,
    ValidationType.EMAIL: _check_email,
    ValidationType.PHONE: _check_phone,
}


def _format_limit(limit: float) -> str:
    return f"{limit:g}"


def evaluate(field: Field, submitted_value: Any) -> list[str]:
    """Check a submitted value against a field's validation rules.

    Rules are applied in order and none of them stops the others:
    required, minimum length, value format, file size.

    Args:
        field: Field whose rules apply
        submitted_value: Value as described in the module docstring

    Returns:
        Violation messages in rule order (empty if the value is valid)
    """
    spec = field.validation
    errors: list[str] = []

    if spec.required and is_empty(submitted_value):
        errors.append(MSG_REQUIRED)

    length = _length(submitted_value)
    if spec.min_length and length is not None and length < spec.min_length:
        errors.append(MSG_MIN_LENGTH.format(min_length=spec.min_length))

    if spec.type is not None and isinstance(submitted_value, str) and submitted_value:
        message = _FORMAT_CHECKS[spec.type](spec, submitted_value)
        if message:
            errors.append(message)

    if field.type == FieldType.FILE and _is_size(submitted_value):
        limit = file_size_limit(spec)
        if bytes_to_mb(submitted_value) > limit:
            errors.append(MSG_FILE_TOO_LARGE.format(limit=_format_limit(limit)))

    if errors:
        logger.debug("Field %s failed validation: %s", field.id, errors)
    return errors


def _length(value: Any) -> Optional[int]:
    if value is None:
        return 0
    if isinstance(value, (str, list, tuple)):
        return len(value)
    # File sizes have no length
    return None


def _is_size(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class SubmissionResult:
    """Violations found in one submission, keyed by field id."""

    errors: dict[str, list[str]] = field(default_factory=dict)
    checked: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def messages(self) -> list[str]:
        """Flatten the violations into "<field id>: <message>" lines."""
        return [
            f"{field_id}: {message}"
            for field_id, messages in self.errors.items()
            for message in messages
        ]


def validate_submission(
    fields: Sequence[Field],
    values: Mapping[str, Any],
) -> SubmissionResult:
    """Validate every visible field of a form.

    Hidden fields are skipped. A field missing from ``values`` is checked as
    if it were submitted empty.

    Args:
        fields: All fields of the form, in order
        values: Submitted value per field id

    Returns:
        SubmissionResult with the violations of each failing field
    """
    result = SubmissionResult()

    for field in fields:
        if not should_show(field, fields):
            continue
        result.checked.append(field.id)
        violations = evaluate(field, values.get(field.id))
        if violations:
            result.errors[field.id] = violations

    logger.debug(
        "Validated %d of %d fields, %d with violations",
        len(result.checked),
        len(fields),
        len(result.errors),
    )
    return result
