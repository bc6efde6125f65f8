"""Shared constants for the form builder.

Centralizes field type names, derivation tables and user-facing messages
used across the model, the validation engine and the session.
"""

from __future__ import annotations

from enum import Enum


class FieldType(str, Enum):
    """Kinds of field an author can add to a form."""

    TEXT = "text"
    TEXTAREA = "textarea"
    DROPDOWN = "dropdown"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    FILE = "file"


# Field types that carry a list of options
CHOICE_TYPES = frozenset({FieldType.DROPDOWN, FieldType.CHECKBOX, FieldType.RADIO})

# Field types where length and validation type settings apply
TEXT_TYPES = frozenset({FieldType.TEXT, FieldType.TEXTAREA})


class ValidationType(str, Enum):
    """Value format a text field is checked against."""

    NONE = "none"
    NUMBER = "number"
    EMAIL = "email"
    PHONE = "phone"


# Ten digits, first one of 6/7/8/9
PHONE_PATTERN = r"^[6789]\d{9}$"

# HTML living standard grammar for <input type="email">
EMAIL_PATTERN = (
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)

# File category token -> MIME filter
FILE_ACCEPT_TYPES: dict[str, str] = {
    "pdf": "application/pdf",
    "jpg": "image/jpg",
    "jpeg": "image/jpeg",
    "png": "image/png",
}

DEFAULT_FILE_SIZE_MB = 5
BYTES_PER_MB = 1024 * 1024

# Fixed key the schema is stored under
DEFAULT_SCHEMA_KEY = "formConfig"


class NotifyKind(str, Enum):
    """Kinds of notification passed to the notify capability."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"
    WARNING = "warning"


# =============================================================================
# Messages
# =============================================================================

MSG_REQUIRED = "This field is required."
MSG_MIN_LENGTH = "Minimum length is {min_length}."
MSG_INVALID_PHONE = "Please enter a valid 10-digit phone number."
MSG_INVALID_EMAIL = "Please enter a valid email address."
MSG_DIGITS_BETWEEN = "Please enter between {min_length} and {max_length} digits."
MSG_DIGITS_AT_LEAST = "Please enter at least {min_length} digits."
MSG_FILE_TOO_LARGE = "File size exceeds the {limit} MB limit."

PROMPT_REMOVE_FIELD = "Do you want to remove this field?"
MSG_FIELD_REMOVED = "Field removed successfully!"
MSG_FORM_SAVED = "Form configuration saved successfully!"
MSG_FORM_LOADED = "Form configuration loaded successfully!"
MSG_NO_SAVED_FORM = "No saved form configuration found."
MSG_FORM_SUBMITTED = "Form submitted successfully!"


def _as_field_type(field_type: FieldType | str | None) -> FieldType | None:
    # Enum members hash by name, so plain strings must be converted first
    try:
        return FieldType(field_type)
    except ValueError:
        return None


def is_choice_type(field_type: FieldType | str | None) -> bool:
    """Check if a field type carries options."""
    return _as_field_type(field_type) in CHOICE_TYPES


def is_text_type(field_type: FieldType | str | None) -> bool:
    """Check if a field type accepts free text."""
    return _as_field_type(field_type) in TEXT_TYPES
