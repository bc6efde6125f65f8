"""Structured exception hierarchy for the form builder.

Provides specific exception types for the failure modes of the schema
store, the codec and the storage backends, with enough context to log
them in a structured way.

Rule violations found while validating a submission are *not* exceptions:
they are returned as plain lists of messages by the validation engine.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

__all__ = [
    "FormBuilderError",
    "InvalidInput",
    "NotFound",
    "ParseError",
    "StorageError",
]


class FormBuilderError(Exception):
    """Base exception for all form builder errors.

    Provides structured error information for debugging.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[Dict[str, Any]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion

        parts = [message]

        if details:
            detail_lines = [f"  {k}: {v}" for k, v in details.items()]
            parts.append("\nDetails:")
            parts.extend(detail_lines)

        if suggestion:
            parts.append(f"\nSuggestion: {suggestion}")

        super().__init__("\n".join(parts) if len(parts) > 1 else message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for structured logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
            "suggestion": self.suggestion,
        }


class InvalidInput(FormBuilderError, ValueError):
    """Bad parameters for a store operation.

    Raised for unknown field types, non-positive option counts and
    conditions that reference a missing field or close a dependency cycle.
    """

    def __init__(
        self,
        message: str,
        *,
        parameter: Optional[str] = None,
        value: Any = None,
        **kwargs: Any,
    ) -> None:
        self.parameter = parameter
        self.value = value

        details = kwargs.pop("details", {})
        if parameter:
            details["parameter"] = parameter
        if value is not None:
            details["value"] = repr(value)

        super().__init__(message, details=details, **kwargs)


class NotFound(FormBuilderError, LookupError):
    """No field with the given id exists in the store."""

    def __init__(self, field_id: str, **kwargs: Any) -> None:
        self.field_id = field_id

        details = kwargs.pop("details", {})
        details["field_id"] = field_id

        super().__init__(f"Field not found: {field_id}", details=details, **kwargs)


class ParseError(FormBuilderError, ValueError):
    """A persisted schema could not be decoded.

    The store the caller holds is never modified when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        position: Optional[str] = None,
        cause: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.position = position
        self.cause = cause

        details = kwargs.pop("details", {})
        if position:
            details["position"] = position
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        suggestion = kwargs.pop("suggestion", None)
        if not suggestion:
            suggestion = "The saved form configuration is corrupt; save the form again."

        super().__init__(message, details=details, suggestion=suggestion, **kwargs)


class StorageError(FormBuilderError):
    """A storage backend failed to read or write a schema."""

    def __init__(
        self,
        message: str,
        *,
        backend: Optional[str] = None,
        key: Optional[str] = None,
        cause: Optional[Exception] = None,
        **kwargs: Any,
    ) -> None:
        self.backend = backend
        self.key = key
        self.cause = cause

        details = kwargs.pop("details", {})
        if backend:
            details["backend"] = backend
        if key:
            details["key"] = key
        if cause:
            details["cause"] = str(cause)
            details["cause_type"] = type(cause).__name__

        super().__init__(message, details=details, **kwargs)
