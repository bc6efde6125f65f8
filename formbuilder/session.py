"""Editing session: one store plus the side-effect capabilities around it.

The session is what a front end drives. It owns the FieldSchemaStore of the
form being assembled and wires in the capabilities the core never touches
directly: a storage backend for save/load, a ``confirm`` callback asked
before a field is removed, and a ``notify`` callback for user feedback.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from formbuilder.constants import (
    DEFAULT_SCHEMA_KEY,
    MSG_FIELD_REMOVED,
    MSG_FORM_LOADED,
    MSG_FORM_SAVED,
    MSG_FORM_SUBMITTED,
    MSG_NO_SAVED_FORM,
    PROMPT_REMOVE_FIELD,
    FieldType,
    NotifyKind,
)
from formbuilder.lib.errors import InvalidInput, ParseError
from formbuilder.lib.storage.base import StorageBackend
from formbuilder.lib.storage.memory import MemoryStorage
from formbuilder.models.field import Field
from formbuilder.models.store import FieldSchemaStore
from formbuilder.utils import codec
from formbuilder.utils.validation import SubmissionResult, validate_submission
from formbuilder.utils.visibility import visible_fields

logger = logging.getLogger(__name__)

__all__ = ["BuilderSession", "ConfirmFn", "NotifyFn"]

ConfirmFn = Callable[[str], bool]
NotifyFn = Callable[[str, NotifyKind], None]


def _always_confirm(prompt: str) -> bool:
    return True


def _log_notification(message: str, kind: NotifyKind) -> None:
    level = logging.ERROR if kind == NotifyKind.ERROR else logging.INFO
    logger.log(level, "[%s] %s", kind.value, message)


class BuilderSession:
    """State and capabilities of one form assembly session.

    Args:
        storage: Backend the schema is saved to and loaded from
        confirm: Asked before a field is removed; defaults to always yes
        notify: Receives user-facing messages; defaults to logging them
        key: Storage key of the schema
        store: Existing store to edit (a new empty one by default)
    """

    def __init__(
        self,
        storage: Optional[StorageBackend] = None,
        confirm: Optional[ConfirmFn] = None,
        notify: Optional[NotifyFn] = None,
        key: str = DEFAULT_SCHEMA_KEY,
        store: Optional[FieldSchemaStore] = None,
    ) -> None:
        self.storage = storage if storage is not None else MemoryStorage()
        self.confirm = confirm or _always_confirm
        self.notify = notify or _log_notification
        self.key = key
        self.store = store if store is not None else FieldSchemaStore()

    # -------------------------------------------------------------------------
    # Editing
    # -------------------------------------------------------------------------

    def add_field(self, field_type: FieldType | str, option_count: Optional[int] = None) -> Field:
        """Add a field; bad parameters are reported through notify and re-raised."""
        try:
            return self.store.add(field_type, option_count)
        except InvalidInput as exc:
            self.notify(exc.message, NotifyKind.ERROR)
            raise

    def update_field(self, field_id: str, field: Field) -> None:
        self.store.update(field_id, field)

    def edit_field(self, field_id: str, edit: Callable[..., Field], *args: Any) -> Field:
        """Apply one of the ``formbuilder.utils.editing`` helpers to a stored field.

        Example:
            >>> session.edit_field(field_id, editing.set_label, "Email")
        """
        updated = edit(self.store.get(field_id), *args)
        self.store.update(field_id, updated)
        return self.store.get(field_id)

    def remove_field(self, field_id: str) -> bool:
        """Remove a field after the user confirms.

        Returns:
            True if the field was removed, False if the user declined

        Raises:
            NotFound: If no field has this id
        """
        # Surface a bad id before bothering the user
        self.store.get(field_id)

        if not self.confirm(PROMPT_REMOVE_FIELD):
            logger.debug("Removal of field %s declined", field_id)
            return False

        self.store.remove(field_id)
        self.notify(MSG_FIELD_REMOVED, NotifyKind.SUCCESS)
        return True

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def save(self) -> None:
        codec.save(self.store, self.storage, self.key)
        self.notify(MSG_FORM_SAVED, NotifyKind.SUCCESS)

    def load(self) -> bool:
        """Replace the store with the saved schema.

        Returns:
            True if a schema was loaded. When nothing is saved or the saved
            text is corrupt, the current store is kept and False is returned.
        """
        text = self.storage.get(self.key)
        if text is None:
            self.notify(MSG_NO_SAVED_FORM, NotifyKind.ERROR)
            return False

        try:
            codec.load_into(self.store, text)
        except ParseError as exc:
            logger.error("Could not load saved schema: %s", exc)
            self.notify(f"Saved form configuration is invalid: {exc.message}", NotifyKind.ERROR)
            return False

        self.notify(MSG_FORM_LOADED, NotifyKind.SUCCESS)
        return True

    def export(self) -> str:
        return codec.serialize(self.store)

    # -------------------------------------------------------------------------
    # Preview and submission
    # -------------------------------------------------------------------------

    def preview(self) -> list[Field]:
        """Return the fields a renderer should draw right now."""
        return visible_fields(self.store.list())

    def submit(self, values: Mapping[str, Any]) -> SubmissionResult:
        """Validate a submission of the visible fields.

        Args:
            values: Submitted value per field id (file fields take a byte size)

        Returns:
            SubmissionResult; ``errors`` maps field id to its violations
        """
        result = validate_submission(self.store.list(), values)
        if result.is_valid:
            self.notify(MSG_FORM_SUBMITTED, NotifyKind.SUCCESS)
        return result
