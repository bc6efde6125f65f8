"""JSON codec for the field schema store.

The persisted form is a JSON array of field objects in form order. Keys
use the camelCase names the builder has always written (``subLabel``,
``minLength``, ``dependentField``...), so schemas saved by earlier builds
load unchanged.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any, Optional

from formbuilder.constants import DEFAULT_SCHEMA_KEY
from formbuilder.lib.errors import FormBuilderError, ParseError
from formbuilder.models.field import Field
from formbuilder.models.store import FieldSchemaStore
from formbuilder.utils.visibility import find_cycle

if TYPE_CHECKING:
    from formbuilder.lib.storage.base import StorageBackend

logger = logging.getLogger(__name__)

__all__ = [
    "deserialize",
    "load",
    "load_into",
    "parse_fields",
    "save",
    "serialize",
]


def serialize(store: FieldSchemaStore) -> str:
    """Encode every field of the store as a JSON array."""
    payload = [field.to_dict() for field in store.list()]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def parse_fields(text: str) -> list[Field]:
    """Decode a JSON array of fields.

    Raises:
        ParseError: On malformed JSON, a non-array payload, an invalid
            field, duplicate ids or cyclic visibility conditions
    """
    try:
        payload: Any = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ParseError("Schema is not valid JSON", cause=exc) from exc
    except RecursionError as exc:
        raise ParseError("Schema is not valid JSON: nested too deeply", cause=exc) from exc

    if not isinstance(payload, list):
        raise ParseError(
            f"Schema must be a JSON array of fields, got {type(payload).__name__}"
        )

    fields: list[Field] = []
    seen: set[str] = set()
    for index, item in enumerate(payload):
        position = f"[{index}]"
        if not isinstance(item, dict):
            raise ParseError("Field entry must be an object", position=position)
        try:
            field = Field.from_dict(item)
        except KeyError as exc:
            raise ParseError(f"Field is missing key {exc}", position=position, cause=exc) from exc
        except (FormBuilderError, TypeError, AttributeError, ValueError, OverflowError) as exc:
            raise ParseError("Invalid field entry", position=position, cause=exc) from exc

        if field.id in seen:
            raise ParseError(f"Duplicate field id: {field.id}", position=position)
        seen.add(field.id)
        fields.append(field)

    for field in fields:
        cycle = find_cycle(fields, field.id, field.condition.dependent_field)
        if cycle:
            raise ParseError("Visibility conditions form a cycle: " + " -> ".join(cycle))

    return fields


def deserialize(text: str) -> FieldSchemaStore:
    """Decode a JSON array into a new store.

    Raises:
        ParseError: If the text is not a valid schema
    """
    store = FieldSchemaStore()
    store.replace_all(parse_fields(text))
    return store


def load_into(store: FieldSchemaStore, text: str) -> None:
    """Replace the contents of an existing store with a decoded schema.

    The store is only touched once the whole text has been decoded.

    Raises:
        ParseError: If the text is not a valid schema
    """
    fields = parse_fields(text)
    store.replace_all(fields)


def save(
    store: FieldSchemaStore,
    storage: "StorageBackend",
    key: str = DEFAULT_SCHEMA_KEY,
) -> None:
    """Persist the store through a storage backend."""
    storage.set(key, serialize(store))
    logger.info("Saved %d fields to %s key %r", len(store), storage.scheme, key)


def load(
    storage: "StorageBackend",
    key: str = DEFAULT_SCHEMA_KEY,
) -> Optional[FieldSchemaStore]:
    """Restore a store from a storage backend.

    Returns:
        The decoded store, or None if nothing is saved under ``key``

    Raises:
        ParseError: If the saved text is not a valid schema
    """
    text = storage.get(key)
    if text is None:
        logger.warning("No saved schema under %s key %r", storage.scheme, key)
        return None

    store = deserialize(text)
    logger.info("Loaded %d fields from %s key %r", len(store), storage.scheme, key)
    return store
