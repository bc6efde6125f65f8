"""Ordered collection of the fields of one form.

The store is the only mutable state of an editing session. Every read hands
out deep copies and every write stores a deep copy, so callers can never
change the schema behind the store's back. Mutations are all-or-nothing:
an operation that raises leaves the store exactly as it was.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, Iterator, Optional

from formbuilder.constants import FieldType, is_choice_type
from formbuilder.lib.errors import InvalidInput, NotFound
from formbuilder.models.field import Field, parse_field_type
from formbuilder.models.option import Option
from formbuilder.utils.visibility import find_cycle

logger = logging.getLogger(__name__)

__all__ = ["FieldSchemaStore"]


class FieldSchemaStore:
    """Field schema store for a single editing session.

    Example:
        >>> store = FieldSchemaStore()
        >>> question = store.add("radio", 2)
        >>> [option.label for option in question.options]
        ['', '']
    """

    def __init__(self, fields: Optional[Iterable[Field]] = None) -> None:
        self._fields: list[Field] = []
        if fields is not None:
            self.replace_all(fields)

    def add(self, field_type: FieldType | str, option_count: Optional[int] = None) -> Field:
        """Append a new empty field.

        Args:
            field_type: Kind of field to create
            option_count: Number of empty options for dropdown, checkbox and
                radio fields. Ignored for other types.

        Returns:
            Copy of the created field

        Raises:
            InvalidInput: If the type is unknown, or a choice type is given
                a missing or non-positive option count
        """
        kind = parse_field_type(field_type)

        options: list[Option] = []
        if is_choice_type(kind):
            count = _positive_count(option_count)
            options = [Option() for _ in range(count)]

        field = Field(type=kind, options=options)
        self._fields.append(field)
        logger.debug("Added %s field %s with %d options", kind.value, field.id, len(options))
        return copy.deepcopy(field)

    def update(self, field_id: str, new_field: Field) -> None:
        """Replace a field in place, keeping its id and position.

        Raises:
            NotFound: If no field has this id
            InvalidInput: If the new condition references the field itself,
                a field that is not in the store, or closes a dependency cycle
        """
        index = self._index_of(field_id)

        replacement = copy.deepcopy(new_field)
        replacement.id = self._fields[index].id
        self._check_condition(replacement)

        self._fields[index] = replacement
        logger.debug("Updated field %s", field_id)

    def remove(self, field_id: str) -> None:
        """Delete a field. Confirmation is the caller's responsibility.

        Raises:
            NotFound: If no field has this id
        """
        index = self._index_of(field_id)
        del self._fields[index]

        dependants = [f.id for f in self._fields if f.condition.dependent_field == field_id]
        if dependants:
            logger.warning(
                "Removed field %s still referenced by conditions on %s",
                field_id,
                ", ".join(dependants),
            )
        else:
            logger.debug("Removed field %s", field_id)

    def list(self) -> list[Field]:
        """Return a snapshot of all fields in form order."""
        return copy.deepcopy(self._fields)

    def get(self, field_id: str) -> Field:
        """Return a copy of one field.

        Raises:
            NotFound: If no field has this id
        """
        return copy.deepcopy(self._fields[self._index_of(field_id)])

    def replace_all(self, fields: Iterable[Field]) -> None:
        """Swap the whole contents of the store.

        Raises:
            InvalidInput: If two fields share an id
        """
        incoming = copy.deepcopy(list(fields))

        seen: set[str] = set()
        for field in incoming:
            if field.id in seen:
                raise InvalidInput(f"Duplicate field id: {field.id}", parameter="id", value=field.id)
            seen.add(field.id)

        self._fields = incoming
        logger.debug("Store now holds %d fields", len(incoming))

    def ids(self) -> list[str]:
        """Return the field ids in form order."""
        return [field.id for field in self._fields]

    def _index_of(self, field_id: str) -> int:
        for index, field in enumerate(self._fields):
            if field.id == str(field_id):
                return index
        raise NotFound(str(field_id))

    def _check_condition(self, field: Field) -> None:
        dependent_id = field.condition.dependent_field
        if dependent_id is None:
            return

        if dependent_id == field.id:
            raise InvalidInput(
                "A field cannot depend on itself",
                parameter="condition.dependent_field",
                value=dependent_id,
            )

        if dependent_id not in self.ids():
            raise InvalidInput(
                f"Condition references unknown field: {dependent_id}",
                parameter="condition.dependent_field",
                value=dependent_id,
            )

        cycle = find_cycle(self._fields, field.id, dependent_id)
        if cycle:
            raise InvalidInput(
                "Condition would create a dependency cycle: " + " -> ".join(cycle),
                parameter="condition.dependent_field",
                value=dependent_id,
            )

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return any(field.id == str(field_id) for field in self._fields)

    def __iter__(self) -> Iterator[Field]:
        return iter(self.list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSchemaStore):
            return NotImplemented
        return self._fields == other._fields

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fields={len(self._fields)})"


def _positive_count(option_count: object) -> int:
    if isinstance(option_count, bool) or not isinstance(option_count, int) or option_count <= 0:
        raise InvalidInput(
            "Please enter a positive number of options",
            parameter="option_count",
            value=option_count,
        )
    return option_count
