"""Tests for conditional visibility."""

from __future__ import annotations

from formbuilder.models import Field, FieldSchemaStore, VisibilityCondition
from formbuilder.utils import editing
from formbuilder.utils.visibility import current_value, find_cycle, should_show, visible_fields


def _dependant(on: str, value: str, field_id: str = "d") -> Field:
    return Field(type="text", id=field_id, condition=VisibilityCondition(on, value))


class TestShouldShow:
    """Tests for should_show."""

    def test_no_condition_always_shown(self) -> None:
        """Fields without a condition are always rendered."""
        field = Field(type="text", id="a")
        assert should_show(field, [field])
        assert should_show(field, [])

    def test_linkage(self) -> None:
        """Shown exactly when the dependency's value matches."""
        gate = Field(type="radio", id="g", label="yes")
        dependant = _dependant("g", "yes")
        assert should_show(dependant, [gate, dependant])

        gate.label = "no"
        assert not should_show(dependant, [gate, dependant])

    def test_comparison_is_exact(self) -> None:
        """Case and whitespace matter."""
        gate = Field(type="text", id="g", label="Yes ")
        assert not should_show(_dependant("g", "Yes"), [gate])

    def test_missing_dependency_compares_empty(self) -> None:
        """A dangling reference behaves as an empty value."""
        assert not should_show(_dependant("gone", "yes"), [])
        assert should_show(_dependant("gone", ""), [])

    def test_empty_expected_value_matches_unlabelled_field(self) -> None:
        """An unlabelled dependency matches an empty expected value."""
        gate = Field(type="text", id="g")
        assert should_show(_dependant("g", ""), [gate])


class TestVisibleFields:
    """Tests for visible_fields and current_value."""

    def test_filters_in_order(self, contact_form: FieldSchemaStore) -> None:
        """Hidden fields drop out, the rest keep form order."""
        question, email, upload = contact_form.list()
        assert [f.id for f in visible_fields(contact_form.list())] == [
            question.id,
            email.id,
            upload.id,
        ]

        contact_form.update(question.id, editing.set_label(question, "no"))
        assert [f.id for f in visible_fields(contact_form.list())] == [question.id, upload.id]

    def test_current_value(self) -> None:
        """The value of a field is its label."""
        fields = [Field(type="text", id="a", label="hello")]
        assert current_value("a", fields) == "hello"
        assert current_value("b", fields) == ""


class TestFindCycle:
    """Tests for find_cycle."""

    def test_no_dependency(self) -> None:
        """Clearing a condition never closes a cycle."""
        assert find_cycle([], "a", None) is None

    def test_terminating_chain(self) -> None:
        """A chain ending in an unconditioned field is fine."""
        fields = [Field(type="text", id="a"), _dependant("a", "x", "b")]
        assert find_cycle(fields, "c", "b") is None

    def test_two_field_loop(self) -> None:
        """a -> b -> a is reported with the path."""
        fields = [Field(type="text", id="a"), _dependant("a", "x", "b")]
        assert find_cycle(fields, "a", "b") == ["a", "b", "a"]

    def test_existing_loop_elsewhere(self) -> None:
        """A loop not passing through the edited field is still reported."""
        fields = [_dependant("y", "", "x"), _dependant("x", "", "y")]
        assert find_cycle(fields, "a", "x") == ["a", "x", "y", "x"]
