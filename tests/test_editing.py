"""Tests for the single-field edit helpers."""

from __future__ import annotations

import pytest

from formbuilder.constants import PHONE_PATTERN, ValidationType
from formbuilder.lib.errors import InvalidInput
from formbuilder.models import Field, Option, VisibilityCondition
from formbuilder.utils import editing


@pytest.fixture
def radio() -> Field:
    return Field(type="radio", id="r", options=[Option("A"), Option("B")])


class TestOptionEdits:
    """Tests for option helpers."""

    def test_add_option(self, radio: Field) -> None:
        """New options are appended."""
        updated = editing.add_option(radio, "C", "third")
        assert [str(o) for o in updated.options] == ["A", "B", "C - third"]
        assert len(radio.options) == 2

    def test_remove_option(self, radio: Field) -> None:
        """Removing keeps the remaining order."""
        assert [o.label for o in editing.remove_option(radio, 0).options] == ["B"]

    def test_set_option_texts(self, radio: Field) -> None:
        """Label and sub-label of one option can be changed."""
        updated = editing.set_option_label(radio, 1, "Beta")
        updated = editing.set_option_sub_label(updated, 1, "second")
        assert updated.options[1] == Option("Beta", "second")
        assert radio.options[1] == Option("B")

    def test_index_out_of_range(self, radio: Field) -> None:
        """Bad indexes raise InvalidInput."""
        with pytest.raises(InvalidInput, match="out of range"):
            editing.set_option_label(radio, 5, "x")
        with pytest.raises(InvalidInput):
            editing.remove_option(radio, -1)

    def test_options_need_choice_field(self) -> None:
        """Text fields have no options to edit."""
        with pytest.raises(InvalidInput, match="text fields have no options"):
            editing.add_option(Field(type="text"), "x")


class TestRuleEdits:
    """Tests for validation helpers."""

    def test_set_required(self) -> None:
        """Required can be switched on and off."""
        field = editing.set_required(Field(type="text"))
        assert field.validation.required
        assert not editing.set_required(field, False).validation.required

    def test_select_validation_type_derives_pattern(self) -> None:
        """Selecting phone sets the tel input and pattern."""
        field = editing.select_validation_type(Field(type="text"), "phone")
        assert field.validation.type is ValidationType.PHONE
        assert field.validation.input_type == "tel"
        assert field.validation.pattern == PHONE_PATTERN

    def test_switching_type_replaces_pattern(self) -> None:
        """Moving from phone to email clears the phone pattern."""
        field = editing.select_validation_type(Field(type="text"), "phone")
        field = editing.select_validation_type(field, "email")
        assert field.validation.pattern == ""
        assert field.validation.input_type == "email"

    def test_length_bounds(self) -> None:
        """Bounds feed the digit-count pattern of the none type."""
        field = editing.select_validation_type(Field(type="text"), "none")
        field = editing.set_length_bounds(field, 2, 6)
        assert field.validation.pattern == r"\d{2,6}"

    def test_min_above_max(self) -> None:
        """Inverted bounds are rejected."""
        with pytest.raises(InvalidInput, match="cannot exceed"):
            editing.set_length_bounds(Field(type="text"), 5, 2)

    def test_file_rules(self) -> None:
        """File category and size limit are stored with their accept filter."""
        field = editing.select_file_type(Field(type="file"), "png")
        field = editing.set_file_size(field, 10)
        assert field.validation.accept == "image/png"
        assert field.validation.file_size == 10


class TestConditionEdits:
    """Tests for condition helpers."""

    def test_set_and_clear(self) -> None:
        """Conditions can be attached and removed."""
        field = editing.set_condition(Field(type="text"), "other", "yes")
        assert field.condition == VisibilityCondition("other", "yes")
        assert not editing.clear_condition(field).condition.is_set

    def test_label(self) -> None:
        """set_label returns a relabelled copy."""
        original = Field(type="text")
        assert editing.set_label(original, "Name").label == "Name"
        assert original.label == ""
