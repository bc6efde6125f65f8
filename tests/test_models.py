"""Tests for the field model: options, validation specs and conditions."""

from __future__ import annotations

import dataclasses

import pytest

from formbuilder.constants import PHONE_PATTERN, FieldType, ValidationType
from formbuilder.lib.errors import InvalidInput
from formbuilder.models import Field, Option, ValidationSpec, VisibilityCondition
from formbuilder.models.validation_spec import derive_accept, digit_count_pattern


class TestOption:
    """Tests for Option."""

    def test_defaults_are_empty(self) -> None:
        """A new option has empty label and sub-label."""
        option = Option()
        assert option.label == ""
        assert option.sub_label == ""

    def test_to_dict_uses_camel_case(self) -> None:
        """Sub-label is persisted as subLabel."""
        assert Option("Red", "warm").to_dict() == {"label": "Red", "subLabel": "warm"}

    def test_from_dict_tolerates_nulls(self) -> None:
        """Null labels load as empty strings."""
        option = Option.from_dict({"label": None, "subLabel": None})
        assert option == Option()

    def test_str_includes_sub_label(self) -> None:
        """String form shows the sub-label when there is one."""
        assert str(Option("Red", "warm")) == "Red - warm"
        assert str(Option("Blue")) == "Blue"


class TestValidationSpecDerivation:
    """Tests for the derived pattern, input type and accept filter."""

    def test_unset_type_derives_nothing(self) -> None:
        """A spec whose type was never selected carries no pattern."""
        spec = ValidationSpec(min_length=2, max_length=4)
        assert spec.type is None
        assert spec.pattern == ""
        assert spec.input_type == ""

    def test_phone(self) -> None:
        """Phone selects tel input and the ten digit pattern."""
        spec = ValidationSpec(type="phone")
        assert spec.type is ValidationType.PHONE
        assert spec.input_type == "tel"
        assert spec.pattern == PHONE_PATTERN

    def test_email(self) -> None:
        """Email selects the email input type and no pattern."""
        spec = ValidationSpec(type=ValidationType.EMAIL)
        assert spec.input_type == "email"
        assert spec.pattern == ""

    def test_number(self) -> None:
        """Number keeps a plain text input."""
        spec = ValidationSpec(type="number")
        assert spec.input_type == "text"
        assert spec.pattern == ""

    def test_none_uses_digit_count_pattern(self) -> None:
        """The none type derives a digit-count pattern from the bounds."""
        spec = ValidationSpec(type="none", min_length=2, max_length=5)
        assert spec.input_type == "text"
        assert spec.pattern == r"\d{2,5}"

    def test_empty_string_type_means_none(self) -> None:
        """Picking the "None" entry stores the none type."""
        assert ValidationSpec(type="").type is ValidationType.NONE

    def test_pattern_follows_bounds(self) -> None:
        """Changing the bounds recomputes the pattern."""
        spec = ValidationSpec(type="none", min_length=1, max_length=3)
        updated = dataclasses.replace(spec, max_length=8)
        assert updated.pattern == r"\d{1,8}"

    def test_pattern_cannot_be_passed_in(self) -> None:
        """Derived attributes are not constructor arguments."""
        with pytest.raises(TypeError):
            ValidationSpec(type="phone", pattern=".*")  # type: ignore[call-arg]

    @pytest.mark.parametrize(
        "min_length,max_length,expected",
        [
            (None, None, ""),
            (3, None, r"\d{3,}"),
            (None, 4, r"\d{0,4}"),
            (0, 0, r"\d{0,0}"),
        ],
    )
    def test_digit_count_pattern_partial_bounds(self, min_length, max_length, expected) -> None:
        """Missing bounds produce open-ended patterns."""
        assert digit_count_pattern(min_length, max_length) == expected

    @pytest.mark.parametrize(
        "file_type,expected",
        [
            ("pdf", "application/pdf"),
            ("jpg", "image/jpg"),
            ("JPEG", "image/jpeg"),
            ("png", "image/png"),
            ("gif", ""),
            (None, ""),
        ],
    )
    def test_accept_filter(self, file_type, expected) -> None:
        """File categories map to their MIME filter."""
        assert derive_accept(file_type) == expected
        assert ValidationSpec(file_type=file_type).accept == expected


class TestValidationSpecCoercion:
    """Tests for input checking of rule values."""

    def test_lengths_are_coerced_to_int(self) -> None:
        """Numeric strings from form inputs become ints."""
        spec = ValidationSpec(min_length="3", max_length=7.0)
        assert spec.min_length == 3
        assert spec.max_length == 7

    @pytest.mark.parametrize("value", [-1, "abc", 2.5, True])
    def test_invalid_length(self, value) -> None:
        """Negative, fractional or non-numeric lengths are rejected."""
        with pytest.raises(InvalidInput):
            ValidationSpec(min_length=value)

    def test_unknown_type(self) -> None:
        """Unknown validation types are rejected with the valid choices."""
        with pytest.raises(InvalidInput, match="Must be one of: none, number, email, phone"):
            ValidationSpec(type="postcode")

    def test_file_size_keeps_int_when_integral(self) -> None:
        """Whole megabyte limits stay ints."""
        assert ValidationSpec(file_size=10.0).file_size == 10
        assert ValidationSpec(file_size="2.5").file_size == 2.5

    @pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan")])
    def test_non_finite_length(self, value) -> None:
        """Infinite or overflowing lengths are rejected, not crashed on."""
        with pytest.raises(InvalidInput, match="non-negative integer"):
            ValidationSpec(max_length=value)

    @pytest.mark.parametrize("value", [5, 2.5, True, ["pdf"]])
    def test_non_string_file_type(self, value) -> None:
        """File categories must be strings."""
        with pytest.raises(InvalidInput, match="file_type must be a string"):
            ValidationSpec(file_type=value)

    @pytest.mark.parametrize("value", [0, -3, "big", float("inf"), 10**400])
    def test_invalid_file_size(self, value) -> None:
        """Limits must be positive finite numbers."""
        with pytest.raises(InvalidInput):
            ValidationSpec(file_size=value)

    def test_is_empty(self) -> None:
        """Only the default spec counts as empty."""
        assert ValidationSpec().is_empty()
        assert not ValidationSpec(required=True).is_empty()


class TestValidationSpecSerialization:
    """Tests for ValidationSpec dict conversion."""

    def test_to_dict_keys(self) -> None:
        """All rule and derived keys are written."""
        data = ValidationSpec(required=True, type="phone").to_dict()
        assert data == {
            "required": True,
            "minLength": None,
            "maxLength": None,
            "type": "phone",
            "pattern": PHONE_PATTERN,
            "inputType": "tel",
            "fileType": None,
            "fileSize": None,
            "accept": "",
        }

    def test_from_dict_recomputes_derived_keys(self) -> None:
        """A stale pattern in stored data is replaced."""
        spec = ValidationSpec.from_dict({"type": "phone", "pattern": "^stale$", "inputType": "text"})
        assert spec.pattern == PHONE_PATTERN
        assert spec.input_type == "tel"

    def test_from_empty_dict(self) -> None:
        """An empty object loads as the default spec."""
        assert ValidationSpec.from_dict({}) == ValidationSpec()


class TestVisibilityCondition:
    """Tests for VisibilityCondition."""

    def test_default_is_unset(self) -> None:
        """No dependency by default."""
        condition = VisibilityCondition()
        assert not condition.is_set
        assert condition.dependent_value == ""

    def test_numeric_ids_are_coerced(self) -> None:
        """Timestamp ids from older schemas become strings."""
        condition = VisibilityCondition(dependent_field=1700000000000)  # type: ignore[arg-type]
        assert condition.dependent_field == "1700000000000"

    def test_empty_id_means_unset(self) -> None:
        """An empty dependency id is treated as no condition."""
        assert not VisibilityCondition(dependent_field="").is_set

    def test_round_trip_dict(self) -> None:
        """Dict form uses dependentField and dependentValue."""
        condition = VisibilityCondition("abc", "yes")
        data = condition.to_dict()
        assert data == {"dependentField": "abc", "dependentValue": "yes"}
        assert VisibilityCondition.from_dict(data) == condition


class TestField:
    """Tests for Field."""

    def test_type_is_parsed(self) -> None:
        """String types are converted to FieldType."""
        assert Field(type="textarea").type is FieldType.TEXTAREA

    def test_unknown_type(self) -> None:
        """Unknown field types raise InvalidInput."""
        with pytest.raises(InvalidInput, match="Invalid field type 'slider'"):
            Field(type="slider")

    def test_ids_are_unique(self) -> None:
        """Fields created back to back get distinct ids."""
        ids = {Field(type="text").id for _ in range(500)}
        assert len(ids) == 500

    @pytest.mark.parametrize(
        "field_type,is_choice",
        [
            ("text", False),
            ("textarea", False),
            ("dropdown", True),
            ("checkbox", True),
            ("radio", True),
            ("file", False),
        ],
    )
    def test_is_choice(self, field_type, is_choice) -> None:
        """Only dropdown, checkbox and radio carry options."""
        assert Field(type=field_type).is_choice is is_choice

    def test_from_dict_with_numeric_id(self) -> None:
        """Older schemas with numeric ids still load."""
        field = Field.from_dict({"id": 1700000000001, "type": "text", "label": None})
        assert field.id == "1700000000001"
        assert field.label == ""
        assert field.options == []
        assert field.validation == ValidationSpec()
        assert not field.condition.is_set

    def test_from_dict_missing_id(self) -> None:
        """The id key is mandatory."""
        with pytest.raises(KeyError):
            Field.from_dict({"type": "text"})

    def test_to_dict(self) -> None:
        """Dict form carries every part of the field."""
        field = Field(
            type="dropdown",
            id="f1",
            label="Colour",
            options=[Option("Red")],
            condition=VisibilityCondition("f0", "yes"),
        )
        data = field.to_dict()
        assert data["id"] == "f1"
        assert data["type"] == "dropdown"
        assert data["label"] == "Colour"
        assert data["options"] == [{"label": "Red", "subLabel": ""}]
        assert data["condition"] == {"dependentField": "f0", "dependentValue": "yes"}
        assert Field.from_dict(data) == field
