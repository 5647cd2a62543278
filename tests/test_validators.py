"""Tests for field and cross-field validators."""

import re

import pytest

from paramtree.errors import ErrorCode, SchemaDefinitionError, ValidationError
from paramtree.validators import (
    AllowBlank,
    AtLeastOneOf,
    ExactlyOneOf,
    FieldValidator,
    Length,
    MutuallyExclusive,
    Range,
    Regexp,
    ValidationResult,
    Values,
)

pytestmark = [pytest.mark.unit]


class TestFieldValidators:

    def test_regexp_searches(self):
        assert Regexp().check("abc123", r"\d+").is_valid
        assert not Regexp().check("abc", r"^\d+$").is_valid

    def test_regexp_compiled_pattern_and_lists(self):
        pattern = re.compile(r"^[a-z]+$")
        assert Regexp().check(["ab", "cd"], pattern).is_valid
        result = Regexp().check(["ab", "C"], pattern)
        assert not result.is_valid
        assert result.actual == "C"

    def test_values(self):
        assert Values().check("red", ["red", "green"]).is_valid
        assert not Values().check("blue", ["red", "green"]).is_valid
        assert Values().check(5, range(1, 10)).is_valid
        assert not Values().check([1, 99], range(1, 10)).is_valid

    def test_allow_blank(self):
        assert not AllowBlank().check("  ", False).is_valid
        assert not AllowBlank().check([], False).is_valid
        assert AllowBlank().check("", True).is_valid
        assert AllowBlank().check(0, False).is_valid

    def test_length(self):
        assert Length().check("abc", 3).is_valid
        assert not Length().check("abcd", 3).is_valid
        assert Length().check([1, 2], (1, 5)).is_valid
        assert not Length().check([], {"min": 1}).is_valid
        assert Length().check(5, 1).error_code == ErrorCode.E2004_INVALID_TYPE

    def test_range(self):
        assert Range().check(5, (1, 10)).is_valid
        assert Range().check(10, range(1, 11)).is_valid
        result = Range().check(11, {"max": 10})
        assert result.error_code == ErrorCode.E2003_OUT_OF_RANGE
        assert not Range().check(True, (0, 1)).is_valid

    def test_validate_param_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            Range().validate_param("age", 200, (0, 150))
        assert exc_info.value.param == "age"
        assert "age" in str(exc_info.value)


class TestCrossField:
    """Presence means the key exists with a non-None value."""

    def test_mutually_exclusive(self):
        MutuallyExclusive().validate(["a", "b"], {"a": 1})
        MutuallyExclusive().validate(["a", "b"], {})
        MutuallyExclusive().validate(["a", "b"], {"a": 1, "b": None})
        with pytest.raises(ValidationError) as exc_info:
            MutuallyExclusive().validate(["a", "b"], {"a": 1, "b": 2})
        assert exc_info.value.code == ErrorCode.E2006_CROSS_FIELD
        assert exc_info.value.reason == "mutually_exclusive"

    def test_exactly_one_of(self):
        ExactlyOneOf().validate(["a", "b"], {"b": 0})
        with pytest.raises(ValidationError):
            ExactlyOneOf().validate(["a", "b"], {})
        with pytest.raises(ValidationError):
            ExactlyOneOf().validate(["a", "b"], {"a": 1, "b": 2})

    def test_at_least_one_of(self):
        AtLeastOneOf().validate(["a", "b"], {"a": 1, "b": 2})
        with pytest.raises(ValidationError):
            AtLeastOneOf().validate(["a", "b"], {"c": 1})


class TestRegistry:

    def test_custom_field_validator(self, validators):
        class Even(FieldValidator):
            @property
            def constraint_name(self):
                return "even"

            def check(self, value, option):
                if (value % 2 == 0) == option:
                    return ValidationResult.valid()
                return ValidationResult.invalid("parity mismatch", constraint="even")

        validators.register(Even())
        assert "even" in validators.field_names()
        with pytest.raises(ValidationError):
            validators.resolve_field("even").validate_param("n", 3, True)

    def test_unknown_names(self, validators):
        with pytest.raises(SchemaDefinitionError):
            validators.resolve_field("nope")
        with pytest.raises(SchemaDefinitionError):
            validators.resolve_cross_field("nope")

    def test_copy_is_independent(self, validators):
        copy = validators.copy()
        copy.register(Regexp(), name="pattern")
        assert "pattern" in copy.field_names()
        assert "pattern" not in validators.field_names()


class TestCheckOption:
    """Declared options are validated once, when the schema compiles."""

    @pytest.mark.parametrize("validator,option", [
        (Regexp(), "("),
        (Regexp(), 5),
        (Values(), 5),
        (Values(), "abc"),
        (AllowBlank(), "no"),
        (Length(), "x"),
        (Length(), -1),
        (Length(), (1, 2, 3)),
        (Range(), 5),
        (Range(), (10, 1)),
        (Range(), {"low": 1}),
        (Range(), ("a", "z")),
    ])
    def test_malformed_options(self, validator, option):
        with pytest.raises((TypeError, ValueError)):
            validator.check_option(option)

    @pytest.mark.parametrize("validator,option", [
        (Values(), ["a", "b"]),
        (Values(), range(1, 5)),
        (AllowBlank(), False),
        (Length(), 3),
        (Length(), {"min": 1}),
        (Range(), (0, None)),
        (Range(), range(1, 10)),
    ])
    def test_valid_options_pass_through(self, validator, option):
        assert validator.check_option(option) == option

    def test_regexp_option_is_compiled(self):
        pattern = Regexp().check_option(r"^\d+$")
        assert isinstance(pattern, re.Pattern)
        assert Regexp().check("42", pattern).is_valid
        assert Regexp().check_option(pattern) is pattern
