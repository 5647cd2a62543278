"""Tests for the declaration pipeline."""

import pytest

from paramtree.errors import ErrorCode, RequiredFieldMissing, SchemaDefinitionError, ValidationError
from paramtree.pipeline import STAGES, ParamsPipeline
from paramtree.structs import Action, Nested, Validator, ValidatorInformation, ValidatorRuntime

pytestmark = [pytest.mark.unit]


@pytest.fixture
def pipeline(types, validators):
    return ParamsPipeline(types, validators)


class TestStages:

    def test_stage_order(self):
        assert STAGES == (
            "nil_func", "attr_name", "required", "children", "type", "default", "desc", "validators",
        )

    def test_minimal_declaration_defaults(self, pipeline):
        param = pipeline.parse({"attr_name": "name", "required": True})
        info = param.information
        assert info.attr_name == "name"
        assert info.param_key == "name"
        assert info.type == "String"
        assert info.required is True
        assert info.default is None
        assert info.desc is None
        assert info.children == ()
        assert param.runtime.nested == Nested.NONE

    def test_source_overrides_param_key(self, pipeline):
        param = pipeline.parse({"attr_name": "user_id", "required": False, "source": "userId"})
        assert param.information.param_key == "userId"
        assert param.runtime.param_key == "userId"
        assert param.runtime.attr_name == "user_id"

    def test_information_fields(self, pipeline):
        param = pipeline.parse({
            "attr_name": "age", "required": False, "type": "integer", "default": 18, "desc": "Age in years",
        })
        assert param.information.type == "Integer"
        assert param.information.default == 18
        assert param.information.desc == "Age in years"

    def test_missing_required_key_rejected(self, pipeline):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            pipeline.parse({"attr_name": "x"})
        assert exc_info.value.code == ErrorCode.E8004_INVALID_DECLARATION


class TestNilFunc:
    """What happens when the field's key is absent."""

    def test_optional_without_default_leaves_record_untouched(self, pipeline):
        nil_func = pipeline.parse({"attr_name": "x", "required": False}).runtime.nil_func
        record = {"other": 1}
        assert nil_func(record) == {"other": 1}

    def test_default_is_inserted_without_mutating_input(self, pipeline):
        nil_func = pipeline.parse({"attr_name": "x", "required": False, "default": 5}).runtime.nil_func
        record = {"other": 1}
        assert nil_func(record) == {"other": 1, "x": 5}
        assert record == {"other": 1}

    def test_required_with_default_uses_default(self, pipeline):
        nil_func = pipeline.parse({"attr_name": "x", "required": True, "default": 5}).runtime.nil_func
        assert nil_func({}) == {"x": 5}

    def test_mutable_default_is_fresh_per_record(self, pipeline):
        param = pipeline.parse({"attr_name": "tags", "required": False, "type": "list", "default": []})
        nil_func = param.runtime.nil_func
        first = nil_func({})
        first["tags"].append("changed")
        assert nil_func({}) == {"tags": []}

    def test_required_without_default_raises(self, pipeline):
        nil_func = pipeline.parse({"attr_name": "x", "required": True}).runtime.nil_func
        with pytest.raises(RequiredFieldMissing) as exc_info:
            nil_func({})
        assert exc_info.value.param == "x"


class TestChildren:

    def test_children_and_validators_are_split(self, pipeline):
        a = pipeline.parse({"attr_name": "a", "required": False})
        b = pipeline.parse({"attr_name": "b", "required": False})
        rule = Validator(
            information=ValidatorInformation(Action.EXACTLY_ONE_OF, ("a", "b")),
            runtime=ValidatorRuntime(validate_func=lambda result: None),
        )
        parent = pipeline.parse({"attr_name": "p", "required": True, "type": "map", "children": [a, rule, b]})

        assert [c.attr_name for c in parent.information.children] == ["a", "b"]
        assert parent.runtime.children == (a.runtime, b.runtime)
        assert parent.information.validators == (rule.information,)
        assert parent.runtime.validators == (rule.runtime,)
        assert parent.runtime.nested == Nested.MAP

    def test_foreign_children_rejected(self, pipeline):
        with pytest.raises(SchemaDefinitionError):
            pipeline.parse({"attr_name": "p", "required": True, "children": ["nope"]})


class TestFieldValidators:

    def test_leftover_options_become_validators(self, pipeline):
        param = pipeline.parse({"attr_name": "code", "required": True, "regexp": r"^[A-Z]+$", "length": 3})
        param.runtime.validate_func("ABC")
        with pytest.raises(ValidationError):
            param.runtime.validate_func("abc")
        with pytest.raises(ValidationError):
            param.runtime.validate_func("ABCD")

    def test_type_arguments_are_not_validators(self, pipeline):
        param = pipeline.parse({"attr_name": "day", "required": True, "type": "date", "format": "%Y%m%d"})
        assert param.runtime.parser_func("20240105").day == 5

    def test_unknown_validator_rejected(self, pipeline):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            pipeline.parse({"attr_name": "x", "required": True, "shiny": True})
        assert exc_info.value.code == ErrorCode.E8002_UNKNOWN_VALIDATOR

    def test_first_failing_validator_wins(self, pipeline):
        param = pipeline.parse({"attr_name": "n", "required": True, "type": int,
                                "range": (1, 10), "values": [1, 2, 3]})
        with pytest.raises(ValidationError) as exc_info:
            param.runtime.validate_func(20)
        assert exc_info.value.reason == "range"

    @pytest.mark.parametrize("options", [
        {"range": 5},
        {"regexp": "("},
        {"values": 5},
        {"values": "abc"},
        {"length": "x"},
        {"allow_blank": "no"},
    ])
    def test_malformed_option_rejected_at_declaration(self, pipeline, options):
        with pytest.raises(SchemaDefinitionError) as exc_info:
            pipeline.parse({"attr_name": "n", "required": True, **options})
        assert exc_info.value.code == ErrorCode.E8004_INVALID_DECLARATION
        assert exc_info.value.param == "n"

    def test_string_pattern_option(self, pipeline):
        param = pipeline.parse({"attr_name": "code", "required": True, "regexp": r"^\d+$"})
        param.runtime.validate_func("123")
        with pytest.raises(ValidationError):
            param.runtime.validate_func("12a")
