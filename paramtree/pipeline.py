"""Stage pipeline turning a flat declaration into a Parameter.

Stages run strictly in order, each consuming the option keys it owns and
threading an accumulator of (options, information, runtime) forward:

    nil_func -> attr_name -> required -> children -> type -> default -> desc -> validators

Whatever options survive to the last stage are field validator declarations.
"""
from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, Callable, Hashable, Mapping

from paramtree.errors import RequiredFieldMissing, invalid_declaration, raise_error, required_field
from paramtree.logging import compiler_logger
from paramtree.resolver import resolve_type
from paramtree.structs import Information, Parameter, Record, Runtime, Validator
from paramtree.types import TypeRegistry, default_types
from paramtree.validators import FieldValidator, ValidatorRegistry, default_validators

log = compiler_logger()

STAGES: tuple[str, ...] = (
    "nil_func", "attr_name", "required", "children", "type", "default", "desc", "validators",
)


@dataclass(frozen=True, slots=True)
class Accumulator:
    options: dict[str, Any]
    information: Information
    runtime: Runtime


def _make_nil_func(attr_name: Hashable, required: bool, default: Any) -> Callable[[Record], Record]:
    """Function applied to the record when this field's key is absent."""
    if default is None and required:
        def nil_func(record: Record) -> Record:
            raise RequiredFieldMissing(required_field(attr_name, origin="nil_func").error)
    elif default is None:
        def nil_func(record: Record) -> Record:
            return record
    else:
        def nil_func(record: Record) -> Record:
            return {**record, attr_name: deepcopy(default)}
    return nil_func


def _compile_check(validator: FieldValidator, name: str, option: Any,
                   attr_name: Hashable) -> tuple[FieldValidator, Any]:
    try:
        return validator, validator.check_option(option)
    except (TypeError, ValueError) as exc:
        raise_error(invalid_declaration(f"Invalid '{name}' option for '{attr_name}': {exc}",
            attr_name, origin=name).error)


class ParamsPipeline:
    """Compiles declaration options into Parameters.

    Holds the registries names are resolved against; holds no per-schema
    state, so one pipeline can serve any number of builders.
    """

    __slots__ = ("types", "validators")

    def __init__(self, types: TypeRegistry | None = None, validators: ValidatorRegistry | None = None):
        self.types = types or default_types()
        self.validators = validators or default_validators()

    def parse(self, options: Mapping[str, Any]) -> Parameter:
        """Run every stage over the declaration and return the Parameter."""
        for key in ("attr_name", "required"):
            if key not in options:
                raise_error(invalid_declaration(f"Declaration is missing '{key}'", options.get("attr_name")).error)

        accumulator = Accumulator(options=dict(options), information=Information(), runtime=Runtime())
        parameter = reduce(lambda acc, stage: getattr(self, f"_stage_{stage}")(acc), STAGES, accumulator)
        log.debug(
            "parameter_compiled",
            attr_name=parameter.information.attr_name,
            type=parameter.information.type,
            nested=parameter.runtime.nested.value,
            children=len(parameter.runtime.children),
        )
        return parameter

    def _stage_nil_func(self, acc: Accumulator) -> Accumulator:
        func = _make_nil_func(acc.options["attr_name"], acc.options["required"], acc.options.get("default"))
        return replace(acc, runtime=replace(acc.runtime, nil_func=func))

    def _stage_attr_name(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        attr_name = options.pop("attr_name")
        source = options.pop("source", None)
        param_key = source or str(attr_name)
        return Accumulator(
            options=options,
            information=replace(acc.information, attr_name=attr_name, param_key=param_key),
            runtime=replace(acc.runtime, attr_name=attr_name, param_key=param_key),
        )

    def _stage_required(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        required = bool(options.pop("required"))
        return replace(acc, options=options, information=replace(acc.information, required=required))

    def _stage_children(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        children = options.pop("children", None) or ()

        parameters = [c for c in children if isinstance(c, Parameter)]
        validators = [c for c in children if isinstance(c, Validator)]
        if len(parameters) + len(validators) != len(children):
            raise_error(invalid_declaration("Children must be Parameter or Validator entries",
                acc.information.attr_name, origin="children").error)

        return Accumulator(
            options=options,
            information=replace(acc.information,
                children=tuple(p.information for p in parameters),
                validators=tuple(v.information for v in validators)),
            runtime=replace(acc.runtime,
                children=tuple(p.runtime for p in parameters),
                validators=tuple(v.runtime for v in validators)),
        )

    def _stage_type(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        resolved = resolve_type(options.pop("type", "string"), self.types)
        type_options = {key: options.pop(key) for key in resolved.arguments if key in options}
        return Accumulator(
            options=options,
            information=replace(acc.information, type=resolved.type_name),
            runtime=replace(acc.runtime,
                parser_func=resolved.make_parser(type_options, acc.information.attr_name),
                nested=resolved.nested),
        )

    def _stage_default(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        default = options.pop("default", None)
        return replace(acc, options=options, information=replace(acc.information, default=default))

    def _stage_desc(self, acc: Accumulator) -> Accumulator:
        options = dict(acc.options)
        desc = options.pop("desc", None)
        return replace(acc, options=options, information=replace(acc.information, desc=desc))

    def _stage_validators(self, acc: Accumulator) -> Parameter:
        attr_name = acc.information.attr_name
        checks = tuple(
            _compile_check(self.validators.resolve_field(name, attr_name), name, option, attr_name)
            for name, option in acc.options.items()
        )

        def validate_func(value: Any) -> None:
            for validator, option in checks:
                validator.validate_param(attr_name, value, option)

        return Parameter(
            information=acc.information,
            runtime=replace(acc.runtime, validate_func=validate_func),
        )


def parse(options: Mapping[str, Any], types: TypeRegistry | None = None,
          validators: ValidatorRegistry | None = None) -> Parameter:
    """Compile one declaration with the given (or default) registries."""
    return ParamsPipeline(types, validators).parse(options)

