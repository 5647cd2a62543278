"""Request-time processing of a compiled Runtime tree.

For each field of a scope, in declaration order:

    key absent (or None)  -> nil_func(result)      default, skip or RequiredFieldMissing
    key present           -> parser_func(value)    CoercionError on failure
                          -> validate_func(value)  ValidationError on failure
                          -> children              per element (LIST) or on the map (MAP)

Cross-field validators of a scope run once every named field is assembled.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Hashable

from paramtree.builder import Schema
from paramtree.errors import CoercionError, ParamsError, invalid_type
from paramtree.logging import runtime_logger
from paramtree.structs import Nested, Parameter, Record, Runtime, Validator, ValidatorRuntime

log = runtime_logger()


def parse_params(target: Any, data: Mapping[str, Any] | None) -> Record:
    """Coerce and validate one input record against a compiled schema.

    Args:
        target: A Schema, or an iterable of Runtime / Parameter / Validator entries
        data: Input record keyed by parameter key

    Returns:
        New record keyed by attribute name. The input is never mutated.
    """
    runtimes, validators = _unpack(target)
    try:
        record = _as_mapping({} if data is None else data, None, ())
        return _parse_scope(runtimes, validators, record, path=())
    except ParamsError as exc:
        log.debug("params_rejected", code=exc.code.name, param=exc.param, reason=exc.reason)
        raise


def _unpack(target: Any) -> tuple[tuple[Runtime, ...], tuple[ValidatorRuntime, ...]]:
    if isinstance(target, Schema):
        return target.runtime, target.validator_runtimes

    runtimes: list[Runtime] = []
    validators: list[ValidatorRuntime] = []
    for entry in target:
        match entry:
            case Parameter(runtime=runtime):
                runtimes.append(runtime)
            case Validator(runtime=runtime):
                validators.append(runtime)
            case Runtime():
                runtimes.append(entry)
            case ValidatorRuntime():
                validators.append(entry)
            case _:
                raise TypeError(f"Cannot parse params with {type(entry).__name__}")
    return tuple(runtimes), tuple(validators)


def _parse_scope(
    runtimes: Iterable[Runtime],
    validators: Iterable[ValidatorRuntime],
    data: Mapping[str, Any],
    path: tuple[Hashable, ...],
) -> Record:
    result: Record = {}
    for runtime in runtimes:
        result = _parse_field(runtime, data, result, path)
    for validator in validators:
        validator.validate_func(result)
    return result


def _parse_field(runtime: Runtime, data: Mapping[str, Any], result: Record,
                 path: tuple[Hashable, ...]) -> Record:
    value = data.get(runtime.param_key)
    if value is None:
        return runtime.nil_func(result)

    value = runtime.parser_func(value)
    runtime.validate_func(value)

    if runtime.children or runtime.validators:
        value = _apply_children(runtime, value, (*path, runtime.attr_name))
    return {**result, runtime.attr_name: value}


def _apply_children(runtime: Runtime, value: Any, path: tuple[Hashable, ...]) -> Any:
    match runtime.nested:
        case Nested.LIST:
            return [
                _parse_scope(runtime.children, runtime.validators,
                    _as_mapping(item, runtime.attr_name, path), (*path, index))
                for index, item in enumerate(value)
            ]
        case Nested.MAP:
            return _parse_scope(runtime.children, runtime.validators,
                _as_mapping(value, runtime.attr_name, path), path)
        case _:
            return value


def _as_mapping(value: Any, param: Hashable, path: tuple[Hashable, ...]) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise CoercionError(
            invalid_type("map", value, param=param, origin="nested" if path else "parse_params")
            .error.with_metadata(path=list(path))
        )
    return value
