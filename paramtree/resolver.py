"""Type chain resolution.

A declared type is a registered name, a builtin alias, a Coercer, a raw
callable, or a left-to-right chain of those (a list/tuple, or `pipe(...)`).
The chain is flattened into ordered steps and composed into one parser.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable, Mapping

from paramtree.errors import (
    CoercionError,
    ErrorCode,
    ParamsError,
    from_exception,
    raise_result,
)
from paramtree.structs import Nested
from paramtree.types import Coercer, TypeRegistry


class pipe(tuple):
    """Explicit type chain: `pipe("string", str.strip, "integer")`."""

    def __new__(cls, *specs: Any) -> pipe:
        return super().__new__(cls, specs)


@dataclass(frozen=True, slots=True)
class FuncStep:
    """Opaque raw callable; contributes no display name."""
    func: Callable[[Any], Any]


@dataclass(frozen=True, slots=True)
class CoercerStep:
    """A resolved type: coercion function plus its extra option keys."""
    coercer: Coercer

    @property
    def arguments(self) -> tuple[str, ...]:
        return self.coercer.arguments


Step = FuncStep | CoercerStep


@dataclass(frozen=True, slots=True)
class ResolvedType:
    steps: tuple[Step, ...]

    @property
    def arguments(self) -> tuple[str, ...]:
        """Extra option keys declared by every coercer in the chain."""
        keys: list[str] = []
        for step in self.steps:
            if isinstance(step, CoercerStep):
                keys.extend(k for k in step.arguments if k not in keys)
        return tuple(keys)

    @property
    def type_name(self) -> str:
        """Display name of the last coercer, "String" when there is none."""
        for step in reversed(self.steps):
            if isinstance(step, CoercerStep):
                return step.coercer.type_name
        return "String"

    @property
    def nested(self) -> Nested:
        """Decided by the last element of the chain only."""
        last = self.steps[-1] if self.steps else None
        if isinstance(last, CoercerStep):
            return last.coercer.nested
        return Nested.NONE

    def make_parser(self, options: Mapping[str, Any], attr_name: Hashable = None) -> Callable[[Any], Any]:
        """Compose all steps into one function, applied left to right."""
        functions = tuple(_step_function(step, options, attr_name) for step in self.steps)

        def parser_func(value: Any) -> Any:
            for function in functions:
                value = function(value)
            return value

        return parser_func


def _step_function(step: Step, options: Mapping[str, Any], attr_name: Hashable) -> Callable[[Any], Any]:
    if isinstance(step, CoercerStep):
        coercer = step.coercer
        arguments = {k: options[k] for k in coercer.arguments if k in options}

        def coerce(value: Any) -> Any:
            result = coercer.coerce(value, arguments).map_err(
                lambda error: error.with_metadata(param=attr_name))
            return raise_result(result, CoercionError)

        return coerce

    func = step.func

    def call(value: Any) -> Any:
        try:
            return func(value)
        except ParamsError:
            raise
        except (TypeError, ValueError) as exc:
            error = from_exception(exc, ErrorCode.E2002_INVALID_FORMAT, origin="type_function",
                param=attr_name, reason="invalid_format", value=value)
            raise CoercionError(error.error) from exc

    return call


def flatten(spec: Any) -> list[Any]:
    """Flatten nested chains into a single ordered list of specs."""
    if isinstance(spec, (list, tuple)):
        return [item for part in spec for item in flatten(part)]
    return [spec]


def resolve_type(spec: Any, registry: TypeRegistry) -> ResolvedType:
    """Resolve a type specification into ordered coercion steps.

    Raises SchemaDefinitionError for names the registry does not know.
    """
    steps: list[Step] = []
    for item in flatten(spec):
        if _is_raw_callable(item):
            steps.append(FuncStep(item))
        else:
            steps.append(CoercerStep(registry.resolve(item)))
    return ResolvedType(tuple(steps))


def _is_raw_callable(item: Any) -> bool:
    if isinstance(item, (str, Coercer)):
        return False
    if isinstance(item, type):
        # Classes are type declarations (int, Coercer subclasses), never opaque steps
        return False
    return callable(item)
