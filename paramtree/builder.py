"""Schema Builder API

Declarative surface for parameter schemas. Every builder owns its own
scope stack, so independent schemas never share compilation state.

Usage:
    b = SchemaBuilder()
    b.requires("name")
    b.optional("age", type=int, default=0)
    b.optional("email")
    b.optional("phone")
    b.mutually_exclusive(["email", "phone"])

    with b.group("address", type="map"):
        b.requires("street")
        b.optional("zip", regexp=r"^\\d{5}$")

    b.optional("items", block=lambda items: items.requires("sku"))

    schema = b.build()
    schema.parse({"name": "Ann"})   # {"name": "Ann", "age": 0}
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Hashable, Iterable, Iterator

from paramtree.config import get_settings
from paramtree.errors import (
    ErrorCode,
    invalid_declaration,
    raise_error,
    schema_error,
    unknown_shared_params,
)
from paramtree.logging import compiler_logger
from paramtree.pipeline import ParamsPipeline
from paramtree.scope import ScopeStack
from paramtree.structs import (
    Action,
    Information,
    Parameter,
    Runtime,
    Validator,
    ValidatorInformation,
    ValidatorRuntime,
)
from paramtree.types import TypeRegistry
from paramtree.validators import ValidatorRegistry

log = compiler_logger()

ABOVE_ALL = "above_all"

Block = Callable[["SchemaBuilder"], Any]


@dataclass(frozen=True, slots=True)
class Schema:
    """Compiled top-level entries of a schema definition."""
    parameters: tuple[Parameter, ...]
    validators: tuple[Validator, ...] = ()

    @property
    def information(self) -> tuple[Information, ...]:
        return tuple(p.information for p in self.parameters)

    @property
    def runtime(self) -> tuple[Runtime, ...]:
        return tuple(p.runtime for p in self.parameters)

    @property
    def validator_runtimes(self) -> tuple[ValidatorRuntime, ...]:
        return tuple(v.runtime for v in self.validators)

    def parse(self, data: Any) -> dict[Hashable, Any]:
        """Coerce and validate one input record."""
        from paramtree.runtime import parse_params

        return parse_params(self, data)

    def to_dict(self) -> dict[str, Any]:
        return {
            "params": [info.to_dict() for info in self.information],
            "validators": [v.information.to_dict() for v in self.validators],
        }


class SchemaBuilder:
    """Collects declarations into a Schema."""

    __slots__ = ("_stack", "_pipeline", "_shared", "_max_depth")

    def __init__(
        self,
        types: TypeRegistry | None = None,
        validators: ValidatorRegistry | None = None,
        *,
        shared: dict[str, Block] | None = None,
        max_depth: int | None = None,
    ):
        self._stack = ScopeStack()
        self._pipeline = ParamsPipeline(types, validators)
        self._shared: dict[str, Block] = dict(shared or {})
        if max_depth is None:
            max_depth = get_settings().MAX_NESTING_DEPTH
        elif max_depth < 1:
            raise_error(invalid_declaration(f"max_depth must be at least 1, got {max_depth}",
                origin="builder").error)
        self._max_depth = max_depth

    # ------------------------------------------------------------------
    # Field declarations
    # ------------------------------------------------------------------

    def requires(self, attr_name: Hashable, block: Block | None = None, **options: Any) -> Parameter:
        """Declare a parameter that must be present (or have a default)."""
        return self._declare(attr_name, True, block, options)

    def optional(self, attr_name: Hashable, block: Block | None = None, **options: Any) -> Parameter:
        """Declare a parameter that may be absent."""
        return self._declare(attr_name, False, block, options)

    def group(self, attr_name: Hashable, block: Block | None = None, **options: Any):
        """Declare a required nested block.

        With `block`, the block is run immediately and the Parameter returned;
        without it, a context manager is returned for `with` usage.
        """
        if block is not None:
            return self._declare(attr_name, True, block, options)
        return self.block(attr_name, required=True, **options)

    @contextmanager
    def block(self, attr_name: Hashable, *, required: bool = True, **options: Any) -> Iterator[SchemaBuilder]:
        """Context manager form of a nested declaration."""
        with self._nested_scope(attr_name) as collector:
            yield self
        self._push_block(attr_name, required, collector.children, options)

    def _declare(self, attr_name: Hashable, required: bool, block: Block | None,
                 options: dict[str, Any]) -> Parameter:
        if block is None:
            return self._push({"attr_name": attr_name, "required": required, **options})
        with self._nested_scope(attr_name) as collector:
            block(self)
        return self._push_block(attr_name, required, collector.children, options)

    @contextmanager
    def _nested_scope(self, attr_name: Hashable):
        if self._stack.depth >= self._max_depth:
            raise_error(schema_error(
                f"Nesting deeper than {self._max_depth} levels at '{attr_name}'",
                code=ErrorCode.E8005_NESTING_TOO_DEEP, origin="builder", param=attr_name).error)
        with self._stack.nested() as collector:
            yield collector

    def _push_block(self, attr_name: Hashable, required: bool, children: list,
                    options: dict[str, Any]) -> Parameter:
        return self._push({"type": "list", **options, "attr_name": attr_name,
                           "required": required, "children": children})

    def _push(self, options: dict[str, Any]) -> Parameter:
        parameter = self._pipeline.parse(options)
        self._stack.push(parameter)
        return parameter

    # ------------------------------------------------------------------
    # Shared parameter sets
    # ------------------------------------------------------------------

    def shared(self, name: str, block: Block | None = None):
        """Record a reusable set of declarations.

        Usable directly, `b.shared("paging", fn)`, or as a decorator.
        """
        if block is None:
            def decorator(fn: Block) -> Block:
                self._shared[name] = fn
                return fn
            return decorator
        self._shared[name] = block
        return block

    def use(self, *names: str) -> None:
        """Replay shared declarations into the active scope."""
        for name in names:
            if (block := self._shared.get(name)) is None:
                raise_error(unknown_shared_params(name, origin="builder").error)
            block(self)

    # ------------------------------------------------------------------
    # Cross-field validators
    # ------------------------------------------------------------------

    def mutually_exclusive(self, attr_names: Iterable[Hashable] | str) -> Validator:
        return self._cross_field(Action.MUTUALLY_EXCLUSIVE, attr_names)

    def exactly_one_of(self, attr_names: Iterable[Hashable] | str) -> Validator:
        return self._cross_field(Action.EXACTLY_ONE_OF, attr_names)

    def at_least_one_of(self, attr_names: Iterable[Hashable] | str) -> Validator:
        return self._cross_field(Action.AT_LEAST_ONE_OF, attr_names)

    def _cross_field(self, action: Action, attr_names: Iterable[Hashable] | str) -> Validator:
        if attr_names == ABOVE_ALL:
            names = tuple(
                entry.information.attr_name
                for entry in self._stack.snapshot()
                if isinstance(entry, Parameter)
            )
            if not names:
                log.warning("above_all_without_params", action=action.value)
        elif isinstance(attr_names, str):
            raise_error(invalid_declaration(
                f"{action.value} expects a list of attribute names or ABOVE_ALL, got {attr_names!r}",
                attr_names, origin="builder").error)
        else:
            names = tuple(attr_names)

        checker = self._pipeline.validators.resolve_cross_field(action.value)

        def validate_func(result: dict) -> None:
            checker.validate(names, result)

        validator = Validator(
            information=ValidatorInformation(action=action, attr_names=names),
            runtime=ValidatorRuntime(validate_func=validate_func),
        )
        self._stack.push(validator)
        return validator

    # ------------------------------------------------------------------
    # Result
    # ------------------------------------------------------------------

    def build(self) -> Schema:
        """Return the top-level entries declared so far."""
        if self._stack.depth:
            raise_error(invalid_declaration("Cannot build a schema while a nested block is open",
                origin="builder").error)
        entries = self._stack.entries
        schema = Schema(
            parameters=tuple(e for e in entries if isinstance(e, Parameter)),
            validators=tuple(e for e in entries if isinstance(e, Validator)),
        )
        log.debug("schema_compiled", params=len(schema.parameters), validators=len(schema.validators))
        return schema


def build_schema(block: Block, types: TypeRegistry | None = None,
                 validators: ValidatorRegistry | None = None, **kwargs: Any) -> Schema:
    """Run a declaration block against a fresh builder and build it."""
    builder = SchemaBuilder(types, validators, **kwargs)
    block(builder)
    return builder.build()
