"""Validator registry - maps declaration keys to validator implementations."""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from paramtree.errors import raise_error, unknown_validator

from .base import CrossFieldValidator, FieldValidator
from .cross_field import AtLeastOneOf, ExactlyOneOf, MutuallyExclusive
from .field import AllowBlank, Length, Range, Regexp, Values


class ValidatorRegistry:
    """Field and cross-field validators available to a schema."""

    __slots__ = ("_field", "_cross_field")

    def __init__(self) -> None:
        self._field: dict[str, FieldValidator] = {}
        self._cross_field: dict[str, CrossFieldValidator] = {}

    def register(self, validator: FieldValidator | CrossFieldValidator, name: str | None = None) -> None:
        """Register a validator under its own name (or an explicit one)."""
        if isinstance(validator, CrossFieldValidator):
            self._cross_field[name or validator.action] = validator
        elif isinstance(validator, FieldValidator):
            self._field[name or validator.constraint_name] = validator
        else:
            raise TypeError(f"Expected FieldValidator or CrossFieldValidator, got {type(validator).__name__}")

    def copy(self) -> ValidatorRegistry:
        registry = ValidatorRegistry()
        registry._field = dict(self._field)
        registry._cross_field = dict(self._cross_field)
        return registry

    def field_names(self) -> list[str]:
        return sorted(self._field)

    def resolve_field(self, name: str, param: Any = None) -> FieldValidator:
        if (validator := self._field.get(name)) is None:
            raise_error(unknown_validator(name, param, origin="validator_registry").error)
        return validator

    def resolve_cross_field(self, action: str) -> CrossFieldValidator:
        if (validator := self._cross_field.get(action)) is None:
            raise_error(unknown_validator(action, origin="validator_registry").error)
        return validator


def build_default_validators() -> ValidatorRegistry:
    registry = ValidatorRegistry()
    for validator in (Regexp(), Values(), AllowBlank(), Length(), Range(),
                      MutuallyExclusive(), ExactlyOneOf(), AtLeastOneOf()):
        registry.register(validator)
    return registry


@lru_cache
def default_validators() -> ValidatorRegistry:
    return build_default_validators()
