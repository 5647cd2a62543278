"""Per-field validators.

Declared as keyword options on a parameter:

    b.optional("code", regexp=r"^[A-Z]{3}$")
    b.optional("color", values=["red", "green"])
    b.requires("name", allow_blank=False)
    b.optional("tags", type="list", length=(1, 5))
    b.optional("age", type=int, range=(0, 150))
"""
from __future__ import annotations

import re
from collections.abc import Collection, Container, Mapping, Sized
from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Any

from paramtree.errors import ErrorCode

from .base import FieldValidator, ValidationResult


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern:
    return re.compile(pattern)


def _bounds(option: Any) -> tuple[Any, Any]:
    """Read (min, max) from a tuple, a mapping or a range."""
    if isinstance(option, range):
        return option.start, option.stop - 1
    if isinstance(option, Mapping):
        return option.get("min"), option.get("max")
    low, high = option
    return low, high


def _checked_bounds(option: Any) -> Any:
    """Reject bounds that are not (min, max), a min/max mapping or a range."""
    if isinstance(option, (str, bytes)) or not isinstance(option, (range, Mapping, tuple, list)):
        raise TypeError(f"expected (min, max), a min/max mapping or a range, got {type(option).__name__}")
    if isinstance(option, Mapping) and (extra := set(option) - {"min", "max"}):
        raise ValueError(f"unexpected bound keys {sorted(map(str, extra))}")
    if isinstance(option, (tuple, list)) and len(option) != 2:
        raise ValueError(f"expected exactly two bounds, got {len(option)}")

    low, high = _bounds(option)
    for bound in (low, high):
        if bound is not None and (isinstance(bound, bool) or not isinstance(bound, (int, float, Decimal))):
            raise TypeError(f"bound {bound!r} is not a number")
    if low is not None and high is not None and low > high:
        raise ValueError(f"minimum {low} exceeds maximum {high}")
    return option


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict, set)):
        return not value
    return False


@dataclass(frozen=True, slots=True)
class Regexp(FieldValidator):
    """Value (or every element of a list value) must match a pattern."""

    @property
    def constraint_name(self) -> str:
        return "regexp"

    def check_option(self, option: Any) -> re.Pattern:
        if isinstance(option, re.Pattern):
            return option
        if not isinstance(option, str):
            raise TypeError(f"expected a pattern string, got {type(option).__name__}")
        try:
            return _compile(option)
        except re.error as exc:
            raise ValueError(f"invalid pattern {option!r}: {exc}") from exc

    def check(self, value: Any, option: Any) -> ValidationResult:
        pattern = option if isinstance(option, re.Pattern) else _compile(option)
        values = value if isinstance(value, list) else [value]
        for item in values:
            if not pattern.search(str(item)):
                return ValidationResult.invalid(f"{item!r} does not match pattern {pattern.pattern!r}",
                    ErrorCode.E2002_INVALID_FORMAT, constraint=self.constraint_name,
                    expected=pattern.pattern, actual=item)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Values(FieldValidator):
    """Value (or every element of a list value) must be one of the options."""

    @property
    def constraint_name(self) -> str:
        return "values"

    def check_option(self, option: Any) -> Collection:
        # A string would match substrings
        if isinstance(option, (str, bytes)) or not isinstance(option, Collection):
            raise TypeError(f"expected a collection of allowed values, got {type(option).__name__}")
        return option

    def check(self, value: Any, option: Container) -> ValidationResult:
        values = value if isinstance(value, list) else [value]
        for item in values:
            if item not in option:
                allowed = list(option) if not isinstance(option, range) else f"{option.start}..{option.stop - 1}"
                return ValidationResult.invalid(f"{item!r} is not one of {allowed}",
                    constraint=self.constraint_name, expected=allowed, actual=item)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class AllowBlank(FieldValidator):
    """With option False, reject None, empty strings and empty containers."""

    @property
    def constraint_name(self) -> str:
        return "allow_blank"

    def check_option(self, option: Any) -> bool:
        if not isinstance(option, bool):
            raise TypeError(f"expected True or False, got {option!r}")
        return option

    def check(self, value: Any, option: bool) -> ValidationResult:
        if not option and _is_blank(value):
            return ValidationResult.invalid("must not be blank", constraint=self.constraint_name,
                expected="non-blank value", actual=value)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Length(FieldValidator):
    """Length of a string or list: exact int, (min, max) tuple, mapping or range."""

    @property
    def constraint_name(self) -> str:
        return "length"

    def check_option(self, option: Any) -> Any:
        if isinstance(option, int) and not isinstance(option, bool):
            if option < 0:
                raise ValueError(f"length must not be negative, got {option}")
            return option
        return _checked_bounds(option)

    def check(self, value: Any, option: Any) -> ValidationResult:
        if not isinstance(value, Sized):
            return ValidationResult.invalid(f"expected a sized value, got {type(value).__name__}",
                ErrorCode.E2004_INVALID_TYPE, constraint=self.constraint_name, actual=type(value).__name__)

        length = len(value)
        if isinstance(option, int):
            if length != option:
                return ValidationResult.invalid(f"length {length} must be exactly {option}",
                    ErrorCode.E2003_OUT_OF_RANGE, constraint=self.constraint_name, expected=option, actual=length)
            return ValidationResult.valid()

        low, high = _bounds(option)
        if low is not None and length < low:
            return ValidationResult.invalid(f"length {length} is less than minimum {low}",
                ErrorCode.E2003_OUT_OF_RANGE, constraint=self.constraint_name, expected=f">= {low}", actual=length)
        if high is not None and length > high:
            return ValidationResult.invalid(f"length {length} exceeds maximum {high}",
                ErrorCode.E2003_OUT_OF_RANGE, constraint=self.constraint_name, expected=f"<= {high}", actual=length)
        return ValidationResult.valid()


@dataclass(frozen=True, slots=True)
class Range(FieldValidator):
    """Inclusive numeric bounds: (min, max) tuple, mapping or range."""

    @property
    def constraint_name(self) -> str:
        return "range"

    def check_option(self, option: Any) -> Any:
        return _checked_bounds(option)

    def check(self, value: Any, option: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return ValidationResult.invalid(f"expected number, got {type(value).__name__}",
                ErrorCode.E2004_INVALID_TYPE, constraint=self.constraint_name, actual=type(value).__name__)

        low, high = _bounds(option)
        if low is not None and value < low:
            return ValidationResult.invalid(f"value {value} must be at least {low}",
                ErrorCode.E2003_OUT_OF_RANGE, constraint=self.constraint_name, expected=f">= {low}", actual=value)
        if high is not None and value > high:
            return ValidationResult.invalid(f"value {value} must be at most {high}",
                ErrorCode.E2003_OUT_OF_RANGE, constraint=self.constraint_name, expected=f"<= {high}", actual=value)
        return ValidationResult.valid()
