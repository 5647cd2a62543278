"""Validator interfaces.

Field validators check one coerced value against a declared option;
cross-field validators check a set of sibling attributes in an assembled
result record. Both raise ValidationError on failure.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping

from paramtree.errors import AppError, ErrorCode, ErrorContext, ValidationError


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Result of a validation check with rich context."""
    is_valid: bool
    error_message: str | None = None
    error_code: ErrorCode | None = None
    constraint: str | None = None
    expected: Any = None
    actual: Any = None

    @classmethod
    def valid(cls) -> ValidationResult: return cls(is_valid=True)

    @classmethod
    def invalid(cls, message: str, code: ErrorCode = ErrorCode.E2005_CONSTRAINT_VIOLATION, *,
                constraint: str | None = None, expected: Any = None, actual: Any = None) -> ValidationResult:
        return cls(is_valid=False, error_message=message, error_code=code, constraint=constraint,
            expected=expected, actual=actual)

    def to_error(self, attr_name: Any, origin: str = "") -> AppError:
        """Build the AppError raised for a failed check."""
        metadata = {"param": attr_name, "reason": self.constraint, "value": self.actual, "expected": self.expected}
        return AppError(code=self.error_code or ErrorCode.E2000_VALIDATION_GENERIC,
            message=f"{attr_name}: {self.error_message}", context=ErrorContext(origin=origin),
            metadata={k: v for k, v in metadata.items() if v is not None})


class FieldValidator(ABC):
    """Base class for per-field validators.

    `check` inspects a single coerced value; `validate_param` raises
    ValidationError naming the field when the check fails.
    """

    @property
    @abstractmethod
    def constraint_name(self) -> str:
        """Declaration key, e.g. "regexp"."""

    @abstractmethod
    def check(self, value: Any, option: Any) -> ValidationResult:
        """Validate a value against the declared option."""

    def check_option(self, option: Any) -> Any:
        """Validate the declared option once, when the schema is compiled.

        Returns the option in the form `check` receives. Raises ValueError
        or TypeError for a malformed option.
        """
        return option

    def validate_param(self, attr_name: Any, value: Any, option: Any) -> None:
        if not (result := self.check(value, option)).is_valid:
            raise ValidationError(result.to_error(attr_name, origin=self.constraint_name))


class CrossFieldValidator(ABC):
    """Base class for rules spanning several sibling parameters."""

    @property
    @abstractmethod
    def action(self) -> str:
        """Rule name, e.g. "mutually_exclusive"."""

    @abstractmethod
    def validate(self, attr_names: Iterable[Hashable], result: Mapping[Hashable, Any]) -> None:
        """Raise ValidationError when the rule is violated."""

    @staticmethod
    def present(attr_names: Iterable[Hashable], result: Mapping[Hashable, Any]) -> list[Hashable]:
        """Attribute names carrying a non-None value in the result."""
        return [name for name in attr_names if result.get(name) is not None]
