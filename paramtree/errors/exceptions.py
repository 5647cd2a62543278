"""Parameter Exceptions

Exception wrappers for AppError. Compile-time failures raise
SchemaDefinitionError; request-time failures raise RequiredFieldMissing,
CoercionError or ValidationError and propagate to the dispatch layer.
"""
from __future__ import annotations

from typing import Any, TypeVar

from .types import AppError, ErrorCode, Ok, Err, Result

T = TypeVar("T")


class ParamsError(Exception):
    """Exception wrapper for AppError.

    Use this when an AppError has to leave code that speaks the Result monad
    (coercers, error builders) through normal exception flow.
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code

    @property
    def param(self) -> Any:
        """Name of the offending field, when known."""
        return self.error.metadata.get("param")

    @property
    def reason(self) -> str | None:
        return self.error.metadata.get("reason")

    @property
    def value(self) -> Any:
        return self.error.metadata.get("value")

    def to_dict(self) -> dict:
        return self.error.to_dict()


class RequiredFieldMissing(ParamsError):
    """No value, no default, and the field is required."""


class CoercionError(ParamsError):
    """Value present but cannot be converted to the declared type."""


class ValidationError(ParamsError):
    """Coerced value fails a field or cross-field rule."""


class SchemaDefinitionError(ParamsError):
    """Malformed declaration, detected while the schema is compiled."""


_EXCEPTIONS: dict[ErrorCode, type[ParamsError]] = {
    ErrorCode.E2001_REQUIRED_FIELD_MISSING: RequiredFieldMissing,
    ErrorCode.E2002_INVALID_FORMAT: CoercionError,
    ErrorCode.E2004_INVALID_TYPE: CoercionError,
}


def exception_for(error: AppError) -> type[ParamsError]:
    """Pick the exception class matching an error code."""
    if (exc_type := _EXCEPTIONS.get(error.code)) is not None:
        return exc_type
    if error.code.category == "schema":
        return SchemaDefinitionError
    if error.code.category == "validation":
        return ValidationError
    return ParamsError


def raise_error(error: AppError, exc_type: type[ParamsError] | None = None) -> None:
    """Raise AppError as the matching exception.

    Usage:
        if not found:
            raise_error(unknown_type("foo").error)
    """
    raise (exc_type or exception_for(error))(error)


def raise_result(result: Result[T, AppError], exc_type: type[ParamsError] | None = None) -> T:
    """Unwrap an Ok value or raise the Err as an exception.

    Usage:
        value = raise_result(coercer.coerce(raw, options), CoercionError)
    """
    match result:
        case Ok(value):
            return value
        case Err(error):
            raise (exc_type or exception_for(error))(error)
