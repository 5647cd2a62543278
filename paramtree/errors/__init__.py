"""Monadic Error Handling System

Coercers and error builders speak Result values; the compiled Runtime tree
speaks exceptions. `raise_result` is the seam between the two.

Usage:
    from paramtree.errors import Ok, Err, raise_result, invalid_format, CoercionError

    def coerce(value) -> Result[int, AppError]:
        if not value.isdigit():
            return invalid_format("integer", value)
        return Ok(int(value))

    number = raise_result(coerce("42"), CoercionError)
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
    from_exception,
)

from .builders import (
    # Parameters (E2xxx)
    validation_error,
    required_field,
    invalid_format,
    invalid_type,
    cross_field_violation,
    # Schema definition (E8xxx)
    schema_error,
    unknown_type,
    unknown_validator,
    unknown_shared_params,
    invalid_declaration,
)

from .exceptions import (
    ParamsError,
    RequiredFieldMissing,
    CoercionError,
    ValidationError,
    SchemaDefinitionError,
    exception_for,
    raise_error,
    raise_result,
)

__all__ = [
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    "from_exception",
    "validation_error",
    "required_field",
    "invalid_format",
    "invalid_type",
    "cross_field_violation",
    "schema_error",
    "unknown_type",
    "unknown_validator",
    "unknown_shared_params",
    "invalid_declaration",
    "ParamsError",
    "RequiredFieldMissing",
    "CoercionError",
    "ValidationError",
    "SchemaDefinitionError",
    "exception_for",
    "raise_error",
    "raise_result",
]
