"""Domain-Specific Error Builders

Ergonomic constructors for typed errors. Each builder creates an AppError
with the appropriate code and metadata, wrapped in Err.
"""
from typing import Any, Iterable

from .types import AppError, ErrorCode, ErrorContext, Err


# =============================================================================
# Parameter Errors (E2xxx)
# =============================================================================

def validation_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E2000_VALIDATION_GENERIC,
    param: Any = None,
    reason: str | None = None,
    value: Any = None,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create request-time parameter error."""
    meta = {"param": param, "reason": reason, "value": value, **metadata}
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in meta.items() if v is not None},
    ))


def required_field(param: Any, origin: str = "") -> Err[AppError]:
    return validation_error(
        f"Required parameter '{param}' is missing",
        code=ErrorCode.E2001_REQUIRED_FIELD_MISSING,
        param=param,
        reason="required",
        origin=origin,
    )


def invalid_format(
    expected: str, got: Any = None, *, param: Any = None, origin: str = ""
) -> Err[AppError]:
    msg = f"Invalid format: expected {expected}"
    if param is not None:
        msg = f"Invalid format for '{param}': expected {expected}"
    if got is not None:
        msg += f", got {got!r}"
    return validation_error(
        msg,
        code=ErrorCode.E2002_INVALID_FORMAT,
        param=param,
        reason="invalid_format",
        value=got,
        expected=expected,
        origin=origin,
    )


def invalid_type(
    expected: str, got: Any, *, param: Any = None, origin: str = ""
) -> Err[AppError]:
    return validation_error(
        f"Expected {expected}, got {type(got).__name__}",
        code=ErrorCode.E2004_INVALID_TYPE,
        param=param,
        reason="invalid_type",
        value=got,
        expected=expected,
        origin=origin,
    )


def cross_field_violation(
    action: str, attr_names: Iterable[Any], present: Iterable[Any], origin: str = ""
) -> Err[AppError]:
    names = list(attr_names)
    found = list(present)
    labels = ", ".join(str(n) for n in names)
    messages = {
        "mutually_exclusive": f"Parameters are mutually exclusive: {labels}",
        "exactly_one_of": f"Exactly one parameter must be provided: {labels}",
        "at_least_one_of": f"At least one parameter must be provided: {labels}",
    }
    return validation_error(
        messages.get(action, f"Cross-field rule '{action}' failed: {labels}"),
        code=ErrorCode.E2006_CROSS_FIELD,
        param=names,
        reason=action,
        origin=origin,
        present=found,
    )


# =============================================================================
# Schema Definition Errors (E8xxx)
# =============================================================================

def schema_error(
    message: str,
    *,
    code: ErrorCode = ErrorCode.E8000_SCHEMA_GENERIC,
    origin: str = "",
    **metadata,
) -> Err[AppError]:
    """Create compile-time schema definition error."""
    return Err(AppError(
        code=code,
        message=message,
        context=ErrorContext(origin=origin),
        metadata={k: v for k, v in metadata.items() if v is not None},
    ))


def unknown_type(name: Any, available: Iterable[str] = (), origin: str = "") -> Err[AppError]:
    return schema_error(
        f"Undefined type '{name}'. Available: {', '.join(sorted(available)) or 'none'}",
        code=ErrorCode.E8001_UNKNOWN_TYPE,
        origin=origin,
        type=str(name),
    )


def unknown_validator(name: Any, param: Any = None, origin: str = "") -> Err[AppError]:
    msg = f"Undefined validator '{name}'"
    if param is not None:
        msg += f" for parameter '{param}'"
    return schema_error(
        msg,
        code=ErrorCode.E8002_UNKNOWN_VALIDATOR,
        origin=origin,
        validator=str(name),
        param=param,
    )


def unknown_shared_params(name: Any, origin: str = "") -> Err[AppError]:
    return schema_error(
        f"Shared params '{name}' are not defined",
        code=ErrorCode.E8003_UNKNOWN_SHARED_PARAMS,
        origin=origin,
        shared=str(name),
    )


def invalid_declaration(message: str, param: Any = None, origin: str = "") -> Err[AppError]:
    return schema_error(
        message,
        code=ErrorCode.E8004_INVALID_DECLARATION,
        origin=origin,
        param=param,
    )
