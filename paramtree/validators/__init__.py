"""Field and cross-field validators."""
from .base import CrossFieldValidator, FieldValidator, ValidationResult
from .cross_field import AtLeastOneOf, ExactlyOneOf, MutuallyExclusive
from .field import AllowBlank, Length, Range, Regexp, Values
from .registry import ValidatorRegistry, build_default_validators, default_validators

__all__ = [
    "CrossFieldValidator",
    "FieldValidator",
    "ValidationResult",
    "AtLeastOneOf",
    "ExactlyOneOf",
    "MutuallyExclusive",
    "AllowBlank",
    "Length",
    "Range",
    "Regexp",
    "Values",
    "ValidatorRegistry",
    "build_default_validators",
    "default_validators",
]
