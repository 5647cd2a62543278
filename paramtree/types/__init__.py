"""Type coercers and the registry resolving declared type names."""
from .base import Coercer
from .coercion import (
    Base64Type,
    BooleanType,
    DateTimeType,
    DateType,
    DecimalType,
    FloatType,
    IntegerType,
    JsonType,
    ListType,
    MapType,
    StringType,
    UUIDType,
)
from .registry import TypeRegistry, build_default_types, default_types

__all__ = [
    "Coercer",
    "Base64Type",
    "BooleanType",
    "DateTimeType",
    "DateType",
    "DecimalType",
    "FloatType",
    "IntegerType",
    "JsonType",
    "ListType",
    "MapType",
    "StringType",
    "UUIDType",
    "TypeRegistry",
    "build_default_types",
    "default_types",
]
