"""Default Coercers

Request values arrive as strings (query strings, form bodies) or as decoded
JSON scalars. Each coercer accepts the representations that can be converted
without silent data loss and returns Err for everything else.
"""
from __future__ import annotations

import base64
import binascii
import json
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, ClassVar, Mapping
from uuid import UUID

from paramtree.errors import AppError, Ok, Result, invalid_format, invalid_type
from paramtree.structs import Nested

from .base import Coercer


@dataclass(frozen=True, slots=True)
class StringType(Coercer):
    """Coerce scalars to str. Containers are rejected."""

    @property
    def type_name(self) -> str:
        return "String"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[str, AppError]:
        if isinstance(value, (list, tuple, dict, set)):
            return invalid_type("string", value)
        if isinstance(value, bytes):
            try:
                return Ok(value.decode("utf-8"))
            except UnicodeDecodeError:
                return invalid_format("utf-8 string", value)
        if isinstance(value, bool):
            return Ok("true" if value else "false")
        return Ok(str(value))


@dataclass(frozen=True, slots=True)
class IntegerType(Coercer):
    """Coerce int or integer string to int."""
    allow_float_strings: bool = False

    @property
    def type_name(self) -> str:
        return "Integer"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[int, AppError]:
        if isinstance(value, bool):
            return invalid_type("integer", value)
        if isinstance(value, int):
            return Ok(value)
        if isinstance(value, float) and value.is_integer():
            return Ok(int(value))
        if not isinstance(value, str):
            return invalid_type("integer", value)

        stripped = value.strip()
        try:
            if self.allow_float_strings:
                return Ok(int(float(stripped)))
            return Ok(int(stripped))
        except ValueError:
            return invalid_format("integer", value)


@dataclass(frozen=True, slots=True)
class FloatType(Coercer):
    """Coerce number or numeric string to float."""

    @property
    def type_name(self) -> str:
        return "Float"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[float, AppError]:
        if isinstance(value, bool):
            return invalid_type("float", value)
        if isinstance(value, (int, float, Decimal)):
            return Ok(float(value))
        if not isinstance(value, str):
            return invalid_type("float", value)
        try:
            return Ok(float(value.strip()))
        except ValueError:
            return invalid_format("float", value)


@dataclass(frozen=True, slots=True)
class DecimalType(Coercer):
    """Coerce string or number to Decimal with precision preservation."""

    @property
    def type_name(self) -> str:
        return "Decimal"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[Decimal, AppError]:
        if isinstance(value, bool):
            return invalid_type("decimal", value)
        if isinstance(value, Decimal):
            return Ok(value)
        if isinstance(value, (int, float)):
            return Ok(Decimal(str(value)))
        if not isinstance(value, str):
            return invalid_type("decimal", value)
        try:
            return Ok(Decimal(value.strip()))
        except InvalidOperation:
            return invalid_format("decimal", value)


@dataclass(frozen=True, slots=True)
class BooleanType(Coercer):
    """Coerce bool or boolean string to bool.

    Truthy: "true", "1", "yes", "on", "y"
    Falsy: "false", "0", "no", "off", "n"
    With strict=True only "true" and "false" are accepted.
    """
    strict: bool = False
    true_values: frozenset[str] = frozenset({"true", "1", "yes", "on", "y"})
    false_values: frozenset[str] = frozenset({"false", "0", "no", "off", "n"})

    @property
    def type_name(self) -> str:
        return "Boolean"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[bool, AppError]:
        if isinstance(value, bool):
            return Ok(value)
        if not isinstance(value, str):
            return invalid_type("boolean", value)

        lower = value.strip().lower()
        truthy = {"true"} if self.strict else self.true_values
        falsy = {"false"} if self.strict else self.false_values
        if lower in truthy:
            return Ok(True)
        if lower in falsy:
            return Ok(False)
        return invalid_format("boolean", value)


@dataclass(frozen=True, slots=True)
class ListType(Coercer):
    """Accept a list (or tuple) value; children apply to each element."""
    nested: ClassVar[Nested] = Nested.LIST

    @property
    def type_name(self) -> str:
        return "List"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[list, AppError]:
        if isinstance(value, (list, tuple)):
            return Ok(list(value))
        return invalid_type("list", value)


@dataclass(frozen=True, slots=True)
class MapType(Coercer):
    """Accept a mapping value; children apply to its entries."""
    nested: ClassVar[Nested] = Nested.MAP

    @property
    def type_name(self) -> str:
        return "Map"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[dict, AppError]:
        if isinstance(value, Mapping):
            return Ok(dict(value))
        return invalid_type("map", value)


@dataclass(frozen=True, slots=True)
class JsonType(Coercer):
    """Decode a JSON document carried in a string parameter."""

    @property
    def type_name(self) -> str:
        return "Json"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[Any, AppError]:
        if not isinstance(value, (str, bytes)):
            return invalid_type("json string", value)
        try:
            return Ok(json.loads(value))
        except ValueError:
            return invalid_format("json", value)


@dataclass(frozen=True, slots=True)
class Base64Type(Coercer):
    """Decode a base64 string parameter to text."""

    @property
    def type_name(self) -> str:
        return "Base64"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[str, AppError]:
        if not isinstance(value, str):
            return invalid_type("base64 string", value)
        try:
            return Ok(base64.b64decode(value, validate=True).decode("utf-8"))
        except (binascii.Error, UnicodeDecodeError):
            return invalid_format("base64", value)


@dataclass(frozen=True, slots=True)
class DateTimeType(Coercer):
    """Coerce a string to datetime.

    Uses the declaration's `format` option with strptime when given,
    ISO8601 (with "Z" suffix support) otherwise.
    """
    arguments: ClassVar[tuple[str, ...]] = ("format",)

    @property
    def type_name(self) -> str:
        return "DateTime"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[datetime, AppError]:
        if isinstance(value, datetime):
            return Ok(value)
        if not isinstance(value, str):
            return invalid_type("datetime string", value)
        fmt = options.get("format")
        try:
            if fmt:
                return Ok(datetime.strptime(value.strip(), fmt))
            return Ok(datetime.fromisoformat(value.strip().replace("Z", "+00:00")))
        except ValueError:
            return invalid_format(f"datetime ({fmt or 'ISO8601'})", value)


@dataclass(frozen=True, slots=True)
class DateType(Coercer):
    """Coerce a string to date, honouring the `format` option."""
    arguments: ClassVar[tuple[str, ...]] = ("format",)

    @property
    def type_name(self) -> str:
        return "Date"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[date, AppError]:
        if isinstance(value, date) and not isinstance(value, datetime):
            return Ok(value)
        if not isinstance(value, str):
            return invalid_type("date string", value)
        fmt = options.get("format")
        try:
            if fmt:
                return Ok(datetime.strptime(value.strip(), fmt).date())
            return Ok(date.fromisoformat(value.strip()))
        except ValueError:
            return invalid_format(f"date ({fmt or 'ISO8601'})", value)


@dataclass(frozen=True, slots=True)
class UUIDType(Coercer):
    """Coerce string to UUID."""

    @property
    def type_name(self) -> str:
        return "UUID"

    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[UUID, AppError]:
        if isinstance(value, UUID):
            return Ok(value)
        if not isinstance(value, str):
            return invalid_type("uuid string", value)
        try:
            return Ok(UUID(value.strip()))
        except ValueError:
            return invalid_format("uuid", value)
