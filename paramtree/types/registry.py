"""Type registry - maps declared type names to coercers."""
from __future__ import annotations

from functools import lru_cache
from typing import Any

from paramtree.errors import SchemaDefinitionError, raise_error, unknown_type

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

# Builtin Python types accepted as declaration shorthands
_BUILTIN_ALIASES: dict[type, str] = {
    str: "string",
    int: "integer",
    float: "float",
    bool: "boolean",
    list: "list",
    dict: "map",
}


def _normalize(name: str) -> str:
    return name.replace("_", "").lower()


class TypeRegistry:
    """Named coercers available to a schema.

    Names are matched case-insensitively and without underscores, so
    "DateTime", "datetime" and "date_time" resolve to the same coercer.
    """

    __slots__ = ("_coercers",)

    def __init__(self, coercers: dict[str, Coercer] | None = None):
        self._coercers: dict[str, Coercer] = {}
        for name, coercer in (coercers or {}).items():
            self.register(name, coercer)

    def register(self, name: str, coercer: Coercer) -> None:
        """Register (or replace) a coercer under a name."""
        self._coercers[_normalize(name)] = coercer

    def copy(self) -> TypeRegistry:
        registry = TypeRegistry()
        registry._coercers = dict(self._coercers)
        return registry

    def names(self) -> list[str]:
        return sorted(self._coercers)

    def __contains__(self, name: Any) -> bool:
        try:
            self.resolve(name)
        except SchemaDefinitionError:
            return False
        return True

    def resolve(self, spec: Any) -> Coercer:
        """Resolve a name, builtin alias, coercer instance or subclass."""
        if isinstance(spec, Coercer):
            return spec
        if isinstance(spec, type) and issubclass(spec, Coercer):
            return spec()
        if isinstance(spec, type) and spec in _BUILTIN_ALIASES:
            spec = _BUILTIN_ALIASES[spec]
        if isinstance(spec, str) and (coercer := self._coercers.get(_normalize(spec))):
            return coercer
        raise_error(unknown_type(spec, self.names(), origin="type_registry").error)


def build_default_types(strict_booleans: bool = False) -> TypeRegistry:
    return TypeRegistry({
        "string": StringType(),
        "integer": IntegerType(),
        "float": FloatType(),
        "decimal": DecimalType(),
        "boolean": BooleanType(strict=strict_booleans),
        "list": ListType(),
        "map": MapType(),
        "json": JsonType(),
        "base64": Base64Type(),
        "datetime": DateTimeType(),
        "date": DateType(),
        "uuid": UUIDType(),
    })


@lru_cache
def default_types() -> TypeRegistry:
    """Default registry, configured from settings."""
    from paramtree.config import get_settings

    return build_default_types(strict_booleans=get_settings().STRICT_BOOLEANS)
