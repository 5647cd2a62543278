"""Coercer interface.

A coercer turns a raw request value into a typed value. It declares the
extra declaration options it consumes (`arguments`) and, for container
types, how the field's children are applied (`nested`).
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

from paramtree.errors import AppError, Result
from paramtree.structs import Nested


@dataclass(frozen=True, slots=True)
class Coercer(ABC):
    """Base class for type coercers.

    Each coercer defines:
    - Display name used in the Information tree
    - Extra option keys taken from the declaration
    - Nesting behaviour for container types
    - The coercion logic, returning a Result
    """
    arguments: ClassVar[tuple[str, ...]] = ()
    nested: ClassVar[Nested] = Nested.NONE

    @property
    @abstractmethod
    def type_name(self) -> str:
        """Display name, e.g. "Integer"."""

    @abstractmethod
    def coerce(self, value: Any, options: Mapping[str, Any]) -> Result[Any, AppError]:
        """Coerce value to target type. Returns Result."""

    def __call__(self, value: Any, options: Mapping[str, Any] | None = None) -> Result[Any, AppError]:
        return self.coerce(value, options or {})
