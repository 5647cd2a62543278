"""Compiled parameter structures.

Information is the descriptive half of a compiled field, Runtime the
executable half. Both are frozen once the pipeline finishes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Hashable, Union

Record = dict[Hashable, Any]


class Nested(str, Enum):
    """How children of a field are applied to its coerced value."""
    NONE = "none"
    LIST = "list"
    MAP = "map"


class Action(str, Enum):
    """Cross-field validator actions."""
    MUTUALLY_EXCLUSIVE = "mutually_exclusive"
    EXACTLY_ONE_OF = "exactly_one_of"
    AT_LEAST_ONE_OF = "at_least_one_of"


def _identity(value: Any) -> Any:
    return value


def _noop(value: Any) -> None:
    return None


@dataclass(frozen=True, slots=True)
class ValidatorInformation:
    action: Action
    attr_names: tuple[Hashable, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {"action": self.action.value, "attr_names": list(self.attr_names)}


@dataclass(frozen=True, slots=True)
class ValidatorRuntime:
    validate_func: Callable[[Record], None]


@dataclass(frozen=True, slots=True)
class Validator:
    """A compiled cross-field rule. Never becomes a named child."""
    information: ValidatorInformation
    runtime: ValidatorRuntime


@dataclass(frozen=True, slots=True)
class Information:
    """Descriptive metadata for documentation and introspection."""
    attr_name: Hashable = None
    param_key: str = ""
    type: str = "String"
    required: bool = False
    default: Any = None
    desc: str | None = None
    children: tuple[Information, ...] = ()
    validators: tuple[ValidatorInformation, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "attr_name": self.attr_name,
            "param_key": self.param_key,
            "type": self.type,
            "required": self.required,
        }
        if self.default is not None:
            result["default"] = self.default
        if self.desc:
            result["desc"] = self.desc
        if self.children:
            result["children"] = [child.to_dict() for child in self.children]
        if self.validators:
            result["validators"] = [v.to_dict() for v in self.validators]
        return result


@dataclass(frozen=True, slots=True)
class Runtime:
    """Executable half of a compiled field. Pure and stateless."""
    attr_name: Hashable = None
    param_key: str = ""
    nil_func: Callable[[Record], Record] = _identity
    parser_func: Callable[[Any], Any] = _identity
    validate_func: Callable[[Any], None] = _noop
    nested: Nested = Nested.NONE
    children: tuple[Runtime, ...] = ()
    validators: tuple[ValidatorRuntime, ...] = ()


@dataclass(frozen=True, slots=True)
class Parameter:
    """A compiled field: Information plus Runtime."""
    information: Information
    runtime: Runtime


Entry = Union[Parameter, Validator]
