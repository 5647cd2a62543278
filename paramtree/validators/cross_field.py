"""Cross-field validators, run against the assembled sibling result."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping

from paramtree.errors import cross_field_violation, raise_error

from .base import CrossFieldValidator


@dataclass(frozen=True, slots=True)
class MutuallyExclusive(CrossFieldValidator):
    """At most one of the attributes may be present."""

    @property
    def action(self) -> str:
        return "mutually_exclusive"

    def validate(self, attr_names: Iterable[Hashable], result: Mapping[Hashable, Any]) -> None:
        names = list(attr_names)
        if len(present := self.present(names, result)) > 1:
            raise_error(cross_field_violation(self.action, names, present, origin=self.action).error)


@dataclass(frozen=True, slots=True)
class ExactlyOneOf(CrossFieldValidator):
    """Exactly one of the attributes must be present."""

    @property
    def action(self) -> str:
        return "exactly_one_of"

    def validate(self, attr_names: Iterable[Hashable], result: Mapping[Hashable, Any]) -> None:
        names = list(attr_names)
        if len(present := self.present(names, result)) != 1:
            raise_error(cross_field_violation(self.action, names, present, origin=self.action).error)


@dataclass(frozen=True, slots=True)
class AtLeastOneOf(CrossFieldValidator):
    """At least one of the attributes must be present."""

    @property
    def action(self) -> str:
        return "at_least_one_of"

    def validate(self, attr_names: Iterable[Hashable], result: Mapping[Hashable, Any]) -> None:
        names = list(attr_names)
        if not self.present(names, result):
            raise_error(cross_field_violation(self.action, names, [], origin=self.action).error)
