"""Scope stack for assembling nested parameter declarations.

Exactly one scope is active at a time. A nested block isolates its own
children with the snapshot/pop ... pop/restore cycle:

    handle = stack.snapshot()
    stack.pop()                 # clean scope for the block
    ...declarations push here...
    children = stack.pop()      # exactly the block's entries
    stack.restore(handle)       # outer scope is active again
"""
from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

from .structs import Entry


@dataclass(frozen=True, slots=True)
class ScopeHandle:
    """Immutable capture of one scope's entries."""
    entries: tuple[Entry, ...]
    depth: int

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(self.entries)


class BlockCollector:
    """Receives the children of a nested block once the block closes."""

    __slots__ = ("children",)

    def __init__(self) -> None:
        self.children: list[Entry] = []


class ScopeStack:
    """Ordered, nestable list of Parameter/Validator entries."""

    __slots__ = ("_active", "_depth")

    def __init__(self) -> None:
        self._active: list[Entry] = []
        self._depth = 0

    def snapshot(self) -> ScopeHandle:
        """Capture the active scope."""
        return ScopeHandle(entries=tuple(self._active), depth=self._depth)

    def pop(self) -> list[Entry]:
        """Drain and return every entry of the active scope."""
        entries, self._active = self._active, []
        return entries

    def push(self, entry: Entry) -> None:
        self._active.append(entry)

    def restore(self, handle: ScopeHandle) -> None:
        """Reinstate a captured scope, discarding the current one."""
        self._active = list(handle.entries)
        self._depth = handle.depth

    @property
    def entries(self) -> tuple[Entry, ...]:
        return tuple(self._active)

    @property
    def depth(self) -> int:
        """Number of nested blocks currently open."""
        return self._depth

    def __len__(self) -> int:
        return len(self._active)

    @contextmanager
    def nested(self) -> Iterator[BlockCollector]:
        """Run a block body in a fresh scope and collect its entries.

        The outer scope is restored even when the body raises, so a failed
        declaration never leaks partial children into its parent.
        """
        handle = self.snapshot()
        self.pop()
        self._depth = handle.depth + 1
        collector = BlockCollector()
        try:
            yield collector
            collector.children = self.pop()
        finally:
            self.restore(handle)
