"""Transient recording states layered over the history stacks."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Generic, List, Optional, TypeVar

from .entry import HistoryEntry

T = TypeVar("T")


@dataclass(slots=True)
class BufferState(Generic[T]):
    """Snapshot taken when a continuous interaction starts."""

    snapshot: T

    def changed(self, final_value: T) -> bool:
        return self.snapshot != final_value


@dataclass(slots=True)
class GroupState(Generic[T]):
    """Values pushed while a group is open, in push order."""

    values: List[T] = field(default_factory=list)

    @classmethod
    def reopen(cls, entry: HistoryEntry[T]) -> "GroupState[T]":
        return cls(values=list(entry.values))

    def append(self, value: T) -> None:
        self.values.append(value)

    def resolve(self) -> Optional[HistoryEntry[T]]:
        # an empty group commits nothing
        if not self.values:
            return None
        return HistoryEntry.group(self.values)
