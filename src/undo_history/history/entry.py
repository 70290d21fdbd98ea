"""Entries stored on the past and future stacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterable, Iterator, Optional, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class HistoryEntry(Generic[T]):
    """One atomic undo unit.

    A plain push produces a single-value entry. A committed group produces an
    entry with ``grouped=True`` holding its values in push order; the stacks
    treat both kinds the same way.
    """

    values: Tuple[T, ...]
    grouped: bool = False

    @classmethod
    def single(cls, value: T) -> "HistoryEntry[T]":
        return cls(values=(value,))

    @classmethod
    def group(cls, values: Iterable[T]) -> "HistoryEntry[T]":
        return cls(values=tuple(values), grouped=True)

    @property
    def value(self) -> Optional[T]:
        """The stored value of a single entry, ``None`` for groups."""

        if self.grouped:
            return None
        return self.values[0]

    def __iter__(self) -> Iterator[T]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)
