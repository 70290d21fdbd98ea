"""Linear undo/redo history with buffered and grouped recording.

``UndoHistory`` keeps two stacks of ``HistoryEntry`` values:

- ``past``: entries reachable by undo, most recent last
- ``future``: entries reachable by redo, next redo last

Every recorded change, whether a plain push, a finished buffer or a finished
group, goes through ``_commit``, which is the only place the future stack is
discarded. Misuse (closing what was never opened, undo with nothing to undo,
...) never raises: the call becomes a no-op and, when diagnostics are
enabled, a warning event is emitted.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Generic, Iterator, List, Optional, Tuple, TypeVar

from undo_history.runtime import telemetry

from .capability import Misuse, Restorable
from .config import HistoryConfig
from .entry import HistoryEntry
from .recording import BufferState, GroupState

T = TypeVar("T")

_NO_BASELINE: Any = object()


class UndoHistory(Generic[T]):
    def __init__(
        self,
        *,
        config: Optional[HistoryConfig] = None,
        initial: Any = _NO_BASELINE,
    ) -> None:
        if config is not None and not isinstance(config, HistoryConfig):
            raise TypeError(
                f"config must be a HistoryConfig, got {type(config).__name__}"
            )
        self.config = config or HistoryConfig()
        self._past: List[HistoryEntry[T]] = []
        self._future: List[HistoryEntry[T]] = []
        self._buffer: Optional[BufferState[T]] = None
        self._group: Optional[GroupState[T]] = None
        self._initial = initial

    # -- queries ---------------------------------------------------------

    @property
    def past(self) -> Tuple[HistoryEntry[T], ...]:
        return tuple(self._past)

    @property
    def future(self) -> Tuple[HistoryEntry[T], ...]:
        return tuple(self._future)

    @property
    def has_baseline(self) -> bool:
        return self._initial is not _NO_BASELINE

    def can_undo(self) -> bool:
        return bool(self._past)

    def can_redo(self) -> bool:
        return bool(self._future)

    def past_len(self) -> int:
        return len(self._past)

    def future_len(self) -> int:
        return len(self._future)

    def peek_undo(self) -> Optional[HistoryEntry[T]]:
        return self._past[-1] if self._past else None

    def peek_redo(self) -> Optional[HistoryEntry[T]]:
        return self._future[-1] if self._future else None

    def is_empty(self) -> bool:
        return not self._past and not self._future

    def buffer_is_empty(self) -> bool:
        return self._buffer is None

    def buffered_value(self) -> Optional[T]:
        return self._buffer.snapshot if self._buffer is not None else None

    def group_is_open(self) -> bool:
        return self._group is not None

    # -- recording -------------------------------------------------------

    def push(self, value: T) -> None:
        """Record ``value``; routed into the open group if there is one."""

        if self._group is not None:
            self._group.append(value)
            return
        if self.config.skip_duplicates:
            top = self.peek_undo()
            if top is not None and not top.grouped and top.value == value:
                return
        self._commit(HistoryEntry.single(value))

    def start_buffer(self, value: T) -> bool:
        """Remember ``value`` as the state before a continuous interaction."""

        if self._buffer is not None:
            self._report(Misuse.REENTRY, "start_buffer", "a buffer is already open")
            return False
        if self._group is not None:
            self._report(
                Misuse.NESTING_VIOLATION,
                "start_buffer",
                "cannot open a buffer while a group is open",
            )
            return False
        self._buffer = BufferState(snapshot=value)
        return True

    def finish_buffer(self, final_value: T) -> bool:
        """Close the buffer, pushing its snapshot if ``final_value`` differs."""

        state = self._buffer
        if state is None:
            self._report(Misuse.UNMATCHED_CLOSE, "finish_buffer", "no open buffer")
            return False
        self._buffer = None
        if state.changed(final_value):
            self.push(state.snapshot)
        return True

    def start_group(self) -> bool:
        if self._group is not None:
            self._report(Misuse.REENTRY, "start_group", "a group is already open")
            return False
        if self._buffer is not None:
            self._report(
                Misuse.NESTING_VIOLATION,
                "start_group",
                "cannot open a group while a buffer is open",
            )
            return False
        self._group = GroupState()
        return True

    def finish_group(self) -> bool:
        """Commit the values pushed since ``start_group`` as one entry."""

        state = self._group
        if state is None:
            self._report(Misuse.UNMATCHED_CLOSE, "finish_group", "no open group")
            return False
        self._group = None
        entry = state.resolve()
        if entry is not None:
            self._commit(entry)
        return True

    def reopen_group(self) -> bool:
        """Move the committed group on top of ``past`` back into an open group."""

        if self._group is not None:
            self._report(Misuse.REENTRY, "reopen_group", "a group is already open")
            return False
        if self._buffer is not None:
            self._report(
                Misuse.NESTING_VIOLATION,
                "reopen_group",
                "cannot reopen a group while a buffer is open",
            )
            return False
        top = self.peek_undo()
        if top is None or not top.grouped:
            self._report(
                Misuse.NOT_A_GROUP, "reopen_group", "last entry is not a group"
            )
            return False
        self._group = GroupState.reopen(self._past.pop())
        return True

    @contextmanager
    def group(self) -> Iterator["UndoHistory[T]"]:
        """Group every push made inside the ``with`` block."""

        opened = self.start_group()
        try:
            yield self
        finally:
            if opened:
                self.finish_group()

    # -- traversal -------------------------------------------------------

    def undo(self, target: Restorable[T]) -> bool:
        """Step back one entry and restore the state now on top of ``past``.

        Returns ``True`` when ``target.restore`` was called. When the undo
        empties ``past`` the baseline given at construction is restored; with
        no baseline only the stacks move.
        """

        self._close_dangling_group("undo")
        if not self._past:
            self._report(Misuse.EMPTY_UNDO, "undo", "nothing to undo")
            return False
        self._future.append(self._past.pop())
        if self._past:
            self._apply(target, self._past[-1], "undo")
            return True
        if self.has_baseline:
            with telemetry.span(
                "history::undo",
                logger_name=self.config.logger_name,
                metadata={"baseline": True},
            ):
                target.restore(self._initial)
            return True
        return False

    def redo(self, target: Restorable[T]) -> bool:
        """Move the next undone entry back onto ``past`` and restore it."""

        self._close_dangling_group("redo")
        if not self._future:
            self._report(Misuse.EMPTY_REDO, "redo", "nothing to redo")
            return False
        entry = self._future.pop()
        self._past.append(entry)
        self._apply(target, entry, "redo")
        return True

    def clear(self) -> None:
        """Drop both stacks and any open buffer or group."""

        self._past.clear()
        self._future.clear()
        self._buffer = None
        self._group = None

    # -- internals -------------------------------------------------------

    def _commit(self, entry: HistoryEntry[T]) -> None:
        self._past.append(entry)
        if self._future:
            self._future.clear()

    def _apply(self, target: Restorable[T], entry: HistoryEntry[T], op: str) -> None:
        # group values are applied in push order for both undo and redo
        with telemetry.span(
            f"history::{op}",
            logger_name=self.config.logger_name,
            metadata={"values": len(entry), "grouped": entry.grouped},
        ):
            for value in entry.values:
                target.restore(value)

    def _close_dangling_group(self, operation: str) -> None:
        if self._group is None:
            return
        self._report(
            Misuse.UNCLOSED_GROUP,
            operation,
            f"group closed automatically before {operation}",
        )
        self.finish_group()

    def _report(self, misuse: Misuse, operation: str, detail: str) -> None:
        if not self.config.diagnostics:
            return
        telemetry.record_event(
            f"history.{misuse.value}",
            level="warning",
            data={"operation": operation, "detail": detail},
            logger_name=self.config.logger_name,
        )
