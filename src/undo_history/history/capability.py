"""Application-facing capability and misuse taxonomy."""

from __future__ import annotations

from enum import Enum
from typing import Protocol, TypeVar

T_contra = TypeVar("T_contra", contravariant=True)


class Restorable(Protocol[T_contra]):
    """Protocol implemented by the object whose state the history tracks."""

    def restore(self, value: T_contra) -> None:
        """Re-apply ``value`` to the live application state."""
        ...


class Misuse(str, Enum):
    """Caller mistakes the engine tolerates by turning the call into a no-op."""

    REENTRY = "reentry"
    UNMATCHED_CLOSE = "unmatched_close"
    NESTING_VIOLATION = "nesting_violation"
    EMPTY_UNDO = "empty_undo"
    EMPTY_REDO = "empty_redo"
    NOT_A_GROUP = "not_a_group"
    UNCLOSED_GROUP = "unclosed_group"
