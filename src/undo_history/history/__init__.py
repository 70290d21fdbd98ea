"""Undo/redo history engine and its recording extensions."""

from .capability import Misuse, Restorable
from .config import HistoryConfig
from .entry import HistoryEntry
from .recording import BufferState, GroupState
from .stack import UndoHistory

__all__ = [
    "BufferState",
    "GroupState",
    "HistoryConfig",
    "HistoryEntry",
    "Misuse",
    "Restorable",
    "UndoHistory",
]
