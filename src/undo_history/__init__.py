"""In-process undo/redo history for a single piece of application state."""

from .history import HistoryConfig, HistoryEntry, Misuse, Restorable, UndoHistory

__all__ = [
    "HistoryConfig",
    "HistoryEntry",
    "Misuse",
    "Restorable",
    "UndoHistory",
    "history",
    "runtime",
]

__version__ = "0.1.0"
