"""Construction-time configuration for ``UndoHistory``."""

from __future__ import annotations

from dataclasses import dataclass

from undo_history.runtime import telemetry


@dataclass(frozen=True, slots=True)
class HistoryConfig:
    diagnostics: bool = False
    skip_duplicates: bool = False
    logger_name: str = "undo_history.history"

    @classmethod
    def from_env(cls) -> "HistoryConfig":
        """Read ``UNDO_HISTORY_DIAGNOSTICS`` and ``UNDO_HISTORY_SKIP_DUPLICATES``."""

        return cls(
            diagnostics=telemetry.env_flag("DIAGNOSTICS", False),
            skip_duplicates=telemetry.env_flag("SKIP_DUPLICATES", False),
        )
