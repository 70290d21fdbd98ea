from __future__ import annotations

from typing import Any, Callable, Dict, List

import pytest

from undo_history.runtime import telemetry


class StateHolder:
    """Minimal application object implementing ``restore``."""

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.calls: List[Any] = []

    def restore(self, value: Any) -> None:
        self.calls.append(value)
        self.value = value


@pytest.fixture
def make_holder() -> Callable[..., StateHolder]:
    return StateHolder


@pytest.fixture
def holder() -> StateHolder:
    return StateHolder()


@pytest.fixture
def captured_events(monkeypatch: pytest.MonkeyPatch) -> List[Dict[str, Any]]:
    events: List[Dict[str, Any]] = []

    def fake_record_event(name: str, **kwargs: Any) -> None:
        events.append({"name": name, **kwargs})

    monkeypatch.setattr(telemetry, "record_event", fake_record_event)
    return events
