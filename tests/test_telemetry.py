from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Tuple

import pytest

from undo_history import HistoryConfig
from undo_history.runtime import telemetry


class FakeLogger:
    def __init__(self) -> None:
        self.records: List[Tuple[str, str, Any]] = []
        self.context: dict[str, str] = {}
        self.profiled: List[str] = []

    def warning_with(self, message: str, pairs: Any) -> None:
        self.records.append(("warning", message, pairs))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, pairs))

    def info(self, message: str) -> None:
        self.records.append(("info", message, None))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        self.profiled.append(name)
        yield


@pytest.fixture
def fake_logger(monkeypatch: pytest.MonkeyPatch) -> FakeLogger:
    logger = FakeLogger()
    monkeypatch.setattr(telemetry, "get_logger", lambda name=None: logger)
    return logger


def test_record_event_uses_structured_method(fake_logger: FakeLogger) -> None:
    telemetry.record_event(
        "history.reentry", level="warning", data={"operation": "start_group"}
    )

    level, message, pairs = fake_logger.records[-1]
    assert level == "warning"
    assert message == "event::history.reentry"
    assert ("event", "history.reentry") in pairs
    assert ("operation", "start_group") in pairs


def test_record_event_falls_back_to_plain_method(fake_logger: FakeLogger) -> None:
    telemetry.record_event("history.cleared", data={"entries": 3})

    level, message, _ = fake_logger.records[-1]
    assert level == "info"
    assert message.startswith("event::history.cleared")
    assert "'entries': 3" in message


def test_record_event_rejects_unknown_level(fake_logger: FakeLogger) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("history.reentry", level="shout")


def test_span_profiles_and_clears_context(fake_logger: FakeLogger) -> None:
    with telemetry.span("history::undo", metadata={"values": 2}) as handle:
        assert fake_logger.context == {"values": "2"}
        handle.add_metadata("grouped", True)

    assert fake_logger.profiled == ["history::undo"]
    assert fake_logger.context == {}


def test_span_logs_failure_and_reraises(fake_logger: FakeLogger) -> None:
    with pytest.raises(RuntimeError):
        with telemetry.span("history::redo", metadata={"values": 1}):
            raise RuntimeError("restore failed")

    level, message, pairs = fake_logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert ("reason", "restore failed") in pairs
    assert fake_logger.context == {}


def test_configure_rejects_conflicting_arguments() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(config=object(), preset="development")


def test_configure_rejects_unknown_preset() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(preset="verbose")


def test_env_flag_parsing(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_SAMPLE", "Yes")
    assert telemetry.env_flag("SAMPLE", False) is True

    monkeypatch.setenv("UNDO_HISTORY_SAMPLE", "0")
    assert telemetry.env_flag("SAMPLE", True) is False

    monkeypatch.delenv("UNDO_HISTORY_SAMPLE")
    assert telemetry.env_flag("SAMPLE", True) is True


def test_history_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("UNDO_HISTORY_DIAGNOSTICS", "on")
    monkeypatch.delenv("UNDO_HISTORY_SKIP_DUPLICATES", raising=False)

    config = HistoryConfig.from_env()

    assert config.diagnostics is True
    assert config.skip_duplicates is False
