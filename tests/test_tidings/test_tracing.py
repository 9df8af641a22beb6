"""Tests for tidings.tracing."""
from __future__ import annotations

import logging

import pytest

from tidings import EmissionCounter, EventEmitter, MonoEmitter, counting_listener, logging_listener


class TestLoggingListener:
    def test_logs_emission(self, caplog: pytest.LogCaptureFixture) -> None:
        events: EventEmitter[str] = EventEmitter()
        events.on("saved", logging_listener("saved"))

        with caplog.at_level(logging.INFO, logger="tidings"):
            events.emit_sync("saved", "doc-1", 3)

        assert any("event=saved" in r.message for r in caplog.records)
        assert any("'doc-1', 3" in r.message for r in caplog.records)

    def test_custom_logger_and_level(self, caplog: pytest.LogCaptureFixture) -> None:
        custom = logging.getLogger("my_app")
        mono = MonoEmitter()
        mono.on(logging_listener("tick", logger=custom, level=logging.WARNING))

        with caplog.at_level(logging.WARNING, logger="my_app"):
            mono.emit_sync()

        assert [r.levelno for r in caplog.records if r.name == "my_app"] == [logging.WARNING]


class TestCountingListener:
    def test_counts_and_records_last_args(self) -> None:
        counter = EmissionCounter()
        mono = MonoEmitter()
        mono.on(counting_listener(counter))
        mono.emit_sync(1)
        mono.emit_sync(2, 3)
        assert counter.emissions == 2
        assert counter.last_args == (2, 3)

    def test_defaults(self) -> None:
        counter = EmissionCounter()
        assert counter.emissions == 0
        assert counter.last_args is None
