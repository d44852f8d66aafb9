"""
Process-wide shortcut unit tests.
"""

from __future__ import annotations

import io
import logging
import threading
from pathlib import Path

import pytest

from channellog import diagnostics, static
from channellog.diagnostics import configure_diagnostics, get_logger
from channellog.writers import DEFAULT_RETENTION_DAYS, DailyFileWriter


@pytest.fixture
def storage(monkeypatch, tmp_path: Path) -> Path:
    root = tmp_path / "static-storage"
    monkeypatch.setenv("CHANNELLOG_STORAGE_PATH", str(root))
    return root


class TestSingleton:
    def test_same_instance_until_reset(self, storage: Path) -> None:
        first = static.get_log()
        assert static.get_log() is first
        static.reset_log()
        assert static.get_log() is not first

    def test_implicit_channel_is_daily(self, storage: Path) -> None:
        handle = static.get_log().channel(static.STATIC_CHANNEL)
        (writer,) = handle.writers
        assert isinstance(writer, DailyFileWriter)
        assert writer.days == DEFAULT_RETENTION_DAYS
        assert writer.path == storage / "logs" / "app.log"

    def test_reset_closes_writers(self, storage: Path) -> None:
        static.info("opened")
        writer = static.get_log().channel(static.STATIC_CHANNEL).writers[0]
        static.reset_log()
        assert writer.handler.stream is None


class TestWrites:
    def test_shortcuts_write_to_default_location(self, storage: Path) -> None:
        static.info("started", {"pid": 1})
        static.error("failed")
        static.reset_log()

        content = (storage / "logs" / "app.log").read_text(encoding="utf-8")
        assert 'app.INFO: started {"pid":1} []' in content
        assert "app.ERROR: failed [] []" in content

    def test_log_and_write_take_a_level(self, storage: Path) -> None:
        static.log("notice", "via log")
        static.write("ALERT", "via write")
        static.reset_log()

        content = (storage / "logs" / "app.log").read_text(encoding="utf-8")
        assert "app.NOTICE: via log" in content
        assert "app.ALERT: via write" in content

    def test_global_level_applies(self, storage: Path, monkeypatch) -> None:
        monkeypatch.setenv("CHANNELLOG_LEVEL", "warning")
        static.info("hidden")
        static.warning("shown")
        static.reset_log()

        content = (storage / "logs" / "app.log").read_text(encoding="utf-8")
        assert "hidden" not in content
        assert "app.WARNING: shown" in content


class TestPathAndRetention:
    def test_set_path_redirects_writes(self, storage: Path, tmp_path: Path) -> None:
        target = tmp_path / "custom" / "static.log"
        target.parent.mkdir()

        static.info("before")
        static.set_path(target)
        static.info("after")
        static.reset_log()

        assert static.get_path() == str(target)
        assert "after" in target.read_text(encoding="utf-8")
        assert "after" not in (storage / "logs" / "app.log").read_text(encoding="utf-8")

    def test_set_path_rebuilds_facade(self, storage: Path, tmp_path: Path) -> None:
        first = static.get_log()
        static.set_path(tmp_path / "other.log")
        assert static.get_log() is not first

    def test_set_days_rebuilds_with_new_retention(self, storage: Path) -> None:
        static.get_log()
        static.set_days(3)
        assert static.get_days() == 3
        assert static.get_log().channel(static.STATIC_CHANNEL).writers[0].days == 3

    def test_negative_days_are_clamped(self, storage: Path) -> None:
        static.set_days(-1)
        assert static.get_days() == 0

    def test_setters_wait_for_an_ongoing_build(self, storage: Path) -> None:
        done = threading.Event()

        def change() -> None:
            static.set_days(5)
            done.set()

        with static._lock:
            worker = threading.Thread(target=change)
            worker.start()
            assert not done.wait(0.2)
            assert static.get_days() == DEFAULT_RETENTION_DAYS
        worker.join()

        assert static.get_days() == 5
        assert static.get_log().channel(static.STATIC_CHANNEL).writers[0].days == 5


class TestDiagnostics:
    def test_host_configuration_survives_rebuilds(self, storage: Path) -> None:
        host_stream = io.StringIO()
        configure_diagnostics(level="DEBUG", stream=host_stream)

        static.info("first build")
        static.set_days(3)
        static.info("rebuild")
        get_logger("channellog.test").warning("host_visible")

        assert "host_visible" in host_stream.getvalue()
        assert diagnostics._min_level == logging.DEBUG

    def test_settings_applied_when_unconfigured(self, storage: Path, monkeypatch) -> None:
        monkeypatch.setattr(diagnostics, "_configured", False)
        monkeypatch.setattr(diagnostics, "_min_level", logging.DEBUG)

        static.get_log()

        assert diagnostics.is_configured()
        assert diagnostics._min_level == logging.WARNING
