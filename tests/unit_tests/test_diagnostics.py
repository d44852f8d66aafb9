"""
Diagnostic logger unit tests.
"""

from __future__ import annotations

import io

import orjson
import structlog

from channellog.diagnostics import configure_diagnostics, get_logger


class TestConsoleFormat:
    def test_renders_level_name_event_and_fields(self, diagnostics_stream: io.StringIO) -> None:
        get_logger("channellog.test").warning("channel_rebuilt", channel="app", attempts=2)
        assert diagnostics_stream.getvalue() == " WARNING | channellog.test | channel_rebuilt channel=app attempts=2\n"

    def test_default_logger_name(self, diagnostics_stream: io.StringIO) -> None:
        get_logger().error("boom")
        assert "| channellog | boom" in diagnostics_stream.getvalue()


class TestJsonFormat:
    def test_renders_one_json_object_per_line(self) -> None:
        stream = io.StringIO()
        configure_diagnostics(level="INFO", fmt="json", stream=stream)

        get_logger("channellog.test").info("config_loaded", channels=3)

        record = orjson.loads(stream.getvalue())
        assert record["event"] == "config_loaded"
        assert record["level"] == "info"
        assert record["logger"] == "channellog.test"
        assert record["channels"] == 3
        assert "timestamp" in record


class TestLevelFilter:
    def test_below_minimum_is_dropped(self) -> None:
        stream = io.StringIO()
        configure_diagnostics(level="ERROR", stream=stream)

        logger = get_logger("channellog.test")
        logger.warning("ignored")
        logger.error("kept")

        assert stream.getvalue().count("\n") == 1
        assert "kept" in stream.getvalue()

    def test_unknown_level_name_defaults_to_warning(self) -> None:
        stream = io.StringIO()
        configure_diagnostics(level="chatty", stream=stream)

        logger = get_logger("channellog.test")
        logger.info("ignored")
        logger.warning("kept")

        assert "ignored" not in stream.getvalue()
        assert "kept" in stream.getvalue()

    def test_reconfiguration_applies_to_existing_loggers(self) -> None:
        logger = get_logger("channellog.test")
        stream = io.StringIO()
        configure_diagnostics(level="DEBUG", stream=stream)
        logger.debug("now_visible")
        assert "now_visible" in stream.getvalue()


def test_host_structlog_configuration_is_untouched(diagnostics_stream: io.StringIO) -> None:
    before = structlog.get_config()
    get_logger("channellog.test").warning("isolated")
    assert structlog.get_config() == before


def test_broken_stream_does_not_raise() -> None:
    stream = io.StringIO()
    stream.close()
    configure_diagnostics(level="DEBUG", stream=stream)
    get_logger("channellog.test").error("lost")
