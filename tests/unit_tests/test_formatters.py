"""
Line formatter unit tests.
"""

from __future__ import annotations

from datetime import datetime

import orjson

from channellog.formatters import EMPTY_PLACEHOLDER, LineFormatter, render_mapping
from channellog.severity import Severity

STAMP = datetime(2024, 1, 2, 3, 4, 5)


class TestRender:
    def test_fixed_layout(self) -> None:
        line = LineFormatter().render(STAMP, "app", Severity.WARNING, "disk low", {"free": 5})
        assert line == '[2024-01-02 03:04:05] app.WARNING: disk low {"free":5} []\n'

    def test_empty_context_keeps_placeholders(self) -> None:
        line = LineFormatter().render(STAMP, "app", Severity.INFO, "ping", {})
        assert line == "[2024-01-02 03:04:05] app.INFO: ping [] []\n"
        assert LineFormatter().render(STAMP, "app", Severity.INFO, "ping", None) == line

    def test_contains_channel_severity_and_message(self) -> None:
        for severity in Severity:
            line = LineFormatter().render(STAMP, "billing", severity, "charge failed: card #42", {"id": 1})
            assert "billing" in line
            assert severity.name.upper() in line
            assert "charge failed: card #42" in line

    def test_extra_is_rendered(self) -> None:
        line = LineFormatter().render(STAMP, "app", Severity.INFO, "m", {}, {"pid": 7})
        assert line.endswith(' m [] {"pid":7}\n')

    def test_inline_line_breaks_are_kept(self) -> None:
        line = LineFormatter().render(STAMP, "app", Severity.ERROR, "first\nsecond", {})
        assert "first\nsecond" in line

    def test_custom_date_format(self) -> None:
        formatter = LineFormatter("%d/%m/%Y")
        assert formatter.render(STAMP, "app", Severity.INFO, "m").startswith("[02/01/2024] ")
        assert formatter.date_format == "%d/%m/%Y"

    def test_console_line(self) -> None:
        assert LineFormatter().render_console(STAMP, "hello") == "[2024-01-02 03:04:05] hello\n"


class TestRenderMapping:
    def test_empty_values(self) -> None:
        assert render_mapping({}) == EMPTY_PLACEHOLDER
        assert render_mapping(None) == EMPTY_PLACEHOLDER

    def test_compact_json(self) -> None:
        rendered = render_mapping({"user": "ana", "tags": ["a", "b"], "nested": {"x": 1}})
        assert " " not in rendered
        assert orjson.loads(rendered) == {"user": "ana", "tags": ["a", "b"], "nested": {"x": 1}}

    def test_non_serializable_values_fall_back_to_str(self) -> None:
        class Token:
            def __str__(self) -> str:
                return "token-1"

        assert orjson.loads(render_mapping({"token": Token()})) == {"token": "token-1"}

    def test_datetime_values(self) -> None:
        assert orjson.loads(render_mapping({"at": STAMP})) == {"at": "2024-01-02T03:04:05+00:00"}
