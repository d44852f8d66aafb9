"""
Line formatting.

One fixed layout shared by every writer:

    [<timestamp>] <channel>.<SEVERITY>: <message> <context> <extra>
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping

import orjson

from .severity import Severity

DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Empty context/extra keep their column so simple scrapers can split on spaces
EMPTY_PLACEHOLDER = "[]"


# =============================================================================
# JSON Serialization
# =============================================================================


def orjson_dumps(v: Any, *, default: Any = str) -> str:
    """Compact JSON serialization using orjson."""
    return orjson.dumps(v, default=default, option=orjson.OPT_NON_STR_KEYS | orjson.OPT_NAIVE_UTC).decode()


def render_mapping(value: Mapping[str, Any] | None) -> str:
    """Render a context or extra mapping inline."""
    if not value:
        return EMPTY_PLACEHOLDER
    try:
        return orjson_dumps(dict(value))
    except (TypeError, orjson.JSONEncodeError):
        return str(dict(value))


# =============================================================================
# Line Formatter
# =============================================================================


class LineFormatter:
    """Renders log entries in the fixed single-line layout."""

    def __init__(self, date_format: str = DEFAULT_DATE_FORMAT) -> None:
        self._date_format = date_format

    @property
    def date_format(self) -> str:
        return self._date_format

    def format_timestamp(self, timestamp: datetime) -> str:
        return timestamp.strftime(self._date_format)

    def render(
        self,
        timestamp: datetime,
        channel: str,
        severity: Severity,
        message: Any,
        context: Mapping[str, Any] | None = None,
        extra: Mapping[str, Any] | None = None,
    ) -> str:
        """Render one log line, terminated by a newline."""
        return (
            f"[{self.format_timestamp(timestamp)}] {channel}.{severity.label}: "
            f"{message} {render_mapping(context)} {render_mapping(extra)}\n"
        )

    def render_console(self, timestamp: datetime, message: Any) -> str:
        """Render the human-visible console mirror of a raw message."""
        return f"[{self.format_timestamp(timestamp)}] {message}\n"


__all__ = [
    "DEFAULT_DATE_FORMAT",
    "EMPTY_PLACEHOLDER",
    "LineFormatter",
    "orjson_dumps",
    "render_mapping",
]
