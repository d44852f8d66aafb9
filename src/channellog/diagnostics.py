"""
Diagnostic logging for channellog itself.

channellog reports its own recoveries (unknown drivers, broken listeners,
unreadable configuration) through structlog. The loggers returned here are
wrapped locally instead of going through `structlog.configure`, so a host
application's structlog setup is left untouched.

Library: structlog + orjson.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Literal

import structlog
from structlog.typing import EventDict, WrappedLogger

from .formatters import orjson_dumps

DiagnosticFormat = Literal["console", "json"]

# =============================================================================
# Global State
# =============================================================================

_min_level: int = logging.WARNING
_format: DiagnosticFormat = "console"
_stream: Any = None
_configured: bool = False


# =============================================================================
# Structlog Processors
# =============================================================================


def filter_by_level(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drop events below the configured diagnostic level."""
    if getattr(logging, method_name.upper(), logging.INFO) < _min_level:
        raise structlog.DropEvent
    return event_dict


def add_timestamp(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add ISO 8601 timestamp to log event."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat()
    return event_dict


def add_logger_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add logger name to log event."""
    event_dict["logger"] = event_dict.pop("_name", "channellog")
    return event_dict


def stderr_renderer(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> str:
    """Write the event to stderr. Returns empty to suppress the wrapped logger's output."""
    if _format == "json":
        output = orjson_dumps(event_dict)
    else:
        level = str(event_dict.pop("level", method_name)).upper()
        name = event_dict.pop("logger", "channellog")
        message = event_dict.pop("event", "")
        event_dict.pop("timestamp", None)
        extras = " ".join(f"{k}={v}" for k, v in event_dict.items())
        output = f"{level:>8} | {name} | {message}" + (f" {extras}" if extras else "")

    stream = _stream or sys.stderr
    try:
        stream.write(output + "\n")
        stream.flush()
    except Exception:
        pass  # Diagnostics must never break the caller
    return ""


_PROCESSORS = [
    filter_by_level,
    structlog.processors.add_log_level,
    add_timestamp,
    add_logger_name,
    structlog.processors.format_exc_info,
    stderr_renderer,
]


# =============================================================================
# Public API
# =============================================================================


def get_logger(name: str | None = None) -> Any:
    """Get a diagnostic logger bound to `name`."""
    return structlog.wrap_logger(
        structlog.ReturnLogger(),
        processors=_PROCESSORS,
        wrapper_class=structlog.make_filtering_bound_logger(logging.NOTSET),
        context_class=dict,
        _name=name or "channellog",
    )


def configure_diagnostics(
    *,
    level: str = "WARNING",
    fmt: str = "console",
    stream: Any = None,
) -> None:
    """
    Configure diagnostic output.

    Args:
        level: Minimum level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: Output format (console, json)
        stream: Target stream, stderr when None
    """
    global _min_level, _format, _stream, _configured

    _min_level = getattr(logging, str(level).upper(), logging.WARNING)
    _format = "json" if str(fmt).lower() == "json" else "console"
    _stream = stream
    _configured = True


def is_configured() -> bool:
    """True once `configure_diagnostics` has been called."""
    return _configured


__all__ = ["configure_diagnostics", "get_logger", "is_configured"]
