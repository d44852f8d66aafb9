"""
Process-wide logging shortcut.

A module-level facade over one implicit daily channel, for code that does not
want to carry a LogFacade around:

    from channellog import static as log

    log.set_path("/var/log/app/app.log")
    log.info("started")

Changing the path or retention drops the cached facade; the next call
rebuilds it through the regular ChannelBuilder.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import ChannelConfig, LoggingConfig, load_logging_config, settings
from .diagnostics import configure_diagnostics, is_configured
from .facade import LogFacade
from .severity import Severity
from .writers import DEFAULT_RETENTION_DAYS

STATIC_CHANNEL = "app"

# Module-level singleton cache
_log_instance: Optional[LogFacade] = None
_path: Optional[str] = None
_days: int = DEFAULT_RETENTION_DAYS
_lock = threading.Lock()


def _static_config() -> LoggingConfig:
    base = load_logging_config()
    channel = ChannelConfig(driver="daily", path=_path, days=_days, level=base.level)
    return base.model_copy(update={"default": STATIC_CHANNEL, "channels": {STATIC_CHANNEL: channel}})


def get_log() -> LogFacade:
    """Return the process-wide facade, creating it on first use."""
    global _log_instance

    with _lock:
        if _log_instance is None:
            # A host that configured diagnostics itself keeps its setup
            if not is_configured():
                configure_diagnostics(
                    level=settings.diagnostics.level.value,
                    fmt=settings.diagnostics.format.value,
                )
            _log_instance = LogFacade(_static_config())
        return _log_instance


def _detach() -> Optional[LogFacade]:
    # Caller holds _lock
    global _log_instance
    instance, _log_instance = _log_instance, None
    return instance


def _close(instance: Optional[LogFacade]) -> None:
    if instance is not None:
        instance.registry.close()


def reset_log() -> None:
    """Drop the cached facade and close its writers."""
    with _lock:
        instance = _detach()
    _close(instance)


def get_path() -> Optional[str]:
    return _path


def set_path(path: str | Path | None) -> None:
    """Write the implicit channel to `path` from the next call on."""
    global _path
    with _lock:
        _path = str(path) if path is not None else None
        instance = _detach()
    _close(instance)


def get_days() -> int:
    return _days


def set_days(days: int) -> None:
    """Keep `days` rotated files from the next call on (0 keeps all)."""
    global _days
    with _lock:
        _days = max(int(days), 0)
        instance = _detach()
    _close(instance)


def write(level: Any, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    get_log().write(level, message, context, STATIC_CHANNEL)


def log(level: Any, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(level, message, context)


def debug(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.DEBUG, message, context)


def info(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.INFO, message, context)


def notice(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.NOTICE, message, context)


def warning(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.WARNING, message, context)


def error(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.ERROR, message, context)


def critical(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.CRITICAL, message, context)


def alert(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.ALERT, message, context)


def emergency(message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
    write(Severity.EMERGENCY, message, context)


__all__ = [
    "STATIC_CHANNEL",
    "get_log",
    "reset_log",
    "get_path",
    "set_path",
    "get_days",
    "set_days",
    "write",
    "log",
    "debug",
    "info",
    "notice",
    "warning",
    "error",
    "critical",
    "alert",
    "emergency",
]
