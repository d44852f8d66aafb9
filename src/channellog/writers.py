"""
Physical writer abstractions and concrete implementations.

Writers receive already rendered lines. File handling, rotation and the syslog
wire format are delegated to the standard library handlers; a writer only
applies its own minimum level and hands the line over.
"""

from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from logging.handlers import SysLogHandler, TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from .severity import DEFAULT_SEVERITY, Severity

DEFAULT_RETENTION_DAYS = 14
DEFAULT_FACILITY = "user"
DEFAULT_SYSLOG_SOCKET = "/dev/log"

# All eight severities onto syslog priority names
_SYSLOG_PRIORITIES: dict[str, str] = {
    Severity.DEBUG.label: "debug",
    Severity.INFO.label: "info",
    Severity.NOTICE.label: "notice",
    Severity.WARNING.label: "warning",
    Severity.ERROR.label: "err",
    Severity.CRITICAL.label: "crit",
    Severity.ALERT.label: "alert",
    Severity.EMERGENCY.label: "emerg",
}


# =============================================================================
# Writer Abstraction (Strategy Pattern)
# =============================================================================


class BaseWriter(ABC):
    """Abstract base class for physical writers."""

    def __init__(self, level: Severity = DEFAULT_SEVERITY) -> None:
        self.level = level

    def handles(self, severity: Severity) -> bool:
        return severity >= self.level

    def write(self, line: str, severity: Severity) -> bool:
        """Write a rendered line. Returns False when filtered by level."""
        if not self.handles(severity):
            return False
        self._write(line, severity)
        return True

    @abstractmethod
    def _write(self, line: str, severity: Severity) -> None:
        """Persist a line that passed the level check."""
        ...

    @abstractmethod
    def close(self) -> None:
        """Close the writer and release resources."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level.key})"


class HandlerWriter(BaseWriter):
    """Writer backed by a standard library logging handler.

    The handler's formatter passes the rendered line through unchanged and
    its lock keeps concurrent appends from interleaving.
    """

    def __init__(self, handler: logging.Handler, level: Severity = DEFAULT_SEVERITY, *, name: str = "channellog") -> None:
        super().__init__(level)
        self._name = name
        self.handler = handler
        self.handler.setFormatter(logging.Formatter("%(message)s"))
        if isinstance(self.handler, logging.StreamHandler):
            # Lines arrive newline-terminated
            self.handler.terminator = ""

    def _make_record(self, line: str, severity: Severity) -> logging.LogRecord:
        record = logging.LogRecord(
            name=self._name,
            level=int(severity),
            pathname=__file__,
            lineno=0,
            msg=line,
            args=None,
            exc_info=None,
        )
        record.levelname = severity.label
        return record

    def _write(self, line: str, severity: Severity) -> None:
        self.handler.handle(self._make_record(line, severity))

    def close(self) -> None:
        self.handler.close()


class StreamWriter(HandlerWriter):
    """Writes to a text stream, standard error by default."""

    def __init__(self, stream: Any = None, level: Severity = DEFAULT_SEVERITY) -> None:
        super().__init__(logging.StreamHandler(stream or sys.stderr), level)

    def close(self) -> None:
        # The stream belongs to the process, only flush it
        self.handler.flush()
        super().close()


class FileWriter(HandlerWriter):
    """Appends to a single file, opened on first write."""

    def __init__(self, path: str | Path, level: Severity = DEFAULT_SEVERITY) -> None:
        self.path = Path(path)
        super().__init__(logging.FileHandler(self.path, mode="a", encoding="utf-8", delay=True), level)


class DailyFileWriter(HandlerWriter):
    """Appends to a file rotated at midnight, keeping `days` old files (0 keeps all)."""

    def __init__(
        self,
        path: str | Path,
        days: int = DEFAULT_RETENTION_DAYS,
        level: Severity = DEFAULT_SEVERITY,
    ) -> None:
        self.path = Path(path)
        self.days = max(int(days), 0)
        handler = TimedRotatingFileHandler(
            self.path,
            when="midnight",
            backupCount=self.days,
            encoding="utf-8",
            delay=True,
        )
        super().__init__(handler, level)


class SyslogWriter(HandlerWriter):
    """Sends lines to syslog under `ident` and `facility`."""

    def __init__(
        self,
        ident: str,
        facility: str | int | None = DEFAULT_FACILITY,
        level: Severity = DEFAULT_SEVERITY,
        address: str | tuple[str, int] | None = None,
    ) -> None:
        self.ident = ident
        self.facility = resolve_facility(facility)
        handler = SysLogHandler(address=resolve_syslog_address(address), facility=self.facility)
        handler.ident = f"{ident}: "
        handler.priority_map = dict(_SYSLOG_PRIORITIES)
        super().__init__(handler, level, name=ident)

    def _write(self, line: str, severity: Severity) -> None:
        super()._write(line.rstrip("\n"), severity)


# =============================================================================
# Helpers
# =============================================================================


def resolve_facility(facility: str | int | None) -> int:
    """Map a facility name or code to its syslog code. Unknown names map to `user`."""
    if isinstance(facility, int) and not isinstance(facility, bool):
        return facility
    name = str(facility or DEFAULT_FACILITY).strip().lower()
    if name.startswith("log_"):
        name = name[4:]
    return SysLogHandler.facility_names.get(name, SysLogHandler.LOG_USER)


def resolve_syslog_address(address: str | tuple[str, int] | None) -> str | tuple[str, int]:
    """
    Resolve the syslog destination.

    `host:port` strings become UDP addresses, other strings are socket paths.
    Without an address the local socket is used when present, else UDP on
    localhost.
    """
    if isinstance(address, tuple):
        return address
    if address:
        host, sep, port = str(address).rpartition(":")
        if sep and host and port.isdigit():
            return (host, int(port))
        return str(address)
    if os.path.exists(DEFAULT_SYSLOG_SOCKET):
        return DEFAULT_SYSLOG_SOCKET
    return ("localhost", logging.handlers.SYSLOG_UDP_PORT)


__all__ = [
    "BaseWriter",
    "HandlerWriter",
    "StreamWriter",
    "FileWriter",
    "DailyFileWriter",
    "SyslogWriter",
    "DEFAULT_RETENTION_DAYS",
    "DEFAULT_FACILITY",
    "resolve_facility",
    "resolve_syslog_address",
]
