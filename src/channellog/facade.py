"""
LogFacade: the public write API.

    log = LogFacade({"default": "app", "channels": {"app": {"driver": "daily"}}})
    log.info("user signed in", {"user_id": 42})
    log.select_channel("audit").warning("permission changed")
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping, Optional

from .builder import ChannelBuilder
from .config.loader import ConfigSource, load_logging_config
from .events import EVENT_WRITING, EVENT_WRITTEN, EventDispatcher, NullDispatcher, safe_dispatch
from .formatters import LineFormatter
from .registry import ChannelRegistry
from .severity import Severity, normalize
from .sink import SinkHandle

Clock = Callable[[], datetime]


def _local_now() -> datetime:
    return datetime.now()


def _stdout_is_interactive() -> bool:
    isatty = getattr(sys.stdout, "isatty", None)
    try:
        return bool(isatty and isatty())
    except ValueError:
        # Closed stream
        return False


class LogFacade:
    """
    Resolves channels and writes leveled messages to them.

    The target channel of a write is the explicit `channel` argument, else the
    last resolved or selected channel, else the configured default.
    """

    def __init__(
        self,
        config: ConfigSource = None,
        *,
        events: Optional[EventDispatcher] = None,
        builder: Optional[ChannelBuilder] = None,
        console_echo: Optional[bool] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        if builder is None:
            builder = ChannelBuilder(load_logging_config(config))
        self._registry = ChannelRegistry(builder=builder)
        self._events: EventDispatcher = events if events is not None else NullDispatcher()
        self._formatter = LineFormatter(builder.config.date_format)
        self._clock: Clock = clock or _local_now

        if console_echo is None:
            console_echo = builder.config.console_echo
        self._console_echo = console_echo

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def registry(self) -> ChannelRegistry:
        return self._registry

    @property
    def formatter(self) -> LineFormatter:
        return self._formatter

    @property
    def default_channel(self) -> str:
        return self._registry.default_channel

    @property
    def selected_channel(self) -> Optional[str]:
        return self._registry.last_resolved

    @property
    def console_echo(self) -> bool:
        if self._console_echo is None:
            return _stdout_is_interactive()
        return self._console_echo

    def channel(self, name: str) -> SinkHandle:
        """Resolve (and cache) the SinkHandle of `name`."""
        return self._registry.get(name)

    def select_channel(self, name: Optional[str] = None) -> "LogFacade":
        """Make `name` (or the default channel) the ambient channel. Chainable."""
        self._registry.select(name or self.default_channel)
        return self

    # ------------------------------------------------------------------
    # Write path
    # ------------------------------------------------------------------

    def write(
        self,
        level: Any,
        message: Any,
        context: Optional[Mapping[str, Any]] = None,
        channel: Optional[str] = None,
    ) -> None:
        channel_name = channel or self._registry.last_resolved or self.default_channel
        handle = self._registry.get(channel_name)
        severity = normalize(level)
        context_dict: Dict[str, Any] = dict(context or {})

        payload: Dict[str, Any] = {
            "channel": channel_name,
            "level": severity.label,
            "message": message,
            "context": context_dict,
        }
        safe_dispatch(self._events, EVENT_WRITING, payload)

        timestamp = self._clock()
        if handle.handles(severity):
            line = self._formatter.render(timestamp, handle.name, severity, message, context_dict)
            handle.emit(line, severity)

        if self.console_echo:
            sys.stdout.write(self._formatter.render_console(timestamp, message))
            sys.stdout.flush()

        safe_dispatch(
            self._events,
            EVENT_WRITTEN,
            {**payload, "time": datetime.now(timezone.utc).isoformat(timespec="seconds")},
        )

    def log(self, level: Any, message: Any, context: Optional[Mapping[str, Any]] = None) -> None:
        self.write(level, message, context)

    # ------------------------------------------------------------------
    # Per-severity shortcuts
    # ------------------------------------------------------------------

    def debug(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.DEBUG, message, context, channel)

    def info(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.INFO, message, context, channel)

    def notice(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.NOTICE, message, context, channel)

    def warning(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.WARNING, message, context, channel)

    def error(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.ERROR, message, context, channel)

    def critical(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.CRITICAL, message, context, channel)

    def alert(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.ALERT, message, context, channel)

    def emergency(self, message: Any, context: Optional[Mapping[str, Any]] = None, channel: Optional[str] = None) -> None:
        self.write(Severity.EMERGENCY, message, context, channel)


__all__ = ["LogFacade", "Clock"]
