"""
channellog: channel-based logging facade.

Resolves named channels to physical writers (file, daily file, stderr,
syslog, or a stack of other channels), renders every entry in one line
layout and announces writes to an optional event dispatcher.

Design Pattern: Strategy Pattern for drivers and writers, memoized registry.
Library: pydantic-settings for configuration, structlog + orjson for diagnostics.
"""

from .builder import ChannelBuilder, Driver
from .config import ChannelConfig, LoggingConfig, LoggingSettings, load_logging_config
from .diagnostics import configure_diagnostics, get_logger
from .events import EVENT_WRITING, EVENT_WRITTEN, CallbackDispatcher, EventDispatcher, NullDispatcher
from .exceptions import ChannelCycleError, ChannelLogError, ConfigurationError
from .facade import LogFacade
from .formatters import LineFormatter
from .registry import ChannelRegistry
from .severity import Severity, normalize
from .sink import SinkHandle

__all__ = [
    "ChannelBuilder",
    "ChannelConfig",
    "ChannelCycleError",
    "ChannelLogError",
    "ChannelRegistry",
    "CallbackDispatcher",
    "ConfigurationError",
    "Driver",
    "EVENT_WRITING",
    "EVENT_WRITTEN",
    "EventDispatcher",
    "LineFormatter",
    "LogFacade",
    "LoggingConfig",
    "LoggingSettings",
    "NullDispatcher",
    "Severity",
    "SinkHandle",
    "configure_diagnostics",
    "get_logger",
    "load_logging_config",
    "normalize",
]
