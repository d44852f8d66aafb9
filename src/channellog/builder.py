"""
ChannelBuilder: turns a channel's configuration record into a SinkHandle.

Driver selection follows the Strategy + Factory pattern:
- single: one append-only file
- daily: one file rotated at midnight with a retention window
- stderr: the standard error stream
- syslog: the system logger
- stack: the writers of several other channels, shared without ownership

Unknown drivers build like `single`.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Protocol

from .config.logging import ChannelConfig, LoggingConfig
from .diagnostics import get_logger
from .severity import Severity, normalize
from .sink import SinkHandle
from .writers import (
    DEFAULT_FACILITY,
    DEFAULT_RETENTION_DAYS,
    BaseWriter,
    DailyFileWriter,
    FileWriter,
    StreamWriter,
    SyslogWriter,
)

logger = get_logger("channellog.builder")


class Driver(str, Enum):
    """Supported channel drivers."""

    SINGLE = "single"
    STACK = "stack"
    DAILY = "daily"
    STDERR = "stderr"
    SYSLOG = "syslog"


class ChannelResolver(Protocol):
    """What the stack driver needs from the registry."""

    def get(self, name: str) -> SinkHandle: ...


DriverFactory = Callable[[str, ChannelConfig, Severity, ChannelResolver], SinkHandle]


class ChannelBuilder:
    """Builds SinkHandles from a LoggingConfig."""

    def __init__(self, config: Optional[LoggingConfig] = None) -> None:
        self._config = config or LoggingConfig()
        # Driver factory table (Strategy Pattern)
        self._factories: Dict[Driver, DriverFactory] = {
            Driver.SINGLE: self._build_single,
            Driver.STACK: self._build_stack,
            Driver.DAILY: self._build_daily,
            Driver.STDERR: self._build_stderr,
            Driver.SYSLOG: self._build_syslog,
        }

    @property
    def config(self) -> LoggingConfig:
        return self._config

    def config_for(self, name: str) -> ChannelConfig:
        """Configuration record of `name`; unconfigured channels are single files."""
        configured = self._config.channel(name)
        if configured is not None:
            return configured
        return ChannelConfig(driver=Driver.SINGLE.value, level=self._config.level)

    def driver_for(self, name: str, channel_config: ChannelConfig) -> Driver:
        try:
            return Driver(channel_config.driver)
        except ValueError:
            logger.warning("unknown_channel_driver", channel=name, driver=channel_config.driver, fallback=Driver.SINGLE.value)
            return Driver.SINGLE

    def build(self, name: str, resolver: ChannelResolver) -> SinkHandle:
        """Build the SinkHandle for `name`, resolving stack members through `resolver`."""
        channel_config = self.config_for(name)
        level = normalize(channel_config.level or self._config.level)
        driver = self.driver_for(name, channel_config)
        handle = self._factories[driver](name, channel_config, level, resolver)
        logger.debug("channel_built", channel=name, driver=driver.value, writers=len(handle.writers))
        return handle

    # ------------------------------------------------------------------
    # Drivers
    # ------------------------------------------------------------------

    def _build_single(self, name: str, cfg: ChannelConfig, level: Severity, resolver: ChannelResolver) -> SinkHandle:
        display = cfg.name or name
        writer = FileWriter(self.resolve_path(cfg.path, display), level)
        return self._owned(display, level, writer)

    def _build_daily(self, name: str, cfg: ChannelConfig, level: Severity, resolver: ChannelResolver) -> SinkHandle:
        display = cfg.name or name
        days = cfg.days if cfg.days is not None else DEFAULT_RETENTION_DAYS
        writer = DailyFileWriter(self.resolve_path(cfg.path, display), days, level)
        return self._owned(display, level, writer)

    def _build_stderr(self, name: str, cfg: ChannelConfig, level: Severity, resolver: ChannelResolver) -> SinkHandle:
        return self._owned(cfg.name or name, level, StreamWriter(level=level))

    def _build_syslog(self, name: str, cfg: ChannelConfig, level: Severity, resolver: ChannelResolver) -> SinkHandle:
        display = cfg.name or name
        facility = cfg.facility if cfg.facility is not None else DEFAULT_FACILITY
        writer = SyslogWriter(cfg.ident or display, facility, level, cfg.address)
        return self._owned(display, level, writer)

    def _build_stack(self, name: str, cfg: ChannelConfig, level: Severity, resolver: ChannelResolver) -> SinkHandle:
        members = cfg.channels if cfg.channels is not None else self.default_stack_members(name)
        writers: List[BaseWriter] = []
        for child in members:
            writers.extend(resolver.get(child).writers)
        # Shared, non-owning: children stay the owners
        return SinkHandle(name=cfg.name or name, minimum_level=level, writers=tuple(writers), owned=())

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def default_stack_members(self, name: str) -> List[str]:
        """Every configured non-stack channel other than `name`, in configuration order."""
        return [
            member
            for member, member_config in self._config.channels.items()
            if member != name and member_config.driver != Driver.STACK.value
        ]

    def resolve_path(self, path: Optional[str], name: str) -> Path:
        """
        Explicit paths are used as given; otherwise `<logs_dir>/<name>.log`.

        The logs directory is created when missing. A failure to create it is
        reported and otherwise ignored; the writer surfaces it on first write.
        """
        logs_dir = self._config.logs_dir
        try:
            logs_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.warning("logs_dir_unavailable", path=str(logs_dir), error=str(exc))
        if path:
            return Path(path)
        return logs_dir / f"{name}.log"

    @staticmethod
    def _owned(name: str, level: Severity, writer: BaseWriter) -> SinkHandle:
        return SinkHandle(name=name, minimum_level=level, writers=(writer,), owned=(writer,))


__all__ = ["ChannelBuilder", "ChannelResolver", "Driver", "DriverFactory"]
