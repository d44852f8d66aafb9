"""
ChannelRegistry: lazily built, memoized channel cache.
"""

from __future__ import annotations

import threading
from typing import Dict, List, Optional

from .builder import ChannelBuilder
from .config.logging import LoggingConfig
from .diagnostics import get_logger
from .exceptions import ChannelCycleError
from .sink import SinkHandle

logger = get_logger("channellog.registry")


class ChannelRegistry:
    """
    Maps channel names to SinkHandles, building each one on first use.

    A name keeps resolving to the same handle until it is invalidated. The
    build-and-cache path runs under one re-entrant lock: concurrent first
    resolutions build a single handle, and stack channels can resolve their
    members recursively from inside a build.
    """

    def __init__(self, config: Optional[LoggingConfig] = None, *, builder: Optional[ChannelBuilder] = None) -> None:
        self._builder = builder or ChannelBuilder(config)
        self._handles: Dict[str, SinkHandle] = {}
        self._last_resolved: Optional[str] = None
        self._building: List[str] = []
        self._lock = threading.RLock()

    @property
    def config(self) -> LoggingConfig:
        return self._builder.config

    @property
    def default_channel(self) -> str:
        return self.config.default

    @property
    def last_resolved(self) -> Optional[str]:
        """Most recently built or selected channel."""
        return self._last_resolved

    @property
    def resolved(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._handles)

    def __contains__(self, name: object) -> bool:
        return name in self._handles

    def get(self, name: str) -> SinkHandle:
        """Return the cached handle for `name`, building it on first use."""
        with self._lock:
            handle = self._handles.get(name)
            if handle is not None:
                return handle

            if name in self._building:
                raise ChannelCycleError(channel=name, path=list(self._building))

            self._building.append(name)
            try:
                handle = self._builder.build(name, self)
            finally:
                self._building.pop()

            self._handles[name] = handle
            self._last_resolved = name
            return handle

    def select(self, name: str) -> SinkHandle:
        """Resolve `name` and make it the ambient channel, cached or not."""
        with self._lock:
            handle = self.get(name)
            self._last_resolved = name
            return handle

    def invalidate(self, name: Optional[str] = None) -> List[str]:
        """
        Drop cached handles so they rebuild on next use.

        Without a name every entry is dropped. With a name, stack handles that
        borrow the dropped handle's writers are dropped with it. Writers owned
        by dropped handles are closed.

        Returns:
            Names of the dropped entries.
        """
        with self._lock:
            if name is None:
                dropped = list(self._handles.items())
                self._handles.clear()
            else:
                target = self._handles.pop(name, None)
                if target is None:
                    return []
                dropped = [(name, target)]
                for other, handle in list(self._handles.items()):
                    if handle.borrows_from(target):
                        dropped.append((other, self._handles.pop(other)))

        for _, handle in dropped:
            handle.close()

        names = [dropped_name for dropped_name, _ in dropped]
        if names:
            logger.debug("channels_invalidated", channels=names)
        return names

    def close(self) -> None:
        """Drop every handle and close the writers they own."""
        self.invalidate()


__all__ = ["ChannelRegistry"]
