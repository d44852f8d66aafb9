"""
channellog error taxonomy.

Most failure modes are recovered locally (unknown levels, unknown drivers,
broken event listeners). Only the conditions below surface to callers.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Sequence


class ChannelLogError(Exception):
    """Root of all channellog exceptions."""

    def __init__(
        self,
        message: str,
        *,
        code: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details or {}


class ConfigurationError(ChannelLogError):
    """
    The logging configuration tree could not be loaded.

    Only raised by strict loading; the default loader falls back to defaults.
    """

    def __init__(self, *, source: str, reason: str) -> None:
        message = f"Invalid logging configuration from {source}: {reason}"
        super().__init__(message, code="INVALID_CONFIGURATION", details={"source": source, "reason": reason})


class ChannelCycleError(ChannelLogError):
    """A stack channel lists itself, directly or transitively, as a member."""

    def __init__(self, *, channel: str, path: Sequence[str]) -> None:
        chain = " -> ".join([*path, channel])
        message = f"Cyclic stack membership for channel '{channel}': {chain}"
        super().__init__(
            message,
            code="CHANNEL_CYCLE",
            details={"channel": channel, "path": list(path)},
        )


__all__ = ["ChannelLogError", "ConfigurationError", "ChannelCycleError"]
