"""
Event notification capability.

The facade announces every write to an injected dispatcher. Dispatchers are
best-effort observers: `safe_dispatch` swallows whatever they raise.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Mapping, Protocol, runtime_checkable

from .diagnostics import get_logger

logger = get_logger("channellog.events")

EVENT_WRITING = "logging.writing"
EVENT_WRITTEN = "logging.written"

Listener = Callable[[str, Dict[str, Any]], None]


@runtime_checkable
class EventDispatcher(Protocol):
    """Anything with a fire-and-forget `dispatch(event, payload)`."""

    def dispatch(self, event: str, payload: Mapping[str, Any]) -> None: ...


class NullDispatcher:
    """Dispatcher used when no event collaborator is injected."""

    def dispatch(self, event: str, payload: Mapping[str, Any]) -> None:
        return None


class CallbackDispatcher:
    """Forwards events to plain callables, in registration order."""

    def __init__(self, *listeners: Listener) -> None:
        self._listeners: List[Listener] = list(listeners)

    def listen(self, listener: Listener) -> Listener:
        self._listeners.append(listener)
        return listener

    def dispatch(self, event: str, payload: Mapping[str, Any]) -> None:
        for listener in list(self._listeners):
            listener(event, dict(payload))


def safe_dispatch(dispatcher: EventDispatcher, event: str, payload: Mapping[str, Any]) -> None:
    """Dispatch and swallow any listener failure."""
    try:
        dispatcher.dispatch(event, payload)
    except Exception as exc:
        logger.debug("event_dispatch_failed", dispatched_event=event, error=repr(exc))


__all__ = [
    "EVENT_WRITING",
    "EVENT_WRITTEN",
    "EventDispatcher",
    "NullDispatcher",
    "CallbackDispatcher",
    "Listener",
    "safe_dispatch",
]
