"""
Severity scale.

Eight ordered levels from DEBUG to EMERGENCY. Values interleave with the
standard library `logging` levels so that stdlib handlers can carry them.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any


class Severity(IntEnum):
    """Ordered log severity."""

    DEBUG = 10
    INFO = 20
    NOTICE = 25
    WARNING = 30
    ERROR = 40
    CRITICAL = 50
    ALERT = 55
    EMERGENCY = 60

    @property
    def label(self) -> str:
        """Upper-case name as written into rendered lines."""
        return self.name

    @property
    def key(self) -> str:
        """Lower-case name used in configuration and event payloads."""
        return self.name.lower()


DEFAULT_SEVERITY = Severity.DEBUG

_BY_NAME: dict[str, Severity] = {member.key: member for member in Severity}
_BY_VALUE: dict[int, Severity] = {member.value: member for member in Severity}


def normalize(value: Any) -> Severity:
    """
    Map any level input onto the severity scale.

    Accepts a Severity, a level name in any letter case, or the integer value
    of a member. Everything else resolves to DEBUG; this never raises.
    """
    if isinstance(value, Severity):
        return value
    if isinstance(value, bool):
        return DEFAULT_SEVERITY
    if isinstance(value, int):
        return _BY_VALUE.get(value, DEFAULT_SEVERITY)
    if value is None:
        return DEFAULT_SEVERITY
    try:
        key = str(value).strip().lower()
    except Exception:
        return DEFAULT_SEVERITY
    return _BY_NAME.get(key, DEFAULT_SEVERITY)


__all__ = ["Severity", "DEFAULT_SEVERITY", "normalize"]
