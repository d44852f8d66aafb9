"""
SinkHandle: a resolved, ready-to-write channel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .severity import Severity
from .writers import BaseWriter


@dataclass(frozen=True, eq=False)
class SinkHandle:
    """
    A channel's writers plus ownership.

    `owned` is the subset of `writers` this handle created and closes. A stack
    handle shares its children's writers and owns none of them.
    """

    name: str
    minimum_level: Severity
    writers: Tuple[BaseWriter, ...] = ()
    owned: Tuple[BaseWriter, ...] = field(default=(), repr=False)

    def handles(self, severity: Severity) -> bool:
        """True when at least one writer accepts `severity`."""
        return any(writer.handles(severity) for writer in self.writers)

    def emit(self, line: str, severity: Severity) -> int:
        """Offer the line to every writer in order; returns how many wrote it."""
        return sum(1 for writer in self.writers if writer.write(line, severity))

    def borrows_from(self, owner: "SinkHandle") -> bool:
        """True when this handle holds a writer that `owner` owns."""
        return self is not owner and any(w is o for w in self.writers for o in owner.owned)

    def close(self) -> None:
        """Close owned writers only."""
        for writer in self.owned:
            writer.close()


__all__ = ["SinkHandle"]
