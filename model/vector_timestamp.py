# model/vector_timestamp.py

"""
Immutable vector timestamp owned by a single host.

Supports:
  •  Four-way comparison (EQUAL, LESS, GREATER, CONCURRENT).
  •  Merge (⊔) as the component-wise maximum.
  •  Copy-on-write increment of one component.

Missing components are treated as 0 everywhere, so equality and hashing
only look at the non-zero part of the clock.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional

from .exceptions import MalformedTimestampError


class Ordering(Enum):
    """Result of comparing two vector timestamps."""
    EQUAL = "equal"
    LESS = "less"
    GREATER = "greater"
    CONCURRENT = "concurrent"

    def mirror(self) -> Ordering:
        if self is Ordering.LESS:
            return Ordering.GREATER
        if self is Ordering.GREATER:
            return Ordering.LESS
        return self


@dataclass(frozen=True, slots=True, eq=False)
class VectorTimestamp:
    host: str
    clock: Mapping[str, int]

    def __post_init__(self) -> None:
        if not isinstance(self.host, str) or not self.host:
            raise MalformedTimestampError(f"Invalid owning host: {self.host!r}")

        clock: Dict[str, int] = {}
        for host, value in dict(self.clock).items():
            if not isinstance(host, str) or not host:
                raise MalformedTimestampError(f"Invalid host in clock: {host!r}")
            # bool is an int subclass but never a counter
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise MalformedTimestampError(
                    f"Clock value for {host!r} must be a non-negative integer, got {value!r}"
                )
            clock[host] = value

        if self.host not in clock:
            raise MalformedTimestampError(
                f"Vector timestamp must contain a value for its own host {self.host!r}"
            )

        object.__setattr__(self, "clock", clock)

    @property
    def own_time(self) -> int:
        """The owner's own component."""
        return self.clock[self.host]

    def get(self, host: str) -> int:
        """Component for `host`, 0 when absent."""
        return self.clock.get(host, 0)

    def compare(self, other: VectorTimestamp) -> Ordering:
        """
        Component-wise comparison over the union of hosts.
        """
        less = greater = False
        for host in set(self.clock) | set(other.clock):
            mine, theirs = self.get(host), other.get(host)
            if mine < theirs:
                less = True
            elif mine > theirs:
                greater = True
            if less and greater:
                return Ordering.CONCURRENT
        if less:
            return Ordering.LESS
        if greater:
            return Ordering.GREATER
        return Ordering.EQUAL

    def concurrent(self, other: VectorTimestamp) -> bool:
        return self.compare(other) is Ordering.CONCURRENT

    def merge(self, other: VectorTimestamp) -> VectorTimestamp:
        """
        Component-wise maximum, owned by this timestamp's host.
        """
        merged = dict(self.clock)
        for host, value in other.clock.items():
            merged[host] = max(value, merged.get(host, 0))
        return VectorTimestamp(self.host, merged)

    def increment(self, host: Optional[str] = None) -> VectorTimestamp:
        """
        Return a copy with `host` (default: the owner) advanced by one.
        """
        host = self.host if host is None else host
        clock = dict(self.clock)
        clock[host] = clock.get(host, 0) + 1
        return VectorTimestamp(self.host, clock)

    def _nonzero(self) -> Dict[str, int]:
        return {h: v for h, v in self.clock.items() if v}

    def __le__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) in (Ordering.LESS, Ordering.EQUAL)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) in (Ordering.GREATER, Ordering.EQUAL)

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self.compare(other) is Ordering.GREATER

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VectorTimestamp):
            return NotImplemented
        return self._nonzero() == other._nonzero()

    def __hash__(self) -> int:
        return hash(tuple(sorted(self._nonzero().items())))

    def __str__(self) -> str:
        items = ", ".join(f"{h}:{v}" for h, v in self.clock.items())
        return f"{self.host}{{{items}}}"

    __repr__ = __str__


def compare(a: VectorTimestamp, b: VectorTimestamp) -> Ordering:
    """Module-level alias of :meth:`VectorTimestamp.compare`."""
    return a.compare(b)


def merge(a: VectorTimestamp, b: VectorTimestamp) -> VectorTimestamp:
    """Module-level alias of :meth:`VectorTimestamp.merge`."""
    return a.merge(b)
