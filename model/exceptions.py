# model/exceptions.py

"""
Error taxonomy shared by every layer.

``CausewayError`` carries a ``user_friendly`` flag: user-facing errors are
caused by the input (log text, patterns, queries) and can be fixed by editing
it, the others signal a broken internal invariant.
"""

from __future__ import annotations
from typing import Optional


class CausewayError(Exception):
    """Base class for all errors raised by the causal model and motif search."""

    user_friendly = True


class MalformedTimestampError(CausewayError, ValueError):
    """A raw clock cannot be read as a host -> non-negative integer mapping."""

    pass


class InconsistentClockError(CausewayError):
    """A host's clock moved backwards, or a derived edge would not point forward."""

    def __init__(
        self,
        message: str,
        label: str = "",
        host: Optional[str] = None,
        previous: object = None,
        current: object = None,
    ) -> None:
        self.label = label
        self.host = host
        self.previous = previous
        self.current = current
        context = f" (label={label!r}, host={host!r})" if host is not None else ""
        super().__init__(f"{message}{context}")


class CycleDetectedError(CausewayError):
    """Traversal came back to a node on its own path: the graph is not a DAG."""

    user_friendly = False

    def __init__(self, message: str, node_id: Optional[int] = None) -> None:
        self.node_id = node_id
        super().__init__(message)
