# model/log_event.py

"""
LogEvent
========

Immutable record of one matched log line: its raw text, emitting host,
vector timestamp and the execution label it belongs to. ``line_number`` and
``offset`` (byte offset of the line start in the parsed input) anchor the
event back into the source for highlighting and windowing.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Mapping

from .vector_timestamp import VectorTimestamp


@dataclass(frozen=True, slots=True)
class LogEvent:
    text: str
    host: str
    timestamp: VectorTimestamp
    label: str = ""
    line_number: int = 0
    offset: int = 0
    fields: Mapping[str, str] = field(default_factory=dict, compare=False, hash=False)

    def get_field(self, name: str, default: str = "") -> str:
        """Value of the named capture group `name`."""
        return self.fields.get(name, default)

    def __str__(self) -> str:
        return f"{self.host}@{self.line_number}:{self.timestamp}"
