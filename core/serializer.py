# core/serializer.py
# This file is part of Causeway - Causal Log Motif Search
#
# Text renderings of pattern graphs and causal graphs

"""Serialisation helpers.

Two directions are covered: pattern graphs back into the ``#structure=``
query text they can be parsed from, and causal graphs back into log text in
a canonical, topological line order.
"""

import json
from typing import Iterable, List, Mapping, Optional, Sequence

from model.model_graph import ModelGraph
from model.traversal import topological_order
from model.vector_timestamp import VectorTimestamp
from motif.builder_graph import BuilderGraph

HOST_TOKEN = "`HOST`"
CLOCK_TOKEN = "`CLOCK`"
STRUCTURE_FORMAT = '{"host":"`HOST`","clock":`CLOCK`}'


class VectorTimestampSerializer:
    """Renders vector timestamps through a small template.

    Each timestamp is rendered by substituting ``HOST`` (the owner) and
    ``CLOCK`` (the clock as compact JSON) tokens in `format`; results are
    joined with `separator` and wrapped in `header` / `footer`.

    Example:
        >>> vts = VectorTimestampSerializer(STRUCTURE_FORMAT, ",", "#structure=[", "]")
        >>> vts.serialize([VectorTimestamp("a", {"a": 1})])
        '#structure=[{"host":"a","clock":{"a":1}}]'
    """

    def __init__(self, format: str, separator: str = ",", header: str = "", footer: str = "") -> None:
        self.format = format
        self.separator = separator
        self.header = header
        self.footer = footer

    def render(self, timestamp: VectorTimestamp) -> str:
        clock = json.dumps(dict(timestamp.clock), separators=(",", ":"))
        return self.format.replace(HOST_TOKEN, timestamp.host).replace(CLOCK_TOKEN, clock)

    def serialize(self, timestamps: Iterable[VectorTimestamp]) -> str:
        body = self.separator.join(self.render(ts) for ts in timestamps)
        return f"{self.header}{body}{self.footer}"


def structure_query(pattern: BuilderGraph) -> str:
    """The ``#structure=`` query text describing `pattern`, constraints included."""
    entries = []
    for node in pattern.nodes:
        entry = {"host": node.timestamp.host, "clock": dict(node.timestamp.clock)}
        constraint = pattern.constraint(node.host)
        if constraint:
            entry["constraint"] = constraint
        entries.append(json.dumps(entry, separators=(",", ":")))
    return "#structure=[" + ",".join(entries) + "]"


def serialize_graphs(
    labels: Sequence[str],
    graphs: Mapping[str, ModelGraph],
    delimiter_lines: Optional[Mapping[str, str]] = None,
) -> str:
    """Write graphs back as log text.

    For each label in order: its delimiter line when there is one, then the
    raw lines of its events in topological order (events collapsed into one
    node keep their file order). Lines are joined with ``\\n``.
    """
    delimiter_lines = delimiter_lines or {}
    lines: List[str] = []
    for label in labels:
        delimiter = delimiter_lines.get(label)
        if delimiter is not None:
            lines.append(delimiter)
        for node in topological_order(graphs[label]):
            lines.extend(event.text for event in node.events)
    return "\n".join(lines)
