# core/query.py
# This file is part of Causeway - Causal Log Motif Search
#
# Search query classification and finder construction

"""Search query classification.

A search query is a single line of text whose first characters select the
kind of search:

==========================  =================================================
``""``                      EMPTY: clears any previous result
``ERROR`` / ``host=a``      TEXT: plain or structured text search
``#structure=[...]``        CUSTOM: JSON list of ``{"host", "clock"}`` slots
``#broadcast``              PREDEFINED: also ``#gather``, ``#request-response``,
                            each optionally written ``#motif=<name>``
==========================  =================================================

Classification never fails; building the finder does, with
InvalidPatternError, for unknown predefined names or unusable structures.
"""

import json
import re
from enum import Enum
from typing import Dict, List, Optional

from model.exceptions import MalformedTimestampError
from model.model_graph import ModelGraph
from model.vector_timestamp import VectorTimestamp
from motif.broadcast_gather_finder import BroadcastGatherFinder
from motif.builder_graph import BuilderGraph
from motif.custom_finder import CustomMotifFinder
from motif.exceptions import InvalidPatternError
from motif.motif_finder import MotifFinder
from motif.request_response_finder import RequestResponseFinder
from motif.text_query_finder import TextQueryMotifFinder

STRUCTURE_PREFIX = "#structure="
BROADCAST_MAX_DEPTH = 4
REQUEST_RESPONSE_MAX_DISTANCE = 999
REQUEST_RESPONSE_MIN_LENGTH = 2

_STRUCTURE = re.compile(r"^#(?:structure=)?(\[.*\])$", re.IGNORECASE | re.DOTALL)
_PREDEFINED = re.compile(r"^#(?:motif=)?(.*)$", re.IGNORECASE | re.DOTALL)


class QueryMode(Enum):
    EMPTY = "empty"
    TEXT = "text"
    CUSTOM = "custom"
    PREDEFINED = "predefined"


class SearchQuery:
    """One search-bar query.

    Args:
        text: The raw query; surrounding whitespace is ignored
    """

    def __init__(self, text: Optional[str]) -> None:
        self.text = (text or "").strip()

    @property
    def mode(self) -> QueryMode:
        if not self.text:
            return QueryMode.EMPTY
        if not self.text.startswith("#"):
            return QueryMode.TEXT
        if self.text.startswith(STRUCTURE_PREFIX):
            return QueryMode.CUSTOM
        return QueryMode.PREDEFINED

    @property
    def predefined_name(self) -> str:
        """Name of a predefined motif, lower-cased (``broadcast`` etc.)."""
        return _PREDEFINED.match(self.text).group(1).strip().lower()

    def pattern(self) -> BuilderGraph:
        """Pattern graph of a CUSTOM query.

        Raises:
            InvalidPatternError: The query is not a valid structure
        """
        match = _STRUCTURE.match(self.text)
        if match is None:
            raise InvalidPatternError(f"Not a structure query: {self.text!r}")
        return parse_structure(match.group(1))

    def finder_for(self, graph: ModelGraph) -> Optional[MotifFinder]:
        """Build the finder answering this query on `graph`.

        Returns None for an EMPTY query. Predefined broadcast and gather
        searches depend on the graph's host count, which is why the graph
        is needed at all.

        Raises:
            InvalidPatternError: The query cannot be turned into a finder
        """
        mode = self.mode
        if mode is QueryMode.EMPTY:
            return None
        if mode is QueryMode.TEXT:
            return TextQueryMotifFinder(self.text)
        if mode is QueryMode.CUSTOM:
            return CustomMotifFinder(self.pattern())

        name = self.predefined_name
        if name == "request-response":
            return RequestResponseFinder(REQUEST_RESPONSE_MAX_DISTANCE, REQUEST_RESPONSE_MIN_LENGTH)
        if name in ("broadcast", "gather"):
            fanout = len(graph.hosts) - 1
            if fanout < 1:
                raise InvalidPatternError(
                    f"A {name} needs at least two hosts, graph {graph.label!r} has {len(graph.hosts)}"
                )
            return BroadcastGatherFinder(fanout, BROADCAST_MAX_DEPTH, broadcast=name == "broadcast")
        raise InvalidPatternError(f"{name or self.text!r} is not a built-in motif type")

    def __str__(self) -> str:
        return self.text


def parse_structure(payload: str) -> BuilderGraph:
    """Parse the JSON list of a ``#structure=`` query into a pattern graph.

    Each entry is ``{"host": h, "clock": {...}}`` with an optional
    ``"constraint"`` regex for its host; the first non-empty constraint given
    for a host wins.

    Raises:
        InvalidPatternError: Malformed JSON, entries or clocks
    """
    try:
        entries = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise InvalidPatternError(f"Invalid structure JSON: {exc}") from exc
    if not isinstance(entries, list):
        raise InvalidPatternError("A structure must be a JSON list")

    timestamps: List[VectorTimestamp] = []
    constraints: Dict[str, str] = {}
    for position, entry in enumerate(entries):
        if not isinstance(entry, dict) or "host" not in entry or "clock" not in entry:
            raise InvalidPatternError(
                f"Structure entry {position} must be an object with 'host' and 'clock'"
            )
        host, clock = entry["host"], entry["clock"]
        if not isinstance(clock, dict):
            raise InvalidPatternError(f"Structure entry {position} has a non-object clock")
        try:
            timestamps.append(VectorTimestamp(host, clock))
        except MalformedTimestampError as exc:
            raise InvalidPatternError(f"Structure entry {position}: {exc}") from exc

        constraint = entry.get("constraint") or ""
        if not isinstance(constraint, str):
            raise InvalidPatternError(f"Structure entry {position} has a non-string constraint")
        if constraint.strip() and not constraints.get(host):
            constraints[host] = constraint

    return BuilderGraph.from_vector_timestamps(timestamps, constraints or None)
