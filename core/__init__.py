# core/__init__.py
# This file is part of Causeway - Causal Log Motif Search
#
# Core module public API for visualisation sessions

"""Session-level API tying parsing, graph building and motif search together.

Primary Components:
    VisualizeSettings: Line/delimiter patterns and host ordering options
    visualize: Parses a log and builds one causal graph per execution label
    search: Runs a search-bar query over one or two graphs
    serialize: Writes graphs back as canonical log text
    VisualizationSession: Stateful wrapper answering navigator responses
    SearchQuery: Classifies query text and builds the matching motif finder

Example:
    >>> from core import VisualizeSettings, visualize, search
    >>> context = visualize(open("run.log").read(), VisualizeSettings())
    >>> navigator = search(context, "#request-response")
    >>> navigator.current().to_response()
"""

from .query import QueryMode, SearchQuery, parse_structure
from .serializer import VectorTimestampSerializer, serialize_graphs, structure_query
from .session import (
    SessionContext,
    VisualizationSession,
    VisualizeSettings,
    search,
    serialize,
    visualize,
)

__all__ = [
    "QueryMode",
    "SearchQuery",
    "parse_structure",
    "VectorTimestampSerializer",
    "serialize_graphs",
    "structure_query",
    "SessionContext",
    "VisualizationSession",
    "VisualizeSettings",
    "search",
    "serialize",
    "visualize",
]

__version__ = "1.0.0"
__description__ = "Visualisation sessions over causal graphs of vector-clock logs"
