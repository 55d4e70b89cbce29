# core/session.py
# This file is part of Causeway - Causal Log Motif Search
#
# Visualisation session: parse, build, search and navigate

"""Session-level operations.

``visualize`` turns raw log text into a SessionContext (parsed events, one
causal graph per label, a host display order); ``search`` runs one query
over one or two of its graphs and returns a navigator; ``serialize`` writes
the graphs back as log text. VisualizationSession keeps the current context
and navigator between calls and answers with plain response dictionaries.

Example:
    >>> session = VisualizationSession()
    >>> session.load(text, VisualizeSettings())
    >>> session.search("#broadcast")
    {'instances': 2, 'index': 0, 'anchorOffset': 118}
    >>> session.next_result(delta=1)
    {'instances': 2, 'index': 1, 'anchorOffset': 342}
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from model.graph_builder import build_model_graph
from model.host_permutation import host_permutation_for
from model.model_graph import ModelGraph
from motif.exceptions import InvalidPatternError
from motif.motif import MotifGroup
from motif.navigator import NO_MATCH, MotifNavigator
from parser import DEFAULT_LINE_PATTERN, parse_log
from parser.exceptions import ParseError
from utils.logger import get_logger
from .query import QueryMode, SearchQuery
from .serializer import serialize_graphs


@dataclass
class VisualizeSettings:
    """Parsing and display configuration of one visualisation.

    Attributes:
        line_pattern: Regex with ``host`` and ``clock`` named groups
        delimiter_pattern: Regex separating executions; empty for one execution
        sort_type: Host order, ``length`` or ``order`` (or their long aliases)
        descending: Reverse the host order
    """

    line_pattern: str = DEFAULT_LINE_PATTERN
    delimiter_pattern: str = ""
    sort_type: str = "length"
    descending: bool = True


@dataclass
class SessionContext:
    settings: VisualizeSettings
    labels: List[str]
    graphs: Dict[str, ModelGraph]
    host_order: List[str]
    parse_errors: List[ParseError] = field(default_factory=list)
    delimiter_lines: Dict[str, str] = field(default_factory=dict)

    def graph(self, label: str) -> ModelGraph:
        try:
            return self.graphs[label]
        except KeyError:
            raise KeyError(f"Unknown label {label!r}, known labels: {self.labels}") from None


def visualize(text: str, settings: Optional[VisualizeSettings] = None) -> SessionContext:
    """Parse `text` and build one causal graph per label.

    Raises:
        ParseError: Invalid patterns
        NoEventsParsedError: A label without parsable lines
        InconsistentClockError: Clocks that contradict each other
        ValueError: Unknown sort type
    """
    settings = settings or VisualizeSettings()
    permutation = host_permutation_for(settings.sort_type, settings.descending)
    parser = parse_log(text, settings.line_pattern, settings.delimiter_pattern or None)

    graphs: Dict[str, ModelGraph] = {}
    delimiter_lines: Dict[str, str] = {}
    for label in parser.labels:
        graph = build_model_graph(parser.events(label), label)
        graphs[label] = graph
        permutation.add_graph(graph)
        line = parser.delimiter_line(label)
        if line is not None:
            delimiter_lines[label] = line

    host_order = permutation.update()
    get_logger().info(
        f"Visualised {len(graphs)} execution(s) over {len(host_order)} host(s)"
    )
    return SessionContext(
        settings=settings,
        labels=parser.labels,
        graphs=graphs,
        host_order=host_order,
        parse_errors=list(parser.errors),
        delimiter_lines=delimiter_lines,
    )


def search(
    context: SessionContext, query: str, labels: Optional[Sequence[str]] = None
) -> MotifNavigator:
    """Run `query` over one or two labels of `context`.

    Without `labels` the first label is searched. An empty query yields an
    empty navigator.

    Raises:
        InvalidPatternError: The query cannot be turned into a finder
        ValueError: More than two labels requested
    """
    labels = list(labels) if labels else context.labels[:1]
    if len(labels) > 2:
        raise ValueError(f"At most two labels can be searched together, got {len(labels)}")

    parsed = SearchQuery(query)
    get_logger().search_started(parsed.text, parsed.mode.value)

    groups: List[MotifGroup] = []
    for label in labels:
        graph = context.graph(label)
        finder = parsed.finder_for(graph)
        groups.append(finder.find(graph) if finder is not None else MotifGroup(graph))
    return MotifNavigator(groups)


def serialize(context: SessionContext) -> str:
    """Canonical log text of every graph in `context`."""
    return serialize_graphs(context.labels, context.graphs, context.delimiter_lines)


class VisualizationSession:
    """Holds the current context and search results.

    A new search replaces the previous navigator; a failed search clears it,
    so navigation never refers to a stale query.
    """

    def __init__(self) -> None:
        self.context: Optional[SessionContext] = None
        self.navigator: Optional[MotifNavigator] = None
        self.query: str = ""

    def load(self, text: str, settings: Optional[VisualizeSettings] = None) -> SessionContext:
        self.clear()
        self.context = visualize(text, settings)
        return self.context

    def _require_context(self) -> SessionContext:
        if self.context is None:
            raise RuntimeError("No log loaded, call load() first")
        return self.context

    def search(self, query: str, labels: Optional[Sequence[str]] = None) -> Dict[str, Optional[int]]:
        context = self._require_context()
        self.navigator = None
        self.query = ""
        if SearchQuery(query).mode is QueryMode.EMPTY:
            return NO_MATCH.to_response()
        try:
            self.navigator = search(context, query, labels)
        except InvalidPatternError:
            get_logger().warning(f"Invalid search query: {query!r}")
            raise
        self.query = query
        return self.navigator.current().to_response()

    def next_result(
        self, delta: Optional[int] = None, index: Optional[int] = None
    ) -> Dict[str, Optional[int]]:
        """Move through the current results.

        `index` jumps directly and takes precedence over `delta`; without
        either, the cursor advances by one.

        Raises:
            IndexError: `index` out of range
        """
        if self.navigator is None:
            return NO_MATCH.to_response()
        if index is not None:
            return self.navigator.jump_to(index).to_response()
        return self.navigator.move(1 if delta is None else delta).to_response()

    def serialize(self) -> str:
        return serialize(self._require_context())

    def clear(self) -> None:
        self.navigator = None
        self.query = ""
