# motif/text_query_finder.py
# This file is part of Causeway - Causal Log Motif Search
#
# Free-text search exposed through the motif finder interface

"""Text search as a motif finder.

Every node with a matching log line becomes a one-node motif, which lets
text hits and structural motifs share one navigator. A query that uses none
of ``=``, ``!=``, ``&&`` or ``||`` is a plain substring search of the raw
line; anything else is parsed with the structured query grammar.
"""

import re
from typing import Optional

from model.log_event import LogEvent
from model.model_graph import ModelGraph
from model.traversal import topological_order
from parser import parse_query
from parser.ast_nodes import And, Expr, FieldMatch, Implicit, Or, Pattern, Value
from parser.exceptions import QuerySyntaxError
from utils.logger import get_logger
from .exceptions import InvalidPatternError
from .motif import Motif, MotifGroup
from .motif_finder import MotifFinder

_STRUCTURED = re.compile(r"!=|=|&&|\|\|")


class QueryEvaluator:
    """Visitor deciding whether one log event satisfies a query AST."""

    def __init__(self, event: LogEvent) -> None:
        self.event = event

    def visit_implicit(self, n: Implicit) -> bool:
        return _matches(n.value, self.event.text, exact=False)

    def visit_field(self, n: FieldMatch) -> bool:
        value = self.event.fields.get(n.field)
        if value is None:
            return n.negated
        return _matches(n.value, value, exact=True) != n.negated

    def visit_and(self, n: And) -> bool:
        return n.left.accept(self) and n.right.accept(self)

    def visit_or(self, n: Or) -> bool:
        return n.left.accept(self) or n.right.accept(self)


def _matches(value: Value, text: str, exact: bool) -> bool:
    if isinstance(value, Pattern):
        return re.search(value.source, text) is not None
    if exact:
        return text == value.text
    return value.text in text


class TextQueryMotifFinder(MotifFinder):
    """Finds nodes whose log lines match a text query.

    Args:
        query: Plain text or a structured query

    Raises:
        InvalidPatternError: The query is empty or not a valid structured query
    """

    def __init__(self, query: str) -> None:
        if query is None or not query.strip():
            raise InvalidPatternError("The text query must not be empty")
        self.query = query
        self.ast: Optional[Expr] = None
        if _STRUCTURED.search(query):
            try:
                self.ast = parse_query(query)
            except QuerySyntaxError as exc:
                raise InvalidPatternError(f"Invalid text query {query!r}: {exc}") from exc

    def describe(self) -> str:
        return f"text({self.query!r})"

    def matches(self, event: LogEvent) -> bool:
        if self.ast is None:
            return self.query in event.text
        return bool(self.ast.accept(QueryEvaluator(event)))

    def find(self, graph: ModelGraph) -> MotifGroup:
        group = MotifGroup(graph)
        for node in topological_order(graph):
            if any(self.matches(event) for event in node.events):
                motif = Motif()
                motif.add_node(node)
                group.add_motif(motif)

        get_logger().search_finished(self.describe(), graph.label, len(group))
        return group
