# motif/__init__.py
# This file is part of Causeway - Causal Log Motif Search
#
# Motif search public API

"""Motif search over causal graphs.

A finder is configured once and then applied to any number of graphs; each
application yields a MotifGroup of matched instances. Results of one or two
views are walked with a MotifNavigator.

Finders:
    CustomMotifFinder: Embeddings of a user-defined BuilderGraph pattern
    BroadcastGatherFinder: Nodes reaching, or reached from, many hosts
    RequestResponseFinder: Alternating message chains between two hosts
    TextQueryMotifFinder: Nodes whose log lines match a text query

Example:
    >>> from motif import BroadcastGatherFinder, MotifNavigator
    >>> group = BroadcastGatherFinder(min_fanout=2, max_depth=4).find(graph)
    >>> MotifNavigator([group]).current().anchor_offset
"""

from .exceptions import InvalidPatternError
from .motif import Motif, MotifGroup
from .motif_finder import MotifFinder
from .builder_graph import BuilderGraph, BuilderNode
from .custom_finder import CustomMotifFinder
from .broadcast_gather_finder import BroadcastGatherFinder
from .request_response_finder import RequestResponseFinder
from .text_query_finder import QueryEvaluator, TextQueryMotifFinder
from .navigator import NO_MATCH, MotifNavigator, NavigationResult

__all__ = [
    "InvalidPatternError",
    "Motif",
    "MotifGroup",
    "MotifFinder",
    "BuilderGraph",
    "BuilderNode",
    "CustomMotifFinder",
    "BroadcastGatherFinder",
    "RequestResponseFinder",
    "QueryEvaluator",
    "TextQueryMotifFinder",
    "NO_MATCH",
    "MotifNavigator",
    "NavigationResult",
]
