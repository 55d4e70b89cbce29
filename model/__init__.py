# model/__init__.py

"""
Domain objects for the causal model of a distributed execution:
vector timestamps, log events, the sentinel-bounded causal graph, its
builder, traversal primitives and host display orders. These types carry
no search logic.
"""

from .exceptions import (
    CausewayError,
    CycleDetectedError,
    InconsistentClockError,
    MalformedTimestampError,
)
from .vector_timestamp import Ordering, VectorTimestamp, compare, merge
from .log_event import LogEvent
from .model_graph import ModelGraph, ModelNode
from .graph_builder import build_model_graph, link_chains
from .traversal import (
    depth_first_edges,
    depth_first_from,
    reachable,
    topological_index,
    topological_order,
)
from .host_permutation import (
    HostPermutation,
    HostSort,
    LengthPermutation,
    LogOrderPermutation,
    host_permutation_for,
)

__all__ = [
    "CausewayError",
    "CycleDetectedError",
    "InconsistentClockError",
    "MalformedTimestampError",
    "Ordering",
    "VectorTimestamp",
    "compare",
    "merge",
    "LogEvent",
    "ModelGraph",
    "ModelNode",
    "build_model_graph",
    "link_chains",
    "depth_first_edges",
    "depth_first_from",
    "reachable",
    "topological_index",
    "topological_order",
    "HostPermutation",
    "HostSort",
    "LengthPermutation",
    "LogOrderPermutation",
    "host_permutation_for",
]
