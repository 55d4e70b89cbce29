# model/traversal.py
# This file is part of Causeway - Causal Log Motif Search
#
# Depth-first and topological traversal primitives over causal graphs

"""Traversal primitives shared by serialisation, navigation and motif search.

None of these functions mutate the graph. Although graphs are acyclic by
construction, every traversal checks for back edges and raises
:class:`CycleDetectedError` instead of looping.
"""

import heapq
from typing import Callable, Dict, FrozenSet, Iterator, List, Optional, Set, Tuple

from .exceptions import CycleDetectedError
from .model_graph import ModelGraph, ModelNode


def topological_order(graph: ModelGraph) -> List[ModelNode]:
    """Return every non-sentinel node in a deterministic topological order.

    Among nodes whose predecessors have all been emitted, the node whose host
    comes first in ``graph.hosts`` wins, then the lower chain position. The
    order is what re-serialisation writes, so it must stay stable for a given
    graph.

    Raises:
        CycleDetectedError: Some nodes could never become ready
    """
    rank = {host: i for i, host in enumerate(graph.hosts)}
    nodes = graph.nodes()
    pending: Dict[int, int] = {n.id: len(graph.parents(n)) for n in nodes}

    ready: List[Tuple[int, int, int]] = [
        (rank[n.host], n.position, n.id) for n in nodes if pending[n.id] == 0
    ]
    heapq.heapify(ready)

    order: List[ModelNode] = []
    while ready:
        _, _, node_id = heapq.heappop(ready)
        node = graph.node(node_id)
        order.append(node)
        for child in graph.children(node):
            pending[child.id] -= 1
            if pending[child.id] == 0:
                heapq.heappush(ready, (rank[child.host], child.position, child.id))

    if len(order) != len(nodes):
        stuck = next(n for n in nodes if pending[n.id] > 0)
        raise CycleDetectedError(
            f"Graph {graph.label!r} is not acyclic: {stuck} can never be ordered",
            node_id=stuck.id,
        )
    return order


def topological_index(graph: ModelGraph) -> Dict[int, int]:
    """Map node id -> position in :func:`topological_order`."""
    return {node.id: i for i, node in enumerate(topological_order(graph))}


def depth_first_edges(
    graph: ModelGraph,
    node: ModelNode,
    max_depth: Optional[int] = None,
    reverse: bool = False,
    improvements: bool = False,
) -> Iterator[Tuple[ModelNode, ModelNode]]:
    """Lazily yield ``(parent, reached)`` DFS tree edges starting at `node`.

    Each node is yielded at most once, the first time it is reached. A node
    is expanded again only when it is later reached at a strictly smaller
    depth under a depth bound, so the bound is honoured exactly.

    Args:
        graph: Graph to walk
        node: Start node (not yielded)
        max_depth: Maximum number of edges from `node`; None for unbounded
        reverse: Walk parents instead of children
        improvements: Also yield a node each time it is re-reached at a
            smaller depth; the last parent yielded for a node is
            then the one at its smallest depth

    Raises:
        CycleDetectedError: A node on the current path is reached again
    """
    neighbours: Callable[[ModelNode], List[ModelNode]] = (
        graph.parents if reverse else graph.children
    )
    best_depth: Dict[int, int] = {node.id: 0}
    on_path: Set[int] = {node.id}
    stack = [(node, iter(neighbours(node)), 0)]

    while stack:
        current, pending, depth = stack[-1]
        child = next(pending, None)
        if child is None:
            stack.pop()
            on_path.discard(current.id)
            continue

        if child.id in on_path:
            raise CycleDetectedError(
                f"Cycle through {child} in graph {graph.label!r}", node_id=child.id
            )
        if max_depth is not None and depth + 1 > max_depth:
            continue
        seen = best_depth.get(child.id)
        if seen is not None and (max_depth is None or seen <= depth + 1):
            continue

        best_depth[child.id] = depth + 1
        if seen is None or improvements:
            yield current, child
        on_path.add(child.id)
        stack.append((child, iter(neighbours(child)), depth + 1))


def depth_first_from(
    graph: ModelGraph,
    node: ModelNode,
    max_depth: Optional[int] = None,
    reverse: bool = False,
) -> Iterator[ModelNode]:
    """Lazily yield every node reachable from `node` within `max_depth` edges."""
    for _, reached in depth_first_edges(graph, node, max_depth, reverse):
        yield reached


def reachable(graph: ModelGraph, node: ModelNode) -> FrozenSet[ModelNode]:
    """Forward causal closure of `node`, excluding the node itself."""
    return frozenset(depth_first_from(graph, node))
