# motif/broadcast_gather_finder.py
# This file is part of Causeway - Causal Log Motif Search
#
# Predefined broadcast and gather motifs

"""Broadcast / gather search.

A broadcast is a node whose messages reach many other hosts within a few
causal steps; a gather is the mirror image, a node that hears from many
hosts. Only nodes that send (broadcast) or receive (gather) at least one
message directly can anchor an instance.
"""

from typing import Dict

from model.model_graph import ModelGraph, ModelNode
from model.traversal import depth_first_edges, topological_order
from utils.logger import get_logger
from .exceptions import InvalidPatternError
from .motif import Motif, MotifGroup
from .motif_finder import MotifFinder


class BroadcastGatherFinder(MotifFinder):
    """Finds nodes reaching (or reached from) at least `min_fanout` other hosts.

    Args:
        min_fanout: Minimum number of distinct other hosts
        max_depth: Maximum number of causal edges from the anchor node
        broadcast: True to follow edges forward (broadcast), False to follow
            them backward (gather)

    Raises:
        InvalidPatternError: A parameter is smaller than 1
    """

    def __init__(self, min_fanout: int, max_depth: int, broadcast: bool = True) -> None:
        if min_fanout < 1:
            raise InvalidPatternError(f"min_fanout must be at least 1, got {min_fanout}")
        if max_depth < 1:
            raise InvalidPatternError(f"max_depth must be at least 1, got {max_depth}")
        self.min_fanout = min_fanout
        self.max_depth = max_depth
        self.broadcast = broadcast

    def describe(self) -> str:
        kind = "broadcast" if self.broadcast else "gather"
        return f"{kind}(fanout>={self.min_fanout}, depth<={self.max_depth})"

    def find(self, graph: ModelGraph) -> MotifGroup:
        group = MotifGroup(graph)
        for anchor in topological_order(graph):
            direct = graph.cross_children(anchor) if self.broadcast else graph.cross_parents(anchor)
            if not direct:
                continue
            motif = self._expand(graph, anchor)
            if motif is not None:
                group.add_motif(motif)

        get_logger().search_finished(self.describe(), graph.label, len(group))
        return group

    def _expand(self, graph: ModelGraph, anchor: ModelNode):
        parent_of: Dict[int, ModelNode] = {}
        entry: Dict[str, ModelNode] = {}
        for parent, reached in depth_first_edges(
            graph, anchor, self.max_depth, reverse=not self.broadcast, improvements=True
        ):
            parent_of[reached.id] = parent
            if reached.host != anchor.host and reached.host not in entry:
                entry[reached.host] = reached

        if len(entry) < self.min_fanout:
            return None

        motif = Motif()
        motif.add_node(anchor)
        for reached in entry.values():
            path = [reached]
            while path[-1] is not anchor:
                path.append(parent_of[path[-1].id])
            path.reverse()
            for node in path[1:]:
                motif.add_node(node)
            for near, far in zip(path, path[1:]):
                if self.broadcast:
                    motif.add_edge(near, far)
                else:
                    motif.add_edge(far, near)
        return motif
