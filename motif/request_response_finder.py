# motif/request_response_finder.py
# This file is part of Causeway - Causal Log Motif Search
#
# Predefined request-response motif

"""Request-response search.

A request-response exchange is a chain of messages bouncing between two
hosts: X sends to Y, Y answers X a few steps later, X may send again, and so
on. Chains are built greedily from the earliest unused message; once a chain
is reported its messages are used up, so a long exchange is reported once
rather than once per suffix.
"""

from typing import Optional, Set, Tuple

from model.model_graph import ModelGraph, ModelNode
from model.traversal import topological_index
from utils.logger import get_logger
from .exceptions import InvalidPatternError
from .motif import Motif, MotifGroup
from .motif_finder import MotifFinder

Edge = Tuple[ModelNode, ModelNode]


class RequestResponseFinder(MotifFinder):
    """Finds alternating message chains between pairs of hosts.

    Args:
        max_distance: Maximum number of chain steps on the receiving host
            between receiving a message and sending the next one back
        min_chain_length: Minimum number of messages in a reported chain

    Raises:
        InvalidPatternError: max_distance < 0 or min_chain_length < 2
    """

    def __init__(self, max_distance: int, min_chain_length: int = 2) -> None:
        if max_distance < 0:
            raise InvalidPatternError(f"max_distance must not be negative, got {max_distance}")
        if min_chain_length < 2:
            raise InvalidPatternError(
                f"A request-response chain needs at least 2 messages, got {min_chain_length}"
            )
        self.max_distance = max_distance
        self.min_chain_length = min_chain_length

    def describe(self) -> str:
        return f"request-response(distance<={self.max_distance}, length>={self.min_chain_length})"

    def find(self, graph: ModelGraph) -> MotifGroup:
        group = MotifGroup(graph)
        topo = topological_index(graph)
        messages = sorted(graph.cross_edges(), key=lambda e: (topo[e[0].id], topo[e[1].id]))
        used: Set[Tuple[int, int]] = set()

        for first in messages:
            if _key(first) in used:
                continue
            chain = [first]
            in_chain = {_key(first)}
            while True:
                reply = self._reply(graph, chain[-1], used | in_chain)
                if reply is None:
                    break
                chain.append(reply)
                in_chain.add(_key(reply))

            if len(chain) < self.min_chain_length:
                continue
            used |= in_chain
            motif = Motif()
            for source, target in chain:
                motif.add_node(source)
                motif.add_node(target)
                motif.add_edge(source, target)
            group.add_motif(motif)

        get_logger().search_finished(self.describe(), graph.label, len(group))
        return group

    def _reply(self, graph: ModelGraph, message: Edge, excluded: Set[Tuple[int, int]]) -> Optional[Edge]:
        """First message sent back to the sender's host after `message` arrived."""
        sender, receiver = message
        current = receiver
        hops = 0
        while not current.is_tail() and hops <= self.max_distance:
            for child in graph.cross_children(current):
                if child.host == sender.host and (current.id, child.id) not in excluded:
                    return current, child
            current = graph.next(current)
            hops += 1
        return None


def _key(edge: Edge) -> Tuple[int, int]:
    return edge[0].id, edge[1].id

