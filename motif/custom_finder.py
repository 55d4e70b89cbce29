# motif/custom_finder.py
# This file is part of Causeway - Causal Log Motif Search
#
# Structural search for user-defined pattern graphs

"""Custom motif search.

Finds every embedding of a pattern graph in a causal graph:

- each pattern host stands for one distinct real host satisfying its
  constraint (the constraint regex must match the whole host name);
- slots on the same pattern host map, in order, to strictly later nodes of
  that real host;
- every cross-host pattern edge requires a causal path, in the same
  direction, between the two mapped nodes.

The search backtracks over slots in index order and tries candidate nodes in
topological order, so results come out deterministically.
"""

import re
from typing import Dict, FrozenSet, List, Optional, Pattern, Set

from model.model_graph import ModelGraph, ModelNode
from model.traversal import reachable, topological_index
from utils.logger import get_logger
from .builder_graph import BuilderGraph, BuilderNode
from .exceptions import InvalidPatternError
from .motif import Motif, MotifGroup
from .motif_finder import MotifFinder


class CustomMotifFinder(MotifFinder):
    """Finds instances of a user-drawn or JSON-specified pattern graph.

    Args:
        pattern: The pattern to search for

    Raises:
        InvalidPatternError: The pattern is missing or empty
    """

    def __init__(self, pattern: BuilderGraph) -> None:
        if pattern is None or len(pattern) == 0:
            raise InvalidPatternError("A custom motif needs a non-empty pattern graph")
        self.pattern = pattern
        self._constraints: Dict[str, Pattern] = {
            host: re.compile(pattern.constraint(host))
            for host in pattern.hosts
            if pattern.constraint(host)
        }

    def _allows(self, pattern_host: str, host: str) -> bool:
        constraint = self._constraints.get(pattern_host)
        return constraint is None or constraint.fullmatch(host) is not None

    def find(self, graph: ModelGraph) -> MotifGroup:
        logger = get_logger()
        group = MotifGroup(graph)
        slots = self.pattern.nodes

        if len(self.pattern.hosts) > len(graph.hosts):
            logger.search_finished(self.describe(), graph.label, 0)
            return group

        topo = topological_index(graph)
        by_host = {host: graph.host_nodes(host) for host in graph.hosts}
        closure: Dict[int, FrozenSet[int]] = {}

        def reach(node: ModelNode) -> FrozenSet[int]:
            if node.id not in closure:
                closure[node.id] = frozenset(n.id for n in reachable(graph, node))
            return closure[node.id]

        assignment: List[Optional[ModelNode]] = [None] * len(slots)
        host_map: Dict[str, str] = {}
        used_hosts: Set[str] = set()
        seen: Set[FrozenSet[int]] = set()

        def candidates(slot: BuilderNode) -> List[ModelNode]:
            previous = self.pattern.chain_predecessor(slot)
            if previous is not None:
                after = assignment[previous.index].position
                return [n for n in by_host[host_map[slot.host]] if n.position > after]
            nodes = [
                n
                for host in graph.hosts
                if host not in used_hosts and self._allows(slot.host, host)
                for n in by_host[host]
            ]
            nodes.sort(key=lambda n: topo[n.id])
            return nodes

        def consistent(slot: BuilderNode, node: ModelNode) -> bool:
            for parent in slot.parents:
                if parent < slot.index and node.id not in reach(assignment[parent]):
                    return False
            for child in slot.children:
                if child < slot.index and assignment[child].id not in reach(node):
                    return False
            return True

        def record() -> None:
            key = frozenset(n.id for n in assignment)
            if key in seen:
                return
            seen.add(key)
            motif = Motif()
            for node in assignment:
                motif.add_node(node)
            for source, target in self.pattern.edges():
                mapped_source = assignment[source.index]
                mapped_target = assignment[target.index]
                if graph.has_edge(mapped_source, mapped_target):
                    motif.add_edge(mapped_source, mapped_target)
            group.add_motif(motif)

        def backtrack(k: int) -> None:
            if k == len(slots):
                record()
                return
            slot = slots[k]
            for node in candidates(slot):
                if not consistent(slot, node):
                    continue
                opened = slot.host not in host_map
                if opened:
                    host_map[slot.host] = node.host
                    used_hosts.add(node.host)
                assignment[k] = node
                backtrack(k + 1)
                assignment[k] = None
                if opened:
                    del host_map[slot.host]
                    used_hosts.discard(node.host)

        backtrack(0)
        logger.search_finished(self.describe(), graph.label, len(group))
        return group
