# motif/builder_graph.py
# This file is part of Causeway - Causal Log Motif Search
#
# Pattern graphs used as templates for custom motif search

"""Pattern (builder) graphs.

A BuilderGraph is a small graph of abstract slots laid out on pattern hosts,
with optional per-host constraints restricting which real host a pattern host
may stand for. It is never derived from a real log: it is either drawn by a
user or produced from a list of vector timestamps, in which case the same
clock-delta linking that builds causal graphs derives its edges.
"""

import re
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from model.exceptions import InconsistentClockError
from model.graph_builder import link_chains
from model.vector_timestamp import VectorTimestamp
from .exceptions import InvalidPatternError

HostConstraints = Union[Mapping[str, str], Sequence[str]]


@dataclass(eq=False)
class BuilderNode:
    """One slot of a pattern graph.

    Attributes:
        index: Slot index; slots are numbered host by host in chain order
        host: Pattern host the slot lives on
        position: 1-based position in the pattern host's chain
        timestamp: Vector timestamp the slot was built from
        children / parents: Cross-host pattern edges, as slot indices
    """

    index: int
    host: str
    position: int
    timestamp: VectorTimestamp
    children: List[int] = field(default_factory=list)
    parents: List[int] = field(default_factory=list)

    def __str__(self) -> str:
        return f"slot{self.index}({self.host}#{self.position})"

    __repr__ = __str__


class BuilderGraph:
    """Pattern graph of slots with optional host constraints."""

    def __init__(self, hosts: Iterable[str], host_constraints: Optional[HostConstraints] = None):
        self.hosts: List[str] = list(hosts)
        self.nodes: List[BuilderNode] = []
        self._chains: Dict[str, List[BuilderNode]] = {h: [] for h in self.hosts}
        self._constraints = self._normalise_constraints(host_constraints)

    def _normalise_constraints(self, host_constraints: Optional[HostConstraints]) -> Dict[str, str]:
        if host_constraints is None:
            raw: Dict[str, str] = {}
        elif isinstance(host_constraints, Mapping):
            raw = dict(host_constraints)
        else:
            if len(host_constraints) > len(self.hosts):
                raise InvalidPatternError(
                    f"{len(host_constraints)} host constraints given for {len(self.hosts)} hosts"
                )
            raw = dict(zip(self.hosts, host_constraints))

        constraints: Dict[str, str] = {}
        for host, constraint in raw.items():
            if host not in self._chains:
                raise InvalidPatternError(f"Constraint given for unknown pattern host {host!r}")
            constraint = (constraint or "").strip()
            if constraint:
                try:
                    re.compile(constraint)
                except re.error as exc:
                    raise InvalidPatternError(
                        f"Invalid constraint {constraint!r} for host {host!r}: {exc}"
                    ) from exc
            constraints[host] = constraint
        return constraints

    def constraint(self, host: str) -> str:
        """Constraint of pattern host `host`; empty means any host."""
        return self._constraints.get(host, "")

    def add_node(self, host: str, timestamp: VectorTimestamp) -> BuilderNode:
        if host not in self._chains:
            self.hosts.append(host)
            self._chains[host] = []
        chain = self._chains[host]
        node = BuilderNode(len(self.nodes), host, len(chain) + 1, timestamp)
        self.nodes.append(node)
        chain.append(node)
        return node

    def add_edge(self, source: BuilderNode, target: BuilderNode) -> None:
        if source.host == target.host:
            raise InvalidPatternError("Cross-host pattern edges must join different hosts")
        if target.index not in source.children:
            source.children.append(target.index)
            target.parents.append(source.index)

    def host_nodes(self, host: str) -> List[BuilderNode]:
        return list(self._chains.get(host, []))

    def chain_predecessor(self, node: BuilderNode) -> Optional[BuilderNode]:
        if node.position == 1:
            return None
        return self._chains[node.host][node.position - 2]

    def cross_edges(self) -> List[Tuple[BuilderNode, BuilderNode]]:
        return [(n, self.nodes[c]) for n in self.nodes for c in n.children]

    def chain_edges(self) -> List[Tuple[BuilderNode, BuilderNode]]:
        return [(chain[i], chain[i + 1]) for chain in self._chains.values() for i in range(len(chain) - 1)]

    def edges(self) -> List[Tuple[BuilderNode, BuilderNode]]:
        return self.chain_edges() + self.cross_edges()

    def to_vector_timestamps(self) -> List[VectorTimestamp]:
        """Timestamps of all slots, in slot order."""
        return [node.timestamp for node in self.nodes]

    def __len__(self) -> int:
        return len(self.nodes)

    @classmethod
    def from_vector_timestamps(
        cls,
        timestamps: Sequence[VectorTimestamp],
        host_constraints: Optional[HostConstraints] = None,
    ) -> "BuilderGraph":
        """Build a pattern graph from vector timestamps.

        Timestamps are grouped by owning host (hosts keep first-occurrence
        order) and sorted by their own component; edges are derived from
        clock deltas exactly as for a causal graph.

        Args:
            timestamps: One timestamp per pattern slot
            host_constraints: Host -> constraint mapping, or a list aligned
                with the hosts' first-occurrence order

        Raises:
            InvalidPatternError: Empty input, duplicate own times, or clocks
                that do not form a causal order
        """
        if not timestamps:
            raise InvalidPatternError("A pattern must contain at least one event")

        chains: Dict[str, List[VectorTimestamp]] = {}
        for ts in timestamps:
            chains.setdefault(ts.host, []).append(ts)
        for host, chain in chains.items():
            chain.sort(key=lambda ts: ts.own_time)
            for earlier, later in zip(chain, chain[1:]):
                if earlier.own_time == later.own_time:
                    raise InvalidPatternError(
                        f"Host {host!r} has two pattern events at time {later.own_time}"
                    )

        graph = cls(chains.keys(), host_constraints)
        for host, chain in chains.items():
            for ts in chain:
                graph.add_node(host, ts)

        try:
            links = link_chains(chains)
        except InconsistentClockError as exc:
            raise InvalidPatternError(f"Pattern clocks are inconsistent: {exc}") from exc

        for (src_host, src_idx), (dst_host, dst_idx) in links:
            graph.add_edge(graph._chains[src_host][src_idx], graph._chains[dst_host][dst_idx])
        return graph
