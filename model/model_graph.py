# model/model_graph.py

"""
Causal graph of one execution.

Nodes live in an arena (a list) and refer to each other by integer id.
Every host owns a doubly linked chain bounded by a head and a tail sentinel,
so walking a chain never needs a null check. Cross-host edges (message
send/receive) are stored as ``children``/``parents`` id lists on the nodes.

Graphs are built once by :func:`model.graph_builder.build_model_graph` and
are read-only afterwards.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .log_event import LogEvent
from .vector_timestamp import VectorTimestamp


@dataclass(eq=False, slots=True)
class ModelNode:
    """
    One causal step on one host.

    Attributes:
        id: Index of the node in its graph's arena
        host: Owning host
        position: 0 for the head sentinel, 1..n for real nodes, n+1 for the tail
        events: Log events collapsed into this step (empty for sentinels)
        prev / next: Chain neighbours (None only past the sentinels)
        children / parents: Cross-host edge endpoints
    """

    id: int
    host: str
    position: int
    events: Tuple[LogEvent, ...] = ()
    prev: Optional[int] = None
    next: Optional[int] = None
    children: List[int] = field(default_factory=list)
    parents: List[int] = field(default_factory=list)
    head: bool = False
    tail: bool = False

    def is_head(self) -> bool:
        return self.head

    def is_tail(self) -> bool:
        return self.tail

    def is_sentinel(self) -> bool:
        return self.head or self.tail

    @property
    def first_event(self) -> Optional[LogEvent]:
        return self.events[0] if self.events else None

    @property
    def timestamp(self) -> Optional[VectorTimestamp]:
        return self.events[0].timestamp if self.events else None

    @property
    def text(self) -> str:
        return "\n".join(e.text for e in self.events)

    def __str__(self) -> str:
        if self.head:
            return f"<head {self.host}>"
        if self.tail:
            return f"<tail {self.host}>"
        return f"{self.host}#{self.position}"

    __repr__ = __str__


class ModelGraph:
    """Sentinel-bounded host chains joined by cross-host edges."""

    def __init__(
        self,
        label: str,
        hosts: Sequence[str],
        nodes: List[ModelNode],
        heads: Dict[str, int],
        tails: Dict[str, int],
    ) -> None:
        self.label = label
        self.hosts: Tuple[str, ...] = tuple(hosts)
        self._nodes = nodes
        self._heads = heads
        self._tails = tails

    # --- node access ---

    def node(self, node_id: int) -> ModelNode:
        return self._nodes[node_id]

    def head(self, host: str) -> ModelNode:
        return self._nodes[self._heads[host]]

    def tail(self, host: str) -> ModelNode:
        return self._nodes[self._tails[host]]

    def next(self, node: ModelNode) -> ModelNode:
        if node.next is None:
            raise ValueError(f"{node} has no successor")
        return self._nodes[node.next]

    def prev(self, node: ModelNode) -> ModelNode:
        if node.prev is None:
            raise ValueError(f"{node} has no predecessor")
        return self._nodes[node.prev]

    def host_nodes(self, host: str) -> List[ModelNode]:
        """Non-sentinel nodes of `host` in chain order."""
        result = []
        current = self.next(self.head(host))
        while not current.is_tail():
            result.append(current)
            current = self.next(current)
        return result

    def nodes(self) -> List[ModelNode]:
        """All non-sentinel nodes, host by host in chain order."""
        return [n for host in self.hosts for n in self.host_nodes(host)]

    def host_length(self, host: str) -> int:
        return self.tail(host).position - 1

    def __len__(self) -> int:
        return sum(self.host_length(h) for h in self.hosts)

    def __iter__(self) -> Iterator[ModelNode]:
        return iter(self.nodes())

    # --- edges ---

    def children(self, node: ModelNode) -> List[ModelNode]:
        """Chain successor (unless it is the tail) followed by cross-host children."""
        result = []
        if node.next is not None and not self._nodes[node.next].is_tail() and not node.is_head():
            result.append(self._nodes[node.next])
        result.extend(self._nodes[c] for c in node.children)
        return result

    def parents(self, node: ModelNode) -> List[ModelNode]:
        """Chain predecessor (unless it is the head) followed by cross-host parents."""
        result = []
        if node.prev is not None and not self._nodes[node.prev].is_head() and not node.is_tail():
            result.append(self._nodes[node.prev])
        result.extend(self._nodes[p] for p in node.parents)
        return result

    def cross_children(self, node: ModelNode) -> List[ModelNode]:
        return [self._nodes[c] for c in node.children]

    def cross_parents(self, node: ModelNode) -> List[ModelNode]:
        return [self._nodes[p] for p in node.parents]

    def cross_edges(self) -> List[Tuple[ModelNode, ModelNode]]:
        return [(n, self._nodes[c]) for n in self.nodes() for c in n.children]

    def edges(self) -> List[Tuple[ModelNode, ModelNode]]:
        """Every causal edge: chain successions and cross-host messages."""
        return [(n, child) for n in self.nodes() for child in self.children(n)]

    def has_edge(self, source: ModelNode, target: ModelNode) -> bool:
        if source.host == target.host:
            return source.next == target.id and not target.is_tail()
        return target.id in source.children

    def __str__(self) -> str:
        return (
            f"ModelGraph(label={self.label!r}, hosts={list(self.hosts)}, "
            f"nodes={len(self)}, cross_edges={len(self.cross_edges())})"
        )
