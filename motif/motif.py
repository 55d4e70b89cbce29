# motif/motif.py

"""
Motif results.

A Motif is one matched instance: the nodes involved and the edges between
them. A MotifGroup collects every instance one finder produced over one
graph, in the order the finder found them.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from model.log_event import LogEvent
from model.model_graph import ModelGraph, ModelNode

Edge = Tuple[ModelNode, ModelNode]


@dataclass(eq=False)
class Motif:
    nodes: List[ModelNode] = field(default_factory=list)
    edges: List[Edge] = field(default_factory=list)

    def add_node(self, node: ModelNode) -> None:
        if all(n is not node for n in self.nodes):
            self.nodes.append(node)

    def add_edge(self, source: ModelNode, target: ModelNode) -> None:
        if all(s is not source or t is not target for s, t in self.edges):
            self.edges.append((source, target))

    def node_ids(self) -> frozenset:
        return frozenset(n.id for n in self.nodes)

    def log_events(self) -> List[LogEvent]:
        return [e for n in self.nodes for e in n.events]

    def __len__(self) -> int:
        return len(self.nodes)

    def __str__(self) -> str:
        return "Motif[" + ", ".join(str(n) for n in self.nodes) + "]"


@dataclass(eq=False)
class MotifGroup:
    graph: ModelGraph
    motifs: List[Motif] = field(default_factory=list)

    def add_motif(self, motif: Motif) -> None:
        self.motifs.append(motif)

    def first(self) -> Optional[Motif]:
        return self.motifs[0] if self.motifs else None

    def __len__(self) -> int:
        return len(self.motifs)

    def __iter__(self) -> Iterator[Motif]:
        return iter(self.motifs)
