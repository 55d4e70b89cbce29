# model/host_permutation.py

"""
Host display order.

A permutation only decides in which order hosts are presented and iterated
by callers; it never touches graph structure. Orders are recomputed by
calling :meth:`HostPermutation.update` after graphs are (re)added.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, List

from .model_graph import ModelGraph


class HostSort(Enum):
    """How hosts are sorted for presentation."""
    LENGTH = "length"
    ORDER = "order"

    @classmethod
    def from_config(cls, value: str) -> HostSort:
        """Accept both the short names and the long descriptive ones."""
        aliases = {
            "length": cls.LENGTH,
            "bychainlength": cls.LENGTH,
            "order": cls.ORDER,
            "byfirstoccurrence": cls.ORDER,
        }
        key = value.strip().lower().replace("_", "").replace("-", "")
        if key not in aliases:
            raise ValueError(f"You must select a way to sort processes, got {value!r}")
        return aliases[key]


class HostPermutation(ABC):
    def __init__(self, descending: bool = False) -> None:
        self.descending = descending
        self._graphs: List[ModelGraph] = []
        self._hosts: List[str] = []

    def add_graph(self, graph: ModelGraph) -> None:
        self._graphs.append(graph)

    def update(self) -> List[str]:
        """Recompute and return the host order."""
        self._hosts = self._compute()
        return list(self._hosts)

    @property
    def hosts(self) -> List[str]:
        return list(self._hosts)

    def first_occurrence(self) -> Dict[str, int]:
        """Host -> smallest byte offset of its first event over all graphs."""
        first: Dict[str, int] = {}
        for graph in self._graphs:
            for host in graph.hosts:
                nodes = graph.host_nodes(host)
                if not nodes:
                    continue
                offset = nodes[0].first_event.offset
                if host not in first or offset < first[host]:
                    first[host] = offset
        return first

    @abstractmethod
    def _compute(self) -> List[str]:
        ...


class LengthPermutation(HostPermutation):
    """Orders hosts by total chain length, ties broken by first occurrence."""

    def _compute(self) -> List[str]:
        first = self.first_occurrence()
        lengths: Dict[str, int] = {host: 0 for host in first}
        for graph in self._graphs:
            for host in graph.hosts:
                lengths[host] = lengths.get(host, 0) + graph.host_length(host)

        sign = -1 if self.descending else 1
        return sorted(lengths, key=lambda h: (sign * lengths[h], first.get(h, 0), h))


class LogOrderPermutation(HostPermutation):
    """Orders hosts by where they first appear in the log."""

    def _compute(self) -> List[str]:
        first = self.first_occurrence()
        ordered = sorted(first, key=lambda h: (first[h], h))
        if self.descending:
            ordered.reverse()
        return ordered


def host_permutation_for(sort_type: str, descending: bool = False) -> HostPermutation:
    """Build the permutation selected by configuration."""
    sort = HostSort.from_config(sort_type)
    if sort is HostSort.LENGTH:
        return LengthPermutation(descending)
    return LogOrderPermutation(descending)
