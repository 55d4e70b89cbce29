# motif/motif_finder.py

"""
Common interface of every motif search strategy.

A finder is configured once (all validation happens in its constructor)
and then applied to any number of graphs. ``find`` is a pure function of
the graph and the finder's parameters: graphs are never modified, so one
finder may search several graphs, or the same graph concurrently.
"""

from abc import ABC, abstractmethod

from model.model_graph import ModelGraph
from .motif import MotifGroup


class MotifFinder(ABC):
    @abstractmethod
    def find(self, graph: ModelGraph) -> MotifGroup:
        """Return every instance of this finder's motif in `graph`."""
        ...

    def describe(self) -> str:
        return type(self).__name__
