# motif/navigator.py
# This file is part of Causeway - Causal Log Motif Search
#
# Stable next/previous navigation over motif search results

"""Navigation over the instances of one or two motif groups.

Instances of every group are flattened into one sequence ordered by
(view index, topological index of the instance's first node) and walked
circularly. Each step reports the byte offset of a representative log line,
which is all a windowing layer needs to fetch the right part of the file.
An empty result is a normal state: every move answers ``NO_MATCH``.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from model.traversal import topological_index
from utils.logger import get_logger
from .motif import Motif, MotifGroup


@dataclass(frozen=True)
class NavigationResult:
    """One navigator answer.

    Attributes:
        instance: The current motif, None for NO_MATCH
        anchor_offset: Byte offset of the instance's representative line
        index: Position of the instance in the flattened sequence, -1 for NO_MATCH
        total: Number of instances in the navigator
        view: Index of the group (view) the instance belongs to
    """

    instance: Optional[Motif]
    anchor_offset: Optional[int]
    index: int
    total: int = 0
    view: int = -1

    @property
    def found(self) -> bool:
        return self.instance is not None

    def to_response(self) -> Dict[str, Optional[int]]:
        return {"instances": self.total, "index": self.index, "anchorOffset": self.anchor_offset}


NO_MATCH = NavigationResult(instance=None, anchor_offset=None, index=-1)


@dataclass(frozen=True)
class _Entry:
    view: int
    motif: Motif
    anchor_offset: Optional[int]


class MotifNavigator:
    """Circular cursor over the instances of up to two motif groups.

    The cursor starts on the first instance (index 0).
    """

    def __init__(self, groups: Sequence[MotifGroup]) -> None:
        if len(groups) > 2:
            raise ValueError(f"At most two views can be navigated together, got {len(groups)}")

        keyed: List[Tuple[Tuple[int, int, int], _Entry]] = []
        for view, group in enumerate(groups):
            topo = topological_index(group.graph)
            for order, motif in enumerate(group.motifs):
                if not motif.nodes:
                    continue
                first = min(motif.nodes, key=lambda n: topo[n.id])
                event = first.first_event
                entry = _Entry(view, motif, event.offset if event is not None else None)
                keyed.append(((view, topo[first.id], order), entry))

        keyed.sort(key=lambda item: item[0])
        self._entries: List[_Entry] = [entry for _, entry in keyed]
        self._index = 0

    @property
    def num_instances(self) -> int:
        return len(self._entries)

    @property
    def index(self) -> int:
        return self._index if self._entries else -1

    def is_empty(self) -> bool:
        return not self._entries

    def _result(self) -> NavigationResult:
        if not self._entries:
            return NO_MATCH
        entry = self._entries[self._index]
        get_logger().navigation(self._index, len(self._entries), entry.anchor_offset)
        return NavigationResult(
            instance=entry.motif,
            anchor_offset=entry.anchor_offset,
            index=self._index,
            total=len(self._entries),
            view=entry.view,
        )

    def current(self) -> NavigationResult:
        return self._result()

    def next(self) -> NavigationResult:
        """Advance to the next instance, wrapping from last to first."""
        if self._entries:
            self._index = (self._index + 1) % len(self._entries)
        return self._result()

    def prev(self) -> NavigationResult:
        """Go back to the previous instance, wrapping from first to last."""
        if self._entries:
            self._index = (self._index - 1) % len(self._entries)
        return self._result()

    def move(self, delta: int) -> NavigationResult:
        """Move `delta` instances forward (negative: backward), circularly."""
        if self._entries:
            self._index = (self._index + delta) % len(self._entries)
        return self._result()

    def jump_to(self, index: int) -> NavigationResult:
        """Go directly to `index`.

        Raises:
            IndexError: `index` is outside ``0 .. num_instances - 1``
        """
        if not self._entries:
            return NO_MATCH
        if not 0 <= index < len(self._entries):
            raise IndexError(
                f"Result index {index} out of range (0..{len(self._entries) - 1})"
            )
        self._index = index
        return self._result()

    def instances(self) -> List[Motif]:
        return [entry.motif for entry in self._entries]
