# model/graph_builder.py
# This file is part of Causeway - Causal Log Motif Search
#
# Reconstruction of the happens-before graph from vector timestamps

"""Causal graph construction from per-host event chains.

Message edges are never read from the log: they are recovered from clock
deltas alone. When an event on host ``x`` knows more about host ``h`` than
its predecessor on ``x`` did, some event on ``h`` must have reached ``x`` in
between, and the latest ``h`` event carrying that knowledge is the sender.
Candidates that another candidate already knew about are transitively
implied and are not linked directly.

:func:`link_chains` works on plain timestamp chains so the same algorithm
builds both real causal graphs and pattern graphs for motif search.
"""

from bisect import bisect_right
from typing import Dict, List, Mapping, Sequence, Tuple

from .exceptions import InconsistentClockError
from .log_event import LogEvent
from .model_graph import ModelGraph, ModelNode
from .vector_timestamp import Ordering, VectorTimestamp
from utils.logger import get_logger

# (host, index in that host's chain)
ChainRef = Tuple[str, int]


def link_chains(
    chains: Mapping[str, Sequence[VectorTimestamp]], label: str = ""
) -> List[Tuple[ChainRef, ChainRef]]:
    """Derive cross-host edges from ordered per-host timestamp chains.

    Each chain must be strictly increasing in its owner's component.

    Args:
        chains: Host -> timestamps of that host in chain order
        label: Execution label, used for error context only

    Returns:
        List of ``((source_host, source_index), (target_host, target_index))``
        in deterministic order (hosts in mapping order, chain order, clock
        key order)

    Raises:
        InconsistentClockError: A derived source does not happen-before its target
    """
    own_times: Dict[str, List[int]] = {
        host: [ts.get(host) for ts in chain] for host, chain in chains.items()
    }
    edges: List[Tuple[ChainRef, ChainRef]] = []

    for host, chain in chains.items():
        for index, ts in enumerate(chain):
            previous = chain[index - 1] if index > 0 else None

            candidates: Dict[str, int] = {}
            for other, value in ts.clock.items():
                if other == host or other not in chains:
                    continue
                known = previous.get(other) if previous is not None else 0
                if value <= known:
                    continue
                source = bisect_right(own_times[other], value) - 1
                if source < 0 or own_times[other][source] <= known:
                    continue
                candidates[other] = source

            for other, source in candidates.items():
                sent = chains[other][source]
                implied = any(
                    chains[third][idx].get(other) >= sent.get(other)
                    for third, idx in candidates.items()
                    if third != other
                )
                if implied:
                    continue
                if sent.compare(ts) is not Ordering.LESS:
                    raise InconsistentClockError(
                        f"Event {ts} would receive from {sent}, which does not happen before it",
                        label=label,
                        host=host,
                        previous=sent,
                        current=ts,
                    )
                edges.append(((other, source), (host, index)))

    return edges


def build_model_graph(events: Sequence[LogEvent], label: str = "") -> ModelGraph:
    """Build the causal graph of one label from its events in file order.

    Consecutive events of a host with EQUAL timestamps collapse into one
    node. Hosts are ordered by first occurrence.

    Args:
        events: Parsed log events of a single label, in file order
        label: The label these events belong to

    Returns:
        The constructed ModelGraph

    Raises:
        InconsistentClockError: A host's own component decreases, or repeats
            with a different clock
    """
    logger = get_logger()

    per_host: Dict[str, List[List[LogEvent]]] = {}
    for event in events:
        steps = per_host.setdefault(event.host, [])
        if not steps:
            steps.append([event])
            continue

        last = steps[-1][0].timestamp
        current = event.timestamp
        if current.own_time < last.own_time:
            raise InconsistentClockError(
                f"Clock of host {event.host!r} decreases from {last} to {current} "
                f"at line {event.line_number}",
                label=label,
                host=event.host,
                previous=last,
                current=current,
            )
        if current.own_time == last.own_time:
            if current.compare(last) is not Ordering.EQUAL:
                raise InconsistentClockError(
                    f"Host {event.host!r} repeats own time {current.own_time} with a "
                    f"different clock at line {event.line_number}",
                    label=label,
                    host=event.host,
                    previous=last,
                    current=current,
                )
            logger.debug(f"Collapsing line {event.line_number} into step {last}")
            steps[-1].append(event)
            continue
        steps.append([event])

    nodes: List[ModelNode] = []
    heads: Dict[str, int] = {}
    tails: Dict[str, int] = {}
    chain_ids: Dict[str, List[int]] = {}

    for host, steps in per_host.items():
        head = ModelNode(id=len(nodes), host=host, position=0, head=True)
        nodes.append(head)
        heads[host] = head.id
        previous = head
        ids = []
        for position, step in enumerate(steps, start=1):
            node = ModelNode(id=len(nodes), host=host, position=position, events=tuple(step))
            nodes.append(node)
            node.prev = previous.id
            previous.next = node.id
            ids.append(node.id)
            previous = node
        tail = ModelNode(id=len(nodes), host=host, position=len(steps) + 1, tail=True)
        nodes.append(tail)
        tail.prev = previous.id
        previous.next = tail.id
        tails[host] = tail.id
        chain_ids[host] = ids

    chains = {
        host: [step[0].timestamp for step in steps] for host, steps in per_host.items()
    }
    for (src_host, src_idx), (dst_host, dst_idx) in link_chains(chains, label):
        source = nodes[chain_ids[src_host][src_idx]]
        target = nodes[chain_ids[dst_host][dst_idx]]
        source.children.append(target.id)
        target.parents.append(source.id)

    graph = ModelGraph(label, list(per_host), nodes, heads, tails)
    logger.graph_built(label, len(graph.hosts), len(graph), len(graph.cross_edges()))
    return graph
