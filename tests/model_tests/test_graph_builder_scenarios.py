# tests/model_tests/test_graph_builder_scenarios.py

"""Causal graph reconstruction – chains, sentinels, derived edges, collapsing."""

import pytest
from model.exceptions import InconsistentClockError
from model.graph_builder import build_model_graph, link_chains
from model.vector_timestamp import Ordering, VectorTimestamp as VT
from parser import parse_log
from utils.log_generator import generate_log


def test_two_line_log(two_line_log, build_graph, node_at):
    graph = build_graph(two_line_log)
    assert graph.hosts == ('A', 'B')
    assert len(graph) == 2
    a1, b1 = node_at(graph, 'A', 1), node_at(graph, 'B', 1)
    assert [(s, t) for s, t in graph.cross_edges()] == [(a1, b1)]
    assert graph.has_edge(a1, b1)
    assert not graph.has_edge(b1, a1)


def test_sentinels_bound_every_chain(request_response_log, build_graph):
    graph = build_graph(request_response_log)
    for host in graph.hosts:
        head, tail = graph.head(host), graph.tail(host)
        assert head.is_head() and head.position == 0 and not head.events
        assert tail.is_tail() and tail.position == graph.host_length(host) + 1
        first = graph.next(head)
        assert first.position == 1
        assert graph.prev(first) is head


def test_prev_next_inverse(request_response_log, build_graph):
    graph = build_graph(request_response_log)
    for node in graph.nodes():
        assert graph.prev(graph.next(node)) is node
        assert graph.next(graph.prev(node)) is node


def test_request_response_edges(request_response_log, build_graph):
    graph = build_graph(request_response_log)
    edges = {(str(s), str(t)) for s, t in graph.cross_edges()}
    assert edges == {('A#1', 'B#1'), ('B#2', 'A#2'), ('A#3', 'B#3'), ('B#4', 'A#4')}


def test_edges_point_causally_forward(build_graph):
    text = generate_log(60, ['A', 'B', 'C', 'D'], send_probability=0.5, seed=7)
    graph = build_graph(text)
    for source, target in graph.edges():
        assert source.timestamp.compare(target.timestamp) is Ordering.LESS


def test_children_lists_chain_successor_first(gather_log, build_graph, node_at):
    graph = build_graph(gather_log)
    b1 = node_at(graph, 'B', 1)
    a1, a2 = node_at(graph, 'A', 1), node_at(graph, 'A', 2)
    assert graph.children(b1) == [a1]
    assert graph.parents(a2) == [a1, node_at(graph, 'C', 1)]
    assert graph.children(graph.head('A')) == []


def test_transitively_implied_message_not_linked(build_graph):
    # C learns about A only through B
    text = (
        'A send {"A":1}\n'
        'B fwd {"A":1,"B":1}\n'
        'C recv {"A":1,"B":1,"C":1}\n'
    )
    graph = build_graph(text)
    edges = {(str(s), str(t)) for s, t in graph.cross_edges()}
    assert edges == {('A#1', 'B#1'), ('B#1', 'C#1')}


def test_equal_timestamps_collapse_into_one_node(build_graph, node_at):
    text = (
        'A start {"A":1}\n'
        'A details {"A":1}\n'
        'B recv {"A":1,"B":1}\n'
    )
    graph = build_graph(text)
    assert graph.host_length('A') == 1
    a1 = node_at(graph, 'A', 1)
    assert [e.line_number for e in a1.events] == [1, 2]
    assert a1.first_event.text == 'A start {"A":1}'


def test_decreasing_clock_rejected(build_graph):
    text = 'A one {"A":2}\nA two {"A":1}\n'
    with pytest.raises(InconsistentClockError) as exc_info:
        build_graph(text)
    assert exc_info.value.host == 'A'


def test_repeated_own_time_with_different_clock_rejected(build_graph):
    text = 'B send {"B":1}\nA one {"A":1}\nA two {"A":1,"B":1}\n'
    with pytest.raises(InconsistentClockError):
        build_graph(text)


def test_edge_source_must_happen_before_target():
    # B claims to know A:1, but A's first event already knows B:1
    chains = {
        'A': [VT('A', {'A': 1, 'B': 1})],
        'B': [VT('B', {'A': 1, 'B': 1})],
    }
    with pytest.raises(InconsistentClockError):
        link_chains(chains, label='broken')


def test_unknown_host_in_clock_contributes_no_edge(build_graph):
    text = 'A recv {"A":1,"Z":4}\n'
    graph = build_graph(text)
    assert graph.hosts == ('A',)
    assert graph.cross_edges() == []


def test_link_chains_returns_chain_references():
    chains = {
        'A': [VT('A', {'A': 1}), VT('A', {'A': 2, 'B': 1})],
        'B': [VT('B', {'A': 1, 'B': 1})],
    }
    assert link_chains(chains) == [(('B', 0), ('A', 1)), (('A', 0), ('B', 0))]


def test_graph_per_label(two_execution_log, execution_delimiter):
    log = parse_log(two_execution_log, delimiter=execution_delimiter)
    graphs = {label: build_model_graph(log.events(label), label) for label in log.labels}
    assert list(graphs) == ['first', 'second']
    assert graphs['first'].hosts == ('A', 'B')
    assert graphs['second'].hosts == ('B', 'A')
    assert graphs['second'].label == 'second'
