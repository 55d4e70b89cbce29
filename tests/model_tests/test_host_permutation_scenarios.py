# tests/model_tests/test_host_permutation_scenarios.py

"""Host permutations – chain length and first-occurrence orders."""

import pytest
from model.graph_builder import build_model_graph
from model.host_permutation import (
    HostSort,
    LengthPermutation,
    LogOrderPermutation,
    host_permutation_for,
)
from parser import parse_log


def _ordered(permutation, *graphs):
    for graph in graphs:
        permutation.add_graph(graph)
    return permutation.update()


def test_length_descending(gather_log, build_graph):
    graph = build_graph(gather_log)
    assert _ordered(LengthPermutation(descending=True), graph) == ['A', 'B', 'C']


def test_length_ascending(gather_log, build_graph):
    graph = build_graph(gather_log)
    assert _ordered(LengthPermutation(descending=False), graph) == ['B', 'C', 'A']


def test_length_ties_broken_by_first_occurrence(request_response_log, build_graph):
    graph = build_graph(request_response_log)
    assert _ordered(LengthPermutation(descending=True), graph) == ['A', 'B']
    assert _ordered(LengthPermutation(descending=False), graph) == ['A', 'B']


def test_log_order(gather_log, build_graph):
    graph = build_graph(gather_log)
    assert _ordered(LogOrderPermutation(), graph) == ['B', 'C', 'A']
    assert _ordered(LogOrderPermutation(descending=True), graph) == ['A', 'C', 'B']


def test_lengths_summed_over_graphs(two_execution_log, execution_delimiter):
    log = parse_log(two_execution_log, delimiter=execution_delimiter)
    graphs = [build_model_graph(log.events(label), label) for label in log.labels]
    permutation = LengthPermutation(descending=True)
    assert _ordered(permutation, *graphs) == ['A', 'B']
    assert permutation.hosts == ['A', 'B']


def test_hosts_empty_before_update(gather_log, build_graph):
    permutation = LogOrderPermutation()
    permutation.add_graph(build_graph(gather_log))
    assert permutation.hosts == []


@pytest.mark.parametrize(
    "value, expected",
    [
        ("length", HostSort.LENGTH),
        ("byChainLength", HostSort.LENGTH),
        ("order", HostSort.ORDER),
        ("byFirstOccurrence", HostSort.ORDER),
    ],
)
def test_sort_type_aliases(value, expected):
    assert HostSort.from_config(value) is expected


def test_permutation_factory():
    assert isinstance(host_permutation_for("length", True), LengthPermutation)
    assert isinstance(host_permutation_for("byFirstOccurrence"), LogOrderPermutation)
    assert host_permutation_for("order", True).descending


def test_unknown_sort_type_rejected():
    with pytest.raises(ValueError):
        host_permutation_for("alphabetical")
