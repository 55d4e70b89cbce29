# tests/motif_tests/test_navigator.py
# This file is part of Causeway - Causal Log Motif Search
#
# Test suite for circular navigation over motif results

"""Test suite for MotifNavigator.

Covers the circular next/prev law, direct jumps, the no-match sentinel,
ordering across two views and the response shape handed to callers.
"""

import pytest
from motif import NO_MATCH, MotifGroup, MotifNavigator, TextQueryMotifFinder
from model.graph_builder import build_model_graph
from parser import parse_log
from utils.log_generator import generate_log


@pytest.fixture
def error_navigator(build_graph):
    text = generate_log(10, ['A', 'B', 'C'], seed=42, keywords={2: 'ERROR', 5: 'ERROR', 9: 'ERROR'})
    graph = build_graph(text)
    return MotifNavigator([TextQueryMotifFinder('ERROR').find(graph)])


class TestMotifNavigator:
    """Navigation over a single view."""

    def test_starts_on_first_instance(self, error_navigator):
        result = error_navigator.current()

        assert error_navigator.num_instances == 3
        assert not error_navigator.is_empty()
        assert result.index == 0
        assert result.found
        assert result.to_response() == {
            "instances": 3,
            "index": 0,
            "anchorOffset": result.instance.nodes[0].first_event.offset,
        }

    def test_next_wraps_around(self, error_navigator):
        indices = [error_navigator.next().index for _ in range(4)]

        assert indices == [1, 2, 0, 1]

    def test_prev_wraps_around(self, error_navigator):
        assert error_navigator.prev().index == 2
        assert error_navigator.prev().index == 1

    @pytest.mark.parametrize("k", [1, 2, 3, 7])
    def test_circular_law(self, error_navigator, k):
        start = error_navigator.current().anchor_offset
        for _ in range(k):
            error_navigator.next()
        for _ in range(k):
            error_navigator.prev()

        assert error_navigator.current().anchor_offset == start
        assert error_navigator.move(3 * k).index == 0

    def test_jump_to(self, error_navigator):
        assert error_navigator.jump_to(2).index == 2
        assert error_navigator.next().index == 0

        with pytest.raises(IndexError):
            error_navigator.jump_to(3)
        with pytest.raises(IndexError):
            error_navigator.jump_to(-1)

    def test_instances_ordered_topologically(self, two_line_log, build_graph):
        graph = build_graph(two_line_log)
        group = TextQueryMotifFinder('"A"').find(graph)
        group.motifs.reverse()

        navigator = MotifNavigator([group])

        assert [str(m.nodes[0]) for m in navigator.instances()] == ['A#1', 'B#1']
        assert navigator.current().anchor_offset == 0
        assert navigator.next().anchor_offset == 16


class TestNoMatch:
    """An empty result set is a normal state."""

    def test_every_call_returns_sentinel(self, two_line_log, build_graph):
        navigator = MotifNavigator([MotifGroup(build_graph(two_line_log))])

        assert navigator.num_instances == 0
        assert navigator.is_empty()
        assert navigator.index == -1
        for result in (navigator.current(), navigator.next(), navigator.prev(), navigator.jump_to(5)):
            assert result is NO_MATCH

    def test_sentinel_response(self):
        assert NO_MATCH.to_response() == {"instances": 0, "index": -1, "anchorOffset": None}
        assert not NO_MATCH.found


class TestTwoViews:
    """Pairwise comparison of two executions."""

    def test_first_view_before_second(self, two_execution_log, execution_delimiter):
        log = parse_log(two_execution_log, delimiter=execution_delimiter)
        groups = [
            TextQueryMotifFinder('send').find(build_model_graph(log.events(label), label))
            for label in log.labels
        ]

        navigator = MotifNavigator(groups)

        results = [navigator.current(), navigator.next()]
        assert [r.view for r in results] == [0, 1]
        assert [r.anchor_offset for r in results] == [
            log.events('first')[0].offset,
            log.events('second')[0].offset,
        ]
        assert navigator.next().view == 0

    def test_at_most_two_views(self, two_line_log, build_graph):
        graph = build_graph(two_line_log)

        with pytest.raises(ValueError):
            MotifNavigator([MotifGroup(graph)] * 3)
