# tests/model_tests/test_vector_timestamp_scenarios.py

"""VectorTimestamp – four-way comparison, merge, increment and validation."""

import pytest
from model.exceptions import MalformedTimestampError
from model.vector_timestamp import Ordering, VectorTimestamp as VT, compare, merge


def test_rich_comparison_operators():
    v1 = VT('P', {'P': 1})
    v2 = VT('P', {'P': 2, 'Q': 0})
    assert v1 < v2
    assert v1 <= v2
    assert not (v1 > v2)
    assert not (v1 >= v2)
    assert v1 != v2


def test_incomparability_concurrent():
    vP = VT('P', {'P': 1})
    vQ = VT('Q', {'Q': 1})
    assert vP.concurrent(vQ)
    assert compare(vP, vQ) is Ordering.CONCURRENT
    assert not (vP < vQ)
    assert not (vP <= vQ)
    assert not (vQ < vP)


def test_missing_components_count_as_zero():
    a = VT('A', {'A': 1})
    b = VT('B', {'A': 1, 'B': 1})
    assert a.get('B') == 0
    assert compare(a, b) is Ordering.LESS
    assert compare(b, a) is Ordering.GREATER


@pytest.mark.parametrize(
    "left, right",
    [
        ({'A': 1}, {'A': 1, 'B': 1}),
        ({'A': 2, 'B': 1}, {'A': 1, 'B': 3}),
        ({'A': 3}, {'A': 3}),
        ({'A': 1, 'B': 5, 'C': 2}, {'A': 1, 'B': 4, 'C': 2}),
    ],
)
def test_compare_mirror_symmetry(left, right):
    a = VT('A', left)
    b = VT('A', right)
    assert compare(a, b) is compare(b, a).mirror()


def test_equal_ignores_owner_and_zero_components():
    a = VT('A', {'A': 1, 'B': 2})
    b = VT('B', {'B': 2, 'A': 1, 'C': 0})
    assert compare(a, b) is Ordering.EQUAL
    assert a == b
    assert hash(a) == hash(b)


def test_merge_commutative_idempotent():
    a = VT('A', {'A': 2})
    b = VT('B', {'A': 1, 'B': 3})
    expected = VT('A', {'A': 2, 'B': 3})
    assert merge(a, b) == expected
    assert merge(b, a) == expected
    assert merge(a, a) == a
    assert merge(a, b).host == 'A'


def test_increment_is_copy_on_write():
    a = VT('A', {'A': 1, 'B': 2})
    a2 = a.increment()
    assert a2.own_time == 2
    assert a.own_time == 1
    assert a < a2
    assert a.increment('C').get('C') == 1
    assert a.increment('C').host == 'A'


def test_clock_is_copied_on_construction():
    raw = {'A': 1}
    a = VT('A', raw)
    raw['A'] = 5
    assert a.own_time == 1


def test_set_membership():
    s = {VT('P', {'P': 1})}
    assert VT('P', {'P': 1}) in s
    assert VT('P', {'P': 2}) not in s


@pytest.mark.parametrize(
    "host, clock",
    [
        ('', {'': 1}),
        ('A', {'B': 1}),
        ('A', {'A': -1}),
        ('A', {'A': 1.5}),
        ('A', {'A': '1'}),
        ('A', {'A': True}),
    ],
)
def test_malformed_timestamps_rejected(host, clock):
    with pytest.raises(MalformedTimestampError):
        VT(host, clock)


def test_malformed_timestamp_is_value_error():
    with pytest.raises(ValueError):
        VT('A', {'A': -3})


def test_str_lists_owner_and_clock():
    assert str(VT('A', {'A': 1, 'B': 2})) == 'A{A:1, B:2}'
