"""Tests for CounterSet."""

import pytest

from cairn.counters import Counter, CounterSet
from cairn.errors import PeriodIndexError
from cairn.periods import MAX_NUMBER_OF_PERIODS

from _builders import make_issue


def test_counter_set_has_fixed_size():
    cs = CounterSet()
    assert len(cs.counters) == 1 + MAX_NUMBER_OF_PERIODS
    assert all(c == Counter() for c in cs.counters)


def test_add_issue_to_current_only_touches_slot_zero():
    cs = CounterSet()
    cs.add_issue_to_current(make_issue())
    assert cs.total_counter().unresolved == 1
    for index in range(1, MAX_NUMBER_OF_PERIODS + 1):
        assert cs.period_counter(index) == Counter()


def test_add_issue_to_period():
    cs = CounterSet()
    cs.add_issue_to_period(make_issue(), 3)
    assert cs.period_counter(3).unresolved == 1
    assert cs.period_counter(2).unresolved == 0
    assert cs.total_counter().unresolved == 0


@pytest.mark.parametrize("index", [0, -1, MAX_NUMBER_OF_PERIODS + 1])
def test_add_issue_to_period_out_of_range(index):
    cs = CounterSet()
    with pytest.raises(PeriodIndexError):
        cs.add_issue_to_period(make_issue(), index)


def test_period_counter_out_of_range():
    with pytest.raises(PeriodIndexError):
        CounterSet().period_counter(0)


def test_merge_from_merges_every_slot():
    a = CounterSet()
    b = CounterSet()
    a.add_issue_to_current(make_issue())
    b.add_issue_to_current(make_issue())
    b.add_issue_to_period(make_issue(), 1)
    b.add_issue_to_period(make_issue(), MAX_NUMBER_OF_PERIODS)
    a.merge_from(b)
    assert a.total_counter().unresolved == 2
    assert a.period_counter(1).unresolved == 1
    assert a.period_counter(MAX_NUMBER_OF_PERIODS).unresolved == 1


def test_merge_from_none_is_noop():
    a = CounterSet()
    a.add_issue_to_current(make_issue())
    a.merge_from(None)
    assert a.total_counter().unresolved == 1
