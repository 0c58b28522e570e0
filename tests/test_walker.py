"""Tests for AggregationWalker: rollup, eviction and hook-order invariants."""

import pytest

from cairn.component import ComponentKind
from cairn.counters import CounterStore
from cairn.emitter import MeasureEmitter
from cairn.errors import InvariantViolationError
from cairn.measures import MeasureRepository
from cairn.metrics import NEW_VIOLATIONS_KEY, OPEN_ISSUES_KEY, VIOLATIONS_KEY
from cairn.periods import Period, PeriodsHolder
from cairn.walker import AggregationWalker

from _builders import leaf, make_issue, node, walk

BASELINE = 1_000_000


def _walker():
    holder = PeriodsHolder()
    return AggregationWalker(holder, MeasureEmitter(holder, MeasureRepository()))


# ---------------------------------------------------------------------------
# Rollup
# ---------------------------------------------------------------------------


def test_no_double_counting():
    children = [leaf(i, f"f{i}.py", *[make_issue() for _ in range(i)]) for i in (2, 3, 4)]
    root = node(1, "proj", children, make_issue(), kind=ComponentKind.PROJECT)
    walker, repo = walk(root)
    assert repo.value(1, VIOLATIONS_KEY) == 2 + 3 + 4 + 1
    for i in (2, 3, 4):
        assert repo.value(i, VIOLATIONS_KEY) == i
    assert walker.issues_counted == 10
    assert walker.components_visited == 4


def test_nested_rollup():
    deep = leaf(4, "a/b/x.py", make_issue(), make_issue())
    b = node(3, "a/b", [deep], make_issue())
    a = node(2, "a", [b])
    root = node(1, "proj", [a, leaf(5, "y.py", make_issue())])
    _, repo = walk(root)
    assert repo.value(4, VIOLATIONS_KEY) == 2
    assert repo.value(3, VIOLATIONS_KEY) == 3
    assert repo.value(2, VIOLATIONS_KEY) == 3
    assert repo.value(1, VIOLATIONS_KEY) == 4
    assert repo.value(1, OPEN_ISSUES_KEY) == 4


def test_components_without_issues_get_zero_measures():
    root = node(1, "proj", [leaf(2, "empty.py")])
    _, repo = walk(root)
    assert repo.value(2, VIOLATIONS_KEY) == 0
    assert repo.value(1, VIOLATIONS_KEY) == 0


# ---------------------------------------------------------------------------
# Eviction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "root",
    [
        leaf(1, "only.py"),
        node(1, "proj", [leaf(2, "a.py"), leaf(3, "b.py")]),
        node(1, "proj", [node(2, "a", [node(3, "b", [leaf(4, "c.py")])])]),
        node(
            1,
            "proj",
            [node(2, "a", [leaf(3, "x"), leaf(4, "y")]), node(5, "b", [leaf(6, "z")])],
        ),
    ],
)
def test_store_holds_only_root_after_walk(root):
    walker, _ = walk(root)
    assert walker.store.refs() == [1]


def test_store_peak_bounded_by_frontier():
    # A chain of directories each holding many files: only one directory's
    # files are ever pending at once.
    dirs = [
        node(100 + d, f"d{d}", [leaf(1000 + d * 10 + f, f"d{d}/f{f}") for f in range(5)])
        for d in range(10)
    ]
    walker, _ = walk(node(1, "proj", dirs))
    # at most the finished directories plus one directory's files
    assert walker.store.peak_size <= 10 + 5


def test_walk_returns_root_counters():
    root = node(1, "proj", [leaf(2, "a.py", make_issue())], make_issue())
    walker = _walker()
    counters = walker.walk(root)
    assert counters is walker.store.get(1)
    assert counters.total_counter().unresolved == 2


# ---------------------------------------------------------------------------
# Periods
# ---------------------------------------------------------------------------


def test_new_issue_counted_on_matching_periods_only():
    old = make_issue(created=BASELINE - 10_000)
    same_run = make_issue(created=BASELINE + 999)
    fresh = make_issue(created=BASELINE + 1000)
    root = node(1, "proj", [leaf(2, "a.py", old, same_run, fresh)])
    periods = [Period(1, BASELINE), Period(3, BASELINE - 20_000)]
    _, repo = walk(root, periods)
    assert repo.get(1, NEW_VIOLATIONS_KEY).variations == (1.0, None, 3.0, None, None)
    assert repo.get(2, NEW_VIOLATIONS_KEY).variations == (1.0, None, 3.0, None, None)
    assert repo.value(1, VIOLATIONS_KEY) == 3


def test_zero_periods_no_variation_on_any_component():
    root = node(1, "proj", [leaf(2, "a.py", make_issue(created=BASELINE * 10))])
    _, repo = walk(root)
    assert repo.get(1, NEW_VIOLATIONS_KEY) is None
    assert repo.get(2, NEW_VIOLATIONS_KEY) is None


# ---------------------------------------------------------------------------
# Contract violations
# ---------------------------------------------------------------------------


def test_enter_twice_raises():
    walker = _walker()
    c = leaf(1, "a.py")
    walker.enter(c)
    walker.leave(c)
    with pytest.raises(InvariantViolationError):
        walker.enter(c)


def test_enter_while_other_current_raises():
    walker = _walker()
    walker.enter(leaf(1, "a.py"))
    with pytest.raises(InvariantViolationError):
        walker.enter(leaf(2, "b.py"))


def test_enter_parent_before_child_raises():
    walker = _walker()
    with pytest.raises(InvariantViolationError):
        walker.enter(node(1, "proj", [leaf(2, "a.py")]))


def test_child_merged_twice_raises():
    walker = _walker()
    child = leaf(2, "a.py")
    walker.enter(child)
    walker.leave(child)
    first = node(1, "p1", [child])
    walker.enter(first)
    walker.leave(first)
    with pytest.raises(InvariantViolationError):
        walker.enter(node(3, "p2", [child]))


def test_visit_issue_without_current_raises():
    walker = _walker()
    with pytest.raises(InvariantViolationError):
        walker.visit_issue(leaf(1, "a.py"), make_issue())


def test_leave_non_current_raises():
    walker = _walker()
    walker.enter(leaf(1, "a.py"))
    with pytest.raises(InvariantViolationError):
        walker.leave(leaf(2, "b.py"))


def test_duplicate_sibling_refs_raise():
    root = node(1, "proj", [leaf(2, "a.py"), leaf(2, "b.py")])
    with pytest.raises(InvariantViolationError):
        walk(root)


def test_shared_store_is_used():
    store = CounterStore()
    holder = PeriodsHolder()
    walker = AggregationWalker(holder, MeasureEmitter(holder, MeasureRepository()), store)
    walker.walk(leaf(1, "a.py"))
    assert 1 in store
