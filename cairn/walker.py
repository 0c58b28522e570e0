"""Bottom-up aggregation of issue counters over a component tree."""

from __future__ import annotations

from typing import Optional

from .component import Component, iter_post_order
from .counters import CounterSet, CounterStore
from .emitter import MeasureEmitter
from .errors import InvariantViolationError
from .issues import Issue
from .periods import PeriodsHolder, is_new_on_period


class AggregationWalker:
    """Computes issue counters for every component, children first.

    For each component, in post-order:

    * ``enter`` opens a fresh counter set and merges in the finished sets of
      the children, removing them from the store;
    * ``visit_issue`` counts each directly attached issue, also on every
      period it is new on;
    * ``leave`` emits the measures and leaves the set in the store until the
      parent takes it.

    The store therefore holds only components whose parent has not been
    entered yet.  After a full walk the root's set is its only entry.
    """

    def __init__(
        self,
        periods: PeriodsHolder,
        emitter: MeasureEmitter,
        store: Optional[CounterStore] = None,
    ) -> None:
        self.periods = periods
        self.emitter = emitter
        self.store = store if store is not None else CounterStore()
        self._current: Optional[Component] = None
        self._current_counters: Optional[CounterSet] = None
        self.components_visited = 0
        self.issues_counted = 0

    def enter(self, component: Component) -> CounterSet:
        if self._current is not None:
            raise InvariantViolationError(
                f"cannot enter {component.key!r} while {self._current.key!r} is current"
            )
        counters = self.store.open(component.ref)
        for child in component.children:
            child_counters = self.store.take_and_remove(child.ref)
            if child_counters is None:
                raise InvariantViolationError(
                    f"child {child.key!r} of {component.key!r} was never finished"
                    " or was already merged"
                )
            counters.merge_from(child_counters)
        self._current = component
        self._current_counters = counters
        return counters

    def visit_issue(self, component: Component, issue: Issue) -> None:
        counters = self._require_current(component)
        counters.add_issue_to_current(issue)
        for period in self.periods:
            if is_new_on_period(issue, period):
                counters.add_issue_to_period(issue, period.index)
        self.issues_counted += 1

    def leave(self, component: Component) -> None:
        counters = self._require_current(component)
        self.emitter.emit(component, counters)
        self._current = None
        self._current_counters = None
        self.components_visited += 1

    def _require_current(self, component: Component) -> CounterSet:
        if self._current is not component or self._current_counters is None:
            raise InvariantViolationError(f"component {component.key!r} is not current")
        return self._current_counters

    def walk(self, root: Component) -> CounterSet:
        """Aggregate the whole tree under *root* and return the root's counter set.

        The root's set stays registered in the store; callers that no longer
        need it can drop it with ``store.take_and_remove(root.ref)``.
        """
        counters = None
        for component in iter_post_order(root):
            counters = self.enter(component)
            for issue in component.issues:
                self.visit_issue(component, issue)
            self.leave(component)
        return counters
