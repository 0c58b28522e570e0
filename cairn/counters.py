"""Issue counters, their per-period sets, and the store that evicts merged ones."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .errors import InvariantViolationError
from .issues import (
    ISSUE_TYPES,
    RESOLUTION_FALSE_POSITIVE,
    SEVERITIES,
    STATUS_CONFIRMED,
    STATUS_OPEN,
    STATUS_REOPENED,
    Issue,
)
from .periods import MAX_NUMBER_OF_PERIODS, check_period_index


def _zero_bag(keys) -> Dict[str, int]:
    return dict.fromkeys(keys, 0)


@dataclass
class Counter:
    """Counts issues by status and resolution, and unresolved ones by severity and type."""

    unresolved: int = 0
    open: int = 0
    reopened: int = 0
    confirmed: int = 0
    false_positives: int = 0
    severity_bag: Dict[str, int] = field(default_factory=lambda: _zero_bag(SEVERITIES))
    type_bag: Dict[str, int] = field(default_factory=lambda: _zero_bag(ISSUE_TYPES))

    def add_issue(self, issue: Issue) -> None:
        """Count one issue.

        Resolution and status are classified independently: an unresolved
        confirmed issue counts both as unresolved and as confirmed.
        """
        if issue.resolution is None:
            self.unresolved += 1
            self.type_bag[issue.type] = self.type_bag.get(issue.type, 0) + 1
            self.severity_bag[issue.severity] = (
                self.severity_bag.get(issue.severity, 0) + 1
            )
        elif issue.resolution == RESOLUTION_FALSE_POSITIVE:
            self.false_positives += 1

        if issue.status == STATUS_OPEN:
            self.open += 1
        elif issue.status == STATUS_REOPENED:
            self.reopened += 1
        elif issue.status == STATUS_CONFIRMED:
            self.confirmed += 1
        # Other statuses are ignored

    def merge(self, other: Optional["Counter"]) -> None:
        """Add all counts from *other* into self; None contributes nothing."""
        if other is None:
            return
        self.unresolved += other.unresolved
        self.open += other.open
        self.reopened += other.reopened
        self.confirmed += other.confirmed
        self.false_positives += other.false_positives
        for severity, count in other.severity_bag.items():
            self.severity_bag[severity] = self.severity_bag.get(severity, 0) + count
        for issue_type, count in other.type_bag.items():
            self.type_bag[issue_type] = self.type_bag.get(issue_type, 0) + count

    def severity_count(self, severity: str) -> int:
        return self.severity_bag.get(severity, 0)

    def type_count(self, issue_type: str) -> int:
        return self.type_bag.get(issue_type, 0)


def _fresh_counters() -> List[Counter]:
    return [Counter() for _ in range(1 + MAX_NUMBER_OF_PERIODS)]


@dataclass
class CounterSet:
    """One counter for the current totals plus one per period slot.

    Slot 0 holds the totals; slot ``i`` holds the issues new on period ``i``.
    All ``1 + MAX_NUMBER_OF_PERIODS`` slots always exist, whether or not the
    period is configured.
    """

    counters: List[Counter] = field(default_factory=_fresh_counters)

    def add_issue_to_current(self, issue: Issue) -> None:
        self.counters[0].add_issue(issue)

    def add_issue_to_period(self, issue: Issue, period_index: int) -> None:
        self.counters[check_period_index(period_index)].add_issue(issue)

    def merge_from(self, other: Optional["CounterSet"]) -> None:
        if other is None:
            return
        for mine, theirs in zip(self.counters, other.counters):
            mine.merge(theirs)

    def total_counter(self) -> Counter:
        return self.counters[0]

    def period_counter(self, period_index: int) -> Counter:
        return self.counters[check_period_index(period_index)]


class CounterStore:
    """Counter sets of components that are finished but not yet merged into their parent.

    ``open`` registers a component once; ``take_and_remove`` hands its set to
    the parent and forgets it, so the store only ever holds the traversal
    frontier.
    """

    def __init__(self) -> None:
        self._by_ref: Dict[int, CounterSet] = {}
        self.peak_size = 0

    def open(self, ref: int) -> CounterSet:
        if ref in self._by_ref:
            raise InvariantViolationError(f"component {ref} is already open")
        counter_set = CounterSet()
        self._by_ref[ref] = counter_set
        self.peak_size = max(self.peak_size, len(self._by_ref))
        return counter_set

    def take_and_remove(self, ref: int) -> Optional[CounterSet]:
        """Return and forget the set registered for *ref*, or None if there is none."""
        return self._by_ref.pop(ref, None)

    def get(self, ref: int) -> Optional[CounterSet]:
        return self._by_ref.get(ref)

    def refs(self) -> List[int]:
        return list(self._by_ref)

    def __contains__(self, ref: object) -> bool:
        return ref in self._by_ref

    def __len__(self) -> int:
        return len(self._by_ref)
