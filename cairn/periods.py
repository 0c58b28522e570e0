"""Comparison periods and the rule deciding whether an issue is new on one."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from .errors import PeriodIndexError
from .issues import Issue

MAX_NUMBER_OF_PERIODS = 5

# Issues created within one second after the period snapshot belong to the
# analysis that produced the snapshot, not to the code changed since.
NEW_ISSUE_GRACE_MS = 1000


def check_period_index(index: int) -> int:
    """Return *index* unchanged, or raise PeriodIndexError if it is out of range."""
    if not 1 <= index <= MAX_NUMBER_OF_PERIODS:
        raise PeriodIndexError(
            f"period index {index} is outside [1, {MAX_NUMBER_OF_PERIODS}]"
        )
    return index


@dataclass(frozen=True)
class Period:
    """A historical baseline that new issues are measured against."""

    index: int  # 1-based
    snapshot_date: int  # epoch milliseconds
    label: Optional[str] = None

    def __post_init__(self) -> None:
        check_period_index(self.index)


class PeriodsHolder:
    """The periods configured for one analysis run, ordered by index."""

    def __init__(self, periods: Iterable[Period] = ()) -> None:
        ordered = sorted(periods, key=lambda p: p.index)
        seen = set()
        for period in ordered:
            if period.index in seen:
                raise PeriodIndexError(f"period index {period.index} configured twice")
            seen.add(period.index)
        self._periods: Tuple[Period, ...] = tuple(ordered)

    @property
    def periods(self) -> Tuple[Period, ...]:
        return self._periods

    def has_periods(self) -> bool:
        return bool(self._periods)

    def __iter__(self) -> Iterator[Period]:
        return iter(self._periods)

    def __len__(self) -> int:
        return len(self._periods)


def is_new_on_period(issue: Issue, period: Period) -> bool:
    """Return True if *issue* was created after *period*'s snapshot plus the grace window."""
    return issue.creation_date >= period.snapshot_date + NEW_ISSUE_GRACE_MS
