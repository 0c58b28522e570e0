"""Turn a finished counter set into the issue measures of one component."""

from __future__ import annotations

from typing import Callable, List, Optional

from .component import Component
from .counters import Counter, CounterSet
from .measures import Measure, MeasureSink
from .metrics import (
    CONFIRMED_ISSUES_KEY,
    FALSE_POSITIVE_ISSUES_KEY,
    NEW_VIOLATIONS_KEY,
    OPEN_ISSUES_KEY,
    REOPENED_ISSUES_KEY,
    SEVERITY_TO_METRIC_KEY,
    SEVERITY_TO_NEW_METRIC_KEY,
    TYPE_TO_METRIC_KEY,
    TYPE_TO_NEW_METRIC_KEY,
    VIOLATIONS_KEY,
)
from .periods import MAX_NUMBER_OF_PERIODS, PeriodsHolder


class MeasureEmitter:
    """Writes the absolute measures and, when periods exist, the variation measures."""

    def __init__(self, periods: PeriodsHolder, sink: MeasureSink) -> None:
        self.periods = periods
        self.sink = sink

    def emit(self, component: Component, counters: CounterSet) -> None:
        total = counters.total_counter()
        self._add_by_severity(component, total)
        self._add_by_status(component, total)
        self._add_by_type(component, total)
        if self.periods.has_periods():
            self._add_by_period(component, counters)

    def _add_by_severity(self, component: Component, total: Counter) -> None:
        for severity, metric_key in SEVERITY_TO_METRIC_KEY.items():
            self._add(component, metric_key, total.severity_count(severity))

    def _add_by_status(self, component: Component, total: Counter) -> None:
        self._add(component, VIOLATIONS_KEY, total.unresolved)
        self._add(component, OPEN_ISSUES_KEY, total.open)
        self._add(component, REOPENED_ISSUES_KEY, total.reopened)
        self._add(component, CONFIRMED_ISSUES_KEY, total.confirmed)
        self._add(component, FALSE_POSITIVE_ISSUES_KEY, total.false_positives)

    def _add_by_type(self, component: Component, total: Counter) -> None:
        for issue_type, metric_key in TYPE_TO_METRIC_KEY.items():
            self._add(component, metric_key, total.type_count(issue_type))

    def _add(self, component: Component, metric_key: str, value: int) -> None:
        self.sink.add(component, metric_key, Measure.of(value))

    def _add_by_period(self, component: Component, counters: CounterSet) -> None:
        self._add_variations(
            component, NEW_VIOLATIONS_KEY, counters, lambda c: c.unresolved
        )
        for severity, metric_key in SEVERITY_TO_NEW_METRIC_KEY.items():
            self._add_variations(
                component,
                metric_key,
                counters,
                lambda c, severity=severity: c.severity_count(severity),
            )
        for issue_type, metric_key in TYPE_TO_NEW_METRIC_KEY.items():
            self._add_variations(
                component,
                metric_key,
                counters,
                lambda c, issue_type=issue_type: c.type_count(issue_type),
            )

    def _add_variations(
        self,
        component: Component,
        metric_key: str,
        counters: CounterSet,
        read: Callable[[Counter], int],
    ) -> None:
        variations: List[Optional[float]] = [None] * MAX_NUMBER_OF_PERIODS
        for period in self.periods:
            variations[period.index - 1] = float(
                read(counters.period_counter(period.index))
            )
        self.sink.add(component, metric_key, Measure.no_value(variations))
