"""Resolve periods, aggregate issue counters over the tree, and report per component."""

from typing import Generator, List, Optional

from .component import Component, iter_pre_order
from .config import CairnConfig, load_config
from .counters import CounterStore
from .emitter import MeasureEmitter
from .measures import MeasureRepository
from .metrics import (
    BUGS_KEY,
    CODE_SMELLS_KEY,
    CONFIRMED_ISSUES_KEY,
    FALSE_POSITIVE_ISSUES_KEY,
    NEW_VIOLATIONS_KEY,
    OPEN_ISSUES_KEY,
    REOPENED_ISSUES_KEY,
    SEVERITY_TO_METRIC_KEY,
    VIOLATIONS_KEY,
    VULNERABILITIES_KEY,
)
from .periods import Period, PeriodsHolder
from .report import Report, parse_periods
from .stats import RunStats
from .walker import AggregationWalker

# Absolute measures shown on each component line, with their short labels.
_LINE_METRICS = [
    ("issues", VIOLATIONS_KEY),
    ("bugs", BUGS_KEY),
    ("vulnerabilities", VULNERABILITIES_KEY),
    ("code_smells", CODE_SMELLS_KEY),
    ("open", OPEN_ISSUES_KEY),
    ("reopened", REOPENED_ISSUES_KEY),
    ("confirmed", CONFIRMED_ISSUES_KEY),
    ("false_positives", FALSE_POSITIVE_ISSUES_KEY),
]


def _resolve_periods(report: Report, config: CairnConfig) -> PeriodsHolder:
    """Periods from the report win; otherwise fall back to the configured ones."""
    periods: List[Period] = list(report.periods)
    if not periods and config.periods:
        periods = parse_periods(config.periods)
    return PeriodsHolder(periods)


def _describe_period(period: Period) -> str:
    if period.label:
        return f"period {period.index}: {period.label}"
    return f"period {period.index}"


def _format_variations(variations) -> str:
    return "[" + ", ".join("-" if v is None else str(int(v)) for v in variations) + "]"


def _format_component(
    component: Component, depth: int, repository: MeasureRepository
) -> str:
    ref = component.ref
    parts = [f"{label}={repository.value(ref, key)}" for label, key in _LINE_METRICS]
    severities = ", ".join(
        f"{severity.lower()}={repository.value(ref, key)}"
        for severity, key in SEVERITY_TO_METRIC_KEY.items()
    )
    line = (
        f"{'  ' * depth}{component.key} [{component.kind.value}]: "
        f"{' '.join(parts)} ({severities})"
    )
    new_issues = repository.get(ref, NEW_VIOLATIONS_KEY)
    if new_issues is not None:
        line += f" new={_format_variations(new_issues.variations)}"
    return line


def run_engine(
    report: Report,
    config: Optional[CairnConfig] = None,
    repository: Optional[MeasureRepository] = None,
    stats: Optional[RunStats] = None,
) -> Generator[str, None, None]:
    """Aggregate issue measures over the report's tree and yield one line per component.

    Measures are written to *repository* (a fresh one if None) before the
    first line is yielded; *stats* receives the run totals.
    """
    if config is None:
        config = load_config()
    if repository is None:
        repository = MeasureRepository()
    if stats is None:
        stats = RunStats()

    periods = _resolve_periods(report, config)
    store = CounterStore()
    walker = AggregationWalker(periods, MeasureEmitter(periods, repository), store)
    root_counters = walker.walk(report.root)
    # The root has no parent to take its counters.
    store.take_and_remove(report.root.ref)

    stats.merge(
        RunStats(
            components_visited=walker.components_visited,
            issues_counted=walker.issues_counted,
            unresolved=root_counters.total_counter().unresolved,
            periods_configured=len(periods),
            peak_open_counter_sets=store.peak_size,
            period_labels=[_describe_period(p) for p in periods],
        )
    )

    for component, depth in iter_pre_order(report.root):
        yield _format_component(component, depth, repository)
