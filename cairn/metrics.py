"""Static metric table: metric keys and the lookups from issue attributes to them."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping

from .errors import UnknownMetricError
from .issues import (
    BLOCKER,
    BUG,
    CODE_SMELL,
    CRITICAL,
    INFO,
    MAJOR,
    MINOR,
    VULNERABILITY,
)

VIOLATIONS_KEY = "violations"
OPEN_ISSUES_KEY = "open_issues"
REOPENED_ISSUES_KEY = "reopened_issues"
CONFIRMED_ISSUES_KEY = "confirmed_issues"
FALSE_POSITIVE_ISSUES_KEY = "false_positive_issues"

BLOCKER_VIOLATIONS_KEY = "blocker_violations"
CRITICAL_VIOLATIONS_KEY = "critical_violations"
MAJOR_VIOLATIONS_KEY = "major_violations"
MINOR_VIOLATIONS_KEY = "minor_violations"
INFO_VIOLATIONS_KEY = "info_violations"

CODE_SMELLS_KEY = "code_smells"
BUGS_KEY = "bugs"
VULNERABILITIES_KEY = "vulnerabilities"

NEW_VIOLATIONS_KEY = "new_violations"
NEW_BLOCKER_VIOLATIONS_KEY = "new_blocker_violations"
NEW_CRITICAL_VIOLATIONS_KEY = "new_critical_violations"
NEW_MAJOR_VIOLATIONS_KEY = "new_major_violations"
NEW_MINOR_VIOLATIONS_KEY = "new_minor_violations"
NEW_INFO_VIOLATIONS_KEY = "new_info_violations"
NEW_CODE_SMELLS_KEY = "new_code_smells"
NEW_BUGS_KEY = "new_bugs"
NEW_VULNERABILITIES_KEY = "new_vulnerabilities"

SEVERITY_TO_METRIC_KEY: Mapping[str, str] = MappingProxyType(
    {
        BLOCKER: BLOCKER_VIOLATIONS_KEY,
        CRITICAL: CRITICAL_VIOLATIONS_KEY,
        MAJOR: MAJOR_VIOLATIONS_KEY,
        MINOR: MINOR_VIOLATIONS_KEY,
        INFO: INFO_VIOLATIONS_KEY,
    }
)

SEVERITY_TO_NEW_METRIC_KEY: Mapping[str, str] = MappingProxyType(
    {
        BLOCKER: NEW_BLOCKER_VIOLATIONS_KEY,
        CRITICAL: NEW_CRITICAL_VIOLATIONS_KEY,
        MAJOR: NEW_MAJOR_VIOLATIONS_KEY,
        MINOR: NEW_MINOR_VIOLATIONS_KEY,
        INFO: NEW_INFO_VIOLATIONS_KEY,
    }
)

TYPE_TO_METRIC_KEY: Mapping[str, str] = MappingProxyType(
    {
        CODE_SMELL: CODE_SMELLS_KEY,
        BUG: BUGS_KEY,
        VULNERABILITY: VULNERABILITIES_KEY,
    }
)

TYPE_TO_NEW_METRIC_KEY: Mapping[str, str] = MappingProxyType(
    {
        CODE_SMELL: NEW_CODE_SMELLS_KEY,
        BUG: NEW_BUGS_KEY,
        VULNERABILITY: NEW_VULNERABILITIES_KEY,
    }
)


@dataclass(frozen=True)
class Metric:
    """An output metric.  Variation metrics carry per-period values only."""

    key: str
    name: str
    variation: bool = False


def _build_registry() -> Dict[str, Metric]:
    metrics = [
        Metric(VIOLATIONS_KEY, "Issues"),
        Metric(OPEN_ISSUES_KEY, "Open Issues"),
        Metric(REOPENED_ISSUES_KEY, "Reopened Issues"),
        Metric(CONFIRMED_ISSUES_KEY, "Confirmed Issues"),
        Metric(FALSE_POSITIVE_ISSUES_KEY, "False Positive Issues"),
        Metric(BLOCKER_VIOLATIONS_KEY, "Blocker Issues"),
        Metric(CRITICAL_VIOLATIONS_KEY, "Critical Issues"),
        Metric(MAJOR_VIOLATIONS_KEY, "Major Issues"),
        Metric(MINOR_VIOLATIONS_KEY, "Minor Issues"),
        Metric(INFO_VIOLATIONS_KEY, "Info Issues"),
        Metric(CODE_SMELLS_KEY, "Code Smells"),
        Metric(BUGS_KEY, "Bugs"),
        Metric(VULNERABILITIES_KEY, "Vulnerabilities"),
        Metric(NEW_VIOLATIONS_KEY, "New Issues", variation=True),
        Metric(NEW_BLOCKER_VIOLATIONS_KEY, "New Blocker Issues", variation=True),
        Metric(NEW_CRITICAL_VIOLATIONS_KEY, "New Critical Issues", variation=True),
        Metric(NEW_MAJOR_VIOLATIONS_KEY, "New Major Issues", variation=True),
        Metric(NEW_MINOR_VIOLATIONS_KEY, "New Minor Issues", variation=True),
        Metric(NEW_INFO_VIOLATIONS_KEY, "New Info Issues", variation=True),
        Metric(NEW_CODE_SMELLS_KEY, "New Code Smells", variation=True),
        Metric(NEW_BUGS_KEY, "New Bugs", variation=True),
        Metric(NEW_VULNERABILITIES_KEY, "New Vulnerabilities", variation=True),
    ]
    return {m.key: m for m in metrics}


METRICS: Mapping[str, Metric] = MappingProxyType(_build_registry())


def get_metric(key: str) -> Metric:
    """Return the metric registered under *key*; raise UnknownMetricError otherwise."""
    try:
        return METRICS[key]
    except KeyError:
        raise UnknownMetricError(f"unknown metric {key!r}") from None
