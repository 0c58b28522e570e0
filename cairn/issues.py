"""Issue vocabulary and the immutable issue record consumed by the counters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

# Severities, least to most severe.
INFO = "INFO"
MINOR = "MINOR"
MAJOR = "MAJOR"
CRITICAL = "CRITICAL"
BLOCKER = "BLOCKER"
SEVERITIES: Tuple[str, ...] = (INFO, MINOR, MAJOR, CRITICAL, BLOCKER)

CODE_SMELL = "CODE_SMELL"
BUG = "BUG"
VULNERABILITY = "VULNERABILITY"
ISSUE_TYPES: Tuple[str, ...] = (CODE_SMELL, BUG, VULNERABILITY)

STATUS_OPEN = "OPEN"
STATUS_CONFIRMED = "CONFIRMED"
STATUS_REOPENED = "REOPENED"
STATUS_RESOLVED = "RESOLVED"
STATUS_CLOSED = "CLOSED"
STATUSES: Tuple[str, ...] = (
    STATUS_OPEN,
    STATUS_CONFIRMED,
    STATUS_REOPENED,
    STATUS_RESOLVED,
    STATUS_CLOSED,
)

RESOLUTION_FIXED = "FIXED"
RESOLUTION_FALSE_POSITIVE = "FALSE-POSITIVE"
RESOLUTION_WONT_FIX = "WONTFIX"
RESOLUTION_REMOVED = "REMOVED"
RESOLUTIONS: Tuple[str, ...] = (
    RESOLUTION_FIXED,
    RESOLUTION_FALSE_POSITIVE,
    RESOLUTION_WONT_FIX,
    RESOLUTION_REMOVED,
)


@dataclass(frozen=True)
class Issue:
    """A quality issue attached to exactly one component.

    Severity, type and status are kept as plain strings: values outside the
    known vocabulary are still counted into the keyed bags, they just have no
    metric to be reported under.
    """

    key: str
    creation_date: int  # epoch milliseconds
    status: str
    severity: str
    type: str
    resolution: Optional[str] = None  # None means unresolved
