"""Cairn-specific exceptions."""


class CairnError(Exception):
    """Base class for every error raised by cairn.

    The CLI catches this, prints the message and exits non-zero.
    """


class InvariantViolationError(CairnError):
    """Raised when the open/take-and-remove balance of the counter store breaks.

    Aggregated totals are only correct if every component is opened once and
    merged into its parent once, so any deviation fails immediately.
    """


class PeriodIndexError(CairnError, ValueError):
    """Raised when a period index falls outside ``[1, MAX_NUMBER_OF_PERIODS]``."""


class UnknownMetricError(CairnError, KeyError):
    """Raised when a metric key is not in the static metric table."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the message readable.
        return str(self.args[0]) if self.args else ""


class DuplicateMeasureError(CairnError):
    """Raised when a measure is written twice for the same component and metric."""


class ReportError(CairnError):
    """Raised when an input report cannot be parsed or validated."""
