"""Cumulative statistics for a single cairn run."""

from dataclasses import dataclass, field
from typing import List


@dataclass
class RunStats:
    """Holds cumulative counts for a single cairn run."""

    components_visited: int = 0
    issues_counted: int = 0
    # Unresolved issues at the root, i.e. over the whole tree
    unresolved: int = 0
    periods_configured: int = 0

    # Largest number of counter sets held at once by the store
    peak_open_counter_sets: int = 0
    # One description per configured period, e.g. "period 1: previous_version"
    period_labels: List[str] = field(default_factory=list)

    def merge(self, other: "RunStats") -> None:
        """Add all counters from *other* into self (peak and periods keep the maximum).

        Period labels not yet present are appended.
        """
        self.components_visited += other.components_visited
        self.issues_counted += other.issues_counted
        self.unresolved += other.unresolved
        self.periods_configured = max(self.periods_configured, other.periods_configured)
        self.peak_open_counter_sets = max(
            self.peak_open_counter_sets, other.peak_open_counter_sets
        )
        for label in other.period_labels:
            if label not in self.period_labels:
                self.period_labels.append(label)

    def format_summary(self) -> List[str]:
        """Return a list of lines forming the human-readable run summary."""
        lines = ["--- cairn summary ---"]
        lines.append(f"components:          {self.components_visited}")
        lines.append(f"issues counted:      {self.issues_counted}")
        lines.append(f"unresolved issues:   {self.unresolved}")
        lines.append(f"periods:             {self.periods_configured}")
        for label in self.period_labels:
            lines.append(f"  {label}")
        lines.append(f"peak open counters:  {self.peak_open_counter_sets}")
        return lines
