"""Report input: a component tree with attached issues and optional periods.

The JSON document is validated with pydantic before anything is built from
it, so the aggregation only ever sees well-formed components, issues and
periods.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .component import Component, ComponentKind
from .errors import ReportError
from .issues import Issue
from .periods import MAX_NUMBER_OF_PERIODS, Period

Timestamp = Union[int, datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def to_epoch_millis(value: Timestamp) -> int:
    """Convert an epoch-millisecond int or a datetime to epoch milliseconds.

    Naive datetimes are taken to be UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return (value - _EPOCH) // timedelta(milliseconds=1)
    return int(value)


class IssueModel(BaseModel):
    key: str
    creation_date: Timestamp
    status: str
    severity: str
    type: str
    resolution: Optional[str] = None

    @field_validator("status", "severity", "type")
    @classmethod
    def upper_case(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("resolution")
    @classmethod
    def normalize_resolution(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().upper()
        return v or None

    def to_issue(self) -> Issue:
        return Issue(
            key=self.key,
            creation_date=to_epoch_millis(self.creation_date),
            status=self.status,
            severity=self.severity,
            type=self.type,
            resolution=self.resolution,
        )


class ComponentModel(BaseModel):
    ref: int
    key: str
    kind: ComponentKind = ComponentKind.FILE
    issues: List[IssueModel] = Field(default_factory=list)
    children: List["ComponentModel"] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def upper_case_kind(cls, v):
        return v.upper() if isinstance(v, str) else v


ComponentModel.model_rebuild()


class PeriodModel(BaseModel):
    index: int = Field(ge=1, le=MAX_NUMBER_OF_PERIODS)
    date: Timestamp
    label: Optional[str] = None

    def to_period(self) -> Period:
        return Period(self.index, to_epoch_millis(self.date), self.label)


class ReportModel(BaseModel):
    component: ComponentModel
    periods: List[PeriodModel] = Field(default_factory=list, max_length=MAX_NUMBER_OF_PERIODS)


@dataclass
class Report:
    """A parsed report: the root component and the periods it was analyzed against."""

    root: Component
    periods: List[Period] = field(default_factory=list)


def _build_tree(model: ComponentModel) -> Component:
    root = Component(model.ref, model.key, model.kind)
    root.issues = [m.to_issue() for m in model.issues]
    stack = [(model, root)]
    while stack:
        parent_model, parent = stack.pop()
        for child_model in parent_model.children:
            child = Component(child_model.ref, child_model.key, child_model.kind)
            child.issues = [m.to_issue() for m in child_model.issues]
            parent.children.append(child)
            stack.append((child_model, child))
    return root


def parse_periods(raw: object) -> List[Period]:
    """Validate a list of ``{index, date, label}`` mappings into periods."""
    if not isinstance(raw, list):
        raise ReportError(f"periods must be a list of tables, got {type(raw).__name__}")
    try:
        return [PeriodModel.model_validate(item).to_period() for item in raw]
    except ValidationError as exc:
        raise ReportError(f"invalid period: {exc}") from exc


def parse_report(text: str) -> Report:
    """Parse a JSON report document; raise ReportError if it is malformed."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ReportError(f"report is not valid JSON: {exc}") from exc
    except RecursionError as exc:
        raise ReportError("report is nested too deeply") from exc
    try:
        model = ReportModel.model_validate(data)
    except ValidationError as exc:
        raise ReportError(f"invalid report: {exc}") from exc
    except RecursionError as exc:
        raise ReportError("report is nested too deeply") from exc
    return Report(
        root=_build_tree(model.component),
        periods=[p.to_period() for p in model.periods],
    )
