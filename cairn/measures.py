"""Measures produced per component, and the in-memory sink that stores them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Sequence, Tuple

from .component import Component, iter_pre_order
from .errors import DuplicateMeasureError
from .metrics import get_metric
from .periods import MAX_NUMBER_OF_PERIODS, check_period_index

Variations = Tuple[Optional[float], ...]


@dataclass(frozen=True)
class Measure:
    """An absolute value, a per-period variation vector, or both.

    ``variations`` always has ``MAX_NUMBER_OF_PERIODS`` entries; entry
    ``i - 1`` belongs to period ``i`` and is None when that period is not
    configured.
    """

    value: Optional[int] = None
    variations: Optional[Variations] = None

    @classmethod
    def of(cls, value: int) -> "Measure":
        return cls(value=value)

    @classmethod
    def no_value(cls, variations: Sequence[Optional[float]]) -> "Measure":
        if len(variations) != MAX_NUMBER_OF_PERIODS:
            raise ValueError(
                f"expected {MAX_NUMBER_OF_PERIODS} variations, got {len(variations)}"
            )
        return cls(variations=tuple(variations))

    def variation(self, period_index: int) -> Optional[float]:
        check_period_index(period_index)
        if self.variations is None:
            return None
        return self.variations[period_index - 1]

    def to_json(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.value is not None:
            data["value"] = self.value
        if self.variations is not None:
            data["variations"] = list(self.variations)
        return data


class MeasureSink(Protocol):
    """Anything that accepts measures computed for a component."""

    def add(self, component: Component, metric_key: str, measure: Measure) -> None:
        ...  # pragma: no cover


class MeasureRepository:
    """Write-once store of measures keyed by component ref and metric key."""

    def __init__(self) -> None:
        self._measures: Dict[int, Dict[str, Measure]] = {}

    def add(self, component: Component, metric_key: str, measure: Measure) -> None:
        get_metric(metric_key)
        by_metric = self._measures.setdefault(component.ref, {})
        if metric_key in by_metric:
            raise DuplicateMeasureError(
                f"measure {metric_key!r} already set on component {component.key!r}"
            )
        by_metric[metric_key] = measure

    def get(self, ref: int, metric_key: str) -> Optional[Measure]:
        return self._measures.get(ref, {}).get(metric_key)

    def value(self, ref: int, metric_key: str) -> Optional[int]:
        measure = self.get(ref, metric_key)
        return None if measure is None else measure.value

    def for_component(self, ref: int) -> Dict[str, Measure]:
        return dict(self._measures.get(ref, {}))

    def __len__(self) -> int:
        return sum(len(by_metric) for by_metric in self._measures.values())

    def as_dict(self, root: Component) -> Dict[str, Any]:
        """Return the measures of the tree under *root* as nested JSON-ready dicts."""
        nodes: Dict[int, Dict[str, Any]] = {}
        for component, _depth in iter_pre_order(root):
            nodes[component.ref] = {
                "ref": component.ref,
                "key": component.key,
                "kind": component.kind.value,
                "measures": {
                    key: {"name": get_metric(key).name, **measure.to_json()}
                    for key, measure in sorted(self.for_component(component.ref).items())
                },
                "children": [],
            }
        for component, _depth in iter_pre_order(root):
            for child in component.children:
                nodes[component.ref]["children"].append(nodes[child.ref])
        return nodes[root.ref]
