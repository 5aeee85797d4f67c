"""Value types shared by the evaluator and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping

from glusterperf.core.units import Metric, TimeUnit
from glusterperf.status import StatusLevel

MetricSet = Dict[str, Metric]
RawObject = Mapping[str, Any]


@dataclass(frozen=True)
class Thresholds:
    """Warning and critical boundaries expressed in the same unit."""

    warning: Metric
    critical: Metric

    @classmethod
    def from_values(cls, warning: float, critical: float, unit: TimeUnit) -> "Thresholds":
        """Build a threshold pair from raw values in ``unit``."""
        return cls(warning=Metric(float(warning), unit), critical=Metric(float(critical), unit))

    @property
    def unit(self) -> TimeUnit:
        return self.warning.unit

    def classify(self, value: float) -> StatusLevel:
        """Classify a value already expressed in the thresholds' unit."""
        if value >= self.critical.value:
            return StatusLevel.CRITICAL
        if value >= self.warning.value:
            return StatusLevel.WARNING
        return StatusLevel.OK


@dataclass(frozen=True)
class EvaluationResult:
    """Outcome of one evaluation pass over the dump."""

    performance: MetricSet
    exceeding: MetricSet
    aggregate: Metric
    status: StatusLevel = StatusLevel.OK


__all__ = ["EvaluationResult", "MetricSet", "RawObject", "Thresholds"]
