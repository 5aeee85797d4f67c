"""Rendering of the plugin output line."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Tuple

from glusterperf.core.model import MetricSet, Thresholds
from glusterperf.core.units import Metric, TimeUnit, convert_value
from glusterperf.status import StatusLevel

PLUGIN_LABEL = "GLUSTERFS PERF"


def format_value(value: float) -> str:
    """Format a number in fixed-point notation without trailing zeros.

    The shortest repr of the float is expanded digit for digit, so no precision
    is lost and no exponent is emitted.
    """
    text = format(Decimal(repr(float(value))), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in {"-0", ""}:
        return "0"
    return text


def format_metric(metric: Metric) -> str:
    return f"{format_value(metric.value)}{metric.unit.value}"


def status_prefix(status: StatusLevel) -> str:
    return f"{PLUGIN_LABEL} {status.name}"


def render_status_line(
    status: StatusLevel,
    exceeding: MetricSet,
    aggregate: Metric,
    max_listed: int,
) -> str:
    """Build the human readable part of the output."""
    if status is StatusLevel.OK:
        return (
            f"{status_prefix(status)} - All performance metrics within thresholds. "
            f"Total avg: {format_metric(aggregate)}"
        )

    entries = [f"{name}: {format_metric(metric)}" for name, metric in exceeding.items()]
    listed = entries[: max(max_listed, 0)]
    line = f"{status_prefix(status)} - Metric(s) exceeding thresholds:"
    if listed:
        line += f" {', '.join(listed)}"
    hidden = len(entries) - len(listed)
    if hidden > 0:
        line += f" - {hidden} metrics hidden."
    return line


def render_perfdata(performance: MetricSet, thresholds: Thresholds) -> str:
    """Build the performance data string, one entry per metric."""
    parts: List[str] = []
    for name, metric in performance.items():
        unit: TimeUnit = metric.unit
        warning = convert_value(thresholds.warning.value, thresholds.unit, unit)
        critical = convert_value(thresholds.critical.value, thresholds.unit, unit)
        parts.append(
            f"'{name}'={format_value(metric.value)}{unit.value};{format_value(warning)};{format_value(critical)} "
        )
    return "".join(parts)


def render(
    status: StatusLevel,
    exceeding: MetricSet,
    performance: MetricSet,
    thresholds: Thresholds,
    aggregate: Metric,
    max_listed: int,
) -> Tuple[str, str]:
    """Return the status line and the performance data string."""
    return render_status_line(status, exceeding, aggregate, max_listed), render_perfdata(performance, thresholds)


def format_output(status_line: str, perfdata: str) -> str:
    """Join both report fragments into the single line monitoring systems expect."""
    return f"{status_line}|{perfdata}"


__all__ = [
    "PLUGIN_LABEL",
    "format_metric",
    "format_output",
    "format_value",
    "render",
    "render_perfdata",
    "render_status_line",
    "status_prefix",
]
