"""Metric extraction and threshold evaluation."""

from __future__ import annotations

import logging
import math
import re
from typing import Iterable, Iterator, Tuple, Union

from glusterperf.core.model import EvaluationResult, MetricSet, RawObject, Thresholds
from glusterperf.core.units import Metric, TimeUnit, convert_value
from glusterperf.errors import MetricFormatError
from glusterperf.status import StatusLevel

LOG = logging.getLogger(__name__)

NameFilter = Union[str, re.Pattern[str]]


def compile_filter(name_filter: NameFilter) -> re.Pattern[str]:
    """Compile a metric name filter; matching is case-insensitive."""
    if isinstance(name_filter, re.Pattern):
        return name_filter
    return re.compile(name_filter, re.IGNORECASE)


def iter_metrics(objects: Iterable[RawObject]) -> Iterator[Tuple[str, object]]:
    """Flatten decoded objects into (name, raw value) pairs in discovery order."""
    for obj in objects:
        yield from obj.items()


def parse_metric_value(name: str, raw_value: object) -> float:
    """Parse the string-encoded decimal stored for a metric."""
    if isinstance(raw_value, bool) or not isinstance(raw_value, (str, int, float)):
        raise MetricFormatError(name, raw_value)
    try:
        value = float(raw_value.strip() if isinstance(raw_value, str) else raw_value)
    except ValueError as exc:
        raise MetricFormatError(name, raw_value) from exc
    if not math.isfinite(value):
        raise MetricFormatError(name, raw_value)
    return value


def evaluate(
    objects: Iterable[RawObject],
    name_filter: NameFilter,
    thresholds: Thresholds,
    source_unit: TimeUnit,
    output_unit: TimeUnit,
    suppress_comparison: bool = False,
) -> EvaluationResult:
    """Classify every matching metric against the thresholds.

    Args:
        objects: Decoded dump objects, in the order they were read.
        name_filter: Regular expression that must match the whole metric name.
        thresholds: Warning/critical pair; comparisons happen in its unit.
        source_unit: Unit the dump stores values in.
        output_unit: Unit used for reported metrics and the aggregate.
        suppress_comparison: Collect metrics and the aggregate only; the status stays OK.

    Returns:
        The performance and exceeding metric sets (ordered by name), the
        average of all non-zero metrics and the overall status.

    Raises:
        MetricFormatError: A matching metric does not hold a decimal number.
    """
    pattern = compile_filter(name_filter)
    threshold_unit = thresholds.unit
    performance: MetricSet = {}
    exceeding: MetricSet = {}
    status = StatusLevel.OK
    total = 0.0
    count = 0
    skipped = 0

    for name, raw_value in iter_metrics(objects):
        if not pattern.fullmatch(name):
            skipped += 1
            continue

        value = parse_metric_value(name, raw_value)
        comparison = convert_value(value, source_unit, threshold_unit)
        metric = Metric(convert_value(value, source_unit, output_unit), output_unit)
        performance[name] = metric

        if not suppress_comparison:
            level = thresholds.classify(comparison)
            if level is not StatusLevel.OK:
                exceeding[name] = metric
                status = max(status, level)
            LOG.debug("%s=%s%s -> %s", name, comparison, threshold_unit.value, level.name)

        if comparison != 0:
            total += metric.value
            count += 1

    aggregate = Metric(total / count if count else 0.0, output_unit)
    LOG.info(
        "Evaluated %d metrics (%d filtered out), %d exceeding, status %s",
        len(performance),
        skipped,
        len(exceeding),
        status.name,
    )
    return EvaluationResult(
        performance=dict(sorted(performance.items())),
        exceeding=dict(sorted(exceeding.items())),
        aggregate=aggregate,
        status=status,
    )


__all__ = ["NameFilter", "compile_filter", "evaluate", "iter_metrics", "parse_metric_value"]
