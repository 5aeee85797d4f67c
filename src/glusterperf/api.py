"""High-level Python API for running the GlusterFS latency check."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from glusterperf.core.evaluator import evaluate
from glusterperf.core.model import EvaluationResult
from glusterperf.core.settings import CheckSettings
from glusterperf.core.units import convert_value
from glusterperf.dump import ensure_fresh, read_dump_file
from glusterperf.errors import GlusterPerfError
from glusterperf.report import format_output, render, status_prefix
from glusterperf.status import StatusLevel

LOG = logging.getLogger(__name__)

TOTAL_METRIC_NAME = "total_avg"


@dataclass(frozen=True)
class CheckResult:
    """Outcome of a check run."""

    status: StatusLevel
    status_line: str
    perfdata: str = ""
    evaluation: Optional[EvaluationResult] = None

    @property
    def output(self) -> str:
        """The single line printed to standard output."""
        if self.evaluation is None:
            return self.status_line
        return format_output(self.status_line, self.perfdata)

    @property
    def exit_code(self) -> int:
        return int(self.status)


def _apply_total_policy(result: EvaluationResult, settings: CheckSettings) -> EvaluationResult:
    thresholds = settings.thresholds
    comparison = convert_value(result.aggregate.value, result.aggregate.unit, thresholds.unit)
    status = thresholds.classify(comparison)
    LOG.info("Total average %s%s classified %s", comparison, thresholds.unit.value, status.name)
    exceeding = {TOTAL_METRIC_NAME: result.aggregate} if status is not StatusLevel.OK else {}
    return EvaluationResult(
        performance=result.performance,
        exceeding=exceeding,
        aggregate=result.aggregate,
        status=status,
    )


def run_check(settings: CheckSettings, now: Optional[datetime] = None) -> CheckResult:
    """Read the volume's stats dump, evaluate it and render the report.

    Raises:
        GlusterPerfError: The dump is stale, unreadable or malformed.
    """
    path = settings.stats_path
    LOG.info("Checking volume '%s' using %s", settings.volume, path)
    ensure_fresh(path, settings.max_file_age_minutes, now)
    objects = read_dump_file(path)

    evaluation = evaluate(
        objects,
        settings.name_filter,
        settings.thresholds,
        source_unit=settings.gluster_unit,
        output_unit=settings.output_unit,
        suppress_comparison=settings.total_only,
    )
    if settings.total_only:
        evaluation = _apply_total_policy(evaluation, settings)

    status_line, perfdata = render(
        evaluation.status,
        evaluation.exceeding,
        evaluation.performance,
        settings.thresholds,
        evaluation.aggregate,
        settings.max_listed,
    )
    return CheckResult(status=evaluation.status, status_line=status_line, perfdata=perfdata, evaluation=evaluation)


def failure_result(error: GlusterPerfError, report_errors_unknown: bool = True) -> CheckResult:
    """Turn a failed run into a one-line result.

    Operational failures are UNKNOWN, or CRITICAL when ``report_errors_unknown``
    is disabled; a stale dump is always CRITICAL.
    """
    status = error.status
    if error.operational and not report_errors_unknown:
        status = StatusLevel.CRITICAL
    return CheckResult(status=status, status_line=f"{status_prefix(status)} - {error.summary}: {error}")


__all__ = ["CheckResult", "TOTAL_METRIC_NAME", "failure_result", "run_check"]
