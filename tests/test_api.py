"""End-to-end tests for the check API."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from glusterperf.api import TOTAL_METRIC_NAME, failure_result, run_check
from glusterperf.core import CheckSettings, Metric, TimeUnit
from glusterperf.dump import dump_age_minutes, ensure_fresh
from glusterperf.errors import CheckLogicError, DumpIOError, DumpParseError, MetricFormatError, StaleDumpError
from glusterperf.status import StatusLevel

def test_critical_run(settings_factory) -> None:
    result = run_check(settings_factory())
    assert result.status is StatusLevel.CRITICAL
    assert result.exit_code == 2
    assert result.status_line == (
        "GLUSTERFS PERF CRITICAL - Metric(s) exceeding thresholds: "
        "gluster.brick.0.fop.write.latency_ave_usec: 2.4ms"
    )
    assert result.perfdata == (
        "'gluster.brick.0.fop.read.latency_ave_usec'=0.12ms;1;2 "
        "'gluster.brick.0.fop.write.latency_ave_usec'=2.4ms;1;2 "
        "'gluster.brick.1.fop.lookup.latency_ave_usec'=0ms;1;2 "
        "'gluster.brick.1.fop.read.latency_ave_usec'=0.08ms;1;2 "
    )
    assert result.output == f"{result.status_line}|{result.perfdata}"


def test_ok_run_reports_total_average(settings_factory) -> None:
    result = run_check(settings_factory(warning=5, critical=10))
    assert result.status is StatusLevel.OK
    assert result.status_line.startswith("GLUSTERFS PERF OK - All performance metrics within thresholds.")
    assert result.evaluation is not None
    assert result.evaluation.aggregate.value == pytest.approx(2.6 / 3)


def test_total_only_classifies_the_average(settings_factory) -> None:
    quiet = run_check(settings_factory(total_only=True))
    assert quiet.status is StatusLevel.OK

    loud = run_check(settings_factory(warning=0.5, critical=2, total_only=True))
    assert loud.status is StatusLevel.WARNING
    assert loud.evaluation is not None
    assert list(loud.evaluation.exceeding) == [TOTAL_METRIC_NAME]
    assert loud.status_line.startswith("GLUSTERFS PERF WARNING - Metric(s) exceeding thresholds: total_avg: 0.8666666")
    assert loud.perfdata.count("'") == 8


def test_example_dump(example_dump: Path) -> None:
    settings = CheckSettings(
        warning=1,
        critical=5,
        volume="gv0",
        stats_file=example_dump,
        input_unit="ms",
        output_unit="ms",
        max_file_age_minutes=0,
    )
    result = run_check(settings)
    assert result.status is StatusLevel.WARNING
    assert result.evaluation is not None
    assert list(result.evaluation.exceeding) == [
        "gluster.brick.0.fop.write.latency_ave_usec",
        "gluster.brick.1.fop.write.latency_ave_usec",
    ]
    assert "gluster.brick.0.fop.write.latency_ave_usec: 1.7334" in result.status_line
    assert "'gluster.brick.0.fop.lookup.latency_ave_usec'=0ms;1;5 " in result.perfdata
    assert len(result.evaluation.performance) == 7


def test_array_dump_is_supported(write_dump, settings_factory) -> None:
    path = write_dump('[{"gluster.brick.0.fop.read.latency_ave_usec": "300"}]', name="array.dump")
    result = run_check(settings_factory(stats_file=path))
    assert result.status is StatusLevel.OK
    assert result.evaluation is not None
    assert result.evaluation.aggregate == Metric(0.3, TimeUnit.MILLISECONDS)


def test_stale_dump(settings_factory) -> None:
    later = datetime.now(timezone.utc) + timedelta(minutes=30)
    with pytest.raises(StaleDumpError):
        run_check(settings_factory(), now=later)
    assert run_check(settings_factory(max_file_age_minutes=0), now=later).status is StatusLevel.CRITICAL


def test_dump_age(brick_dump: Path) -> None:
    later = datetime.now(timezone.utc) + timedelta(minutes=3)
    assert dump_age_minutes(brick_dump, later) == pytest.approx(3, abs=0.5)
    assert ensure_fresh(brick_dump, 5, later) == pytest.approx(3, abs=0.5)


def test_missing_dump(settings_factory, tmp_path: Path) -> None:
    with pytest.raises(DumpIOError):
        run_check(settings_factory(stats_file=tmp_path / "absent.dump"))


def test_bad_metric_aborts_run(write_dump, settings_factory) -> None:
    path = write_dump('{"gluster.brick.0.fop.read.latency_ave_usec": "n/a"}', name="bad.dump")
    with pytest.raises(MetricFormatError):
        run_check(settings_factory(stats_file=path))


def test_failure_results() -> None:
    parse_failure = failure_result(DumpParseError("Unmatched '}' outside of any object", line=3, column=1))
    assert parse_failure.status is StatusLevel.UNKNOWN
    assert parse_failure.output == (
        "GLUSTERFS PERF UNKNOWN - Unable to parse stats dump: "
        "Unmatched '}' outside of any object (line 3, column 1)"
    )
    assert failure_result(DumpIOError("gone"), report_errors_unknown=False).status is StatusLevel.CRITICAL
    stale = failure_result(StaleDumpError("old"), report_errors_unknown=True)
    assert stale.status is StatusLevel.CRITICAL
    assert stale.output == "GLUSTERFS PERF CRITICAL - Stale stats dump: old"
    logic = failure_result(CheckLogicError("boom"))
    assert logic.output == "GLUSTERFS PERF UNKNOWN - Program logic exception: boom"
