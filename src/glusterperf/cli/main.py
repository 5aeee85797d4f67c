"""CLI entrypoint for the GlusterFS latency check."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple, Type

import click
import typer
from rich.console import Console
from rich.logging import RichHandler

from glusterperf import __version__
from glusterperf.api import failure_result, run_check
from glusterperf.core.settings import DEFAULT_NAME_FILTER, CheckSettings, load_settings
from glusterperf.errors import ArgumentError, CheckLogicError, GlusterPerfError
from glusterperf.report import status_prefix
from glusterperf.status import StatusLevel

console = Console(stderr=True)
app = typer.Typer(
    help="Check GlusterFS file operation latencies from the io-stats dump.",
    add_completion=False,
)

LOG = logging.getLogger("glusterperf")
PROG_NAME = "check_gluster_perf"

# Newer typer releases parse with their own bundled click, whose usage errors
# derive from typer.TyperException instead of click.ClickException.
USAGE_ERRORS: Tuple[Type[Exception], ...] = tuple(
    cls for cls in (click.ClickException, getattr(typer, "TyperException", None)) if cls is not None
)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    """Print the package version and exit when requested."""
    if value:
        typer.echo(f"{PROG_NAME} {__version__}")
        raise typer.Exit()


@app.command()
def check(
    warning: Optional[float] = typer.Option(None, "-w", "--warning", help="Warning threshold in -u units."),
    critical: Optional[float] = typer.Option(None, "-c", "--critical", help="Critical threshold in -u units."),
    volume: Optional[str] = typer.Option(None, "-v", "--volume", help="Name of the GlusterFS volume."),
    input_unit: Optional[str] = typer.Option(
        None, "-u", "--unit", help="Unit of the thresholds: us, ms or s. Default: us."
    ),
    output_unit: Optional[str] = typer.Option(
        None, "-ou", "--output-unit", help="Unit used for reported values: us, ms or s. Default: us."
    ),
    gluster_unit: Optional[str] = typer.Option(
        None, "--gluster-stats-unit", help="Unit GlusterFS writes its stats in. Default: us."
    ),
    stats_file: Optional[Path] = typer.Option(
        None, "--override-stats-file", help="Read this dump instead of the volume's default dump file."
    ),
    stats_dir: Optional[Path] = typer.Option(None, "--stats-dir", help="Directory holding GlusterFS stats dumps."),
    name_filter: Optional[str] = typer.Option(
        None, "--filter", help=f"Regex matched against whole metric names. Default: {DEFAULT_NAME_FILTER}"
    ),
    max_listed: Optional[int] = typer.Option(
        None, "--max-listed", help="Number of exceeding metrics named in the status line. Default: 5."
    ),
    total_only: bool = typer.Option(
        False, "--total-only", help="Compare only the total average against the thresholds."
    ),
    report_errors_unknown: Optional[str] = typer.Option(
        None,
        "--report-errors-unknown",
        help="Report program errors as UNKNOWN (yes) or CRITICAL (no). Default: yes.",
    ),
    max_file_age: Optional[float] = typer.Option(
        None, "--max-file-age-minutes", help="Report CRITICAL when the dump is older than this. 0 disables."
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML file providing default option values."),
    verbose: int = typer.Option(0, "--verbose", "-V", count=True, help="Log diagnostics to stderr (repeatable)."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Report GlusterFS latency metrics in Nagios plugin format."""
    _configure_logging(verbose)
    try:
        settings: CheckSettings = load_settings(
            {
                "warning": warning,
                "critical": critical,
                "volume": volume,
                "input_unit": input_unit,
                "output_unit": output_unit,
                "gluster_unit": gluster_unit,
                "stats_file": stats_file,
                "stats_dir": stats_dir,
                "name_filter": name_filter,
                "max_listed": max_listed,
                "total_only": True if total_only else None,
                "report_errors_unknown": report_errors_unknown,
                "max_file_age_minutes": max_file_age,
            },
            config,
        )
    except ArgumentError as exc:
        result = failure_result(exc, report_errors_unknown=exc.report_errors_unknown)
        typer.echo(result.output)
        raise typer.Exit(code=result.exit_code) from exc

    try:
        result = run_check(settings)
    except GlusterPerfError as exc:
        LOG.debug("Check failed", exc_info=True)
        result = failure_result(exc, report_errors_unknown=settings.report_errors_unknown)
    except Exception as exc:  # pragma: no cover - unexpected failure
        LOG.debug("Unexpected check failure", exc_info=True)
        result = failure_result(CheckLogicError(str(exc)), report_errors_unknown=settings.report_errors_unknown)

    typer.echo(result.output)
    raise typer.Exit(code=result.exit_code)


def run(argv: Optional[List[str]] = None) -> int:
    """Run the check and return the exit code, reporting usage errors as UNKNOWN."""
    try:
        code = app(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except USAGE_ERRORS as exc:
        message = exc.format_message() if hasattr(exc, "format_message") else str(exc)
        typer.echo(f"{status_prefix(StatusLevel.UNKNOWN)} - Invalid arguments: {message}")
        return int(StatusLevel.UNKNOWN)
    return int(code or 0)


def main() -> None:
    """Console script entrypoint."""
    sys.exit(run())
