"""Exception taxonomy mapped to monitoring states."""

from __future__ import annotations

from glusterperf.status import StatusLevel


class GlusterPerfError(RuntimeError):
    """Base class for failures that end a check run."""

    status: StatusLevel = StatusLevel.UNKNOWN
    summary: str = "Check failed"

    @property
    def operational(self) -> bool:
        """True when the failure is a program/input problem rather than a data verdict."""
        return self.status is StatusLevel.UNKNOWN


class ArgumentError(GlusterPerfError, ValueError):
    """Raised when check inputs are missing or invalid.

    ``report_errors_unknown`` carries the merged config/CLI preference, since
    no validated settings exist to read it from.
    """

    summary = "Invalid arguments"

    def __init__(self, message: str, *, report_errors_unknown: bool = True) -> None:
        self.report_errors_unknown = report_errors_unknown
        super().__init__(message)


class DumpIOError(GlusterPerfError):
    """Raised when the stats dump cannot be read."""

    summary = "Unable to read stats dump"


class StaleDumpError(GlusterPerfError):
    """Raised when the stats dump has not been refreshed recently enough."""

    status = StatusLevel.CRITICAL
    summary = "Stale stats dump"


class DumpParseError(GlusterPerfError):
    """Raised when the stats dump does not contain well-formed JSON objects."""

    summary = "Unable to parse stats dump"

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None, fragment: str | None = None) -> None:
        self.line = line
        self.column = column
        self.fragment = fragment
        details = message
        if line is not None:
            details = f"{details} (line {line}, column {column})"
        if fragment:
            details = f"{details}: {_shorten(fragment)}"
        super().__init__(details)


class MetricFormatError(DumpParseError):
    """Raised when a metric value is not a decimal number."""

    summary = "Invalid metric value"

    def __init__(self, name: str, raw_value: object) -> None:
        self.name = name
        self.raw_value = raw_value
        super().__init__(f"Metric '{name}' has non-numeric value {raw_value!r}")


class CheckLogicError(GlusterPerfError):
    """Raised when an internal invariant does not hold."""

    summary = "Program logic exception"


def _shorten(text: str, limit: int = 80) -> str:
    flattened = " ".join(text.split())
    if len(flattened) <= limit:
        return flattened
    return flattened[: limit - 3] + "..."


__all__ = [
    "ArgumentError",
    "CheckLogicError",
    "DumpIOError",
    "DumpParseError",
    "GlusterPerfError",
    "MetricFormatError",
    "StaleDumpError",
]
