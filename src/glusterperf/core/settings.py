"""Validated inputs for a check run."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from glusterperf.core.model import Thresholds
from glusterperf.core.units import TimeUnit
from glusterperf.errors import ArgumentError
from glusterperf.utils.io import load_yaml

DEFAULT_STATS_DIR = Path("/var/lib/glusterd/stats")
DEFAULT_NAME_FILTER = ".*latency_ave_usec"
STATS_FILE_TEMPLATE = "glusterfs_{volume}.dump"


def _parse_yes_no(value: Any) -> Any:
    if isinstance(value, str) and value.strip().lower() in {"yes", "no"}:
        return value.strip().lower() == "yes"
    return value


def _reports_unknown(values: Mapping[str, Any]) -> bool:
    """Best-effort reading of the error policy from unvalidated values."""
    flag = _parse_yes_no(values.get("report_errors_unknown"))
    return flag if isinstance(flag, bool) else True


class CheckSettings(BaseModel):
    """Everything a check run needs, validated up front."""

    warning: float = Field(..., ge=0, description="Warning threshold in input units.")
    critical: float = Field(..., ge=0, description="Critical threshold in input units.")
    volume: str = Field(..., min_length=1, description="Name of the monitored GlusterFS volume.")
    stats_file: Optional[Path] = Field(default=None, description="Explicit stats dump path.")
    stats_dir: Path = Field(default=DEFAULT_STATS_DIR, description="Directory GlusterFS writes dumps into.")
    input_unit: TimeUnit = Field(default=TimeUnit.MICROSECONDS, description="Unit of the thresholds.")
    output_unit: TimeUnit = Field(default=TimeUnit.MICROSECONDS, description="Unit used in the report.")
    gluster_unit: TimeUnit = Field(default=TimeUnit.MICROSECONDS, description="Unit the dump stores values in.")
    name_filter: str = Field(default=DEFAULT_NAME_FILTER, description="Regex selecting metric names.")
    max_listed: int = Field(default=5, ge=0, description="Exceeding metrics to list in the status line.")
    total_only: bool = Field(default=False, description="Compare only the total average against thresholds.")
    report_errors_unknown: bool = Field(default=True, description="Report program errors as UNKNOWN.")
    max_file_age_minutes: float = Field(default=5, ge=0, description="Maximum dump age; 0 disables the check.")

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("input_unit", "output_unit", "gluster_unit", mode="before")
    @classmethod
    def _parse_unit(cls, value: Any) -> TimeUnit:
        return TimeUnit.parse(value)

    @field_validator("report_errors_unknown", mode="before")
    @classmethod
    def _validate_yes_no(cls, value: Any) -> Any:
        return _parse_yes_no(value)

    @field_validator("name_filter")
    @classmethod
    def _validate_filter(cls, value: str) -> str:
        try:
            re.compile(value)
        except re.error as exc:
            raise ValueError(f"Invalid regular expression: {exc}") from exc
        return value

    @model_validator(mode="after")
    def _validate_threshold_order(self) -> "CheckSettings":
        if self.critical < self.warning:
            msg = f"Critical threshold ({self.critical:g}) must not be lower than warning ({self.warning:g})."
            raise ValueError(msg)
        return self

    @property
    def thresholds(self) -> Thresholds:
        return Thresholds.from_values(self.warning, self.critical, self.input_unit)

    @property
    def stats_path(self) -> Path:
        """Dump file to read: the explicit override or the per-volume default."""
        if self.stats_file is not None:
            return self.stats_file
        return self.stats_dir / STATS_FILE_TEMPLATE.format(volume=self.volume)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        message = error.get("msg", "invalid value")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)


def load_settings(overrides: Mapping[str, Any], config_path: Optional[Path] = None) -> CheckSettings:
    """Merge a YAML config file with explicit values and validate the result.

    Keys whose override value is ``None`` fall back to the file, then to the
    model defaults.
    """
    explicit = {key: value for key, value in overrides.items() if value is not None}
    values: Dict[str, Any] = {}
    if config_path is not None:
        try:
            loaded = load_yaml(config_path)
        except (OSError, ValueError) as exc:
            raise ArgumentError(
                f"Cannot load config {config_path}: {exc}", report_errors_unknown=_reports_unknown(explicit)
            ) from exc
        values.update({str(key).replace("-", "_"): value for key, value in loaded.items()})
    values.update(explicit)
    try:
        return CheckSettings(**values)
    except ValidationError as exc:
        raise ArgumentError(_describe(exc), report_errors_unknown=_reports_unknown(values)) from exc


__all__ = ["CheckSettings", "DEFAULT_NAME_FILTER", "DEFAULT_STATS_DIR", "load_settings"]
