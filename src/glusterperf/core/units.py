"""Time units and conversions between them."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TimeUnit(str, Enum):
    """Time units understood by the check, labelled as they appear in output."""

    MICROSECONDS = "us"
    MILLISECONDS = "ms"
    SECONDS = "s"

    @property
    def exponent(self) -> int:
        """Decimal exponent relative to seconds (finer units have larger exponents)."""
        return _EXPONENTS[self]

    @classmethod
    def parse(cls, label: "str | TimeUnit") -> "TimeUnit":
        """Return the unit for a label such as ``us``, ``ms`` or ``s``."""
        if isinstance(label, TimeUnit):
            return label
        try:
            return cls(str(label).strip().lower())
        except ValueError:
            choices = ", ".join(unit.value for unit in cls)
            raise ValueError(f"Unknown time unit '{label}', expected one of: {choices}.") from None

    @classmethod
    def by_magnitude(cls) -> "list[TimeUnit]":
        """Return the units ordered from finest to coarsest."""
        return sorted(cls, key=lambda unit: unit.exponent, reverse=True)


_EXPONENTS = {
    TimeUnit.MICROSECONDS: 6,
    TimeUnit.MILLISECONDS: 3,
    TimeUnit.SECONDS: 0,
}


def convert_value(value: float, from_unit: TimeUnit, to_unit: TimeUnit) -> float:
    """Convert ``value`` expressed in ``from_unit`` into ``to_unit``."""
    diff = from_unit.exponent - to_unit.exponent
    if diff < 0:
        return value * 10 ** abs(diff)
    if diff > 0:
        return value / 10 ** diff
    return value


@dataclass(frozen=True)
class Metric:
    """A latency value tagged with its time unit."""

    value: float
    unit: TimeUnit

    def to(self, unit: TimeUnit) -> "Metric":
        """Return a new metric expressed in ``unit``."""
        return convert(self, unit)


def convert(metric: Metric, to_unit: TimeUnit) -> Metric:
    """Convert a metric into another unit, returning a fresh instance."""
    return Metric(value=convert_value(metric.value, metric.unit, to_unit), unit=to_unit)


__all__ = ["Metric", "TimeUnit", "convert", "convert_value"]
