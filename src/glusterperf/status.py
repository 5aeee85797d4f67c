"""Monitoring status levels."""

from __future__ import annotations

from enum import IntEnum


class StatusLevel(IntEnum):
    """Nagios plugin states; the integer value is the process exit code."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3


__all__ = ["StatusLevel"]
