"""Staleness check for the stats dump."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from glusterperf.errors import DumpIOError, StaleDumpError

LOG = logging.getLogger(__name__)


def dump_age_minutes(path: Path, now: Optional[datetime] = None) -> float:
    """Return the number of minutes since ``path`` was last modified."""
    try:
        modified = path.stat().st_mtime
    except OSError as exc:
        raise DumpIOError(f"{path}: {exc}") from exc
    now = now or datetime.now(timezone.utc)
    return (now.timestamp() - modified) / 60.0


def ensure_fresh(path: Path, max_age_minutes: float, now: Optional[datetime] = None) -> float:
    """Raise :class:`StaleDumpError` when the dump is older than allowed.

    A limit of zero disables the check. Returns the measured age in minutes.
    """
    age = dump_age_minutes(path, now)
    LOG.debug("Stats dump %s is %.1f minutes old", path, age)
    if max_age_minutes > 0 and age > max_age_minutes:
        raise StaleDumpError(f"{path} was last updated {age:.1f} minutes ago (limit {max_age_minutes:g} minutes)")
    return age


__all__ = ["dump_age_minutes", "ensure_fresh"]
