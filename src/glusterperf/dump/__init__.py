"""Stats dump access."""

from .freshness import dump_age_minutes, ensure_fresh
from .reader import DumpReader, ScanState, read_dump, read_dump_file

__all__ = [
    "DumpReader",
    "ScanState",
    "dump_age_minutes",
    "ensure_fresh",
    "read_dump",
    "read_dump_file",
]
