"""Shared fixtures for the check tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Dict, Iterable

import pytest

from glusterperf.core import CheckSettings

EXAMPLE_DUMP = Path(__file__).resolve().parents[1] / "examples" / "dumps" / "glusterfs_gv0.dump"


def _concatenate(objects: Iterable[Dict[str, str]]) -> str:
    return "".join(json.dumps(obj, indent=2) for obj in objects)


@pytest.fixture()
def write_dump(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory writing dump text (or objects) into a temporary file."""

    def _write(content: str | Iterable[Dict[str, str]], name: str = "glusterfs_gv0.dump") -> Path:
        path = tmp_path / name
        text = content if isinstance(content, str) else _concatenate(content)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def brick_dump(write_dump: Callable[..., Path]) -> Path:
    """Two concatenated brick objects, as written by GlusterFS 3.x."""
    return write_dump(
        [
            {
                "gluster.brick.0.fop.read.latency_ave_usec": "120.000",
                "gluster.brick.0.fop.write.latency_ave_usec": "2400.000",
                "gluster.brick.0.fop.read.count": "310",
            },
            {
                "gluster.brick.1.fop.read.latency_ave_usec": "80.000",
                "gluster.brick.1.fop.lookup.latency_ave_usec": "0.000",
            },
        ]
    )


@pytest.fixture()
def settings_factory(brick_dump: Path) -> Callable[..., CheckSettings]:
    """Build settings pointing at the brick dump; keyword arguments override fields."""

    def _build(**overrides: object) -> CheckSettings:
        values: Dict[str, object] = {
            "warning": 1,
            "critical": 2,
            "volume": "gv0",
            "stats_file": brick_dump,
            "input_unit": "ms",
            "output_unit": "ms",
        }
        values.update(overrides)
        return CheckSettings(**values)

    return _build


@pytest.fixture()
def example_dump() -> Path:
    """The sample dump shipped in the examples directory."""
    return EXAMPLE_DUMP
