"""I/O helpers."""

from __future__ import annotations

from pathlib import Path

import yaml


def load_yaml(path: Path) -> dict:
    """Load a YAML mapping from ``path``; an empty file yields an empty dict."""
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}.")
    return {str(key): value for key, value in data.items()}


__all__ = ["load_yaml"]
