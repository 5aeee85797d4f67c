"""Utility helpers."""

from .io import load_yaml

__all__ = ["load_yaml"]
