"""Core abstractions: units, thresholds, evaluation and settings."""

from .evaluator import compile_filter, evaluate, iter_metrics, parse_metric_value
from .model import EvaluationResult, MetricSet, RawObject, Thresholds
from .settings import CheckSettings, load_settings
from .units import Metric, TimeUnit, convert, convert_value

__all__ = [
    "CheckSettings",
    "EvaluationResult",
    "Metric",
    "MetricSet",
    "RawObject",
    "Thresholds",
    "TimeUnit",
    "compile_filter",
    "convert",
    "convert_value",
    "evaluate",
    "iter_metrics",
    "load_settings",
    "parse_metric_value",
]
