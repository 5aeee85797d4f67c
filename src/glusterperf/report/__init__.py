"""Plugin output rendering."""

from .renderer import (
    PLUGIN_LABEL,
    format_metric,
    format_output,
    format_value,
    render,
    render_perfdata,
    render_status_line,
    status_prefix,
)

__all__ = [
    "PLUGIN_LABEL",
    "format_metric",
    "format_output",
    "format_value",
    "render",
    "render_perfdata",
    "render_status_line",
    "status_prefix",
]
