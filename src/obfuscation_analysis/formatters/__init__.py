"""Report renderers for Obfuscation Analysis."""

from .base import BaseFormatter, CallFlowEntry, MetricRow, call_flow_entries, metric_rows
from .rich_formatter import RichFormatter
from .text_formatter import TextFormatter


def get_formatter(name: str) -> BaseFormatter:
    """Get a formatter instance by name.

    Args:
        name: One of "text", "rich"

    Raises:
        ValueError: If name is not recognized
    """
    formatters = {
        "text": TextFormatter,
        "rich": RichFormatter,
    }
    cls = formatters.get(name)
    if cls is None:
        raise ValueError(f"Unknown formatter: {name!r}. Choose from: {', '.join(sorted(formatters))}")
    return cls()


__all__ = [
    "BaseFormatter",
    "CallFlowEntry",
    "MetricRow",
    "RichFormatter",
    "TextFormatter",
    "call_flow_entries",
    "get_formatter",
    "metric_rows",
]
