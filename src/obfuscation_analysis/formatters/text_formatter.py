"""Plain fixed-width text report."""

from typing import List, Sequence

from ..models import AnalyzedPair, RunState
from .base import COLUMNS, BaseFormatter, call_flow_entries, metric_rows


def _header() -> str:
    return "".join(f"{title:>{width}}" for title, width in COLUMNS)


class TextFormatter(BaseFormatter):
    """Render the metrics table and call-flow section as plain text."""

    def render(self, pairs: Sequence[AnalyzedPair], state: RunState) -> None:
        print(self.format(pairs, state), end="")

    def format(self, pairs: Sequence[AnalyzedPair], state: RunState) -> str:
        lines: List[str] = ["---File Analysis---", _header()]
        widths = [width for _, width in COLUMNS]
        for row in metric_rows(pairs, state):
            lines.append(
                f"{row.label:>{widths[0]}}"
                f"{row.file_name:>{widths[1]}}"
                f"{row.methods:>{widths[2]}d}"
                f"{row.size:>{widths[3]}f}"
                f"{row.fields:>{widths[4]}d}"
                f"{row.cpool_size:>{widths[5]}d}"
            )

        lines.append("")
        lines.append("--- Call Flow Analysis ---")
        for entry in call_flow_entries(state):
            lines.append(f"--- File: {entry.origin_path} ---")
            lines.append("Original Call Flow:")
            lines.append(entry.baseline.call_flow.rstrip("\n"))
            for variant in entry.variants:
                lines.append(f"Obfuscation Type: {variant.transformation_kind.label}")
                lines.append("Obfuscated Call Flow:")
                if variant.call_flow:
                    lines.append(variant.call_flow.rstrip("\n"))
        return "\n".join(lines) + "\n"
