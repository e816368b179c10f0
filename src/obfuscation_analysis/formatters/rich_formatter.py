"""Rich terminal report: the same two sections as tables."""

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models import AnalyzedPair, RunState
from .base import COLUMNS, BaseFormatter, call_flow_entries, metric_rows


def _signed(value: float, fmt: str) -> str:
    text = format(value, fmt)
    if value > 0:
        return f"[red]+{text}[/red]"
    if value < 0:
        return f"[green]{text}[/green]"
    return f"[dim]{text}[/dim]"


class RichFormatter(BaseFormatter):
    """Rich output on stdout, with deltas coloured by direction."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def render(self, pairs: Sequence[AnalyzedPair], state: RunState) -> None:
        self.console.print(self._metrics_table(pairs, state))
        self.console.print()
        self._print_call_flows(state)

    def format(self, pairs: Sequence[AnalyzedPair], state: RunState) -> str:
        with self.console.capture() as capture:
            self.render(pairs, state)
        return capture.get()

    def _metrics_table(self, pairs: Sequence[AnalyzedPair], state: RunState) -> Table:
        table = Table(title="File Analysis", expand=False)
        for title, width in COLUMNS:
            justify = "left" if title in ("Obfuscator", "File Name") else "right"
            table.add_column(title, justify=justify, min_width=min(width, len(title)))

        for row in metric_rows(pairs, state):
            if row.is_baseline:
                table.add_row(
                    f"[bold]{row.label}[/bold]",
                    escape(row.file_name),
                    str(row.methods),
                    f"{row.size:f}",
                    str(row.fields),
                    str(row.cpool_size),
                )
            else:
                table.add_row(
                    row.label,
                    escape(row.file_name),
                    _signed(row.methods, "d"),
                    _signed(row.size, "f"),
                    _signed(row.fields, "d"),
                    str(row.cpool_size),
                )
        return table

    def _print_call_flows(self, state: RunState) -> None:
        self.console.print("[bold cyan]Call Flow Analysis[/bold cyan]")
        for entry in call_flow_entries(state):
            self.console.print(f"[yellow]{escape(entry.origin_path)}[/yellow]", highlight=False)
            self.console.print("Original Call Flow:")
            self.console.print(entry.baseline.call_flow, end="", markup=False, highlight=False)
            for variant in entry.variants:
                self.console.print(f"Obfuscation Type: [bold]{variant.transformation_kind.label}[/bold]")
                self.console.print("Obfuscated Call Flow:")
                self.console.print(variant.call_flow, end="", markup=False, highlight=False)
