"""Shared CLI helpers."""

from rich.console import Console

from ..models import RunState

console = Console(stderr=True)


def print_failure_summary(state: RunState) -> None:
    """List every caught per-artifact failure on stderr."""
    if not state.failures:
        return
    console.print(f"[yellow]{len(state.failures)} step(s) failed; the report above is partial.[/yellow]")
    for failure in state.failures:
        kind = f" [{failure.kind.label}]" if failure.kind else ""
        console.print(
            f"  [red]{failure.code.value}[/red] {failure.stage.value}{kind}: {failure.origin_path}",
            highlight=False,
        )
