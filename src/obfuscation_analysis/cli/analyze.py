"""Analyze command: compile, obfuscate, extract, report, clean up."""

from pathlib import Path
from typing import Optional

import typer

from ..api import analyze as run_analysis
from ..cleanup import cleanup_compiled_artifacts
from ..config import load_config
from ..exceptions import ObfuscationAnalysisError
from ..formatters import get_formatter
from ..logging_config import setup_logging
from . import app
from ._common import console, print_failure_summary


@app.command()
def analyze(
    path: Path = typer.Argument(
        Path("."),
        help="Directory containing the source files to analyze",
        exists=False, file_okay=False, dir_okay=True,
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c",
        help="Configuration file path (TOML format)",
        exists=True, file_okay=True, dir_okay=False, readable=True,
    ),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f",
        help="Report format: text or rich",
    ),
    no_cleanup: bool = typer.Option(
        False, "--no-cleanup",
        help="Keep compiled baselines after reporting",
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v",
        help="Enable verbose logging",
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file",
        help="Also write logs to this file",
    ),
):
    """
    Compare every source file's compiled baseline with its obfuscated variants.

    Prints a metrics table and a call-flow comparison to stdout.
    """
    overrides = {"verbose": verbose, "quiet": quiet, "output_format": output_format}
    if no_cleanup:
        overrides["cleanup_enabled"] = False
    log_path = str(log_file) if log_file else None

    try:
        settings = load_config(config_file=config, **overrides)
    except ObfuscationAnalysisError as e:
        setup_logging(verbose=verbose, quiet=quiet, log_file=log_path)
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    setup_logging(
        verbose=settings.verbosity == "verbose",
        quiet=settings.verbosity == "quiet",
        log_file=log_path,
    )

    try:
        formatter = get_formatter(settings.output_format)
        result = run_analysis(path, config=settings)
    except (ObfuscationAnalysisError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}", highlight=False)
        raise typer.Exit(1)

    if result.is_empty:
        console.print(f"No files of type {settings.source_type} found!", highlight=False)
        raise typer.Exit(0)

    formatter.render(result.pairs, result.state)
    print_failure_summary(result.state)

    if settings.cleanup_enabled:
        cleanup_compiled_artifacts(result.pairs, settings.source_suffix, settings.compiled_suffix)
