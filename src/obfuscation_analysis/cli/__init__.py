"""CLI entry point — registers all subcommands."""

import typer

app = typer.Typer(
    name="obfuscation-analysis",
    help="Obfuscation Analysis - structural impact of Java obfuscators",
    add_completion=False,
    rich_markup_mode="rich",
)


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .version import version as _version  # noqa: F401, E402
