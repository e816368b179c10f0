"""Version command."""

from .. import __version__
from . import app
from ._common import console


@app.command()
def version():
    """Print the installed version."""
    console.print(f"obfuscation-analysis {__version__}", highlight=False)
