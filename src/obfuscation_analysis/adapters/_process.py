"""Blocking subprocess invocation shared by the command-based adapters."""

import subprocess
from pathlib import Path
from typing import List, Mapping, Optional, Sequence

from ..logging_config import get_logger

logger = get_logger(__name__)


def expand_command(template: Sequence[str], values: Mapping[str, Path]) -> List[str]:
    """Substitute ``{name}`` placeholders in each argument of ``template``."""
    command = []
    for arg in template:
        for name, value in values.items():
            arg = arg.replace("{" + name + "}", str(value))
        command.append(arg)
    return command


def run_tool(
    template: Sequence[str],
    values: Mapping[str, Path],
    timeout: Optional[int] = None,
    cwd: Optional[Path] = None,
) -> subprocess.CompletedProcess:
    """Run one external tool to completion and capture its output.

    Raises:
        FileNotFoundError: If the executable does not exist
        subprocess.TimeoutExpired: If ``timeout`` is set and exceeded
    """
    command = expand_command(template, values)
    logger.debug("Running: %s", " ".join(command))
    result = subprocess.run(
        command,
        capture_output=True,
        text=True,
        timeout=timeout,
        cwd=str(cwd) if cwd else None,
    )
    if result.returncode != 0:
        logger.debug("%s exited with %d: %s", command[0], result.returncode, result.stderr.strip())
    return result
