"""Baseline compilation through an external compiler command."""

import subprocess
from pathlib import Path
from typing import List, Optional

from ..config import compiled_path_for
from ..exceptions import CompilationError, ErrorCode
from ..logging_config import get_logger
from ._process import run_tool
from .base import Compiler

logger = get_logger(__name__)


class JavacCompiler(Compiler):
    """Compile one source file in place and return the class file beside it.

    The command template receives ``{input}`` (the source), ``{output}`` (the
    expected class file) and ``{output_dir}`` (the source's directory).
    """

    def __init__(
        self,
        command: List[str],
        source_suffix: str = ".java",
        compiled_suffix: str = ".class",
        timeout: Optional[int] = None,
    ):
        self.command = command
        self.source_suffix = source_suffix
        self.compiled_suffix = compiled_suffix
        self.timeout = timeout

    def expected_output(self, source: Path) -> Path:
        return compiled_path_for(source, self.source_suffix, self.compiled_suffix)

    def compile(self, source: Path) -> Optional[Path]:
        output = self.expected_output(source)
        try:
            result = run_tool(
                self.command,
                {"input": source, "output": output, "output_dir": source.parent},
                timeout=self.timeout,
                cwd=source.parent,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise CompilationError(source, str(e), code=ErrorCode.OA202)

        if result.returncode != 0:
            logger.warning("Compiler rejected %s: %s", source.name, result.stderr.strip())
            return None
        if not output.exists():
            logger.warning("Compiler produced no %s for %s", self.compiled_suffix, source.name)
            return None
        return output
