"""Obfuscator adapters driven by command templates."""

import subprocess
from pathlib import Path
from typing import List, Optional

from ..exceptions import ErrorCode, TransformationError
from ..logging_config import get_logger
from ..models import TransformationKind
from ._process import run_tool
from .base import Transformer

logger = get_logger(__name__)


class CommandTransformer(Transformer):
    """Run an obfuscator and pick up the transformed artifact it writes.

    Output for each kind goes to ``<output_root>/<kind>/<artifact name>``.
    A non-zero exit or a missing output file means the tool failed for this
    artifact; both are reported as ``None`` rather than raised.
    """

    def __init__(
        self,
        kind: TransformationKind,
        command: List[str],
        output_root: Path,
        timeout: Optional[int] = None,
    ):
        if kind is TransformationKind.NONE:
            raise ValueError("A transformer needs an obfuscating kind")
        self.kind = kind
        self.command = command
        self.output_root = Path(output_root)
        self.timeout = timeout

    @property
    def output_dir(self) -> Path:
        return self.output_root / self.kind.value

    def transform(self, compiled: Path) -> Optional[Path]:
        output_dir = self.output_dir
        output = output_dir / compiled.name
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            if output.exists():
                output.unlink()
            result = run_tool(
                self.command,
                {"input": compiled, "output": output, "output_dir": output_dir},
                timeout=self.timeout,
            )
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise TransformationError(compiled, str(e), code=ErrorCode.OA302, details={"kind": self.kind.value})

        if result.returncode != 0:
            logger.warning("%s failed on %s: %s", self.kind.label, compiled.name, result.stderr.strip())
            return None
        if not output.exists():
            logger.warning("%s produced no output for %s", self.kind.label, compiled.name)
            return None
        return output
