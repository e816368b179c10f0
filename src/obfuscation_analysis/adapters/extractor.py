"""Structural/trace extraction through an external analyzer.

The analyzer is expected to print one JSON object on stdout:

    {"methods": 4, "fields": 2, "size": 812, "constant_pool": 41,
     "call_depth": 3, "call_flow": "[Main.main, Main.run, Util.help]"}

``size`` may be omitted, in which case the artifact's on-disk size is used.
``null`` or ``{"analyzable": false}`` means there is nothing to analyze.
"""

import json
import subprocess
from pathlib import Path
from typing import Any, List, Optional

from ..calltrace import parse_call_trace
from ..exceptions import ErrorCode, ExtractionError
from ..logging_config import get_logger
from ..models import RawExtraction
from ._process import run_tool
from .base import Extractor

logger = get_logger(__name__)

_REQUIRED_KEYS = ("methods", "fields", "constant_pool")


class CommandExtractor(Extractor):
    """Run the analyzer command and parse its JSON report."""

    def __init__(self, command: List[str], timeout: Optional[int] = None):
        self.command = command
        self.timeout = timeout

    def extract(self, compiled: Path) -> Optional[RawExtraction]:
        try:
            result = run_tool(self.command, {"input": compiled}, timeout=self.timeout)
        except (FileNotFoundError, subprocess.TimeoutExpired) as e:
            raise ExtractionError(compiled, str(e), code=ErrorCode.OA400)

        if result.returncode != 0:
            raise ExtractionError(
                compiled, result.stderr.strip() or f"exit status {result.returncode}", code=ErrorCode.OA400
            )

        try:
            payload = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise ExtractionError(compiled, f"invalid JSON: {e}", code=ErrorCode.OA401)

        return parse_extraction(payload, compiled)


def parse_extraction(payload: Any, compiled: Path) -> Optional[RawExtraction]:
    """Convert the analyzer's JSON payload into a ``RawExtraction``.

    The bracketed ``call_flow`` text is parsed into call sites here, once.
    """
    if payload is None:
        return None
    if not isinstance(payload, dict):
        raise ExtractionError(compiled, "expected a JSON object", code=ErrorCode.OA401)
    if payload.get("analyzable") is False:
        logger.info("%s has no analyzable structure", compiled.name)
        return None

    missing = [key for key in _REQUIRED_KEYS if key not in payload]
    if missing:
        raise ExtractionError(
            compiled, f"missing keys: {', '.join(missing)}", code=ErrorCode.OA401
        )

    try:
        size = payload.get("size")
        return RawExtraction(
            method_count=int(payload["methods"]),
            field_count=int(payload["fields"]),
            byte_size=float(size) if size is not None else float(compiled.stat().st_size),
            constant_pool_size=int(payload["constant_pool"]),
            call_depth=int(payload.get("call_depth") or 0),
            call_sites=_call_sites(payload.get("call_flow")),
        )
    except (TypeError, ValueError, OSError) as e:
        raise ExtractionError(compiled, f"unreadable report: {e}", code=ErrorCode.OA401)


def _call_sites(call_flow: Any) -> tuple:
    if call_flow is None:
        return ()
    if isinstance(call_flow, list):
        return tuple(str(site) for site in call_flow)
    return parse_call_trace(str(call_flow))
