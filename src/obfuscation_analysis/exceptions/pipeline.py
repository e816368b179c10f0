"""Pipeline exceptions raised by the external-tool adapters."""

from pathlib import Path
from typing import Dict, Optional

from .base import ObfuscationAnalysisError
from .taxonomy import ErrorCode


class PipelineError(ObfuscationAnalysisError):
    """Base class for per-artifact pipeline failures."""

    default_code = ErrorCode.OA402

    def __init__(
        self,
        artifact: Path,
        reason: str,
        code: Optional[ErrorCode] = None,
        details: Optional[Dict[str, str]] = None,
    ):
        self.code = code or self.default_code
        merged = {"artifact": str(artifact), "reason": reason}
        if details:
            merged.update(details)
        super().__init__(f"[{self.code.value}] {self._summary(artifact)}", details=merged)
        self.artifact = artifact
        self.reason = reason

    def _summary(self, artifact: Path) -> str:
        return f"Pipeline step failed for {artifact}"


class CollectionError(PipelineError):
    """Raised when the input tree cannot be walked (OA1xx)."""

    default_code = ErrorCode.OA101

    def _summary(self, artifact: Path) -> str:
        return f"Cannot collect artifacts under {artifact}"


class CompilationError(PipelineError):
    """Raised when the compiler cannot be run (OA2xx)."""

    default_code = ErrorCode.OA202

    def _summary(self, artifact: Path) -> str:
        return f"Failed to compile {artifact}"


class TransformationError(PipelineError):
    """Raised when an obfuscator cannot be run (OA3xx)."""

    default_code = ErrorCode.OA302

    def _summary(self, artifact: Path) -> str:
        return f"Failed to transform {artifact}"


class ExtractionError(PipelineError):
    """Raised when structural extraction fails (OA4xx)."""

    default_code = ErrorCode.OA400

    def _summary(self, artifact: Path) -> str:
        return f"Failed to extract structure from {artifact}"


class CleanupError(PipelineError):
    """Raised when a transient artifact cannot be removed (OA5xx)."""

    default_code = ErrorCode.OA500

    def _summary(self, artifact: Path) -> str:
        return f"Failed to delete {artifact}"
