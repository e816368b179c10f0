"""Exception hierarchy for Obfuscation Analysis."""

from .base import ObfuscationAnalysisError
from .config import (
    ConfigurationError,
    InvalidConfigError,
    InvalidPathError,
)
from .pipeline import (
    CleanupError,
    CollectionError,
    CompilationError,
    ExtractionError,
    PipelineError,
    TransformationError,
)
from .taxonomy import ErrorCode, Stage

__all__ = [
    "ObfuscationAnalysisError",
    "ConfigurationError",
    "InvalidPathError",
    "InvalidConfigError",
    "PipelineError",
    "CollectionError",
    "CompilationError",
    "TransformationError",
    "ExtractionError",
    "CleanupError",
    "ErrorCode",
    "Stage",
]
