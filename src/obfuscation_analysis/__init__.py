"""
Obfuscation Analysis - structural impact of Java obfuscators

Compiles each source file, runs it through JShrink and ProGuard, and reports
how method, field, size and constant-pool counts and the traced call flow
change against the unobfuscated baseline.
"""

__version__ = "0.1.0"

from .api import analyze
from .models import AnalysisResult, AnalyzedFile, AnalyzedPair, RunState, TransformationKind

__all__ = [
    "analyze",
    "AnalysisResult",
    "AnalyzedFile",
    "AnalyzedPair",
    "RunState",
    "TransformationKind",
]
