"""Adapters for the external tools: collector, compiler, obfuscators, extractor."""

from typing import Dict

from ..config import AnalysisConfig
from ..models import TransformationKind
from .base import Collector, Compiler, Extractor, Transformer
from .collector import FileCollector
from .compiler import JavacCompiler
from .extractor import CommandExtractor
from .transformer import CommandTransformer


def build_transformers(config: AnalysisConfig) -> Dict[TransformationKind, Transformer]:
    """Create one transformer per configured kind, in attempt order."""
    transformers: Dict[TransformationKind, Transformer] = {}
    for kind in TransformationKind.variants():
        command = config.tools.transformer_for(kind)
        if command is None:
            continue
        transformers[kind] = CommandTransformer(
            kind,
            command,
            output_root=config.transform_output_dir,
            timeout=config.tool_timeout_seconds,
        )
    return transformers


__all__ = [
    "Collector",
    "Compiler",
    "Extractor",
    "Transformer",
    "FileCollector",
    "JavacCompiler",
    "CommandExtractor",
    "CommandTransformer",
    "build_transformers",
]
