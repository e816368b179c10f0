"""Public API for Obfuscation Analysis.

Example:
    >>> from obfuscation_analysis import analyze
    >>> result = analyze("/path/to/sources")
    >>> for pair in result.pairs:
    ...     print(pair.transformation_kind.label, pair.methods_changed)
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

from .adapters import (
    Collector,
    CommandExtractor,
    Compiler,
    Extractor,
    FileCollector,
    JavacCompiler,
    Transformer,
    build_transformers,
)
from .config import AnalysisConfig, load_config
from .exceptions import InvalidPathError
from .logging_config import get_logger
from .models import AnalysisResult, TransformationKind
from .pairing import build_pairs
from .pipeline import AnalysisPipeline

logger = get_logger(__name__)


def build_pipeline(
    config: AnalysisConfig,
    collector: Optional[Collector] = None,
    compiler: Optional[Compiler] = None,
    transformers: Optional[Mapping[TransformationKind, Transformer]] = None,
    extractor: Optional[Extractor] = None,
) -> AnalysisPipeline:
    """Assemble a pipeline, filling any adapter not given from ``config``."""
    timeout = config.tool_timeout_seconds
    return AnalysisPipeline(
        collector=collector
        or FileCollector(config.exclude_patterns, follow_symlinks=config.follow_symlinks),
        compiler=compiler
        or JavacCompiler(
            config.tools.compiler,
            source_suffix=config.source_suffix,
            compiled_suffix=config.compiled_suffix,
            timeout=timeout,
        ),
        transformers=transformers if transformers is not None else build_transformers(config),
        extractor=extractor or CommandExtractor(config.tools.extractor, timeout=timeout),
        source_type=config.source_type,
    )


def analyze(
    path: "Path | str" = ".",
    config: Optional[AnalysisConfig] = None,
    collector: Optional[Collector] = None,
    compiler: Optional[Compiler] = None,
    transformers: Optional[Mapping[TransformationKind, Transformer]] = None,
    extractor: Optional[Extractor] = None,
) -> AnalysisResult:
    """Run the full pipeline over ``path`` and pair the results.

    Reporting and cleanup are left to the caller so that cleanup can run
    after the report has been emitted.

    Raises:
        InvalidPathError: If ``path`` is not a directory
    """
    root = Path(path).absolute()
    if not root.is_dir():
        raise InvalidPathError(root, "not a directory")

    config = config or load_config()
    logger.info("Analyzing %s sources under %s", config.source_suffix, root)
    pipeline = build_pipeline(config, collector, compiler, transformers, extractor)
    state = pipeline.run(root)
    pairs = build_pairs(state)
    return AnalysisResult(state=state, pairs=pairs, collected=pipeline.collected)
