"""Pipeline orchestrator.

Per source artifact, strictly in sequence:

    collected -> compiled -> baseline rated -> (transformed -> rated) per kind

Every failure is contained at the smallest unit that keeps the batch going:
a failed compile or baseline extraction drops that artifact, a failed
transformation drops only that (artifact, kind).  Nothing raised by an
adapter escapes ``run``.
"""

from pathlib import Path
from typing import Mapping, Optional

from .adapters.base import Collector, Compiler, Extractor, Transformer
from .exceptions import ErrorCode, PipelineError
from .logging_config import get_logger
from .models import RunState, StageFailure, TransformationKind
from .rating import rate

logger = get_logger(__name__)


class AnalysisPipeline:
    """Drive the external tools over a source tree and accumulate records.

    Adapters are injected so the accumulation logic can run against fakes.
    Transformers are attempted in ``TransformationKind.variants()`` order
    regardless of the mapping's own order.
    """

    def __init__(
        self,
        collector: Collector,
        compiler: Compiler,
        transformers: Mapping[TransformationKind, Transformer],
        extractor: Extractor,
        source_type: str = "java",
    ):
        self.collector = collector
        self.compiler = compiler
        self.transformers = dict(transformers)
        self.extractor = extractor
        self.source_type = source_type
        self.collected = 0

    def run(self, root: Path) -> RunState:
        """Process every collected artifact under ``root`` and return the run state."""
        state = RunState()

        sources = self.collector.collect(Path(root), self.source_type)
        self.collected = len(sources)
        if not sources:
            logger.info("No files of type %s found under %s", self.source_type, root)
            return state

        for origin, source in sources.items():
            self._process_artifact(state, origin, source)

        logger.info(
            "Analyzed %d of %d artifacts (%d failures recorded)",
            len(state.baselines),
            len(sources),
            len(state.failures),
        )
        return state

    def _process_artifact(self, state: RunState, origin: str, source: Path) -> None:
        compiled = self._compile(state, origin, source)
        if compiled is None:
            return

        try:
            extraction = self.extractor.extract(compiled)
            state.add_baseline(rate(compiled, extraction, TransformationKind.NONE, origin))
        except Exception as e:
            self._fail(state, origin, e, ErrorCode.OA402)
            return

        for kind in TransformationKind.variants():
            transformer = self.transformers.get(kind)
            if transformer is None:
                continue
            self._process_variant(state, origin, compiled, kind, transformer)

    def _compile(self, state: RunState, origin: str, source: Path) -> Optional[Path]:
        try:
            compiled = self.compiler.compile(source)
        except Exception as e:
            self._fail(state, origin, e, ErrorCode.OA202)
            return None

        if compiled is None:
            self._fail(state, origin, "compiler failed or produced no artifact", ErrorCode.OA201)
        return compiled

    def _process_variant(
        self,
        state: RunState,
        origin: str,
        compiled: Path,
        kind: TransformationKind,
        transformer: Transformer,
    ) -> None:
        try:
            transformed = transformer.transform(compiled)
        except Exception as e:
            self._fail(state, origin, e, ErrorCode.OA302, kind)
            return

        if transformed is None:
            self._fail(state, origin, "transformer failed or produced no artifact", ErrorCode.OA301, kind)
            return

        try:
            extraction = self.extractor.extract(transformed)
            state.add_variant(rate(transformed, extraction, kind, origin))
        except Exception as e:
            self._fail(state, origin, e, ErrorCode.OA402, kind)

    def _fail(
        self,
        state: RunState,
        origin: str,
        error: object,
        fallback_code: ErrorCode,
        kind: Optional[TransformationKind] = None,
    ) -> None:
        code = error.code if isinstance(error, PipelineError) else fallback_code
        where = f"{origin} [{kind.label}]" if kind else origin
        logger.warning("%s failed for %s: %s", code.stage.value.capitalize(), where, error)
        state.record_failure(StageFailure(origin_path=origin, code=code, message=str(error), kind=kind))
