"""Data models for Obfuscation Analysis"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .calltrace import render_call_flow
from .exceptions.taxonomy import ErrorCode, Stage


class TransformationKind(Enum):
    """Which tool produced an artifact. ``NONE`` marks the baseline."""

    NONE = "none"
    JSHRINK = "jshrink"
    PROGUARD = "proguard"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]

    @classmethod
    def variants(cls) -> Tuple["TransformationKind", ...]:
        """Obfuscating kinds, in the order they are attempted."""
        return (cls.JSHRINK, cls.PROGUARD)


_KIND_LABELS = {
    TransformationKind.NONE: "Original",
    TransformationKind.JSHRINK: "JShrink",
    TransformationKind.PROGUARD: "ProGuard",
}


@dataclass(frozen=True)
class RawExtraction:
    """Structural counts and call trace reported by the extractor for one artifact."""

    method_count: int
    field_count: int
    byte_size: float
    constant_pool_size: int
    call_depth: int = 0
    call_sites: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnalyzedFile:
    """One structural snapshot of one compiled artifact.

    ``origin_path`` is the absolute path of the *source* artifact, even for
    transformed variants, and is the key that correlates a baseline with
    its variants.
    """

    origin_path: str
    file_name: str
    transformation_kind: TransformationKind
    num_methods: int = 0
    num_fields: int = 0
    file_size: float = 0.0
    cpool_size: int = 0
    call_depth: int = 0
    call_sites: Tuple[str, ...] = ()

    @property
    def call_flow(self) -> str:
        """Call sites rendered one per line; empty for non-traceable artifacts."""
        return render_call_flow(self.call_sites)

    @property
    def is_baseline(self) -> bool:
        return self.transformation_kind is TransformationKind.NONE


@dataclass(frozen=True)
class AnalyzedPair:
    """A baseline compared against one of its transformed variants.

    The method, field and size figures are deltas (variant minus baseline).
    ``cpool_size`` is the variant's absolute constant-pool size, not a delta;
    this asymmetry is kept deliberately to match existing reports.
    """

    baseline: AnalyzedFile
    variant: AnalyzedFile
    methods_changed: int = field(init=False)
    fields_changed: int = field(init=False)
    size_change: float = field(init=False)
    cpool_size: int = field(init=False)

    def __post_init__(self) -> None:
        if self.baseline.origin_path != self.variant.origin_path:
            raise ValueError(
                f"Cannot pair {self.variant.origin_path} with baseline {self.baseline.origin_path}"
            )
        object.__setattr__(self, "methods_changed", self.variant.num_methods - self.baseline.num_methods)
        object.__setattr__(self, "fields_changed", self.variant.num_fields - self.baseline.num_fields)
        object.__setattr__(self, "size_change", self.variant.file_size - self.baseline.file_size)
        object.__setattr__(self, "cpool_size", self.variant.cpool_size)

    @property
    def origin_path(self) -> str:
        return self.baseline.origin_path

    @property
    def file_name(self) -> str:
        return self.variant.file_name

    @property
    def transformation_kind(self) -> TransformationKind:
        return self.variant.transformation_kind


@dataclass(frozen=True)
class StageFailure:
    """A caught per-artifact failure, kept for the end-of-run summary."""

    origin_path: str
    code: ErrorCode
    message: str
    kind: Optional[TransformationKind] = None

    @property
    def stage(self) -> Stage:
        return self.code.stage


@dataclass
class RunState:
    """Everything one run accumulates, owned by the pipeline.

    Maps preserve insertion order: origins in processing order, and each
    origin's variants in the order their kinds were attempted.
    """

    baselines: Dict[str, AnalyzedFile] = field(default_factory=dict)
    variants: Dict[str, List[AnalyzedFile]] = field(default_factory=dict)
    failures: List[StageFailure] = field(default_factory=list)

    def add_baseline(self, record: AnalyzedFile) -> None:
        if not record.is_baseline:
            raise ValueError(f"{record.file_name} is not a baseline record")
        if record.origin_path in self.baselines:
            raise ValueError(f"Duplicate baseline for {record.origin_path}")
        self.baselines[record.origin_path] = record

    def add_variant(self, record: AnalyzedFile) -> None:
        if record.is_baseline:
            raise ValueError(f"{record.file_name} is a baseline, not a variant")
        self.variants.setdefault(record.origin_path, []).append(record)

    def variants_for(self, origin_path: str) -> Tuple[AnalyzedFile, ...]:
        """Variants recorded for ``origin_path``; empty when none succeeded."""
        return tuple(self.variants.get(origin_path, ()))

    def record_failure(self, failure: StageFailure) -> None:
        self.failures.append(failure)


@dataclass
class AnalysisResult:
    """Outcome of a full run: accumulated state plus the derived pairs."""

    state: RunState
    pairs: List[AnalyzedPair]
    collected: int = 0

    @property
    def is_empty(self) -> bool:
        return self.collected == 0
