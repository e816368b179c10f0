"""Base formatter interface and the row model shared by all renderers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from ..models import AnalyzedFile, AnalyzedPair, RunState, TransformationKind

# (title, width) for the fixed-width metrics table
COLUMNS: Tuple[Tuple[str, int], ...] = (
    ("Obfuscator", 20),
    ("File Name", 25),
    ("Methods", 20),
    ("Size", 20),
    ("Fields", 20),
    ("Constant Pool", 20),
)


@dataclass(frozen=True)
class MetricRow:
    """One line of the metrics table.

    Baseline rows carry absolute values; pair rows carry deltas, except for
    ``cpool_size`` which is always absolute.
    """

    origin_path: str
    label: str
    file_name: str
    methods: int
    size: float
    fields: int
    cpool_size: int
    is_baseline: bool = False


@dataclass(frozen=True)
class CallFlowEntry:
    """A traceable origin with its baseline and variant call flows."""

    origin_path: str
    baseline: AnalyzedFile
    variants: Tuple[AnalyzedFile, ...]


def metric_rows(pairs: Sequence[AnalyzedPair], state: RunState) -> Iterator[MetricRow]:
    """Yield table rows in pair order, with each origin's baseline row injected once.

    The baseline row for an origin appears the first time one of its pairs is
    seen; origins without pairs do not appear.
    """
    seen = set()
    for pair in pairs:
        origin = pair.origin_path
        if origin not in seen:
            seen.add(origin)
            baseline = state.baselines.get(origin, pair.baseline)
            yield MetricRow(
                origin_path=origin,
                label=TransformationKind.NONE.label,
                file_name=baseline.file_name,
                methods=baseline.num_methods,
                size=baseline.file_size,
                fields=baseline.num_fields,
                cpool_size=baseline.cpool_size,
                is_baseline=True,
            )
        yield MetricRow(
            origin_path=origin,
            label=pair.transformation_kind.label,
            file_name=pair.file_name,
            methods=pair.methods_changed,
            size=pair.size_change,
            fields=pair.fields_changed,
            cpool_size=pair.cpool_size,
        )


def call_flow_entries(state: RunState) -> List[CallFlowEntry]:
    """Origins whose baseline has a call flow, in origin order.

    An empty baseline flow marks a non-traceable artifact (a helper class
    with no entry point) and the origin is left out.
    """
    return [
        CallFlowEntry(origin, baseline, state.variants_for(origin))
        for origin, baseline in state.baselines.items()
        if baseline.call_flow.strip()
    ]


class BaseFormatter(ABC):
    """Abstract base class for report renderers."""

    @abstractmethod
    def render(self, pairs: Sequence[AnalyzedPair], state: RunState) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, pairs: Sequence[AnalyzedPair], state: RunState) -> str:
        """Return the report as a string."""
