"""Pairing and delta engine.

Cross-joins each origin's baseline with every variant accumulated for it.
Runs only after all transformation kinds have been attempted for all
artifacts.
"""

from typing import List, Mapping, Sequence

from .logging_config import get_logger
from .models import AnalyzedFile, AnalyzedPair, RunState

logger = get_logger(__name__)


def build_pairs_from_maps(
    baselines: Mapping[str, AnalyzedFile],
    variants: Mapping[str, Sequence[AnalyzedFile]],
) -> List[AnalyzedPair]:
    """Pair every baseline with each of its variants.

    Order is origin iteration order, then variant accumulation order.  An
    origin with no recorded variants contributes no pairs.  Structurally
    identical variants still get one pair each.
    """
    pairs: List[AnalyzedPair] = []
    for origin, baseline in baselines.items():
        origin_variants = variants.get(origin)
        if not origin_variants:
            logger.debug("No variants recorded for %s", origin)
            continue
        for variant in origin_variants:
            pairs.append(AnalyzedPair(baseline=baseline, variant=variant))
    return pairs


def build_pairs(state: RunState) -> List[AnalyzedPair]:
    """Pair everything accumulated in ``state``."""
    pairs = build_pairs_from_maps(state.baselines, state.variants)
    logger.info("Built %d pairs from %d baselines", len(pairs), len(state.baselines))
    return pairs

