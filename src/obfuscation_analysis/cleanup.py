"""Removal of transient compiled artifacts after the report is out."""

from pathlib import Path
from typing import List, Sequence

from .config import compiled_path_for
from .exceptions import CleanupError
from .logging_config import get_logger
from .models import AnalyzedPair

logger = get_logger(__name__)


def cleanup_compiled_artifacts(
    pairs: Sequence[AnalyzedPair],
    source_suffix: str = ".java",
    compiled_suffix: str = ".class",
) -> List[Path]:
    """Delete the compiled baseline of every origin that appears in ``pairs``.

    Deletion problems are logged as warnings and never raised.

    Returns:
        Paths that were actually deleted.
    """
    deleted: List[Path] = []
    for origin in dict.fromkeys(pair.origin_path for pair in pairs):
        target = compiled_path_for(Path(origin), source_suffix, compiled_suffix)
        try:
            if target.exists():
                target.unlink()
                deleted.append(target)
                logger.debug("Deleted %s", target)
        except OSError as e:
            logger.warning("%s", CleanupError(target, str(e)))
    return deleted
