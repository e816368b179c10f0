"""Filesystem collector for source artifacts."""

from fnmatch import fnmatch
from pathlib import Path
from typing import Dict, List, Optional

from ..exceptions import CollectionError
from ..logging_config import get_logger
from .base import Collector

logger = get_logger(__name__)


class FileCollector(Collector):
    """Walk a directory tree and collect files with a given extension."""

    def __init__(self, exclude_patterns: Optional[List[str]] = None, follow_symlinks: bool = False):
        self.exclude_patterns = list(exclude_patterns or [])
        self.follow_symlinks = follow_symlinks

    def collect(self, root: Path, type_filter: str) -> Dict[str, Path]:
        root = Path(root).absolute()
        found: Dict[str, Path] = {}
        try:
            for path in sorted(root.rglob(f"*.{type_filter}")):
                if path.is_symlink() and not self.follow_symlinks:
                    continue
                if not path.is_file():
                    continue
                if self._is_excluded(path.relative_to(root)):
                    logger.debug("Excluded %s", path)
                    continue
                found[str(path)] = path
        except OSError as e:
            raise CollectionError(root, f"Directory scan failed: {e}")

        logger.info("Collected %d .%s files under %s", len(found), type_filter, root)
        return found

    def _is_excluded(self, relative: Path) -> bool:
        posix = relative.as_posix()
        return any(fnmatch(posix, pattern) for pattern in self.exclude_patterns)
