"""Adapter interfaces for the external tools the pipeline drives."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional

from ..models import RawExtraction, TransformationKind


class Collector(ABC):
    """Finds the source artifacts to analyze."""

    @abstractmethod
    def collect(self, root: Path, type_filter: str) -> Dict[str, Path]:
        """Return absolute path -> file for every artifact of ``type_filter`` under ``root``."""


class Compiler(ABC):
    """Builds the baseline compiled artifact for one source artifact."""

    @abstractmethod
    def compile(self, source: Path) -> Optional[Path]:
        """Return the compiled artifact, or None if compilation failed."""


class Transformer(ABC):
    """Runs one obfuscator over a baseline artifact."""

    kind: TransformationKind

    @abstractmethod
    def transform(self, compiled: Path) -> Optional[Path]:
        """Return the transformed artifact, or None if the tool produced nothing."""


class Extractor(ABC):
    """Reports structural counts and the call trace of a compiled artifact."""

    @abstractmethod
    def extract(self, compiled: Path) -> Optional[RawExtraction]:
        """Return the extraction, or None when the artifact has nothing analyzable."""
