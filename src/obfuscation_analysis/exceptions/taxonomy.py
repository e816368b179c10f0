"""Error codes for pipeline failures.

Error Code Convention:
    OA1xx - Collection errors
    OA2xx - Compilation errors
    OA3xx - Transformation errors
    OA4xx - Extraction/rating errors
    OA5xx - Cleanup errors
"""

from enum import Enum


class Stage(Enum):
    """Pipeline stage in which a failure happened."""

    COLLECTION = "collection"
    COMPILATION = "compilation"
    TRANSFORMATION = "transformation"
    EXTRACTION = "extraction"
    CLEANUP = "cleanup"


class ErrorCode(Enum):
    """Structured error codes for diagnostics."""

    # Collection errors (OA1xx)
    OA101 = "OA101"  # Directory walk failed

    # Compilation errors (OA2xx)
    OA201 = "OA201"  # Compiler failed or produced no artifact
    OA202 = "OA202"  # Compiler could not be launched

    # Transformation errors (OA3xx)
    OA301 = "OA301"  # Transformer failed or produced no artifact
    OA302 = "OA302"  # Transformer could not be launched

    # Extraction errors (OA4xx)
    OA400 = "OA400"  # Extractor reported failure
    OA401 = "OA401"  # Extractor output unreadable
    OA402 = "OA402"  # Rating failed

    # Cleanup errors (OA5xx)
    OA500 = "OA500"  # Transient artifact could not be deleted

    @property
    def stage(self) -> Stage:
        return _STAGE_BY_PREFIX[self.value[2]]


_STAGE_BY_PREFIX = {
    "1": Stage.COLLECTION,
    "2": Stage.COMPILATION,
    "3": Stage.TRANSFORMATION,
    "4": Stage.EXTRACTION,
    "5": Stage.CLEANUP,
}
