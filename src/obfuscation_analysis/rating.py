"""Rating engine: turns one extraction result into an ``AnalyzedFile``."""

from pathlib import Path
from typing import Optional, Union

from .models import AnalyzedFile, RawExtraction, TransformationKind


def rate(
    compiled_artifact: Union[Path, str],
    raw_extraction: Optional[RawExtraction],
    transformation_kind: TransformationKind,
    origin_path: Union[Path, str],
) -> AnalyzedFile:
    """Build the normalized record for one compiled artifact.

    Pure: no filesystem access beyond path arithmetic.  A ``None`` extraction
    means the artifact had nothing analyzable and yields zeroed metrics with
    an empty call trace.
    """
    origin = str(Path(origin_path).absolute())
    file_name = Path(compiled_artifact).name

    if raw_extraction is None:
        return AnalyzedFile(
            origin_path=origin,
            file_name=file_name,
            transformation_kind=transformation_kind,
        )

    return AnalyzedFile(
        origin_path=origin,
        file_name=file_name,
        transformation_kind=transformation_kind,
        num_methods=raw_extraction.method_count,
        num_fields=raw_extraction.field_count,
        file_size=float(raw_extraction.byte_size),
        cpool_size=raw_extraction.constant_pool_size,
        call_depth=raw_extraction.call_depth,
        call_sites=tuple(raw_extraction.call_sites),
    )
