"""Build a FitReport from a fit result and point-cloud metadata."""

from __future__ import annotations

import numpy as np

from packages.core.types import BBox, FitReport, FitResult
from packages.pipeline.linalg import to_vec3


def build_fit_report(
    *,
    source_file: str,
    point_count: int,
    bounds: BBox,
    fit: FitResult,
    samples: np.ndarray | None = None,
) -> FitReport:
    """Assemble pipeline outputs into a :class:`FitReport`."""
    return FitReport(
        source_file=source_file,
        point_count=point_count,
        bounds=bounds,
        fit=fit,
        samples=[to_vec3(p) for p in samples] if samples is not None else [],
    )
