"""End-to-end pipeline: load a point file → fit a parabola → report JSON."""

from __future__ import annotations

import logging
from pathlib import Path

from packages.core.types import FitReport
from packages.pipeline.fit import fit_spatial_parabola
from packages.pipeline.loader import load_point_cloud
from packages.pipeline.plane import DEFAULT_ITERATIONS
from packages.pipeline.preprocess import compute_bounds
from packages.pipeline.quadratic import SINGULAR_TOLERANCE
from packages.pipeline.reconstruct import DEFAULT_STEPS, sample_curve
from packages.pipeline.report import build_fit_report

logger = logging.getLogger(__name__)


def fit_file(
    input_path: str | Path,
    *,
    iterations: int = DEFAULT_ITERATIONS,
    tolerance: float = SINGULAR_TOLERANCE,
    steps: int | None = DEFAULT_STEPS,
) -> FitReport:
    """Run the full fitting pipeline on a single point file.

    1. Load the file.
    2. Fit a parabola in the best-fit plane.
    3. Optionally resample the curve (``steps=None`` skips it).
    4. Assemble a :class:`FitReport`.
    """
    input_path = Path(input_path)
    logger.info("Loading %s …", input_path.name)
    points = load_point_cloud(input_path)["positions"]
    logger.info("Loaded %d points", len(points))

    fit = fit_spatial_parabola(points, iterations=iterations, tolerance=tolerance)

    samples = None
    if steps is not None:
        logger.info("Sampling fitted curve (steps=%d) …", steps)
        samples = sample_curve(fit, steps)

    return build_fit_report(
        source_file=input_path.name,
        point_count=len(points),
        bounds=compute_bounds(points),
        fit=fit,
        samples=samples,
    )


def fit_file_to_json(
    input_path: str | Path,
    output_path: str | Path | None = None,
    **kwargs,
) -> str:
    """Run the pipeline and write the fit report to a JSON file.

    Returns the JSON string.
    """
    report = fit_file(input_path, **kwargs)
    json_str = report.model_dump_json(indent=2)

    if output_path is None:
        output_path = Path(input_path).with_suffix(".fit.json")
    Path(output_path).write_text(json_str)
    logger.info("Wrote fit report → %s", output_path)
    return json_str
