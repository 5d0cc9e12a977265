"""CLI entry-point for the curve-fitting pipeline."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from packages.core.types import FitReport
from packages.pipeline.plane import DEFAULT_ITERATIONS
from packages.pipeline.process import fit_file_to_json
from packages.pipeline.quadratic import SINGULAR_TOLERANCE
from packages.pipeline.reconstruct import DEFAULT_STEPS, sample_curve


@click.group()
def main():
    """Fit a parabola through 3-D trajectory points."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(levelname)s | %(name)s | %(message)s",
    )


@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", "output_file", default=None, help="Output JSON path.")
@click.option("--steps", default=DEFAULT_STEPS, show_default=True, help="Curve samples in the report.")
@click.option("--no-samples", is_flag=True, help="Omit the sampled polyline.")
@click.option("--iterations", default=DEFAULT_ITERATIONS, show_default=True, help="Power-iteration steps.")
@click.option("--tolerance", default=SINGULAR_TOLERANCE, show_default=True, help="Singular determinant threshold.")
def fit(
    input_file: str,
    output_file: str | None,
    steps: int,
    no_samples: bool,
    iterations: int,
    tolerance: float,
):
    """Fit a point file (.csv/.txt/.xyz/.ply) and write a fit report JSON."""
    try:
        json_str = fit_file_to_json(
            input_file,
            output_path=output_file,
            steps=None if no_samples else steps,
            iterations=iterations,
            tolerance=tolerance,
        )
    except ValueError as e:  # FitError or an unreadable file
        raise click.ClickException(str(e)) from e
    click.echo(json_str)


@main.command()
@click.argument("report_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--steps", default=DEFAULT_STEPS, show_default=True, help="Number of sample intervals.")
def sample(report_file: str, steps: int):
    """Resample the curve stored in a fit report as x,y,z lines."""
    try:
        report = FitReport.model_validate_json(Path(report_file).read_text())
        points = sample_curve(report.fit, steps)
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    for x, y, z in points:
        click.echo(f"{x:.6f},{y:.6f},{z:.6f}")


if __name__ == "__main__":
    main()
