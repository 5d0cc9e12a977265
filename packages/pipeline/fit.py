"""Fit a parabola to a 3-D point cloud: plane estimate → projection → quadratic."""

from __future__ import annotations

import logging

import numpy as np

from packages.core.errors import DegenerateInputError
from packages.core.types import FitResult, PlaneBasis
from packages.pipeline.linalg import to_array
from packages.pipeline.plane import DEFAULT_ITERATIONS, as_point_array, estimate_plane
from packages.pipeline.quadratic import SINGULAR_TOLERANCE, fit_quadratic

logger = logging.getLogger(__name__)

MIN_POINTS = 3


def project_points(points: np.ndarray, plane: PlaneBasis) -> np.ndarray:
    """Project (N, 3) *points* into the plane's local frame.

    Returns an (N, 2) array of ``(u, w)``: the signed distances of
    ``p - centroid`` along ``basis_u`` and ``basis_w``.
    """
    centred = points - to_array(plane.centroid)
    basis = np.column_stack((to_array(plane.basis_u), to_array(plane.basis_w)))
    return centred @ basis


def fit_spatial_parabola(
    points,
    *,
    iterations: int = DEFAULT_ITERATIONS,
    tolerance: float = SINGULAR_TOLERANCE,
) -> FitResult:
    """Fit ``w = a·u² + b·u + c`` in the best-fit plane of *points*.

    Raises :class:`DegenerateInputError` for fewer than three points and
    :class:`SingularSystemError` when the projected points have no spread
    along ``u``.  The caller's *points* are copied, never modified.
    """
    pts = as_point_array(points)
    if len(pts) < MIN_POINTS:
        raise DegenerateInputError(
            f"Need at least {MIN_POINTS} points to fit a parabola, got {len(pts)}"
        )

    plane = estimate_plane(pts, iterations=iterations)
    local = project_points(pts, plane)
    u = local[:, 0]
    u_range = (float(u.min()), float(u.max()))

    a, b, c = fit_quadratic(local, tolerance=tolerance)
    logger.info(
        "Fitted parabola to %d points: a=%.4g b=%.4g c=%.4g, u in [%.3f, %.3f]",
        len(pts), a, b, c, *u_range,
    )
    return FitResult(
        a=a,
        b=b,
        c=c,
        centroid=plane.centroid,
        basis_u=plane.basis_u,
        basis_w=plane.basis_w,
        u_range=u_range,
        point_count=len(pts),
        degenerate=plane.degenerate,
    )
