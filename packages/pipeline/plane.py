"""Best-fit plane estimation via principal component analysis.

The plane through a point cloud is spanned by the two leading eigenvectors
of its covariance matrix.  Rather than a full 3×3 eigendecomposition, the
estimator runs a fixed number of power-iteration steps:

1. **Dominant direction** – power iteration on the covariance matrix from a
   fixed ``(1, 1, 1)`` seed gives ``basis_u``.
2. **Secondary direction** – the covariance matrix is deflated by
   ``trace · (u ⊗ u)`` and iterated again; the result is orthogonalised
   against ``basis_u`` to give ``basis_w``.

This is deliberately approximate.  It converges when the top eigenvalues are
well separated and the seed is not orthogonal to the dominant direction.
If the seed has no component in the cloud's spread at all (a plane whose
normal is parallel to the seed), both passes restart from the coordinate
axis with the largest variance.
"""

from __future__ import annotations

import logging

import numpy as np

from packages.core.errors import DegenerateInputError
from packages.core.types import PlaneBasis
from packages.pipeline.linalg import (
    deflate,
    normalize,
    orthogonalize,
    power_iteration,
    scatter_matrix,
    to_vec3,
)

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 10
DEFAULT_SEED = (1.0, 1.0, 1.0)

# Scaled by the covariance trace for power-iteration iterates; used as-is
# for the unit-scale Gram–Schmidt result.
ZERO_TOLERANCE = 1e-12


def as_point_array(points) -> np.ndarray:
    """Copy *points* into a fresh (N, 3) float64 array.

    Raises :class:`DegenerateInputError` if the input is empty or not a
    sequence of 3-D points.
    """
    arr = np.array(points, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise DegenerateInputError(f"Expected an (N, 3) point array, got shape {arr.shape}")
    if len(arr) == 0:
        raise DegenerateInputError("Point cloud is empty")
    return arr


def estimate_plane(
    points,
    *,
    iterations: int = DEFAULT_ITERATIONS,
    seed: tuple[float, float, float] = DEFAULT_SEED,
) -> PlaneBasis:
    """Estimate the centroid and two in-plane axes of *points*.

    A basis vector that is numerically zero is returned as the zero vector
    and the result is flagged ``degenerate``: coincident points give a zero
    ``basis_u``, collinear points a zero ``basis_w``.
    """
    pts = as_point_array(points)
    centroid = pts.mean(axis=0)
    cov = scatter_matrix(pts, centroid)
    tol = ZERO_TOLERANCE * float(np.trace(cov))

    start = np.asarray(seed, dtype=np.float64)
    v1 = power_iteration(cov, start, iterations=iterations, tol=tol)
    if not v1.any() and tol > 0:
        # Seed orthogonal to every spread direction: restart from the axis of
        # largest variance, which cov cannot map to zero.
        start = np.eye(3)[int(np.argmax(np.diag(cov)))]
        logger.debug("Seed %s collapsed; restarting from %s", seed, start)
        v1 = power_iteration(cov, start, iterations=iterations, tol=tol)
    v2_raw = power_iteration(deflate(cov, v1), start, iterations=iterations, tol=tol)
    v2 = normalize(orthogonalize(v2_raw, v1), ZERO_TOLERANCE)

    degenerate = not v1.any() or not v2.any()
    if degenerate:
        logger.warning(
            "Degenerate plane for %d points (basis_u zero: %s, basis_w zero: %s)",
            len(pts), not v1.any(), not v2.any(),
        )
    logger.debug("Plane: centroid=%s u=%s w=%s", centroid, v1, v2)

    return PlaneBasis(
        centroid=to_vec3(centroid),
        basis_u=to_vec3(v1),
        basis_w=to_vec3(v2),
        degenerate=degenerate,
    )
