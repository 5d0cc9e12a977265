"""Ordinary least-squares fit of ``w = a·u² + b·u + c``.

The 3×3 normal equations are built from power sums of ``u`` and solved in
closed form with Cramer's rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from packages.core.errors import DegenerateInputError, SingularSystemError

logger = logging.getLogger(__name__)

SINGULAR_TOLERANCE = 1e-10


@dataclass(frozen=True)
class QuadraticSums:
    """Power sums ``Σuᵏ`` (k = 0..4) and cross sums ``Σuᵏ·w`` (k = 0..2)."""

    n: float
    su: float
    su2: float
    su3: float
    su4: float
    sw: float
    suw: float
    su2w: float


def accumulate_sums(u: np.ndarray, w: np.ndarray) -> QuadraticSums:
    u = np.asarray(u, dtype=np.float64)
    w = np.asarray(w, dtype=np.float64)
    u2 = u * u
    return QuadraticSums(
        n=float(len(u)),
        su=float(u.sum()),
        su2=float(u2.sum()),
        su3=float((u2 * u).sum()),
        su4=float((u2 * u2).sum()),
        sw=float(w.sum()),
        suw=float((u * w).sum()),
        su2w=float((u2 * w).sum()),
    )


def _det3(m: np.ndarray) -> float:
    """Determinant of a 3×3 matrix by cofactor expansion along the first row."""
    return float(
        m[0, 0] * (m[1, 1] * m[2, 2] - m[1, 2] * m[2, 1])
        - m[0, 1] * (m[1, 0] * m[2, 2] - m[1, 2] * m[2, 0])
        + m[0, 2] * (m[1, 0] * m[2, 1] - m[1, 1] * m[2, 0])
    )


def solve_normal_equations(
    sums: QuadraticSums,
    *,
    tolerance: float = SINGULAR_TOLERANCE,
) -> tuple[float, float, float]:
    """Solve the normal equations for ``(a, b, c)`` by Cramer's rule.

    Raises :class:`SingularSystemError` when ``|det| < tolerance``.
    """
    matrix = np.array(
        [
            [sums.su4, sums.su3, sums.su2],
            [sums.su3, sums.su2, sums.su],
            [sums.su2, sums.su, sums.n],
        ]
    )
    rhs = np.array([sums.su2w, sums.suw, sums.sw])

    det = _det3(matrix)
    if abs(det) < tolerance:
        raise SingularSystemError(
            f"Normal equations are singular (|det|={abs(det):.3e} < {tolerance:g}); "
            "the points have no spread along the fitted axis"
        )

    coeffs = []
    for col in range(3):
        replaced = matrix.copy()
        replaced[:, col] = rhs
        coeffs.append(_det3(replaced) / det)
    a, b, c = coeffs
    return a, b, c


def fit_quadratic(
    local_points,
    *,
    tolerance: float = SINGULAR_TOLERANCE,
) -> tuple[float, float, float]:
    """Fit ``w = a·u² + b·u + c`` to an (N, 2) array of ``(u, w)`` pairs."""
    local = np.asarray(local_points, dtype=np.float64)
    if local.ndim != 2 or local.shape[1] != 2:
        raise DegenerateInputError(f"Expected an (N, 2) array of (u, w), got shape {local.shape}")
    if len(local) < 3:
        raise DegenerateInputError(f"Need at least 3 points for a quadratic fit, got {len(local)}")

    sums = accumulate_sums(local[:, 0], local[:, 1])
    a, b, c = solve_normal_equations(sums, tolerance=tolerance)
    logger.debug("Quadratic fit over %d points: a=%.6g b=%.6g c=%.6g", len(local), a, b, c)
    return a, b, c
