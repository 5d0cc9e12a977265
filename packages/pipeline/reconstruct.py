"""Rebuild a fitted parabola in world space as a renderable polyline.

Samples span the observed ``u`` range plus a 20 % overshoot on each side
(or a fixed pad of 1.0 when the range is effectively zero).  Renderers must
use the same padding to reproduce reference output.
"""

from __future__ import annotations

import numpy as np

from packages.core.types import FitResult, Vec3
from packages.pipeline.linalg import to_array, to_vec3

PAD_FRACTION = 0.2
ZERO_RANGE_PAD = 1.0
DEFAULT_STEPS = 60

_RANGE_EPS = 1e-12


def padded_u_range(result: FitResult) -> tuple[float, float]:
    """Return the ``(start, end)`` of the sampled ``u`` interval."""
    min_u, max_u = result.u_range
    span = max_u - min_u
    pad = PAD_FRACTION * span if abs(span) > _RANGE_EPS else ZERO_RANGE_PAD
    return min_u - pad, max_u + pad


def evaluate_quadratic(result: FitResult, u):
    return result.a * u * u + result.b * u + result.c


def curve_point(result: FitResult, u: float) -> Vec3:
    """World-space point of the fitted curve at local coordinate *u*."""
    w = evaluate_quadratic(result, u)
    p = to_array(result.centroid) + u * to_array(result.basis_u) + w * to_array(result.basis_w)
    return to_vec3(p)


def sample_curve(result: FitResult, steps: int = DEFAULT_STEPS) -> np.ndarray:
    """Sample the curve at ``steps + 1`` evenly spaced parameters.

    Returns a ``(steps + 1, 3)`` array in world coordinates.
    """
    if steps < 1:
        raise ValueError("steps must be at least 1")

    start, end = padded_u_range(result)
    t = np.arange(steps + 1, dtype=np.float64)
    u = start + (t / steps) * (end - start)
    w = evaluate_quadratic(result, u)
    return (
        to_array(result.centroid)
        + u[:, None] * to_array(result.basis_u)
        + w[:, None] * to_array(result.basis_w)
    )
