"""Small 3-vector and 3×3 symmetric-matrix helpers used by the plane estimator."""

from __future__ import annotations

import numpy as np

from packages.core.types import Vec3


def to_array(v: Vec3) -> np.ndarray:
    """Return a :class:`Vec3` as a float64 array of shape (3,)."""
    return np.array([v.x, v.y, v.z], dtype=np.float64)


def to_vec3(arr: np.ndarray) -> Vec3:
    return Vec3(x=float(arr[0]), y=float(arr[1]), z=float(arr[2]))


def normalize(v: np.ndarray, tol: float = 0.0) -> np.ndarray:
    """Return *v* scaled to unit length.

    A vector whose norm is at or below *tol* is numerically zero and comes
    back as the zero vector instead of being divided through.
    """
    norm = float(np.linalg.norm(v))
    if norm <= tol:
        return np.zeros_like(v, dtype=np.float64)
    return v / norm


def scatter_matrix(points: np.ndarray, centroid: np.ndarray) -> np.ndarray:
    """Unnormalised covariance ``Σ (p - mean)(p - mean)ᵀ`` of an (N, 3) array."""
    centred = points - centroid
    return centred.T @ centred


def power_iteration(
    matrix: np.ndarray,
    seed: np.ndarray,
    *,
    iterations: int = 10,
    tol: float = 0.0,
) -> np.ndarray:
    """Approximate the dominant eigenvector of *matrix*.

    Runs a fixed number of multiply-and-renormalise steps from *seed*; there
    is no convergence test.  Once the iterate collapses to zero (the seed
    has no component in the matrix's range) it stays zero.
    """
    v = np.asarray(seed, dtype=np.float64)
    for _ in range(iterations):
        v = normalize(matrix @ v, tol)
    return v


def deflate(matrix: np.ndarray, v: np.ndarray) -> np.ndarray:
    """Remove *v* from *matrix* by subtracting ``trace · (v ⊗ v)``.

    The outer product is scaled by the trace, not by the eigenvalue of *v*.
    """
    return matrix - np.trace(matrix) * np.outer(v, v)


def orthogonalize(v: np.ndarray, against: np.ndarray) -> np.ndarray:
    """Single-pass Gram–Schmidt: strip the *against* component from *v*."""
    return v - np.dot(v, against) * against
