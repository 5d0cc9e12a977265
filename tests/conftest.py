"""Shared test fixtures – synthetic trajectories lying on planar parabolas."""

from __future__ import annotations

import numpy as np
import pytest


def make_parabola_points(
    origin: np.ndarray,
    u_axis: np.ndarray,
    w_axis: np.ndarray,
    u: np.ndarray,
    a: float,
    b: float = 0.0,
    c: float = 0.0,
    noise: float = 0.0,
    rng: np.random.Generator | None = None,
) -> np.ndarray:
    """Place ``w = a·u² + b·u + c`` in the plane ``origin + u·u_axis + w·w_axis``."""
    w = a * u**2 + b * u + c
    pts = origin + u[:, None] * u_axis + w[:, None] * w_axis
    if noise:
        rng = rng or np.random.default_rng(0)
        pts += rng.normal(scale=noise, size=pts.shape)
    return pts


TILTED_U = np.array([1.0, 1.0, 0.0]) / np.sqrt(2.0)
UP = np.array([0.0, 0.0, 1.0])


@pytest.fixture()
def exact_parabola_points() -> np.ndarray:
    """Noise-free ``w = 0.05·u² + 1`` on a vertical plane tilted 45° about Z.

    ``u`` is sampled symmetrically so the principal axes of the cloud are
    exactly the generating ``u`` and ``w`` axes.
    """
    u = np.linspace(-5.0, 5.0, 11)
    return make_parabola_points(
        np.array([2.0, -1.0, 3.0]), TILTED_U, UP, u, a=0.05, c=1.0,
    )


@pytest.fixture()
def noisy_trajectory_points() -> np.ndarray:
    """200 points of a shallow arc with 1 cm of isotropic noise."""
    rng = np.random.default_rng(42)
    u = rng.uniform(-10.0, 10.0, size=200)
    return make_parabola_points(
        np.array([0.5, 4.0, -2.0]), TILTED_U, UP, u, a=0.02, noise=0.01, rng=rng,
    )


@pytest.fixture()
def scenario_points() -> np.ndarray:
    """Five coplanar samples with ``z ≈ x²`` along ``y = 2x``."""
    return np.array(
        [
            [0.0, 0.0, 0.0],
            [1.0, 2.0, 1.5],
            [2.0, 4.0, 4.2],
            [3.0, 6.0, 8.9],
            [4.0, 8.0, 16.1],
        ]
    )


@pytest.fixture()
def seed_normal_plane_points() -> np.ndarray:
    """``w = 0.3·u²`` on a plane through the origin with normal ∥ (1, 1, 1)."""
    e1 = np.array([1.0, -1.0, 0.0]) / np.sqrt(2.0)
    e2 = np.array([1.0, 1.0, -2.0]) / np.sqrt(6.0)
    u = np.arange(-5.0, 8.0)
    return make_parabola_points(np.zeros(3), e1, e2, u, a=0.3)
