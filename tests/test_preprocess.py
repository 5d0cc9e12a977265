"""Tests for preprocessing utilities."""

from __future__ import annotations

import numpy as np

from packages.pipeline.preprocess import compute_bounds


class TestComputeBounds:
    def test_simple(self):
        pts = np.array([[0, 0, 0], [1, 2, 3], [-1, -2, -3]], dtype=np.float64)
        bbox = compute_bounds(pts)
        assert bbox.min.x == -1.0
        assert bbox.max.z == 3.0

    def test_single_point(self):
        bbox = compute_bounds(np.array([[0.5, -1.0, 2.0]]))
        assert bbox.min == bbox.max
