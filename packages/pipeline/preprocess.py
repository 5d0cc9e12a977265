"""Preprocessing helpers: bounds of the input cloud."""

from __future__ import annotations

import numpy as np

from packages.core.types import BBox, Vec3


def compute_bounds(points: np.ndarray) -> BBox:
    """Return the axis-aligned bounding box of an (N, 3) point array."""
    mins = points.min(axis=0)
    maxs = points.max(axis=0)
    return BBox(
        min=Vec3(x=float(mins[0]), y=float(mins[1]), z=float(mins[2])),
        max=Vec3(x=float(maxs[0]), y=float(maxs[1]), z=float(maxs[2])),
    )
