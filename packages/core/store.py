"""In-memory store of user curves and their fits.

The store is owned by the caller (the API process, a test, a notebook); the
fitting engine itself keeps no state between calls.
"""

from __future__ import annotations

import logging
import uuid

import numpy as np

from packages.core.types import CurveRecord, Vec3
from packages.pipeline.fit import fit_spatial_parabola

logger = logging.getLogger(__name__)

DEFAULT_COLOR = "#38bdf8"


def _new_id() -> str:
    return uuid.uuid4().hex[:7]


def _to_vec3_list(points: np.ndarray) -> list[Vec3]:
    return [Vec3(x=float(p[0]), y=float(p[1]), z=float(p[2])) for p in points]


class CurveStore:
    """Curves keyed by id, in insertion order."""

    def __init__(self) -> None:
        self._curves: dict[str, CurveRecord] = {}

    def __len__(self) -> int:
        return len(self._curves)

    def __contains__(self, curve_id: str) -> bool:
        return curve_id in self._curves

    def list(self) -> list[CurveRecord]:
        return list(self._curves.values())

    def get(self, curve_id: str) -> CurveRecord:
        """Return the curve with *curve_id*; ``KeyError`` if unknown."""
        try:
            return self._curves[curve_id]
        except KeyError:
            raise KeyError(f"Unknown curve '{curve_id}'") from None

    def add(
        self,
        points,
        *,
        name: str | None = None,
        color: str = DEFAULT_COLOR,
        thickness: float = 2.0,
    ) -> CurveRecord:
        """Fit *points* and store them as a new curve.

        A failed fit propagates and nothing is stored.
        """
        pts = np.array(points, dtype=np.float64)
        fit = fit_spatial_parabola(pts)
        record = CurveRecord(
            id=_new_id(),
            name=name or f"Curve {len(self._curves) + 1}",
            points=_to_vec3_list(pts),
            color=color,
            thickness=thickness,
            fit=fit,
        )
        self._curves[record.id] = record
        logger.info("Added curve %s (%r, %d points)", record.id, record.name, len(pts))
        return record

    def update_points(self, curve_id: str, points) -> CurveRecord:
        """Replace a curve's points and re-fit.

        If the new fit fails the stored record, including its previous fit,
        is left unchanged.
        """
        current = self.get(curve_id)
        pts = np.array(points, dtype=np.float64)
        fit = fit_spatial_parabola(pts)
        updated = current.model_copy(update={"points": _to_vec3_list(pts), "fit": fit})
        self._curves[curve_id] = updated
        logger.info("Re-fitted curve %s with %d points", curve_id, len(pts))
        return updated

    def toggle_visibility(self, curve_id: str) -> CurveRecord:
        current = self.get(curve_id)
        updated = current.model_copy(update={"visible": not current.visible})
        self._curves[curve_id] = updated
        return updated

    def remove(self, curve_id: str) -> CurveRecord:
        removed = self.get(curve_id)
        del self._curves[curve_id]
        logger.info("Removed curve %s, %d remaining", curve_id, len(self._curves))
        return removed

    def clear(self) -> None:
        self._curves.clear()
