"""Pydantic models for fit results and curve-fitting artefacts.

A :class:`FitResult` is the sole output of the fitting engine: the quadratic
coefficients together with the local frame (centroid + two in-plane basis
vectors) needed to rebuild the fitted curve in world space.  The remaining
models wrap it for the file pipeline and the curve store.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── tiny helpers ──────────────────────────────────────────────────────
class Vec3(BaseModel):
    """A 3-component vector (x, y, z)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    z: float


class BBox(BaseModel):
    """Axis-aligned bounding box."""

    min: Vec3
    max: Vec3


# ── local frame / fit types ──────────────────────────────────────────
class PlaneBasis(BaseModel):
    """Best-fit plane of a point cloud, as an origin plus two in-plane axes."""

    model_config = ConfigDict(frozen=True)

    centroid: Vec3
    basis_u: Vec3 = Field(description="Direction of maximal variance")
    basis_w: Vec3 = Field(description="Direction of second-greatest variance")
    degenerate: bool = Field(
        default=False,
        description="True when a basis vector collapsed to zero (coincident or collinear cloud)",
    )


class FitResult(BaseModel):
    """Quadratic ``w = a·u² + b·u + c`` in the local frame of a fitted plane."""

    model_config = ConfigDict(frozen=True)

    a: float
    b: float
    c: float
    centroid: Vec3
    basis_u: Vec3
    basis_w: Vec3
    u_range: tuple[float, float] = Field(description="(min_u, max_u) of the projected input")
    point_count: int = 0
    degenerate: bool = Field(
        default=False,
        description="True when the plane basis collapsed (collinear or coincident input)",
    )


# ── file pipeline output ─────────────────────────────────────────────
class FitReport(BaseModel):
    """Top-level report produced by the file pipeline."""

    version: str = "0.1.0"
    created_at: str = Field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )
    source_file: str = ""
    point_count: int = 0
    bounds: Optional[BBox] = None
    fit: FitResult
    samples: list[Vec3] = Field(default_factory=list)


# ── curve store records ──────────────────────────────────────────────
class CurveRecord(BaseModel):
    """One user curve: the raw points plus its most recent successful fit."""

    id: str
    name: str
    points: list[Vec3]
    color: str = "#38bdf8"
    visible: bool = True
    thickness: float = 2.0
    fit: FitResult
