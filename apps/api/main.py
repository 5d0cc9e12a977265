"""FastAPI application for the curve-fitting service.

Fits parabolas to posted trajectory points and keeps a store of named
curves, each with its most recent successful fit, for the viewer.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np
from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel as PydanticBaseModel

from packages.core.errors import FitError
from packages.core.store import DEFAULT_COLOR, CurveStore
from packages.core.types import CurveRecord, FitResult
from packages.pipeline.fit import fit_spatial_parabola
from packages.pipeline.loader import parse_points_text
from packages.pipeline.reconstruct import DEFAULT_STEPS, sample_curve

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%H:%M:%S'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Curve Fitting API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # permissive for local development; tighten for production
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── In-memory store (single-process MVP) ─────────────────────────────
store = CurveStore()


class PointsPayload(PydanticBaseModel):
    """Points given either as ``[[x, y, z], ...]`` or as delimited text."""
    points: Optional[list[list[float]]] = None
    text: Optional[str] = None


class FitRequest(PointsPayload):
    steps: int = DEFAULT_STEPS


class FitResponse(PydanticBaseModel):
    fit: FitResult
    samples: list[list[float]]


class CurveRequest(PointsPayload):
    name: Optional[str] = None
    color: str = DEFAULT_COLOR
    thickness: float = 2.0


def _points_from(payload: PointsPayload) -> np.ndarray:
    """Resolve a payload to an (N, 3) array, or fail with 400."""
    if payload.points is not None:
        if any(len(p) != 3 for p in payload.points):
            raise HTTPException(400, "Each point must have exactly 3 coordinates")
        return np.array(payload.points, dtype=np.float64).reshape(-1, 3)
    if payload.text is not None:
        pts = parse_points_text(payload.text)
        if len(pts) == 0:
            raise HTTPException(400, "No valid x, y, z lines found in text")
        return pts
    raise HTTPException(400, "Provide either 'points' or 'text'")


def _get_curve(curve_id: str) -> CurveRecord:
    try:
        return store.get(curve_id)
    except KeyError:
        raise HTTPException(404, f"Unknown curve '{curve_id}'")


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post("/fit", response_model=FitResponse)
def fit_points(req: FitRequest):
    """Fit a parabola without storing anything; returns the sampled curve too."""
    pts = _points_from(req)
    logger.info("Fit requested for %d points", len(pts))
    try:
        fit = fit_spatial_parabola(pts)
        samples = sample_curve(fit, req.steps)
    except FitError as e:
        raise HTTPException(422, str(e))
    except ValueError as e:
        raise HTTPException(400, str(e))
    return FitResponse(fit=fit, samples=samples.tolist())


@app.get("/curves", response_model=list[CurveRecord])
def list_curves():
    return store.list()


@app.post("/curves", response_model=CurveRecord)
def add_curve(req: CurveRequest):
    """Fit and store a new curve."""
    pts = _points_from(req)
    try:
        record = store.add(pts, name=req.name, color=req.color, thickness=req.thickness)
    except FitError as e:
        logger.warning("Rejected curve %r: %s", req.name, e)
        raise HTTPException(422, str(e))
    return record


@app.get("/curves/{curve_id}", response_model=CurveRecord)
def get_curve(curve_id: str):
    return _get_curve(curve_id)


@app.delete("/curves/{curve_id}")
def delete_curve(curve_id: str):
    _get_curve(curve_id)
    store.remove(curve_id)
    return {"deleted": curve_id, "remaining": len(store)}


@app.post("/curves/{curve_id}/toggle", response_model=CurveRecord)
def toggle_curve(curve_id: str):
    _get_curve(curve_id)
    return store.toggle_visibility(curve_id)


@app.put("/curves/{curve_id}/points", response_model=CurveRecord)
def update_curve_points(curve_id: str, req: PointsPayload):
    """Replace a curve's points; a failed re-fit keeps the previous curve."""
    _get_curve(curve_id)
    pts = _points_from(req)
    try:
        return store.update_points(curve_id, pts)
    except FitError as e:
        raise HTTPException(422, str(e))


@app.get("/curves/{curve_id}/samples")
def curve_samples(curve_id: str, steps: int = Query(DEFAULT_STEPS, ge=1)):
    """Return the fitted curve as a polyline of ``steps + 1`` points."""
    record = _get_curve(curve_id)
    samples = sample_curve(record.fit, steps)
    return {"id": curve_id, "steps": steps, "points": samples.tolist()}
