"""Load trajectory points into a NumPy (N, 3) array.

Supported inputs
----------------
* **Text** (``.csv``, ``.txt``, ``.xyz``) – one point per line, coordinates
  separated by commas and/or whitespace.  Lines that do not start with three
  finite numbers are skipped; ``#`` starts a comment line.
* **PLY** – vertex positions via the ``plyfile`` library.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path

import numpy as np
from plyfile import PlyData

logger = logging.getLogger(__name__)

TEXT_SUFFIXES = (".csv", ".txt", ".xyz")

_DELIMITERS = re.compile(r"[,\s]+")


def _parse_line(line: str) -> tuple[float, float, float] | None:
    tokens = [t for t in _DELIMITERS.split(line.strip()) if t]
    if len(tokens) < 3:
        return None
    try:
        coords = tuple(float(t) for t in tokens[:3])
    except ValueError:
        return None
    if not all(math.isfinite(c) for c in coords):
        return None
    return coords


def parse_points_text(text: str) -> np.ndarray:
    """Parse free-form coordinate text into an (N, 3) float64 array.

    Returns an empty ``(0, 3)`` array when nothing parses.
    """
    points: list[tuple[float, float, float]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        coords = _parse_line(stripped)
        if coords is None:
            logger.debug("Skipping line %d: %r", lineno, stripped)
            continue
        points.append(coords)
    return np.array(points, dtype=np.float64).reshape(-1, 3)


def load_text(path: str | Path) -> dict:
    """Read a delimited text file.

    Returns a dict with 'positions': (N, 3) float64 array.
    """
    positions = parse_points_text(Path(path).read_text())
    logger.info("Text file loaded: %d points", len(positions))
    return {"positions": positions}


def load_ply(path: str | Path) -> dict:
    """Read a binary or ASCII PLY file and return its vertex positions."""
    ply = PlyData.read(str(path))
    vertex = ply["vertex"]
    xs = np.asarray(vertex["x"], dtype=np.float64)
    ys = np.asarray(vertex["y"], dtype=np.float64)
    zs = np.asarray(vertex["z"], dtype=np.float64)
    positions = np.column_stack((xs, ys, zs))
    logger.info("PLY file loaded: %d vertices", len(positions))
    return {"positions": positions}


def load_point_cloud(path: str | Path) -> dict:
    """Auto-detect format and return a dict with 'positions'.

    Raises ``ValueError`` for unsupported extensions.
    """
    p = Path(path)
    ext = p.suffix.lower()
    if ext in TEXT_SUFFIXES:
        return load_text(p)
    if ext == ".ply":
        return load_ply(p)
    raise ValueError(
        f"Unsupported point file format '{ext}'. Supported: {', '.join(TEXT_SUFFIXES)}, .ply"
    )
