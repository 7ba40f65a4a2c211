"""Pure geometric calculations on 3D coordinates.

All functions are stateless and operate on numpy arrays.
"""

from __future__ import annotations

import numpy as np

_EPS = 1e-10


def unit(v: np.ndarray) -> np.ndarray | None:
    """Return unit vector, or None for (near) zero-length input."""
    n = np.linalg.norm(v)
    return v / n if n > _EPS else None


def angle_between(u: np.ndarray, v: np.ndarray) -> float | None:
    """Angle between two vectors in degrees, None if either is degenerate."""
    nu = np.linalg.norm(u)
    nv = np.linalg.norm(v)
    if nu < _EPS or nv < _EPS:
        return None
    c = np.clip(np.dot(u, v) / (nu * nv), -1.0, 1.0)
    return float(np.degrees(np.arccos(c)))


def angle(pos1: np.ndarray, pos2: np.ndarray, pos3: np.ndarray) -> float | None:
    """Angle at pos2 formed by pos1-pos2-pos3 (in degrees)."""
    return angle_between(np.asarray(pos1) - np.asarray(pos2), np.asarray(pos3) - np.asarray(pos2))


def plane_normal(points: np.ndarray) -> np.ndarray | None:
    """Best-fit plane normal via SVD.

    Returns None for fewer than three points or collinear input.
    """
    pts = np.asarray(points, dtype=float)
    if len(pts) < 3:
        return None
    centered = pts - pts.mean(axis=0)
    _, s, vh = np.linalg.svd(centered, full_matrices=False)
    # Second singular value vanishes when all points sit on a line
    if s[1] < 1e-6:
        return None
    return unit(vh[-1])


def max_plane_deviation(points: np.ndarray) -> float:
    """Largest distance (Angstrom) of any point from the best-fit plane."""
    pts = np.asarray(points, dtype=float)
    if len(pts) < 4:
        return 0.0
    centered = pts - pts.mean(axis=0)
    _, _, vh = np.linalg.svd(centered, full_matrices=False)
    return float(np.abs(centered @ vh[-1]).max())


def lateral_offset(point: np.ndarray, origin: np.ndarray, normal: np.ndarray) -> float:
    """Length of (point - origin) projected into the plane with the given normal."""
    v = np.asarray(point) - np.asarray(origin)
    in_plane = v - np.dot(v, normal) * normal
    return float(np.linalg.norm(in_plane))


def point_segment_distance(point: np.ndarray, start: np.ndarray, end: np.ndarray) -> tuple[float, float]:
    """Distance from point to segment start-end.

    Returns
    -------
    distance : float
        Distance to the closest point on the segment.
    t : float
        Position of the orthogonal projection along the segment
        (0 at start, 1 at end, unclamped).
    """
    seg = np.asarray(end) - np.asarray(start)
    rel = np.asarray(point) - np.asarray(start)
    length_sq = float(np.dot(seg, seg))
    if length_sq < _EPS:
        return float(np.linalg.norm(rel)), 0.0
    t = float(np.dot(rel, seg) / length_sq)
    closest = np.asarray(start) + min(max(t, 0.0), 1.0) * seg
    return float(np.linalg.norm(np.asarray(point) - closest)), t
