"""Uniform-grid proximity index over 3D points."""

from __future__ import annotations

import logging
from typing import Callable

import numpy as np

logger = logging.getLogger(__name__)

_EMPTY = np.zeros(0, dtype=np.int64)


class SpatialHash:
    """Bucket points into cubic cells for radius queries.

    Parameters
    ----------
    points : np.ndarray
        (n, 3) coordinates. Indices returned by queries refer to rows.
    cell_size : float
        Cell edge length. Queries with a radius up to ``cell_size`` inspect
        the 3x3x3 cells around the query point; larger radii widen the
        neighbourhood so no point within range is ever missed.
    """

    def __init__(self, points: np.ndarray, cell_size: float) -> None:
        pts = np.asarray(points, dtype=float).reshape(-1, 3)
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.points = pts
        self.cell_size = float(cell_size)
        self.origin = pts.min(axis=0) if len(pts) else np.zeros(3)

        keys = np.floor((pts - self.origin) / self.cell_size).astype(np.int64)
        buckets: dict[tuple[int, int, int], list[int]] = {}
        for i, (kx, ky, kz) in enumerate(keys.tolist()):
            buckets.setdefault((kx, ky, kz), []).append(i)
        self._cells = {k: np.array(v, dtype=np.int64) for k, v in buckets.items()}
        logger.debug("SpatialHash: %d points in %d cells (cell=%.2f)", len(pts), len(self._cells), self.cell_size)

    def __len__(self) -> int:
        return len(self.points)

    def within(self, x: float, y: float, z: float, radius: float) -> tuple[np.ndarray, np.ndarray]:
        """Indices (ascending) and squared distances of points within ``radius``."""
        if not self._cells:
            return _EMPTY, np.zeros(0)
        query = np.array([x, y, z], dtype=float)
        cx, cy, cz = np.floor((query - self.origin) / self.cell_size).astype(np.int64).tolist()
        reach = max(1, int(np.ceil(radius / self.cell_size)))

        found = []
        for dx in range(-reach, reach + 1):
            for dy in range(-reach, reach + 1):
                for dz in range(-reach, reach + 1):
                    arr = self._cells.get((cx + dx, cy + dy, cz + dz))
                    if arr is not None:
                        found.append(arr)
        if not found:
            return _EMPTY, np.zeros(0)

        idx = np.sort(np.concatenate(found))
        d = self.points[idx] - query
        dist_sq = np.einsum("ij,ij->i", d, d)
        mask = dist_sq <= radius * radius
        return idx[mask], dist_sq[mask]

    def each_within(
        self,
        x: float,
        y: float,
        z: float,
        radius: float,
        callback: Callable[[int, float], object],
    ) -> None:
        """Call ``callback(j, dist_sq)`` for every point within ``radius``."""
        idx, dist_sq = self.within(x, y, z, radius)
        for j, d in zip(idx.tolist(), dist_sq.tolist()):
            callback(j, d)
