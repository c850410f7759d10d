"""Leaf-node geometry helpers. No engine imports.

All functions take Nx2 arrays of (x, y) and never raise on degenerate input:
empty or collinear point sets produce zero-valued sentinels instead.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def area(self) -> float:
        return self.width * self.height


def cross(o: tuple[float, float], a: tuple[float, float], b: tuple[float, float]) -> float:
    """Z component of (a - o) x (b - o). Positive = left turn."""
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def signed_area(points: NDArray[np.float64]) -> float:
    """Shoelace formula over the cyclically closed polygon. Positive = CCW."""
    if len(points) < 3:
        return 0.0
    x = points[:, 0].astype(np.float64)
    y = points[:, 1].astype(np.float64)
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(points: NDArray[np.float64]) -> float:
    return abs(signed_area(points))


def perimeter(points: NDArray[np.float64]) -> float:
    """Sum of edge lengths, closing edge included."""
    if len(points) < 2:
        return 0.0
    pts = points.astype(np.float64)
    diffs = np.roll(pts, -1, axis=0) - pts
    return float(np.sum(np.hypot(diffs[:, 0], diffs[:, 1])))


def circularity(area: float, perim: float) -> float:
    """Isoperimetric ratio 4πA/P², clamped to 1. Zero perimeter → 0."""
    if perim <= 0:
        return 0.0
    return min(1.0, 4 * math.pi * area / (perim**2))


def bounding_box(points: NDArray[np.float64]) -> BoundingBox:
    """Min/max extents. Width and height are max - min, not pixel spans."""
    if len(points) == 0:
        return BoundingBox(0.0, 0.0, 0.0, 0.0)
    xmin = float(np.min(points[:, 0]))
    ymin = float(np.min(points[:, 1]))
    xmax = float(np.max(points[:, 0]))
    ymax = float(np.max(points[:, 1]))
    return BoundingBox(xmin, ymin, xmax - xmin, ymax - ymin)


def centroid(points: NDArray[np.float64]) -> tuple[float, float]:
    """Arithmetic mean of the point set."""
    if len(points) == 0:
        return (0.0, 0.0)
    return (float(np.mean(points[:, 0])), float(np.mean(points[:, 1])))


def convex_hull(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Graham scan. Returns a strictly convex CCW polygon.

    Pivot is the point with the largest y (leftmost on ties). The remaining
    points are swept in order of polar angle around it, nearest first on equal
    angles; any non-left turn pops the trailing hull vertex, which also drops
    collinear points. The result starts at the first swept vertex and ends
    with the pivot. Fewer than 3 points are returned unchanged.
    """
    if len(points) < 3:
        return points

    pts = np.unique(np.asarray(points, dtype=np.float64), axis=0)
    if len(pts) < 3:
        return pts

    # lexsort keys run last-to-first: max y, then min x
    pivot_idx = int(np.lexsort((pts[:, 0], -pts[:, 1]))[0])
    px, py = float(pts[pivot_idx, 0]), float(pts[pivot_idx, 1])
    rest = np.delete(pts, pivot_idx, axis=0)

    dx = rest[:, 0] - px
    dy = rest[:, 1] - py
    angles = np.arctan2(dy, dx)
    dists = np.hypot(dx, dy)
    order = np.lexsort((dists, angles))

    hull: list[tuple[float, float]] = [(px, py)]
    for x, y in rest[order].tolist():
        while len(hull) > 1 and cross(hull[-2], hull[-1], (x, y)) <= 0:
            hull.pop()
        hull.append((x, y))

    # Pivot last: Douglas-Peucker keeps both endpoints
    return np.roll(np.array(hull, dtype=np.float64), -1, axis=0)
