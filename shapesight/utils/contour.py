"""Contour simplification via Ramer-Douglas-Peucker."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def perpendicular_distances(
    points: NDArray[np.float64],
    start: NDArray[np.float64],
    end: NDArray[np.float64],
) -> NDArray[np.float64]:
    """Distance of each point from the infinite line through start and end.

    A zero-length line degrades to plain point-to-point distance from start.
    """
    pts = np.asarray(points, dtype=np.float64)
    ax, ay = float(start[0]), float(start[1])
    bx, by = float(end[0]), float(end[1])
    dx = bx - ax
    dy = by - ay
    norm = math.hypot(dx, dy)

    if norm == 0:
        return np.hypot(pts[:, 0] - ax, pts[:, 1] - ay)

    return np.abs(dy * pts[:, 0] - dx * pts[:, 1] + bx * ay - by * ax) / norm


def perpendicular_distance(
    point: tuple[float, float],
    start: tuple[float, float],
    end: tuple[float, float],
) -> float:
    return float(
        perpendicular_distances(np.array([point], dtype=np.float64), np.asarray(start), np.asarray(end))[0]
    )


def rdp_simplify(
    points: NDArray[np.float64],
    epsilon: float,
) -> NDArray[np.float64]:
    """Ramer-Douglas-Peucker line simplification.

    Splits at the interior point farthest from the chord between the first and
    last points while that distance exceeds epsilon; otherwise the run collapses
    to its two endpoints. Fewer than 3 points are returned unchanged.
    """
    if len(points) < 3:
        return points

    start = points[0]
    end = points[-1]

    distances = perpendicular_distances(points[1:-1], start, end)
    max_idx = int(np.argmax(distances)) + 1
    max_dist = float(distances[max_idx - 1])

    if max_dist > epsilon:
        left = rdp_simplify(points[: max_idx + 1], epsilon)
        right = rdp_simplify(points[max_idx:], epsilon)
        return np.vstack([left[:-1], right])
    return points[[0, -1]]
