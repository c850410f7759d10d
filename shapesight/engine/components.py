"""Connected-component extraction and size filtering on 0/255 masks."""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.binarize import FOREGROUND
from shapesight.engine.types import Blob
from shapesight.utils.geometry import bounding_box

logger = logging.getLogger(__name__)

# 4-connected neighbourhood, visited in this order
_NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def find_blobs(mask: NDArray[np.uint8], min_points: int = 10) -> list[Blob]:
    """Label 4-connected foreground regions, one Nx2 (x, y) array per region.

    Seeds are taken in row-major order from the interior only (the outermost
    rows and columns never start a fill), but a fill may grow onto them.
    Regions with fewer than ``min_points`` pixels are dropped.
    """
    height, width = mask.shape
    blobs: list[Blob] = []
    if height < 3 or width < 3:
        return blobs

    # Plain lists index far faster than numpy scalars inside the fill loop
    foreground = (mask == FOREGROUND).tolist()
    visited = [bytearray(width) for _ in range(height)]

    seeds = np.argwhere(mask[1:-1, 1:-1] == FOREGROUND) + 1
    for y, x in seeds.tolist():
        if visited[y][x]:
            continue
        points = _flood_fill(foreground, visited, x, y, width, height)
        if len(points) >= min_points:
            blobs.append(np.array(points, dtype=np.int64))

    return blobs


def _flood_fill(
    foreground: list[list[bool]],
    visited: list[bytearray],
    start_x: int,
    start_y: int,
    width: int,
    height: int,
) -> list[tuple[int, int]]:
    """Stack-based flood fill; depth is bounded by the heap, not the call stack."""
    points: list[tuple[int, int]] = []
    stack = [(start_x, start_y)]

    while stack:
        x, y = stack.pop()
        if visited[y][x] or not foreground[y][x]:
            continue
        visited[y][x] = 1
        points.append((x, y))

        for dx, dy in _NEIGHBORS:
            nx, ny = x + dx, y + dy
            if 0 <= nx < width and 0 <= ny < height and foreground[ny][nx] and not visited[ny][nx]:
                stack.append((nx, ny))

    return points


def filter_blobs(
    blobs: list[Blob],
    width: int,
    height: int,
    min_area: float = 50.0,
    max_fraction: float = 0.9,
) -> list[Blob]:
    """Keep blobs whose bounding-box area lies in [min_area, max_fraction * image area].

    The upper bound removes components that are really the background.
    """
    max_area = width * height * max_fraction
    kept: list[Blob] = []
    for blob in blobs:
        area = bounding_box(blob).area
        if min_area <= area <= max_area:
            kept.append(blob)
        else:
            logger.debug("Dropped blob of %d px (bbox area %.0f)", len(blob), area)
    return kept
