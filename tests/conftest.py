"""Shared test fixtures: synthetic raster builders.

Shapes are rasterised on pixel centres with numpy / skimage so every test
image is exact and reproducible. Vertex coordinates sit on half-pixels so no
pixel centre lands on an edge.
"""

from __future__ import annotations

import math

import numpy as np
import pytest
from skimage.measure import points_in_poly

from shapesight.engine.types import RGBAImage
from shapesight.imaging import rgba_from_array

WHITE = 255
BLACK = 0


def pixel_centres(width: int, height: int) -> np.ndarray:
    """(height*width, 2) array of (x, y) in row-major order."""
    ys, xs = np.mgrid[0:height, 0:width]
    return np.column_stack([xs.ravel(), ys.ravel()]).astype(np.float64)


def polygon_mask(vertices: list[tuple[float, float]], width: int, height: int) -> np.ndarray:
    inside = points_in_poly(pixel_centres(width, height), np.asarray(vertices, dtype=np.float64))
    return inside.reshape(height, width)


def disk_mask(cx: float, cy: float, r: float, width: int, height: int) -> np.ndarray:
    ys, xs = np.mgrid[0:height, 0:width]
    return (xs - cx) ** 2 + (ys - cy) ** 2 < r**2


def rect_mask(x0: int, y0: int, x1: int, y1: int, width: int, height: int) -> np.ndarray:
    """Inclusive pixel rectangle."""
    mask = np.zeros((height, width), dtype=bool)
    mask[y0 : y1 + 1, x0 : x1 + 1] = True
    return mask


def star_vertices(
    cx: float, cy: float, outer: float, inner: float, points: int = 5
) -> list[tuple[float, float]]:
    """Star with one tip pointing up (image coordinates, y down)."""
    verts = []
    for i in range(points * 2):
        r = outer if i % 2 == 0 else inner
        theta = -math.pi / 2 + i * math.pi / points
        verts.append((cx + r * math.cos(theta), cy + r * math.sin(theta)))
    return verts


def regular_polygon(cx: float, cy: float, radius: float, sides: int) -> list[tuple[float, float]]:
    """Regular polygon with one vertex pointing up."""
    verts = []
    for i in range(sides):
        theta = -math.pi / 2 + 2 * math.pi * i / sides
        verts.append((cx + radius * math.cos(theta), cy + radius * math.sin(theta)))
    return verts


# Near-equilateral, side 60, height 52
UP_TRIANGLE = [(20.5, 76.5), (80.5, 76.5), (50.5, 24.5)]
DOWN_TRIANGLE = [(20.5, 24.5), (80.5, 24.5), (50.5, 76.5)]

# Square rotated 45 degrees; no pixel centre lies on an edge
DIAMOND = [(50.5, 20.0), (80.5, 50.0), (50.5, 80.0), (20.5, 50.0)]


def paint(
    mask: np.ndarray,
    fg: int = BLACK,
    bg: int = WHITE,
) -> RGBAImage:
    """Two-level opaque gray image: fg where mask, bg elsewhere."""
    gray = np.where(mask, fg, bg).astype(np.uint8)
    return rgba_from_array(np.dstack([gray, gray, gray]))


def paint_noisy(
    mask: np.ndarray,
    fg_range: tuple[int, int],
    bg_range: tuple[int, int],
    seed: int = 0,
) -> RGBAImage:
    """Uniform noise inside each class; ranges are inclusive."""
    rng = np.random.default_rng(seed)
    fg = rng.integers(fg_range[0], fg_range[1] + 1, size=mask.shape)
    bg = rng.integers(bg_range[0], bg_range[1] + 1, size=mask.shape)
    gray = np.where(mask, fg, bg).astype(np.uint8)
    return rgba_from_array(np.dstack([gray, gray, gray]))


def blank(width: int = 100, height: int = 100) -> RGBAImage:
    return paint(np.zeros((height, width), dtype=bool))


@pytest.fixture
def circle_image() -> RGBAImage:
    return paint(disk_mask(50, 50, 30, 100, 100))


@pytest.fixture
def triangle_image() -> RGBAImage:
    return paint(polygon_mask(DOWN_TRIANGLE, 100, 100))


@pytest.fixture
def up_triangle_image() -> RGBAImage:
    return paint(polygon_mask(UP_TRIANGLE, 100, 100))


@pytest.fixture
def pentagon_image() -> RGBAImage:
    return paint(polygon_mask(regular_polygon(50, 52, 35, 5), 100, 100))


@pytest.fixture
def diamond_image() -> RGBAImage:
    return paint(polygon_mask(DIAMOND, 100, 100))


@pytest.fixture
def square_image() -> RGBAImage:
    return paint(rect_mask(30, 30, 69, 69, 100, 100))


@pytest.fixture
def star_image() -> RGBAImage:
    return paint(polygon_mask(star_vertices(50, 50, 40, 16), 100, 100))


@pytest.fixture
def blank_image() -> RGBAImage:
    return blank()


@pytest.fixture
def two_shape_image() -> RGBAImage:
    mask = disk_mask(30, 50, 18, 100, 100) | rect_mask(60, 40, 79, 59, 100, 100)
    return paint(mask)
