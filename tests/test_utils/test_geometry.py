"""Tests for the geometry toolkit."""

from __future__ import annotations

import math

import numpy as np

from shapesight.utils.geometry import (
    bounding_box,
    centroid,
    circularity,
    convex_hull,
    cross,
    perimeter,
    polygon_area,
    signed_area,
)


def _grid(x0: int, y0: int, x1: int, y1: int) -> np.ndarray:
    ys, xs = np.mgrid[y0 : y1 + 1, x0 : x1 + 1]
    return np.column_stack([xs.ravel(), ys.ravel()])


class TestConvexHull:
    def test_square_corners_ccw(self):
        corners = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=np.float64)
        hull = convex_hull(corners)
        # Swept CCW by polar angle around the max-y, min-x pivot, which comes last
        assert hull.tolist() == [[0.0, 0.0], [10.0, 0.0], [10.0, 10.0], [0.0, 10.0]]
        assert signed_area(hull) > 0

    def test_pivot_is_last_vertex(self):
        pts = np.array([[21, 76], [80, 76], [50, 26], [51, 26], [40, 60]], dtype=np.float64)
        hull = convex_hull(pts)
        assert hull[-1].tolist() == [21.0, 76.0]
        assert hull[0].tolist() != [21.0, 76.0]

    def test_every_point_inside_hull(self):
        rng = np.random.default_rng(7)
        pts = rng.uniform(0, 100, size=(300, 2))
        hull = convex_hull(pts)
        n = len(hull)
        for i in range(n):
            o = tuple(hull[i])
            a = tuple(hull[(i + 1) % n])
            for p in pts:
                assert cross(o, a, tuple(p)) >= -1e-9

    def test_strictly_convex_drops_collinear(self):
        hull = convex_hull(_grid(0, 0, 40, 20))
        assert len(hull) == 4
        n = len(hull)
        for i in range(n):
            assert cross(tuple(hull[i]), tuple(hull[(i + 1) % n]), tuple(hull[(i + 2) % n])) > 0

    def test_degenerate_returned_unchanged(self):
        pts = np.array([[1, 2], [3, 4]])
        assert convex_hull(pts) is pts

    def test_duplicates_ignored(self):
        pts = np.array([[0, 0], [0, 0], [4, 0], [4, 0], [0, 4], [4, 4]])
        hull = convex_hull(pts)
        assert len(hull) == 4


class TestArea:
    def test_rectangle_hull_area(self):
        hull = convex_hull(_grid(0, 0, 40, 20))
        assert math.isclose(polygon_area(hull), 800.0)

    def test_orientation_does_not_change_magnitude(self):
        ccw = np.array([[0, 0], [4, 0], [4, 3], [0, 3]], dtype=np.float64)
        cw = ccw[::-1]
        assert signed_area(ccw) == -signed_area(cw)
        assert polygon_area(cw) == 12.0

    def test_degenerate_area_is_zero(self):
        assert polygon_area(np.empty((0, 2))) == 0.0
        assert polygon_area(np.array([[0.0, 0.0], [5.0, 5.0]])) == 0.0


class TestPerimeterAndCircularity:
    def test_perimeter_closes_polygon(self):
        square = np.array([[0, 0], [10, 0], [10, 10], [0, 10]], dtype=np.float64)
        assert perimeter(square) == 40.0

    def test_single_point_perimeter(self):
        assert perimeter(np.array([[3.0, 3.0]])) == 0.0

    def test_square_circularity(self):
        assert math.isclose(circularity(100.0, 40.0), math.pi / 4)

    def test_circularity_clamped(self):
        # Rounding can push a near-circle slightly above 1
        assert circularity(math.pi * 100 * 1.01, 2 * math.pi * 10) == 1.0

    def test_zero_perimeter(self):
        assert circularity(50.0, 0.0) == 0.0


class TestBoxAndCentroid:
    def test_bounding_box_extents(self):
        pts = np.array([[3, 7], [10, 2], [5, 12]])
        box = bounding_box(pts)
        assert (box.x, box.y, box.width, box.height) == (3.0, 2.0, 7.0, 10.0)
        assert box.area == 70.0

    def test_empty_inputs(self):
        empty = np.empty((0, 2))
        assert bounding_box(empty).area == 0.0
        assert centroid(empty) == (0.0, 0.0)

    def test_centroid_is_mean(self):
        pts = np.array([[0, 0], [10, 0], [10, 10], [0, 10]])
        assert centroid(pts) == (5.0, 5.0)
