"""Tests for connected-component extraction and the blob size filter."""

from __future__ import annotations

import numpy as np

from shapesight.engine.components import filter_blobs, find_blobs


def _mask(size: int = 20) -> np.ndarray:
    return np.zeros((size, size), dtype=np.uint8)


def _points(blob: np.ndarray) -> set[tuple[int, int]]:
    return {(int(x), int(y)) for x, y in blob}


def test_two_separate_squares():
    mask = _mask()
    mask[2:7, 2:7] = 255
    mask[10:15, 10:15] = 255
    blobs = find_blobs(mask)
    assert len(blobs) == 2
    assert all(len(b) == 25 for b in blobs)
    assert not _points(blobs[0]) & _points(blobs[1])
    # Row-major seeding: the upper-left square comes first
    assert (2, 2) in _points(blobs[0])


def test_points_are_xy():
    mask = _mask()
    mask[3:5, 5:10] = 255
    (blob,) = find_blobs(mask)
    assert blob[:, 0].min() == 5 and blob[:, 0].max() == 9
    assert blob[:, 1].min() == 3 and blob[:, 1].max() == 4


def test_diagonal_pixels_are_not_connected():
    mask = _mask()
    mask[2:7, 2:7] = 255
    mask[7:12, 7:12] = 255
    assert len(find_blobs(mask)) == 2


def test_border_only_foreground_never_seeds():
    mask = _mask()
    mask[0, :] = 255
    mask[:, -1] = 255
    assert find_blobs(mask) == []


def test_fill_grows_onto_border():
    mask = _mask()
    mask[0:5, 2:7] = 255
    (blob,) = find_blobs(mask)
    assert len(blob) == 25
    assert blob[:, 1].min() == 0


def test_minimum_points():
    mask = _mask()
    mask[2:5, 2:5] = 255  # 9 px
    mask[10:12, 10:15] = 255  # 10 px
    blobs = find_blobs(mask)
    assert [len(b) for b in blobs] == [10]


def test_tiny_mask_has_no_interior():
    mask = np.full((2, 40), 255, dtype=np.uint8)
    assert find_blobs(mask) == []


def test_filter_bounds():
    small = np.array([[x, y] for x in range(5) for y in range(5)])  # bbox 4x4
    medium = np.array([[x, y] for x in range(10) for y in range(10)])  # bbox 9x9
    huge = np.array([[x, y] for x in range(20) for y in range(20)])  # bbox 19x19
    kept = filter_blobs([small, medium, huge], 20, 20)
    assert len(kept) == 1
    assert kept[0] is medium


def test_filter_lower_bound_inclusive():
    blob = np.array([[0, 0], [10, 5]])  # bbox 10x5 = 50
    assert len(filter_blobs([blob], 100, 100)) == 1
