"""Binarization: Otsu threshold selection plus the fixed-threshold fallback.

Both entry points share one polarity rule: on a light image (mean > 128)
pixels darker than the threshold are foreground, on a dark image pixels at
or above it are. Masks hold 0 (background) and 255 (foreground).
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from skimage.filters import threshold_otsu

FOREGROUND = 255
BACKGROUND = 0

# Mean brightness above this means a light background with dark shapes
_LIGHT_BACKGROUND_MEAN = 128.0


def mean_brightness(intensity: NDArray[np.uint8]) -> float:
    if intensity.size == 0:
        return 0.0
    return float(np.mean(intensity))


def otsu_threshold(intensity: NDArray[np.uint8]) -> int:
    """Threshold maximising between-class variance; background is <= t.

    A single-valued image has no between-class variance and returns its value.
    """
    return int(threshold_otsu(intensity))


def apply_threshold(intensity: NDArray[np.uint8], threshold: int) -> NDArray[np.uint8]:
    """Mask with the polarity picked from the image's mean brightness."""
    if mean_brightness(intensity) > _LIGHT_BACKGROUND_MEAN:
        foreground = intensity < threshold
    else:
        foreground = intensity >= threshold
    return np.where(foreground, FOREGROUND, BACKGROUND).astype(np.uint8)


def binarize_otsu(intensity: NDArray[np.uint8]) -> tuple[NDArray[np.uint8], int]:
    """Primary mask. Returns (mask, selected threshold)."""
    threshold = otsu_threshold(intensity)
    return apply_threshold(intensity, threshold), threshold


def binarize_fixed(intensity: NDArray[np.uint8], threshold: int) -> NDArray[np.uint8]:
    """Fallback mask with a caller-supplied threshold."""
    return apply_threshold(intensity, threshold)
