"""Morphological operations on 0/255 masks."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.ndimage import maximum_filter, minimum_filter


def morphological_close(mask: NDArray[np.uint8], kernel_size: int = 3) -> NDArray[np.uint8]:
    """Binary morphological close (dilate then erode) to bridge small gaps.

    Uses a square structuring element. Pixels closer to the image edge than
    the kernel radius are cleared after each pass, so the edge never feeds
    foreground back into the interior.
    """
    dilated = _dilate(mask, kernel_size)
    closed = _erode(dilated, kernel_size)
    return closed


def _dilate(mask: NDArray[np.uint8], kernel_size: int) -> NDArray[np.uint8]:
    """Max filter with square kernel."""
    result = maximum_filter(mask, size=kernel_size, mode="constant", cval=0)
    return _clear_border(result, kernel_size // 2)


def _erode(mask: NDArray[np.uint8], kernel_size: int) -> NDArray[np.uint8]:
    """Min filter with square kernel."""
    result = minimum_filter(mask, size=kernel_size, mode="constant", cval=0)
    return _clear_border(result, kernel_size // 2)


def _clear_border(mask: NDArray[np.uint8], pad: int) -> NDArray[np.uint8]:
    if pad <= 0:
        return mask
    out = mask.copy()
    out[:pad, :] = 0
    out[-pad:, :] = 0
    out[:, :pad] = 0
    out[:, -pad:] = 0
    return out
