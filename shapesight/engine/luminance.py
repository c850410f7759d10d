"""Luminance reduction: RGBA buffer to one 8-bit intensity per pixel."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.types import RGBAImage

# ITU-R BT.601 luma weights
_WEIGHT_R = 0.299
_WEIGHT_G = 0.587
_WEIGHT_B = 0.114

# Pixels at least half transparent are painted as white background
_ALPHA_CUTOFF = 128
_WHITE = 255


def to_intensity(image: RGBAImage) -> NDArray[np.uint8]:
    """Return a (height, width) uint8 luminance array."""
    px = image.pixels.astype(np.float64)
    luma = _WEIGHT_R * px[..., 0] + _WEIGHT_G * px[..., 1] + _WEIGHT_B * px[..., 2]
    gray = np.clip(np.rint(luma), 0, 255).astype(np.uint8)
    gray[image.pixels[..., 3] < _ALPHA_CUTOFF] = _WHITE
    return gray
