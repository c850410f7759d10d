"""Decoding adapter. Turns encoded files and arrays into RGBAImage.

The engine never parses file formats; this is the only place Pillow is used.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import numpy as np
from numpy.typing import NDArray
from PIL import Image, UnidentifiedImageError

from shapesight.engine.types import RGBAImage
from shapesight.errors import ImageDecodeError, InvalidImageError

logger = logging.getLogger(__name__)


def from_pil(image: Image.Image) -> RGBAImage:
    rgba = image.convert("RGBA")
    return RGBAImage(width=rgba.width, height=rgba.height, data=rgba.tobytes())


def decode_image(data: bytes) -> RGBAImage:
    """Decode PNG/JPEG/BMP/... bytes into an RGBA buffer."""
    try:
        with Image.open(io.BytesIO(data)) as img:
            img.load()
            result = from_pil(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ImageDecodeError(f"Cannot decode image: {e}") from e
    logger.debug("Decoded %dx%d image (%d bytes)", result.width, result.height, len(data))
    return result


def load_image(path: str | Path) -> RGBAImage:
    return decode_image(Path(path).read_bytes())


def rgba_from_array(array: NDArray[np.uint8]) -> RGBAImage:
    """Wrap an (h, w, 4) or (h, w, 3) uint8 array. RGB input is made opaque."""
    arr = np.asarray(array)
    if arr.ndim != 3 or arr.shape[2] not in (3, 4):
        raise InvalidImageError(f"Expected (h, w, 3) or (h, w, 4) array, got shape {arr.shape}")
    if arr.shape[2] == 3:
        alpha = np.full(arr.shape[:2] + (1,), 255, dtype=np.uint8)
        arr = np.concatenate([arr.astype(np.uint8), alpha], axis=2)
    arr = np.ascontiguousarray(arr, dtype=np.uint8)
    return RGBAImage(width=arr.shape[1], height=arr.shape[0], data=arr.tobytes())
