"""Data model flowing through the detection pipeline.

Point sequences are Nx2 numpy arrays of (x, y). Blobs keep integer pixel
coordinates; hulls and simplified polygons share the same layout.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from shapesight.errors import InvalidImageError
from shapesight.utils.geometry import BoundingBox

# Nx2 int array of (x, y) pixel coordinates for one connected component
Blob = NDArray[np.int64]


class ShapeType(str, enum.Enum):
    CIRCLE = "circle"
    TRIANGLE = "triangle"
    RECTANGLE = "rectangle"
    PENTAGON = "pentagon"
    STAR = "star"


@dataclass(frozen=True)
class RGBAImage:
    """Decoded raster: row-major, top-to-bottom, 4 bytes per pixel."""

    width: int
    height: int
    data: bytes

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise InvalidImageError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        expected = self.width * self.height * 4
        if len(self.data) != expected:
            raise InvalidImageError(
                f"RGBA buffer has {len(self.data)} bytes, expected {expected} "
                f"for {self.width}x{self.height}"
            )

    @property
    def pixels(self) -> NDArray[np.uint8]:
        """Read-only (height, width, 4) view of the buffer."""
        arr = np.frombuffer(self.data, dtype=np.uint8)
        return arr.reshape(self.height, self.width, 4)


@dataclass(frozen=True)
class ShapeFeatures:
    """Everything a classification rule is allowed to look at."""

    hull_area: float
    hull_perimeter: float
    vertices: int
    circularity: float
    aspect_ratio: float
    extent: float
    solidity: float
    bbox: BoundingBox
    centroid: tuple[float, float]
    pixel_count: int


@dataclass(frozen=True)
class DetectedShape:
    type: ShapeType
    confidence: float
    bbox: BoundingBox
    centroid: tuple[float, float]
    # Blob pixel count, not hull area
    area: int


@dataclass
class DetectionResult:
    """Output of one pipeline run."""

    shapes: list[DetectedShape] = field(default_factory=list)
    processing_time_ms: float = 0.0
    image_width: int = 0
    image_height: int = 0
    # Ladder rung that produced the blobs: otsu, otsu+close, fixed:<t>, none
    strategy: str = "none"

    @property
    def count(self) -> int:
        return len(self.shapes)
