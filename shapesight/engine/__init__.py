"""ShapeSight detection engine."""

from shapesight.engine.config import DetectorConfig
from shapesight.engine.pipeline import ShapeDetector, create_detector, detect_shapes
from shapesight.engine.registry import Stage, get_registry, rule
from shapesight.engine.types import (
    BoundingBox,
    DetectedShape,
    DetectionResult,
    RGBAImage,
    ShapeFeatures,
    ShapeType,
)

__all__ = [
    "DetectorConfig",
    "ShapeDetector",
    "create_detector",
    "detect_shapes",
    "Stage",
    "get_registry",
    "rule",
    "BoundingBox",
    "DetectedShape",
    "DetectionResult",
    "RGBAImage",
    "ShapeFeatures",
    "ShapeType",
]
