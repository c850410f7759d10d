"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field

from shapesight import __version__
from shapesight.engine.types import DetectedShape, DetectionResult


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    rules_registered: int = 0


class BoundingBoxModel(BaseModel):
    x: float
    y: float
    width: float
    height: float


class PointModel(BaseModel):
    x: float
    y: float


class ShapeModel(BaseModel):
    type: str
    confidence: float = Field(..., ge=0.0, le=1.0)
    bounding_box: BoundingBoxModel
    center: PointModel
    area: int

    @classmethod
    def from_shape(cls, shape: DetectedShape) -> ShapeModel:
        return cls(
            type=shape.type.value,
            confidence=round(shape.confidence, 4),
            bounding_box=BoundingBoxModel(
                x=shape.bbox.x,
                y=shape.bbox.y,
                width=shape.bbox.width,
                height=shape.bbox.height,
            ),
            center=PointModel(x=shape.centroid[0], y=shape.centroid[1]),
            area=shape.area,
        )


class DetectResponse(BaseModel):
    shapes: list[ShapeModel] = Field(default_factory=list)
    processing_time_ms: float = 0.0
    image_width: int = 0
    image_height: int = 0
    strategy: str = "none"

    @classmethod
    def from_result(cls, result: DetectionResult) -> DetectResponse:
        return cls(
            shapes=[ShapeModel.from_shape(s) for s in result.shapes],
            processing_time_ms=round(result.processing_time_ms, 1),
            image_width=result.image_width,
            image_height=result.image_height,
            strategy=result.strategy,
        )
