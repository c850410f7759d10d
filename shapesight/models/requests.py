"""API request models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class DetectRawRequest(BaseModel):
    width: int = Field(..., gt=0, description="Image width in pixels")
    height: int = Field(..., gt=0, description="Image height in pixels")
    rgba_base64: str = Field(
        ...,
        description="Base64 of the row-major RGBA buffer (4 * width * height bytes)",
    )
