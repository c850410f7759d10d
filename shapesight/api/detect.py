"""POST /api/detect: shape detection on an uploaded or raw image."""

from __future__ import annotations

import base64
import binascii
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from shapesight.config import Settings
from shapesight.dependencies import get_detector, get_settings
from shapesight.engine.pipeline import ShapeDetector
from shapesight.engine.types import RGBAImage
from shapesight.errors import ImageDecodeError, InvalidImageError
from shapesight.imaging import decode_image
from shapesight.models.requests import DetectRawRequest
from shapesight.models.responses import DetectResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/detect", response_model=DetectResponse)
async def detect(
    file: UploadFile = File(..., description="Encoded raster image (PNG, JPEG, ...)"),
    detector: ShapeDetector = Depends(get_detector),
    settings: Settings = Depends(get_settings),
) -> DetectResponse:
    limit = settings.max_upload_bytes
    if file.size is not None and file.size > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Upload of {file.size} bytes exceeds limit of {limit}",
        )

    # Never buffer more than one byte past the limit
    data = await file.read(limit + 1)
    if len(data) > limit:
        raise HTTPException(status_code=413, detail=f"Upload exceeds limit of {limit} bytes")

    try:
        image = decode_image(data)
    except ImageDecodeError as e:
        logger.warning("Rejected upload %s: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=str(e)) from e

    # Pipeline is CPU-bound; keep it off the event loop
    result = await detector.detect_async(image)
    return DetectResponse.from_result(result)


@router.post("/detect/raw", response_model=DetectResponse)
async def detect_raw(
    req: DetectRawRequest,
    detector: ShapeDetector = Depends(get_detector),
) -> DetectResponse:
    try:
        data = base64.b64decode(req.rgba_base64, validate=True)
    except (binascii.Error, ValueError) as e:
        raise HTTPException(status_code=422, detail=f"rgba_base64 is not valid base64: {e}") from e

    try:
        image = RGBAImage(width=req.width, height=req.height, data=data)
    except InvalidImageError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    result = await detector.detect_async(image)
    return DetectResponse.from_result(result)
