"""Pipeline orchestrator. Runs the detection stages with a fallback ladder.

intensity → Otsu mask → blobs → size filter → classifier

When the Otsu mask yields no usable blob the ladder retries, stopping at the
first rung that does: a 3×3 close of the Otsu mask, then each fixed
threshold in order. An exhausted ladder is an empty, successful result.
"""

from __future__ import annotations

import asyncio
import logging
import time

import numpy as np
from numpy.typing import NDArray

from shapesight.engine.binarize import binarize_fixed, binarize_otsu
from shapesight.engine.classifier import classify_blob
from shapesight.engine.components import filter_blobs, find_blobs
from shapesight.engine.config import DetectorConfig
from shapesight.engine.luminance import to_intensity
from shapesight.engine.registry import RuleRegistry, get_registry
from shapesight.engine.types import Blob, DetectedShape, DetectionResult, RGBAImage
from shapesight.utils.morphology import morphological_close

logger = logging.getLogger(__name__)


class ShapeDetector:
    """Stateless apart from its configuration; safe to share between threads."""

    def __init__(
        self,
        config: DetectorConfig | None = None,
        registry: RuleRegistry | None = None,
    ) -> None:
        self.config = config or DetectorConfig()
        self.registry = registry or get_registry()

    def detect(self, image: RGBAImage) -> DetectionResult:
        """Run the full pipeline on one image."""
        start = time.perf_counter()
        width, height = image.width, image.height

        intensity = to_intensity(image)
        blobs, strategy = self.segment(intensity)

        shapes: list[DetectedShape] = []
        for i, blob in enumerate(blobs):
            shape = classify_blob(blob, self.config, self.registry)
            if shape is not None:
                shapes.append(shape)
                logger.debug("Blob %d: detected %s with confidence %.2f", i, shape.type.value, shape.confidence)
            else:
                logger.debug("Blob %d: failed classification (%d px)", i, len(blob))

        elapsed = (time.perf_counter() - start) * 1000
        logger.info(
            "Detection complete: %d shapes from %d blobs via %s in %.1fms",
            len(shapes),
            len(blobs),
            strategy,
            elapsed,
        )
        return DetectionResult(
            shapes=shapes,
            processing_time_ms=elapsed,
            image_width=width,
            image_height=height,
            strategy=strategy,
        )

    async def detect_async(self, image: RGBAImage) -> DetectionResult:
        """Run ``detect`` in the default executor so the event loop stays free."""
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self.detect, image)

    def segment(self, intensity: NDArray[np.uint8]) -> tuple[list[Blob], str]:
        """Walk the ladder. Returns (filtered blobs, name of the rung used)."""
        mask, threshold = binarize_otsu(intensity)
        blobs = self._extract(mask)
        logger.debug("Otsu threshold %d -> %d blobs", threshold, len(blobs))
        if blobs:
            return blobs, "otsu"

        closed = morphological_close(mask, self.config.close_kernel_size)
        blobs = self._extract(closed)
        logger.info("Retry after morphological closing -> blobs: %d", len(blobs))
        if blobs:
            return blobs, "otsu+close"

        for thresh in self.config.fallback_thresholds:
            blobs = self._extract(binarize_fixed(intensity, thresh))
            if blobs:
                logger.info("Retry with fixed threshold %d -> blobs: %d", thresh, len(blobs))
                return blobs, f"fixed:{thresh}"

        logger.info("Fallback ladder exhausted: no blobs")
        return [], "none"

    def _extract(self, mask: NDArray[np.uint8]) -> list[Blob]:
        height, width = mask.shape
        raw = find_blobs(mask, self.config.min_blob_points)
        kept = filter_blobs(
            raw,
            width,
            height,
            min_area=self.config.min_bbox_area,
            max_fraction=self.config.max_bbox_fraction,
        )
        logger.debug("Found %d raw blobs, %d after filtering", len(raw), len(kept))
        return kept


def create_detector(config: DetectorConfig | None = None) -> ShapeDetector:
    """Factory function for creating a detector instance."""
    return ShapeDetector(config=config)


def detect_shapes(image: RGBAImage, config: DetectorConfig | None = None) -> DetectionResult:
    return create_detector(config).detect(image)
