"""Detector configuration: stage tunables for one pipeline instance."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DetectorConfig:
    """Size gates, simplification tolerance and the fallback ladder.

    Defaults match the tuned detector. The classifier's decision
    thresholds are not here; they live as named constants in engine.rules.
    """

    # Component extraction: blobs smaller than this cannot encode a polygon
    min_blob_points: int = 10

    # Blob filter on bounding-box area (width * height of the box)
    min_bbox_area: float = 50.0
    max_bbox_fraction: float = 0.9  # of image width * height

    # Classification-time noise floor on convex hull area
    min_hull_area: float = 100.0

    # Douglas-Peucker epsilon as a fraction of hull perimeter
    simplify_epsilon_pct: float = 0.025

    # Fallback ladder
    close_kernel_size: int = 3
    fallback_thresholds: tuple[int, ...] = (100, 127, 150, 180)

    # Confidence ceiling applied to every rule outcome
    max_confidence: float = 0.98
