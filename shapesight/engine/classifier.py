"""Shape classifier: blob → features → first matching rule.

Features are measured on the convex hull so they do not depend on rotation;
solidity is the one feature that looks back at the raw pixel count, which is
what separates concave stars from convex polygons.
"""

from __future__ import annotations

import logging

from shapesight.engine import rules  # noqa: F401  (registers the rule set)
from shapesight.engine.config import DetectorConfig
from shapesight.engine.registry import RuleRegistry, get_registry
from shapesight.engine.types import Blob, DetectedShape, ShapeFeatures
from shapesight.utils.contour import rdp_simplify
from shapesight.utils.geometry import (
    bounding_box,
    centroid,
    circularity,
    convex_hull,
    perimeter,
    polygon_area,
)

logger = logging.getLogger(__name__)


def extract_features(blob: Blob, config: DetectorConfig | None = None) -> ShapeFeatures | None:
    """Measure one blob. None when it is too small to be a shape."""
    config = config or DetectorConfig()
    pixel_count = len(blob)
    if pixel_count < config.min_blob_points:
        return None

    hull = convex_hull(blob)
    hull_area = polygon_area(hull)
    if hull_area < config.min_hull_area:
        logger.debug("Rejected blob of %d px: hull area %.1f below floor", pixel_count, hull_area)
        return None

    bbox = bounding_box(hull)
    center = centroid(hull)

    hull_perimeter = perimeter(hull)
    approx = rdp_simplify(hull, config.simplify_epsilon_pct * hull_perimeter)

    bbox_area = bbox.area
    features = ShapeFeatures(
        hull_area=hull_area,
        hull_perimeter=hull_perimeter,
        vertices=len(approx),
        circularity=circularity(hull_area, hull_perimeter),
        aspect_ratio=bbox.width / bbox.height if bbox.height > 0 else 0.0,
        extent=hull_area / bbox_area if bbox_area > 0 else 0.0,
        solidity=min(1.0, pixel_count / hull_area),
        bbox=bbox,
        centroid=center,
        pixel_count=pixel_count,
    )
    logger.debug(
        "  Properties: vertices=%d, circularity=%.3f, extent=%.3f, aspect=%.2f, solidity=%.3f",
        features.vertices,
        features.circularity,
        features.extent,
        features.aspect_ratio,
        features.solidity,
    )
    return features


def classify_features(
    features: ShapeFeatures,
    config: DetectorConfig | None = None,
    registry: RuleRegistry | None = None,
) -> DetectedShape | None:
    """Apply the ordered rule list. None is the explicit reject path."""
    config = config or DetectorConfig()
    registry = registry or get_registry()

    spec = registry.first_match(features)
    if spec is None:
        return None

    return DetectedShape(
        type=spec.shape,
        confidence=min(config.max_confidence, spec.score(features)),
        bbox=features.bbox,
        centroid=features.centroid,
        area=features.pixel_count,
    )


def classify_blob(
    blob: Blob,
    config: DetectorConfig | None = None,
    registry: RuleRegistry | None = None,
) -> DetectedShape | None:
    features = extract_features(blob, config)
    if features is None:
        return None
    return classify_features(features, config, registry)
