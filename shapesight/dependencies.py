"""FastAPI dependency injection."""

from __future__ import annotations

from shapesight.config import Settings, settings
from shapesight.engine.pipeline import ShapeDetector, create_detector

_detector = create_detector()


def get_settings() -> Settings:
    return settings


def get_detector() -> ShapeDetector:
    return _detector
