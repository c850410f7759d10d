"""Exception taxonomy. Degenerate geometry and empty detections are not errors."""

from __future__ import annotations


class ShapeSightError(Exception):
    """Base class for every error raised by ShapeSight."""


class InvalidImageError(ShapeSightError, ValueError):
    """Pixel buffer does not match its declared dimensions."""


class ImageDecodeError(ShapeSightError, ValueError):
    """Raw bytes could not be decoded into an image."""
