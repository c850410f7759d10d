"""ShapeSight: geometric shape detection in raster images."""

__version__ = "0.1.0"
