"""Domain models."""
from geomap.models.region import AdminLevel, BoundingBox, Region, Viewport

__all__ = ["AdminLevel", "BoundingBox", "Region", "Viewport"]
