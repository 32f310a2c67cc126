"""Viewport feature filter.

Keeps only the regions whose bounding box overlaps the visible map
rectangle. Runs on every pan/zoom, so it does nothing beyond one AABB test
per region against the region's cached box.
"""
from typing import List, Optional, Sequence, Union

from geomap.models.region import BoundingBox, Region, RegionGeometry, Viewport


def bounding_box_of(target: Union[Region, RegionGeometry]) -> BoundingBox:
    """Bounding box of a region (cached) or of a bare geometry (scanned)."""
    if isinstance(target, Region):
        return target.bbox
    return BoundingBox.from_geometry(target)


def intersects(box: BoundingBox, viewport: BoundingBox) -> bool:
    """AABB overlap test.

    The rectangles overlap unless one lies entirely above, below, left or
    right of the other. Shared edges and corners count as overlap.
    """
    return not (
        box.max_lat < viewport.min_lat
        or box.min_lat > viewport.max_lat
        or box.max_lng < viewport.min_lng
        or box.min_lng > viewport.max_lng
    )


def filter_visible(regions: Sequence[Region], viewport: Optional[Viewport]) -> List[Region]:
    """Regions whose bounding box intersects the viewport, in input order.

    With no viewport yet (the map has not reported bounds) every region is
    returned unchanged.
    """
    if viewport is None:
        return list(regions)
    return [region for region in regions if intersects(region.bbox, viewport)]
