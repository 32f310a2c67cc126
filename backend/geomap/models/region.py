"""Administrative region model."""
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, model_validator
from shapely.geometry import MultiPolygon, Polygon

from geomap.errors import UnknownLevel

RegionGeometry = Union[Polygon, MultiPolygon]


class AdminLevel(str, Enum):
    """Admin levels, from the most granular (dong) to the coarsest (sido)."""

    DONG = "dong"  # 읍면동
    SGG = "sgg"  # 시군구
    SIDO = "sido"  # 시도

    @property
    def rank(self) -> int:
        return _LEVEL_ORDER.index(self)

    def coarser(self) -> "AdminLevel":
        """Level one step up; sido has nothing above it."""
        if self is AdminLevel.SIDO:
            raise UnknownLevel(f"{self.value}+1")
        return _LEVEL_ORDER[self.rank + 1]

    @classmethod
    def parse(cls, value) -> "AdminLevel":
        """Resolve a wire string to a level, failing fast on anything else."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise UnknownLevel(value) from None


_LEVEL_ORDER = [AdminLevel.DONG, AdminLevel.SGG, AdminLevel.SIDO]


class BoundingBox(BaseModel):
    """Axis-aligned lat/lng rectangle enclosing a geometry."""

    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    class Config:
        frozen = True

    @classmethod
    def from_geometry(cls, geometry: RegionGeometry) -> "BoundingBox":
        """Scan every ring point of a polygon or multipolygon.

        Coordinates are (longitude, latitude) pairs, as in GeoJSON; a third
        (altitude) value is ignored.
        """
        polygons = geometry.geoms if isinstance(geometry, MultiPolygon) else [geometry]
        min_lat = min_lng = float("inf")
        max_lat = max_lng = float("-inf")
        for polygon in polygons:
            for ring in [polygon.exterior, *polygon.interiors]:
                for lng, lat, *_ in ring.coords:
                    if lat < min_lat:
                        min_lat = lat
                    if lat > max_lat:
                        max_lat = lat
                    if lng < min_lng:
                        min_lng = lng
                    if lng > max_lng:
                        max_lng = lng
        return cls(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)

    def contains(self, other: "BoundingBox") -> bool:
        return (
            self.min_lat <= other.min_lat
            and self.max_lat >= other.max_lat
            and self.min_lng <= other.min_lng
            and self.max_lng >= other.max_lng
        )


class Region(BaseModel):
    """One administrative unit at one level.

    The geometry is never mutated once the region exists, so its bounding
    box is computed once at construction and carried alongside it. The box
    always comes from the geometry; a `bbox` passed by the caller is
    replaced.
    """

    level: AdminLevel
    code: str = Field(..., min_length=1)
    parent_code: Optional[str] = None
    display_name: str = ""
    geometry: RegionGeometry
    # Extra source properties (sido, sidonm, sggnm, ...)
    properties: dict[str, Any] = Field(default_factory=dict)
    bbox: BoundingBox

    class Config:
        frozen = True
        arbitrary_types_allowed = True

    @model_validator(mode="before")
    @classmethod
    def _attach_bbox(cls, data: Any) -> Any:
        if isinstance(data, dict):
            geometry = data.get("geometry")
            if isinstance(geometry, (Polygon, MultiPolygon)) and not geometry.is_empty:
                data = {**data, "bbox": BoundingBox.from_geometry(geometry)}
        return data

    def model_copy(self, *, update: Optional[dict[str, Any]] = None, deep: bool = False) -> "Region":
        if update and ("geometry" in update or "bbox" in update):
            # Go through validation so the box follows the new geometry
            return type(self).model_validate({**dict(self), **update})
        return super().model_copy(update=update, deep=deep)

    @property
    def district_key(self) -> str:
        """sgg code this region aggregates into (its own code at sgg level)."""
        if self.level is AdminLevel.DONG:
            return self.parent_code or self.properties.get("sgg")
        if self.level is AdminLevel.SGG:
            return self.code
        raise UnknownLevel(f"{self.level.value} has no district key")

    @property
    def province_key(self) -> str:
        """sido code this region aggregates into (its own code at sido level)."""
        if self.level is AdminLevel.SGG:
            return self.parent_code or self.properties.get("sido")
        if self.level is AdminLevel.DONG:
            return self.properties.get("sido")
        return self.code


class Viewport(BoundingBox):
    """Visible map rectangle reported by the map widget."""

    @classmethod
    def from_corners(cls, sw: tuple[float, float], ne: tuple[float, float]) -> "Viewport":
        """Build from south-west and north-east (lat, lng) corners."""
        return cls(min_lat=sw[0], max_lat=ne[0], min_lng=sw[1], max_lng=ne[1])
