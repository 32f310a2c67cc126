"""Reading and writing boundary datasets as GeoJSON FeatureCollections.

Ring coordinates are [longitude, latitude] and are used as-is; no
projection is applied.
"""
import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError
from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon, mapping, shape
from shapely.ops import transform

from geomap.config import get_settings
from geomap.errors import InvalidFeature
from geomap.models.region import AdminLevel, Region
from geomap.schemas.geojson import FeatureCollectionSchema, FeatureSchema

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _parent_code(level: AdminLevel, props: Mapping[str, Any]) -> Optional[str]:
    if level is AdminLevel.DONG:
        return props.get("sgg")
    if level is AdminLevel.SGG:
        return props.get("sido")
    return None


def region_from_feature(feature: Mapping[str, Any], level: AdminLevel) -> Region:
    """Build a Region from one GeoJSON feature.

    Raises:
        InvalidFeature: missing code, missing/empty geometry or a geometry
            that is not a Polygon or MultiPolygon.
    """
    try:
        parsed = FeatureSchema.model_validate(feature)
    except ValidationError as e:
        raise InvalidFeature(f"Malformed feature: {e}") from e
    if parsed.geometry is None:
        raise InvalidFeature(f"Feature {parsed.properties.adm_cd} has no geometry")

    try:
        geometry = shape(parsed.geometry.model_dump())
    except (GEOSException, ValueError, TypeError, IndexError) as e:
        raise InvalidFeature(f"Feature {parsed.properties.adm_cd}: {e}") from e
    if not isinstance(geometry, (Polygon, MultiPolygon)) or geometry.is_empty:
        raise InvalidFeature(f"Feature {parsed.properties.adm_cd} has empty geometry")

    props = parsed.properties.model_dump(exclude_none=True)
    try:
        return Region(
            level=level,
            code=parsed.properties.adm_cd,
            parent_code=_parent_code(level, props),
            display_name=parsed.properties.adm_nm,
            geometry=geometry,
            properties=props,
        )
    except ValidationError as e:
        raise InvalidFeature(f"Feature {parsed.properties.adm_cd}: {e}") from e


def region_to_feature(region: Region, object_id: Optional[int] = None) -> dict:
    properties = dict(region.properties)
    properties["adm_cd"] = region.code
    properties["adm_nm"] = region.display_name
    if object_id is not None:
        properties["OBJECTID"] = object_id
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": mapping(region.geometry),
    }


def regions_to_feature_collection(regions: Iterable[Region], renumber: bool = False) -> dict:
    """FeatureCollection envelope; renumber sets OBJECTID from 1."""
    return {
        "type": "FeatureCollection",
        "features": [
            region_to_feature(region, index + 1 if renumber else None)
            for index, region in enumerate(regions)
        ],
    }


def load_feature_collection(file_path: PathLike) -> dict:
    """Read a FeatureCollection file, checking only the envelope."""
    with open(file_path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise InvalidFeature(f"{file_path} is not a FeatureCollection")
    return data


def regions_from_collection(collection: Mapping[str, Any], level: AdminLevel) -> List[Region]:
    return [region_from_feature(feature, level) for feature in collection.get("features", [])]


def load_regions(file_path: PathLike, level: AdminLevel) -> List[Region]:
    regions = regions_from_collection(load_feature_collection(file_path), level)
    logger.info(f"Loaded {Path(file_path).name}: {len(regions)} features")
    return regions


def save_regions(file_path: PathLike, regions: Iterable[Region]) -> int:
    """Write regions as minified GeoJSON. Returns the size in bytes."""
    collection = regions_to_feature_collection(regions, renumber=True)
    content = json.dumps(collection, ensure_ascii=False, separators=(",", ":"))
    Path(file_path).write_text(content, encoding="utf-8")
    size = len(content.encode("utf-8"))
    logger.info(
        f"Saved {Path(file_path).name} ({len(collection['features'])} features, {size / 1024:.1f}KB)"
    )
    return size


def validate_collection(data: Mapping[str, Any]) -> FeatureCollectionSchema:
    """Full schema validation of a FeatureCollection (slow on large files)."""
    try:
        return FeatureCollectionSchema.model_validate(data)
    except ValidationError as e:
        raise InvalidFeature(f"Malformed FeatureCollection: {e}") from e


# ---------------------------------------------------------------------------
# Optimisation: simplification and coordinate precision
# ---------------------------------------------------------------------------

def simplify_tolerance(level: AdminLevel) -> float:
    settings = get_settings()
    return {
        AdminLevel.SIDO: settings.SIDO_SIMPLIFY_TOLERANCE,
        AdminLevel.SGG: settings.SGG_SIMPLIFY_TOLERANCE,
        AdminLevel.DONG: settings.DONG_SIMPLIFY_TOLERANCE,
    }[level]


def reduce_precision(geometry, digits: int = 6):
    """Round every coordinate to `digits` decimal places (6 ≈ 10cm)."""

    def _round(x, y, z=None):
        return round(x, digits), round(y, digits)

    return transform(_round, geometry)


def count_points(geometry) -> int:
    polygons = geometry.geoms if isinstance(geometry, MultiPolygon) else [geometry]
    return sum(
        len(ring.coords)
        for polygon in polygons
        for ring in [polygon.exterior, *polygon.interiors]
    )


def optimize_region(
    region: Region,
    tolerance: Optional[float] = None,
    digits: Optional[int] = None,
) -> Region:
    """Simplified, precision-reduced copy of a region.

    The input region is left untouched; if simplification collapses the
    geometry the unsimplified geometry is kept.
    """
    if tolerance is None:
        tolerance = simplify_tolerance(region.level)
    if digits is None:
        digits = get_settings().COORDINATE_PRECISION

    geometry = region.geometry
    if tolerance > 0:
        simplified = geometry.simplify(tolerance, preserve_topology=True)
        if isinstance(simplified, (Polygon, MultiPolygon)) and not simplified.is_empty:
            geometry = simplified
    geometry = reduce_precision(geometry, digits)
    # New geometry means a new Region, with its own bounding box
    return Region(
        level=region.level,
        code=region.code,
        parent_code=region.parent_code,
        display_name=region.display_name,
        geometry=geometry,
        properties=dict(region.properties),
    )
