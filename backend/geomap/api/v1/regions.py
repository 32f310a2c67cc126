"""Region boundary API endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from geomap.errors import RegionNotFound, UnknownLevel
from geomap.models.region import AdminLevel, Viewport
from geomap.services.geojson_io import region_to_feature, regions_to_feature_collection
from geomap.services.region_store import RegionStore, get_region_store
from geomap.utils.geo import admin_level_by_zoom

router = APIRouter(prefix="/geojson", tags=["GeoJSON"])


def _parse_level(level: str) -> AdminLevel:
    try:
        return AdminLevel.parse(level)
    except UnknownLevel:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"level must be one of {[lvl.value for lvl in AdminLevel]}",
        )


def _not_loaded(level: AdminLevel) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Data for {level.value} not found",
    )


@router.get("")
def get_by_admin_level(
    level: str = Query(...),
    store: RegionStore = Depends(get_region_store),
):
    """Whole dataset for one admin level as a GeoJSON FeatureCollection."""
    admin_level = _parse_level(level)
    try:
        regions = store.get_by_level(admin_level)
    except UnknownLevel:
        raise _not_loaded(admin_level)
    return regions_to_feature_collection(regions)


@router.get("/visible")
def get_visible(
    level: Optional[str] = Query(None),
    zoom: Optional[float] = Query(None),
    min_lat: Optional[float] = Query(None),
    max_lat: Optional[float] = Query(None),
    min_lng: Optional[float] = Query(None),
    max_lng: Optional[float] = Query(None),
    store: RegionStore = Depends(get_region_store),
):
    """
    Regions whose bounding box intersects the given map bounds.

    The level comes from `level` or, failing that, from `zoom`. Without any
    bounds every region of the level is returned.
    """
    if level is not None:
        admin_level = _parse_level(level)
    elif zoom is not None:
        admin_level = admin_level_by_zoom(zoom)
    else:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Either level or zoom is required",
        )

    bounds = [min_lat, max_lat, min_lng, max_lng]
    if all(b is None for b in bounds):
        viewport = None
    elif any(b is None for b in bounds):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="min_lat, max_lat, min_lng and max_lng must be given together",
        )
    elif min_lat > max_lat or min_lng > max_lng:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="min_lat and min_lng must not exceed max_lat and max_lng",
        )
    else:
        viewport = Viewport(min_lat=min_lat, max_lat=max_lat, min_lng=min_lng, max_lng=max_lng)

    try:
        regions = store.visible(admin_level, viewport)
    except UnknownLevel:
        raise _not_loaded(admin_level)
    return regions_to_feature_collection(regions)


@router.get("/search")
def search_regions(
    region_name: str = Query(..., min_length=1, alias="regionName"),
    level: Optional[str] = Query(None),
    store: RegionStore = Depends(get_region_store),
):
    """Search regions by name across one or all admin levels."""
    admin_level = _parse_level(level) if level else None
    return [region_to_feature(region) for region in store.search(region_name, admin_level)]


@router.get("/regions/{code}")
def get_region_by_code(
    code: str,
    store: RegionStore = Depends(get_region_store),
):
    """Single dong region by its adm_cd."""
    try:
        region = store.get_region(code, AdminLevel.DONG)
    except (RegionNotFound, UnknownLevel) as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return region_to_feature(region)
