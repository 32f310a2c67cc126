"""API v1 router aggregation."""
from fastapi import APIRouter

from geomap.api.v1.regions import router as regions_router

router = APIRouter()

router.include_router(regions_router)
