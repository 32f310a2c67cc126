"""Pydantic schemas for the GeoJSON wire format."""
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field


class FeatureProperties(BaseModel):
    """Properties of an administrative boundary feature.

    e.g. adm_nm "서울특별시 종로구 사직동", sido "11", sgg "11110"
    """
    OBJECTID: Optional[int] = None
    adm_nm: str = ""  # 행정구역명
    adm_cd: str  # 행정코드
    adm_cd2: Optional[str] = None
    sgg: Optional[str] = None  # 시군구 코드
    sido: Optional[str] = None  # 시도 코드
    sidonm: str = ""  # 시도명
    sggnm: str = ""  # 시군구명

    class Config:
        extra = "allow"


class GeometrySchema(BaseModel):
    type: Literal["Polygon", "MultiPolygon"]
    coordinates: List[Any]


class FeatureSchema(BaseModel):
    type: Literal["Feature"] = "Feature"
    properties: FeatureProperties
    geometry: Optional[GeometrySchema] = None


class FeatureCollectionSchema(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: List[FeatureSchema] = Field(default_factory=list)
