import pytest
from shapely.geometry import Polygon, box

from geomap.models.region import AdminLevel, Region
from geomap.services.aggregator import build_levels
from geomap.services.region_store import RegionStore


def square(min_lng, min_lat, max_lng, max_lat) -> Polygon:
    return box(min_lng, min_lat, max_lng, max_lat)


def make_dong(code, sgg, sido, geometry, adm_nm=None, sidonm="", sggnm="") -> Region:
    return Region(
        level=AdminLevel.DONG,
        code=code,
        parent_code=sgg,
        display_name=adm_nm or f"{sidonm} {sggnm} {code}".strip(),
        geometry=geometry,
        properties={
            "adm_cd": code,
            "sgg": sgg,
            "sido": sido,
            "sidonm": sidonm,
            "sggnm": sggnm,
        },
    )


def dong_feature(code, sgg, sido, coords, adm_nm="", sidonm="", sggnm=""):
    return {
        "type": "Feature",
        "properties": {
            "adm_cd": code,
            "adm_nm": adm_nm,
            "sgg": sgg,
            "sido": sido,
            "sidonm": sidonm,
            "sggnm": sggnm,
        },
        "geometry": {"type": "Polygon", "coordinates": [coords]},
    }


def square_coords(min_lng, min_lat, max_lng, max_lat):
    return [
        [min_lng, min_lat],
        [max_lng, min_lat],
        [max_lng, max_lat],
        [min_lng, max_lat],
        [min_lng, min_lat],
    ]


@pytest.fixture
def seoul_dongs():
    """Two 구 in 서울 and one in 부산, laid out on a unit grid."""
    return [
        make_dong("1111051", "11110", "11", square(126.0, 37.0, 126.1, 37.1),
                  adm_nm="서울특별시 종로구 청운효자동", sidonm="서울특별시", sggnm="종로구"),
        make_dong("1114052", "11140", "11", square(126.2, 37.0, 126.3, 37.1),
                  adm_nm="서울특별시 중구 소공동", sidonm="서울특별시", sggnm="중구"),
        make_dong("1111053", "11110", "11", square(126.1, 37.0, 126.2, 37.1),
                  adm_nm="서울특별시 종로구 사직동", sidonm="서울특별시", sggnm="종로구"),
        make_dong("2611051", "26110", "26", square(129.0, 35.0, 129.1, 35.1),
                  adm_nm="부산광역시 중구 중앙동", sidonm="부산광역시", sggnm="중구"),
    ]


@pytest.fixture
def store(seoul_dongs):
    return RegionStore(build_levels(seoul_dongs, max_workers=1))
