import pytest

from geomap.errors import RegionNotFound, UnknownLevel
from geomap.models.region import AdminLevel, Viewport
from geomap.services.geojson_io import save_regions
from geomap.services.region_store import RegionStore
from geomap.utils.geo import admin_level_by_zoom


def test_unknown_level_fails_fast(seoul_dongs):
    store = RegionStore({AdminLevel.DONG: seoul_dongs})
    with pytest.raises(UnknownLevel):
        store.get_by_level(AdminLevel.SIDO)
    with pytest.raises(UnknownLevel):
        store.get_by_level("gu")


def test_get_by_level_accepts_wire_string(store):
    assert [r.code for r in store.get_by_level("sido")] == ["11", "26"]


def test_get_region_by_code(store):
    assert store.get_region("1111053").display_name == "서울특별시 종로구 사직동"
    assert store.get_region("11110", AdminLevel.SGG).display_name == "서울특별시 종로구"
    with pytest.raises(RegionNotFound):
        store.get_region("9999999")


def test_search_is_case_insensitive_substring(store):
    results = store.search("종로")
    assert [(r.level, r.code) for r in results] == [
        (AdminLevel.SGG, "11110"),
        (AdminLevel.DONG, "1111051"),
        (AdminLevel.DONG, "1111053"),
    ]


def test_search_one_level(store):
    assert [r.code for r in store.search("중구", AdminLevel.SGG)] == ["11140", "26110"]
    assert [r.code for r in store.search("부산", "sido")] == ["26"]


def test_visible_filters_active_level(store):
    viewport = Viewport(min_lat=34.9, max_lat=35.2, min_lng=128.9, max_lng=129.2)
    assert [r.code for r in store.visible(AdminLevel.SGG, viewport)] == ["26110"]
    assert len(store.visible(AdminLevel.SGG, None)) == 3


def test_set_level_swaps_whole_dataset(store, seoul_dongs):
    store.set_level(AdminLevel.DONG, seoul_dongs[:1])
    assert [r.code for r in store.get_by_level(AdminLevel.DONG)] == ["1111051"]
    with pytest.raises(RegionNotFound):
        store.get_region("1111053")


def test_from_directory_skips_missing_files(tmp_path, seoul_dongs):
    save_regions(tmp_path / "dong.json", seoul_dongs)

    store = RegionStore.from_directory(tmp_path)

    assert store.loaded_levels == [AdminLevel.DONG]
    with pytest.raises(UnknownLevel):
        store.get_by_level(AdminLevel.SGG)


@pytest.mark.parametrize(
    "zoom, level",
    [(0, AdminLevel.SIDO), (9, AdminLevel.SIDO), (10, AdminLevel.SGG),
     (12, AdminLevel.SGG), (13, AdminLevel.DONG), (21, AdminLevel.DONG)],
)
def test_admin_level_by_zoom(zoom, level):
    assert admin_level_by_zoom(zoom) is level


def test_coarser_level():
    assert AdminLevel.DONG.coarser() is AdminLevel.SGG
    assert AdminLevel.SGG.coarser() is AdminLevel.SIDO
    with pytest.raises(UnknownLevel):
        AdminLevel.SIDO.coarser()
