import pytest
from shapely.geometry import MultiPolygon, Point, Polygon

from geomap.models.region import AdminLevel, BoundingBox, Region, Viewport
from geomap.services.viewport import (
    bounding_box_of,
    filter_visible,
    intersects,
)
from tests.conftest import make_dong, square


def region_with_box(code, min_lat, max_lat, min_lng, max_lng):
    return make_dong(code, "D1", "P1", square(min_lng, min_lat, max_lng, max_lat))


def test_corner_overlap_is_included():
    viewport = Viewport(min_lat=10, max_lat=20, min_lng=10, max_lng=20)
    region = region_with_box("R", 19, 25, 19, 25)

    assert intersects(region.bbox, viewport)
    assert filter_visible([region], viewport) == [region]


def test_disjoint_box_is_excluded():
    viewport = Viewport(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    region = region_with_box("R", 5, 6, 5, 6)

    assert not intersects(region.bbox, viewport)
    assert filter_visible([region], viewport) == []


@pytest.mark.parametrize(
    "box",
    [
        BoundingBox(min_lat=2, max_lat=3, min_lng=0, max_lng=1),  # above
        BoundingBox(min_lat=-3, max_lat=-2, min_lng=0, max_lng=1),  # below
        BoundingBox(min_lat=0, max_lat=1, min_lng=-3, max_lng=-2),  # left
        BoundingBox(min_lat=0, max_lat=1, min_lng=2, max_lng=3),  # right
    ],
)
def test_each_separating_side_excludes(box):
    viewport = Viewport(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    assert not intersects(box, viewport)


def test_shared_edge_counts_as_intersecting():
    viewport = Viewport(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    assert intersects(BoundingBox(min_lat=1, max_lat=2, min_lng=0, max_lng=1), viewport)


def test_box_enclosing_the_viewport_intersects():
    viewport = Viewport(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    assert intersects(BoundingBox(min_lat=-10, max_lat=10, min_lng=-10, max_lng=10), viewport)


def test_no_viewport_returns_everything_in_order(seoul_dongs):
    result = filter_visible(seoul_dongs, None)
    assert result == seoul_dongs
    assert [r.code for r in result] == [r.code for r in seoul_dongs]


def test_filter_keeps_input_order_and_is_repeatable(seoul_dongs):
    viewport = Viewport(min_lat=36.9, max_lat=37.2, min_lng=126.05, max_lng=126.25)
    first = filter_visible(seoul_dongs, viewport)
    second = filter_visible(seoul_dongs, viewport)
    assert [r.code for r in first] == ["1111051", "1114052", "1111053"]
    assert [r.code for r in first] == [r.code for r in second]


def test_region_with_a_point_inside_viewport_is_never_dropped():
    # A thin diagonal triangle: only its tip reaches into the viewport
    triangle = Polygon([(0, 0), (10, 10), (10, 9.5), (0, 0)])
    region = make_dong("T", "D1", "P1", triangle)
    for point in [Point(0, 0), Point(5, 4.9), Point(10, 10)]:
        viewport = Viewport(
            min_lat=point.y - 0.01, max_lat=point.y + 0.01,
            min_lng=point.x - 0.01, max_lng=point.x + 0.01,
        )
        assert filter_visible([region], viewport) == [region]


def test_bounding_box_scans_all_polygons_and_holes():
    shell = [(0, 0), (4, 0), (4, 4), (0, 4), (0, 0)]
    hole = [(1, 1), (2, 1), (2, 2), (1, 1)]
    geometry = MultiPolygon([Polygon(shell, [hole]), Polygon([(10, -5), (11, -5), (11, -4), (10, -5)])])

    box = bounding_box_of(geometry)

    assert box == BoundingBox(min_lat=-5, max_lat=4, min_lng=0, max_lng=11)


def test_bounding_box_of_region_is_cached_value(seoul_dongs):
    region = seoul_dongs[0]
    assert bounding_box_of(region) is region.bbox


def test_viewport_from_corners():
    viewport = Viewport.from_corners(sw=(37.4, 126.8), ne=(37.7, 127.2))
    assert viewport == Viewport(min_lat=37.4, max_lat=37.7, min_lng=126.8, max_lng=127.2)


def test_caller_supplied_bbox_is_replaced_by_geometry_box():
    region = Region(
        level=AdminLevel.DONG,
        code="R",
        geometry=square(10, 10, 11, 11),
        bbox=BoundingBox(min_lat=0, max_lat=0, min_lng=0, max_lng=0),
    )

    assert region.bbox == BoundingBox(min_lat=10, max_lat=11, min_lng=10, max_lng=11)
    viewport = Viewport(min_lat=10.2, max_lat=10.4, min_lng=10.2, max_lng=10.4)
    assert filter_visible([region], viewport) == [region]


def test_bbox_follows_geometry_on_copy():
    region = make_dong("R", "D1", "P1", square(0, 0, 1, 1))

    moved = region.model_copy(update={"geometry": square(10, 10, 11, 11)})
    renamed = region.model_copy(update={"display_name": "renamed"})

    assert moved.bbox == BoundingBox(min_lat=10, max_lat=11, min_lng=10, max_lng=11)
    assert region.bbox == BoundingBox(min_lat=0, max_lat=1, min_lng=0, max_lng=1)
    assert renamed.bbox == region.bbox
