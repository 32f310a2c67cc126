"""Boundary aggregation: dong -> sgg -> sido by geometric union.

Regions are grouped by a parent key and each group's geometries are folded
left to right with a pairwise union. Groups keep first-seen order and
members keep input order, so a fixed input always yields the same output.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Hashable, Iterable, List, Optional, Sequence, Tuple

from shapely.errors import GEOSException
from shapely.geometry import MultiPolygon, Polygon

from geomap.config import get_settings
from geomap.errors import EmptyGroup, InvalidGeometry
from geomap.models.region import AdminLevel, Region, RegionGeometry

logger = logging.getLogger("geomap.aggregator")

GroupKeyFn = Callable[[Region], Hashable]


class OrderedGroups:
    """Association list of (key, members) in first-seen key order.

    The dict only indexes into the list; iteration goes through the list.
    """

    def __init__(self):
        self._groups: List[Tuple[Hashable, List[Region]]] = []
        self._index: Dict[Hashable, int] = {}

    def add(self, key: Hashable, region: Region) -> None:
        position = self._index.get(key)
        if position is None:
            self._index[key] = len(self._groups)
            self._groups.append((key, [region]))
        else:
            self._groups[position][1].append(region)

    def __iter__(self):
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def keys(self) -> List[Hashable]:
        return [key for key, _ in self._groups]


def group_regions(regions: Iterable[Region], group_key_fn: GroupKeyFn) -> OrderedGroups:
    groups = OrderedGroups()
    for region in regions:
        groups.add(group_key_fn(region), region)
    return groups


def union_pair(
    left: RegionGeometry,
    right: RegionGeometry,
    group_key,
    member_index: int,
) -> RegionGeometry:
    """Union two areal geometries, raising InvalidGeometry on any failure."""
    if right.is_empty or not right.is_valid:
        raise InvalidGeometry(group_key, member_index, "invalid or empty geometry")
    try:
        merged = left.union(right)
    except (GEOSException, ValueError) as e:
        raise InvalidGeometry(group_key, member_index, str(e)) from e
    if not isinstance(merged, (Polygon, MultiPolygon)) or merged.is_empty:
        raise InvalidGeometry(
            group_key, member_index, f"union produced {merged.geom_type}"
        )
    return merged


def merge_geometries(group_key, members: Sequence[Region]) -> RegionGeometry:
    """Fold the members' geometries into one polygon or multipolygon.

    A member that cannot be unioned is skipped with a warning. Raises
    EmptyGroup when nothing survives.
    """
    if len(members) == 1:
        return members[0].geometry

    result: Optional[RegionGeometry] = None
    for index, member in enumerate(members):
        if result is None:
            # The first usable member seeds the fold
            if member.geometry.is_empty or not member.geometry.is_valid:
                logger.warning(
                    f"Union failed for group {group_key} member {index}: "
                    "invalid or empty geometry, skipping..."
                )
                continue
            result = member.geometry
            continue
        try:
            result = union_pair(result, member.geometry, group_key, index)
        except InvalidGeometry as e:
            logger.warning(f"{e}, skipping...")

    if result is None:
        raise EmptyGroup(group_key)
    return result


def _compose_display_name(first: Region, level: AdminLevel) -> str:
    props = first.properties
    sidonm = props.get("sidonm", "")
    if level is AdminLevel.SIDO:
        return sidonm or first.display_name.split(" ")[0]
    sggnm = props.get("sggnm", "")
    if sidonm or sggnm:
        return " ".join(name for name in (sidonm, sggnm) if name)
    # Fall back to the first member's name without its last component
    return " ".join(first.display_name.split(" ")[:-1]) or first.display_name


def _aggregated_properties(group_key, first: Region, level: AdminLevel) -> dict:
    props = first.properties
    if level is AdminLevel.SIDO:
        return {
            "adm_cd": group_key,
            "adm_cd2": group_key,
            "sgg": group_key,
            "sido": group_key,
            "sidonm": props.get("sidonm", ""),
            "sggnm": "",
        }
    return {
        "adm_cd": group_key,
        "adm_cd2": group_key,
        "sgg": group_key,
        "sido": props.get("sido"),
        "sidonm": props.get("sidonm", ""),
        "sggnm": props.get("sggnm", ""),
    }


def _build_group(group_key, members: List[Region], level: AdminLevel) -> Optional[Region]:
    first = members[0]
    logger.info(f"  Processing {first.display_name} ({len(members)} regions)...")
    try:
        geometry = merge_geometries(group_key, members)
    except EmptyGroup as e:
        logger.warning(f"  Warning: {e}, omitting {group_key}")
        return None

    properties = _aggregated_properties(group_key, first, level)
    return Region(
        level=level,
        code=str(group_key),
        parent_code=None if level is AdminLevel.SIDO else properties["sido"],
        display_name=_compose_display_name(first, level),
        geometry=geometry,
        properties=properties,
    )


def aggregate(
    regions: Sequence[Region],
    group_key_fn: GroupKeyFn,
    max_workers: Optional[int] = None,
) -> List[Region]:
    """Group regions by key and union each group into one coarser region.

    Args:
        regions: Regions of a single level, in a fixed order.
        group_key_fn: Returns the parent key for a region.
        max_workers: Union groups in a thread pool when greater than 1.
            Output order is the same either way.

    Returns:
        One region per distinct key in first-seen order, one level coarser
        than the input. Groups where every union failed are omitted.
    """
    if not regions:
        return []
    level = regions[0].level.coarser()
    groups = group_regions(regions, group_key_fn)
    logger.info(f"Creating {level.value} level: {len(groups)} groups")

    if max_workers is None:
        max_workers = get_settings().AGGREGATE_MAX_WORKERS

    if max_workers and max_workers > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            built = list(
                pool.map(lambda item: _build_group(item[0], item[1], level), groups)
            )
    else:
        built = [_build_group(key, members, level) for key, members in groups]

    return [region for region in built if region is not None]


def build_district_level(fine: Sequence[Region], max_workers: Optional[int] = None) -> List[Region]:
    return aggregate(fine, lambda r: r.district_key, max_workers=max_workers)


def build_province_level(district: Sequence[Region], max_workers: Optional[int] = None) -> List[Region]:
    return aggregate(district, lambda r: r.province_key, max_workers=max_workers)


def build_levels(fine: Sequence[Region], max_workers: Optional[int] = None) -> Dict[AdminLevel, List[Region]]:
    """Build all three datasets from the dong-level regions."""
    district = build_district_level(fine, max_workers=max_workers)
    province = build_province_level(district, max_workers=max_workers)
    return {
        AdminLevel.DONG: list(fine),
        AdminLevel.SGG: district,
        AdminLevel.SIDO: province,
    }
