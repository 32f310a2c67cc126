"""In-memory registry of the three boundary datasets."""
import logging
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from geomap.config import get_settings
from geomap.errors import RegionNotFound, UnknownLevel
from geomap.models.region import AdminLevel, Region, Viewport
from geomap.services.geojson_io import load_regions
from geomap.services.viewport import filter_visible

logger = logging.getLogger(__name__)

# Search order matches the map's zoom-out-to-zoom-in order
SEARCH_LEVELS = [AdminLevel.SIDO, AdminLevel.SGG, AdminLevel.DONG]


class RegionStore:
    """Holds the dong/sgg/sido datasets, loaded wholesale and never mutated.

    A level with no dataset is a configuration error: asking for it raises
    UnknownLevel instead of returning an empty map.
    """

    def __init__(self, datasets: Optional[Dict[AdminLevel, Sequence[Region]]] = None):
        self._datasets: Dict[AdminLevel, List[Region]] = {}
        self._by_code: Dict[AdminLevel, Dict[str, Region]] = {}
        for level, regions in (datasets or {}).items():
            self.set_level(level, regions)

    def set_level(self, level: AdminLevel, regions: Sequence[Region]) -> None:
        """Swap in a whole dataset for one level."""
        level = AdminLevel.parse(level)
        self._datasets[level] = list(regions)
        self._by_code[level] = {region.code: region for region in regions}

    @classmethod
    def from_directory(cls, data_dir) -> "RegionStore":
        """Load `{level}.json` for every level found in the directory."""
        store = cls()
        for level in AdminLevel:
            file_path = Path(data_dir) / f"{level.value}.json"
            if not file_path.exists():
                logger.warning(f"Dataset not found: {file_path}")
                continue
            store.set_level(level, load_regions(file_path, level))
        return store

    @property
    def loaded_levels(self) -> List[AdminLevel]:
        return [level for level in AdminLevel if level in self._datasets]

    def get_by_level(self, level) -> List[Region]:
        level = AdminLevel.parse(level)
        regions = self._datasets.get(level)
        if regions is None:
            raise UnknownLevel(level.value)
        return regions

    def get_region(self, code: str, level=AdminLevel.DONG) -> Region:
        level = AdminLevel.parse(level)
        if level not in self._by_code:
            raise UnknownLevel(level.value)
        region = self._by_code[level].get(code)
        if region is None:
            raise RegionNotFound(code)
        return region

    def search(self, region_name: str, level=None) -> List[Region]:
        """Case-insensitive substring search over region names."""
        needle = region_name.lower()
        levels = [AdminLevel.parse(level)] if level else SEARCH_LEVELS
        results = []
        for admin_level in levels:
            for region in self._datasets.get(admin_level, []):
                props = region.properties
                searchable = " ".join(
                    name
                    for name in (region.display_name, props.get("sidonm"), props.get("sggnm"))
                    if name
                ).lower()
                if needle in searchable:
                    results.append(region)
        return results

    def visible(self, level, viewport: Optional[Viewport]) -> List[Region]:
        return filter_visible(self.get_by_level(level), viewport)


_region_store: Optional[RegionStore] = None


def get_region_store() -> RegionStore:
    """Get the process-wide store, loading it from DATA_DIR on first use."""
    global _region_store
    if _region_store is None:
        _region_store = RegionStore.from_directory(get_settings().DATA_DIR)
    return _region_store


def set_region_store(store: Optional[RegionStore]) -> None:
    global _region_store
    _region_store = store
