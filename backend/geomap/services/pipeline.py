"""Offline dataset preparation: raw dong GeoJSON -> dong/sgg/sido files."""
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from geomap.models.region import AdminLevel, Region
from geomap.services.aggregator import build_levels
from geomap.services.geojson_io import (
    count_points,
    load_regions,
    optimize_region,
    save_regions,
)

logger = logging.getLogger(__name__)


def load_raw_features(file_paths: Iterable) -> List[Region]:
    """Concatenate the dong features of every raw file, in file order."""
    regions: List[Region] = []
    for file_path in file_paths:
        logger.info(f"Loading {Path(file_path).name}...")
        loaded = load_regions(file_path, AdminLevel.DONG)
        logger.info(f"  - {len(loaded)} features loaded")
        regions.extend(loaded)
    logger.info(f"Total features: {len(regions)}")
    return regions


def optimize_regions(regions: List[Region], level: AdminLevel, digits: Optional[int] = None) -> List[Region]:
    before = sum(count_points(r.geometry) for r in regions)
    optimized = [optimize_region(r, digits=digits) for r in regions]
    after = sum(count_points(r.geometry) for r in optimized)
    if before:
        logger.info(
            f"  {level.value}: points {before:,} -> {after:,} "
            f"({(1 - after / before) * 100:.1f}% reduced)"
        )
    return optimized


def prepare_boundaries(
    input_files: Iterable,
    output_dir,
    optimize: bool = False,
    digits: Optional[int] = None,
    max_workers: Optional[int] = None,
) -> Dict[AdminLevel, List[Region]]:
    """Build and write dong.json, sgg.json and sido.json.

    Aggregation always runs on the unoptimized dong geometry; simplification
    is applied per level afterwards.
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    fine = load_raw_features(input_files)
    levels = build_levels(fine, max_workers=max_workers)

    for level, regions in levels.items():
        if optimize:
            regions = optimize_regions(regions, level, digits=digits)
            levels[level] = regions
        save_regions(output_dir / f"{level.value}.json", regions)
    return levels
