#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
GeoJSON 전처리: 동(dong) 레벨 데이터로 시군구(sgg), 시도(sido) 레벨 생성.

- 여러 raw GeoJSON 파일을 하나로 합침
- sgg / sido 코드로 그룹화 후 폴리곤 union
- 선택적으로 단순화 + 좌표 정밀도 축소

Usage:
  python prepare_boundaries.py RAW.geojson [RAW2.geojson ...] -o OUTPUT_DIR
                               [--optimize] [--precision N] [--workers N]
"""
import argparse
import logging
import os
import sys

# Add parent directory to path to import geomap modules
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from geomap.config import get_settings
from geomap.services.pipeline import prepare_boundaries


def main():
    settings = get_settings()
    ap = argparse.ArgumentParser(description="Build sgg/sido boundaries from dong-level GeoJSON.")
    ap.add_argument("inputs", nargs="+", help="Raw dong-level GeoJSON files")
    ap.add_argument("-o", "--output", default=settings.DATA_DIR, help="Output directory")
    ap.add_argument("--optimize", action="store_true",
                    help="Simplify polygons and reduce coordinate precision")
    ap.add_argument("--precision", type=int, default=settings.COORDINATE_PRECISION,
                    help="Decimal places kept when optimizing (default: 6, ~10cm)")
    ap.add_argument("--workers", type=int, default=settings.AGGREGATE_MAX_WORKERS,
                    help="Union groups in parallel with this many threads")
    args = ap.parse_args()

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    missing = [path for path in args.inputs if not os.path.exists(path)]
    if missing:
        print(f"Input file does not exist: {', '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    print("=== GeoJSON 전처리 시작 ===")
    levels = prepare_boundaries(
        args.inputs,
        args.output,
        optimize=args.optimize,
        digits=args.precision,
        max_workers=args.workers,
    )
    for level, regions in levels.items():
        print(f" - {level.value}: {len(regions)} features")
    print("=== 전처리 완료 ===")


if __name__ == "__main__":
    main()
