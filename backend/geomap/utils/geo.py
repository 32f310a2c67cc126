from typing import Optional

from geomap.config import get_settings
from geomap.models.region import AdminLevel

# Fixed colours per sido code (시도 코드 기준)
SIDO_COLORS = {
    "11": "#FF6B6B",  # 서울특별시
    "26": "#4ECDC4",  # 부산광역시
    "27": "#45B7D1",  # 대구광역시
    "28": "#96CEB4",  # 인천광역시
    "29": "#FFEAA7",  # 광주광역시
    "30": "#DDA0DD",  # 대전광역시
    "31": "#98D8C8",  # 울산광역시
    "36": "#F7DC6F",  # 세종특별자치시
    "41": "#BB8FCE",  # 경기도
    "42": "#85C1E9",  # 강원도
    "43": "#F8B500",  # 충청북도
    "44": "#82E0AA",  # 충청남도
    "45": "#F1948A",  # 전라북도
    "46": "#85929E",  # 전라남도
    "47": "#73C6B6",  # 경상북도
    "48": "#F5B041",  # 경상남도
    "50": "#AF7AC5",  # 제주특별자치도
}
DEFAULT_COLOR = "#3B82F6"

# Palette for hash-based sgg colours
SGG_PALETTE = [
    "#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4", "#FFEAA7",
    "#DDA0DD", "#98D8C8", "#F7DC6F", "#BB8FCE", "#85C1E9",
    "#F8B500", "#82E0AA", "#F1948A", "#85929E", "#73C6B6",
    "#F5B041", "#AF7AC5", "#5DADE2", "#58D68D", "#EC7063",
    "#A569BD", "#48C9B0", "#5499C7", "#52BE80", "#F4D03F",
]


def hash_code(value: str) -> int:
    """Non-negative 32-bit string hash (h * 31 + c with int32 wrap-around)."""
    h = 0
    for ch in value:
        h = ((h << 5) - h + ord(ch)) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return abs(h)


def get_sgg_color(sgg_code: str) -> str:
    """Same sgg code always maps to the same palette colour."""
    return SGG_PALETTE[hash_code(sgg_code) % len(SGG_PALETTE)]


def get_region_color(sido: Optional[str], sgg: Optional[str], level: AdminLevel) -> str:
    if level is AdminLevel.SIDO:
        return SIDO_COLORS.get(sido or "", DEFAULT_COLOR)
    if not sgg:
        return DEFAULT_COLOR
    return get_sgg_color(sgg)


def admin_level_by_zoom(zoom: float) -> AdminLevel:
    """Pick the admin level to show for a map zoom level.

    zoom 0~9: sido (17), 10~12: sgg (~250), 13+: dong (~3,500)
    """
    settings = get_settings()
    if zoom <= settings.SIDO_MAX_ZOOM:
        return AdminLevel.SIDO
    if zoom <= settings.SGG_MAX_ZOOM:
        return AdminLevel.SGG
    return AdminLevel.DONG
