"""Hover / selection state and per-region render style.

The state is an immutable value: every pointer or click event returns a new
state instead of mutating a shared store, so callers thread it through
their event handlers explicitly.
"""
from enum import Enum
from typing import Optional

from pydantic import BaseModel

from geomap.models.region import AdminLevel, Region
from geomap.utils.geo import get_region_color

DEFAULT_FILL_OPACITY = 0.4
HOVER_FILL_OPACITY = 0.6
SELECTED_FILL_OPACITY = 0.7
STROKE_COLOR = "#FFFFFF"
STROKE_WEIGHT = 2
SELECTED_STROKE_COLOR = "#000000"
SELECTED_STROKE_WEIGHT = 3


class RegionStyle(str, Enum):
    DEFAULT = "default"
    HOVERING = "hovering"
    SELECTED = "selected"


class SelectionState(BaseModel):
    """Currently hovered and selected region codes at one admin level."""

    level: AdminLevel = AdminLevel.SGG
    hovered: Optional[str] = None
    selected: Optional[str] = None

    class Config:
        frozen = True

    def pointer_enter(self, code: str) -> "SelectionState":
        return self.model_copy(update={"hovered": code})

    def pointer_leave(self, code: str) -> "SelectionState":
        # A late leave from a region we already moved off must not clear
        # the hover of the region now under the pointer.
        if self.hovered != code:
            return self
        return self.model_copy(update={"hovered": None})

    def click(self, code: str) -> "SelectionState":
        """Toggle selection; clicking another region replaces it."""
        if self.selected == code:
            return self.model_copy(update={"selected": None})
        return self.model_copy(update={"selected": code})

    def change_level(self, level: AdminLevel) -> "SelectionState":
        """Codes are not comparable across levels, so everything resets."""
        return SelectionState(level=AdminLevel.parse(level))

    def style_for(self, code: str) -> RegionStyle:
        if self.selected == code:
            return RegionStyle.SELECTED
        if self.hovered == code:
            return RegionStyle.HOVERING
        return RegionStyle.DEFAULT


class PolygonStyle(BaseModel):
    fill_color: str
    fill_opacity: float
    stroke_color: str = STROKE_COLOR
    stroke_weight: int = STROKE_WEIGHT
    stroke_opacity: float = 0.8

    class Config:
        frozen = True


def district_styles(region: Region) -> dict[RegionStyle, PolygonStyle]:
    """Default, hover and selected styles sharing the region's fill colour."""
    sgg = region.properties.get("sgg")
    if not sgg and region.level is not AdminLevel.SIDO:
        sgg = region.district_key
    sido = region.properties.get("sido") or region.province_key
    fill_color = get_region_color(sido, sgg, region.level)
    return {
        RegionStyle.DEFAULT: PolygonStyle(
            fill_color=fill_color,
            fill_opacity=DEFAULT_FILL_OPACITY,
        ),
        RegionStyle.HOVERING: PolygonStyle(
            fill_color=fill_color,
            fill_opacity=HOVER_FILL_OPACITY,
            stroke_opacity=1,
        ),
        RegionStyle.SELECTED: PolygonStyle(
            fill_color=fill_color,
            fill_opacity=SELECTED_FILL_OPACITY,
            stroke_color=SELECTED_STROKE_COLOR,
            stroke_weight=SELECTED_STROKE_WEIGHT,
            stroke_opacity=1,
        ),
    }


def render_style(state: SelectionState, region: Region) -> PolygonStyle:
    return district_styles(region)[state.style_for(region.code)]
