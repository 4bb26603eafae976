"""Export utilities for validated layouts."""

from .geojson import layout_to_geojson, road_lanes_to_geojson

__all__ = [
    "layout_to_geojson",
    "road_lanes_to_geojson",
]
