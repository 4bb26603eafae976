"""Geometry for forecourt layout: shapes, edge distances and zones.

The shapely-based clearance report lives in ``geometry.clearance`` and is
imported from there directly.
"""

from .distance import circle_to_rect_edge_distance, rect_to_rect_edge_distance
from .shapes import Circle, Rect
from .zones import Band, Zones, zones_for

__all__ = [
    # Shapes
    "Rect",
    "Circle",
    # Distances
    "circle_to_rect_edge_distance",
    "rect_to_rect_edge_distance",
    # Zones
    "Band",
    "Zones",
    "zones_for",
]
