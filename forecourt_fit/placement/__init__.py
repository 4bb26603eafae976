"""Placement algorithms for the sales building, tanks and dispenser islands."""

from .dispensers import place_dispensers
from .sales_building import get_building_footprint, place_sales_building
from .tanks import place_tanks

__all__ = [
    "place_sales_building",
    "get_building_footprint",
    "place_tanks",
    "place_dispensers",
]
