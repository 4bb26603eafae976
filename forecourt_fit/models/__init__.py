"""Pydantic models for forecourt-fit."""

from .placement import (
    DispenserLayout,
    DispenserPlacement,
    Footprint,
    Point,
    SalesBuildingPlacement,
    TankLayout,
    TankPlacement,
)
from .request import (
    CountInput,
    LayoutRequest,
    PlotInput,
    SalesBuildingInput,
)
from .result import (
    ClearanceReport,
    LayoutErrorCode,
    LayoutFailure,
    LayoutResult,
    LayoutSuccess,
    PlacementFailure,
)
from .rules import (
    BuildingDimensions,
    DispenserRules,
    RoadGeometry,
    RuleSet,
    SalesBuildingRules,
    TankRules,
    ZoningRules,
)

__all__ = [
    # Request
    "LayoutRequest",
    "PlotInput",
    "SalesBuildingInput",
    "CountInput",
    # Placements
    "Point",
    "Footprint",
    "SalesBuildingPlacement",
    "TankPlacement",
    "TankLayout",
    "DispenserPlacement",
    "DispenserLayout",
    # Results
    "LayoutErrorCode",
    "PlacementFailure",
    "ClearanceReport",
    "LayoutSuccess",
    "LayoutFailure",
    "LayoutResult",
    # Rules
    "RuleSet",
    "ZoningRules",
    "SalesBuildingRules",
    "BuildingDimensions",
    "TankRules",
    "DispenserRules",
    "RoadGeometry",
]
