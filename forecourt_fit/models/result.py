"""Tagged success/failure results for placement stages and full validation."""

from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from .placement import DispenserLayout, SalesBuildingPlacement, TankLayout


class LayoutErrorCode(str, Enum):
    """Every rule a layout request can violate."""

    # Structural
    INVALID_INPUT = "INVALID_INPUT"
    INVALID_PLOT = "INVALID_PLOT"
    INVALID_ROAD_TYPE = "INVALID_ROAD_TYPE"
    MISSING_SALES_BUILDING = "MISSING_SALES_BUILDING"
    INVALID_TYPE = "INVALID_TYPE"
    INVALID_ORIENTATION = "INVALID_ORIENTATION"
    INVALID_POSITION = "INVALID_POSITION"
    INVALID_ENTRY_SIDE = "INVALID_ENTRY_SIDE"
    INVALID_TANK_COUNT = "INVALID_TANK_COUNT"
    INVALID_MPD_COUNT = "INVALID_MPD_COUNT"
    # Fit
    EXCEEDS_FRONT_ZONE = "EXCEEDS_FRONT_ZONE"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"
    UNSUPPORTED_TANK_COUNT = "UNSUPPORTED_TANK_COUNT"
    TANKS_DO_NOT_FIT = "TANKS_DO_NOT_FIT"
    UNSUPPORTED_MPD_COUNT = "UNSUPPORTED_MPD_COUNT"
    MPDS_EXCEED_FRONTAGE = "MPDS_EXCEED_FRONTAGE"
    # Clearance
    TANK_BOUNDARY_VIOLATION = "TANK_BOUNDARY_VIOLATION"
    TANK_TO_BUILDING_VIOLATION = "TANK_TO_BUILDING_VIOLATION"
    # Search exhaustion
    MPDS_CANNOT_BE_PLACED = "MPDS_CANNOT_BE_PLACED"


class PlacementFailure(BaseModel):
    """A violated rule, returned instead of a placement."""

    model_config = ConfigDict(frozen=True)

    code: LayoutErrorCode
    message: str

    @property
    def error(self) -> str:
        """Human-readable error string, prefixed with the rule code."""
        return f"{self.code.value}: {self.message}"

    def __str__(self) -> str:
        return self.error


class ClearanceReport(BaseModel):
    """Achieved clearances and occupancy of a valid layout."""

    model_config = ConfigDict(frozen=True)

    min_tank_to_building: float | None = Field(
        default=None, ge=0, description="Closest tank edge to the sales building"
    )
    min_mpd_to_building: float | None = Field(
        default=None, ge=0, description="Closest island edge to the sales building"
    )
    min_tank_to_tank: float | None = Field(
        default=None, ge=0, description="Closest pair of tank edges"
    )
    min_to_plot_boundary: float = Field(
        ..., ge=0, description="Closest edge of any element to the plot boundary"
    )
    occupied_area_m2: float = Field(..., ge=0, description="Total element footprint area")
    site_utilization: float = Field(
        ..., ge=0, le=1, description="Occupied area over plot area"
    )


class LayoutSuccess(BaseModel):
    """Valid layout; every placement satisfies every rule."""

    model_config = ConfigDict(frozen=True)

    valid: Literal[True] = True
    road_type: str
    plot_width: float
    plot_depth: float
    zones: dict[str, dict[str, float]]
    road_geometry: dict[str, float] | None = Field(
        default=None, description="Acceleration/deceleration/taper lengths for NH/SH"
    )
    sales_building: SalesBuildingPlacement
    tanks: TankLayout
    mpds: DispenserLayout
    clearances: ClearanceReport

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


class LayoutFailure(BaseModel):
    """Invalid layout; only the first violated rule is reported."""

    model_config = ConfigDict(frozen=True)

    valid: Literal[False] = False
    error_code: LayoutErrorCode
    error: str

    @classmethod
    def from_placement_failure(cls, failure: PlacementFailure) -> "LayoutFailure":
        return cls(error_code=failure.code, error=failure.error)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")


LayoutResult = LayoutSuccess | LayoutFailure
