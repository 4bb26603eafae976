"""Engineering rules and constants for forecourt layout (the Rule Table)."""

from typing import Annotated, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ZoningRules(BaseModel):
    """Depth ratios splitting the plot into front, middle and rear bands."""

    model_config = ConfigDict(frozen=True)

    front_zone_max_depth_ratio: float = Field(
        default=0.3, gt=0, lt=1, description="Front zone ends at this fraction of plot depth"
    )
    rear_zone_min_depth_ratio: float = Field(
        default=0.65, gt=0, lt=1, description="Rear zone starts at this fraction of plot depth"
    )

    @model_validator(mode="after")
    def validate_order(self) -> "ZoningRules":
        """Front zone must end before the rear zone starts."""
        if self.front_zone_max_depth_ratio > self.rear_zone_min_depth_ratio:
            raise ValueError(
                f"Front zone ratio {self.front_zone_max_depth_ratio} exceeds "
                f"rear zone ratio {self.rear_zone_min_depth_ratio}"
            )
        return self


class BuildingDimensions(BaseModel):
    """Sales building footprint before rotation."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(..., gt=0, description="Width along the frontage in meters")
    depth: float = Field(..., gt=0, description="Depth away from the road in meters")


class SalesBuildingRules(BaseModel):
    """Placement rules for the sales building."""

    model_config = ConfigDict(frozen=True)

    min_front_offset: float = Field(
        default=2.0, ge=0, description="Distance from the road edge to the building front"
    )
    side_margin: float = Field(
        default=2.0, ge=0, description="Margin to the side boundary for left/right preferences"
    )
    rotation_by_orientation: Dict[str, int] = Field(
        default_factory=lambda: {"front": 0, "side": 90},
        description="Rotation flag in degrees for each orientation",
    )
    dimensions_by_type: Dict[str, BuildingDimensions] = Field(
        default_factory=lambda: {
            "Type1": BuildingDimensions(width=4, depth=5),
            "Type2": BuildingDimensions(width=6, depth=6),
            "Type3": BuildingDimensions(width=8, depth=7),
            "Type4": BuildingDimensions(width=10, depth=8),
            "Type5": BuildingDimensions(width=12, depth=9),
        },
        description="Footprint by building type",
    )


class TankRules(BaseModel):
    """Rules for circular underground storage tanks."""

    model_config = ConfigDict(frozen=True)

    radius: float = Field(default=1.5, gt=0, description="Tank radius in meters")
    min_tank_to_tank_spacing: float = Field(
        default=1.5, ge=0, description="Edge-to-edge spacing between stacked tanks"
    )
    min_to_plot_boundary: float = Field(
        default=4.0, ge=0, description="Edge clearance from any plot boundary"
    )
    min_to_sales_building: float = Field(
        default=15.0, ge=0, description="Edge clearance from the sales building"
    )
    supported_counts: List[int] = Field(default_factory=lambda: [1, 2, 3])


class DispenserRules(BaseModel):
    """Rules for rectangular dispenser islands (MPDs)."""

    model_config = ConfigDict(frozen=True)

    width: float = Field(default=4.0, gt=0, description="Island width in meters")
    depth: float = Field(default=3.0, gt=0, description="Island depth in meters")
    rows: int = Field(default=2, ge=1, description="Rows in the island grid")
    min_mpd_to_mpd_spacing: float = Field(
        default=2.0, ge=0, description="Horizontal spacing between islands"
    )
    min_to_sales_building: float = Field(
        default=8.0, ge=0, description="Edge clearance from the sales building"
    )
    frontage_margin: float = Field(
        default=2.0, ge=0, description="Side margin kept free along the frontage"
    )
    row_gap_options: List[Annotated[float, Field(ge=0, allow_inf_nan=False)]] = Field(
        default_factory=lambda: [6.0, 4.0, 3.0, 2.0],
        min_length=1,
        description="Row gaps to try, most preferred first",
    )
    zone_entry_offset: float = Field(
        default=1.0, ge=0, description="Minimum lead-in from the start of a search band"
    )
    search_step: float = Field(
        default=0.25,
        ge=0.05,
        allow_inf_nan=False,
        description="Vertical step of the start-position search",
    )
    supported_counts: List[int] = Field(default_factory=lambda: [2, 4])


class RoadGeometry(BaseModel):
    """Lane lengths for highway access. Informational, not a spatial constraint."""

    model_config = ConfigDict(frozen=True)

    acceleration_lane: float = Field(..., ge=0, description="Acceleration lane length")
    deceleration_lane: float = Field(..., ge=0, description="Deceleration lane length")
    taper: float = Field(..., ge=0, description="Taper length")


class RuleSet(BaseModel):
    """Complete rule set for forecourt layout.

    Constructed once per process and shared read-only. Rules can be
    overridden at request time via JSON merge patch, which always builds a
    new RuleSet.
    """

    model_config = ConfigDict(frozen=True)

    units: str = Field(default="meters", description="Length unit of every value")
    zoning: ZoningRules = Field(default_factory=ZoningRules)
    sales_building: SalesBuildingRules = Field(default_factory=SalesBuildingRules)
    tanks: TankRules = Field(default_factory=TankRules)
    mpds: DispenserRules = Field(default_factory=DispenserRules)
    road_types: Dict[str, Optional[RoadGeometry]] = Field(
        default_factory=lambda: {
            "NH": RoadGeometry(acceleration_lane=120, deceleration_lane=120, taper=60),
            "SH": RoadGeometry(acceleration_lane=90, deceleration_lane=90, taper=45),
            "City": None,
        },
        description="Road geometry by road classification (None when not applicable)",
    )

    def get_building_dimensions(self, building_type: str) -> Optional[BuildingDimensions]:
        """Get the unrotated footprint for a building type, or None if unknown."""
        return self.sales_building.dimensions_by_type.get(building_type)

    def get_road_geometry(self, road_type: str) -> Optional[RoadGeometry]:
        """Get lane geometry for a road type (None for City roads)."""
        return self.road_types.get(road_type)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "RuleSet":
        """Load ruleset from YAML string."""
        import yaml
        data = yaml.safe_load(yaml_content) or {}
        return cls(**data)

    def merge_override(self, override: Dict) -> "RuleSet":
        """Merge override dict into this ruleset (JSON merge patch semantics)."""
        import json
        base = json.loads(self.model_dump_json())
        _deep_merge(base, override)
        return RuleSet(**base)


def _deep_merge(base: Dict, override: Dict) -> None:
    """Deep merge override into base dict (modifies base in place)."""
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
