"""Layout request input contract.

Field names follow the caller's camelCase wire format (``roadType``,
``salesBuilding``, ``positionPreference``); snake_case names are accepted too.
"""

import re
from typing import Any, Literal

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)
from pydantic.alias_generators import to_camel

RoadType = Literal["NH", "SH", "City"]
Orientation = Literal["front", "side"]
PositionPreference = Literal["front_left", "front_center", "front_right"]
EntrySide = Literal["road", "inside"]

_BUILDING_TYPE_PATTERN = re.compile(r"(?:SB )?Type ?(\d+)")


class _RequestModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PlotInput(_RequestModel):
    """Rectangular plot; origin at the front-left corner."""

    width: float = Field(
        ..., gt=0, strict=True, allow_inf_nan=False, description="Frontage in meters"
    )
    depth: float = Field(
        ..., gt=0, strict=True, allow_inf_nan=False, description="Depth away from the road in meters"
    )


class SalesBuildingInput(_RequestModel):
    """Sales building choices from the planning form."""

    type: str = Field(..., description="Building type, Type1..Type5")
    orientation: Orientation = Field(..., description="'side' rotates the footprint by 90°")
    position_preference: PositionPreference = Field(
        ...,
        validation_alias=AliasChoices("positionPreference", "position", "position_preference"),
        description="Horizontal anchor along the frontage",
    )
    entry_side: EntrySide = Field(
        default="road", description="Whether the entrance faces the road or the site"
    )

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, v: Any) -> Any:
        """Accept 'Type 3' and 'SB Type 3' as spellings of 'Type3'."""
        if isinstance(v, str):
            match = _BUILDING_TYPE_PATTERN.fullmatch(v)
            if match:
                return f"Type{match.group(1)}"
        return v

    @field_validator("type")
    @classmethod
    def validate_known_type(cls, v: str, info: ValidationInfo) -> str:
        """Check membership against the ruleset's types when one is in context."""
        known = (info.context or {}).get("building_types")
        if known is not None and v not in known:
            raise ValueError(f"Unknown type '{v}', expected one of {sorted(known)}")
        return v


class CountInput(_RequestModel):
    """Element count; fractional counts are floored by the placement stage."""

    count: float = Field(..., ge=0, strict=True, allow_inf_nan=False)


class LayoutRequest(_RequestModel):
    """Complete layout request for one plot."""

    plot: PlotInput
    road_type: RoadType
    sales_building: SalesBuildingInput
    tanks: CountInput
    mpds: CountInput

    @property
    def tank_count(self) -> int:
        return int(self.tanks.count)

    @property
    def mpd_count(self) -> int:
        return int(self.mpds.count)
