"""Placement output models for the sales building, tanks and dispensers."""

from pydantic import BaseModel, ConfigDict, Field

from ..geometry.shapes import Circle, Rect


class _PlacementModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class Point(_PlacementModel):
    """A point in plot coordinates."""

    x: float
    y: float


class Footprint(_PlacementModel):
    """Axis-aligned footprint after rotation has been applied."""

    width: float = Field(..., gt=0, description="Extent along x in meters")
    depth: float = Field(..., gt=0, description="Extent along y in meters")


class SalesBuildingPlacement(_PlacementModel):
    """Sales building anchored at its front-left corner."""

    building_type: str = Field(..., description="Building type key from the ruleset")
    position: Point = Field(..., description="Front-left corner of the footprint")
    rotation_deg: int = Field(default=0, description="0 for front orientation, 90 for side")
    footprint: Footprint
    entry_side: str = Field(default="road", description="Entrance faces 'road' or 'inside'")

    def rect(self) -> Rect:
        """Get the obstacle rectangle seen by downstream placements."""
        return Rect(self.position.x, self.position.y, self.footprint.width, self.footprint.depth)


class TankPlacement(_PlacementModel):
    """A circular underground tank."""

    x: float = Field(..., description="Center x")
    y: float = Field(..., description="Center y")
    radius: float = Field(..., gt=0)

    def circle(self) -> Circle:
        return Circle(self.x, self.y, self.radius)


class TankLayout(_PlacementModel):
    """Tanks ordered from the road side to the rear boundary."""

    tanks: list[TankPlacement] = Field(default_factory=list)
    top_y: float = Field(
        ..., description="Lowest y occupied by the tank stack (rear zone start when empty)"
    )

    @property
    def count(self) -> int:
        return len(self.tanks)


class DispenserPlacement(_PlacementModel):
    """A rectangular dispenser island anchored at its front-left corner."""

    row: int = Field(..., ge=0)
    column: int = Field(..., ge=0)
    x: float
    y: float
    width: float = Field(..., gt=0)
    depth: float = Field(..., gt=0)

    def rect(self) -> Rect:
        return Rect(self.x, self.y, self.width, self.depth)


class DispenserLayout(_PlacementModel):
    """Dispenser islands in row-major order (row 0 first)."""

    islands: list[DispenserPlacement] = Field(default_factory=list)
    row_gap: float | None = Field(default=None, description="Chosen gap between the rows")
    zone: str | None = Field(
        default=None, description="Search band that produced the grid: 'middle' or 'front'"
    )

    @property
    def count(self) -> int:
        return len(self.islands)
