"""Front, middle and rear depth bands of the plot."""

from dataclasses import dataclass

from ..models.rules import RuleSet, ZoningRules


@dataclass(frozen=True)
class Band:
    """A band of the plot between two y-coordinates."""

    min_y: float
    max_y: float

    @property
    def depth(self) -> float:
        return self.max_y - self.min_y

    def to_dict(self) -> dict[str, float]:
        return {"min_y": self.min_y, "max_y": self.max_y}


@dataclass(frozen=True)
class Zones:
    """Contiguous bands covering [0, depth]: front, middle, rear."""

    front: Band
    middle: Band
    rear: Band

    def to_dict(self) -> dict[str, dict[str, float]]:
        return {
            "front": self.front.to_dict(),
            "middle": self.middle.to_dict(),
            "rear": self.rear.to_dict(),
        }


def zones_for(depth: float, rules: RuleSet | None = None) -> Zones:
    """Derive the three zones from plot depth.

    Args:
        depth: Plot depth in meters, already validated > 0
        rules: Ruleset providing the zoning ratios (defaults when omitted)

    Returns:
        Zones whose band boundaries are shared, so they never gap or overlap
    """
    zoning = rules.zoning if rules is not None else ZoningRules()
    front_max_y = depth * zoning.front_zone_max_depth_ratio
    rear_min_y = depth * zoning.rear_zone_min_depth_ratio
    return Zones(
        front=Band(0.0, front_max_y),
        middle=Band(front_max_y, rear_min_y),
        rear=Band(rear_min_y, depth),
    )
