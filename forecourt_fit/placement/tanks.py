"""Underground tank placement in the rear zone."""

import logging

from ..geometry.distance import circle_to_rect_edge_distance
from ..geometry.zones import zones_for
from ..models.placement import SalesBuildingPlacement, TankLayout, TankPlacement
from ..models.request import PlotInput
from ..models.result import LayoutErrorCode, PlacementFailure
from ..models.rules import RuleSet

logger = logging.getLogger(__name__)


def stack_height(count: int, rules: RuleSet) -> float:
    """Total depth of a vertical stack of ``count`` tanks with spacing."""
    t = rules.tanks
    return count * 2 * t.radius + max(0, count - 1) * t.min_tank_to_tank_spacing


def place_tanks(
    plot: PlotInput,
    count: int,
    building: SalesBuildingPlacement,
    rules: RuleSet,
) -> TankLayout | PlacementFailure:
    """Stack tanks in a single column centered in the rear zone.

    The usable span runs from the start of the rear zone to the rear
    boundary clearance. All tanks share ``x = boundary + radius``.

    Args:
        plot: Plot dimensions
        count: Number of tanks (fractional values are floored)
        building: Sales building, the obstacle tanks must clear
        rules: Ruleset

    Returns:
        TankLayout ordered from the road side, or PlacementFailure
    """
    t = rules.tanks
    count = int(count)
    zones = zones_for(plot.depth, rules)

    if count == 0:
        return TankLayout(tanks=[], top_y=zones.rear.min_y)

    if count not in t.supported_counts:
        return PlacementFailure(
            code=LayoutErrorCode.UNSUPPORTED_TANK_COUNT,
            message=f"Unsupported tank count {count}. Expected one of {t.supported_counts}",
        )

    # Boundary clearance applies at the rear plot edge only; rear.min_y is an internal zone line
    span_min_y = zones.rear.min_y
    span_max_y = plot.depth - t.min_to_plot_boundary
    available = span_max_y - span_min_y
    height = stack_height(count, rules)
    if height > available:
        return PlacementFailure(
            code=LayoutErrorCode.TANKS_DO_NOT_FIT,
            message=(
                f"{count} tanks need {height:.2f}m of depth but the rear zone "
                f"offers {max(0.0, available):.2f}m with the boundary clearance"
            ),
        )

    x = t.min_to_plot_boundary + t.radius
    first_y = span_min_y + (available - height) / 2 + t.radius
    pitch = 2 * t.radius + t.min_tank_to_tank_spacing
    tanks = [
        TankPlacement(x=x, y=first_y + i * pitch, radius=t.radius)
        for i in range(count)
    ]

    obstacle = building.rect()
    for i, tank in enumerate(tanks):
        min_x, min_y, max_x, max_y = tank.circle().get_bounds()
        if (
            min_x < t.min_to_plot_boundary
            or max_x > plot.width - t.min_to_plot_boundary
            or min_y < t.min_to_plot_boundary
            or max_y > plot.depth - t.min_to_plot_boundary
        ):
            return PlacementFailure(
                code=LayoutErrorCode.TANK_BOUNDARY_VIOLATION,
                message=(
                    f"Tank {i + 1} at ({tank.x:.2f}, {tank.y:.2f}) is closer than "
                    f"{t.min_to_plot_boundary}m to the plot boundary"
                ),
            )

        clearance = circle_to_rect_edge_distance(tank.circle(), obstacle)
        if clearance < t.min_to_sales_building:
            return PlacementFailure(
                code=LayoutErrorCode.TANK_TO_BUILDING_VIOLATION,
                message=(
                    f"Tank {i + 1} is {clearance:.2f}m from the sales building "
                    f"(required {t.min_to_sales_building}m)"
                ),
            )

    top_y = min(tank.y - tank.radius for tank in tanks)
    logger.debug(f"Placed {count} tanks at x={x:.2f}, top y={top_y:.2f}")
    return TankLayout(tanks=tanks, top_y=top_y)
