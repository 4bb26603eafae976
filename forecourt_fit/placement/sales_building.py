"""Sales building placement along the front of the plot."""

import logging

from ..geometry.zones import zones_for
from ..models.placement import Footprint, Point, SalesBuildingPlacement
from ..models.request import PlotInput, SalesBuildingInput
from ..models.result import LayoutErrorCode, PlacementFailure
from ..models.rules import RuleSet

logger = logging.getLogger(__name__)


def get_building_footprint(
    building_type: str,
    orientation: str,
    rules: RuleSet,
) -> Footprint | None:
    """Get the axis-aligned footprint, with width and depth swapped for 'side'.

    Returns:
        Footprint, or None if the type is not in the ruleset
    """
    dims = rules.get_building_dimensions(building_type)
    if dims is None:
        return None
    if orientation == "side":
        return Footprint(width=dims.depth, depth=dims.width)
    return Footprint(width=dims.width, depth=dims.depth)


def place_sales_building(
    plot: PlotInput,
    building_input: SalesBuildingInput,
    rules: RuleSet,
) -> SalesBuildingPlacement | PlacementFailure:
    """Anchor the sales building at the front of the plot.

    The building sits ``min_front_offset`` from the road edge. Its x anchor
    follows the position preference: the side margin for front_left,
    centered for front_center, mirrored margin for front_right.

    Args:
        plot: Plot dimensions
        building_input: Building type, orientation and position preference
        rules: Ruleset

    Returns:
        SalesBuildingPlacement, or PlacementFailure naming the violated rule
    """
    sb_rules = rules.sales_building
    footprint = get_building_footprint(building_input.type, building_input.orientation, rules)
    if footprint is None:
        return PlacementFailure(
            code=LayoutErrorCode.INVALID_TYPE,
            message=f"Unknown sales building type '{building_input.type}'",
        )

    zones = zones_for(plot.depth, rules)
    y = sb_rules.min_front_offset
    if y + footprint.depth > zones.front.max_y:
        return PlacementFailure(
            code=LayoutErrorCode.EXCEEDS_FRONT_ZONE,
            message=(
                f"Sales building depth {footprint.depth}m from y={y}m exceeds "
                f"the front zone ending at y={zones.front.max_y:.2f}m"
            ),
        )

    if building_input.position_preference == "front_center":
        x = (plot.width - footprint.width) / 2
    elif building_input.position_preference == "front_right":
        x = plot.width - footprint.width - sb_rules.side_margin
    else:
        x = sb_rules.side_margin

    placement = SalesBuildingPlacement(
        building_type=building_input.type,
        position=Point(x=x, y=y),
        rotation_deg=sb_rules.rotation_by_orientation.get(building_input.orientation, 0),
        footprint=footprint,
        entry_side=building_input.entry_side,
    )

    if not placement.rect().is_within(plot.width, plot.depth):
        return PlacementFailure(
            code=LayoutErrorCode.OUT_OF_BOUNDS,
            message=(
                f"Sales building {footprint.width}x{footprint.depth}m at x={x:.2f}m "
                f"exceeds the {plot.width}m plot frontage"
            ),
        )

    logger.debug(
        f"Sales building {building_input.type} placed at ({x:.2f}, {y:.2f}), "
        f"rotation {placement.rotation_deg}°"
    )
    return placement
