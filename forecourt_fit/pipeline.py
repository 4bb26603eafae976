"""Layout validation pipeline.

Orchestrates a single request end to end:
1. Structural checks on every input field
2. Sales building placement
3. Dispenser island placement
4. Tank placement
5. Clearance report for the accepted layout

The first failing stage ends the run; a success always carries final
geometry for every element.
"""

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from .geometry.clearance import compute_clearance_report
from .geometry.zones import zones_for
from .models.request import LayoutRequest
from .models.result import (
    LayoutErrorCode,
    LayoutFailure,
    LayoutResult,
    LayoutSuccess,
    PlacementFailure,
)
from .models.rules import RuleSet
from .placement.dispensers import place_dispensers
from .placement.sales_building import place_sales_building
from .placement.tanks import place_tanks
from .rules.loader import get_default_ruleset

logger = logging.getLogger(__name__)


_STRUCTURAL_MESSAGES = {
    LayoutErrorCode.INVALID_INPUT: "Invalid input data",
    LayoutErrorCode.INVALID_PLOT: "Plot width and depth must be finite numbers greater than 0",
    LayoutErrorCode.INVALID_ROAD_TYPE: "Invalid roadType. Expected NH, SH, or City",
    LayoutErrorCode.MISSING_SALES_BUILDING: "Missing salesBuilding configuration",
    LayoutErrorCode.INVALID_TYPE: "Invalid salesBuilding.type",
    LayoutErrorCode.INVALID_ORIENTATION: "Invalid salesBuilding.orientation. Expected front or side",
    LayoutErrorCode.INVALID_POSITION: (
        "Invalid salesBuilding.positionPreference. "
        "Expected front_left, front_center, or front_right"
    ),
    LayoutErrorCode.INVALID_ENTRY_SIDE: "Invalid salesBuilding.entrySide. Expected road or inside",
    LayoutErrorCode.INVALID_TANK_COUNT: "tanks.count must be a finite number >= 0",
    LayoutErrorCode.INVALID_MPD_COUNT: "mpds.count must be a finite number >= 0",
}

_TOP_LEVEL_CODES = {
    "plot": LayoutErrorCode.INVALID_PLOT,
    "roadType": LayoutErrorCode.INVALID_ROAD_TYPE,
    "road_type": LayoutErrorCode.INVALID_ROAD_TYPE,
    "salesBuilding": LayoutErrorCode.MISSING_SALES_BUILDING,
    "sales_building": LayoutErrorCode.MISSING_SALES_BUILDING,
    "tanks": LayoutErrorCode.INVALID_TANK_COUNT,
    "mpds": LayoutErrorCode.INVALID_MPD_COUNT,
}

_SALES_BUILDING_CODES = {
    "type": LayoutErrorCode.INVALID_TYPE,
    "orientation": LayoutErrorCode.INVALID_ORIENTATION,
    "positionPreference": LayoutErrorCode.INVALID_POSITION,
    "position": LayoutErrorCode.INVALID_POSITION,
    "position_preference": LayoutErrorCode.INVALID_POSITION,
    "entrySide": LayoutErrorCode.INVALID_ENTRY_SIDE,
    "entry_side": LayoutErrorCode.INVALID_ENTRY_SIDE,
}


def _structural_code(loc: tuple[Any, ...]) -> LayoutErrorCode:
    """Map a pydantic error location to the structural error it represents."""
    if not loc:
        return LayoutErrorCode.INVALID_INPUT
    code = _TOP_LEVEL_CODES.get(loc[0], LayoutErrorCode.INVALID_INPUT)
    if code is LayoutErrorCode.MISSING_SALES_BUILDING and len(loc) > 1:
        return _SALES_BUILDING_CODES.get(loc[1], LayoutErrorCode.MISSING_SALES_BUILDING)
    return code


def parse_request(
    data: Mapping[str, Any] | LayoutRequest,
    rules: RuleSet | None = None,
) -> LayoutRequest | PlacementFailure:
    """Run the structural checks on a raw request.

    Args:
        data: Request mapping in the caller's wire format, or a LayoutRequest
        rules: Ruleset whose building types are accepted (default ruleset if None)

    Returns:
        LayoutRequest, or PlacementFailure for the first malformed field
    """
    rules = rules or get_default_ruleset()
    if isinstance(data, LayoutRequest):
        data = data.model_dump(by_alias=True)

    try:
        return LayoutRequest.model_validate(
            data,
            context={"building_types": set(rules.sales_building.dimensions_by_type)},
        )
    except ValidationError as e:
        first = e.errors()[0]
        code = _structural_code(tuple(first["loc"]))
        logger.debug(f"Structural check failed at {first['loc']}: {first['msg']}")
        return PlacementFailure(
            code=code,
            message=f"{_STRUCTURAL_MESSAGES[code]} ({first['msg']})",
        )


def _fail(failure: PlacementFailure, stage: str) -> LayoutFailure:
    logger.info(f"Layout rejected at {stage}: {failure.error}")
    return LayoutFailure.from_placement_failure(failure)


def validate_layout(
    data: Mapping[str, Any] | LayoutRequest,
    rules: RuleSet | None = None,
) -> LayoutResult:
    """Validate a layout request and compute its placements.

    Args:
        data: Request mapping or LayoutRequest
        rules: Ruleset to apply (the shared default ruleset if None)

    Returns:
        LayoutSuccess with every placement, or LayoutFailure naming the
        first violated rule
    """
    rules = rules or get_default_ruleset()

    request = parse_request(data, rules)
    if isinstance(request, PlacementFailure):
        return _fail(request, "structural checks")

    plot = request.plot

    building = place_sales_building(plot, request.sales_building, rules)
    if isinstance(building, PlacementFailure):
        return _fail(building, "sales building placement")

    mpds = place_dispensers(plot, request.mpd_count, building, rules)
    if isinstance(mpds, PlacementFailure):
        return _fail(mpds, "MPD placement")

    tanks = place_tanks(plot, request.tank_count, building, rules)
    if isinstance(tanks, PlacementFailure):
        return _fail(tanks, "tank placement")

    road = rules.get_road_geometry(request.road_type)
    result = LayoutSuccess(
        road_type=request.road_type,
        plot_width=plot.width,
        plot_depth=plot.depth,
        zones=zones_for(plot.depth, rules).to_dict(),
        road_geometry=road.model_dump() if road is not None else None,
        sales_building=building,
        tanks=tanks,
        mpds=mpds,
        clearances=compute_clearance_report(building, tanks, mpds, plot.width, plot.depth),
    )
    logger.info(
        f"Layout valid: {plot.width}x{plot.depth}m plot, "
        f"{tanks.count} tanks, {mpds.count} MPDs"
    )
    return result
