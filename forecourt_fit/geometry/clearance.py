"""Clearance reporting for a placed layout, using Shapely geometry."""

import logging

from shapely.geometry import box
from shapely.ops import unary_union

from ..models.placement import DispenserLayout, SalesBuildingPlacement, TankLayout
from ..models.result import ClearanceReport

logger = logging.getLogger(__name__)


def _min_or_none(values: list[float]) -> float | None:
    return min(values) if values else None


def compute_clearance_report(
    building: SalesBuildingPlacement,
    tanks: TankLayout,
    mpds: DispenserLayout,
    plot_width: float,
    plot_depth: float,
) -> ClearanceReport:
    """Measure achieved clearances of a placed layout.

    Placement decisions are made with the exact distance primitives; this
    report re-measures the result with Shapely so callers can see how much
    margin each rule kept. Circles are polygon approximations, so tank
    distances can read up to a few millimetres high.

    Args:
        building: Sales building placement
        tanks: Tank stack
        mpds: Dispenser grid
        plot_width: Plot frontage in meters
        plot_depth: Plot depth in meters

    Returns:
        ClearanceReport with minimum distances and site utilization
    """
    building_geom = building.rect().to_shapely_polygon()
    tank_geoms = [t.circle().to_shapely_polygon() for t in tanks.tanks]
    mpd_geoms = [m.rect().to_shapely_polygon() for m in mpds.islands]

    tank_to_tank = [
        a.distance(b)
        for i, a in enumerate(tank_geoms)
        for b in tank_geoms[i + 1:]
    ]

    plot_edge = box(0, 0, plot_width, plot_depth).exterior
    all_geoms = [building_geom, *tank_geoms, *mpd_geoms]
    boundary_distance = min(plot_edge.distance(g) for g in all_geoms)

    occupied = unary_union(all_geoms).area
    plot_area = plot_width * plot_depth

    report = ClearanceReport(
        min_tank_to_building=_min_or_none([g.distance(building_geom) for g in tank_geoms]),
        min_mpd_to_building=_min_or_none([g.distance(building_geom) for g in mpd_geoms]),
        min_tank_to_tank=_min_or_none(tank_to_tank),
        min_to_plot_boundary=boundary_distance,
        occupied_area_m2=occupied,
        site_utilization=min(1.0, occupied / plot_area) if plot_area > 0 else 0.0,
    )
    logger.debug(f"Clearance report: {report.model_dump()}")
    return report
