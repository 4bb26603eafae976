"""GeoJSON export of a valid forecourt layout.

The drawing collaborator consumes this FeatureCollection; every feature is
derived from the placements already in the result, never recomputed.
"""

from typing import Any

from shapely.geometry import LineString, box, mapping

from ..models.result import LayoutSuccess

# Offsets of the informational lane guides from the road edge (meters)
_LANE_OFFSETS = {
    "acceleration_lane": 0.6,
    "deceleration_lane": 1.2,
    "taper": 1.8,
}


def _feature(geometry: Any, **properties: Any) -> dict[str, Any]:
    return {
        "type": "Feature",
        "geometry": mapping(geometry),
        "properties": properties,
    }


def road_lanes_to_geojson(result: LayoutSuccess) -> list[dict[str, Any]]:
    """Lane guide lines along the frontage for NH/SH roads (empty for City)."""
    if result.road_geometry is None:
        return []

    features = []
    for lane, offset in _LANE_OFFSETS.items():
        line = LineString([(0, offset), (result.plot_width, offset)])
        features.append(_feature(
            line,
            kind="road_lane",
            id=lane,
            road_type=result.road_type,
            length=result.road_geometry[lane],
            layer="road",
        ))
    return features


def layout_to_geojson(
    result: LayoutSuccess,
    include_zones: bool = True,
    include_road: bool = True,
) -> dict[str, Any]:
    """Convert a valid layout to a GeoJSON FeatureCollection.

    Args:
        result: Successful validation result
        include_zones: Include the front/middle/rear zone bands
        include_road: Include road lane guides for NH/SH roads

    Returns:
        GeoJSON FeatureCollection dict
    """
    features = [
        _feature(
            box(0, 0, result.plot_width, result.plot_depth),
            kind="plot",
            width=result.plot_width,
            depth=result.plot_depth,
            layer="site",
        )
    ]

    if include_zones:
        for name, band in result.zones.items():
            features.append(_feature(
                box(0, band["min_y"], result.plot_width, band["max_y"]),
                kind="zone",
                id=f"zone_{name}",
                min_y=band["min_y"],
                max_y=band["max_y"],
                layer="zones",
            ))

    if include_road:
        features.extend(road_lanes_to_geojson(result))

    sb = result.sales_building
    features.append(_feature(
        sb.rect().to_shapely_polygon(),
        kind="sales_building",
        id="sales_building",
        building_type=sb.building_type,
        x=sb.position.x,
        y=sb.position.y,
        width=sb.footprint.width,
        depth=sb.footprint.depth,
        rotation=sb.rotation_deg,
        entry_side=sb.entry_side,
        layer="structures",
    ))

    for i, tank in enumerate(result.tanks.tanks):
        features.append(_feature(
            tank.circle().to_shapely_polygon(),
            kind="tank",
            id=f"tank_{i + 1}",
            x=tank.x,
            y=tank.y,
            radius=tank.radius,
            layer="structures",
        ))

    for i, island in enumerate(result.mpds.islands):
        features.append(_feature(
            island.rect().to_shapely_polygon(),
            kind="mpd",
            id=f"mpd_{i + 1}",
            row=island.row,
            column=island.column,
            x=island.x,
            y=island.y,
            width=island.width,
            depth=island.depth,
            layer="structures",
        ))

    return {
        "type": "FeatureCollection",
        "features": features,
        "properties": {
            "units": "meters",
            "road_type": result.road_type,
            "tank_zone_top_y": result.tanks.top_y,
            "mpd_row_gap": result.mpds.row_gap,
            "clearances": result.clearances.model_dump(),
        },
    }
