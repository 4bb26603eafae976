"""Dispenser island (MPD) placement by ordered, bounded grid search.

Islands form a grid of ``rows`` x ``count / rows``. The search walks an
explicit candidate list and returns the first grid that is inside the plot
and clears the sales building, so the iteration order is the preference
order:

1. larger row gap first (``row_gap_options``)
2. middle zone band, then the front zone fallback
3. start-x: centered, left margin, right margin
4. smaller start-y
"""

import logging
import math
from dataclasses import dataclass
from typing import Iterator

from ..geometry.distance import rect_to_rect_edge_distance
from ..geometry.shapes import Rect
from ..geometry.zones import zones_for
from ..models.placement import DispenserLayout, DispenserPlacement, SalesBuildingPlacement
from ..models.request import PlotInput
from ..models.result import LayoutErrorCode, PlacementFailure
from ..models.rules import RuleSet

logger = logging.getLogger(__name__)

# Tolerance for the inclusive upper end of the vertical search
_STEP_EPSILON = 1e-9


@dataclass(frozen=True)
class SearchBand:
    """Allowed range for the grid's start-y within one zone."""

    zone: str
    min_y: float
    max_y: float


def required_frontage(count: int, rules: RuleSet) -> float:
    """Frontage taken by ``count`` islands standing abreast with spacing."""
    m = rules.mpds
    return count * m.width + max(0, count - 1) * m.min_mpd_to_mpd_spacing


def grid_width(columns: int, rules: RuleSet) -> float:
    m = rules.mpds
    return columns * m.width + max(0, columns - 1) * m.min_mpd_to_mpd_spacing


def grid_height(row_gap: float, rules: RuleSet) -> float:
    m = rules.mpds
    return m.rows * m.depth + (m.rows - 1) * row_gap


def start_x_candidates(plot_width: float, row_width: float, margin: float) -> list[float]:
    """Centered, left-aligned and right-aligned start-x, clamped and deduplicated.

    Duplicates are detected at millimetre precision; the first occurrence
    keeps its place in the order.
    """
    max_x = max(0.0, plot_width - row_width)
    raw = [
        (plot_width - row_width) / 2,
        margin,
        plot_width - row_width - margin,
    ]
    candidates: dict[str, float] = {}
    for x in raw:
        clamped = max(0.0, min(max_x, x))
        candidates.setdefault(f"{clamped:.3f}", clamped)
    return list(candidates.values())


def iter_start_y(min_y: float, max_y: float, step: float) -> Iterator[float]:
    """Yield ``min_y, min_y + step, ...`` up to and including ``max_y``.

    Empty when the range is inverted or either bound is not finite.
    """
    if not (math.isfinite(min_y) and math.isfinite(max_y)) or max_y + _STEP_EPSILON < min_y:
        return
    steps = math.floor((max_y - min_y + _STEP_EPSILON) / step)
    for i in range(steps + 1):
        yield min_y + i * step


def search_bands(plot: PlotInput, row_gap: float, rules: RuleSet) -> list[SearchBand]:
    """Vertical start ranges for a row gap: middle zone first, then front fallback."""
    zones = zones_for(plot.depth, rules)
    m = rules.mpds
    max_start_y = zones.middle.max_y - grid_height(row_gap, rules)
    return [
        SearchBand("middle", zones.middle.min_y + m.zone_entry_offset, max_start_y),
        SearchBand(
            "front",
            max(
                rules.sales_building.min_front_offset + m.zone_entry_offset,
                zones.front.min_y + m.zone_entry_offset,
            ),
            max_start_y,
        ),
    ]


def build_grid(
    start_x: float,
    start_y: float,
    row_gap: float,
    columns: int,
    rules: RuleSet,
) -> list[Rect]:
    """Island rectangles in row-major order."""
    m = rules.mpds
    return [
        Rect(
            start_x + c * (m.width + m.min_mpd_to_mpd_spacing),
            start_y + r * (m.depth + row_gap),
            m.width,
            m.depth,
        )
        for r in range(m.rows)
        for c in range(columns)
    ]


def _grid_is_valid(
    islands: list[Rect],
    plot: PlotInput,
    obstacle: Rect,
    min_clearance: float,
) -> bool:
    for rect in islands:
        if not rect.is_within(plot.width, plot.depth):
            return False
        if rect_to_rect_edge_distance(rect, obstacle) < min_clearance:
            return False
    return True


def _search_band(
    band: SearchBand,
    x_candidates: list[float],
    row_gap: float,
    columns: int,
    plot: PlotInput,
    obstacle: Rect,
    rules: RuleSet,
) -> tuple[float, float] | None:
    if band.min_y > band.max_y:
        return None
    for start_x in x_candidates:
        for start_y in iter_start_y(band.min_y, band.max_y, rules.mpds.search_step):
            islands = build_grid(start_x, start_y, row_gap, columns, rules)
            if _grid_is_valid(islands, plot, obstacle, rules.mpds.min_to_sales_building):
                return start_x, start_y
    return None


def place_dispensers(
    plot: PlotInput,
    count: int,
    building: SalesBuildingPlacement,
    rules: RuleSet,
) -> DispenserLayout | PlacementFailure:
    """Find the most preferred island grid that clears the sales building.

    Args:
        plot: Plot dimensions
        count: Number of islands (fractional values are floored)
        building: Sales building, the obstacle islands must clear
        rules: Ruleset

    Returns:
        DispenserLayout with islands in row-major order, or PlacementFailure
    """
    m = rules.mpds
    count = int(count)

    if count == 0:
        return DispenserLayout()

    if count not in m.supported_counts or count % m.rows != 0:
        return PlacementFailure(
            code=LayoutErrorCode.UNSUPPORTED_MPD_COUNT,
            message=f"Unsupported MPD count {count}. Expected one of {m.supported_counts}",
        )

    frontage = required_frontage(count, rules)
    if frontage > plot.width - 2 * m.frontage_margin:
        return PlacementFailure(
            code=LayoutErrorCode.MPDS_EXCEED_FRONTAGE,
            message=(
                f"{count} MPDs need {frontage:.2f}m of frontage plus {m.frontage_margin}m "
                f"margins on each side; plot frontage is {plot.width}m"
            ),
        )

    columns = count // m.rows
    row_width = grid_width(columns, rules)
    x_candidates = start_x_candidates(plot.width, row_width, m.frontage_margin)
    obstacle = building.rect()

    for row_gap in m.row_gap_options:
        for band in search_bands(plot, row_gap, rules):
            found = _search_band(band, x_candidates, row_gap, columns, plot, obstacle, rules)
            if found is None:
                continue

            start_x, start_y = found
            islands = [
                DispenserPlacement(
                    row=i // columns,
                    column=i % columns,
                    x=rect.x,
                    y=rect.y,
                    width=rect.width,
                    depth=rect.depth,
                )
                for i, rect in enumerate(build_grid(start_x, start_y, row_gap, columns, rules))
            ]
            logger.debug(
                f"Placed {count} MPDs in {band.zone} zone at ({start_x:.2f}, {start_y:.2f}), "
                f"row gap {row_gap}m"
            )
            return DispenserLayout(islands=islands, row_gap=row_gap, zone=band.zone)

    return PlacementFailure(
        code=LayoutErrorCode.MPDS_CANNOT_BE_PLACED,
        message=(
            "MPDs cannot be placed within the front or middle zone while keeping "
            f"{m.min_to_sales_building}m from the sales building"
        ),
    )
