"""Tests for tank placement in the rear zone."""

import pytest

from forecourt_fit.models.request import PlotInput, SalesBuildingInput
from forecourt_fit.models.result import LayoutErrorCode, PlacementFailure
from forecourt_fit.placement.sales_building import place_sales_building
from forecourt_fit.placement.tanks import place_tanks, stack_height


def _building(plot, rules, building_type="Type3", position="front_center"):
    building_input = SalesBuildingInput(
        type=building_type, orientation="front", position_preference=position,
    )
    return place_sales_building(plot, building_input, rules)


class TestStackHeight:
    """Test stack height arithmetic."""

    def test_heights(self, rules):
        assert stack_height(1, rules) == pytest.approx(3.0)
        assert stack_height(2, rules) == pytest.approx(7.5)
        assert stack_height(3, rules) == pytest.approx(12.0)


class TestPlaceTanks:
    """Test the vertical tank stack."""

    def test_two_tanks_centered_in_rear_span(self, rules):
        plot = PlotInput(width=30, depth=40)
        layout = place_tanks(plot, 2, _building(plot, rules), rules)

        assert layout.count == 2
        assert all(t.x == pytest.approx(5.5) for t in layout.tanks)
        assert layout.tanks[0].y == pytest.approx(28.75)
        assert layout.tanks[1].y == pytest.approx(33.25)
        assert layout.top_y == pytest.approx(27.25)

    def test_tanks_ordered_from_road_side(self, rules):
        plot = PlotInput(width=30, depth=50)
        layout = place_tanks(plot, 3, _building(plot, rules), rules)
        ys = [t.y for t in layout.tanks]
        assert ys == sorted(ys)
        assert ys == [pytest.approx(34.75), pytest.approx(39.25), pytest.approx(43.75)]

    def test_stack_stays_in_rear_zone_and_clear_of_boundary(self, rules):
        plot = PlotInput(width=30, depth=50)
        layout = place_tanks(plot, 3, _building(plot, rules), rules)
        for tank in layout.tanks:
            assert tank.y - tank.radius >= 50 * 0.65
            assert tank.y + tank.radius <= 50 - 4

    def test_single_tank(self, rules):
        plot = PlotInput(width=30, depth=40)
        layout = place_tanks(plot, 1, _building(plot, rules), rules)
        assert layout.tanks[0].y == pytest.approx(31.0)

    def test_zero_tanks_is_empty(self, rules):
        plot = PlotInput(width=30, depth=40)
        layout = place_tanks(plot, 0, _building(plot, rules), rules)
        assert layout.tanks == []
        assert layout.top_y == pytest.approx(26.0)

    def test_fractional_count_is_floored(self, rules):
        plot = PlotInput(width=30, depth=40)
        layout = place_tanks(plot, 2.7, _building(plot, rules), rules)
        assert layout.count == 2

    def test_unsupported_count(self, rules):
        plot = PlotInput(width=30, depth=40)
        result = place_tanks(plot, 4, _building(plot, rules), rules)
        assert isinstance(result, PlacementFailure)
        assert result.code == LayoutErrorCode.UNSUPPORTED_TANK_COUNT

    def test_three_tanks_do_not_fit_shallow_plot(self, rules):
        plot = PlotInput(width=30, depth=40)
        result = place_tanks(plot, 3, _building(plot, rules), rules)
        assert isinstance(result, PlacementFailure)
        assert result.code == LayoutErrorCode.TANKS_DO_NOT_FIT

    def test_narrow_plot_violates_boundary(self, rules):
        """Tank column at x=5.5 reaches x=7, past the 6m limit of a 10m plot."""
        plot = PlotInput(width=10, depth=40)
        result = place_tanks(plot, 1, _building(plot, rules, "Type1", "front_left"), rules)
        assert isinstance(result, PlacementFailure)
        assert result.code == LayoutErrorCode.TANK_BOUNDARY_VIOLATION

    def test_building_clearance_violation(self, rules):
        """On a 33m plot the first tank sits under 15m from a front-left building."""
        plot = PlotInput(width=30, depth=33)
        result = place_tanks(plot, 2, _building(plot, rules, "Type1", "front_left"), rules)
        assert isinstance(result, PlacementFailure)
        assert result.code == LayoutErrorCode.TANK_TO_BUILDING_VIOLATION

    def test_building_clearance_respected(self, rules):
        plot = PlotInput(width=30, depth=40)
        building = _building(plot, rules)
        layout = place_tanks(plot, 2, building, rules)
        for tank in layout.tanks:
            dist = tank.circle().to_shapely_polygon(resolution=128).distance(
                building.rect().to_shapely_polygon()
            )
            assert dist >= 15.0
