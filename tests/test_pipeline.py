"""End-to-end tests for layout validation.

Covers the reference scenarios, structural checks, stage ordering and the
determinism guarantees of the orchestrator.
"""

import math

import pytest

from forecourt_fit.models.result import LayoutErrorCode, LayoutFailure, LayoutSuccess
from forecourt_fit.pipeline import parse_request, validate_layout
from forecourt_fit.rules.loader import load_ruleset


class TestScenarios:
    """Reference scenarios."""

    def test_scenario_1_valid_layout(self, make_request):
        result = validate_layout(make_request())

        assert isinstance(result, LayoutSuccess)
        assert result.valid is True

        sb = result.sales_building
        assert sb.position.x == pytest.approx(11.0)
        assert sb.position.y == pytest.approx(2.0)
        assert sb.rotation_deg == 0
        assert (sb.footprint.width, sb.footprint.depth) == (8, 7)

        rear_min_y = result.zones["rear"]["min_y"]
        assert result.tanks.count == 2
        assert result.tanks.tanks[0].x == result.tanks.tanks[1].x
        for tank in result.tanks.tanks:
            assert tank.y - tank.radius >= rear_min_y
            assert tank.y + tank.radius <= 40

        assert result.mpds.count == 4
        assert [(m.row, m.column) for m in result.mpds.islands] == [(0, 0), (0, 1), (1, 0), (1, 1)]

    def test_scenario_2_building_wider_than_plot(self, make_request):
        result = validate_layout(make_request(width=10, building_type="Type5"))

        assert isinstance(result, LayoutFailure)
        assert result.valid is False
        assert result.error_code == LayoutErrorCode.OUT_OF_BOUNDS
        assert result.error.startswith("OUT_OF_BOUNDS")

    def test_scenario_3_tanks_do_not_fit(self, make_request):
        request = make_request(
            depth=20, building_type="Type1", orientation="side", tanks=3, mpds=0,
        )
        result = validate_layout(request)
        assert result.error_code == LayoutErrorCode.TANKS_DO_NOT_FIT

    def test_scenario_4_mpds_exceed_frontage(self, make_request):
        result = validate_layout(make_request(width=24))
        assert result.error_code == LayoutErrorCode.MPDS_EXCEED_FRONTAGE

    def test_scenario_5_mpds_cannot_be_placed(self, make_request):
        result = validate_layout(make_request(width=26, building_type="Type5"))
        assert result.error_code == LayoutErrorCode.MPDS_CANNOT_BE_PLACED

    def test_failure_exposes_no_geometry(self, make_request):
        result = validate_layout(make_request(width=10, building_type="Type5"))
        assert set(result.to_dict()) == {"valid", "error_code", "error"}


class TestStageOrder:
    """The first failing stage wins."""

    def test_building_checked_before_dispensers(self, make_request):
        result = validate_layout(make_request(width=10, building_type="Type5", mpds=3))
        assert result.error_code == LayoutErrorCode.OUT_OF_BOUNDS

    def test_dispensers_checked_before_tanks(self, make_request):
        result = validate_layout(make_request(width=26, building_type="Type5", tanks=3))
        assert result.error_code == LayoutErrorCode.MPDS_CANNOT_BE_PLACED

    def test_structural_checks_before_placement(self, make_request):
        request = make_request(width=10, building_type="Type5", road_type="Highway")
        assert validate_layout(request).error_code == LayoutErrorCode.INVALID_ROAD_TYPE

    def test_first_structural_error_wins(self, make_request):
        request = make_request(width=-1, road_type="Highway")
        assert validate_layout(request).error_code == LayoutErrorCode.INVALID_PLOT


class TestStructuralChecks:
    """Structural validation of every input field."""

    @pytest.mark.parametrize("width", ["30", None, math.nan, math.inf, 0, -5, True])
    def test_invalid_plot(self, make_request, width):
        assert validate_layout(make_request(width=width)).error_code == LayoutErrorCode.INVALID_PLOT

    @pytest.mark.parametrize("road_type", ["nh", "City Road", "", None])
    def test_invalid_road_type(self, make_request, road_type):
        result = validate_layout(make_request(road_type=road_type))
        assert result.error_code == LayoutErrorCode.INVALID_ROAD_TYPE

    def test_missing_sales_building(self, make_request):
        request = make_request()
        del request["salesBuilding"]
        result = validate_layout(request)
        assert result.error_code == LayoutErrorCode.MISSING_SALES_BUILDING

    @pytest.mark.parametrize("building_type", ["Type9", "type3", "SB Type 6", 3])
    def test_invalid_type(self, make_request, building_type):
        result = validate_layout(make_request(building_type=building_type))
        assert result.error_code == LayoutErrorCode.INVALID_TYPE

    def test_invalid_orientation(self, make_request):
        result = validate_layout(make_request(orientation="Front"))
        assert result.error_code == LayoutErrorCode.INVALID_ORIENTATION

    def test_invalid_position(self, make_request):
        result = validate_layout(make_request(position="rear_left"))
        assert result.error_code == LayoutErrorCode.INVALID_POSITION

    def test_invalid_entry_side(self, make_request):
        result = validate_layout(make_request(entry_side="back"))
        assert result.error_code == LayoutErrorCode.INVALID_ENTRY_SIDE

    @pytest.mark.parametrize("count", [-1, math.nan, "2", None])
    def test_invalid_tank_count(self, make_request, count):
        result = validate_layout(make_request(tanks=count))
        assert result.error_code == LayoutErrorCode.INVALID_TANK_COUNT

    def test_invalid_mpd_count(self, make_request):
        request = make_request()
        request["mpds"] = {}
        assert validate_layout(request).error_code == LayoutErrorCode.INVALID_MPD_COUNT

    def test_not_a_mapping(self):
        assert validate_layout("plot=30x40").error_code == LayoutErrorCode.INVALID_INPUT

    def test_type_spellings_accepted(self, make_request):
        for spelling in ("Type3", "Type 3", "SB Type 3"):
            result = validate_layout(make_request(building_type=spelling))
            assert result.valid
            assert result.sales_building.building_type == "Type3"

    def test_position_alias_accepted(self, make_request):
        request = make_request()
        request["salesBuilding"]["position"] = request["salesBuilding"].pop("positionPreference")
        assert validate_layout(request).valid

    def test_entry_side_defaults_to_road(self, make_request):
        request = make_request()
        del request["salesBuilding"]["entrySide"]
        assert validate_layout(request).sales_building.entry_side == "road"

    def test_parse_request_accepts_snake_case(self):
        request = parse_request({
            "plot": {"width": 30.0, "depth": 40.0},
            "road_type": "City",
            "sales_building": {
                "type": "Type2", "orientation": "side", "position_preference": "front_right",
            },
            "tanks": {"count": 1},
            "mpds": {"count": 2},
        })
        assert request.road_type == "City"
        assert request.sales_building.position_preference == "front_right"
        assert request.tank_count == 1

    def test_unsupported_counts_are_placement_errors(self, make_request):
        assert validate_layout(make_request(mpds=1)).error_code == LayoutErrorCode.UNSUPPORTED_MPD_COUNT
        assert validate_layout(make_request(tanks=5)).error_code == LayoutErrorCode.UNSUPPORTED_TANK_COUNT


class TestDeterminism:
    """Identical requests give identical verdicts and geometry."""

    def test_idempotent_success(self, make_request):
        first = validate_layout(make_request())
        second = validate_layout(make_request())
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_idempotent_failure(self, make_request):
        request = make_request(width=24)
        assert validate_layout(request) == validate_layout(request)

    def test_shrinking_depth_flips_to_tanks_do_not_fit(self, make_request):
        """Two tanks need 7.5m between the rear zone start and the rear clearance."""
        base = dict(building_type="Type1", position="front_right", tanks=2, mpds=0)
        assert validate_layout(make_request(depth=40, **base)).valid
        result = validate_layout(make_request(depth=32, **base))
        assert result.error_code == LayoutErrorCode.TANKS_DO_NOT_FIT


class TestSuccessPayload:
    """Content of a successful result."""

    def test_road_geometry_for_highways(self, make_request):
        nh = validate_layout(make_request(road_type="NH"))
        assert nh.road_geometry == {"acceleration_lane": 120, "deceleration_lane": 120, "taper": 60}
        city = validate_layout(make_request(road_type="City"))
        assert city.road_geometry is None

    def test_clearance_report(self, make_request):
        result = validate_layout(make_request())
        report = result.clearances
        assert report.min_mpd_to_building == pytest.approx(8.0)
        assert report.min_tank_to_building >= 15.0
        assert report.min_tank_to_tank == pytest.approx(1.5, abs=0.01)
        assert report.min_to_plot_boundary == pytest.approx(2.0)
        assert 0 < report.site_utilization < 1

    def test_empty_counts(self, make_request):
        result = validate_layout(make_request(tanks=0, mpds=0))
        assert result.valid
        assert result.tanks.tanks == []
        assert result.mpds.islands == []
        assert result.clearances.min_tank_to_building is None

    def test_custom_rules(self, make_request):
        """Relaxing the dispenser clearance makes scenario 5 feasible."""
        rules = load_ruleset("default", {"mpds": {"min_to_sales_building": 4.0}})
        result = validate_layout(make_request(width=26, building_type="Type5"), rules)
        assert result.valid
        assert result.mpds.row_gap == 4
