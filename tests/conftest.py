"""Shared request builders for forecourt-fit tests."""

from typing import Any

import pytest

from forecourt_fit.models.rules import RuleSet


def build_request(
    width: float = 30,
    depth: float = 40,
    road_type: str = "NH",
    building_type: str = "Type3",
    orientation: str = "front",
    position: str = "front_center",
    entry_side: str = "road",
    tanks: float = 2,
    mpds: float = 4,
) -> dict[str, Any]:
    """Build a request in the caller's camelCase wire format."""
    return {
        "plot": {"width": width, "depth": depth},
        "roadType": road_type,
        "salesBuilding": {
            "type": building_type,
            "orientation": orientation,
            "positionPreference": position,
            "entrySide": entry_side,
        },
        "tanks": {"count": tanks},
        "mpds": {"count": mpds},
    }


@pytest.fixture
def make_request():
    return build_request


@pytest.fixture
def rules() -> RuleSet:
    return RuleSet()
