"""FastMCP server for forecourt layout validation.

Exposes MCP tools for validating a forecourt layout request, exporting the
resulting placement as GeoJSON, and inspecting rulesets.
"""

import logging
import sys
from typing import Any

import yaml
from mcp.server.fastmcp import FastMCP
from pydantic import ValidationError

from .export.geojson import layout_to_geojson
from .models.result import LayoutSuccess
from .models.rules import RuleSet
from .pipeline import validate_layout
from .rules.loader import get_default_ruleset, list_rulesets, load_ruleset

# stdout carries the JSON-RPC stream under stdio transport; log to stderr
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    stream=sys.stderr,
)
logger = logging.getLogger(__name__)

mcp = FastMCP(
    name="forecourt_fit_mcp",
    instructions="Validate fuel station forecourt layouts on a rectangular plot. "
    "Use layout_validate to place the sales building, tanks and dispenser islands, "
    "layout_export_geojson for drawing-ready geometry, and ruleset_list/ruleset_get "
    "to inspect clearance rules.",
)


# Every tool is a pure function of its arguments and the shipped rulesets
_PURE_TOOL = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}


def _resolve_rules(ruleset: str, rules_override: dict[str, Any] | None) -> RuleSet:
    if ruleset == "default" and not rules_override:
        return get_default_ruleset()
    return load_ruleset(ruleset, rules_override)


def _ruleset_error(ruleset: str, e: Exception) -> dict[str, Any]:
    """Tool error payload for a ruleset that cannot be loaded."""
    if isinstance(e, FileNotFoundError):
        message = f"Ruleset '{ruleset}' not found"
        hint = "Use ruleset_list to see available rulesets"
    else:
        message = str(e)
        hint = "Check rules_override keys and values against ruleset_get"
    return {"isError": True, "valid": False, "error": message, "suggestion": hint}


@mcp.tool(annotations=_PURE_TOOL)
async def layout_validate(
    request: dict[str, Any],
    ruleset: str = "default",
    rules_override: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Validate a forecourt layout request and return its placements.

    Args:
        request: Layout request with plot {width, depth}, roadType (NH, SH, City),
                 salesBuilding {type, orientation, positionPreference, entrySide},
                 tanks {count}, mpds {count}
        ruleset: Ruleset name (use ruleset_list to see available options)
        rules_override: Optional rule overrides merged into the ruleset

    Returns:
        On success: valid=True with sales_building, tanks, mpds, zones and clearances.
        On failure: valid=False with error_code and error naming the first violated rule.

    Example request:
        {
            "plot": {"width": 30, "depth": 40},
            "roadType": "NH",
            "salesBuilding": {"type": "Type3", "orientation": "front",
                              "positionPreference": "front_center", "entrySide": "road"},
            "tanks": {"count": 2},
            "mpds": {"count": 4}
        }
    """
    try:
        rules = _resolve_rules(ruleset, rules_override)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        logger.exception(f"Failed to load ruleset '{ruleset}'")
        return _ruleset_error(ruleset, e)

    return validate_layout(request, rules).to_dict()


@mcp.tool(annotations=_PURE_TOOL)
async def layout_export_geojson(
    request: dict[str, Any],
    ruleset: str = "default",
    rules_override: dict[str, Any] | None = None,
    include_zones: bool = True,
    include_road: bool = True,
) -> dict[str, Any]:
    """Validate a layout request and export the placement as GeoJSON.

    Args:
        request: Layout request (same schema as layout_validate)
        ruleset: Ruleset name
        rules_override: Optional rule overrides
        include_zones: Include front/middle/rear zone bands
        include_road: Include NH/SH road lane guides

    Returns:
        Dict with valid=True and a GeoJSON FeatureCollection, or the validation failure
    """
    try:
        rules = _resolve_rules(ruleset, rules_override)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        logger.exception(f"Failed to load ruleset '{ruleset}'")
        return _ruleset_error(ruleset, e)

    result = validate_layout(request, rules)
    if not isinstance(result, LayoutSuccess):
        return result.to_dict()

    return {
        "valid": True,
        "geojson": layout_to_geojson(
            result, include_zones=include_zones, include_road=include_road
        ),
    }


@mcp.tool(annotations=_PURE_TOOL)
async def ruleset_list() -> dict[str, Any]:
    """Shipped forecourt rulesets.

    Returns:
        Dict with rulesets [{name, description}] and their count
    """
    available = list_rulesets()
    return {"rulesets": available, "count": len(available)}


@mcp.tool(annotations=_PURE_TOOL)
async def ruleset_get(name: str = "default") -> dict[str, Any]:
    """Show a ruleset's values alongside the JSON schema they must satisfy.

    Args:
        name: Ruleset name as reported by ruleset_list

    Returns:
        Dict with name, rules and schema; isError when the ruleset is missing
        or fails validation
    """
    try:
        rules = load_ruleset(name)
    except (FileNotFoundError, ValidationError, yaml.YAMLError) as e:
        if not isinstance(e, FileNotFoundError):
            logger.exception(f"Ruleset '{name}' is invalid")
        failure = _ruleset_error(name, e)
        failure.pop("valid")
        return failure

    return {
        "name": name,
        "rules": rules.model_dump(),
        "schema": RuleSet.model_json_schema(),
    }


def main():
    """Entry point for the forecourt-fit-mcp console script (stdio transport)."""
    mcp.run()


if __name__ == "__main__":
    main()
