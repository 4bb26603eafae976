"""Forecourt-Fit - Rule-based layouts for fuel retail forecourts.

Places the sales building, underground tanks and dispenser (MPD) islands on
a rectangular plot and reports the first violated clearance rule when a
layout cannot be built. Rules come from YAML rulesets; valid layouts export
to GeoJSON and are served over MCP.

The layout engine has no MCP dependency:
    from forecourt_fit.pipeline import validate_layout
    result = validate_layout(request_dict)

The MCP server is created on demand:
    from forecourt_fit import get_mcp
"""

__version__ = "0.1.0"


def get_mcp():
    """Return the FastMCP server, importing it on first use."""
    from .server import mcp
    return mcp


def get_pipeline():
    """Return the layout pipeline module."""
    from . import pipeline
    return pipeline


__all__ = ["get_mcp", "get_pipeline", "__version__"]
