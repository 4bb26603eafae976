"""Edge-to-edge distances between circles and axis-aligned rectangles.

These are the primitives every clearance rule is checked against. They are
closed-form and exact, so a placement either clears a rule or it does not;
shapely is only used for reporting after the fact.
"""

import math

from .shapes import Circle, Rect


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def circle_to_rect_edge_distance(circle: Circle, rect: Rect) -> float:
    """Distance from a circle's boundary to a rectangle's boundary.

    Clamps the circle center onto the rectangle to find the closest point,
    then subtracts the radius. Returns 0 when the circle touches or overlaps
    the rectangle, including any circle centered inside it.
    """
    closest_x = _clamp(circle.x, rect.x, rect.max_x)
    closest_y = _clamp(circle.y, rect.y, rect.max_y)
    gap = math.hypot(circle.x - closest_x, circle.y - closest_y) - circle.radius
    return max(0.0, gap)


def rect_to_rect_edge_distance(a: Rect, b: Rect) -> float:
    """Gap between two axis-aligned rectangles.

    Per-axis positive gaps combined as a Euclidean distance; 0 when the
    rectangles touch or overlap.
    """
    dx = max(0.0, a.x - b.max_x, b.x - a.max_x)
    dy = max(0.0, a.y - b.max_y, b.y - a.max_y)
    return math.hypot(dx, dy)
