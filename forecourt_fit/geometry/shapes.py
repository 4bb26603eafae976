"""Axis-aligned rectangle and circle value objects in plot coordinates."""

from dataclasses import dataclass

from shapely.geometry import Point, Polygon, box


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle anchored at its minimum (front-left) corner."""

    x: float
    y: float
    width: float
    depth: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.depth

    @property
    def area(self) -> float:
        return self.width * self.depth

    def get_bounds(self) -> tuple[float, float, float, float]:
        """Get (min_x, min_y, max_x, max_y)."""
        return self.x, self.y, self.max_x, self.max_y

    def is_within(self, width: float, depth: float) -> bool:
        """Check full containment in a plot of the given size anchored at the origin."""
        return (
            self.x >= 0
            and self.y >= 0
            and self.max_x <= width
            and self.max_y <= depth
        )

    def to_shapely_polygon(self) -> Polygon:
        return box(self.x, self.y, self.max_x, self.max_y)


@dataclass(frozen=True)
class Circle:
    """Circle given by center and radius."""

    x: float
    y: float
    radius: float

    def get_bounds(self) -> tuple[float, float, float, float]:
        """Get axis-aligned bounding box (min_x, min_y, max_x, max_y)."""
        return (
            self.x - self.radius,
            self.y - self.radius,
            self.x + self.radius,
            self.y + self.radius,
        )

    def to_shapely_polygon(self, resolution: int = 32) -> Polygon:
        """Approximate the circle as a polygon for shapely operations."""
        return Point(self.x, self.y).buffer(self.radius, quad_segs=resolution)
