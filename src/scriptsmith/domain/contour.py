"""Outline ring types in font-unit space.

This module defines the geometric output of outline generation:
- Contour: A closed polygon boundary (outer shell or hole)
- WindingDirection: Enum for contour winding direction
"""

from dataclasses import dataclass, field
from enum import Enum, auto

from scriptsmith.domain.stroke import Point


class WindingDirection(Enum):
    """Contour winding direction.

    In TrueType convention (y up):
    - Outer contours wind clockwise
    - Inner contours (holes) wind counter-clockwise
    """

    CLOCKWISE = auto()
    COUNTER_CLOCKWISE = auto()


@dataclass
class Contour:
    """A closed ring of font-unit points.

    The ring is implicitly closed; the first point is not repeated at the
    end.

    Attributes:
        points: List of points forming the ring
        direction: Winding direction (None until calculated)
    """

    points: list[Point]
    direction: WindingDirection | None = field(default=None)
    _cached_area: float | None = field(default=None, repr=False, init=False)
    _cached_bbox: tuple[float, float, float, float] | None = field(
        default=None, repr=False, init=False
    )

    def __len__(self) -> int:
        return len(self.points)

    def signed_area(self) -> float:
        """Calculate signed area using shoelace formula.

        The sign of the area indicates winding direction:
        - Positive area: counter-clockwise winding
        - Negative area: clockwise winding

        Result is cached for efficiency.

        Returns:
            Signed area of the contour
        """
        if self._cached_area is not None:
            return self._cached_area

        n = len(self.points)
        if n < 3:
            self._cached_area = 0.0
            return 0.0

        area = 0.0
        for i in range(n):
            j = (i + 1) % n
            area += self.points[i].x * self.points[j].y
            area -= self.points[j].x * self.points[i].y

        self._cached_area = area / 2.0
        return self._cached_area

    def area(self) -> float:
        """Absolute enclosed area."""
        return abs(self.signed_area())

    def winding(self) -> WindingDirection:
        """Winding direction derived from the signed area."""
        if self.signed_area() < 0:
            return WindingDirection.CLOCKWISE
        return WindingDirection.COUNTER_CLOCKWISE

    def reversed(self) -> "Contour":
        """Return the same ring traversed in the opposite direction."""
        direction = None
        if self.direction == WindingDirection.CLOCKWISE:
            direction = WindingDirection.COUNTER_CLOCKWISE
        elif self.direction == WindingDirection.COUNTER_CLOCKWISE:
            direction = WindingDirection.CLOCKWISE
        return Contour(points=list(reversed(self.points)), direction=direction)

    def bounding_box(self) -> tuple[float, float, float, float]:
        """Calculate bounding box of the contour.

        Result is cached for efficiency.

        Returns:
            Tuple of (min_x, min_y, max_x, max_y)
        """
        if self._cached_bbox is not None:
            return self._cached_bbox

        if not self.points:
            self._cached_bbox = (0.0, 0.0, 0.0, 0.0)
            return self._cached_bbox

        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]

        self._cached_bbox = (min(xs), min(ys), max(xs), max(ys))
        return self._cached_bbox

    def to_tuples(self) -> list[tuple[float, float]]:
        return [p.to_tuple() for p in self.points]
