"""Geometric operations on points, polylines and rings.

This module provides core mathematical utilities for:
- Signed area calculation (shoelace formula)
- Winding number under the nonzero rule
- Segment direction and perpendicular offsets
- Removal of near-duplicate consecutive points

All functions are pure, stateless, and designed for use in parallel processing.
"""

import math

from scriptsmith.domain import Point


def signed_area(points: list[tuple[float, float]]) -> float:
    """Calculate signed area of a polygon using the shoelace formula.

    The sign of the area indicates winding direction:
    - Positive area: counter-clockwise winding
    - Negative area: clockwise winding

    Args:
        points: Ring vertices, not closed by a duplicate

    Returns:
        Signed area of the polygon (0.0 for fewer than 3 points)
    """
    n = len(points)
    if n < 3:
        return 0.0

    area = 0.0
    for i in range(n):
        x1, y1 = points[i]
        x2, y2 = points[(i + 1) % n]
        area += x1 * y2 - x2 * y1

    return area / 2.0


def winding_number(x: float, y: float, ring: list[tuple[float, float]]) -> int:
    """Calculate how many times a ring winds around a point.

    Non-zero means the point is filled under the nonzero fill rule, which is
    how overlapping parts of one inked stroke should be treated.

    Args:
        x: X coordinate of point to test
        y: Y coordinate of point to test
        ring: Ring vertices, not closed by a duplicate

    Returns:
        Signed winding number (positive for counter-clockwise turns)
    """
    n = len(ring)
    if n < 3:
        return 0

    wn = 0
    for i in range(n):
        x1, y1 = ring[i]
        x2, y2 = ring[(i + 1) % n]
        is_left = (x2 - x1) * (y - y1) - (x - x1) * (y2 - y1)
        if y1 <= y:
            if y2 > y and is_left > 0:
                wn += 1
        elif y2 <= y and is_left < 0:
            wn -= 1

    return wn


def segment_angle(p1: Point, p2: Point) -> float:
    """Direction of the segment p1 -> p2 in radians."""
    return math.atan2(p2.y - p1.y, p2.x - p1.x)


def perpendicular_offset(angle: float, distance: float) -> tuple[float, float]:
    """Offset of `distance` perpendicular to a direction.

    In drawing space (y down) the returned offset points to the left of
    the direction of travel as seen on screen.

    Args:
        angle: Direction of travel in radians
        distance: Offset length

    Returns:
        Tuple (dx, dy) to add to a point
    """
    return (distance * math.sin(angle), -distance * math.cos(angle))


def distance(p1: Point, p2: Point) -> float:
    return math.hypot(p2.x - p1.x, p2.y - p1.y)


def remove_near_duplicates(points: list[Point], epsilon: float) -> list[Point]:
    """Collapse runs of consecutive points closer than epsilon.

    Zero-length segments have no direction and therefore no normal, so
    they are removed before offsetting. The last input point is kept in
    place of the last kept point when the two coincide, anchoring the end.

    Args:
        points: Polyline vertices
        epsilon: Minimum distance between kept neighbours

    Returns:
        Polyline without near-duplicate neighbours
    """
    if not points:
        return []

    kept = [points[0]]
    for point in points[1:]:
        if distance(kept[-1], point) >= epsilon:
            kept.append(point)

    if len(kept) > 1 and kept[-1] != points[-1]:
        kept[-1] = points[-1]
        if distance(kept[-2], kept[-1]) < epsilon:
            kept.pop()

    return kept
