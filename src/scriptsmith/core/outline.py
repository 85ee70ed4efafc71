"""Conversion of centerline strokes into inked outline rings.

A stroke arrives as a zero-width polyline in em drawing space. The builder
offsets it by half the stroke thickness on both sides, closes the two
offset chains with end caps, flips the result into font units (y up,
origin on the baseline) and applies the italic shear.

Thickness and slant are parameters rather than normalization results so
that Regular, Bold and Italic can be rendered from the same centerlines.
"""

import math
from collections.abc import Callable

from scriptsmith.config import CapStyle, StyleConfig
from scriptsmith.core.geometry import (
    perpendicular_offset,
    remove_near_duplicates,
    segment_angle,
)
from scriptsmith.domain import Contour, Point, Stroke

# Points closer than this (in em units) are one location; a stroke that
# collapses to a single location is drawn as a dot.
DOT_EPSILON = 2.0


def build_stroke_outline(
    stroke: Stroke,
    ascender: float,
    thickness: float,
    slant: float = 0.0,
    cap_style: CapStyle = CapStyle.BUTT,
    cap_segments: int = 6,
    dot_sides: int = 12,
    dot_radius_factor: float = 0.8,
) -> Contour | None:
    """Build the closed ring of one inked stroke.

    Args:
        stroke: Centerline in em drawing space (y down)
        ascender: Ascender in font units; drawing y is flipped around it
        thickness: Stroke thickness in font units
        slant: Horizontal shear applied per font unit of height
        cap_style: BUTT closes the ends straight, ROUND with a half-circle fan
        cap_segments: Arc steps of a round cap
        dot_sides: Sides of the polygon drawn for a dot
        dot_radius_factor: Dot radius as a multiple of thickness

    Returns:
        Contour with at least 3 points, or None for an empty stroke
    """
    if not stroke.points:
        return None

    def transform(x: float, y: float) -> Point:
        y_font = ascender - y
        return Point(x + y_font * slant, y_font)

    points = remove_near_duplicates(list(stroke.points), DOT_EPSILON)

    if len(points) < 2:
        return _dot_ring(points[0], thickness * dot_radius_factor, dot_sides, transform)

    half = thickness / 2.0
    left: list[Point] = []
    right: list[Point] = []

    for i in range(len(points) - 1):
        p1, p2 = points[i], points[i + 1]
        dx, dy = perpendicular_offset(segment_angle(p1, p2), half)

        left.append(transform(p1.x + dx, p1.y + dy))
        right.append(transform(p1.x - dx, p1.y - dy))

        if i == len(points) - 2:
            left.append(transform(p2.x + dx, p2.y + dy))
            right.append(transform(p2.x - dx, p2.y - dy))

    ring = list(left)
    if cap_style == CapStyle.ROUND:
        end_angle = segment_angle(points[-2], points[-1])
        ring.extend(_cap_arc(points[-1], end_angle - math.pi / 2, half, cap_segments, transform))
    ring.extend(reversed(right))
    if cap_style == CapStyle.ROUND:
        start_angle = segment_angle(points[0], points[1])
        ring.extend(_cap_arc(points[0], start_angle + math.pi / 2, half, cap_segments, transform))

    return Contour(points=ring)


def _dot_ring(
    center: Point,
    radius: float,
    sides: int,
    transform: Callable[[float, float], Point],
) -> Contour:
    """Regular polygon around a tap point."""
    ring = []
    for i in range(sides):
        angle = 2 * math.pi * i / sides
        ring.append(transform(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle)))
    return Contour(points=ring)


def _cap_arc(
    center: Point,
    start_angle: float,
    radius: float,
    segments: int,
    transform: Callable[[float, float], Point],
) -> list[Point]:
    """Interior points of a 180 degree arc around a stroke end.

    The arc starts on one offset side and ends on the other; both of those
    points are already part of the ring, so only the points between them
    are returned.
    """
    arc = []
    for j in range(1, segments):
        angle = start_angle + math.pi * j / segments
        arc.append(transform(center.x + radius * math.cos(angle), center.y + radius * math.sin(angle)))
    return arc


class OutlineBuilder:
    """Builds stroke rings for one style.

    Example:
        builder = OutlineBuilder(BOLD, ascender=800)
        rings = builder.build_rings(normalized.strokes)
    """

    def __init__(self, style: StyleConfig, ascender: float = 800) -> None:
        self.style = style
        self.ascender = ascender

    def build_stroke_outline(self, stroke: Stroke) -> Contour | None:
        s = self.style
        return build_stroke_outline(
            stroke,
            ascender=self.ascender,
            thickness=s.thickness,
            slant=s.slant,
            cap_style=s.cap_style,
            cap_segments=s.cap_segments,
            dot_sides=s.dot_sides,
            dot_radius_factor=s.dot_radius_factor,
        )

    def build_rings(self, strokes: list[Stroke]) -> list[Contour]:
        """Build one ring per stroke, discarding rings shorter than 3 points."""
        rings = []
        for stroke in strokes:
            ring = self.build_stroke_outline(stroke)
            if ring is not None and len(ring.points) >= 3:
                rings.append(ring)
        return rings
