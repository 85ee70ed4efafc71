"""Outline merger: boolean union of the stroke rings of one glyph.

Strokes of one character commonly overlap (the bar of a "t", the two
diagonals of an "x"). Emitting their rings as independent sub-paths leaves
double-covered regions and self-intersections, so the rings are unioned
into simple, non-overlapping contours before serialization.

The union engine is pluggable behind `UnionEngine.union(rings)`:
- PairwiseUnionEngine: divide-and-conquer pairwise union (O(n log n) calls)
- CascadedUnionEngine: shapely's cascaded unary union
- RawUnionEngine: no union, winding normalized only

Key classes:
- OutlineMerger: Runs the configured engine for one glyph
"""

from typing import Protocol

import structlog
from shapely import set_precision
from shapely.errors import ShapelyError
from shapely.geometry import LineString, Polygon
from shapely.geometry.base import BaseGeometry
from shapely.geometry.polygon import orient
from shapely.ops import polygonize, unary_union

from scriptsmith.config import MergeStrategy
from scriptsmith.core.geometry import winding_number
from scriptsmith.domain import Contour, Point, WindingDirection
from scriptsmith.exceptions import UnionError

logger = structlog.get_logger("scriptsmith.merger")

# Font units are integers in glyf
GRID_SIZE = 1.0


class UnionEngine(Protocol):
    """Anything that unions rings into disjoint TrueType-wound contours."""

    def union(self, rings: list[Contour]) -> list[Contour]: ...


def ring_to_geometry(ring: Contour) -> BaseGeometry:
    """Convert a ring into a valid shapely geometry with nonzero fill.

    A stroke that crosses itself (a looped "l", a sharp hairpin) yields a
    self-intersecting ring. Such rings are noded and polygonized; every
    face the ring winds around at least once is kept, so crossings stay
    filled instead of turning into even-odd holes.

    Args:
        ring: Outline ring in font units

    Returns:
        Polygon or MultiPolygon; empty for degenerate rings
    """
    coords = ring.to_tuples()
    if len(coords) < 3:
        return Polygon()

    polygon = Polygon(coords)
    if polygon.is_valid:
        return polygon

    noded = unary_union(LineString([*coords, coords[0]]))
    faces = []
    for face in polygonize(noded):
        probe = face.representative_point()
        if winding_number(probe.x, probe.y, coords) != 0:
            faces.append(face)

    if not faces:
        return Polygon()
    return unary_union(faces)


def _polygons(geometry: BaseGeometry) -> list[Polygon]:
    """Flatten a union result into its polygons, dropping lines and points."""
    if geometry.is_empty:
        return []
    if isinstance(geometry, Polygon):
        return [geometry]
    polygons: list[Polygon] = []
    for part in getattr(geometry, "geoms", []):
        polygons.extend(_polygons(part))
    return polygons


def geometry_to_contours(geometry: BaseGeometry) -> list[Contour]:
    """Convert shapely polygons into TrueType-wound contours.

    The geometry is first snapped to the integer font-unit grid, so the
    rounding done when writing glyf coordinates cannot make a simple
    contour cross itself again. Outer contours wind clockwise and holes
    counter-clockwise (y up). The closing duplicate point of shapely rings
    is removed.
    """
    contours: list[Contour] = []

    def add_ring(coords: list[tuple[float, float]], direction: WindingDirection) -> None:
        points = [Point(x, y) for x, y in coords[:-1]]
        if len(points) >= 3:
            contours.append(Contour(points=points, direction=direction))

    for polygon in _polygons(set_precision(geometry, GRID_SIZE)):
        oriented = orient(polygon, sign=-1.0)
        add_ring(list(oriented.exterior.coords), WindingDirection.CLOCKWISE)
        for interior in oriented.interiors:
            add_ring(list(interior.coords), WindingDirection.COUNTER_CLOCKWISE)

    return contours


def _snap_points(points: list[Point]) -> list[Point]:
    """Round points to the font-unit grid, dropping repeats it creates."""
    snapped: list[Point] = []
    for p in points:
        q = Point(float(round(p.x)), float(round(p.y)))
        if not snapped or q != snapped[-1]:
            snapped.append(q)
    if len(snapped) > 1 and snapped[0] == snapped[-1]:
        snapped.pop()
    return snapped


def raw_contours(rings: list[Contour]) -> list[Contour]:
    """Rings as they are, snapped to the grid and reoriented to wind clockwise.

    Used when union is disabled or has failed; overlaps remain.
    """
    contours = []
    for ring in rings:
        points = _snap_points(ring.points)
        if len(points) < 3:
            continue
        ring = Contour(points=points)
        if ring.signed_area() == 0:
            continue
        if ring.signed_area() > 0:
            ring = ring.reversed()
        contours.append(Contour(points=list(ring.points), direction=WindingDirection.CLOCKWISE))
    return contours


def _to_geometries(rings: list[Contour]) -> list[BaseGeometry]:
    """Convert rings, skipping any that cannot be made valid."""
    geometries = []
    for idx, ring in enumerate(rings):
        try:
            geometry = ring_to_geometry(ring)
        except (ShapelyError, ValueError) as e:
            logger.warning("Skipping ring that cannot be made valid", ring=idx, error=str(e))
            continue
        if not geometry.is_empty:
            geometries.append(geometry)
    return geometries


def _union_pair(a: BaseGeometry, b: BaseGeometry) -> BaseGeometry:
    """Union two geometries, repairing once before giving up on `b`."""
    try:
        return a.union(b)
    except ShapelyError as e:
        logger.debug("Union failed, retrying on repaired operands", error=str(e))

    try:
        return a.buffer(0).union(b.buffer(0))
    except ShapelyError as e:
        logger.warning("Union failed twice, dropping operand", error=str(e))
        return a


class PairwiseUnionEngine:
    """Divide-and-conquer pairwise union.

    The left and right halves of the ring list are unioned recursively and
    then joined, so every vertex takes part in O(log n) union calls instead
    of the O(n) an accumulator would cost.
    """

    def union(self, rings: list[Contour]) -> list[Contour]:
        geometries = _to_geometries(rings)
        if not geometries:
            return []
        return geometry_to_contours(self._union_range(geometries, 0, len(geometries)))

    def _union_range(self, geometries: list[BaseGeometry], lo: int, hi: int) -> BaseGeometry:
        if hi - lo == 1:
            return geometries[lo]
        mid = (lo + hi) // 2
        return _union_pair(
            self._union_range(geometries, lo, mid),
            self._union_range(geometries, mid, hi),
        )


class CascadedUnionEngine:
    """Shapely's cascaded union over all rings at once."""

    def union(self, rings: list[Contour]) -> list[Contour]:
        geometries = _to_geometries(rings)
        if not geometries:
            return []
        return geometry_to_contours(unary_union(geometries))


class RawUnionEngine:
    """No union; overlapping rings are kept as separate contours."""

    def union(self, rings: list[Contour]) -> list[Contour]:
        return raw_contours(rings)


_ENGINES: dict[MergeStrategy, type] = {
    MergeStrategy.PAIRWISE: PairwiseUnionEngine,
    MergeStrategy.CASCADED: CascadedUnionEngine,
    MergeStrategy.NONE: RawUnionEngine,
}


class OutlineMerger:
    """Merges the rings of one glyph into disjoint contours.

    Example:
        merger = OutlineMerger(MergeStrategy.PAIRWISE)
        contours = merger.merge(rings)
    """

    def __init__(self, engine: MergeStrategy | UnionEngine = MergeStrategy.PAIRWISE) -> None:
        if isinstance(engine, MergeStrategy):
            engine = _ENGINES[engine]()
        self.engine: UnionEngine = engine

    def merge(self, rings: list[Contour]) -> list[Contour]:
        """Union rings into simple contours.

        Args:
            rings: Stroke rings of one glyph, in font units

        Returns:
            Contours with TrueType winding; empty for no rings

        Raises:
            UnionError: If the engine cannot resolve the ring set
        """
        if not rings:
            return []

        try:
            return self.engine.union(rings)
        except (ShapelyError, ValueError) as e:
            raise UnionError(str(e)) from e
