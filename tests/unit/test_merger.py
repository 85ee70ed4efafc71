"""Tests for the outline union step."""

from unittest.mock import MagicMock

import pytest
from shapely.errors import ShapelyError
from shapely.geometry import LinearRing

from scriptsmith.config import MergeStrategy
from scriptsmith.core.merger import (
    CascadedUnionEngine,
    OutlineMerger,
    PairwiseUnionEngine,
    RawUnionEngine,
    _union_pair,
    raw_contours,
    ring_to_geometry,
)
from scriptsmith.domain import Contour, Point, WindingDirection
from scriptsmith.exceptions import UnionError


def rect(x0: float, y0: float, x1: float, y1: float) -> Contour:
    """Create a clockwise rectangle ring."""
    return Contour(points=[Point(x0, y0), Point(x0, y1), Point(x1, y1), Point(x1, y0)])


def ink_area(contours: list[Contour]) -> float:
    """Filled area: clockwise outers count positive, counter-clockwise holes negative."""
    return -sum(c.signed_area() for c in contours)


@pytest.fixture
def frame_rings() -> list[Contour]:
    """Create four bars forming a square frame."""
    return [
        rect(0, 0, 300, 50),
        rect(0, 250, 300, 300),
        rect(0, 0, 50, 300),
        rect(250, 0, 300, 300),
    ]


class TestOutlineMerger:
    """Tests for OutlineMerger."""

    def test_no_rings(self):
        """Test that no rings give no contours."""
        assert OutlineMerger().merge([]) == []

    def test_single_ring(self):
        """Test that one ring comes back as one clockwise contour."""
        contours = OutlineMerger().merge([rect(0, 0, 100, 100)])

        assert len(contours) == 1
        assert contours[0].direction == WindingDirection.CLOCKWISE
        assert contours[0].signed_area() == pytest.approx(-10000.0)

    def test_counter_clockwise_input_reoriented(self):
        """Test that input winding does not matter."""
        contours = OutlineMerger().merge([rect(0, 0, 100, 100).reversed()])
        assert contours[0].winding() == WindingDirection.CLOCKWISE

    def test_disjoint_rings(self):
        """Test that non-overlapping rings stay separate."""
        rings = [rect(0, 0, 100, 100), rect(200, 0, 300, 100)]
        contours = OutlineMerger().merge(rings)

        assert len(contours) == 2
        assert sum(len(c.points) for c in contours) <= sum(len(r.points) for r in rings)
        assert ink_area(contours) == pytest.approx(20000.0)

    def test_identical_rings(self):
        """Test that duplicates collapse into one contour."""
        contours = OutlineMerger().merge([rect(0, 0, 100, 100), rect(0, 0, 100, 100)])

        assert len(contours) == 1
        assert ink_area(contours) == pytest.approx(10000.0)

    def test_crossing_strokes(self):
        """Test that crossing bars are unioned without double coverage."""
        rings = [rect(0, 100, 300, 200), rect(100, 0, 200, 300)]
        contours = OutlineMerger().merge(rings)

        assert len(contours) == 1
        assert ink_area(contours) == pytest.approx(50000.0)
        assert ink_area(contours) < sum(r.area() for r in rings)

    def test_enclosed_counter(self, frame_rings: list[Contour]):
        """Test that an enclosed counter becomes a counter-clockwise hole."""
        contours = OutlineMerger().merge(frame_rings)

        outers = [c for c in contours if c.direction == WindingDirection.CLOCKWISE]
        holes = [c for c in contours if c.direction == WindingDirection.COUNTER_CLOCKWISE]
        assert len(outers) == 1
        assert len(holes) == 1
        assert outers[0].area() == pytest.approx(90000.0)
        assert holes[0].area() == pytest.approx(40000.0)

    def test_winding_matches_direction(self, frame_rings: list[Contour]):
        """Test that the declared direction is the actual winding."""
        for contour in OutlineMerger().merge(frame_rings):
            assert contour.winding() == contour.direction

    def test_no_closing_duplicate(self):
        contour = OutlineMerger().merge([rect(0, 0, 100, 100)])[0]
        assert contour.points[0] != contour.points[-1]

    def test_cascaded_matches_pairwise(self, frame_rings: list[Contour]):
        """Test that both union engines agree on the filled area."""
        pairwise = OutlineMerger(MergeStrategy.PAIRWISE).merge(frame_rings)
        cascaded = OutlineMerger(MergeStrategy.CASCADED).merge(frame_rings)

        assert ink_area(cascaded) == pytest.approx(ink_area(pairwise))
        assert len(cascaded) == len(pairwise)

    def test_no_union_strategy(self):
        """Test that the raw engine keeps overlaps as separate contours."""
        rings = [rect(0, 0, 100, 100), rect(50, 0, 150, 100).reversed()]
        contours = OutlineMerger(MergeStrategy.NONE).merge(rings)

        assert len(contours) == 2
        assert all(c.signed_area() < 0 for c in contours)

    def test_custom_engine(self):
        """Test that any object with union() can be plugged in."""
        engine = MagicMock()
        engine.union.return_value = []
        merger = OutlineMerger(engine)

        merger.merge([rect(0, 0, 10, 10)])
        engine.union.assert_called_once()

    def test_engine_failure_raises_union_error(self):
        """Test that engine errors surface as UnionError."""
        engine = MagicMock()
        engine.union.side_effect = ValueError("degenerate")

        with pytest.raises(UnionError, match="degenerate"):
            OutlineMerger(engine).merge([rect(0, 0, 10, 10)])

    def test_many_rings(self):
        """Test divide-and-conquer over a longer ring list."""
        rings = [rect(i * 10, 0, i * 10 + 15, 50) for i in range(17)]
        contours = PairwiseUnionEngine().union(rings)

        assert len(contours) == 1
        assert ink_area(contours) == pytest.approx((16 * 10 + 15) * 50)


class TestRingToGeometry:
    """Tests for making single rings valid."""

    def test_valid_ring(self):
        geometry = ring_to_geometry(rect(0, 0, 10, 10))
        assert geometry.area == pytest.approx(100.0)

    def test_bowtie_keeps_both_lobes(self):
        """Test that a self-crossing ring keeps every wound face filled."""
        bowtie = Contour(points=[Point(0, 0), Point(100, 100), Point(100, 0), Point(0, 100)])
        geometry = ring_to_geometry(bowtie)

        assert geometry.is_valid
        assert geometry.area == pytest.approx(5000.0)

    def test_degenerate_ring(self):
        assert ring_to_geometry(Contour(points=[Point(0, 0), Point(1, 1)])).is_empty

    def test_collinear_ring(self):
        ring = Contour(points=[Point(0, 0), Point(5, 0), Point(10, 0)])
        assert ring_to_geometry(ring).area == pytest.approx(0.0)


class TestUnionPair:
    """Tests for failure handling of a single union."""

    def test_retry_on_repaired_operands(self):
        a = MagicMock()
        b = MagicMock()
        a.union.side_effect = ShapelyError("topology")

        result = _union_pair(a, b)

        a.buffer.assert_called_once_with(0)
        assert result is a.buffer.return_value.union.return_value

    def test_keeps_left_operand_after_second_failure(self):
        a = MagicMock()
        b = MagicMock()
        a.union.side_effect = ShapelyError("topology")
        a.buffer.return_value.union.side_effect = ShapelyError("topology")

        assert _union_pair(a, b) is a


class TestRawContours:
    def test_reorients_to_clockwise(self):
        rings = [rect(0, 0, 10, 10).reversed(), rect(20, 0, 30, 10)]
        contours = raw_contours(rings)

        assert [c.direction for c in contours] == [WindingDirection.CLOCKWISE] * 2
        assert all(c.signed_area() < 0 for c in contours)

    def test_raw_engine(self):
        assert len(RawUnionEngine().union([rect(0, 0, 10, 10)])) == 1

    def test_cascaded_engine_empty(self):
        assert CascadedUnionEngine().union([]) == []


class TestGridSnapping:
    """Tests for snapping merged outlines to integer font units."""

    def test_union_output_on_grid(self):
        rings = [rect(0.4, 0.6, 100.3, 50.2), rect(49.7, 0.1, 80.6, 200.5)]
        contours = OutlineMerger().merge(rings)

        for contour in contours:
            for p in contour.points:
                assert p.x == int(p.x)
                assert p.y == int(p.y)

    def test_snapped_contours_stay_simple(self):
        """Test that tips closer than one unit do not cross once on the grid."""
        rings = [
            Contour(points=[Point(0, 0), Point(10.4, 100.2), Point(20, 0)]),
            Contour(points=[Point(9.6, 100.6), Point(0.3, 200), Point(20.2, 200)]),
        ]
        for contour in OutlineMerger().merge(rings):
            assert LinearRing(contour.to_tuples()).is_simple

    def test_raw_contours_snapped(self):
        ring = Contour(points=[Point(0.2, 0.4), Point(0.3, 10.6), Point(10.4, 10.7), Point(9.8, 0.1)])
        contour = raw_contours([ring])[0]

        assert contour.to_tuples() == [(0.0, 0.0), (0.0, 11.0), (10.0, 11.0), (10.0, 0.0)]
        assert contour.signed_area() < 0

    def test_raw_contours_drop_collapsed_rings(self):
        sliver = Contour(points=[Point(0.1, 0.1), Point(0.2, 0.3), Point(0.4, 0.2)])
        assert raw_contours([sliver]) == []
