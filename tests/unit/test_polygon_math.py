"""Tests for planar polygon measurement.

Tests cover:
- Shoelace area with holes and degenerate rings
- Half-open scanline intersections and span lengths
- Row scanning with the shared inset
- Rotation helpers and point tests
"""

from __future__ import annotations

import math

import pytest

from decking.domain.services.polygon_math import (
    GEOMETRY_EPSILON_MM,
    RowSpan,
    area_mm2,
    area_signed,
    bbox,
    horizontal_scan_intersections,
    interval_pairs,
    iter_scanlines,
    point_in_polygon,
    point_to_segment_distance,
    rotate_point,
    rotate_polygon,
    round_half_up,
    row_spans,
    span_length_at_x,
    span_length_at_y,
)
from decking.domain.value_objects import LineSegment, Point, Polygon


@pytest.fixture
def l_shape() -> Polygon:
    """L-shaped deck: 2000 wide at the bottom, 1000 wide at the top."""
    return Polygon.from_coords(
        [(0, 0), (2000, 0), (2000, 1000), (1000, 1000), (1000, 2000), (0, 2000)]
    )


@pytest.fixture
def rectangle_with_hole() -> Polygon:
    """The 2000 x 1000 rectangle with a centered 1000 x 500 cutout."""
    return Polygon.from_coords(
        [(0, 0), (2000, 0), (2000, 1000), (0, 1000)],
        holes=[[(500, 250), (1500, 250), (1500, 750), (500, 750)]],
    )


# =============================================================================
# Area Tests
# =============================================================================


class TestArea:
    """Tests for shoelace area."""

    def test_rectangle_area(self, rectangle: Polygon) -> None:
        """A 2000 x 1000 rectangle covers 2,000,000 mm^2."""
        assert area_mm2(rectangle) == pytest.approx(2_000_000)

    def test_signed_area_follows_winding(self, rectangle: Polygon) -> None:
        """Reversing the ring flips the sign but not the magnitude."""
        ccw = area_signed(rectangle.outer)
        cw = area_signed(tuple(reversed(rectangle.outer)))
        assert ccw > 0
        assert cw == pytest.approx(-ccw)

    def test_hole_is_subtracted(self, rectangle_with_hole: Polygon) -> None:
        """The cutout area comes off the outer area exactly."""
        assert area_mm2(rectangle_with_hole) == pytest.approx(1_500_000)

    def test_l_shape_area(self, l_shape: Polygon) -> None:
        assert area_mm2(l_shape) == pytest.approx(3_000_000)

    def test_degenerate_ring_has_no_area(self) -> None:
        """Fewer than three vertices yield zero instead of failing."""
        assert area_mm2(Polygon.from_coords([(0, 0), (1000, 0)])) == 0.0
        assert area_mm2(Polygon(outer=())) == 0.0

    def test_two_vertex_cutout_is_ignored(self, rectangle: Polygon) -> None:
        """A cutout ring without area changes no measurement."""
        polygon = Polygon(
            outer=rectangle.outer, holes=((Point(700, 300), Point(900, 700)),)
        )
        assert polygon.cutouts == ()
        assert polygon.hole_count == 0
        assert area_mm2(polygon) == pytest.approx(2_000_000)
        assert span_length_at_y(polygon, 500) == pytest.approx(2000)
        assert point_in_polygon(Point(800, 500), polygon)

    def test_oversized_hole_clamps_to_zero(self) -> None:
        """Holes larger than the outline never make the area negative."""
        polygon = Polygon.from_coords(
            [(0, 0), (10, 0), (10, 10), (0, 10)],
            holes=[[(-5, -5), (20, -5), (20, 20), (-5, 20)]],
        )
        assert area_mm2(polygon) == 0.0


# =============================================================================
# Scanline Tests
# =============================================================================


class TestScanIntersections:
    """Tests for horizontal scanline crossings."""

    def test_crossings_are_sorted(self, rectangle: Polygon) -> None:
        assert horizontal_scan_intersections(rectangle.outer, 500) == [0, 2000]

    def test_bottom_edge_is_included(self, rectangle: Polygon) -> None:
        """Edges are tested on [min_y, max_y) so the lower bound counts."""
        assert horizontal_scan_intersections(rectangle.outer, 0) == [0, 2000]

    def test_top_edge_is_excluded(self, rectangle: Polygon) -> None:
        """The upper bound of every edge is open."""
        assert horizontal_scan_intersections(rectangle.outer, 1000) == []

    def test_shared_vertex_counted_once(self, l_shape: Polygon) -> None:
        """A scanline through the inner corner yields one interval."""
        assert horizontal_scan_intersections(l_shape.outer, 1000) == [0, 1000]

    def test_short_ring_has_no_crossings(self) -> None:
        assert horizontal_scan_intersections([Point(0, 0)], 0) == []

    def test_interval_pairs_drops_unpaired_crossing(self) -> None:
        assert interval_pairs([0.0, 1.0, 2.0]) == [(0.0, 1.0)]
        assert interval_pairs([0.0, 1.0, 2.0, 5.0]) == [(0.0, 1.0), (2.0, 5.0)]


class TestSpanLength:
    """Tests for span length along a row."""

    def test_full_width_span(self, rectangle: Polygon) -> None:
        assert span_length_at_y(rectangle, 500) == pytest.approx(2000)

    def test_hole_reduces_span(self, rectangle_with_hole: Polygon) -> None:
        assert span_length_at_y(rectangle_with_hole, 500) == pytest.approx(1000)
        assert span_length_at_y(rectangle_with_hole, 100) == pytest.approx(2000)

    def test_span_outside_polygon_is_zero(self, rectangle: Polygon) -> None:
        assert span_length_at_y(rectangle, -10) == 0.0
        assert span_length_at_y(rectangle, 5000) == 0.0

    def test_l_shape_spans(self, l_shape: Polygon) -> None:
        assert span_length_at_y(l_shape, 500) == pytest.approx(2000)
        assert span_length_at_y(l_shape, 1500) == pytest.approx(1000)

    def test_vertical_span(self, rectangle: Polygon) -> None:
        """Column spans are measured on the mirrored polygon."""
        assert span_length_at_x(rectangle, 100) == pytest.approx(1000)


class TestRowScan:
    """Tests for board row scanning."""

    def test_rows_start_inset_from_bottom(self, rectangle: Polygon) -> None:
        rows = list(iter_scanlines(rectangle, 145))
        assert rows[0] == (0, pytest.approx(GEOMETRY_EPSILON_MM))

    def test_row_count_includes_last_partial_pitch(self, rectangle: Polygon) -> None:
        """Rows run while they stay inside the inset top bound."""
        rows = list(iter_scanlines(rectangle, 145))
        assert len(rows) == 7
        assert [r for r, _ in rows] == list(range(7))

    def test_row_positions_advance_by_pitch(self, rectangle: Polygon) -> None:
        ys = [y for _, y in iter_scanlines(rectangle, 145)]
        assert ys[3] == pytest.approx(GEOMETRY_EPSILON_MM + 3 * 145)

    def test_non_positive_pitch_yields_nothing(self, rectangle: Polygon) -> None:
        assert list(iter_scanlines(rectangle, 0)) == []
        assert list(iter_scanlines(rectangle, -145)) == []

    def test_degenerate_polygon_yields_nothing(self) -> None:
        assert row_spans(Polygon.from_coords([(0, 0), (10, 10)]), 145) == []

    def test_row_spans_keep_empty_rows(self) -> None:
        """Rows that fall entirely inside a full-width cutout are kept at zero."""
        polygon = Polygon.from_coords(
            [(0, 0), (1000, 0), (1000, 1000), (0, 1000)],
            holes=[[(-1, 300), (1001, 300), (1001, 700), (-1, 700)]],
        )
        spans = row_spans(polygon, 100)
        assert len(spans) == 10
        empty = [s.row_index for s in spans if s.span_mm == 0]
        assert empty == [3, 4, 5, 6]
        assert [s.row_index for s in spans if not s.needs_board] == empty

    @pytest.mark.parametrize(
        ("span", "needed"),
        [(0.0, False), (GEOMETRY_EPSILON_MM, False), (2 * GEOMETRY_EPSILON_MM, True)],
    )
    def test_needs_board_threshold(self, span: float, needed: bool) -> None:
        """Spans within the geometry tolerance of zero carry no board."""
        assert RowSpan(row_index=0, y=0.0, span_mm=span).needs_board is needed


# =============================================================================
# Rotation and Point Tests
# =============================================================================


class TestRotation:
    """Tests for rotation helpers."""

    def test_quarter_turn(self) -> None:
        p = rotate_point(Point(1000, 0), math.pi / 2)
        assert p.x == pytest.approx(0, abs=1e-9)
        assert p.y == pytest.approx(1000)

    def test_rotation_preserves_area(self, rectangle_with_hole: Polygon) -> None:
        rotated = rotate_polygon(rectangle_with_hole, math.radians(37))
        assert area_mm2(rotated) == pytest.approx(1_500_000)

    def test_rotation_round_trip(self, l_shape: Polygon) -> None:
        back = rotate_polygon(rotate_polygon(l_shape, 0.7), -0.7)
        for original, restored in zip(l_shape.outer, back.outer):
            assert restored.x == pytest.approx(original.x, abs=1e-9)
            assert restored.y == pytest.approx(original.y, abs=1e-9)


class TestPointHelpers:
    """Tests for rounding, bounds and point tests."""

    def test_round_half_up(self) -> None:
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -2
        assert round_half_up(0.4999) == 0

    def test_bbox(self, l_shape: Polygon) -> None:
        bounds = bbox(l_shape.outer)
        assert (bounds.min_x, bounds.min_y, bounds.max_x, bounds.max_y) == (
            0,
            0,
            2000,
            2000,
        )
        assert bounds.width == 2000

    def test_empty_bbox(self) -> None:
        assert bbox([]).is_empty

    def test_point_in_polygon_respects_holes(
        self, rectangle_with_hole: Polygon
    ) -> None:
        assert point_in_polygon(Point(100, 100), rectangle_with_hole)
        assert not point_in_polygon(Point(1000, 500), rectangle_with_hole)
        assert not point_in_polygon(Point(3000, 500), rectangle_with_hole)

    def test_point_to_segment_distance(self) -> None:
        segment = LineSegment(0, 0, 1000, 0)
        assert point_to_segment_distance(Point(500, 30), segment) == pytest.approx(30)
        assert point_to_segment_distance(Point(1003, 4), segment) == pytest.approx(5)
