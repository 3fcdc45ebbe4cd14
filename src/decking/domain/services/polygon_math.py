"""Planar polygon measurement for deck outlines with holes.

Every scanline query in the package goes through this module so that the
board usage total and the cut plan rows are computed from the same spans
with the same tolerance. Degenerate input (fewer than three vertices, or
fewer than two for scanline queries) yields zero or empty results.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterator, Sequence

from ..value_objects import LineSegment, Point, Polygon

__all__ = [
    "GEOMETRY_EPSILON_MM",
    "BoundingBox",
    "RowSpan",
    "area_abs",
    "area_mm2",
    "area_signed",
    "bbox",
    "deg_to_rad",
    "horizontal_scan_intersections",
    "interval_pairs",
    "iter_scanlines",
    "point_in_polygon",
    "point_in_ring",
    "point_to_segment_distance",
    "rotate_point",
    "rotate_polygon",
    "rotate_segment",
    "round_half_up",
    "row_spans",
    "span_length_at_x",
    "span_length_at_y",
    "swap_axes",
]

# Shared tolerance for zero-width features and the scanline inset.
GEOMETRY_EPSILON_MM = 1e-3


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounds. Infinite (inverted) for an empty point set."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @property
    def is_empty(self) -> bool:
        return self.min_x > self.max_x or self.min_y > self.max_y

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity."""
    return math.floor(value + 0.5)


def deg_to_rad(degrees: float) -> float:
    return degrees * math.pi / 180


def rotate_point(point: Point, radians: float) -> Point:
    """Rotate ``point`` about the origin."""
    c = math.cos(radians)
    s = math.sin(radians)
    return Point(point.x * c - point.y * s, point.x * s + point.y * c)


def rotate_polygon(polygon: Polygon, radians: float) -> Polygon:
    """Rotate every outer and hole vertex about the origin."""
    return Polygon(
        outer=tuple(rotate_point(p, radians) for p in polygon.outer),
        holes=tuple(
            tuple(rotate_point(p, radians) for p in hole) for hole in polygon.holes
        ),
    )


def rotate_segment(segment: LineSegment, radians: float) -> LineSegment:
    return LineSegment.between(
        rotate_point(segment.start, radians), rotate_point(segment.end, radians)
    )


def area_signed(points: Sequence[Point]) -> float:
    """Shoelace area in mm^2; sign follows winding order."""
    n = len(points)
    if n < 3:
        return 0.0
    total = 0.0
    for i in range(n):
        a = points[i]
        b = points[(i + 1) % n]
        total += a.x * b.y - b.x * a.y
    return total / 2


def area_abs(points: Sequence[Point]) -> float:
    return abs(area_signed(points))


def area_mm2(polygon: Polygon) -> float:
    """Outer area minus hole areas, clamped at zero."""
    outer = area_abs(polygon.outer)
    holes = sum(area_abs(hole) for hole in polygon.cutouts)
    return max(0.0, outer - holes)


def bbox(points: Sequence[Point]) -> BoundingBox:
    """Bounds of ``points``. Callers must check ``is_empty`` on empty input."""
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for p in points:
        if p.x < min_x:
            min_x = p.x
        if p.y < min_y:
            min_y = p.y
        if p.x > max_x:
            max_x = p.x
        if p.y > max_y:
            max_y = p.y
    return BoundingBox(min_x, min_y, max_x, max_y)


def horizontal_scan_intersections(ring: Sequence[Point], y: float) -> list[float]:
    """Sorted x coordinates where the line ``Y = y`` crosses ``ring``.

    Each edge is tested on the half-open range ``[min_y, max_y)`` so a
    scanline through a shared vertex is counted once. Horizontal edges never
    contribute a crossing.
    """
    n = len(ring)
    if n < 2:
        return []
    xs: list[float] = []
    for i in range(n):
        a = ring[i]
        b = ring[(i + 1) % n]
        if a.y == b.y:
            continue
        y_min = min(a.y, b.y)
        y_max = max(a.y, b.y)
        if y < y_min or y >= y_max:
            continue
        t = (y - a.y) / (b.y - a.y)
        xs.append(a.x + t * (b.x - a.x))
    xs.sort()
    return xs


def interval_pairs(xs: Sequence[float]) -> list[tuple[float, float]]:
    """Pair sorted crossings into inside intervals ``(x0, x1), (x2, x3)...``.

    A trailing unpaired crossing is dropped.
    """
    return [(xs[i], xs[i + 1]) for i in range(0, len(xs) - 1, 2)]


def _covered_length(xs: Sequence[float]) -> float:
    return sum(max(0.0, end - start) for start, end in interval_pairs(xs))


def span_length_at_y(polygon: Polygon, y: float) -> float:
    """Length of deck (outer minus holes) along the line ``Y = y``."""
    outer = _covered_length(horizontal_scan_intersections(polygon.outer, y))
    if outer <= 0:
        return 0.0
    holes = sum(
        _covered_length(horizontal_scan_intersections(hole, y))
        for hole in polygon.cutouts
    )
    return max(0.0, outer - holes)


def swap_axes(polygon: Polygon) -> Polygon:
    """Mirror the polygon across ``y = x``."""
    return Polygon(
        outer=tuple(Point(p.y, p.x) for p in polygon.outer),
        holes=tuple(tuple(Point(p.y, p.x) for p in hole) for hole in polygon.holes),
    )


def span_length_at_x(polygon: Polygon, x: float) -> float:
    """Length of deck along the line ``X = x``."""
    return span_length_at_y(swap_axes(polygon), x)


def iter_scanlines(polygon: Polygon, pitch_mm: float) -> Iterator[tuple[int, float]]:
    """Yield ``(row_index, y)`` for every board row across the polygon.

    Rows start ``GEOMETRY_EPSILON_MM`` above the lowest vertex and advance by
    ``pitch_mm`` while they stay ``GEOMETRY_EPSILON_MM`` below the highest.
    Rows whose span is zero are still yielded so indices stay aligned with
    the scan position.
    """
    if polygon.is_degenerate or pitch_mm <= 0:
        return
    bounds = bbox(polygon.outer)
    start = bounds.min_y + GEOMETRY_EPSILON_MM
    stop = bounds.max_y - GEOMETRY_EPSILON_MM
    row = 0
    y = start
    while y <= stop:
        yield row, y
        row += 1
        y = start + row * pitch_mm


@dataclass(frozen=True)
class RowSpan:
    """Deck length crossed by one board row."""

    row_index: int
    y: float
    span_mm: float

    @property
    def needs_board(self) -> bool:
        """True when the row carries board.

        Spans within the geometry tolerance of zero are treated as empty;
        they come from rounding where a scanline grazes a vertex. Board
        usage and the cut plan both use this test, so their totals agree.
        """
        return self.span_mm > GEOMETRY_EPSILON_MM


def row_spans(polygon: Polygon, pitch_mm: float) -> list[RowSpan]:
    """Span of every board row, including rows that miss the deck."""
    return [
        RowSpan(row_index=row, y=y, span_mm=span_length_at_y(polygon, y))
        for row, y in iter_scanlines(polygon, pitch_mm)
    ]


def point_in_ring(point: Point, ring: Sequence[Point]) -> bool:
    """Ray-casting parity test against a single ring."""
    n = len(ring)
    if n < 3:
        return False
    inside = False
    j = n - 1
    for i in range(n):
        a = ring[i]
        b = ring[j]
        if (a.y > point.y) != (b.y > point.y):
            x_cross = (b.x - a.x) * (point.y - a.y) / (b.y - a.y) + a.x
            if point.x < x_cross:
                inside = not inside
        j = i
    return inside


def point_in_polygon(point: Point, polygon: Polygon) -> bool:
    """True if ``point`` lies inside the outer ring and outside every hole."""
    if not point_in_ring(point, polygon.outer):
        return False
    return not any(point_in_ring(point, hole) for hole in polygon.cutouts)


def point_to_segment_distance(point: Point, segment: LineSegment) -> float:
    """Shortest distance from ``point`` to the closed segment."""
    dx = segment.x2 - segment.x1
    dy = segment.y2 - segment.y1
    length_sq = dx * dx + dy * dy
    if length_sq < GEOMETRY_EPSILON_MM * GEOMETRY_EPSILON_MM:
        return math.hypot(point.x - segment.x1, point.y - segment.y1)
    t = ((point.x - segment.x1) * dx + (point.y - segment.y1) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(
        point.x - (segment.x1 + t * dx), point.y - (segment.y1 + t * dy)
    )
