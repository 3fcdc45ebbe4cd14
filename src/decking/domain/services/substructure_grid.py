"""Substructure grid generation.

Bearers and joists are laid as parallel lines across a polygon that has
already been rotated so the boards run along X. Joists are vertical
(``axis="x"``), bearers horizontal (``axis="y"``). Each line is clipped to
the deck interior and punched out by the holes.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Collection, Sequence

from ..value_objects import LineSegment, Polygon
from .polygon_math import (
    GEOMETRY_EPSILON_MM,
    bbox,
    horizontal_scan_intersections,
    interval_pairs,
    point_to_segment_distance,
    swap_axes,
)

__all__ = [
    "LEDGER_BEARER_TOLERANCE_MM",
    "GridAxis",
    "GridPlacement",
    "clipped_grid_lines",
    "grid_positions",
    "ledger_segments",
    "remove_ledger_bearers",
    "rim_joists",
    "subtract_interval",
]

# Bearers whose midpoint is this close to a ledger edge are replaced by it.
LEDGER_BEARER_TOLERANCE_MM = 5.0

Interval = tuple[float, float]


class GridAxis(str, Enum):
    """Axis along which line positions are distributed."""

    X = "x"  # vertical lines at x positions (joists)
    Y = "y"  # horizontal lines at y positions (bearers)


class GridPlacement(str, Enum):
    """How line positions are chosen within the bounding range."""

    CENTERED = "centered"
    EDGE = "edge"


def grid_positions(
    min_value: float,
    max_value: float,
    spacing_mm: float,
    placement: GridPlacement = GridPlacement.CENTERED,
) -> list[float]:
    """Line positions across ``[min_value, max_value]``.

    Centered: ``floor(range / spacing)`` lines at exactly ``spacing``,
    symmetric about the midpoint, so the end gaps stay below ``spacing``.

    Edge: ``ceil(range / spacing)`` equal spans with a line between each
    pair, so no span exceeds ``spacing`` and both outer edges are the first
    and last supports.
    """
    extent = max_value - min_value
    if spacing_mm <= 0 or extent <= GEOMETRY_EPSILON_MM:
        return []

    if placement is GridPlacement.EDGE:
        num_spans = math.ceil(extent / spacing_mm)
        step = extent / num_spans
        return [min_value + i * step for i in range(1, num_spans)]

    num_lines = math.floor(extent / spacing_mm)
    mid = (min_value + max_value) / 2
    offset = (num_lines - 1) / 2
    return [mid + (i - offset) * spacing_mm for i in range(num_lines)]


def subtract_interval(segment: Interval, hole: Interval) -> list[Interval]:
    """Remove ``hole`` from ``segment``, leaving up to two pieces.

    A hole narrower than the geometry tolerance cuts nothing.
    """
    start, end = segment
    hole_start, hole_end = hole
    if hole_end - hole_start <= GEOMETRY_EPSILON_MM:
        return [segment]
    if hole_end <= start or hole_start >= end:
        return [segment]
    pieces: list[Interval] = []
    if start < hole_start:
        pieces.append((start, hole_start))
    if end > hole_end:
        pieces.append((hole_end, end))
    return pieces


def _clip_at(polygon: Polygon, position: float) -> list[Interval]:
    """Inside intervals of the line at ``position`` (outer minus holes)."""
    segments = interval_pairs(horizontal_scan_intersections(polygon.outer, position))
    for hole in polygon.cutouts:
        for hole_interval in interval_pairs(
            horizontal_scan_intersections(hole, position)
        ):
            segments = [
                piece
                for segment in segments
                for piece in subtract_interval(segment, hole_interval)
            ]
    return [(s, e) for s, e in segments if e - s > GEOMETRY_EPSILON_MM]


def clipped_grid_lines(
    polygon: Polygon,
    spacing_mm: float,
    axis: GridAxis | str,
    placement: GridPlacement = GridPlacement.CENTERED,
) -> list[LineSegment]:
    """Parallel members across ``polygon``, clipped to the deck interior.

    Args:
        polygon: Deck outline, already rotated into board coordinates.
        spacing_mm: Target (centered) or maximum (edge) spacing.
        axis: ``"x"`` for vertical lines, ``"y"`` for horizontal lines.
        placement: Position distribution mode.

    Returns:
        One segment per surviving interval, in position order.
    """
    if polygon.is_degenerate:
        return []
    axis = GridAxis(axis)
    # Vertical lines are found by scanning the mirrored polygon horizontally.
    scan_polygon = swap_axes(polygon) if axis is GridAxis.X else polygon
    bounds = bbox(scan_polygon.outer)

    lines: list[LineSegment] = []
    for position in grid_positions(bounds.min_y, bounds.max_y, spacing_mm, placement):
        for start, end in _clip_at(scan_polygon, position):
            if axis is GridAxis.X:
                lines.append(LineSegment(position, start, position, end))
            else:
                lines.append(LineSegment(start, position, end, position))
    return lines


def rim_joists(polygon: Polygon, ledger_edges: Collection[int]) -> list[LineSegment]:
    """One perimeter member per outer edge that is not fixed to a wall."""
    if polygon.is_degenerate:
        return []
    return [
        LineSegment.between(a, b)
        for i, (a, b) in enumerate(polygon.edges())
        if i not in ledger_edges
    ]


def ledger_segments(polygon: Polygon, ledger_edges: Collection[int]) -> list[LineSegment]:
    """Outer edges fixed to a wall, in ascending edge order."""
    segments: list[LineSegment] = []
    if polygon.is_degenerate:
        return segments
    for i in sorted(set(ledger_edges)):
        edge = polygon.edge(i)
        if edge is not None:
            segments.append(LineSegment.between(*edge))
    return segments


def remove_ledger_bearers(
    bearers: Sequence[LineSegment],
    ledgers: Sequence[LineSegment],
    tolerance_mm: float = LEDGER_BEARER_TOLERANCE_MM,
) -> list[LineSegment]:
    """Drop bearers lying on a ledger line (midpoint within tolerance)."""
    if not ledgers:
        return list(bearers)
    return [
        bearer
        for bearer in bearers
        if all(
            point_to_segment_distance(bearer.midpoint, ledger) > tolerance_mm
            for ledger in ledgers
        )
    ]
