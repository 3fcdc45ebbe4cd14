"""Footing (pile) placement under the substructure."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Collection, Iterable, Sequence

from ..value_objects import LineSegment, Point, Polygon
from .polygon_math import point_to_segment_distance, round_half_up

logger = logging.getLogger(__name__)

__all__ = ["FootingPlacer", "sample_segment"]


def sample_segment(segment: LineSegment, max_step_mm: float) -> list[Point]:
    """Evenly spaced points along ``segment``, both ends included.

    Uses the fewest equal steps that do not exceed ``max_step_mm``. A
    non-positive step yields just the two endpoints.
    """
    length = segment.length
    if length < 1e-6:
        return []
    steps = max(1, math.ceil(length / max_step_mm)) if max_step_mm > 0 else 1
    dx = (segment.x2 - segment.x1) / steps
    dy = (segment.y2 - segment.y1) / steps
    points = [Point(segment.x1 + dx * i, segment.y1 + dy * i) for i in range(steps)]
    points.append(segment.end)
    return points


def _key(point: Point) -> tuple[int, int]:
    return round_half_up(point.x), round_half_up(point.y)


@dataclass(frozen=True)
class FootingPlacer:
    """Derives a deduplicated list of footing points.

    Candidates come from every bearer end, plus points sampled along any
    non-ledger outer edge that no bearer reaches. Points are snapped to the
    nearest millimetre and deduplicated in first-seen order. Ledger corners
    are removed because the ledger bolts to the wall there.

    Attributes:
        spacing_mm: Sampling interval along unsupported edges.
        edge_tolerance_mm: Distance at which a bearer end counts as reaching
            an edge.
    """

    spacing_mm: float
    edge_tolerance_mm: float = 10.0

    def place(
        self,
        polygon: Polygon,
        bearers: Sequence[LineSegment],
        ledger_edges: Collection[int] = (),
    ) -> tuple[Point, ...]:
        """Place footings for ``polygon`` (already in board coordinates).

        Args:
            polygon: Deck outline.
            bearers: Bearer segments after ledger filtering.
            ledger_edges: Indices of outer edges fixed to a wall.

        Returns:
            Footing points in deterministic insertion order.
        """
        if polygon.is_degenerate:
            return ()
        candidates = list(self._bearer_ends(bearers))
        candidates.extend(self._unsupported_edge_points(polygon, bearers, ledger_edges))

        unique: dict[tuple[int, int], Point] = {}
        for point in candidates:
            key = _key(point)
            if key not in unique:
                unique[key] = Point(float(key[0]), float(key[1]))

        ledger_corners: set[tuple[int, int]] = set()
        for i in ledger_edges:
            edge = polygon.edge(i)
            if edge is not None:
                ledger_corners.update(_key(p) for p in edge)

        piles = tuple(p for key, p in unique.items() if key not in ledger_corners)
        logger.debug(
            "Footings: %d candidates, %d unique, %d after ledger corners",
            len(candidates),
            len(unique),
            len(piles),
        )
        return piles

    @staticmethod
    def _bearer_ends(bearers: Iterable[LineSegment]) -> Iterable[Point]:
        for bearer in bearers:
            yield bearer.start
            yield bearer.end

    def _unsupported_edge_points(
        self,
        polygon: Polygon,
        bearers: Sequence[LineSegment],
        ledger_edges: Collection[int],
    ) -> list[Point]:
        points: list[Point] = []
        for i, (a, b) in enumerate(polygon.edges()):
            if i in ledger_edges:
                continue
            edge = LineSegment.between(a, b)
            supported = any(
                point_to_segment_distance(end, edge) <= self.edge_tolerance_mm
                for bearer in bearers
                for end in (bearer.start, bearer.end)
            )
            if not supported:
                points.extend(sample_segment(edge, self.spacing_mm))
        return points
