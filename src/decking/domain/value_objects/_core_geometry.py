"""Core planar geometry value objects.

All coordinates are in millimetres on the deck's floor plan.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, Sequence

Coord = tuple[float, float]


@dataclass(frozen=True)
class Point:
    """2D point on the floor plan in millimetres."""

    x: float
    y: float


@dataclass(frozen=True)
class Polygon:
    """Deck outline with optional cutouts.

    A polygon with fewer than three outer vertices is degenerate; geometry
    functions treat it as empty instead of failing. Holes are expected to lie
    inside ``outer`` and not touch each other, but this is not enforced here.
    Winding order is not assumed.

    Attributes:
        outer: Outer ring vertices (implicitly closed).
        holes: Zero or more hole rings (implicitly closed).
    """

    outer: tuple[Point, ...]
    holes: tuple[tuple[Point, ...], ...] = ()

    @classmethod
    def from_coords(
        cls,
        outer: Iterable[Coord],
        holes: Iterable[Iterable[Coord]] = (),
    ) -> "Polygon":
        """Build a polygon from plain ``(x, y)`` pairs."""
        return cls(
            outer=tuple(Point(x, y) for x, y in outer),
            holes=tuple(tuple(Point(x, y) for x, y in hole) for hole in holes),
        )

    @property
    def is_degenerate(self) -> bool:
        """True if the outer ring cannot enclose any area."""
        return len(self.outer) < 3

    @property
    def vertex_count(self) -> int:
        """Number of outer ring vertices."""
        return len(self.outer)

    @property
    def cutouts(self) -> tuple[tuple[Point, ...], ...]:
        """Hole rings that enclose area; rings under three vertices are ignored."""
        return tuple(hole for hole in self.holes if len(hole) >= 3)

    @property
    def hole_count(self) -> int:
        """Number of cutouts."""
        return len(self.cutouts)

    def edge(self, index: int) -> tuple[Point, Point] | None:
        """Return outer edge ``index`` as ``(start, end)``.

        Edge ``i`` runs from vertex ``i`` to vertex ``(i + 1) mod n``. Returns
        None for an out-of-range index or a ring with fewer than two points.
        """
        n = len(self.outer)
        if n < 2 or index < 0 or index >= n:
            return None
        return self.outer[index], self.outer[(index + 1) % n]

    def edges(self) -> list[tuple[Point, Point]]:
        """All outer edges in ring order."""
        n = len(self.outer)
        if n < 2:
            return []
        return [(self.outer[i], self.outer[(i + 1) % n]) for i in range(n)]


@dataclass(frozen=True)
class LineSegment:
    """Straight member on the plan (bearer, joist, rim or ledger)."""

    x1: float
    y1: float
    x2: float
    y2: float

    @classmethod
    def between(cls, a: Point, b: Point) -> "LineSegment":
        """Segment from point ``a`` to point ``b``."""
        return cls(a.x, a.y, b.x, b.y)

    @property
    def start(self) -> Point:
        return Point(self.x1, self.y1)

    @property
    def end(self) -> Point:
        return Point(self.x2, self.y2)

    @property
    def midpoint(self) -> Point:
        return Point((self.x1 + self.x2) / 2, (self.y1 + self.y2) / 2)

    @property
    def length(self) -> float:
        """Length in millimetres."""
        return math.hypot(self.x2 - self.x1, self.y2 - self.y1)


def total_length_mm(segments: Sequence[LineSegment]) -> float:
    """Sum of segment lengths in millimetres."""
    return sum(s.length for s in segments)
