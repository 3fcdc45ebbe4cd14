"""Length legend for cut plan displays.

Pieces are grouped by rounded length so that a cut plan can be colored
and counted by length. Short pieces share a single bucket.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from decking.domain.services.polygon_math import round_half_up
from decking.domain.value_objects import CutPlan

SMALL_LENGTH_THRESHOLD_MM = 1000
SMALL_BUCKET_COLOR = "hsl(205, 65%, 65%)"

# Color gradient spans lengths up to this value
COLOR_RANGE_MM = 6000


@dataclass(frozen=True)
class LengthLegendItem:
    """One legend entry.

    Attributes:
        key: ``"<=1000"`` for the small bucket, otherwise the length in mm.
        label: Display label, e.g. ``"2,855mm"``.
        color: CSS hsl() color.
        count: Number of pieces in the bucket.
        is_small: True for the short-piece bucket.
    """

    key: str
    label: str
    color: str
    count: int
    is_small: bool = False


@dataclass(frozen=True)
class LengthLegend:
    """Legend for a whole cut plan."""

    items: tuple[LengthLegendItem, ...]
    total_pieces: int
    total_length_mm: float
    stock_length_mm: float
    boards_approx: int


def length_key(length_mm: float, threshold_mm: int = SMALL_LENGTH_THRESHOLD_MM) -> str:
    """Bucket key for a piece length."""
    length = max(0, round_half_up(length_mm))
    if length <= threshold_mm:
        return f"<={threshold_mm}"
    return str(length)


def length_label(key: str) -> str:
    if key.startswith("<="):
        return f"≤{int(key[2:]):,}mm"
    return f"{int(key):,}mm"


def length_color(key: str) -> str:
    """Green for short lengths through red for full stock lengths."""
    if key.startswith("<="):
        return SMALL_BUCKET_COLOR
    t = max(0.0, min(1.0, int(key) / COLOR_RANGE_MM))
    hue = round_half_up(120 - t * 120)
    return f"hsl({hue}, 60%, 62%)"


def build_length_legend(
    cut_plan: CutPlan, threshold_mm: int = SMALL_LENGTH_THRESHOLD_MM
) -> LengthLegend:
    """Count cut plan pieces per length bucket.

    The small bucket is listed first, followed by lengths in ascending
    order.
    """
    counts: dict[str, int] = {}
    total_pieces = 0
    total_length = 0.0

    for row in cut_plan.rows:
        for piece in row.pieces:
            key = length_key(piece.length_mm, threshold_mm)
            counts[key] = counts.get(key, 0) + 1
            total_pieces += 1
            total_length += piece.length_mm

    def sort_key(key: str) -> tuple[int, int]:
        if key.startswith("<="):
            return (0, 0)
        return (1, int(key))

    items = tuple(
        LengthLegendItem(
            key=key,
            label=length_label(key),
            color=length_color(key),
            count=counts[key],
            is_small=key.startswith("<="),
        )
        for key in sorted(counts, key=sort_key)
    )

    stock = cut_plan.stock_length_mm
    return LengthLegend(
        items=items,
        total_pieces=total_pieces,
        total_length_mm=total_length,
        stock_length_mm=stock,
        boards_approx=math.ceil(total_length / stock) if stock > 0 else 0,
    )
