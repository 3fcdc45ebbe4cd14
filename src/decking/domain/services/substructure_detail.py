"""Substructure material detail: steel sections, stock lengths and hardware."""

from __future__ import annotations

import math
from typing import Sequence

from ..value_objects import (
    DEFAULT_BEARER_SPEC,
    DEFAULT_JOIST_SPEC,
    DEFAULT_POST_SPEC,
    FoundationDetail,
    FoundationType,
    HardwareDetail,
    HardwareItem,
    LengthBreakdown,
    LineSegment,
    MemberDetail,
    PostDetail,
    SteelPipeSpec,
    SubstructureConfig,
    SubstructureDetail,
    total_length_mm,
)
from .polygon_math import round_half_up

__all__ = [
    "FOUNDATION_SPECS",
    "build_substructure_detail",
    "group_by_length",
    "stock_pieces",
]

FOUNDATION_SPECS: dict[FoundationType, str] = {
    FoundationType.CONCRETE_BLOCK: "200x200x200mm",
    FoundationType.ANCHOR_BOLT: "M12x100",
    FoundationType.RUBBER_PAD: "200x200x6T",
    FoundationType.SCREW_PILE: "D76x1200",
}

ANCHOR_BOLTS_PER_FOOTING = 4
BRACKETS_PER_MEMBER = 2
SCREWS_PER_CONNECTION = 4


def _metres(length_mm: float) -> float:
    return round_half_up(length_mm) / 1000


def group_by_length(
    segments: Sequence[LineSegment], bucket_mm: int = 100
) -> tuple[LengthBreakdown, ...]:
    """Count members per length bucket, longest first.

    Lengths are rounded to the nearest ``bucket_mm``; members that round to
    zero are left out.
    """
    counts: dict[int, int] = {}
    for segment in segments:
        rounded = round_half_up(segment.length / bucket_mm) * bucket_mm
        if rounded > 0:
            counts[rounded] = counts.get(rounded, 0) + 1
    return tuple(
        LengthBreakdown(length_mm=length, qty=qty)
        for length, qty in sorted(counts.items(), reverse=True)
    )


def stock_pieces(total_length_mm: float, stock_length_mm: float, loss_rate: float) -> int:
    """Stock lengths needed for ``total_length_mm`` including cutting loss."""
    if total_length_mm <= 0 or stock_length_mm <= 0:
        return 0
    return math.ceil(total_length_mm / stock_length_mm * (1 + loss_rate))


def _resolve_spec(
    configured: SteelPipeSpec | None,
    default: SteelPipeSpec,
    stock_length_mm: float | None,
) -> SteelPipeSpec:
    spec = configured if configured is not None else default
    if configured is not None and stock_length_mm is not None:
        return spec.with_stock_length(stock_length_mm)
    return spec


def _member(
    spec: SteelPipeSpec,
    members: Sequence[LineSegment],
    inner: int,
    rim: int,
    loss_rate: float,
) -> MemberDetail:
    total = total_length_mm(members)
    return MemberDetail(
        spec=spec,
        total_length_m=_metres(total),
        pieces=len(members),
        inner_pieces=inner,
        rim_pieces=rim,
        breakdown=group_by_length(members),
        stock_pieces=stock_pieces(total, spec.stock_length_mm, loss_rate),
    )


def build_substructure_detail(
    bearers: Sequence[LineSegment],
    inner_joists: Sequence[LineSegment],
    rim_joists: Sequence[LineSegment],
    footing_qty: int,
    deck_height_mm: float,
    config: SubstructureConfig | None = None,
) -> SubstructureDetail:
    """Summarise substructure materials for purchasing.

    Args:
        bearers: Bearers after ledger filtering (all interior).
        inner_joists: Joists from the interior grid.
        rim_joists: Perimeter joists.
        footing_qty: Number of footings.
        deck_height_mm: Post length; no posts when zero.
        config: Optional section, stock and foundation settings.
    """
    config = config or SubstructureConfig()
    bearer_spec = _resolve_spec(config.bearer_spec, DEFAULT_BEARER_SPEC, config.stock_length_mm)
    joist_spec = _resolve_spec(config.joist_spec, DEFAULT_JOIST_SPEC, config.stock_length_mm)
    post_spec = _resolve_spec(config.post_spec, DEFAULT_POST_SPEC, config.stock_length_mm)

    joists = [*inner_joists, *rim_joists]
    bearer = _member(bearer_spec, bearers, len(bearers), 0, config.loss_rate)
    joist = _member(joist_spec, joists, len(inner_joists), len(rim_joists), config.loss_rate)

    has_posts = deck_height_mm > 0
    post: PostDetail | None = None
    if has_posts:
        post_total = footing_qty * deck_height_mm
        post = PostDetail(
            spec=post_spec,
            qty=footing_qty,
            each_length_mm=round_half_up(deck_height_mm),
            total_length_m=_metres(post_total),
            stock_pieces=stock_pieces(post_total, post_spec.stock_length_mm, config.loss_rate),
        )

    connections = BRACKETS_PER_MEMBER * (len(bearers) + len(joists))
    hardware = HardwareDetail(
        anchor_bolts=HardwareItem("M12x100", footing_qty * ANCHOR_BOLTS_PER_FOOTING),
        angle_brackets=HardwareItem("50x50x5T", connections),
        joist_hangers=HardwareItem(
            f"{joist_spec.width_mm:g}x{joist_spec.height_mm:g}", len(inner_joists)
        ),
        self_drilling_screws=HardwareItem("M5x19", connections * SCREWS_PER_CONNECTION),
        base_plates=HardwareItem("100x100x3T", footing_qty) if has_posts else None,
        post_caps=HardwareItem("100x100", footing_qty) if has_posts else None,
    )

    return SubstructureDetail(
        bearer=bearer,
        joist=joist,
        foundation=FoundationDetail(
            type=config.foundation_type,
            spec_description=FOUNDATION_SPECS[config.foundation_type],
            qty=footing_qty,
        ),
        hardware=hardware,
        post=post,
    )
