"""Quantity take-off for a deck plan.

Rotates the plan into board coordinates (boards along +X), measures board
usage, lays out bearers and joists, places footings, and rotates the
resulting structure back before reporting.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..value_objects import (
    AreaBreakdown,
    BoardQuantities,
    FastenerQuantities,
    FasteningMode,
    LedgerQuantities,
    LineSegment,
    Mode,
    Plan,
    Polygon,
    PostQuantities,
    Product,
    Quantities,
    Ruleset,
    StructureLayout,
    SubstructureLengths,
    total_length_mm,
)
from .footing_placer import FootingPlacer
from .polygon_math import (
    area_mm2,
    deg_to_rad,
    rotate_point,
    rotate_polygon,
    rotate_segment,
    round_half_up,
    row_spans,
)
from .stairs import StairsCalculator, calculate_stairs, stairs_footprint_mm2
from .substructure_detail import build_substructure_detail
from .substructure_grid import (
    GridAxis,
    GridPlacement,
    clipped_grid_lines,
    ledger_segments,
    remove_ledger_bearers,
    rim_joists,
)

logger = logging.getLogger(__name__)

__all__ = [
    "BoardUsage",
    "calculate_quantities",
    "consumer_loss_rate",
    "ledger_anchor_bolts",
    "measure_board_usage",
    "unique_joist_positions",
]

# Used when the ruleset carries no anchor spacing.
DEFAULT_ANCHOR_SPACING_MM = 600.0


@dataclass(frozen=True)
class BoardUsage:
    """Board length laid across the deck and the number of rows."""

    used_length_mm: float
    board_lines: int


def measure_board_usage(polygon: Polygon, pitch_mm: float) -> BoardUsage:
    """Sum the row spans of ``polygon`` (already in board coordinates).

    Only rows where ``RowSpan.needs_board`` holds are counted.
    """
    used = 0.0
    lines = 0
    for row in row_spans(polygon, pitch_mm):
        if row.needs_board:
            used += row.span_mm
            lines += 1
    return BoardUsage(used_length_mm=used, board_lines=lines)


def consumer_loss_rate(plan: Plan, rules: Ruleset) -> float:
    """Heuristic loss rate: zero in pro mode, shape-dependent in consumer mode.

    Every vertex beyond four and every cutout adds to the base rate; the
    result is clamped to ``[0, cap]``.
    """
    if rules.mode is Mode.PRO or rules.consumer_loss is None:
        return 0.0
    rule = rules.consumer_loss
    extra_vertices = max(0, plan.polygon.vertex_count - 4)
    rate = (
        rule.base
        + extra_vertices * rule.vertex_factor
        + plan.polygon.hole_count * rule.cutout_factor
    )
    return min(rule.cap, max(0.0, rate))


def ledger_anchor_bolts(ledger_length_mm: float, anchor_spacing_mm: float) -> int:
    """Anchor bolts along a ledger: one per spacing plus one, at least two."""
    if ledger_length_mm <= 0:
        return 0
    spacing = anchor_spacing_mm if anchor_spacing_mm > 0 else DEFAULT_ANCHOR_SPACING_MM
    return max(2, math.ceil(ledger_length_mm / spacing) + 1)


def unique_joist_positions(joists: list[LineSegment]) -> int:
    """Distinct joist X positions, bucketed to 0.1 mm."""
    return len({round_half_up(j.x1 * 10) for j in joists})


def _metres(length_mm: float) -> float:
    return round_half_up(length_mm) / 1000


def calculate_quantities(
    plan: Plan,
    product: Product,
    rules: Ruleset,
    fastening_mode: FasteningMode | str,
    stairs_calculator: StairsCalculator = calculate_stairs,
) -> Quantities:
    """Compute the full material take-off for ``plan``.

    Args:
        plan: Deck outline and options.
        product: Deck board product.
        rules: Spacing constants and estimation mode.
        fastening_mode: ``clip`` or ``screw``.
        stairs_calculator: Stairs sub-calculator; its result is merged
            verbatim.

    Returns:
        Quantities with the structure layout in the plan's own coordinates.
    """
    fastening_mode = FasteningMode(fastening_mode)
    polygon = plan.polygon
    ledger_edges = plan.ledger_edges

    # Areas
    deck_area_mm2 = area_mm2(polygon)
    stairs_area_mm2 = stairs_footprint_mm2(plan)

    # Board coordinates: boards run along +X
    rotated = rotate_polygon(polygon, deg_to_rad(-plan.decking_direction_deg))
    usage = measure_board_usage(rotated, rules.pitch_mm(plan, product))
    loss_rate = consumer_loss_rate(plan, rules)
    board_pieces = math.ceil(
        usage.used_length_mm / product.stock_length_mm * (1 + loss_rate)
    )

    # Ledger
    ledgers = ledger_segments(rotated, ledger_edges)
    ledger_length = total_length_mm(ledgers)

    # Substructure
    inner_joists = clipped_grid_lines(
        rotated, rules.secondary_spacing_mm, GridAxis.X, GridPlacement.CENTERED
    )
    inner_bearers = clipped_grid_lines(
        rotated, rules.primary_spacing_mm, GridAxis.Y, GridPlacement.EDGE
    )
    bearers = remove_ledger_bearers(inner_bearers, ledgers)
    perimeter = rim_joists(rotated, ledger_edges)
    joists = [*inner_joists, *perimeter]

    overrides = plan.substructure_overrides
    primary_len = (
        overrides.primary_len_mm
        if overrides.primary_len_mm is not None
        else total_length_mm(bearers)
    )
    secondary_len = (
        overrides.secondary_len_mm
        if overrides.secondary_len_mm is not None
        else total_length_mm(joists)
    )

    # Footings
    piles = FootingPlacer(spacing_mm=rules.footing_spacing_mm).place(
        rotated, bearers, ledger_edges
    )
    footing_qty = len(piles)

    # Posts
    deck_height = plan.deck_height_mm or 0.0
    posts: PostQuantities | None = None
    if deck_height > 0:
        posts = PostQuantities(
            qty=footing_qty,
            each_length_mm=round_half_up(deck_height),
            total_length_m=_metres(footing_qty * deck_height),
        )

    # Fasteners
    intersections = usage.board_lines * unique_joist_positions(inner_joists)
    if fastening_mode is FasteningMode.SCREW:
        fasteners = FastenerQuantities(
            mode=fastening_mode, screws=intersections * rules.screw_per_intersection
        )
    else:
        fasteners = FastenerQuantities(mode=fastening_mode, clips=intersections)

    stairs = stairs_calculator(plan, product, rules, fastening_mode)

    detail = build_substructure_detail(
        bearers=bearers,
        inner_joists=inner_joists,
        rim_joists=perimeter,
        footing_qty=footing_qty,
        deck_height_mm=deck_height,
        config=rules.substructure,
    )

    # Back to the plan's coordinates
    back = deg_to_rad(plan.decking_direction_deg)
    layout = StructureLayout(
        piles=tuple(rotate_point(p, back) for p in piles),
        bearers=tuple(rotate_segment(b, back) for b in bearers),
        joists=tuple(rotate_segment(j, back) for j in joists),
    )

    logger.debug(
        "Boards: %.0f mm over %d lines, loss %.3f -> %d pieces",
        usage.used_length_mm,
        usage.board_lines,
        loss_rate,
        board_pieces,
    )
    logger.debug(
        "Substructure: %d bearers, %d joists (%d rim), %d footings",
        len(bearers),
        len(joists),
        len(perimeter),
        footing_qty,
    )

    return Quantities(
        area=AreaBreakdown(
            total_m2=(deck_area_mm2 + stairs_area_mm2) / 1_000_000,
            deck_m2=deck_area_mm2 / 1_000_000,
            stairs_m2=stairs_area_mm2 / 1_000_000,
        ),
        boards=BoardQuantities(
            pieces=board_pieces,
            used_length_mm=round_half_up(usage.used_length_mm),
            stock_length_mm=product.stock_length_mm,
            loss_rate_applied=loss_rate,
            board_lines=usage.board_lines,
        ),
        substructure=SubstructureLengths(
            primary_len_m=_metres(primary_len),
            secondary_len_m=_metres(secondary_len),
        ),
        substructure_detail=detail,
        anchors_qty=footing_qty,
        footings_qty=footing_qty,
        fasteners=fasteners,
        structure_layout=layout,
        ledger=(
            LedgerQuantities(
                length_m=_metres(ledger_length),
                anchor_bolts_qty=ledger_anchor_bolts(
                    ledger_length, rules.anchor_spacing_mm
                ),
            )
            if ledger_length > 0
            else None
        ),
        posts=posts,
        stairs=stairs,
    )
