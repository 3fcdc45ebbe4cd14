"""One-dimensional cut planning for deck boards (pro mode).

The deck is scanned row by row at board pitch. Each row's span is filled
from stock boards using a best-fit heuristic: the smallest pooled offcut
that covers the next chunk is reused before a new board is cut. The pool
carries over from row to row in scan order and is local to one planning
call.

The heuristic is greedy and online. Rows are never reordered and earlier
choices are never revisited, so the output is reproducible for a given
plan.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..value_objects import (
    OFFCUT_COLOR_GROUP,
    CutPiece,
    CutPlan,
    CutRow,
    CutSource,
    Mode,
    Plan,
    Product,
    Ruleset,
)
from .polygon_math import (
    RowSpan,
    deg_to_rad,
    rotate_polygon,
    round_half_up,
    row_spans,
)

logger = logging.getLogger(__name__)

__all__ = ["MIN_REUSABLE_OFFCUT_MM", "CutPlanner", "CutPlannerConfig", "build_cut_plan"]

# Leftovers at or below this length are scrap and are not pooled.
MIN_REUSABLE_OFFCUT_MM = 50.0


@dataclass(frozen=True)
class CutPlannerConfig:
    """Configuration for the row cut planner.

    Attributes:
        stock_length_mm: Length of one purchased board.
        kerf_mm: Saw blade width lost at every cut.
        min_offcut_mm: Leftovers must be longer than this to be reused.
    """

    stock_length_mm: float
    kerf_mm: float = 0.0
    min_offcut_mm: float = MIN_REUSABLE_OFFCUT_MM

    def __post_init__(self) -> None:
        if self.stock_length_mm <= 0:
            raise ValueError("Stock length must be positive")
        if self.kerf_mm < 0:
            raise ValueError("Kerf must be non-negative")
        if self.min_offcut_mm < 0:
            raise ValueError("Minimum offcut length must be non-negative")


@dataclass
class _PlannerState:
    """Mutable state for one planning run.

    Attributes:
        pool: Reusable offcut lengths.
        group_seq: Last color group number handed out.
    """

    pool: list[float] = field(default_factory=list)
    group_seq: int = 0

    def next_group(self) -> str:
        self.group_seq += 1
        return f"G{self.group_seq}"


class CutPlanner:
    """Best-fit offcut reuse across board rows.

    Attributes:
        config: Stock length, kerf and scrap threshold.
    """

    def __init__(self, config: CutPlannerConfig) -> None:
        self.config = config

    def plan(self, rows: Iterable[RowSpan], total_rows: int | None = None) -> CutPlan:
        """Pack the given rows in order.

        Args:
            rows: Row spans in scan order. Rows that do not need a board
                (see ``RowSpan.needs_board``) are skipped.
            total_rows: Number of scanlines visited; defaults to the number
                of rows supplied.

        Returns:
            CutPlan with one CutRow per row that needs material.
        """
        state = _PlannerState()
        cut_rows: list[CutRow] = []
        seen = 0

        for row in rows:
            seen += 1
            if not row.needs_board:
                continue
            cut_row = self._pack_row(row.row_index, row.span_mm, state)
            if cut_row is not None:
                cut_rows.append(cut_row)

        plan = CutPlan(
            stock_length_mm=self.config.stock_length_mm,
            total_rows=total_rows if total_rows is not None else seen,
            rows=tuple(cut_rows),
            offcuts_pool_mm=tuple(state.pool),
        )
        logger.info(
            "Cut plan: %d rows, %d stock boards, %d offcuts left",
            len(plan.rows),
            state.group_seq,
            len(plan.offcuts_pool_mm),
        )
        return plan

    def _pack_row(
        self, row_index: int, required_len_mm: float, state: _PlannerState
    ) -> CutRow | None:
        """Fill one row, drawing from the pool before cutting new stock."""
        remaining: float = round_half_up(required_len_mm)
        if remaining <= 0:
            logger.debug("Row %d: span %.3f mm rounds to zero", row_index, required_len_mm)
            return None

        stock_len = self.config.stock_length_mm
        pieces: list[CutPiece] = []
        row_offcut = 0.0

        while remaining > 0:
            chunk = min(remaining, stock_len)
            piece_id = f"R{row_index}-P{len(pieces)}"
            best = self._best_fit_index(state.pool, chunk)

            if best is not None:
                source_len = state.pool.pop(best)
                pieces.append(
                    CutPiece(
                        id=f"{piece_id}-OFF",
                        source=CutSource.OFFCUT,
                        color_group=OFFCUT_COLOR_GROUP,
                        length_mm=chunk,
                    )
                )
                remaining -= chunk
                self._return_leftover(source_len - chunk, state)
                row_offcut = 0.0
                logger.debug(
                    "Row %d: reused %.1f mm offcut for %.1f mm",
                    row_index,
                    source_len,
                    chunk,
                )
            else:
                group = state.next_group()
                pieces.append(
                    CutPiece(
                        id=f"{piece_id}-NEW",
                        source=CutSource.STOCK,
                        color_group=group,
                        length_mm=chunk,
                    )
                )
                remaining -= chunk
                leftover = self._return_leftover(stock_len - chunk, state)
                row_offcut = leftover
                logger.debug("Row %d: cut %.1f mm from new board %s", row_index, chunk, group)

        return CutRow(
            row_index=row_index,
            required_len_mm=required_len_mm,
            pieces=tuple(pieces),
            offcut_mm=row_offcut,
        )

    @staticmethod
    def _best_fit_index(pool: list[float], chunk: float) -> int | None:
        """Index of the smallest offcut that covers ``chunk``.

        Sorts the pool in place (stable), so equal lengths resolve to the
        earliest one.
        """
        pool.sort()
        for i, length in enumerate(pool):
            if length >= chunk:
                return i
        return None

    def _return_leftover(self, remainder: float, state: _PlannerState) -> float:
        """Pool what is left after the kerf; returns the pooled length or 0."""
        leftover = remainder - self.config.kerf_mm
        if leftover > self.config.min_offcut_mm:
            state.pool.append(leftover)
            return leftover
        return 0.0


def build_cut_plan(plan: Plan, product: Product, rules: Ruleset) -> CutPlan | None:
    """Cut plan for ``plan``; None unless the rules are in pro mode."""
    if rules.mode is not Mode.PRO:
        return None

    rotated = rotate_polygon(plan.polygon, deg_to_rad(-plan.decking_direction_deg))
    spans = row_spans(rotated, rules.pitch_mm(plan, product))
    planner = CutPlanner(
        CutPlannerConfig(stock_length_mm=product.stock_length_mm, kerf_mm=rules.kerf_mm)
    )
    return planner.plan(spans, total_rows=len(spans))
