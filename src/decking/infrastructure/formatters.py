"""Output formatters and exporters for deck estimates."""

from __future__ import annotations

import json
from dataclasses import asdict
from enum import Enum
from typing import Any

from decking.application.dtos import EstimateOutput
from decking.domain.value_objects import (
    CutPlan,
    CutSource,
    HardwareItem,
    MemberDetail,
    Quantities,
)

from .cut_plan_legend import LengthLegend, build_length_legend


def _plain(items: list[tuple[str, Any]]) -> dict[str, Any]:
    """``asdict`` factory that writes enums as their values."""
    return {k: v.value if isinstance(v, Enum) else v for k, v in items}


def to_dict(record: Any) -> dict[str, Any]:
    """Convert a domain record to JSON-ready primitives."""
    return asdict(record, dict_factory=_plain)


class QuantitiesFormatter:
    """Formats a material take-off as a text report."""

    def __init__(self, include_detail: bool = True) -> None:
        """Initialize formatter.

        Args:
            include_detail: Whether to append the substructure detail section.
        """
        self._include_detail = include_detail

    def format(self, quantities: Quantities) -> str:
        """Format quantities as a report."""
        area = quantities.area
        boards = quantities.boards
        lines = [
            "DECK ESTIMATE",
            "=" * 60,
            "",
            "AREA",
            f"  Deck:    {area.deck_m2:>10.2f} m2",
            f"  Stairs:  {area.stairs_m2:>10.2f} m2",
            f"  Total:   {area.total_m2:>10.2f} m2",
            "",
            "DECK BOARDS",
            f"  Board rows:   {boards.board_lines}",
            f"  Used length:  {boards.used_length_mm:,} mm",
            f"  Stock length: {boards.stock_length_mm:,.0f} mm",
            f"  Loss rate:    {boards.loss_rate_applied:.1%}",
            f"  Pieces:       {boards.pieces}",
            "",
            "SUBSTRUCTURE",
            f"  Bearers (primary):  {quantities.substructure.primary_len_m:.3f} m",
            f"  Joists (secondary): {quantities.substructure.secondary_len_m:.3f} m",
            f"  Footings:           {quantities.footings_qty}",
        ]

        if quantities.ledger is not None:
            lines.append(
                f"  Ledger:             {quantities.ledger.length_m:.3f} m "
                f"({quantities.ledger.anchor_bolts_qty} anchor bolts)"
            )
        if quantities.posts is not None:
            posts = quantities.posts
            lines.append(
                f"  Posts:              {posts.qty} x {posts.each_length_mm} mm "
                f"({posts.total_length_m:.3f} m)"
            )

        lines.append("")
        lines.append("FASTENERS")
        fasteners = quantities.fasteners
        if fasteners.screws is not None:
            lines.append(f"  Screws: {fasteners.screws}")
        else:
            lines.append(f"  Clips:  {fasteners.clips or 0}")

        if quantities.stairs is not None:
            stairs = quantities.stairs
            lines.append("")
            lines.append("STAIRS")
            for item in stairs.items:
                lines.append(
                    f"  {item.id:<12} {item.step_count} steps, "
                    f"{item.width_mm:g} mm wide, rise {item.unit_rise_mm:g} mm, "
                    f"run {item.unit_run_mm:g} mm"
                )
            lines.append(f"  Treads: {stairs.tread_area_m2:.2f} m2")
            lines.append(f"  Risers: {stairs.riser_area_m2:.2f} m2")

        if self._include_detail:
            lines.append("")
            lines.append(self.format_detail(quantities))

        return "\n".join(lines)

    def format_detail(self, quantities: Quantities) -> str:
        """Format the substructure purchasing detail."""
        detail = quantities.substructure_detail
        lines = [
            "SUBSTRUCTURE DETAIL",
            "-" * 60,
        ]
        lines.extend(self._member("Bearers", detail.bearer))
        lines.extend(self._member("Joists", detail.joist))

        if detail.post is not None:
            post = detail.post
            lines.append(f"Posts: {post.spec.name}")
            lines.append(
                f"  {post.qty} x {post.each_length_mm} mm, "
                f"{post.stock_pieces} x {post.spec.stock_length_mm:g} mm stock"
            )

        foundation = detail.foundation
        lines.append(
            f"Foundation: {foundation.type.value} ({foundation.spec_description}) "
            f"x {foundation.qty}"
        )

        lines.append("")
        lines.append(f"{'Hardware':<24} {'Spec':<14} {'Qty':>6}")
        hardware = detail.hardware
        rows: list[tuple[str, HardwareItem | None]] = [
            ("Anchor bolts", hardware.anchor_bolts),
            ("Angle brackets", hardware.angle_brackets),
            ("Joist hangers", hardware.joist_hangers),
            ("Self-drilling screws", hardware.self_drilling_screws),
            ("Base plates", hardware.base_plates),
            ("Post caps", hardware.post_caps),
        ]
        for name, item in rows:
            if item is not None:
                lines.append(f"  {name:<22} {item.spec:<14} {item.qty:>6}")

        return "\n".join(lines)

    @staticmethod
    def _member(title: str, member: MemberDetail) -> list[str]:
        lines = [
            f"{title}: {member.spec.name}",
            f"  {member.pieces} pieces ({member.inner_pieces} inner, "
            f"{member.rim_pieces} rim), {member.total_length_m:.3f} m",
            f"  Stock: {member.stock_pieces} x {member.spec.stock_length_mm:g} mm",
        ]
        for entry in member.breakdown:
            lines.append(f"    {entry.length_mm:>6} mm x {entry.qty}")
        return lines


class CutPlanFormatter:
    """Formats a pro-mode cut plan as a row table with a length legend."""

    def format(self, cut_plan: CutPlan) -> str:
        """Format the cut plan rows, legend and leftover offcuts."""
        if not cut_plan.rows:
            return "No rows to cut."

        lines = [
            "CUT PLAN",
            "=" * 70,
            f"{'Row':<5} {'Span (mm)':>10}  Pieces",
            "-" * 70,
        ]
        for row in cut_plan.rows:
            pieces = ", ".join(
                f"{p.length_mm:g}{'*' if p.source is CutSource.OFFCUT else ''}"
                f"[{p.color_group}]"
                for p in row.pieces
            )
            lines.append(f"{row.row_index:<5} {row.required_len_mm:>10.1f}  {pieces}")
        lines.append("-" * 70)
        lines.append("* reused offcut")
        lines.append(
            f"Stock boards: {cut_plan.stock_boards_used} x "
            f"{cut_plan.stock_length_mm:g} mm "
            f"({len(cut_plan.rows)} of {cut_plan.total_rows} rows)"
        )
        if cut_plan.offcuts_pool_mm:
            leftovers = ", ".join(f"{o:g}" for o in cut_plan.offcuts_pool_mm)
            lines.append(f"Leftover offcuts: {leftovers}")

        lines.append("")
        lines.append(self.format_legend(build_length_legend(cut_plan)))
        return "\n".join(lines)

    def format_legend(self, legend: LengthLegend) -> str:
        lines = ["LENGTHS"]
        for item in legend.items:
            lines.append(f"  {item.label:<12} x {item.count}")
        lines.append(
            f"  {legend.total_pieces} pieces, {legend.total_length_mm:,.0f} mm "
            f"(~{legend.boards_approx} boards)"
        )
        return "\n".join(lines)


class JsonExporter:
    """Exports estimates and cut plans as JSON."""

    def export(self, output: EstimateOutput) -> str:
        """Export an estimate as a JSON string."""
        if not output.is_valid:
            return json.dumps(
                {"errors": output.errors, "warnings": output.warnings}, indent=2
            )

        data: dict[str, Any] = {
            "fastening_mode": output.fastening_mode.value,
            "quantities": to_dict(output.quantities),
        }
        if output.cut_plan is not None:
            data["cut_plan"] = self._cut_plan_data(output.cut_plan)
        if output.warnings:
            data["warnings"] = output.warnings
        return json.dumps(data, indent=2)

    def export_cut_plan(self, cut_plan: CutPlan) -> str:
        """Export a cut plan with its length legend."""
        return json.dumps(self._cut_plan_data(cut_plan), indent=2)

    def _cut_plan_data(self, cut_plan: CutPlan) -> dict[str, Any]:
        data = to_dict(cut_plan)
        data["stock_boards_used"] = cut_plan.stock_boards_used
        data["legend"] = to_dict(build_length_legend(cut_plan))
        return data
