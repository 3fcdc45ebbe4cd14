"""Tests for text formatters and the JSON exporter."""

from __future__ import annotations

import json

import pytest

from decking.application.dtos import EstimateOutput
from decking.domain.services import build_cut_plan, calculate_quantities
from decking.domain.value_objects import (
    FasteningMode,
    Mode,
    Plan,
    Polygon,
    Product,
    Quantities,
    Ruleset,
    StairItem,
    StairsPlan,
)
from decking.infrastructure import (
    CutPlanFormatter,
    JsonExporter,
    QuantitiesFormatter,
    to_dict,
)


@pytest.fixture
def quantities(rectangle_plan: Plan, product: Product) -> Quantities:
    return calculate_quantities(rectangle_plan, product, Ruleset(), FasteningMode.CLIP)


@pytest.fixture
def pro_rules() -> Ruleset:
    return Ruleset(mode=Mode.PRO)


# =============================================================================
# QuantitiesFormatter Tests
# =============================================================================


class TestQuantitiesFormatter:
    """Tests for QuantitiesFormatter."""

    def test_sections(self, quantities: Quantities) -> None:
        text = QuantitiesFormatter().format(quantities)
        for heading in ("DECK ESTIMATE", "AREA", "DECK BOARDS", "SUBSTRUCTURE", "FASTENERS"):
            assert heading in text
        assert "STAIRS" not in text

    def test_board_figures(self, quantities: Quantities) -> None:
        text = QuantitiesFormatter().format(quantities)
        assert "Board rows:   7" in text
        assert "Used length:  14,000 mm" in text
        assert "Loss rate:    3.0%" in text
        assert "Pieces:       5" in text

    def test_substructure_and_fasteners(self, quantities: Quantities) -> None:
        text = QuantitiesFormatter().format(quantities)
        assert "Bearers (primary):  2.000 m" in text
        assert "Joists (secondary): 11.000 m" in text
        assert "Footings:           8" in text
        assert "Clips:  35" in text
        assert "Ledger" not in text

    def test_screws(self, rectangle_plan: Plan, product: Product) -> None:
        q = calculate_quantities(rectangle_plan, product, Ruleset(), "screw")
        text = QuantitiesFormatter().format(q)
        assert "Screws: 70" in text
        assert "Clips" not in text

    def test_ledger_posts_and_stairs(self, rectangle: Polygon, product: Product) -> None:
        plan = Plan(
            polygon=rectangle,
            board_width_mm=140,
            deck_height_mm=600,
            attached_edge_indices=(0,),
            stairs=StairsPlan(enabled=True, items=(StairItem("front", 1000, 3, 280, 170),)),
        )
        text = QuantitiesFormatter().format(
            calculate_quantities(plan, product, Ruleset(), "clip")
        )
        assert "Ledger:             2.000 m (3 anchor bolts)" in text
        assert "Posts:              5 x 600 mm (3.000 m)" in text
        assert "STAIRS" in text
        assert "Treads: 0.84 m2" in text

    def test_detail_toggle(self, quantities: Quantities) -> None:
        assert "SUBSTRUCTURE DETAIL" in QuantitiesFormatter().format(quantities)
        brief = QuantitiesFormatter(include_detail=False).format(quantities)
        assert "SUBSTRUCTURE DETAIL" not in brief

    def test_detail_hardware(self, quantities: Quantities) -> None:
        text = QuantitiesFormatter().format_detail(quantities)
        assert "Galvanized square pipe 100x100x1.6T" in text
        assert "Foundation: concrete_block (200x200x200mm) x 8" in text
        assert "Anchor bolts" in text
        assert "Base plates" not in text


# =============================================================================
# CutPlanFormatter Tests
# =============================================================================


class TestCutPlanFormatter:
    """Tests for CutPlanFormatter."""

    def test_rows_and_legend(
        self, rectangle_plan: Plan, product: Product, pro_rules: Ruleset
    ) -> None:
        cut_plan = build_cut_plan(rectangle_plan, product, pro_rules)
        text = CutPlanFormatter().format(cut_plan)
        assert text.startswith("CUT PLAN")
        assert "2000[G1]" in text
        assert "Stock boards: 7 x 3000 mm (7 of 7 rows)" in text
        assert "LENGTHS" in text
        assert "2,000mm      x 7" in text
        assert "7 pieces, 14,000 mm (~5 boards)" in text

    def test_reused_offcuts_are_marked(self, product: Product, pro_rules: Ruleset) -> None:
        plan = Plan(
            polygon=Polygon.from_coords([(0, 0), (4000, 0), (4000, 300), (0, 300)]),
            board_width_mm=140,
        )
        text = CutPlanFormatter().format(build_cut_plan(plan, product, pro_rules))
        assert "1000*[OFFCUT]" in text
        assert "* reused offcut" in text

    def test_empty_plan(self, product: Product, pro_rules: Ruleset) -> None:
        plan = Plan(polygon=Polygon.from_coords([(0, 0), (10, 0)]), board_width_mm=140)
        cut_plan = build_cut_plan(plan, product, pro_rules)
        assert CutPlanFormatter().format(cut_plan) == "No rows to cut."


# =============================================================================
# JsonExporter Tests
# =============================================================================


class TestJsonExporter:
    """Tests for JsonExporter."""

    def test_to_dict_writes_enum_values(self, quantities: Quantities) -> None:
        data = to_dict(quantities)
        assert data["fasteners"]["mode"] == "clip"
        assert data["substructure_detail"]["foundation"]["type"] == "concrete_block"

    def test_export_estimate(self, quantities: Quantities) -> None:
        output = EstimateOutput(quantities=quantities)
        data = json.loads(JsonExporter().export(output))
        assert data["fastening_mode"] == "clip"
        assert data["quantities"]["boards"]["pieces"] == 5
        assert data["quantities"]["footings_qty"] == 8
        assert len(data["quantities"]["structure_layout"]["piles"]) == 8
        assert "cut_plan" not in data
        assert "warnings" not in data

    def test_export_with_cut_plan(
        self,
        rectangle_plan: Plan,
        product: Product,
        pro_rules: Ruleset,
        quantities: Quantities,
    ) -> None:
        cut_plan = build_cut_plan(rectangle_plan, product, pro_rules)
        output = EstimateOutput(
            quantities=quantities, cut_plan=cut_plan, warnings=["heads up"]
        )
        data = json.loads(JsonExporter().export(output))
        assert data["cut_plan"]["stock_boards_used"] == 7
        assert data["cut_plan"]["rows"][0]["pieces"][0]["source"] == "stock"
        assert data["cut_plan"]["legend"]["items"][0]["key"] == "2000"
        assert data["warnings"] == ["heads up"]

    def test_export_errors(self) -> None:
        output = EstimateOutput(quantities=None, errors=["plan.polygon.outer: too few"])
        data = json.loads(JsonExporter().export(output))
        assert data == {"errors": ["plan.polygon.outer: too few"], "warnings": []}

    def test_export_cut_plan(
        self, rectangle_plan: Plan, product: Product, pro_rules: Ruleset
    ) -> None:
        cut_plan = build_cut_plan(rectangle_plan, product, pro_rules)
        data = json.loads(JsonExporter().export_cut_plan(cut_plan))
        assert data["total_rows"] == 7
        assert len(data["offcuts_pool_mm"]) == 7
        assert data["legend"]["total_pieces"] == 7
