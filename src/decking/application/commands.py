"""Application commands (use cases) for deck estimation."""

from __future__ import annotations

import logging
from typing import Callable

from decking.application.config import (
    DeckConfiguration,
    config_to_fastening_mode,
    config_to_plan,
    config_to_product,
    config_to_ruleset,
    validate_config,
)
from decking.domain.services import build_cut_plan, calculate_quantities
from decking.domain.value_objects import (
    CutPlan,
    FasteningMode,
    Plan,
    Product,
    Quantities,
    Ruleset,
)

from .dtos import EstimateOutput

logger = logging.getLogger(__name__)

QuantityCalculator = Callable[[Plan, Product, Ruleset, FasteningMode], Quantities]
CutPlanBuilder = Callable[[Plan, Product, Ruleset], CutPlan | None]


class EstimateDeckCommand:
    """Command to estimate materials for a deck plan.

    Runs the quantity take-off and, in pro mode, the row cut plan. Both
    engines can be replaced for testing.
    """

    def __init__(
        self,
        quantity_calculator: QuantityCalculator | None = None,
        cut_plan_builder: CutPlanBuilder | None = None,
    ) -> None:
        self.quantity_calculator = quantity_calculator or calculate_quantities
        self.cut_plan_builder = cut_plan_builder or build_cut_plan

    def execute(
        self,
        plan: Plan,
        product: Product,
        rules: Ruleset,
        fastening_mode: FasteningMode | str = FasteningMode.CLIP,
    ) -> EstimateOutput:
        """Estimate quantities for domain inputs.

        Args:
            plan: Deck outline and options.
            product: Deck board product.
            rules: Spacing constants and estimation mode.
            fastening_mode: ``clip`` or ``screw``.

        Returns:
            EstimateOutput with quantities and the optional cut plan.
        """
        mode = FasteningMode(fastening_mode)
        warnings: list[str] = []
        if plan.polygon.is_degenerate:
            warnings.append("Deck outline has fewer than 3 vertices; nothing to estimate")

        quantities = self.quantity_calculator(plan, product, rules, mode)
        cut_plan = self.cut_plan_builder(plan, product, rules)
        logger.info(
            "Estimated %.2f m2 deck: %d boards, %d footings",
            quantities.area.deck_m2,
            quantities.boards.pieces,
            quantities.footings_qty,
        )
        return EstimateOutput(
            quantities=quantities,
            cut_plan=cut_plan,
            fastening_mode=mode,
            warnings=warnings,
        )

    def execute_config(
        self,
        config: DeckConfiguration,
        fastening_mode: FasteningMode | str | None = None,
    ) -> EstimateOutput:
        """Validate a configuration and estimate it.

        Blocking validation errors are returned on the output instead of
        running the engines.
        """
        mode = config_to_fastening_mode(config, fastening_mode)
        validation = validate_config(config)
        warnings = [f"{w.path}: {w.message}" for w in validation.warnings]
        if not validation.is_valid:
            return EstimateOutput(
                quantities=None,
                fastening_mode=mode,
                errors=[f"{e.path}: {e.message}" for e in validation.errors],
                warnings=warnings,
            )

        output = self.execute(
            config_to_plan(config),
            config_to_product(config),
            config_to_ruleset(config),
            mode,
        )
        output.warnings = warnings + output.warnings
        return output
