"""Stairs sub-calculator.

The aggregator treats this as an opaque collaborator and merges its
result block verbatim into the quantities.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..value_objects import (
    FasteningMode,
    Plan,
    Product,
    Ruleset,
    StairItemQuantities,
    StairsQuantities,
)
from .polygon_math import round_half_up

__all__ = ["StairsCalculator", "calculate_stairs", "stairs_footprint_mm2"]

StairsCalculator = Callable[
    [Plan, Product, Ruleset, FasteningMode], Optional[StairsQuantities]
]


def _round_to(value: float, places: int) -> float:
    factor = 10**places
    return round_half_up(value * factor) / factor


def stairs_footprint_mm2(plan: Plan) -> float:
    """Plan area covered by enabled stair runs (width x total run)."""
    if plan.stairs is None or not plan.stairs.enabled:
        return 0.0
    return sum(
        item.width_mm * item.step_count * item.step_depth_mm
        for item in plan.stairs.items
    )


def calculate_stairs(
    plan: Plan,
    product: Product,
    rules: Ruleset,
    fastening_mode: FasteningMode,
) -> StairsQuantities | None:
    """Tread and riser quantities for the plan's stairs, if enabled.

    Runs with no steps or no width are skipped.
    """
    if plan.stairs is None or not plan.stairs.enabled:
        return None

    items: list[StairItemQuantities] = []
    tread_m2 = 0.0
    riser_m2 = 0.0

    for item in plan.stairs.items:
        if item.step_count <= 0 or item.width_mm <= 0:
            continue
        tread_m2 += item.step_count * item.width_mm * item.step_depth_mm / 1_000_000
        riser_m2 += item.step_count * item.width_mm * item.step_height_mm / 1_000_000
        items.append(
            StairItemQuantities(
                id=item.id,
                step_count=item.step_count,
                unit_rise_mm=_round_to(item.step_height_mm, 1),
                unit_run_mm=item.step_depth_mm,
                width_mm=item.width_mm,
            )
        )

    return StairsQuantities(
        enabled=True,
        items=tuple(items),
        tread_area_m2=_round_to(tread_m2, 2),
        riser_area_m2=_round_to(riser_m2, 2),
        total_area_m2=_round_to(tread_m2 + riser_m2, 2),
    )
