"""Deck domain: value objects and estimation services."""

from .services import (
    CutPlanner,
    CutPlannerConfig,
    FootingPlacer,
    build_cut_plan,
    calculate_quantities,
    calculate_stairs,
)
from .value_objects import (
    CutPiece,
    CutPlan,
    CutRow,
    CutSource,
    FasteningMode,
    LineSegment,
    Mode,
    Plan,
    Point,
    Polygon,
    Product,
    Quantities,
    Ruleset,
)

__all__ = [
    "CutPiece",
    "CutPlan",
    "CutPlanner",
    "CutPlannerConfig",
    "CutRow",
    "CutSource",
    "FasteningMode",
    "FootingPlacer",
    "LineSegment",
    "Mode",
    "Plan",
    "Point",
    "Polygon",
    "Product",
    "Quantities",
    "Ruleset",
    "build_cut_plan",
    "calculate_quantities",
    "calculate_stairs",
]
