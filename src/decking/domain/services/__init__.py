"""Domain services for deck quantity estimation.

- polygon_math: area, rotation, scanline spans and point tests
- substructure_grid: bearer/joist grid lines clipped to the deck
- footing_placer: deduplicated footing points
- cut_planner: best-fit row cut planning (pro mode)
- stairs: stairs sub-calculator
- substructure_detail: steel sections, stock lengths and hardware
- quantity_aggregator: the full take-off
"""

from __future__ import annotations

from .cut_planner import (
    MIN_REUSABLE_OFFCUT_MM,
    CutPlanner,
    CutPlannerConfig,
    build_cut_plan,
)
from .footing_placer import FootingPlacer, sample_segment
from .polygon_math import (
    GEOMETRY_EPSILON_MM,
    BoundingBox,
    RowSpan,
    area_mm2,
    area_signed,
    bbox,
    horizontal_scan_intersections,
    point_in_polygon,
    rotate_point,
    rotate_polygon,
    row_spans,
    span_length_at_y,
)
from .quantity_aggregator import (
    BoardUsage,
    calculate_quantities,
    consumer_loss_rate,
    ledger_anchor_bolts,
    measure_board_usage,
)
from .stairs import StairsCalculator, calculate_stairs
from .substructure_detail import build_substructure_detail
from .substructure_grid import (
    GridAxis,
    GridPlacement,
    clipped_grid_lines,
    remove_ledger_bearers,
    rim_joists,
)

__all__ = [
    # Cut planning
    "MIN_REUSABLE_OFFCUT_MM",
    "CutPlanner",
    "CutPlannerConfig",
    "build_cut_plan",
    # Footings
    "FootingPlacer",
    "sample_segment",
    # Polygon math
    "GEOMETRY_EPSILON_MM",
    "BoundingBox",
    "RowSpan",
    "area_mm2",
    "area_signed",
    "bbox",
    "horizontal_scan_intersections",
    "point_in_polygon",
    "rotate_point",
    "rotate_polygon",
    "row_spans",
    "span_length_at_y",
    # Aggregation
    "BoardUsage",
    "calculate_quantities",
    "consumer_loss_rate",
    "ledger_anchor_bolts",
    "measure_board_usage",
    # Stairs
    "StairsCalculator",
    "calculate_stairs",
    # Substructure
    "build_substructure_detail",
    "GridAxis",
    "GridPlacement",
    "clipped_grid_lines",
    "remove_ledger_bearers",
    "rim_joists",
]
