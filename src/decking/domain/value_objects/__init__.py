"""Value objects for the deck domain.

This module provides immutable data types used throughout the deck
estimator. All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

# Core geometry
from ._core_geometry import (
    LineSegment,
    Point,
    Polygon,
    total_length_mm,
)

# Plan, product and ruleset inputs
from ._plan import (
    DEFAULT_BEARER_SPEC,
    DEFAULT_JOIST_SPEC,
    DEFAULT_POST_SPEC,
    ConsumerLossRule,
    FasteningMode,
    FoundationType,
    Mode,
    Plan,
    Product,
    Ruleset,
    StairItem,
    StairsPlan,
    SteelPipeSpec,
    SubstructureConfig,
    SubstructureOverrides,
)

# Quantity outputs
from ._quantities import (
    AreaBreakdown,
    BoardQuantities,
    FastenerQuantities,
    FoundationDetail,
    HardwareDetail,
    HardwareItem,
    LedgerQuantities,
    LengthBreakdown,
    MemberDetail,
    PostDetail,
    PostQuantities,
    Quantities,
    StairItemQuantities,
    StairsQuantities,
    StructureLayout,
    SubstructureDetail,
    SubstructureLengths,
)

# Cut planning
from ._cut_plan import (
    OFFCUT_COLOR_GROUP,
    CutPiece,
    CutPlan,
    CutRow,
    CutSource,
)

__all__ = [
    # Core geometry
    "LineSegment",
    "Point",
    "Polygon",
    "total_length_mm",
    # Inputs
    "DEFAULT_BEARER_SPEC",
    "DEFAULT_JOIST_SPEC",
    "DEFAULT_POST_SPEC",
    "ConsumerLossRule",
    "FasteningMode",
    "FoundationType",
    "Mode",
    "Plan",
    "Product",
    "Ruleset",
    "StairItem",
    "StairsPlan",
    "SteelPipeSpec",
    "SubstructureConfig",
    "SubstructureOverrides",
    # Outputs
    "AreaBreakdown",
    "BoardQuantities",
    "FastenerQuantities",
    "FoundationDetail",
    "HardwareDetail",
    "HardwareItem",
    "LedgerQuantities",
    "LengthBreakdown",
    "MemberDetail",
    "PostDetail",
    "PostQuantities",
    "Quantities",
    "StairItemQuantities",
    "StairsQuantities",
    "StructureLayout",
    "SubstructureDetail",
    "SubstructureLengths",
    # Cut planning
    "OFFCUT_COLOR_GROUP",
    "CutPiece",
    "CutPlan",
    "CutRow",
    "CutSource",
]
