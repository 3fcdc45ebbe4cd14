"""Infrastructure layer - formatters and exporters."""

from .cut_plan_legend import (
    SMALL_LENGTH_THRESHOLD_MM,
    LengthLegend,
    LengthLegendItem,
    build_length_legend,
    length_key,
)
from .formatters import (
    CutPlanFormatter,
    JsonExporter,
    QuantitiesFormatter,
    to_dict,
)

__all__ = [
    # Legend
    "SMALL_LENGTH_THRESHOLD_MM",
    "LengthLegend",
    "LengthLegendItem",
    "build_length_legend",
    "length_key",
    # Formatters
    "CutPlanFormatter",
    "JsonExporter",
    "QuantitiesFormatter",
    "to_dict",
]
