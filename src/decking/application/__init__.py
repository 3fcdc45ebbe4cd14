"""Application layer: configuration handling and use cases."""

from .commands import EstimateDeckCommand
from .dtos import EstimateOutput

__all__ = [
    "EstimateDeckCommand",
    "EstimateOutput",
]
