"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from decking.domain.value_objects import CutPlan, FasteningMode, Quantities


@dataclass
class EstimateOutput:
    """Result of one estimate run.

    Attributes:
        quantities: Material take-off, None when the input was rejected.
        cut_plan: Row cut plan, only in pro mode.
        fastening_mode: Fastening mode the take-off was computed for.
        errors: Messages explaining why the input was rejected.
        warnings: Advisory messages that did not stop the run.
    """

    quantities: Quantities | None
    cut_plan: CutPlan | None = None
    fastening_mode: FasteningMode = FasteningMode.CLIP
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True when the estimate was produced without errors."""
        return not self.errors and self.quantities is not None
