"""Validation structures and deck plan advisory checks.

Pydantic already rejects malformed values. The checks here look at the
configuration as a whole: rings that cannot form a deck, ledger edges
that do not exist, and settings that will be silently ignored.
"""

from dataclasses import dataclass, field
from typing import Any

from decking.application.config.adapter import config_to_plan
from decking.application.config.schema import DeckConfiguration
from decking.domain.services.polygon_math import point_in_polygon
from decking.domain.value_objects import Mode, Point, Polygon

# Board widths closer than this to an option count as that option
WIDTH_MATCH_TOLERANCE_MM = 0.5


@dataclass(frozen=True)
class ValidationError:
    """A problem that stops the configuration from being estimated."""

    path: str
    message: str
    value: Any = None


@dataclass(frozen=True)
class ValidationWarning:
    """A likely mistake that does not stop the estimate.

    ``suggestion`` is shown to the user as the remedy, when there is one.
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Errors and warnings gathered by the plan checks.

    The adders return the result itself so checks can be chained.
    """

    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)

    @property
    def exit_code(self) -> int:
        """0 when clean, 1 on any error, 2 when only warnings remain."""
        if not self.is_valid:
            return 1
        return 2 if self.has_warnings else 0

    def add_error(
        self, path: str, message: str, value: Any = None
    ) -> "ValidationResult":
        self.errors.append(ValidationError(path, message, value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(ValidationWarning(path, message, suggestion))
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors += other.errors
        self.warnings += other.warnings
        return self


def check_outline(config: DeckConfiguration) -> ValidationResult:
    """Structural checks on the deck outline and ledger edges."""
    result = ValidationResult()
    outer = config.plan.polygon.outer
    n = len(outer)

    if n < 3:
        result.add_error(
            path="plan.polygon.outer",
            message=f"Deck outline needs at least 3 vertices, got {n}",
            value=n,
        )

    for i, edge in enumerate(config.plan.attached_edge_indices):
        if edge >= n:
            result.add_error(
                path=f"plan.attached_edge_indices[{i}]",
                message=f"Edge {edge} does not exist on an outline with {n} edges",
                value=edge,
            )

    for h, ring in enumerate(config.plan.polygon.holes):
        if len(ring) < 3:
            result.add_warning(
                path=f"plan.polygon.holes[{h}]",
                message="Cutout has fewer than 3 vertices and will be ignored",
            )

    return result


def check_plan_advisories(config: DeckConfiguration) -> ValidationResult:
    """Non-blocking checks for settings that are likely mistakes.

    Advisories checked:
    - Cutout vertices outside the deck outline
    - Board width not among the product's width options
    - Kerf configured in consumer mode, where it has no effect
    """
    result = ValidationResult()

    if len(config.plan.polygon.outer) >= 3:
        outline = Polygon(outer=config_to_plan(config).polygon.outer)
        for h, ring in enumerate(config.plan.polygon.holes):
            for v, vertex in enumerate(ring):
                if not point_in_polygon(Point(vertex.x, vertex.y), outline):
                    result.add_warning(
                        path=f"plan.polygon.holes[{h}][{v}]",
                        message=(
                            f"Cutout vertex ({vertex.x:g}, {vertex.y:g}) lies "
                            "outside the deck outline"
                        ),
                        suggestion="Keep cutouts fully inside the deck outline",
                    )

    width = config.plan.board_width_mm
    options = config.product.width_options_mm
    if options and not any(
        abs(width - option) <= WIDTH_MATCH_TOLERANCE_MM for option in options
    ):
        listed = ", ".join(f"{o:g}" for o in options)
        result.add_warning(
            path="plan.board_width_mm",
            message=f"Board width {width:g} mm is not offered by the product",
            suggestion=f"Choose one of: {listed}",
        )

    if config.rules.mode is Mode.CONSUMER and config.rules.kerf_mm > 0:
        result.add_warning(
            path="rules.kerf_mm",
            message="Kerf is only used by the pro-mode cut plan",
            suggestion='Set rules.mode to "pro" or remove kerf_mm',
        )

    return result


def validate_config(config: DeckConfiguration) -> ValidationResult:
    """Run the outline checks and the advisories on a parsed configuration."""
    return check_outline(config).merge(check_plan_advisories(config))
