"""Input records: the drawn plan, the board product and the ruleset."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ._core_geometry import Polygon


class Mode(str, Enum):
    """Estimation mode.

    Consumer mode applies a heuristic loss rate; pro mode plans every cut.
    """

    CONSUMER = "consumer"
    PRO = "pro"


class FasteningMode(str, Enum):
    """How deck boards are fixed to the joists."""

    CLIP = "clip"
    SCREW = "screw"


class FoundationType(str, Enum):
    """Footing hardware placed under each pile point."""

    CONCRETE_BLOCK = "concrete_block"
    ANCHOR_BOLT = "anchor_bolt"
    RUBBER_PAD = "rubber_pad"
    SCREW_PILE = "screw_pile"


@dataclass(frozen=True)
class StairItem:
    """One straight stair run attached to the deck.

    Attributes:
        id: Caller-assigned identifier, echoed back in the results.
        width_mm: Tread width.
        step_count: Number of steps.
        step_depth_mm: Tread depth (unit run).
        step_height_mm: Riser height (unit rise).
    """

    id: str
    width_mm: float
    step_count: int
    step_depth_mm: float
    step_height_mm: float


@dataclass(frozen=True)
class StairsPlan:
    """Stairs sub-plan. Ignored unless ``enabled``."""

    enabled: bool = False
    items: tuple[StairItem, ...] = ()


@dataclass(frozen=True)
class SubstructureOverrides:
    """Manual replacements for the computed substructure totals (mm)."""

    primary_len_mm: float | None = None
    secondary_len_mm: float | None = None


@dataclass(frozen=True)
class Plan:
    """A deck plan as drawn by the user.

    Attributes:
        polygon: Deck outline in millimetres.
        board_width_mm: Selected deck board width.
        decking_direction_deg: Board direction; 0 runs boards along +X.
        deck_height_mm: Ground-to-surface height, enables posts when > 0.
        attached_edge_indices: Outer edges fixed to a wall (ledger edges).
        substructure_overrides: Optional manual substructure totals.
        stairs: Optional stairs sub-plan.
    """

    polygon: Polygon
    board_width_mm: float
    decking_direction_deg: float = 0.0
    deck_height_mm: float | None = None
    attached_edge_indices: tuple[int, ...] = ()
    substructure_overrides: SubstructureOverrides = field(
        default_factory=SubstructureOverrides
    )
    stairs: StairsPlan | None = None

    def __post_init__(self) -> None:
        if self.board_width_mm <= 0:
            raise ValueError("Board width must be positive")

    @property
    def ledger_edges(self) -> frozenset[int]:
        """Attached edge indices that exist on the outer ring."""
        n = len(self.polygon.outer)
        return frozenset(i for i in self.attached_edge_indices if 0 <= i < n)


@dataclass(frozen=True)
class Product:
    """Deck board product.

    Attributes:
        stock_length_mm: Length of one purchased board.
        width_options_mm: Available board widths.
        gap_mm: Gap between adjacent boards.
        thickness_mm: Board thickness (informational).
        id: Product identifier.
        name: Display name.
    """

    stock_length_mm: float
    width_options_mm: tuple[float, ...] = ()
    gap_mm: float = 5.0
    thickness_mm: float = 25.0
    id: str = ""
    name: str = ""

    def __post_init__(self) -> None:
        if self.stock_length_mm <= 0:
            raise ValueError("Stock length must be positive")
        if self.gap_mm < 0:
            raise ValueError("Board gap must be non-negative")


@dataclass(frozen=True)
class ConsumerLossRule:
    """Coefficients of the consumer-mode loss rate model.

    rate = min(cap, max(0, base + extra_vertices * vertex_factor
                           + holes * cutout_factor))
    """

    base: float = 0.03
    vertex_factor: float = 0.003
    cutout_factor: float = 0.005
    cap: float = 0.06


@dataclass(frozen=True)
class SteelPipeSpec:
    """Galvanised square steel pipe used for bearers, joists and posts."""

    width_mm: float
    height_mm: float
    thickness_mm: float
    stock_length_mm: float = 6000.0

    @property
    def id(self) -> str:
        return f"{self.width_mm:g}x{self.height_mm:g}x{self.thickness_mm:g}T"

    @property
    def name(self) -> str:
        return (
            f"Galvanized square pipe "
            f"{self.width_mm:g}x{self.height_mm:g}x{self.thickness_mm:g}T"
        )

    def with_stock_length(self, stock_length_mm: float) -> "SteelPipeSpec":
        return SteelPipeSpec(
            width_mm=self.width_mm,
            height_mm=self.height_mm,
            thickness_mm=self.thickness_mm,
            stock_length_mm=stock_length_mm,
        )


DEFAULT_BEARER_SPEC = SteelPipeSpec(width_mm=100, height_mm=100, thickness_mm=1.6)
DEFAULT_JOIST_SPEC = SteelPipeSpec(width_mm=50, height_mm=50, thickness_mm=1.6)
DEFAULT_POST_SPEC = SteelPipeSpec(width_mm=100, height_mm=100, thickness_mm=1.6)


@dataclass(frozen=True)
class SubstructureConfig:
    """Optional material settings for the substructure detail report.

    When ``stock_length_mm`` is set it replaces the stock length of every
    configured pipe spec.
    """

    bearer_spec: SteelPipeSpec | None = None
    joist_spec: SteelPipeSpec | None = None
    post_spec: SteelPipeSpec | None = None
    stock_length_mm: float | None = None
    loss_rate: float = 0.05
    foundation_type: FoundationType = FoundationType.CONCRETE_BLOCK


@dataclass(frozen=True)
class Ruleset:
    """Spacing constants and estimation policy.

    Attributes:
        mode: Consumer (loss-rate estimate) or pro (cut planning).
        primary_spacing_mm: Maximum bearer spacing.
        secondary_spacing_mm: Joist spacing.
        anchor_spacing_mm: Ledger anchor bolt spacing.
        footing_spacing_mm: Footing spacing along unsupported edges.
        screw_per_intersection: Screws per board/joist crossing.
        consumer_loss: Loss-rate coefficients used in consumer mode.
        kerf_mm: Saw kerf, pro mode only.
        gap_mm: Overrides the product gap when set.
        substructure: Optional substructure material settings.
    """

    mode: Mode = Mode.CONSUMER
    primary_spacing_mm: float = 600.0
    secondary_spacing_mm: float = 400.0
    anchor_spacing_mm: float = 1000.0
    footing_spacing_mm: float = 1800.0
    screw_per_intersection: int = 2
    consumer_loss: ConsumerLossRule | None = field(default_factory=ConsumerLossRule)
    kerf_mm: float = 0.0
    gap_mm: float | None = None
    substructure: SubstructureConfig | None = None

    def __post_init__(self) -> None:
        if self.kerf_mm < 0:
            raise ValueError("Kerf must be non-negative")

    def pitch_mm(self, plan: Plan, product: Product) -> float:
        """Board width plus gap: the spacing of parallel board rows."""
        gap = self.gap_mm if self.gap_mm is not None else product.gap_mm
        return plan.board_width_mm + gap
