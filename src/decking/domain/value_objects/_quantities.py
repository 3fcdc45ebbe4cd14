"""Output records produced by the quantity aggregator."""

from __future__ import annotations

from dataclasses import dataclass

from ._core_geometry import LineSegment, Point
from ._plan import FasteningMode, FoundationType, SteelPipeSpec


@dataclass(frozen=True)
class AreaBreakdown:
    """Areas in square metres."""

    total_m2: float
    deck_m2: float
    stairs_m2: float


@dataclass(frozen=True)
class BoardQuantities:
    """Deck board requirement.

    Attributes:
        pieces: Stock boards to purchase.
        used_length_mm: Board length laid on the deck, rounded to 1 mm.
        stock_length_mm: Length of one stock board.
        loss_rate_applied: Loss rate folded into ``pieces``.
        board_lines: Number of board rows crossing the deck.
    """

    pieces: int
    used_length_mm: int
    stock_length_mm: float
    loss_rate_applied: float
    board_lines: int


@dataclass(frozen=True)
class SubstructureLengths:
    """Bearer (primary) and joist (secondary) totals in metres."""

    primary_len_m: float
    secondary_len_m: float


@dataclass(frozen=True)
class FastenerQuantities:
    """Board fasteners. Exactly one of ``clips`` / ``screws`` is set."""

    mode: FasteningMode
    clips: int | None = None
    screws: int | None = None


@dataclass(frozen=True)
class LedgerQuantities:
    """Wall-attached ledger run."""

    length_m: float
    anchor_bolts_qty: int


@dataclass(frozen=True)
class PostQuantities:
    """Posts between footings and bearers."""

    qty: int
    each_length_mm: int
    total_length_m: float


@dataclass(frozen=True)
class StairItemQuantities:
    id: str
    step_count: int
    unit_rise_mm: float
    unit_run_mm: float
    width_mm: float


@dataclass(frozen=True)
class StairsQuantities:
    """Result block of the stairs sub-calculator."""

    enabled: bool
    items: tuple[StairItemQuantities, ...]
    tread_area_m2: float
    riser_area_m2: float
    total_area_m2: float


@dataclass(frozen=True)
class StructureLayout:
    """Substructure geometry in the user's (unrotated) coordinates."""

    piles: tuple[Point, ...]
    bearers: tuple[LineSegment, ...]
    joists: tuple[LineSegment, ...]


@dataclass(frozen=True)
class LengthBreakdown:
    """Number of members of one (rounded) length."""

    length_mm: int
    qty: int


@dataclass(frozen=True)
class MemberDetail:
    """Bearer or joist material summary.

    Attributes:
        spec: Steel pipe section used.
        total_length_m: Sum of member lengths.
        pieces: Member count.
        inner_pieces: Members generated by the interior grid.
        rim_pieces: Perimeter members.
        breakdown: Counts per length, rounded to 100 mm, longest first.
        stock_pieces: Stock lengths to purchase including loss.
    """

    spec: SteelPipeSpec
    total_length_m: float
    pieces: int
    inner_pieces: int
    rim_pieces: int
    breakdown: tuple[LengthBreakdown, ...]
    stock_pieces: int


@dataclass(frozen=True)
class FoundationDetail:
    type: FoundationType
    spec_description: str
    qty: int


@dataclass(frozen=True)
class PostDetail:
    spec: SteelPipeSpec
    qty: int
    each_length_mm: int
    total_length_m: float
    stock_pieces: int


@dataclass(frozen=True)
class HardwareItem:
    spec: str
    qty: int


@dataclass(frozen=True)
class HardwareDetail:
    """Connection hardware. Post hardware is None when there are no posts."""

    anchor_bolts: HardwareItem
    angle_brackets: HardwareItem
    joist_hangers: HardwareItem
    self_drilling_screws: HardwareItem
    base_plates: HardwareItem | None = None
    post_caps: HardwareItem | None = None


@dataclass(frozen=True)
class SubstructureDetail:
    bearer: MemberDetail
    joist: MemberDetail
    foundation: FoundationDetail
    hardware: HardwareDetail
    post: PostDetail | None = None


@dataclass(frozen=True)
class Quantities:
    """Complete material take-off for one plan.

    Optional blocks are None when they do not apply: ``ledger`` without
    attached edges, ``posts`` without a deck height, ``stairs`` unless the
    stairs sub-plan is enabled.
    """

    area: AreaBreakdown
    boards: BoardQuantities
    substructure: SubstructureLengths
    substructure_detail: SubstructureDetail
    anchors_qty: int
    footings_qty: int
    fasteners: FastenerQuantities
    structure_layout: StructureLayout
    ledger: LedgerQuantities | None = None
    posts: PostQuantities | None = None
    stairs: StairsQuantities | None = None
