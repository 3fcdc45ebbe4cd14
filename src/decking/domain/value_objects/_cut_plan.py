"""Cut plan records for pro mode."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CutSource(str, Enum):
    """Where a cut piece comes from."""

    STOCK = "stock"
    OFFCUT = "offcut"


OFFCUT_COLOR_GROUP = "OFFCUT"


@dataclass(frozen=True)
class CutPiece:
    """One piece of board laid in a row.

    Attributes:
        id: ``R{row}-P{n}-NEW`` for stock cuts, ``R{row}-P{n}-OFF`` for reuse.
        source: Fresh stock board or reused offcut.
        color_group: ``G1``, ``G2``... per purchased board, ``OFFCUT`` for reuse.
        length_mm: Length of the piece.
    """

    id: str
    source: CutSource
    color_group: str
    length_mm: float


@dataclass(frozen=True)
class CutRow:
    """Pieces that make up one board row.

    Attributes:
        row_index: Scanline index, counting rows that missed the deck too.
        required_len_mm: Deck span on this row.
        pieces: Pieces in placement order.
        offcut_mm: Leftover of the row's closing stock cut (display only).
    """

    row_index: int
    required_len_mm: float
    pieces: tuple[CutPiece, ...]
    offcut_mm: float

    @property
    def laid_length_mm(self) -> float:
        return sum(p.length_mm for p in self.pieces)


@dataclass(frozen=True)
class CutPlan:
    """Row-by-row cutting plan.

    Attributes:
        stock_length_mm: Length of one stock board.
        total_rows: Scanlines visited, including rows outside the deck.
        rows: Rows that need material, in scan order.
        offcuts_pool_mm: Offcuts left unused after the last row.
    """

    stock_length_mm: float
    total_rows: int
    rows: tuple[CutRow, ...]
    offcuts_pool_mm: tuple[float, ...]

    @property
    def stock_boards_used(self) -> int:
        """Number of fresh stock boards cut."""
        return sum(
            1 for row in self.rows for p in row.pieces if p.source is CutSource.STOCK
        )

    @property
    def total_pieces(self) -> int:
        return sum(len(row.pieces) for row in self.rows)
