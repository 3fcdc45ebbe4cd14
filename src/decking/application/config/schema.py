"""Pydantic models for deck project configuration files.

A configuration file holds one plan, the board product, the ruleset and
the fastening mode. All models forbid unknown fields so that typos are
reported instead of silently ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from decking.domain.value_objects import FasteningMode, FoundationType, Mode

# Supported schema versions for configuration files
# Version 1.0: Initial schema
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0"})


class PointConfig(BaseModel):
    """A plan vertex in millimetres."""

    model_config = ConfigDict(extra="forbid")

    x: float
    y: float


class PolygonConfig(BaseModel):
    """Deck outline with optional cutouts.

    Attributes:
        outer: Outer ring vertices (implicitly closed).
        holes: Hole rings, each fully inside ``outer``.
    """

    model_config = ConfigDict(extra="forbid")

    outer: list[PointConfig] = Field(default_factory=list)
    holes: list[list[PointConfig]] = Field(default_factory=list)


class StairItemConfig(BaseModel):
    """One stair run."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    width_mm: float = Field(..., ge=0)
    step_count: int = Field(..., ge=0, le=50)
    step_depth_mm: float = Field(default=280.0, ge=0)
    step_height_mm: float = Field(default=170.0, ge=0)


class StairsConfig(BaseModel):
    """Stairs sub-plan; ignored unless enabled."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = False
    items: list[StairItemConfig] = Field(default_factory=list)


class SubstructureOverridesConfig(BaseModel):
    """Manual bearer/joist totals in millimetres."""

    model_config = ConfigDict(extra="forbid")

    primary_len_mm: float | None = Field(default=None, ge=0)
    secondary_len_mm: float | None = Field(default=None, ge=0)


class PlanConfig(BaseModel):
    """The drawn deck plan.

    Attributes:
        polygon: Deck outline in millimetres.
        board_width_mm: Selected board width.
        decking_direction_deg: Board direction in degrees.
        deck_height_mm: Height of the deck surface above ground.
        attached_edge_indices: Outer edges fixed to a wall (ledger).
        substructure_overrides: Manual substructure totals.
        stairs: Optional stairs sub-plan.
    """

    model_config = ConfigDict(extra="forbid")

    polygon: PolygonConfig
    board_width_mm: float = Field(default=140.0, gt=0, le=1000)
    decking_direction_deg: float = Field(default=0.0, ge=-360, le=360)
    deck_height_mm: float | None = Field(default=None, ge=0)
    attached_edge_indices: list[int] = Field(default_factory=list)
    substructure_overrides: SubstructureOverridesConfig = Field(
        default_factory=SubstructureOverridesConfig
    )
    stairs: StairsConfig | None = None

    @field_validator("attached_edge_indices")
    @classmethod
    def validate_edge_indices(cls, v: list[int]) -> list[int]:
        """Edge indices cannot be negative."""
        if any(i < 0 for i in v):
            raise ValueError("Edge indices must be non-negative")
        return v


class ProductConfig(BaseModel):
    """Deck board product."""

    model_config = ConfigDict(extra="forbid")

    id: str = "DN34"
    name: str = "DN34"
    stock_length_mm: float = Field(default=3000.0, gt=0)
    width_options_mm: list[float] = Field(
        default_factory=lambda: [95.0, 120.0, 140.0, 150.0]
    )
    thickness_mm: float = Field(default=25.0, gt=0)
    gap_mm: float = Field(default=5.0, ge=0, le=50)


class ConsumerLossConfig(BaseModel):
    """Consumer-mode loss rate coefficients."""

    model_config = ConfigDict(extra="forbid")

    base: float = Field(default=0.03, ge=0, le=1)
    vertex_factor: float = Field(default=0.003, ge=0, le=1)
    cutout_factor: float = Field(default=0.005, ge=0, le=1)
    cap: float = Field(default=0.06, ge=0, le=1)


class SteelPipeConfig(BaseModel):
    """Square steel pipe section."""

    model_config = ConfigDict(extra="forbid")

    width_mm: float = Field(..., gt=0)
    height_mm: float = Field(..., gt=0)
    thickness_mm: float = Field(..., gt=0)
    stock_length_mm: float = Field(default=6000.0, gt=0)


class SubstructureConfigSchema(BaseModel):
    """Substructure material settings."""

    model_config = ConfigDict(extra="forbid")

    bearer_spec: SteelPipeConfig | None = None
    joist_spec: SteelPipeConfig | None = None
    post_spec: SteelPipeConfig | None = None
    stock_length_mm: float | None = Field(default=None, gt=0)
    loss_rate: float = Field(default=0.05, ge=0, le=1)
    foundation_type: FoundationType = FoundationType.CONCRETE_BLOCK


class RulesConfig(BaseModel):
    """Spacing constants and estimation policy."""

    model_config = ConfigDict(extra="forbid")

    mode: Mode = Mode.CONSUMER
    gap_mm: float | None = Field(default=None, ge=0, le=50)
    primary_spacing_mm: float = Field(default=600.0, gt=0)
    secondary_spacing_mm: float = Field(default=400.0, gt=0)
    anchor_spacing_mm: float = Field(default=1000.0, gt=0)
    footing_spacing_mm: float = Field(default=1800.0, gt=0)
    screw_per_intersection: int = Field(default=2, ge=0, le=10)
    consumer_loss: ConsumerLossConfig | None = Field(default_factory=ConsumerLossConfig)
    kerf_mm: float = Field(default=0.0, ge=0, le=20)
    substructure: SubstructureConfigSchema | None = None


class DeckConfiguration(BaseModel):
    """Root model of a deck project configuration file."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    plan: PlanConfig
    product: ProductConfig = Field(default_factory=ProductConfig)
    rules: RulesConfig = Field(default_factory=RulesConfig)
    fastening_mode: FasteningMode = FasteningMode.CLIP

    @field_validator("schema_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Reject schema versions this release does not understand."""
        if v not in SUPPORTED_VERSIONS:
            supported = ", ".join(sorted(SUPPORTED_VERSIONS))
            raise ValueError(
                f"Unsupported schema version '{v}'. Supported versions: {supported}"
            )
        return v
