"""Adapters from configuration models to domain value objects."""

from decking.application.config.schema import (
    DeckConfiguration,
    PolygonConfig,
    RulesConfig,
    SteelPipeConfig,
    SubstructureConfigSchema,
)
from decking.domain.value_objects import (
    ConsumerLossRule,
    FasteningMode,
    Plan,
    Point,
    Polygon,
    Product,
    Ruleset,
    StairItem,
    StairsPlan,
    SteelPipeSpec,
    SubstructureConfig,
    SubstructureOverrides,
)


def _to_polygon(polygon: PolygonConfig) -> Polygon:
    return Polygon(
        outer=tuple(Point(p.x, p.y) for p in polygon.outer),
        holes=tuple(tuple(Point(p.x, p.y) for p in ring) for ring in polygon.holes),
    )


def _to_pipe_spec(spec: SteelPipeConfig | None) -> SteelPipeSpec | None:
    if spec is None:
        return None
    return SteelPipeSpec(
        width_mm=spec.width_mm,
        height_mm=spec.height_mm,
        thickness_mm=spec.thickness_mm,
        stock_length_mm=spec.stock_length_mm,
    )


def _to_substructure(
    substructure: SubstructureConfigSchema | None,
) -> SubstructureConfig | None:
    if substructure is None:
        return None
    return SubstructureConfig(
        bearer_spec=_to_pipe_spec(substructure.bearer_spec),
        joist_spec=_to_pipe_spec(substructure.joist_spec),
        post_spec=_to_pipe_spec(substructure.post_spec),
        stock_length_mm=substructure.stock_length_mm,
        loss_rate=substructure.loss_rate,
        foundation_type=substructure.foundation_type,
    )


def config_to_plan(config: DeckConfiguration) -> Plan:
    """Build the domain Plan from a validated configuration.

    Args:
        config: A validated DeckConfiguration instance

    Returns:
        Plan with the outline, options and optional stairs.
    """
    plan = config.plan
    stairs = None
    if plan.stairs is not None:
        stairs = StairsPlan(
            enabled=plan.stairs.enabled,
            items=tuple(
                StairItem(
                    id=item.id,
                    width_mm=item.width_mm,
                    step_count=item.step_count,
                    step_depth_mm=item.step_depth_mm,
                    step_height_mm=item.step_height_mm,
                )
                for item in plan.stairs.items
            ),
        )

    return Plan(
        polygon=_to_polygon(plan.polygon),
        board_width_mm=plan.board_width_mm,
        decking_direction_deg=plan.decking_direction_deg,
        deck_height_mm=plan.deck_height_mm,
        attached_edge_indices=tuple(plan.attached_edge_indices),
        substructure_overrides=SubstructureOverrides(
            primary_len_mm=plan.substructure_overrides.primary_len_mm,
            secondary_len_mm=plan.substructure_overrides.secondary_len_mm,
        ),
        stairs=stairs,
    )


def config_to_product(config: DeckConfiguration) -> Product:
    """Build the domain Product from a validated configuration."""
    product = config.product
    return Product(
        stock_length_mm=product.stock_length_mm,
        width_options_mm=tuple(product.width_options_mm),
        gap_mm=product.gap_mm,
        thickness_mm=product.thickness_mm,
        id=product.id,
        name=product.name,
    )


def config_to_ruleset(config: DeckConfiguration) -> Ruleset:
    """Build the domain Ruleset from a validated configuration."""
    rules: RulesConfig = config.rules
    loss = rules.consumer_loss
    return Ruleset(
        mode=rules.mode,
        primary_spacing_mm=rules.primary_spacing_mm,
        secondary_spacing_mm=rules.secondary_spacing_mm,
        anchor_spacing_mm=rules.anchor_spacing_mm,
        footing_spacing_mm=rules.footing_spacing_mm,
        screw_per_intersection=rules.screw_per_intersection,
        consumer_loss=(
            ConsumerLossRule(
                base=loss.base,
                vertex_factor=loss.vertex_factor,
                cutout_factor=loss.cutout_factor,
                cap=loss.cap,
            )
            if loss is not None
            else None
        ),
        kerf_mm=rules.kerf_mm,
        gap_mm=rules.gap_mm,
        substructure=_to_substructure(rules.substructure),
    )


def config_to_fastening_mode(
    config: DeckConfiguration, override: FasteningMode | str | None = None
) -> FasteningMode:
    """Fastening mode from the configuration, or ``override`` when given."""
    if override is not None:
        return FasteningMode(override)
    return config.fastening_mode
