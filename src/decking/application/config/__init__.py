"""Configuration schema and loading for deck project files.

Public API:
    - DeckConfiguration: Root configuration model
    - load_config: Load configuration from a JSON file
    - load_config_from_dict: Load configuration from a dictionary
    - ConfigError: Exception for configuration errors
    - validate_config: Whole-configuration checks
    - config_to_plan / config_to_product / config_to_ruleset: Domain adapters

Example:
    >>> from pathlib import Path
    >>> from decking.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("my-deck.json"))
    ...     print(f"Outline vertices: {len(config.plan.polygon.outer)}")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from decking.application.config.adapter import (
    config_to_fastening_mode,
    config_to_plan,
    config_to_product,
    config_to_ruleset,
)
from decking.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from decking.application.config.schema import (
    SUPPORTED_VERSIONS,
    ConsumerLossConfig,
    DeckConfiguration,
    PlanConfig,
    PointConfig,
    PolygonConfig,
    ProductConfig,
    RulesConfig,
    StairItemConfig,
    StairsConfig,
    SteelPipeConfig,
    SubstructureConfigSchema,
    SubstructureOverridesConfig,
)
from decking.application.config.validator import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    check_outline,
    check_plan_advisories,
    validate_config,
)

__all__ = [
    # Schema models
    "DeckConfiguration",
    "PlanConfig",
    "PointConfig",
    "PolygonConfig",
    "ProductConfig",
    "RulesConfig",
    "ConsumerLossConfig",
    "StairItemConfig",
    "StairsConfig",
    "SteelPipeConfig",
    "SubstructureConfigSchema",
    "SubstructureOverridesConfig",
    "SUPPORTED_VERSIONS",
    # Loader
    "load_config",
    "load_config_from_dict",
    "ConfigError",
    # Validation
    "ValidationResult",
    "ValidationError",
    "ValidationWarning",
    "check_outline",
    "check_plan_advisories",
    "validate_config",
    # Adapter
    "config_to_fastening_mode",
    "config_to_plan",
    "config_to_product",
    "config_to_ruleset",
]
