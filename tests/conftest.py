"""Pytest configuration and shared fixtures for deck estimator tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from decking.domain.value_objects import Plan, Polygon, Product, Ruleset


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "integration: end-to-end tests across layers")
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared plan fixtures
# =============================================================================


@pytest.fixture
def rectangle() -> Polygon:
    """2000 x 1000 mm rectangle, counter-clockwise from the origin."""
    return Polygon.from_coords([(0, 0), (2000, 0), (2000, 1000), (0, 1000)])


@pytest.fixture
def rectangle_plan(rectangle: Polygon) -> Plan:
    """140 mm boards running along X over the 2000 x 1000 rectangle."""
    return Plan(polygon=rectangle, board_width_mm=140)


@pytest.fixture
def product() -> Product:
    """3000 mm stock boards with a 5 mm gap."""
    return Product(stock_length_mm=3000, width_options_mm=(140,), gap_mm=5)


@pytest.fixture
def consumer_rules() -> Ruleset:
    return Ruleset()


@pytest.fixture
def deck_config_data() -> dict[str, Any]:
    """Minimal valid configuration document for the rectangle."""
    return {
        "schema_version": "1.0",
        "plan": {
            "polygon": {
                "outer": [
                    {"x": 0, "y": 0},
                    {"x": 2000, "y": 0},
                    {"x": 2000, "y": 1000},
                    {"x": 0, "y": 1000},
                ],
                "holes": [],
            },
            "board_width_mm": 140,
        },
        "product": {"stock_length_mm": 3000, "width_options_mm": [140], "gap_mm": 5},
        "rules": {"mode": "consumer"},
        "fastening_mode": "clip",
    }


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a configuration document to a temporary JSON file."""

    def _write(data: dict[str, Any], name: str = "deck.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
