"""Integration tests for the decking CLI.

These tests drive the Typer app end-to-end:
- estimate in text and JSON output, with fastening overrides
- cut-plan gating on pro mode
- validate exit codes for clean, broken and advisory configurations
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from decking.cli.main import app

pytestmark = pytest.mark.integration

WriteConfig = Callable[..., Path]


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def config_path(write_config: WriteConfig, deck_config_data: dict[str, Any]) -> Path:
    return write_config(deck_config_data)


@pytest.fixture
def pro_config_path(
    write_config: WriteConfig, deck_config_data: dict[str, Any]
) -> Path:
    deck_config_data["rules"] = {"mode": "pro"}
    return write_config(deck_config_data, "pro.json")


class TestEstimateCommand:
    """Tests for the estimate command."""

    def test_text_report(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["estimate", str(config_path)])
        assert result.exit_code == 0
        assert "DECK ESTIMATE" in result.output
        assert "Pieces:       5" in result.output
        assert "Clips:  35" in result.output
        assert "CUT PLAN" not in result.output

    def test_fastening_override(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["estimate", str(config_path), "--fastening", "screw"])
        assert result.exit_code == 0
        assert "Screws: 70" in result.output

    def test_invalid_fastening(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["estimate", str(config_path), "--fastening", "nails"])
        assert result.exit_code != 0

    def test_json_output(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["estimate", str(config_path), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["fastening_mode"] == "clip"
        assert data["quantities"]["boards"]["pieces"] == 5
        assert data["quantities"]["footings_qty"] == 8

    def test_pro_mode_appends_cut_plan(
        self, runner: CliRunner, pro_config_path: Path
    ) -> None:
        result = runner.invoke(app, ["estimate", str(pro_config_path)])
        assert result.exit_code == 0
        assert "CUT PLAN" in result.output
        assert "LENGTHS" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["estimate", str(tmp_path / "nope.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_schema_error(
        self,
        runner: CliRunner,
        write_config: WriteConfig,
        deck_config_data: dict[str, Any],
    ) -> None:
        deck_config_data["plan"]["board_width_mm"] = 0
        result = runner.invoke(app, ["estimate", str(write_config(deck_config_data))])
        assert result.exit_code == 1
        assert "plan.board_width_mm" in result.output

    def test_blocking_plan_error(
        self,
        runner: CliRunner,
        write_config: WriteConfig,
        deck_config_data: dict[str, Any],
    ) -> None:
        deck_config_data["plan"]["attached_edge_indices"] = [4]
        result = runner.invoke(app, ["estimate", str(write_config(deck_config_data))])
        assert result.exit_code == 1
        assert "Error: plan.attached_edge_indices[0]" in result.output


class TestCutPlanCommand:
    """Tests for the cut-plan command."""

    def test_requires_pro_mode(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["cut-plan", str(config_path)])
        assert result.exit_code == 1
        assert "pro mode" in result.output

    def test_text(self, runner: CliRunner, pro_config_path: Path) -> None:
        result = runner.invoke(app, ["cut-plan", str(pro_config_path)])
        assert result.exit_code == 0
        assert "CUT PLAN" in result.output
        assert "Stock boards: 7 x 3000 mm" in result.output

    def test_json(self, runner: CliRunner, pro_config_path: Path) -> None:
        result = runner.invoke(app, ["cut-plan", str(pro_config_path), "-f", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["stock_boards_used"] == 7
        assert len(data["rows"]) == 7
        assert data["legend"]["total_pieces"] == 7


class TestValidateCommand:
    """Tests for the validate command."""

    def test_clean_config(self, runner: CliRunner, config_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(config_path)])
        assert result.exit_code == 0
        assert "Validation passed. Configuration is valid." in result.output

    def test_file_not_found(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "Errors:" in result.output
        assert "Validation failed" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner, tmp_path: Path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{ not json", encoding="utf-8")
        result = runner.invoke(app, ["validate", str(path)])
        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Line 1" in result.output

    def test_unknown_field_rejected(
        self,
        runner: CliRunner,
        write_config: WriteConfig,
        deck_config_data: dict[str, Any],
    ) -> None:
        deck_config_data["colour"] = "teak"
        result = runner.invoke(app, ["validate", str(write_config(deck_config_data))])
        assert result.exit_code == 1
        assert "colour" in result.output

    def test_plan_error(
        self,
        runner: CliRunner,
        write_config: WriteConfig,
        deck_config_data: dict[str, Any],
    ) -> None:
        deck_config_data["plan"]["polygon"]["outer"] = deck_config_data["plan"][
            "polygon"
        ]["outer"][:2]
        result = runner.invoke(app, ["validate", str(write_config(deck_config_data))])
        assert result.exit_code == 1
        assert "plan.polygon.outer" in result.output
        assert "Validation failed: 1 error(s)" in result.output

    def test_warnings_exit_code(
        self,
        runner: CliRunner,
        write_config: WriteConfig,
        deck_config_data: dict[str, Any],
    ) -> None:
        deck_config_data["plan"]["board_width_mm"] = 120
        result = runner.invoke(app, ["validate", str(write_config(deck_config_data))])
        assert result.exit_code == 2
        assert "plan.board_width_mm" in result.output
        assert "Suggestion: Choose one of: 140" in result.output
        assert "Validation passed with 1 warning(s)" in result.output
