"""Typer CLI for deck material estimation."""

import logging
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer

from decking.application import EstimateDeckCommand, EstimateOutput
from decking.application.config import (
    ConfigError,
    DeckConfiguration,
    config_to_plan,
    config_to_product,
    config_to_ruleset,
    load_config,
)
from decking.cli.commands import display_load_error, validate_command
from decking.domain.services import build_cut_plan
from decking.domain.value_objects import FasteningMode, Mode
from decking.infrastructure import CutPlanFormatter, JsonExporter, QuantitiesFormatter


class OutputFormat(str, Enum):
    TEXT = "text"
    JSON = "json"


app = typer.Typer(
    name="decking",
    help="Estimate deck boards, substructure and fasteners from a deck plan.",
)

app.command(name="validate")(validate_command)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load(config_file: Path) -> DeckConfiguration:
    try:
        return load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        raise typer.Exit(code=1)


def _echo_estimate(result: EstimateOutput, output_format: OutputFormat) -> None:
    if output_format is OutputFormat.JSON:
        typer.echo(JsonExporter().export(result))
        return

    for warning in result.warnings:
        typer.echo(f"Warning: {warning}", err=True)
    typer.echo(QuantitiesFormatter().format(result.quantities))
    if result.cut_plan is not None:
        typer.echo()
        typer.echo(CutPlanFormatter().format(result.cut_plan))


@app.command()
def estimate(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON deck configuration file"),
    ],
    fastening: Annotated[
        FasteningMode | None,
        typer.Option("--fastening", help="Override the fastening mode: clip or screw"),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """Estimate materials for a deck plan.

    Prints areas, board pieces, substructure lengths, footings and
    fasteners. In pro mode the row cut plan follows.

    Example:
        decking estimate my-deck.json --fastening screw
    """
    _configure_logging(verbose)
    config = _load(config_file)

    result = EstimateDeckCommand().execute_config(config, fastening)
    if not result.is_valid:
        for error in result.errors:
            typer.echo(f"Error: {error}", err=True)
        raise typer.Exit(code=1)

    _echo_estimate(result, output_format)


@app.command(name="cut-plan")
def cut_plan(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON deck configuration file"),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Output format: text or json"),
    ] = OutputFormat.TEXT,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log engine decisions to stderr"),
    ] = False,
) -> None:
    """Show the row-by-row cut plan (pro mode only)."""
    _configure_logging(verbose)
    config = _load(config_file)

    if config.rules.mode is not Mode.PRO:
        typer.echo(
            'Error: cut plans are only produced in pro mode (set rules.mode to "pro")',
            err=True,
        )
        raise typer.Exit(code=1)

    plan = build_cut_plan(
        config_to_plan(config), config_to_product(config), config_to_ruleset(config)
    )
    if output_format is OutputFormat.JSON:
        typer.echo(JsonExporter().export_cut_plan(plan))
    else:
        typer.echo(CutPlanFormatter().format(plan))


if __name__ == "__main__":
    app()
