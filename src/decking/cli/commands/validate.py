"""Validate command for deck configuration files."""

from pathlib import Path
from typing import Annotated, Any

import typer

from decking.application.config import (
    ConfigError,
    ValidationResult,
    load_config,
    validate_config,
)


def validate_command(
    config_file: Annotated[
        Path,
        typer.Argument(help="Path to the JSON deck configuration file"),
    ],
) -> None:
    """Check a deck configuration without estimating it.

    Reports JSON syntax errors, schema errors, outline problems (too few
    vertices, ledger edges that do not exist) and advisories such as
    cutouts outside the outline or board widths the product does not offer.

    Exit codes:
        0 - Configuration is valid with no warnings
        1 - Configuration has errors (cannot be used)
        2 - Configuration is valid but has warnings

    Example:
        decking validate my-deck.json
    """
    typer.echo(f"Validating {config_file}...")
    typer.echo()

    try:
        config = load_config(config_file)
    except ConfigError as e:
        display_load_error(e)
        typer.echo()
        typer.echo("Validation failed.", err=True)
        raise typer.Exit(code=1)

    result = validate_config(config)
    _display_validation_result(result)
    raise typer.Exit(code=result.exit_code)


def _value_line(value: Any) -> list[str]:
    return [] if value is None else [f"    Value: {value!r}"]


def _load_error_lines(error: ConfigError) -> list[str]:
    if error.error_type == "file_not_found":
        return [f"  File not found: {error.path}"]

    if error.error_type == "json_parse":
        lines = ["  Invalid JSON syntax"]
        lines.extend(
            f"    Line {d.get('line', '?')}, Column {d.get('column', '?')}: "
            f"{d.get('message', 'Unknown error')}"
            for d in error.details
        )
        return lines

    if error.error_type == "validation":
        lines = []
        for d in error.details:
            lines.append(f"  {d.get('path', 'unknown')}: {d.get('message', 'Unknown error')}")
            lines.extend(_value_line(d.get("value")))
        return lines

    return [f"  {error.message}"]


def display_load_error(error: ConfigError) -> None:
    """Print a configuration loading error to stderr."""
    for line in ["Errors:", *_load_error_lines(error)]:
        typer.echo(line, err=True)


def _summary(result: ValidationResult) -> str:
    errors, warnings = len(result.errors), len(result.warnings)
    if errors:
        return f"Validation failed: {errors} error(s), {warnings} warning(s)"
    if warnings:
        return f"Validation passed with {warnings} warning(s)"
    return "Validation passed. Configuration is valid."


def _display_validation_result(result: ValidationResult) -> None:
    if result.errors:
        typer.echo("Errors:", err=True)
        for issue in result.errors:
            typer.echo(f"  {issue.path}: {issue.message}", err=True)
            for line in _value_line(issue.value):
                typer.echo(line, err=True)
        typer.echo()

    if result.warnings:
        typer.echo("Warnings:")
        for advisory in result.warnings:
            typer.echo(f"  {advisory.path}: {advisory.message}")
            if advisory.suggestion:
                typer.echo(f"    Suggestion: {advisory.suggestion}")
        typer.echo()

    typer.echo(_summary(result), err=not result.is_valid)
