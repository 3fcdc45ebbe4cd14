"""Configuration file loader with error reporting.

Loads JSON deck project files and turns file system, JSON syntax and
schema problems into a single ConfigError carrying a category and
per-field details.
"""

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from decking.application.config.schema import DeckConfiguration

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a deck project file cannot be turned into a configuration.

    Attributes:
        message: The primary error message
        error_type: Stage that failed: file_not_found, permission_denied,
            file_read_error, json_parse or validation
        path: The project file, when the error came from one
        details: Line/column for JSON errors, field errors for validation
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = list(details) if details else []

    def __str__(self) -> str:
        return self.message


def _format_json_path(loc: tuple[str | int, ...]) -> str:
    """Render a Pydantic error location in dotted JSON form.

    Examples:
        >>> _format_json_path(("plan", "board_width_mm"))
        'plan.board_width_mm'
        >>> _format_json_path(("plan", "polygon", "outer", 2, "x"))
        'plan.polygon.outer[2].x'
    """
    text = ""
    for segment in loc:
        if isinstance(segment, int):
            text += f"[{segment}]"
        elif text:
            text += f".{segment}"
        else:
            text = str(segment)
    return text


def _extract_validation_errors(
    error: PydanticValidationError,
) -> list[dict[str, Any]]:
    """Flatten a Pydantic ValidationError into path/message/value dicts."""
    return [
        {
            "path": _format_json_path(err["loc"]),
            "message": err["msg"],
            "value": err.get("input"),
            "error_type": err["type"],
        }
        for err in error.errors()
    ]


def _describe_field_error(detail: dict[str, Any]) -> str:
    value = detail.get("value")
    text = f"  - {detail['path']}: {detail['message']}"
    # Whole sub-documents are too noisy to echo back
    if value is None or isinstance(value, (dict, list)):
        return text
    return f"{text} (got: {value!r})"


def _validate(data: Any, path: Path | None = None) -> DeckConfiguration:
    try:
        return DeckConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = _extract_validation_errors(e)
        summary = "\n".join(
            ["Configuration validation failed:", *map(_describe_field_error, details)]
        )
        raise ConfigError(summary, "validation", path, details) from e


def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}", "file_not_found", path)
    try:
        return path.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ConfigError(
            f"Permission denied reading config file: {path}", "permission_denied", path
        ) from e
    except OSError as e:
        raise ConfigError(
            f"Error reading config file: {path}: {e}", "file_read_error", path
        ) from e


def _parse_json(content: str, path: Path) -> Any:
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        where = f"line {e.lineno}, column {e.colno}"
        raise ConfigError(
            f"Invalid JSON in config file: {path} ({where}): {e.msg}",
            "json_parse",
            path,
            [{"line": e.lineno, "column": e.colno, "message": e.msg}],
        ) from e


def load_config(path: Path) -> DeckConfiguration:
    """Load and validate a deck configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file

    Returns:
        A validated DeckConfiguration instance

    Raises:
        ConfigError: If the file cannot be read, parsed or validated.
            ``error_type`` names the failing stage.
    """
    config = _validate(_parse_json(_read_text(path), path), path)
    logger.debug("Loaded configuration from %s", path)
    return config


def load_config_from_dict(data: dict[str, Any]) -> DeckConfiguration:
    """Validate a deck configuration held in a dictionary.

    Raises:
        ConfigError: If the data fails validation.
    """
    return _validate(data)
