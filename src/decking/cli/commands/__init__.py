"""CLI command implementations for the decking application.

- validate: Validate a configuration file
"""

from decking.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
