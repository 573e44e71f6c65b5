"""CLI error handling utilities with styled output.

This module provides the Ensure class for asserting invariants in CLI commands
with consistent, user-friendly error messages. All errors use red "Error:" prefix
for visual consistency.
"""

import click

from tkit.cli.output import user_output


class Ensure:
    """Helper class for asserting invariants with consistent error handling."""

    @staticmethod
    def invariant(condition: bool, error_message: str) -> None:
        """Ensure condition is true, otherwise output styled error and exit.

        Args:
            condition: Boolean condition to check
            error_message: Error message to display if condition is false.
                          "Error: " prefix will be added automatically in red.

        Raises:
            SystemExit: If condition is false (with exit code 1)
        """
        if not condition:
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)

    @staticmethod
    def not_empty(value: str | None, error_message: str) -> str:
        """Ensure a string has non-whitespace content and return it stripped.

        Raises:
            SystemExit: If value is None or blank
        """
        if value is None or not value.strip():
            user_output(click.style("Error: ", fg="red") + error_message)
            raise SystemExit(1)
        return value.strip()

    @staticmethod
    def valid_tool_name(name: str) -> str:
        """Ensure a tool name is usable as a registry key.

        Names may not be blank or contain whitespace or slashes.

        Raises:
            SystemExit: If the name is invalid
        """
        stripped = Ensure.not_empty(name, "Tool name cannot be empty")
        Ensure.invariant(
            not any(char.isspace() for char in stripped) and "/" not in stripped,
            f"Invalid tool name '{name}' - names cannot contain spaces or slashes",
        )
        return stripped
