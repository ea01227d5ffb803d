"""
Utility functions for table operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
from decimal import Decimal
from typing import Any

import click

from .models import KeyAttribute


def to_plain(value: Any) -> Any:
    """
    Convert DynamoDB values to JSON-friendly Python values.

    Decimals become int when integral, float otherwise. Sets become sorted lists.
    """
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    if isinstance(value, (set, frozenset)):
        return sorted(to_plain(v) for v in value)
    return value


def output_json(data: dict[str, Any], quiet: bool = False) -> None:
    """
    Output JSON to stdout.

    Args:
        data: Data to output as JSON
        quiet: If True, suppress output
    """
    if not quiet:
        print(json.dumps(data))


def output_text(message: str, quiet: bool = False) -> None:
    """
    Output text to stdout.

    Args:
        message: Message to output
        quiet: If True, suppress output
    """
    if not quiet:
        print(message)


def error_json(error: str, solution: str, exit_code: int) -> str:
    """
    Format error as a JSON string.

    Args:
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code

    Returns:
        JSON-encoded error document
    """
    return json.dumps({"error": error, "solution": solution, "exit_code": exit_code})


def error_text(error: str, solution: str) -> str:
    """
    Format error as human-readable text.

    Args:
        error: Error message
        solution: Solution suggestion

    Returns:
        Formatted error message
    """
    return f"❌ Error: {error}\n\n💡 Solution: {solution}"


def validate_table_name(table_name: str) -> bool:
    """
    Validate DynamoDB table name.

    Args:
        table_name: Table name to validate

    Returns:
        True if valid

    Raises:
        ValueError: If table name is invalid
    """
    if not table_name:
        raise ValueError("Table name cannot be empty")
    if len(table_name) < 3 or len(table_name) > 255:
        raise ValueError("Table name must be between 3 and 255 characters")
    if not all(c.isalnum() or c in "-_." for c in table_name):
        raise ValueError(
            "Table name can only contain alphanumeric characters, hyphens, underscores, and periods"
        )
    return True


_TYPE_ALIASES = {
    "s": "S",
    "string": "S",
    "n": "N",
    "number": "N",
    "integer": "N",
    "b": "B",
    "binary": "B",
}


def parse_key_attribute(spec: str) -> KeyAttribute:
    """
    Parse a key attribute given as NAME or NAME:TYPE.

    Args:
        spec: Attribute spec (e.g., 'id:integer', 'pin:N', 'email')

    Returns:
        KeyAttribute with the DynamoDB type letter

    Raises:
        ValueError: If the name is empty or the type is unknown
    """
    name, _, type_name = spec.partition(":")
    if not name:
        raise ValueError(f"Missing attribute name in '{spec}'")
    attr_type = _TYPE_ALIASES.get((type_name or "S").lower())
    if attr_type is None:
        raise ValueError(f"Unknown attribute type '{type_name}' (use string, number or binary)")
    return KeyAttribute(name, attr_type)


def output_error(
    ctx: click.Context, error: str, solution: str, exit_code: int, text_format: bool = False
) -> None:
    """
    Output error message to stderr and exit.

    Args:
        ctx: Click context
        error: Error message
        solution: Solution suggestion
        exit_code: Exit code
        text_format: If True, output as text; otherwise JSON
    """
    if text_format:
        click.echo(error_text(error, solution), err=True)
    else:
        click.echo(error_json(error, solution, exit_code), err=True)
    ctx.exit(exit_code)
