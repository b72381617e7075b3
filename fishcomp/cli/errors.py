"""
Consistent Error Message Formatting for Command Tree Validation.

Provides utility functions for creating consistent, user-friendly error
messages for both in-memory tree construction (cli/schema.py) and trees
loaded from YAML files (cli/loader.py).

Error Message Format
--------------------
All error messages follow this structure:
- Location in single quotes: 'app build' or 'app build --output'
- Clear description of the problem
- Current value if relevant: got <value>
- Expected value/range if relevant: expected <constraint>

Examples:
- "'app' name must not contain whitespace, got 'my app'"
- "'app build' already has a subcommand named 'run'"
- "'app --output' type must be one of ['bool', 'string'], got 'path'"
"""

from typing import Any, List


def format_name(name: str) -> str:
    """Format a command or flag location for error messages."""
    return f"'{name}'"


def format_value(value: Any) -> str:
    """Format a value for error messages."""
    if isinstance(value, str):
        return f"'{value}'"
    return str(value)


def choices_error(where: str, field: str, choices: List[Any], got: Any) -> str:
    """
    Create an invalid-choice error message.

    Args:
        where: Command path or flag location
        field: Name of the offending field
        choices: Allowed values
        got: Actual value received

    Returns:
        Formatted error message.
    """
    return f"{format_name(where)} {field} must be one of {choices}, got {format_value(got)}"


def type_error(where: str, field: str, expected_type: str, got: Any) -> str:
    """
    Create a type mismatch error message.

    Args:
        where: Command path or flag location
        field: Name of the offending field
        expected_type: Expected type description
        got: Actual value received

    Returns:
        Formatted error message.
    """
    return f"{format_name(where)} {field} must be {expected_type}, got {format_value(got)}"


def identifier_error(where: str, field: str, problem: str, got: Any) -> str:
    """Create an error message for a name that cannot be used in generated scripts."""
    return f"{format_name(where)} {field} {problem}, got {format_value(got)}"


def duplicate_error(where: str, kind: str, name: str) -> str:
    """Create an error message for a name declared twice in one scope."""
    return f"{format_name(where)} already has a {kind} named {format_value(name)}"


def missing_error(where: str, field: str) -> str:
    """Create an error message for a required field that is absent."""
    return f"{format_name(where)} is missing required field {format_value(field)}"


def unknown_keys_error(where: str, keys: List[str], allowed: List[str]) -> str:
    """Create an error message for unrecognized mapping keys."""
    return f"{format_name(where)} has unknown keys {sorted(keys)}, expected any of {sorted(allowed)}"
