"""
Command Tree and Generators.

This package holds the command tree definition used to describe a program's
CLI, with generators for fish completion scripts and argparse parsers.

Usage:
    from fishcomp.cli.loader import load_command_tree_file
    from fishcomp.cli.fish_gen import generate_fish_completion, write_fish_completion
    from fishcomp.cli.argparse_gen import generate_parser
"""

from .schema import (
    CLISchema,
    Command,
    Flag,
    FlagSet,
    FlagType,
    Positional,
    MAX_COMMAND_DEPTH,
)

__all__ = [
    "CLISchema",
    "Command",
    "Flag",
    "FlagSet",
    "FlagType",
    "Positional",
    "MAX_COMMAND_DEPTH",
]
