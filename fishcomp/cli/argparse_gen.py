"""
Generate argparse parsers from a command tree.

This module converts the declarative command tree into argparse
ArgumentParsers, one subparser per available command.
"""

import argparse
from typing import Dict, Tuple

from .schema import CLISchema, Command, Flag, FlagType, Positional


_FLAG_VALUE_TYPES = {
    FlagType.INT: int,
    FlagType.FLOAT: float,
}


def _add_flag(parser: argparse.ArgumentParser, flag: Flag, inherited: bool = False):
    """Add a single flag to parser."""
    kwargs: Dict = {
        "help": argparse.SUPPRESS if flag.hidden else flag.help,
        "dest": flag.get_dest(),
    }

    if flag.type == FlagType.BOOL:
        kwargs["action"] = "store_true"
    elif flag.type == FlagType.COUNT:
        kwargs["action"] = "count"
    else:
        if flag.type in _FLAG_VALUE_TYPES:
            kwargs["type"] = _FLAG_VALUE_TYPES[flag.type]
        if flag.type == FlagType.STRING_LIST:
            kwargs["nargs"] = "+"
        if flag.metavar is not None:
            kwargs["metavar"] = flag.metavar

    # Inherited flags are also declared on an ancestor parser; suppressing the
    # subparser default keeps a value given before the subcommand.
    if inherited:
        kwargs["default"] = argparse.SUPPRESS
    elif flag.default is not None:
        kwargs["default"] = flag.default

    parser.add_argument(*flag.get_flags(), **kwargs)


def _add_positional(parser: argparse.ArgumentParser, pos: Positional):
    """Add a positional argument to parser."""
    kwargs: Dict = {
        "help": pos.help,
        "metavar": pos.name.upper(),
    }

    if pos.nargs is not None:
        kwargs["nargs"] = pos.nargs

    parser.add_argument(pos.name, **kwargs)


def _add_command_arguments(parser: argparse.ArgumentParser, cmd: Command):
    """Add cmd's positionals, its own flags, then the flags it inherits."""
    for pos in cmd.positionals:
        _add_positional(parser, pos)

    for flag in cmd.non_inherited_flags():
        _add_flag(parser, flag)

    for flag in cmd.inherited_flags():
        _add_flag(parser, flag, inherited=True)


def _add_command_subparsers(
    parser: argparse.ArgumentParser,
    cmd: Command,
    dest: str,
    subparser_map: Dict[str, argparse.ArgumentParser]
):
    """Recursively add a subparser for each of cmd's subcommands."""
    subcmds = [sub for sub in cmd.subcommands if sub.is_available()]
    if not subcmds:
        return

    subparsers = parser.add_subparsers(dest=dest)
    for subcmd in subcmds:
        subparser = subparsers.add_parser(
            name=subcmd.name,
            aliases=subcmd.aliases or [],
            help=subcmd.help,
            description=subcmd.description or subcmd.help,
            formatter_class=argparse.ArgumentDefaultsHelpFormatter,
        )
        _add_command_arguments(subparser, subcmd)

        path = subcmd.command_path().split(" ", 1)[1]
        subparser_map[path] = subparser

        _add_command_subparsers(subparser, subcmd, subcmd.name, subparser_map)


def generate_parser(schema: CLISchema) -> Tuple[argparse.ArgumentParser, Dict[str, argparse.ArgumentParser]]:
    """
    Generate complete argparse parser from schema.

    Args:
        schema: The CLI schema definition

    Returns:
        Tuple of (main parser, dict mapping command paths below the root,
        such as "completion fish", to subparsers)
    """
    parser = argparse.ArgumentParser(
        prog=schema.prog,
        description=schema.description,
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    _add_command_arguments(parser, schema.root)

    subparser_map: Dict[str, argparse.ArgumentParser] = {}
    _add_command_subparsers(parser, schema.root, "command", subparser_map)

    return parser, subparser_map
