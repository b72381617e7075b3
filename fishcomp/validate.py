"""
Validate YAML command trees.

Backs `fishcomp validate INPUT`: loading the tree performs every check,
after which the tree is printed with the flags each command would offer.
"""

import rich.tree
from rich.markup import escape

from .printer import cons
from .state import ARG
from .cli.loader import load_command_tree_file
from .cli.schema import Command, Flag


def _flag_label(flag: Flag, inherited: bool) -> str:
    label = ", ".join(flag.get_flags())
    if flag.takes_value():
        label += f" [magenta]{escape(flag.metavar or flag.type.value.upper())}[/magenta]"
    if inherited:
        label += " [dim](inherited)[/dim]"
    if not flag.is_completable():
        label += " [yellow](not completed)[/yellow]"
    if flag.help:
        label += f"  [dim]{escape(flag.help)}[/dim]"
    return label


def _command_label(cmd: Command) -> str:
    label = f"[bold]{escape(cmd.name)}[/bold]"
    if cmd.aliases:
        label += f" [cyan]({escape(', '.join(cmd.aliases))})[/cyan]"
    if cmd.parent is not None and cmd is cmd.parent.help_command:
        label += " [yellow](help command, not completed)[/yellow]"
    elif not cmd.is_available():
        label += " [yellow](unavailable, not completed)[/yellow]"
    if cmd.help:
        label += f"  [dim]{escape(cmd.help)}[/dim]"
    return label


def build_tree(cmd: Command, tree: rich.tree.Tree = None) -> rich.tree.Tree:
    """Render cmd and its descendants as a rich tree."""
    if tree is None:
        tree = rich.tree.Tree(_command_label(cmd))
        node = tree
    else:
        node = tree.add(_command_label(cmd))

    for flag in cmd.non_inherited_flags():
        node.add(_flag_label(flag, False))
    for flag in cmd.inherited_flags():
        node.add(_flag_label(flag, True))

    for subcmd in cmd.subcommands:
        build_tree(subcmd, node)

    return tree


def count_tree(cmd: Command) -> tuple:
    """Return (commands, flags) declared in the tree rooted at cmd."""
    commands, flags = 1, len(cmd.flags) + len(cmd.persistent_flags)
    for subcmd in cmd.subcommands:
        sub_commands, sub_flags = count_tree(subcmd)
        commands += sub_commands
        flags    += sub_flags
    return commands, flags


def validate():
    """Main entry point for validate command."""
    filepath = ARG("input")
    root     = load_command_tree_file(filepath)

    commands, flags = count_tree(root)

    cons.print(f"[green]OK[/green] {escape(filepath)}: {commands} commands, {flags} flags")
    cons.print()
    cons.raw.print(build_tree(root))
