"""
Generate fish completion scripts from a command tree.

The script defines two helper functions named after the root command and
then registers one `complete` line per subcommand and per flag. Each line
carries a condition (`-n '...'`) that fish evaluates against the words
already typed, so whether a suggestion shows up is decided entirely inside
fish at completion time.
"""

import re
from dataclasses import dataclass, field
from typing import IO, List

from ..common import FishcompException, file_write
from .errors import format_name
from .schema import Command, Flag, MAX_COMMAND_DEPTH


# Words made only of these characters need no quoting in fish
_FISH_BARE_WORD = re.compile(r"^[A-Za-z0-9_.,:+@/=-]+$")


def _fish_quote(text: str) -> str:
    """Quote text as a fish single-quoted string."""
    return "'" + text.replace("\\", "\\\\").replace("'", "\\'") + "'"


def _fish_word(text: str) -> str:
    """Emit text bare when fish reads it literally, quoted otherwise."""
    if _FISH_BARE_WORD.match(text):
        return text
    return _fish_quote(text)


def _no_subcommand_function(root: Command) -> str:
    return f"__fish_{root.name}_no_subcommand"


def _has_flag_function(root: Command) -> str:
    return f"__fish_{root.name}_has_flag"


@dataclass
class FishClause:
    """A single fish predicate call, optionally negated."""
    function: str
    args: List[str] = field(default_factory=list)
    negated: bool = False

    def render(self) -> str:
        text = " ".join([self.function] + [_fish_word(arg) for arg in self.args])
        return f"not {text}" if self.negated else text


@dataclass
class FishCondition:
    """A conjunction of clauses, evaluated left to right by fish."""
    clauses: List[FishClause] = field(default_factory=list)

    def render(self) -> str:
        return "-n " + _fish_quote("; and ".join(clause.render() for clause in self.clauses))


def _subcommand_path(root: Command, cmd: Command) -> List[str]:
    """
    Names from just below root down to cmd. cmd must be a strict descendant
    of root.
    """
    path = []
    current = cmd
    for _ in range(MAX_COMMAND_DEPTH):
        path.append(current.name)
        if current.parent is root:
            return list(reversed(path))
        if current.parent is None:
            raise FishcompException(
                f"{format_name(cmd.command_path())} is not a subcommand of {format_name(root.name)}")
        current = current.parent

    raise FishcompException(
        f"{format_name(cmd.name)} is nested deeper than {MAX_COMMAND_DEPTH} levels below {format_name(root.name)}")


def _flag_completion_condition(root: Command, cmd: Command) -> FishCondition:
    """Condition under which cmd's own flags are offered."""
    if cmd is root:
        return FishCondition([FishClause(_no_subcommand_function(root))])
    return FishCondition([FishClause("__fish_seen_subcommand_from", _subcommand_path(root, cmd))])


def _command_completion_condition(root: Command, cmd: Command) -> FishCondition:
    """
    Condition under which cmd's subcommands are offered. Once one of cmd's
    local non-persistent flags has been typed, its subcommands are no longer
    suggested.
    """
    condition = _flag_completion_condition(root, cmd)
    for flag in cmd.local_non_persistent_flags():
        condition.clauses.append(FishClause(_has_flag_function(root), [flag.name], negated=True))
    return condition


def _generate_fish_preamble(root: Command) -> List[str]:
    """Generate the helper functions every condition relies on."""
    subcmd_names = " ".join(_fish_word(cmd.name) for cmd in root.available_subcommands())
    no_subcommand_desc = _fish_quote(f"Test if {root.name} has yet to be given the subcommand")
    has_flag_desc = _fish_quote(f"Test if {root.name} has been given a long flag")

    return [
        f'# fish completion for {root.name}',
        '# AUTO-GENERATED by fishcomp - Do not edit manually',
        '',
        f'function {_no_subcommand_function(root)} --description {no_subcommand_desc}',
        '    for i in (commandline -opc)',
        f'        if contains -- $i {subcmd_names}'.rstrip(),
        '            return 1',
        '        end',
        '    end',
        '    return 0',
        'end',
        '',
        f'function {_has_flag_function(root)} --description {has_flag_desc}',
        '    for i in (commandline -opc)',
        '        if contains -- "--$argv[1]" $i',
        '            return 0',
        '        end',
        '    end',
        '    return 1',
        'end',
        '',
    ]


def _generate_fish_flag_line(root: Command, condition: str, flag: Flag) -> str:
    """Generate the `complete` line for a single flag."""
    parts = ["complete", "-c", _fish_word(root.name), "-f", condition]
    if flag.takes_value():
        parts.append("-r")
    if flag.short:
        parts.extend(["-s", _fish_word(flag.short)])
    parts.extend(["-l", _fish_word(flag.name), "-d", _fish_quote(flag.help)])
    return " ".join(parts)


def _generate_fish_flag_lines(root: Command, cmd: Command) -> List[str]:
    """Generate lines for cmd's own flags, then the flags it inherits."""
    lines = []
    condition = None

    for flag_set in (cmd.non_inherited_flags(), cmd.inherited_flags()):
        for flag in flag_set:
            if not flag.is_completable():
                continue
            if condition is None:
                condition = _flag_completion_condition(root, cmd).render()
            lines.append(_generate_fish_flag_line(root, condition, flag))

    return lines


def _generate_fish_command_lines(root: Command) -> List[str]:
    """
    Walk the tree depth first, parent before children, children in declared
    order. Each command contributes its subcommand lines, then its flag lines.
    """
    lines = []
    program = _fish_word(root.name)
    stack = [(root, 0)]

    while stack:
        cmd, depth = stack.pop()
        if depth > MAX_COMMAND_DEPTH:
            raise FishcompException(
                f"{format_name(root.name)} has commands nested deeper than {MAX_COMMAND_DEPTH} levels")

        subcmds = cmd.available_subcommands()
        if subcmds:
            condition = _command_completion_condition(root, cmd).render()
            for subcmd in subcmds:
                lines.append(
                    f"complete -c {program} -f {condition} -a {_fish_word(subcmd.name)} -d {_fish_quote(subcmd.help)}")

        lines.extend(_generate_fish_flag_lines(root, cmd))

        # Reversed so the first child is popped, and fully walked, first
        stack.extend((subcmd, depth + 1) for subcmd in reversed(subcmds))

    return lines


def generate_fish_completion(root: Command) -> str:
    """Generate fish completion script for the tree rooted at root."""
    lines = _generate_fish_preamble(root)
    lines.extend(_generate_fish_command_lines(root))
    return '\n'.join(lines) + '\n'


def write_fish_completion(root: Command, sink: IO[str]) -> None:
    """
    Generate the script and write it to sink in a single call. Errors raised
    by sink propagate unchanged.
    """
    sink.write(generate_fish_completion(root))


def write_fish_completion_file(root: Command, filepath: str, if_different: bool = False) -> None:
    """Generate the script and write it to filepath."""
    file_write(filepath, generate_fish_completion(root), if_different)
